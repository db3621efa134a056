# -*- coding: utf-8 -*-
"""
Rotas FastAPI para as parcelas do curso.
"""
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, joinedload

from cfc.auth import ContextoSessao, get_equipe
from cfc.database import get_db
from cfc.enums import StatusParcela
from cfc.models.aluno import Aluno
from cfc.models.parcela import Parcela
from cfc.reautenticacao import confirmar_admin
from cfc.schemas.parcela import PagamentoParcela, ParcelaPaginated, ParcelaRead, ParcelaUpdate
from cfc.services.parcelas import status_exibicao

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Parcelas"],
    responses={404: {"description": "Parcela não encontrada"}},
    dependencies=[Depends(get_equipe)],
)


def parcela_para_leitura(parcela: Parcela, hoje: Optional[date] = None) -> dict:
    aluno = parcela.aluno
    return {
        "id": parcela.id,
        "aluno_id": parcela.aluno_id,
        "numero": parcela.numero,
        "valor": parcela.valor,
        "data_vencimento": parcela.data_vencimento,
        "status": parcela.status,
        "status_exibicao": status_exibicao(parcela.status, parcela.data_vencimento, hoje),
        "data_pagamento": parcela.data_pagamento,
        "forma_pagamento": parcela.forma_pagamento,
        "comprovante_url": parcela.comprovante_url,
        "aluno": {
            "id": aluno.id,
            "nome_completo": aluno.nome_completo,
            "categoria": aluno.categoria,
        } if aluno else None,
    }


def _get_parcela_or_404(db: Session, parcela_id: int) -> Parcela:
    db_parcela = db.query(Parcela).filter(Parcela.id == parcela_id).first()
    if not db_parcela:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Parcela não encontrada")
    return db_parcela


@router.get("", response_model=ParcelaPaginated)
def read_parcelas(
    skip: int = 0,
    limit: int = 100,
    busca: Optional[str] = None,
    aluno_id: Optional[int] = None,
    status_parcela: Optional[StatusParcela] = None,
    db: Session = Depends(get_db)
):
    """
    Lista parcelas por vencimento. O filtro 'atrasada' seleciona parcelas
    pendentes vencidas; 'pendente' seleciona apenas as ainda não vencidas.
    """
    hoje = date.today()
    query = db.query(Parcela).join(Aluno).options(joinedload(Parcela.aluno))
    if busca:
        query = query.filter(Aluno.nome_completo.ilike(f"%{busca}%"))
    if aluno_id:
        query = query.filter(Parcela.aluno_id == aluno_id)

    if status_parcela == StatusParcela.PAGA:
        query = query.filter(Parcela.status == StatusParcela.PAGA.value)
    elif status_parcela == StatusParcela.PENDENTE:
        query = query.filter(Parcela.status == StatusParcela.PENDENTE.value, Parcela.data_vencimento >= hoje)
    elif status_parcela == StatusParcela.ATRASADA:
        query = query.filter(Parcela.status == StatusParcela.PENDENTE.value, Parcela.data_vencimento < hoje)

    total = query.count()
    parcelas = query.order_by(Parcela.data_vencimento.asc(), Parcela.numero.asc()).offset(skip).limit(limit).all()
    return {"total": total, "parcelas": [parcela_para_leitura(p, hoje) for p in parcelas]}


@router.get("/{parcela_id}", response_model=ParcelaRead)
def read_parcela(parcela_id: int, db: Session = Depends(get_db)):
    return parcela_para_leitura(_get_parcela_or_404(db, parcela_id))


@router.post("/{parcela_id}/pagamento", response_model=ParcelaRead)
def pagar_parcela(parcela_id: int, pagamento: PagamentoParcela, db: Session = Depends(get_db)):
    """
    Registra o pagamento de uma parcela.

    Nenhuma movimentação é criada no caixa: o painel financeiro já soma as
    parcelas pagas como receita.
    """
    db_parcela = _get_parcela_or_404(db, parcela_id)
    if db_parcela.status == StatusParcela.PAGA.value:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Esta parcela já foi paga.")

    db_parcela.status = StatusParcela.PAGA.value
    db_parcela.data_pagamento = pagamento.data_pagamento
    db_parcela.forma_pagamento = pagamento.forma_pagamento
    db.commit()
    db.refresh(db_parcela)
    logger.info(f"Parcela {db_parcela.numero} do aluno {db_parcela.aluno_id} paga via {pagamento.forma_pagamento}")
    return parcela_para_leitura(db_parcela)


@router.put("/{parcela_id}", response_model=ParcelaRead)
def update_parcela(parcela_id: int, dados: ParcelaUpdate, db: Session = Depends(get_db)):
    db_parcela = _get_parcela_or_404(db, parcela_id)
    if db_parcela.status == StatusParcela.PAGA.value:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Parcelas pagas não podem ser alteradas.")

    for key, value in dados.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(db_parcela, key, value)
    db.commit()
    db.refresh(db_parcela)
    return parcela_para_leitura(db_parcela)


@router.delete("/{parcela_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_parcela(
    parcela_id: int,
    db: Session = Depends(get_db),
    contexto: ContextoSessao = Depends(confirmar_admin),
):
    db_parcela = _get_parcela_or_404(db, parcela_id)
    db.delete(db_parcela)
    db.commit()
    logger.info(f"Parcela {parcela_id} excluída por {contexto.usuario.email}")
    return None
