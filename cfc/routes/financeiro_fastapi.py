# -*- coding: utf-8 -*-
"""
Rotas FastAPI para as movimentações avulsas do caixa.
"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from cfc.auth import ContextoSessao, get_admin_ou_secretaria
from cfc.database import get_db
from cfc.enums import CATEGORIAS_DESPESA, CATEGORIAS_RECEITA, FORMAS_PAGAMENTO, TipoTransacao, categorias_do_tipo
from cfc.models.financeiro import Financeiro
from cfc.reautenticacao import confirmar_admin
from cfc.schemas.comum import para_colunas
from cfc.schemas.financeiro import FinanceiroCreate, FinanceiroRead, FinanceiroUpdate, OpcoesFinanceiro

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Financeiro"],
    responses={404: {"description": "Transação não encontrada"}},
    dependencies=[Depends(get_admin_ou_secretaria)],
)


def _get_transacao_or_404(db: Session, transacao_id: int) -> Financeiro:
    db_transacao = db.query(Financeiro).filter(Financeiro.id == transacao_id).first()
    if not db_transacao:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transação não encontrada")
    return db_transacao


@router.get("/opcoes", response_model=OpcoesFinanceiro)
def read_opcoes():
    return {
        "categorias_receita": list(CATEGORIAS_RECEITA),
        "categorias_despesa": list(CATEGORIAS_DESPESA),
        "formas_pagamento": list(FORMAS_PAGAMENTO),
    }


@router.post("/transacoes", response_model=FinanceiroRead, status_code=status.HTTP_201_CREATED)
def create_transacao(transacao: FinanceiroCreate, db: Session = Depends(get_db)):
    db_transacao = Financeiro(**para_colunas(transacao))
    db.add(db_transacao)
    db.commit()
    db.refresh(db_transacao)
    return db_transacao


@router.get("/transacoes", response_model=List[FinanceiroRead])
def read_transacoes(
    skip: int = 0,
    limit: int = 100,
    tipo: Optional[TipoTransacao] = None,
    categoria: Optional[str] = None,
    busca: Optional[str] = None,
    data_inicio: Optional[date] = None,
    data_fim: Optional[date] = None,
    db: Session = Depends(get_db)
):
    """
    Lista movimentações da mais recente para a mais antiga.
    """
    query = db.query(Financeiro)
    if tipo:
        query = query.filter(Financeiro.tipo == tipo.value)
    if categoria:
        query = query.filter(Financeiro.categoria == categoria)
    if busca:
        query = query.filter(or_(
            Financeiro.descricao.ilike(f"%{busca}%"),
            Financeiro.categoria.ilike(f"%{busca}%"),
        ))
    if data_inicio:
        query = query.filter(Financeiro.data >= data_inicio)
    if data_fim:
        query = query.filter(Financeiro.data <= data_fim)

    return query.order_by(Financeiro.data.desc(), Financeiro.id.desc()).offset(skip).limit(limit).all()


@router.get("/transacoes/{transacao_id}", response_model=FinanceiroRead)
def read_transacao(transacao_id: int, db: Session = Depends(get_db)):
    return _get_transacao_or_404(db, transacao_id)


@router.put("/transacoes/{transacao_id}", response_model=FinanceiroRead)
def update_transacao(transacao_id: int, dados: FinanceiroUpdate, db: Session = Depends(get_db)):
    db_transacao = _get_transacao_or_404(db, transacao_id)
    update_data = para_colunas(dados, exclude_unset=True, exclude_none=True)

    # Tipo e categoria são validados juntos, considerando o que já está gravado
    tipo = TipoTransacao(update_data.get("tipo") or db_transacao.tipo)
    categoria = update_data.get("categoria") or db_transacao.categoria
    if categoria not in categorias_do_tipo(tipo):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Categoria '{categoria}' não pertence ao tipo {tipo.value}"
        )

    for key, value in update_data.items():
        setattr(db_transacao, key, value)
    db.commit()
    db.refresh(db_transacao)
    return db_transacao


@router.delete("/transacoes/{transacao_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transacao(
    transacao_id: int,
    db: Session = Depends(get_db),
    contexto: ContextoSessao = Depends(confirmar_admin),
):
    db_transacao = _get_transacao_or_404(db, transacao_id)
    db.delete(db_transacao)
    db.commit()
    logger.info(f"Transação {transacao_id} excluída por {contexto.usuario.email}")
    return None
