# -*- coding: utf-8 -*-
"""
Rotas FastAPI para o CRUD de Alunos.
"""
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from cfc.auth import ContextoSessao, get_equipe
from cfc.database import get_db
from cfc.enums import CategoriaAluno, StatusAluno
from cfc.exceptions import ErroValidacao
from cfc.models.aluno import Aluno
from cfc.models.parcela import Parcela
from cfc.reautenticacao import confirmar_admin
from cfc.routes.parcelas_fastapi import parcela_para_leitura
from cfc.schemas.aluno import AlunoCreate, AlunoDetalhe, AlunoPaginated, AlunoRead, AlunoUpdate
from cfc.schemas.comum import para_colunas
from cfc.services.parcelas import gerar_plano_parcelas
from cfc.storage import enviar_foto, get_armazenamento
from cfc.validadores import somente_digitos

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Alunos"],
    responses={404: {"description": "Aluno não encontrado"}},
    dependencies=[Depends(get_equipe)],
)


def _erro_integridade(e: IntegrityError):
    mensagem = str(e.orig).lower()
    if "cpf" in mensagem:
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Este CPF de aluno já está cadastrado.")
    if "email" in mensagem:
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Este Email de aluno já está cadastrado.")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erro interno ao salvar dados.")


def _get_aluno_or_404(db: Session, aluno_id: int) -> Aluno:
    db_aluno = db.query(Aluno).filter(Aluno.id == aluno_id).first()
    if not db_aluno:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Aluno não encontrado")
    return db_aluno


@router.post("", response_model=AlunoRead, status_code=status.HTTP_201_CREATED)
def create_aluno(aluno: AlunoCreate, db: Session = Depends(get_db)):
    """
    Matricula um aluno e gera suas parcelas.

    Aluno e parcelas são gravados na mesma transação: se as parcelas não
    puderem ser inseridas, a matrícula inteira é desfeita.
    """
    db_aluno = Aluno(**para_colunas(aluno))
    db.add(db_aluno)

    try:
        db.flush()
        plano = gerar_plano_parcelas(aluno.valor_curso, aluno.quantidade_parcelas, aluno.data_matricula)
        db.add_all([
            Parcela(
                aluno_id=db_aluno.id,
                numero=p.numero,
                valor=p.valor,
                data_vencimento=p.data_vencimento,
                status=p.status.value,
            )
            for p in plano
        ])
        db.commit()
    except ErroValidacao:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Erro de integridade ao salvar aluno: {e}")
        raise _erro_integridade(e)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Erro ao gerar parcelas da matrícula de {aluno.nome_completo}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Não foi possível gerar as parcelas. A matrícula não foi salva."
        )

    db.refresh(db_aluno)
    logger.info(f"Aluno {db_aluno.id} matriculado com {len(plano)} parcela(s)")
    return db_aluno


@router.get("", response_model=AlunoPaginated)
def read_alunos(
    skip: int = 0,
    limit: int = 50,
    busca: Optional[str] = None,
    categoria: Optional[CategoriaAluno] = None,
    status_aluno: Optional[StatusAluno] = None,
    ativo: Optional[bool] = None,
    db: Session = Depends(get_db)
):
    """
    Lista alunos ordenados por nome, com busca por nome, e-mail ou CPF.
    """
    query = db.query(Aluno)
    if busca:
        filtros = [Aluno.nome_completo.ilike(f"%{busca}%"), Aluno.email.ilike(f"%{busca}%")]
        digitos = somente_digitos(busca)
        if digitos:
            filtros.append(Aluno.cpf.contains(digitos))
        query = query.filter(or_(*filtros))
    if categoria:
        query = query.filter(Aluno.categoria == categoria.value)
    if status_aluno:
        query = query.filter(Aluno.status == status_aluno.value)
    if ativo is not None:
        query = query.filter(Aluno.ativo == ativo)

    total = query.count()
    alunos = query.order_by(Aluno.nome_completo.asc()).offset(skip).limit(limit).all()
    return {"total": total, "alunos": alunos}


@router.get("/{aluno_id}", response_model=AlunoDetalhe)
def read_aluno(aluno_id: int, db: Session = Depends(get_db)):
    db_aluno = _get_aluno_or_404(db, aluno_id)
    hoje = date.today()
    detalhe = AlunoRead.model_validate(db_aluno).model_dump()
    detalhe.pop("cpf_formatado", None)
    detalhe.pop("telefone_formatado", None)
    detalhe["parcelas"] = [parcela_para_leitura(p, hoje) for p in db_aluno.parcelas]
    return detalhe


@router.put("/{aluno_id}", response_model=AlunoRead)
def update_aluno(aluno_id: int, dados: AlunoUpdate, db: Session = Depends(get_db)):
    """
    Atualiza um aluno. As parcelas já geradas não são recalculadas.
    """
    db_aluno = _get_aluno_or_404(db, aluno_id)
    for key, value in para_colunas(dados, exclude_unset=True).items():
        setattr(db_aluno, key, value)

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise _erro_integridade(e)
    db.refresh(db_aluno)
    return db_aluno


@router.delete("/{aluno_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_aluno(
    aluno_id: int,
    db: Session = Depends(get_db),
    contexto: ContextoSessao = Depends(confirmar_admin),
):
    """Exclui o aluno junto com suas parcelas e aulas. Exige a senha do administrador."""
    db_aluno = _get_aluno_or_404(db, aluno_id)
    db.delete(db_aluno)
    db.commit()
    logger.info(f"Aluno {aluno_id} excluído por {contexto.usuario.email}")
    return None


@router.post("/{aluno_id}/foto", response_model=AlunoRead)
def upload_foto_aluno(
    aluno_id: int,
    foto: UploadFile = File(...),
    db: Session = Depends(get_db),
    armazenamento=Depends(get_armazenamento),
):
    db_aluno = _get_aluno_or_404(db, aluno_id)
    db_aluno.foto_url = enviar_foto(armazenamento, "alunos", db_aluno.id, foto)
    db.commit()
    db.refresh(db_aluno)
    return db_aluno
