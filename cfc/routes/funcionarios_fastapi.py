# -*- coding: utf-8 -*-
"""
Rotas FastAPI para o CRUD de Funcionários (instrutores e secretaria).
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cfc.auth import ContextoSessao, get_admin_user, get_equipe
from cfc.database import get_db
from cfc.enums import Papel
from cfc.models.funcionario import Funcionario
from cfc.reautenticacao import confirmar_admin
from cfc.schemas.comum import para_colunas
from cfc.schemas.funcionario import FuncionarioCreate, FuncionarioPaginated, FuncionarioRead, FuncionarioUpdate
from cfc.storage import enviar_foto, get_armazenamento
from cfc.validadores import somente_digitos

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Funcionários"],
    responses={404: {"description": "Funcionário não encontrado"}},
)


def _erro_integridade(e: IntegrityError):
    mensagem = str(e.orig).lower()
    if "cpf" in mensagem:
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Este CPF já está cadastrado.")
    if "email" in mensagem:
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Este Email já está cadastrado.")
    if "usuario_id" in mensagem:
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Este usuário já está vinculado a outro funcionário.")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erro interno ao salvar dados.")


def _get_funcionario_or_404(db: Session, funcionario_id: int) -> Funcionario:
    db_funcionario = db.query(Funcionario).filter(Funcionario.id == funcionario_id).first()
    if not db_funcionario:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Funcionário não encontrado")
    return db_funcionario


@router.post("", response_model=FuncionarioRead, status_code=status.HTTP_201_CREATED)
def create_funcionario(
    funcionario: FuncionarioCreate,
    db: Session = Depends(get_db),
    contexto: ContextoSessao = Depends(get_admin_user),
):
    db_funcionario = Funcionario(**para_colunas(funcionario))
    db.add(db_funcionario)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Erro de integridade ao salvar funcionário: {e}")
        raise _erro_integridade(e)
    db.refresh(db_funcionario)
    return db_funcionario


@router.get("", response_model=FuncionarioPaginated)
def read_funcionarios(
    skip: int = 0,
    limit: int = 50,
    busca: Optional[str] = None,
    papel: Optional[Papel] = None,
    ativo: Optional[bool] = None,
    db: Session = Depends(get_db),
    contexto: ContextoSessao = Depends(get_equipe),
):
    """
    Lista funcionários com busca por nome, e-mail ou CPF.
    """
    query = db.query(Funcionario)
    if busca:
        filtros = [Funcionario.nome_completo.ilike(f"%{busca}%"), Funcionario.email.ilike(f"%{busca}%")]
        digitos = somente_digitos(busca)
        if digitos:
            filtros.append(Funcionario.cpf.contains(digitos))
        query = query.filter(or_(*filtros))
    if papel:
        query = query.filter(Funcionario.papel == papel.value)
    if ativo is not None:
        query = query.filter(Funcionario.ativo == ativo)

    total = query.count()
    funcionarios = query.order_by(Funcionario.nome_completo.asc()).offset(skip).limit(limit).all()
    return {"total": total, "funcionarios": funcionarios}


@router.get("/{funcionario_id}", response_model=FuncionarioRead)
def read_funcionario(
    funcionario_id: int,
    db: Session = Depends(get_db),
    contexto: ContextoSessao = Depends(get_equipe),
):
    return _get_funcionario_or_404(db, funcionario_id)


@router.put("/{funcionario_id}", response_model=FuncionarioRead)
def update_funcionario(
    funcionario_id: int,
    dados: FuncionarioUpdate,
    db: Session = Depends(get_db),
    contexto: ContextoSessao = Depends(get_admin_user),
):
    db_funcionario = _get_funcionario_or_404(db, funcionario_id)
    for key, value in para_colunas(dados, exclude_unset=True).items():
        setattr(db_funcionario, key, value)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise _erro_integridade(e)
    db.refresh(db_funcionario)
    return db_funcionario


@router.delete("/{funcionario_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_funcionario(
    funcionario_id: int,
    db: Session = Depends(get_db),
    contexto: ContextoSessao = Depends(confirmar_admin),
):
    db_funcionario = _get_funcionario_or_404(db, funcionario_id)
    if db_funcionario.aulas:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Funcionário possui aulas registradas. Desative-o em vez de excluir."
        )
    db.delete(db_funcionario)
    db.commit()
    logger.info(f"Funcionário {funcionario_id} excluído por {contexto.usuario.email}")
    return None


@router.post("/{funcionario_id}/foto", response_model=FuncionarioRead)
def upload_foto_funcionario(
    funcionario_id: int,
    foto: UploadFile = File(...),
    db: Session = Depends(get_db),
    contexto: ContextoSessao = Depends(get_admin_user),
    armazenamento=Depends(get_armazenamento),
):
    db_funcionario = _get_funcionario_or_404(db, funcionario_id)
    db_funcionario.foto_url = enviar_foto(armazenamento, "funcionarios", db_funcionario.id, foto)
    db.commit()
    db.refresh(db_funcionario)
    return db_funcionario
