# -*- coding: utf-8 -*-
"""
Rotas FastAPI para as aulas práticas e exames.
"""
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from cfc.auth import ContextoSessao, get_equipe
from cfc.database import get_db
from cfc.enums import Papel, StatusAula, TipoAula
from cfc.exceptions import CotaExcedida, RecursoNaoEncontrado
from cfc.models.aluno import Aluno
from cfc.models.aula import Aula
from cfc.models.funcionario import Funcionario
from cfc.reautenticacao import HEADER_SENHA_ADMIN, confirmar_admin, executar_com_confirmacao
from cfc.schemas.aula import (
    AgendaRead,
    AulaCreate,
    AulaPaginated,
    AulaRead,
    AulaUpdate,
    MudancaStatusAula,
    OpcoesAula,
    RelatorioPagamentoInstrutores,
    SituacaoCotaRead,
)
from cfc.schemas.comum import para_colunas
from cfc.services.agenda import dias_da_grade
from cfc.services.cota_aulas import tipos_permitidos, validar_tipo_para_categoria, valor_da_aula, verificar_cota
from cfc.services.pagamento_instrutores import PERIODOS, agrupar_por_instrutor, intervalo_do_periodo
from cfc.services.status_aula import validar_transicao

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Aulas"],
    responses={404: {"description": "Aula não encontrada"}},
)


def _query_aulas(db: Session):
    return db.query(Aula).options(joinedload(Aula.aluno), joinedload(Aula.instrutor))


def _get_aula_or_404(db: Session, aula_id: int) -> Aula:
    db_aula = _query_aulas(db).filter(Aula.id == aula_id).first()
    if not db_aula:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Aula não encontrada")
    return db_aula


def _get_aluno(db: Session, aluno_id: int) -> Aluno:
    aluno = db.get(Aluno, aluno_id)
    if not aluno:
        raise RecursoNaoEncontrado("Aluno não encontrado")
    return aluno


def _validar_instrutor(db: Session, instrutor_id: int):
    if not db.get(Funcionario, instrutor_id):
        raise RecursoNaoEncontrado("Instrutor não encontrado")


def _salvar_com_cota(db, contexto, senha_admin, aluno, tipo, status_final, salvar, aula_editada=None):
    """
    Aplica as regras de marcação e executa ``salvar``.

    Cota excedida sem o cabeçalho de senha devolve 409; com o cabeçalho, a
    gravação só acontece depois da confirmação do administrador.
    """
    validar_tipo_para_categoria(tipo, aluno.categoria)

    if status_final != StatusAula.CANCELADA:
        situacao = verificar_cota(db, aluno, tipo, aula_editada=aula_editada)
        if situacao.excedida:
            if senha_admin is None:
                raise CotaExcedida(situacao.grupo.value, situacao.usadas, situacao.maximo)
            resultado = executar_com_confirmacao(db, contexto, senha_admin, salvar)
            logger.info(
                f"Cota do grupo {situacao.grupo.value} liberada por {contexto.usuario.email} "
                f"para o aluno {aluno.id} ({situacao.usadas}/{situacao.maximo})"
            )
            return resultado
    return salvar()


@router.get("", response_model=AulaPaginated)
def read_aulas(
    skip: int = 0,
    limit: int = 50,
    busca: Optional[str] = None,
    status_aula: Optional[StatusAula] = None,
    aluno_id: Optional[int] = None,
    instrutor_id: Optional[int] = None,
    db: Session = Depends(get_db),
    contexto: ContextoSessao = Depends(get_equipe),
):
    """
    Lista aulas da mais recente para a mais antiga, com busca pelo nome do
    aluno ou do instrutor.
    """
    query = db.query(Aula).join(Aluno).join(Funcionario).options(
        joinedload(Aula.aluno), joinedload(Aula.instrutor)
    )
    if busca:
        query = query.filter(or_(
            Aluno.nome_completo.ilike(f"%{busca}%"),
            Funcionario.nome_completo.ilike(f"%{busca}%"),
        ))
    if status_aula:
        query = query.filter(Aula.status == status_aula.value)
    if aluno_id:
        query = query.filter(Aula.aluno_id == aluno_id)
    if instrutor_id:
        query = query.filter(Aula.instrutor_id == instrutor_id)

    total = query.count()
    aulas = query.order_by(Aula.data.desc(), Aula.hora_inicio.desc()).offset(skip).limit(limit).all()
    return {"total": total, "aulas": aulas}


@router.get("/opcoes", response_model=OpcoesAula)
def read_opcoes(
    aluno_id: Optional[int] = None,
    db: Session = Depends(get_db),
    contexto: ContextoSessao = Depends(get_equipe),
):
    """Tipos de aula permitidos para o aluno, instrutores ativos e alunos ativos."""
    tipos = list(TipoAula)
    if aluno_id:
        tipos = tipos_permitidos(_get_aluno(db, aluno_id).categoria)

    instrutores = db.query(Funcionario).filter(
        Funcionario.ativo == True, Funcionario.papel == Papel.INSTRUTOR.value
    ).order_by(Funcionario.nome_completo).all()
    alunos = db.query(Aluno).filter(Aluno.ativo == True).order_by(Aluno.nome_completo).all()
    return {
        "tipos": [{"valor": t, "rotulo": t.rotulo, "preco": valor_da_aula(t)} for t in tipos],
        "instrutores": instrutores,
        "alunos": alunos,
    }


@router.get("/verificar-cota", response_model=SituacaoCotaRead)
def read_situacao_cota(
    aluno_id: int,
    tipo: TipoAula,
    aula_id: Optional[int] = None,
    db: Session = Depends(get_db),
    contexto: ContextoSessao = Depends(get_equipe),
):
    aluno = _get_aluno(db, aluno_id)
    aula_editada = _get_aula_or_404(db, aula_id) if aula_id else None
    situacao = verificar_cota(db, aluno, tipo, aula_editada=aula_editada)
    return {
        "grupo": situacao.grupo,
        "usadas": situacao.usadas,
        "maximo": situacao.maximo,
        "excedida": situacao.excedida,
        "sem_limite": situacao.sem_limite,
    }


@router.get("/agenda", response_model=AgendaRead)
def read_agenda(
    modo: str = Query("semana", pattern="^(semana|mes)$"),
    data: Optional[date] = None,
    instrutor_id: Optional[int] = None,
    db: Session = Depends(get_db),
    contexto: ContextoSessao = Depends(get_equipe),
):
    """
    Grade semanal ou mensal começando na segunda-feira, com as aulas de cada dia.
    """
    hoje = date.today()
    inicio, fim, dias = dias_da_grade(modo, data or hoje)

    query = _query_aulas(db).filter(Aula.data >= dias[0], Aula.data <= dias[-1])
    if instrutor_id:
        query = query.filter(Aula.instrutor_id == instrutor_id)
    por_dia = {}
    for aula in query.order_by(Aula.data, Aula.hora_inicio).all():
        por_dia.setdefault(aula.data, []).append(aula)

    return {
        "modo": modo,
        "inicio": inicio,
        "fim": fim,
        "dias": [
            {"data": d, "hoje": d == hoje, "no_periodo": inicio <= d <= fim, "aulas": por_dia.get(d, [])}
            for d in dias
        ],
    }


@router.get("/pagamento-instrutores", response_model=RelatorioPagamentoInstrutores)
def read_pagamento_instrutores(
    periodo: str = "mes",
    inicio: Optional[date] = None,
    fim: Optional[date] = None,
    instrutor_id: Optional[int] = None,
    db: Session = Depends(get_db),
    contexto: ContextoSessao = Depends(get_equipe),
):
    """
    Aulas realizadas no período agrupadas por instrutor. Datas de início e fim
    informadas substituem o período.
    """
    if inicio and fim:
        if fim < inicio:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="A data final deve ser posterior à inicial.")
    elif periodo in PERIODOS:
        inicio, fim = intervalo_do_periodo(periodo)
    else:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Período inválido. Use {', '.join(PERIODOS)} ou informe início e fim."
        )

    query = _query_aulas(db).filter(
        Aula.status == StatusAula.REALIZADA.value,
        Aula.data >= inicio,
        Aula.data <= fim,
    )
    if instrutor_id:
        query = query.filter(Aula.instrutor_id == instrutor_id)

    relatorio = agrupar_por_instrutor(query.order_by(Aula.data, Aula.hora_inicio).all())
    return {"inicio": inicio, "fim": fim, **relatorio}


@router.get("/{aula_id}", response_model=AulaRead)
def read_aula(aula_id: int, db: Session = Depends(get_db), contexto: ContextoSessao = Depends(get_equipe)):
    return _get_aula_or_404(db, aula_id)


@router.post("", response_model=AulaRead, status_code=status.HTTP_201_CREATED)
def create_aula(
    aula: AulaCreate,
    db: Session = Depends(get_db),
    contexto: ContextoSessao = Depends(get_equipe),
    senha_admin: Optional[str] = Header(None, alias=HEADER_SENHA_ADMIN),
):
    """
    Agenda uma aula. O valor é definido pelo tipo (prática ou exame).
    """
    aluno = _get_aluno(db, aula.aluno_id)
    _validar_instrutor(db, aula.instrutor_id)

    def salvar():
        db_aula = Aula(**para_colunas(aula), valor=valor_da_aula(aula.tipo))
        db.add(db_aula)
        db.commit()
        db.refresh(db_aula)
        return db_aula

    return _salvar_com_cota(db, contexto, senha_admin, aluno, aula.tipo, aula.status, salvar)


@router.put("/{aula_id}", response_model=AulaRead)
def update_aula(
    aula_id: int,
    dados: AulaUpdate,
    db: Session = Depends(get_db),
    contexto: ContextoSessao = Depends(get_equipe),
    senha_admin: Optional[str] = Header(None, alias=HEADER_SENHA_ADMIN),
):
    db_aula = _get_aula_or_404(db, aula_id)
    update_data = para_colunas(dados, exclude_unset=True, exclude_none=True)

    aluno_id = update_data.get("aluno_id", db_aula.aluno_id)
    tipo = TipoAula(update_data.get("tipo", db_aula.tipo))
    status_final = StatusAula(update_data.get("status", db_aula.status))

    if status_final.value != db_aula.status:
        validar_transicao(db_aula.status, status_final, update_data.get("data"), update_data.get("hora_inicio"))
    if "instrutor_id" in update_data:
        _validar_instrutor(db, update_data["instrutor_id"])
    aluno = _get_aluno(db, aluno_id)

    def salvar():
        for key, value in update_data.items():
            setattr(db_aula, key, value)
        db_aula.valor = valor_da_aula(tipo)
        db.commit()
        db.refresh(db_aula)
        return db_aula

    # A aula ainda não foi alterada: a cota desconta o estado gravado dela
    aula_editada = db_aula if db_aula.aluno_id == aluno.id else None
    return _salvar_com_cota(db, contexto, senha_admin, aluno, tipo, status_final, salvar, aula_editada=aula_editada)


@router.patch("/{aula_id}/status", response_model=AulaRead)
def update_status_aula(
    aula_id: int,
    mudanca: MudancaStatusAula,
    db: Session = Depends(get_db),
    contexto: ContextoSessao = Depends(get_equipe),
):
    db_aula = _get_aula_or_404(db, aula_id)
    validar_transicao(db_aula.status, mudanca.status, mudanca.data, mudanca.hora_inicio)

    db_aula.status = mudanca.status.value
    if mudanca.data:
        db_aula.data = mudanca.data
    if mudanca.hora_inicio:
        db_aula.hora_inicio = mudanca.hora_inicio
    db.commit()
    db.refresh(db_aula)
    logger.info(f"Aula {aula_id} marcada como {mudanca.status.value} por {contexto.usuario.email}")
    return db_aula


@router.delete("/{aula_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_aula(
    aula_id: int,
    db: Session = Depends(get_db),
    contexto: ContextoSessao = Depends(confirmar_admin),
):
    db_aula = _get_aula_or_404(db, aula_id)
    db.delete(db_aula)
    db.commit()
    logger.info(f"Aula {aula_id} excluída por {contexto.usuario.email}")
    return None
