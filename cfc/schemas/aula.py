# -*- coding: utf-8 -*-
"""
Schemas Pydantic para a entidade Aula.
"""
from datetime import date, time
from typing import List, Optional

from pydantic import BaseModel, Field

from cfc.enums import GrupoAula, StatusAula, TipoAula
from cfc.schemas.aluno import AlunoResumo
from cfc.schemas.comum import Dinheiro
from cfc.schemas.funcionario import FuncionarioResumo


class AulaBase(BaseModel):
    aluno_id: int
    instrutor_id: int
    data: date = Field(default_factory=date.today)
    hora_inicio: time
    duracao_minutos: int = Field(50, ge=10, le=120)
    tipo: TipoAula
    observacoes: Optional[str] = None


class AulaCreate(AulaBase):
    status: StatusAula = StatusAula.AGENDADA


class AulaUpdate(BaseModel):
    aluno_id: Optional[int] = None
    instrutor_id: Optional[int] = None
    data: Optional[date] = None
    hora_inicio: Optional[time] = None
    duracao_minutos: Optional[int] = Field(None, ge=10, le=120)
    tipo: Optional[TipoAula] = None
    status: Optional[StatusAula] = None
    observacoes: Optional[str] = None


class MudancaStatusAula(BaseModel):
    status: StatusAula
    # Obrigatório informar nova data e/ou horário ao reagendar
    data: Optional[date] = None
    hora_inicio: Optional[time] = None


class AulaRead(AulaBase):
    id: int
    status: StatusAula
    valor: Dinheiro
    aluno: Optional[AlunoResumo] = None
    instrutor: Optional[FuncionarioResumo] = None

    class Config:
        from_attributes = True


class SituacaoCotaRead(BaseModel):
    grupo: GrupoAula
    usadas: int
    maximo: int
    excedida: bool
    sem_limite: bool


class OpcaoTipoAula(BaseModel):
    valor: TipoAula
    rotulo: str
    preco: Dinheiro


class OpcoesAula(BaseModel):
    tipos: List[OpcaoTipoAula]
    instrutores: List[FuncionarioResumo]
    alunos: List[AlunoResumo]


class DiaAgenda(BaseModel):
    data: date
    hoje: bool
    no_periodo: bool
    aulas: List[AulaRead]


class AgendaRead(BaseModel):
    modo: str
    inicio: date
    fim: date
    dias: List[DiaAgenda]


class AulaPagamentoRead(BaseModel):
    id: int
    data: date
    aluno: Optional[str] = None
    tipo: TipoAula
    valor: Dinheiro


class PagamentoInstrutorRead(BaseModel):
    instrutor_id: int
    nome: str
    praticas: int
    exames: int
    total: Dinheiro
    aulas: List[AulaPagamentoRead]


class RelatorioPagamentoInstrutores(BaseModel):
    inicio: date
    fim: date
    total_geral: Dinheiro
    total_aulas: int
    instrutores: List[PagamentoInstrutorRead]


class AulaPaginated(BaseModel):
    total: int
    aulas: List[AulaRead]
