from typing import List

from pydantic import BaseModel

from cfc.schemas.comum import Dinheiro


class PontoMensal(BaseModel):
    rotulo: str
    receitas: Dinheiro
    despesas: Dinheiro


class DespesaCategoria(BaseModel):
    categoria: str
    valor: Dinheiro


class ResumoFinanceiro(BaseModel):
    receitas_mes: Dinheiro
    despesas_mes: Dinheiro
    saldo: Dinheiro
    pendente: Dinheiro
    atrasado: Dinheiro
    serie_mensal: List[PontoMensal]
    despesas_por_categoria: List[DespesaCategoria]


class ResumoGeral(BaseModel):
    total_alunos: int
    receita_mes: Dinheiro
    aulas_agendadas: int
    instrutores_ativos: int
