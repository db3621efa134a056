# Em cfc/routes/dashboard_fastapi.py

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cfc.auth import ContextoSessao, get_admin_ou_secretaria, get_equipe
from cfc.database import get_db
from cfc.enums import Papel, StatusAluno, StatusAula
from cfc.models.aluno import Aluno
from cfc.models.aula import Aula
from cfc.models.financeiro import Financeiro
from cfc.models.funcionario import Funcionario
from cfc.models.parcela import Parcela
from cfc.schemas.dashboard import ResumoFinanceiro, ResumoGeral
from cfc.services.dashboard import resumo_financeiro

router = APIRouter(
    tags=["Dashboard"],
)


@router.get("/financeiro", response_model=ResumoFinanceiro)
def get_resumo_financeiro(
    db: Session = Depends(get_db),
    contexto: ContextoSessao = Depends(get_admin_ou_secretaria),
):
    """
    Totais do mês, valores em aberto, série dos últimos 6 meses e despesas
    do mês por categoria. Recalculado a cada requisição.
    """
    parcelas = db.query(Parcela).all()
    transacoes = db.query(Financeiro).all()
    return resumo_financeiro(parcelas, transacoes, date.today())


@router.get("/resumo", response_model=ResumoGeral)
def get_resumo_geral(
    db: Session = Depends(get_db),
    contexto: ContextoSessao = Depends(get_equipe),
):
    """
    Números da página inicial.
    """
    total_alunos = db.query(Aluno).filter(
        Aluno.ativo == True,
        Aluno.status.in_([StatusAluno.ATIVO.value, StatusAluno.EM_FORMACAO.value]),
    ).count()
    aulas_agendadas = db.query(Aula).filter(Aula.status == StatusAula.AGENDADA.value).count()
    instrutores_ativos = db.query(Funcionario).filter(
        Funcionario.ativo == True,
        Funcionario.papel == Papel.INSTRUTOR.value,
    ).count()

    resumo = resumo_financeiro(db.query(Parcela).all(), db.query(Financeiro).all(), date.today())
    return {
        "total_alunos": total_alunos,
        "receita_mes": resumo["receitas_mes"],
        "aulas_agendadas": aulas_agendadas,
        "instrutores_ativos": instrutores_ativos,
    }
