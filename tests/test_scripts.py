from datetime import date
from decimal import Decimal

from sqlalchemy.orm import sessionmaker

from cfc.auth import verify_password
from cfc.config import settings
from cfc.models.parcela import Parcela
from cfc.models.usuario import Usuario
from conftest import criar_aluno
from create_first_user import create_first_user
from gerar_parcelas_faltantes import gerar_parcelas_faltantes


def test_gera_parcelas_de_alunos_sem_plano(db):
    sem_plano = criar_aluno(db, valor_curso=Decimal("1000.00"), quantidade_parcelas=3, data_matricula=date(2026, 1, 31))
    com_plano = criar_aluno(db, nome="Com Plano", quantidade_parcelas=1)
    db.add(Parcela(aluno_id=com_plano.id, numero=1, valor=Decimal("1500.00"), data_vencimento=date(2026, 2, 15)))
    criar_aluno(db, nome="Inativo", ativo=False)
    db.commit()

    assert gerar_parcelas_faltantes(db) == 3

    geradas = db.query(Parcela).filter(Parcela.aluno_id == sem_plano.id).order_by(Parcela.numero).all()
    assert [p.valor for p in geradas] == [Decimal("333.33"), Decimal("333.33"), Decimal("333.34")]
    assert geradas[0].data_vencimento == date(2026, 2, 28)
    assert gerar_parcelas_faltantes(db) == 0


def test_dry_run_nao_grava(db):
    aluno = criar_aluno(db, quantidade_parcelas=4)

    assert gerar_parcelas_faltantes(db, aluno_id=aluno.id, dry_run=True) == 4
    assert db.query(Parcela).count() == 0


def test_cria_o_primeiro_admin_uma_unica_vez(db):
    fabrica = sessionmaker(bind=db.get_bind())

    create_first_user(fabrica)
    create_first_user(fabrica)

    admins = db.query(Usuario).filter(Usuario.email == settings.ADMIN_EMAIL).all()
    assert len(admins) == 1
    assert [p.papel for p in admins[0].papeis] == ["admin"]
    assert verify_password(settings.ADMIN_PASSWORD, admins[0].hashed_password)


def test_pula_aluno_com_valor_insuficiente(db):
    criar_aluno(db, nome="Valor Irrisório", valor_curso=Decimal("0.25"), quantidade_parcelas=48)
    valido = criar_aluno(db, quantidade_parcelas=2)

    assert gerar_parcelas_faltantes(db) == 2
    assert {p.aluno_id for p in db.query(Parcela).all()} == {valido.id}
