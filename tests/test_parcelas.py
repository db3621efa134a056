from datetime import date
from decimal import Decimal

import pytest

from cfc.enums import StatusParcela
from cfc.exceptions import ErroValidacao
from cfc.services.parcelas import gerar_plano_parcelas, status_exibicao


def test_ultima_parcela_absorve_o_arredondamento():
    plano = gerar_plano_parcelas(Decimal("1000.00"), 3, date(2026, 1, 10))

    assert [p.valor for p in plano] == [Decimal("333.33"), Decimal("333.33"), Decimal("333.34")]
    assert sum(p.valor for p in plano) == Decimal("1000.00")
    assert [p.numero for p in plano] == [1, 2, 3]
    assert all(p.status == StatusParcela.PENDENTE for p in plano)


def test_soma_exata_com_divisao_irregular():
    plano = gerar_plano_parcelas(Decimal("100.00"), 7, date(2026, 1, 10))

    assert [p.valor for p in plano[:-1]] == [Decimal("14.29")] * 6
    assert plano[-1].valor == Decimal("14.26")
    assert sum(p.valor for p in plano) == Decimal("100.00")


def test_parcela_unica():
    plano = gerar_plano_parcelas(Decimal("850.50"), 1, date(2026, 5, 2))

    assert len(plano) == 1
    assert plano[0].valor == Decimal("850.50")
    assert plano[0].data_vencimento == date(2026, 6, 2)


def test_vencimentos_mensais_respeitam_fim_de_mes():
    plano = gerar_plano_parcelas(Decimal("900.00"), 3, date(2026, 1, 31))

    assert [p.data_vencimento for p in plano] == [date(2026, 2, 28), date(2026, 3, 31), date(2026, 4, 30)]


def test_aceita_float_sem_perder_centavos():
    plano = gerar_plano_parcelas(1000.10, 2, date(2026, 1, 1))

    assert sum(p.valor for p in plano) == Decimal("1000.10")


@pytest.mark.parametrize("valor, quantidade", [(Decimal("0"), 3), (Decimal("-10"), 3), (Decimal("500"), 0)])
def test_rejeita_valor_ou_quantidade_invalidos(valor, quantidade):
    with pytest.raises(ErroValidacao):
        gerar_plano_parcelas(valor, quantidade, date(2026, 1, 1))


def test_pendente_vencida_e_exibida_como_atrasada():
    hoje = date(2026, 10, 19)

    assert status_exibicao("pendente", date(2026, 10, 18), hoje) == StatusParcela.ATRASADA
    assert status_exibicao("pendente", date(2026, 10, 19), hoje) == StatusParcela.PENDENTE
    assert status_exibicao("paga", date(2026, 1, 1), hoje) == StatusParcela.PAGA


@pytest.mark.parametrize("valor, quantidade", [(Decimal("0.25"), 48), (Decimal("0.72"), 48), (Decimal("0.03"), 12)])
def test_rejeita_valor_que_nao_cobre_as_parcelas(valor, quantidade):
    with pytest.raises(ErroValidacao, match="insuficiente"):
        gerar_plano_parcelas(valor, quantidade, date(2026, 1, 1))


def test_menor_valor_aceito_por_parcela():
    plano = gerar_plano_parcelas(Decimal("0.48"), 48, date(2026, 1, 1))

    assert {p.valor for p in plano} == {Decimal("0.01")}
