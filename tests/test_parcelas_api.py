from datetime import date, timedelta
from decimal import Decimal

import pytest

from cfc.models.financeiro import Financeiro
from cfc.models.parcela import Parcela
from conftest import SENHA, cabecalho, criar_aluno

URL = "/api/v1/parcelas"


@pytest.fixture
def parcelas(db):
    hoje = date.today()
    aluno = criar_aluno(db, nome="Paula Lima")
    registros = [
        Parcela(aluno_id=aluno.id, numero=1, valor=Decimal("300.00"), data_vencimento=hoje - timedelta(days=40),
                status="paga", data_pagamento=hoje - timedelta(days=41), forma_pagamento="PIX"),
        Parcela(aluno_id=aluno.id, numero=2, valor=Decimal("300.00"), data_vencimento=hoje - timedelta(days=10)),
        Parcela(aluno_id=aluno.id, numero=3, valor=Decimal("300.00"), data_vencimento=hoje + timedelta(days=20)),
    ]
    db.add_all(registros)
    db.commit()
    return registros


def test_filtro_atrasada_usa_status_derivado(client, db, secretaria, parcelas):
    response = client.get(URL, params={"status_parcela": "atrasada"}, headers=cabecalho(secretaria))

    assert response.status_code == 200
    corpo = response.json()
    assert corpo["total"] == 1
    atrasada, = corpo["parcelas"]
    assert (atrasada["numero"], atrasada["status"], atrasada["status_exibicao"]) == (2, "pendente", "atrasada")
    assert atrasada["aluno"]["nome_completo"] == "Paula Lima"
    assert db.get(Parcela, atrasada["id"]).status == "pendente"


def test_filtros_pendente_e_paga(client, secretaria, parcelas):
    headers = cabecalho(secretaria)

    pendentes = client.get(URL, params={"status_parcela": "pendente"}, headers=headers).json()["parcelas"]
    pagas = client.get(URL, params={"status_parcela": "paga"}, headers=headers).json()["parcelas"]

    assert [p["numero"] for p in pendentes] == [3]
    assert [p["numero"] for p in pagas] == [1]
    assert client.get(URL, params={"busca": "paula"}, headers=headers).json()["total"] == 3


def test_pagamento_de_parcela(client, db, secretaria, parcelas):
    url = f"{URL}/{parcelas[1].id}/pagamento"
    headers = cabecalho(secretaria)

    response = client.post(url, json={"forma_pagamento": "Dinheiro"}, headers=headers)

    assert response.status_code == 200
    corpo = response.json()
    assert corpo["status"] == "paga"
    assert corpo["status_exibicao"] == "paga"
    assert corpo["data_pagamento"] == date.today().isoformat()
    # O painel já conta parcelas pagas: nenhuma movimentação é lançada no caixa
    assert db.query(Financeiro).count() == 0

    assert client.post(url, json={"forma_pagamento": "Dinheiro"}, headers=headers).status_code == 400


def test_forma_de_pagamento_desconhecida(client, secretaria, parcelas):
    response = client.post(f"{URL}/{parcelas[2].id}/pagamento", json={"forma_pagamento": "Cheque"}, headers=cabecalho(secretaria))

    assert response.status_code == 422


def test_edicao_de_parcela(client, secretaria, parcelas):
    headers = cabecalho(secretaria)
    nova_data = (date.today() + timedelta(days=60)).isoformat()

    response = client.put(f"{URL}/{parcelas[2].id}", json={"valor": 280.5, "data_vencimento": nova_data}, headers=headers)

    assert response.status_code == 200
    assert response.json()["valor"] == 280.5
    assert response.json()["data_vencimento"] == nova_data
    assert client.put(f"{URL}/{parcelas[0].id}", json={"valor": 10}, headers=headers).status_code == 400


def test_exclusao_de_parcela(client, db, admin, secretaria, parcelas):
    url = f"{URL}/{parcelas[2].id}"

    assert client.delete(url, headers=cabecalho(secretaria, SENHA)).status_code == 403
    assert client.delete(url, headers=cabecalho(admin, SENHA)).status_code == 204
    assert db.query(Parcela).count() == 2


def test_parcela_inexistente(client, secretaria):
    assert client.get(f"{URL}/999", headers=cabecalho(secretaria)).status_code == 404
