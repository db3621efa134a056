from datetime import date, timedelta
from decimal import Decimal

from cfc.models.financeiro import Financeiro
from cfc.models.parcela import Parcela
from conftest import SENHA, cabecalho, criar_aluno

URL = "/api/v1/financeiro"


def test_lancamento_de_receita(client, secretaria):
    response = client.post(
        f"{URL}/transacoes",
        json={"tipo": "receita", "categoria": "Taxa de exame", "valor": 120.0, "forma_pagamento": "PIX"},
        headers=cabecalho(secretaria),
    )

    assert response.status_code == 201
    corpo = response.json()
    assert corpo["valor"] == 120.0
    assert corpo["data"] == date.today().isoformat()


def test_categoria_precisa_pertencer_ao_tipo(client, secretaria):
    response = client.post(
        f"{URL}/transacoes",
        json={"tipo": "receita", "categoria": "Aluguel", "valor": 50.0},
        headers=cabecalho(secretaria),
    )

    assert response.status_code == 422


def test_instrutor_nao_acessa_o_caixa(client, instrutor_usuario):
    assert client.get(f"{URL}/transacoes", headers=cabecalho(instrutor_usuario)).status_code == 403
    assert client.get("/api/v1/dashboard/financeiro", headers=cabecalho(instrutor_usuario)).status_code == 403


def test_filtros_da_listagem(client, db, secretaria):
    db.add_all([
        Financeiro(tipo="despesa", categoria="Combustível", valor=Decimal("90.00"), data=date(2026, 10, 2), descricao="Posto"),
        Financeiro(tipo="despesa", categoria="Aluguel", valor=Decimal("1500.00"), data=date(2026, 9, 5)),
        Financeiro(tipo="receita", categoria="Outros", valor=Decimal("40.00"), data=date(2026, 10, 8)),
    ])
    db.commit()
    headers = cabecalho(secretaria)

    despesas = client.get(f"{URL}/transacoes", params={"tipo": "despesa"}, headers=headers).json()
    assert [t["categoria"] for t in despesas] == ["Combustível", "Aluguel"]

    outubro = client.get(f"{URL}/transacoes", params={"data_inicio": "2026-10-01"}, headers=headers).json()
    assert len(outubro) == 2

    assert len(client.get(f"{URL}/transacoes", params={"busca": "posto"}, headers=headers).json()) == 1


def test_edicao_valida_categoria_com_o_tipo_gravado(client, db, secretaria):
    transacao = Financeiro(tipo="despesa", categoria="Aluguel", valor=Decimal("1500.00"), data=date(2026, 9, 5))
    db.add(transacao)
    db.commit()
    url = f"{URL}/transacoes/{transacao.id}"
    headers = cabecalho(secretaria)

    assert client.put(url, json={"categoria": "Matrícula"}, headers=headers).status_code == 400
    assert client.put(url, json={"categoria": "Manutenção", "valor": 300.0}, headers=headers).json()["valor"] == 300.0


def test_exclusao_de_transacao(client, db, admin, secretaria):
    transacao = Financeiro(tipo="despesa", categoria="Aluguel", valor=Decimal("1500.00"))
    db.add(transacao)
    db.commit()
    url = f"{URL}/transacoes/{transacao.id}"

    assert client.delete(url, headers=cabecalho(secretaria, SENHA)).status_code == 403
    assert client.delete(url, headers=cabecalho(admin, SENHA)).status_code == 204
    assert db.query(Financeiro).count() == 0


def test_opcoes(client, secretaria):
    opcoes = client.get(f"{URL}/opcoes", headers=cabecalho(secretaria)).json()

    assert "Aluguel" in opcoes["categorias_despesa"]
    assert "PIX" in opcoes["formas_pagamento"]


def test_painel_financeiro(client, db, admin):
    hoje = date.today()
    aluno = criar_aluno(db)
    db.add_all([
        Parcela(aluno_id=aluno.id, numero=1, valor=Decimal("400.00"), data_vencimento=hoje,
                status="paga", data_pagamento=hoje, forma_pagamento="PIX"),
        Parcela(aluno_id=aluno.id, numero=2, valor=Decimal("400.00"), data_vencimento=hoje - timedelta(days=1)),
        Parcela(aluno_id=aluno.id, numero=3, valor=Decimal("400.00"), data_vencimento=hoje + timedelta(days=30)),
        Financeiro(tipo="receita", categoria="Taxa de exame", valor=Decimal("100.00"), data=hoje),
        Financeiro(tipo="despesa", categoria="Combustível", valor=Decimal("150.00"), data=hoje),
    ])
    db.commit()

    painel = client.get("/api/v1/dashboard/financeiro", headers=cabecalho(admin)).json()

    assert painel["receitas_mes"] == 500.0
    assert painel["despesas_mes"] == 150.0
    assert painel["saldo"] == 350.0
    assert painel["pendente"] == 800.0
    assert painel["atrasado"] == 400.0
    assert len(painel["serie_mensal"]) == 6
    assert painel["serie_mensal"][-1]["receitas"] == 500.0
    assert painel["despesas_por_categoria"] == [{"categoria": "Combustível", "valor": 150.0}]


def test_resumo_da_pagina_inicial(client, db, instrutor_usuario, instrutor):
    criar_aluno(db, nome="Ativo")
    criar_aluno(db, nome="Formado", status="formado")

    resumo = client.get("/api/v1/dashboard/resumo", headers=cabecalho(instrutor_usuario)).json()

    assert resumo["total_alunos"] == 1
    assert resumo["instrutores_ativos"] == 1
    assert resumo["aulas_agendadas"] == 0
    assert resumo["receita_mes"] == 0.0
