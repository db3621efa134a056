from datetime import date, time, timedelta
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError

from cfc.models.aluno import Aluno
from cfc.models.aula import Aula
from cfc.models.parcela import Parcela
from conftest import SENHA, cabecalho, criar_aluno, imagem_png

URL = "/api/v1/alunos"


def payload(**kwargs):
    dados = {
        "nome_completo": "Joana Pereira",
        "cpf": "529.982.247-25",
        "telefone": "(11) 98765-4321",
        "email": "joana@example.com",
        "categoria": "B",
        "data_matricula": "2026-01-31",
        "valor_curso": 1000.00,
        "quantidade_parcelas": 3,
        "max_aulas_b": 20,
    }
    dados.update(kwargs)
    return dados


def test_matricula_gera_parcelas(client, db, secretaria):
    response = client.post(URL, json=payload(), headers=cabecalho(secretaria))

    assert response.status_code == 201
    aluno = response.json()
    assert aluno["cpf"] == "52998224725"
    assert aluno["cpf_formatado"] == "529.982.247-25"
    assert aluno["telefone_formatado"] == "(11) 98765-4321"

    parcelas = db.query(Parcela).filter(Parcela.aluno_id == aluno["id"]).order_by(Parcela.numero).all()
    assert [p.valor for p in parcelas] == [Decimal("333.33"), Decimal("333.33"), Decimal("333.34")]
    assert [p.data_vencimento for p in parcelas] == [date(2026, 2, 28), date(2026, 3, 31), date(2026, 4, 30)]
    assert all(p.status == "pendente" for p in parcelas)


def test_matricula_desfeita_quando_parcelas_falham(client, db, secretaria, monkeypatch):
    def falha(*args, **kwargs):
        raise SQLAlchemyError("falha ao gravar parcelas")

    monkeypatch.setattr("cfc.routes.alunos_fastapi.gerar_plano_parcelas", falha)

    response = client.post(URL, json=payload(), headers=cabecalho(secretaria))

    assert response.status_code == 500
    assert db.query(Aluno).count() == 0
    assert db.query(Parcela).count() == 0


def test_matricula_valida_dados(client, secretaria):
    headers = cabecalho(secretaria)

    assert client.post(URL, json=payload(cpf="123.456.789-00"), headers=headers).status_code == 422
    assert client.post(URL, json=payload(quantidade_parcelas=0), headers=headers).status_code == 422
    assert client.post(URL, json=payload(valor_curso=0), headers=headers).status_code == 422


def test_cpf_duplicado(client, secretaria):
    headers = cabecalho(secretaria)
    assert client.post(URL, json=payload(), headers=headers).status_code == 201

    response = client.post(URL, json=payload(email="outra@example.com"), headers=headers)

    assert response.status_code == 400
    assert "CPF" in response.json()["detail"]


def test_detalhe_mostra_parcelas_atrasadas_sem_alterar_o_banco(client, db, instrutor_usuario):
    matricula = date.today() - timedelta(days=400)
    headers = cabecalho(instrutor_usuario)
    aluno_id = client.post(
        URL, json=payload(data_matricula=matricula.isoformat(), quantidade_parcelas=2), headers=headers
    ).json()["id"]

    response = client.get(f"{URL}/{aluno_id}", headers=headers)

    assert response.status_code == 200
    parcelas = response.json()["parcelas"]
    assert [p["status_exibicao"] for p in parcelas] == ["atrasada", "atrasada"]
    assert [p["status"] for p in parcelas] == ["pendente", "pendente"]
    assert parcelas[0]["valor"] == 500.0
    assert {p.status for p in db.query(Parcela).all()} == {"pendente"}


def test_listagem_com_busca_e_filtros(client, db, secretaria):
    criar_aluno(db, nome="Ana Moto", categoria="A")
    criar_aluno(db, nome="Bruno Carro", categoria="B")
    headers = cabecalho(secretaria)

    todos = client.get(URL, headers=headers).json()
    assert todos["total"] == 2
    assert [a["nome_completo"] for a in todos["alunos"]] == ["Ana Moto", "Bruno Carro"]

    assert client.get(URL, params={"busca": "bruno"}, headers=headers).json()["total"] == 1
    assert client.get(URL, params={"categoria": "A"}, headers=headers).json()["alunos"][0]["nome_completo"] == "Ana Moto"


def test_atualizacao_nao_regera_parcelas(client, db, secretaria):
    headers = cabecalho(secretaria)
    aluno_id = client.post(URL, json=payload(), headers=headers).json()["id"]

    response = client.put(f"{URL}/{aluno_id}", json={"valor_curso": 2000.0, "status": "em_formacao"}, headers=headers)

    assert response.status_code == 200
    assert response.json()["status"] == "em_formacao"
    assert sum(p.valor for p in db.query(Parcela).all()) == Decimal("1000.00")


def test_sem_autenticacao(client):
    assert client.get(URL).status_code == 401


def test_exclusao_exige_senha_do_admin(client, db, admin, secretaria, instrutor):
    aluno = criar_aluno(db)
    db.add(Parcela(aluno_id=aluno.id, numero=1, valor=Decimal("100.00"), data_vencimento=date(2026, 2, 1)))
    db.add(Aula(
        aluno_id=aluno.id, instrutor_id=instrutor.id, data=date(2026, 2, 1), hora_inicio=time(8, 0),
        tipo="pratica_b", status="agendada", valor=Decimal("10.00"),
    ))
    db.commit()
    url = f"{URL}/{aluno.id}"

    assert client.delete(url, headers=cabecalho(secretaria, SENHA)).status_code == 403
    assert client.delete(url, headers=cabecalho(admin)).status_code == 400
    assert client.delete(url, headers=cabecalho(admin, "errada")).status_code == 401
    assert db.query(Aluno).count() == 1

    assert client.delete(url, headers=cabecalho(admin, SENHA)).status_code == 204
    assert db.query(Aluno).count() == 0
    assert db.query(Parcela).count() == 0
    assert db.query(Aula).count() == 0


def test_upload_de_foto(client, db, secretaria, armazenamento):
    aluno = criar_aluno(db)
    url = f"{URL}/{aluno.id}/foto"

    response = client.post(url, files={"foto": ("retrato.png", imagem_png(), "image/png")}, headers=cabecalho(secretaria))

    assert response.status_code == 200
    assert response.json()["foto_url"].startswith(f"https://fotos.cfc.test/alunos/{aluno.id}_")
    (conteudo, content_type), = armazenamento.enviados.values()
    assert content_type == "image/jpeg"

    invalido = client.post(url, files={"foto": ("nota.txt", b"texto", "text/plain")}, headers=cabecalho(secretaria))
    assert invalido.status_code == 400


def test_atualizacao_com_nulo(client, db, secretaria):
    headers = cabecalho(secretaria)
    aluno = criar_aluno(db, max_aulas_b=20)
    url = f"{URL}/{aluno.id}"

    sem_limite = client.put(url, json={"max_aulas_b": None}, headers=headers)
    assert sem_limite.status_code == 200
    assert sem_limite.json()["max_aulas_b"] == 0

    for campo in ("nome_completo", "categoria", "status", "valor_curso", "quantidade_parcelas", "ativo"):
        response = client.put(url, json={campo: None}, headers=headers)
        assert response.status_code == 422, campo

    assert client.put(url, json={"nome_completo": "   "}, headers=headers).status_code == 422
    db.refresh(aluno)
    assert aluno.nome_completo == "Maria Souza"


def test_matricula_com_valor_menor_que_as_parcelas(client, db, secretaria):
    response = client.post(URL, json=payload(valor_curso=0.25, quantidade_parcelas=48), headers=cabecalho(secretaria))

    assert response.status_code == 400
    assert "insuficiente" in response.json()["detail"]
    assert db.query(Aluno).count() == 0
    assert db.query(Parcela).count() == 0
