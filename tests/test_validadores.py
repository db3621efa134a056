import pytest
from pydantic import ValidationError

from cfc.schemas.aluno import AlunoCreate
from cfc.validadores import formatar_cep, formatar_cpf, formatar_telefone, validar_cpf


@pytest.mark.parametrize("cpf", ["529.982.247-25", "52998224725", "111.444.777-35"])
def test_cpf_valido(cpf):
    assert validar_cpf(cpf)


@pytest.mark.parametrize("cpf", ["111.111.111-11", "52998224726", "1234", ""])
def test_cpf_invalido(cpf):
    assert not validar_cpf(cpf)


def test_mascaras():
    assert formatar_cpf("52998224725") == "529.982.247-25"
    assert formatar_telefone("11987654321") == "(11) 98765-4321"
    assert formatar_telefone("1132654321") == "(11) 3265-4321"
    assert formatar_cep("01310100") == "01310-100"
    assert formatar_cpf(None) is None


def test_schema_normaliza_campos_brasileiros():
    aluno = AlunoCreate(
        nome_completo="  João da Silva ",
        cpf="529.982.247-25",
        telefone="(11) 98765-4321",
        endereco_cep="01310-100",
        email="",
        valor_curso="1200.00",
    )

    assert aluno.nome_completo == "João da Silva"
    assert aluno.cpf == "52998224725"
    assert aluno.telefone == "11987654321"
    assert aluno.endereco_cep == "01310100"
    assert aluno.email is None


def test_schema_recusa_cpf_invalido():
    with pytest.raises(ValidationError):
        AlunoCreate(nome_completo="João", cpf="123.456.789-00", valor_curso="1200.00")
