# -*- coding: utf-8 -*-
"""
Tipos e validadores compartilhados pelos schemas.
"""
from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, Field, PlainSerializer

from cfc.validadores import somente_digitos, validar_cpf

# Valores monetários: Decimal na regra de negócio, número no JSON
Dinheiro = Annotated[
    Decimal,
    Field(max_digits=12, decimal_places=2),
    PlainSerializer(float, return_type=float, when_used="json"),
]


def vazio_para_none(v):
    """Converte strings vazias para None antes da validação principal."""
    if isinstance(v, str) and v.strip() == "":
        return None
    return v


def normalizar_cpf(v):
    v = vazio_para_none(v)
    if v is None:
        return None
    if not validar_cpf(v):
        raise ValueError("CPF inválido")
    return somente_digitos(v)


def para_colunas(schema: BaseModel, **kwargs) -> dict:
    """model_dump com os enums convertidos para os valores gravados nas colunas."""
    return {
        k: v.value if isinstance(v, Enum) else v
        for k, v in schema.model_dump(**kwargs).items()
    }


def normalizar_digitos(v):
    v = vazio_para_none(v)
    if v is None:
        return None
    return somente_digitos(v) or None


class Endereco(BaseModel):
    endereco_logradouro: Optional[str] = Field(None, max_length=150)
    endereco_numero: Optional[str] = Field(None, max_length=20)
    endereco_complemento: Optional[str] = Field(None, max_length=100)
    endereco_bairro: Optional[str] = Field(None, max_length=100)
    endereco_cidade: Optional[str] = Field(None, max_length=100)
    endereco_estado: Optional[str] = Field(None, max_length=2)
    endereco_cep: Optional[str] = Field(None, max_length=9)


def obrigatorio(v):
    # Campos opcionais na atualização, mas sem coluna anulável
    if v is None:
        raise ValueError("Campo obrigatório não pode ser nulo")
    return v
