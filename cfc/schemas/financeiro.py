# cfc/schemas/financeiro.py
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from cfc.enums import FORMAS_PAGAMENTO, TipoTransacao, categorias_do_tipo
from cfc.schemas.comum import Dinheiro, vazio_para_none


def _validar_forma(v):
    v = vazio_para_none(v)
    if v is not None and v not in FORMAS_PAGAMENTO:
        raise ValueError("Forma de pagamento inválida")
    return v


class FinanceiroBase(BaseModel):
    tipo: TipoTransacao
    categoria: str
    descricao: Optional[str] = Field(None, max_length=255)
    valor: Dinheiro = Field(..., gt=0)
    data: date = Field(default_factory=date.today)
    forma_pagamento: Optional[str] = None

    @field_validator("forma_pagamento", mode="before")
    @classmethod
    def forma_conhecida(cls, v):
        return _validar_forma(v)

    @model_validator(mode="after")
    def categoria_do_tipo(self):
        if self.categoria not in categorias_do_tipo(self.tipo):
            raise ValueError(f"Categoria '{self.categoria}' não pertence ao tipo {self.tipo.value}")
        return self


class FinanceiroCreate(FinanceiroBase):
    pass


class FinanceiroUpdate(BaseModel):
    tipo: Optional[TipoTransacao] = None
    categoria: Optional[str] = None
    descricao: Optional[str] = Field(None, max_length=255)
    valor: Optional[Dinheiro] = Field(None, gt=0)
    data: Optional[date] = None
    forma_pagamento: Optional[str] = None

    @field_validator("forma_pagamento", mode="before")
    @classmethod
    def forma_conhecida(cls, v):
        return _validar_forma(v)


class FinanceiroRead(BaseModel):
    id: int
    tipo: TipoTransacao
    categoria: str
    descricao: Optional[str] = None
    valor: Dinheiro
    data: date
    forma_pagamento: Optional[str] = None

    class Config:
        from_attributes = True


class OpcoesFinanceiro(BaseModel):
    categorias_receita: List[str]
    categorias_despesa: List[str]
    formas_pagamento: List[str]
