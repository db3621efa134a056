# -*- coding: utf-8 -*-
"""
Schemas Pydantic para as parcelas do curso.
"""
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from cfc.enums import FORMAS_PAGAMENTO, StatusParcela
from cfc.schemas.comum import Dinheiro


class ParcelaAlunoResumo(BaseModel):
    id: int
    nome_completo: str
    categoria: str

    class Config:
        from_attributes = True


class ParcelaRead(BaseModel):
    id: int
    aluno_id: int
    numero: int
    valor: Dinheiro
    data_vencimento: date
    # Status gravado no banco (pendente/paga)
    status: StatusParcela
    # Status exibido: 'atrasada' quando pendente e vencida
    status_exibicao: StatusParcela
    data_pagamento: Optional[date] = None
    forma_pagamento: Optional[str] = None
    comprovante_url: Optional[str] = None
    aluno: Optional[ParcelaAlunoResumo] = None


class ParcelaUpdate(BaseModel):
    valor: Optional[Dinheiro] = Field(None, gt=0)
    data_vencimento: Optional[date] = None


class PagamentoParcela(BaseModel):
    forma_pagamento: str
    data_pagamento: date = Field(default_factory=date.today)

    @field_validator("forma_pagamento")
    @classmethod
    def forma_conhecida(cls, v):
        if v not in FORMAS_PAGAMENTO:
            raise ValueError(f"Forma de pagamento inválida. Use uma de: {', '.join(FORMAS_PAGAMENTO)}")
        return v


class ParcelaPaginated(BaseModel):
    total: int
    parcelas: List[ParcelaRead]
