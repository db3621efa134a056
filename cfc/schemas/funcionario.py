# -*- coding: utf-8 -*-
"""
Schemas Pydantic para a entidade Funcionario.
"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, computed_field, field_validator

from cfc.enums import Papel
from cfc.schemas.comum import Endereco, normalizar_cpf, normalizar_digitos, obrigatorio, vazio_para_none
from cfc.validadores import formatar_cpf, formatar_telefone


class FuncionarioBase(Endereco):
    nome_completo: str = Field(..., min_length=1, max_length=150)
    rg: Optional[str] = Field(None, max_length=20)
    cpf: Optional[str] = None
    data_nascimento: Optional[date] = None
    telefone: Optional[str] = None
    email: Optional[EmailStr] = None
    papel: Papel = Papel.INSTRUTOR
    data_contratacao: Optional[date] = None
    ativo: bool = True
    usuario_id: Optional[int] = None

    @field_validator("nome_completo")
    @classmethod
    def nome_obrigatorio(cls, v):
        if not v.strip():
            raise ValueError("Nome obrigatório")
        return v.strip()

    @field_validator("email", "rg", "data_nascimento", "data_contratacao", mode="before")
    @classmethod
    def empty_str_to_none(cls, v):
        return vazio_para_none(v)

    @field_validator("cpf", mode="before")
    @classmethod
    def cpf_valido(cls, v):
        return normalizar_cpf(v)

    @field_validator("telefone", "endereco_cep", mode="before")
    @classmethod
    def apenas_digitos(cls, v):
        return normalizar_digitos(v)


class FuncionarioCreate(FuncionarioBase):
    pass


class FuncionarioUpdate(Endereco):
    nome_completo: Optional[str] = Field(None, min_length=1, max_length=150)
    rg: Optional[str] = Field(None, max_length=20)
    cpf: Optional[str] = None
    data_nascimento: Optional[date] = None
    telefone: Optional[str] = None
    email: Optional[EmailStr] = None
    papel: Optional[Papel] = None
    data_contratacao: Optional[date] = None
    ativo: Optional[bool] = None
    usuario_id: Optional[int] = None

    @field_validator("email", "rg", "data_nascimento", "data_contratacao", mode="before")
    @classmethod
    def empty_str_to_none_update(cls, v):
        return vazio_para_none(v)

    @field_validator("nome_completo", "papel", "ativo")
    @classmethod
    def sem_nulos_update(cls, v):
        return obrigatorio(v)

    @field_validator("nome_completo")
    @classmethod
    def nome_obrigatorio_update(cls, v):
        if not v.strip():
            raise ValueError("Nome obrigatório")
        return v.strip()

    @field_validator("cpf", mode="before")
    @classmethod
    def cpf_valido_update(cls, v):
        return normalizar_cpf(v)

    @field_validator("telefone", "endereco_cep", mode="before")
    @classmethod
    def apenas_digitos_update(cls, v):
        return normalizar_digitos(v)


class FuncionarioRead(FuncionarioBase):
    id: int
    foto_url: Optional[str] = None
    criado_em: Optional[datetime] = None

    # A leitura não revalida o CPF já gravado
    @field_validator("cpf", mode="before")
    @classmethod
    def cpf_valido(cls, v):
        return v

    @computed_field
    @property
    def cpf_formatado(self) -> Optional[str]:
        return formatar_cpf(self.cpf)

    @computed_field
    @property
    def telefone_formatado(self) -> Optional[str]:
        return formatar_telefone(self.telefone)

    class Config:
        from_attributes = True


class FuncionarioResumo(BaseModel):
    id: int
    nome_completo: str

    class Config:
        from_attributes = True


class FuncionarioPaginated(BaseModel):
    total: int
    funcionarios: List[FuncionarioRead]
