# cfc/schemas/aluno.py
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, computed_field, field_validator

from cfc.enums import CategoriaAluno, StatusAluno
from cfc.schemas.comum import Dinheiro, Endereco, normalizar_cpf, normalizar_digitos, obrigatorio, vazio_para_none
from cfc.schemas.parcela import ParcelaRead
from cfc.validadores import formatar_cpf, formatar_telefone


class AlunoBase(Endereco):
    nome_completo: str = Field(..., min_length=1, max_length=150)
    rg: Optional[str] = Field(None, max_length=20)
    cpf: Optional[str] = None
    data_nascimento: Optional[date] = None
    telefone: Optional[str] = None
    email: Optional[EmailStr] = None
    categoria: CategoriaAluno = CategoriaAluno.B
    data_matricula: date = Field(default_factory=date.today)
    status: StatusAluno = StatusAluno.ATIVO
    valor_curso: Dinheiro = Field(..., gt=0)
    quantidade_parcelas: int = Field(1, ge=1, le=48)
    max_aulas_a: int = Field(0, ge=0)
    max_aulas_b: int = Field(0, ge=0)
    observacoes: Optional[str] = None
    ativo: bool = True

    @field_validator("nome_completo")
    @classmethod
    def nome_obrigatorio(cls, v):
        if not v.strip():
            raise ValueError("Nome obrigatório")
        return v.strip()

    @field_validator("email", "rg", "data_nascimento", "observacoes", mode="before")
    @classmethod
    def empty_str_to_none(cls, v):
        """Converte strings vazias para None antes da validação principal."""
        return vazio_para_none(v)

    @field_validator("cpf", mode="before")
    @classmethod
    def cpf_valido(cls, v):
        return normalizar_cpf(v)

    @field_validator("telefone", "endereco_cep", mode="before")
    @classmethod
    def apenas_digitos(cls, v):
        return normalizar_digitos(v)

    @field_validator("max_aulas_a", "max_aulas_b", mode="before")
    @classmethod
    def cota_vazia_sem_limite(cls, v):
        return 0 if v is None or v == "" else v


class AlunoCreate(AlunoBase):
    pass


class AlunoUpdate(Endereco):
    nome_completo: Optional[str] = Field(None, min_length=1, max_length=150)
    rg: Optional[str] = Field(None, max_length=20)
    cpf: Optional[str] = None
    data_nascimento: Optional[date] = None
    telefone: Optional[str] = None
    email: Optional[EmailStr] = None
    categoria: Optional[CategoriaAluno] = None
    data_matricula: Optional[date] = None
    status: Optional[StatusAluno] = None
    valor_curso: Optional[Dinheiro] = Field(None, gt=0)
    quantidade_parcelas: Optional[int] = Field(None, ge=1, le=48)
    max_aulas_a: Optional[int] = Field(None, ge=0)
    max_aulas_b: Optional[int] = Field(None, ge=0)
    observacoes: Optional[str] = None
    ativo: Optional[bool] = None

    # --- Aplica os mesmos validadores ao Update ---
    @field_validator("email", "rg", "data_nascimento", "observacoes", mode="before")
    @classmethod
    def empty_str_to_none_update(cls, v):
        return vazio_para_none(v)

    @field_validator("max_aulas_a", "max_aulas_b", mode="before")
    @classmethod
    def cota_vazia_sem_limite_update(cls, v):
        return 0 if v is None or v == "" else v

    @field_validator(
        "nome_completo", "categoria", "data_matricula", "status",
        "valor_curso", "quantidade_parcelas", "ativo",
    )
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


class AlunoRead(AlunoBase):
    id: int
    foto_url: Optional[str] = None
    criado_em: Optional[datetime] = None

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


class AlunoDetalhe(AlunoRead):
    parcelas: List[ParcelaRead] = []


class AlunoResumo(BaseModel):
    id: int
    nome_completo: str
    categoria: CategoriaAluno

    class Config:
        from_attributes = True


class AlunoPaginated(BaseModel):
    total: int
    alunos: List[AlunoRead]
