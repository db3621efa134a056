from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from cfc.enums import Papel


class PerfilRead(BaseModel):
    nome_completo: str
    telefone: Optional[str] = None
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True


class UsuarioBase(BaseModel):
    email: EmailStr
    nome_completo: str = Field(..., min_length=1, max_length=150)
    telefone: Optional[str] = Field(None, max_length=20)
    papeis: List[Papel] = Field(..., min_length=1)


class UsuarioCreate(UsuarioBase):
    password: str = Field(..., min_length=6)


class UsuarioUpdate(BaseModel):
    email: Optional[EmailStr] = None
    nome_completo: Optional[str] = Field(None, max_length=150)
    telefone: Optional[str] = Field(None, max_length=20)
    password: Optional[str] = Field(None, min_length=6)
    papeis: Optional[List[Papel]] = None
    ativo: Optional[bool] = None


class UsuarioRead(BaseModel):
    id: int
    email: EmailStr
    ativo: bool
    papeis: List[Papel] = []
    perfil: Optional[PerfilRead] = None


class ContextoSessaoRead(BaseModel):
    usuario: UsuarioRead
    papel: Optional[Papel] = None
    papeis: List[Papel] = []
    perfil: Optional[PerfilRead] = None


class Token(BaseModel):
    access_token: str
    token_type: str
    contexto: ContextoSessaoRead


class ConfirmacaoSenha(BaseModel):
    password: str
