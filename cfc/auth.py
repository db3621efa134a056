# cfc/auth.py
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from cfc import database
from cfc.config import settings
from cfc.enums import PRIORIDADE_PAPEIS, Papel
from cfc.models.usuario import Perfil, SessaoRevogada, Usuario

# --- CONFIGURAÇÃO DE SEGURANÇA ---
SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token")


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


def create_access_token(data: dict):
    to_encode = data.copy()
    expire = datetime.utcnow() + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire, "jti": uuid.uuid4().hex})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def get_user(db: Session, email: str):
    return db.query(Usuario).filter(Usuario.email == email).first()


def authenticate_user(db: Session, email: str, password: str):
    """Login com e-mail e senha. Também usado na reautenticação do administrador."""
    user = get_user(db, email=email)
    if not user or not user.hashed_password or not verify_password(password, user.hashed_password):
        return None
    return user


def papel_principal(papeis) -> Optional[Papel]:
    # Papel principal: maior prioridade (admin > secretaria > instrutor)
    return next((p for p in PRIORIDADE_PAPEIS if p in papeis), None)


@dataclass
class ContextoSessao:
    """Sessão, papel e perfil do usuário autenticado, montados a cada requisição."""
    usuario: Usuario
    token_jti: Optional[str] = None
    papeis: List[Papel] = field(default_factory=list)
    perfil: Optional[Perfil] = None

    @property
    def papel(self) -> Optional[Papel]:
        return papel_principal(self.papeis)

    @property
    def is_admin(self) -> bool:
        return self.papel == Papel.ADMIN


def montar_contexto(usuario: Usuario, token_jti: Optional[str] = None) -> ContextoSessao:
    papeis = [Papel(p.papel) for p in usuario.papeis]
    return ContextoSessao(usuario=usuario, token_jti=token_jti, papeis=papeis, perfil=usuario.perfil)


# --- DEPENDÊNCIAS DE AUTENTICAÇÃO E AUTORIZAÇÃO ---
def get_contexto_sessao(token: str = Depends(oauth2_scheme), db: Session = Depends(database.get_db)):
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Credenciais inválidas", headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        email: str = payload.get("sub")
        jti: str = payload.get("jti")
        if email is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    if jti and db.get(SessaoRevogada, jti) is not None:
        raise credentials_exception

    user = get_user(db, email=email)
    if user is None:
        raise credentials_exception
    return montar_contexto(user, token_jti=jti)


async def get_contexto_ativo(contexto: ContextoSessao = Depends(get_contexto_sessao)):
    """
    Verifica se o usuário está ativo e tem algum papel. Sem papel, o acesso
    fica pendente de aprovação por um administrador.
    """
    if not contexto.usuario.ativo:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Usuário inativo.")
    if contexto.papel is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Sua conta está pendente de aprovação por um administrador."
        )
    return contexto


def exigir_papeis(*papeis: Papel):
    async def _verificar(contexto: ContextoSessao = Depends(get_contexto_ativo)):
        if not any(p in contexto.papeis for p in papeis):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Acesso restrito a: " + ", ".join(p.rotulo for p in papeis) + "."
            )
        return contexto
    return _verificar


get_admin_user = exigir_papeis(Papel.ADMIN)
get_admin_ou_secretaria = exigir_papeis(Papel.ADMIN, Papel.SECRETARIA)
get_equipe = exigir_papeis(Papel.ADMIN, Papel.SECRETARIA, Papel.INSTRUTOR)
