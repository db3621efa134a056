# cfc/routes/auth_fastapi.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from cfc import auth, database
from cfc.models.usuario import SessaoRevogada
from cfc.reautenticacao import reautenticar_admin
from cfc.routes.usuarios_fastapi import usuario_para_leitura
from cfc.schemas.usuario import ConfirmacaoSenha, ContextoSessaoRead, Token

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Authentication"]
)


def contexto_para_leitura(contexto: auth.ContextoSessao) -> dict:
    return {
        "usuario": usuario_para_leitura(contexto.usuario),
        "papel": contexto.papel,
        "papeis": contexto.papeis,
        "perfil": contexto.perfil,
    }


@router.post("/token", response_model=Token)
def login_for_access_token(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(database.get_db)):
    user = auth.authenticate_user(db, form_data.username, form_data.password)  # Usamos email como username
    if not user:
        logger.warning(f"Tentativa de login recusada para {form_data.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Email ou senha incorretos",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = auth.create_access_token(data={"sub": user.email})
    contexto = auth.montar_contexto(user)
    return {"access_token": access_token, "token_type": "bearer", "contexto": contexto_para_leitura(contexto)}


@router.get("/me", response_model=ContextoSessaoRead)
async def read_users_me(contexto: auth.ContextoSessao = Depends(auth.get_contexto_sessao)):
    """Usuário, papéis, papel principal e perfil da sessão atual."""
    return contexto_para_leitura(contexto)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    contexto: auth.ContextoSessao = Depends(auth.get_contexto_sessao),
    db: Session = Depends(database.get_db),
):
    if contexto.token_jti and db.get(SessaoRevogada, contexto.token_jti) is None:
        db.add(SessaoRevogada(jti=contexto.token_jti))
        db.commit()
    return None


@router.post("/confirmar-senha", status_code=status.HTTP_204_NO_CONTENT)
def confirmar_senha(
    confirmacao: ConfirmacaoSenha,
    contexto: auth.ContextoSessao = Depends(auth.get_contexto_ativo),
    db: Session = Depends(database.get_db),
):
    """Confere a senha do administrador sem executar nenhuma ação."""
    reautenticar_admin(db, contexto, confirmacao.password)
    return None


@router.get("/pode-confirmar")
async def pode_confirmar(contexto: auth.ContextoSessao = Depends(auth.get_contexto_ativo)):
    return {"pode_confirmar": contexto.is_admin}
