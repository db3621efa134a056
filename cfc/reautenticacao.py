# -*- coding: utf-8 -*-
"""
Confirmação de senha do administrador antes de ações destrutivas ou de
liberação de cota.

A confirmação reaproveita a identidade da sessão atual: não concede nenhum
privilégio que a sessão já não tenha.
"""
import logging
from typing import Callable, Optional, TypeVar

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from cfc import auth, database
from cfc.auth import ContextoSessao
from cfc.exceptions import AcessoNegado, ErroValidacao, SenhaIncorreta

logger = logging.getLogger(__name__)

T = TypeVar("T")

HEADER_SENHA_ADMIN = "X-Senha-Admin"


def exigir_admin(contexto: ContextoSessao):
    # Sem papel de admin a senha nem é solicitada
    if not contexto.is_admin:
        raise AcessoNegado("Apenas administradores podem realizar esta ação.")


def reautenticar_admin(db: Session, contexto: ContextoSessao, senha: Optional[str]):
    exigir_admin(contexto)
    if not senha or not senha.strip():
        raise ErroValidacao("Digite sua senha para confirmar.")
    if auth.authenticate_user(db, contexto.usuario.email, senha) is None:
        logger.warning("Confirmação de senha recusada para %s", contexto.usuario.email)
        raise SenhaIncorreta("Senha incorreta. Tente novamente.")


def executar_com_confirmacao(db: Session, contexto: ContextoSessao, senha: Optional[str], acao: Callable[[], T]) -> T:
    """Executa ``acao`` uma única vez, somente após a senha do administrador ser confirmada."""
    reautenticar_admin(db, contexto, senha)
    return acao()


def confirmar_admin(
    contexto: ContextoSessao = Depends(auth.get_contexto_ativo),
    senha_admin: Optional[str] = Header(None, alias=HEADER_SENHA_ADMIN),
    db: Session = Depends(database.get_db),
) -> ContextoSessao:
    """Dependência das rotas protegidas: a ação só roda depois da confirmação."""
    reautenticar_admin(db, contexto, senha_admin)
    return contexto
