import logging

from sqlalchemy.exc import SQLAlchemyError

from cfc.auth import get_password_hash
from cfc.config import settings
from cfc.database import SessionLocal
from cfc.enums import Papel
from cfc.models.usuario import PapelUsuario, Perfil, Usuario

# Importação dos outros modelos para garantir que o SQLAlchemy registre tudo
from cfc.models import aluno, aula, financeiro, funcionario, parcela  # noqa: F401

logger = logging.getLogger(__name__)


def create_first_user(session_factory=SessionLocal):
    """Cria o administrador inicial a partir de ADMIN_EMAIL / ADMIN_PASSWORD, se ainda não existir."""
    db = session_factory()

    try:
        user = db.query(Usuario).filter(Usuario.email == settings.ADMIN_EMAIL).first()

        if not user:
            logger.info("Criando primeiro usuário administrador...")
            db_user = Usuario(
                email=settings.ADMIN_EMAIL,
                hashed_password=get_password_hash(settings.ADMIN_PASSWORD),
                papeis=[PapelUsuario(papel=Papel.ADMIN.value)],
                perfil=Perfil(nome_completo=settings.ADMIN_NOME),
            )
            db.add(db_user)
            db.commit()
            logger.info(f"Administrador {settings.ADMIN_EMAIL} criado com sucesso.")
        else:
            logger.info(f"Usuário administrador '{settings.ADMIN_EMAIL}' já existe.")

    except SQLAlchemyError as e:
        logger.error(f"Erro ao criar usuário: {e}")
        db.rollback()
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    create_first_user()
