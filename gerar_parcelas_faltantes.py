import argparse
import logging

from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError

from cfc.database import SessionLocal
from cfc.exceptions import ErroValidacao
from cfc.models.aluno import Aluno
from cfc.models.parcela import Parcela
from cfc.services.parcelas import gerar_plano_parcelas

# --- Importações dos demais modelos ---
from cfc.models import aula, financeiro, funcionario, usuario  # noqa: F401
# ------------------------------------------------------

logger = logging.getLogger(__name__)


def alunos_sem_parcelas(db, aluno_id=None):
    query = db.query(Aluno).outerjoin(Parcela).filter(Aluno.ativo == True, Parcela.id.is_(None))
    if aluno_id:
        query = query.filter(Aluno.id == aluno_id)
    return query.order_by(Aluno.id).all()


def gerar_parcelas_faltantes(db, aluno_id=None, dry_run=False) -> int:
    """
    Gera o plano de parcelas dos alunos ativos que ficaram sem nenhuma parcela.

    O plano parte da data de matrícula do aluno, como na matrícula pela API.
    Retorna a quantidade de parcelas geradas (ou que seriam geradas em dry-run).
    """
    alunos = alunos_sem_parcelas(db, aluno_id)
    logger.info(f"Encontrados {len(alunos)} aluno(s) sem parcelas.")

    parcelas_criadas = 0
    try:
        for aluno in alunos:
            try:
                plano = gerar_plano_parcelas(aluno.valor_curso or 0, aluno.quantidade_parcelas or 1, aluno.data_matricula)
            except ErroValidacao as e:
                logger.warning(f"Aluno ID {aluno.id}: {e}. Pulando.")
                continue

            for p in plano:
                if not dry_run:
                    db.add(Parcela(
                        aluno_id=aluno.id,
                        numero=p.numero,
                        valor=p.valor,
                        data_vencimento=p.data_vencimento,
                        status=p.status.value,
                    ))
                parcelas_criadas += 1
            logger.info(f"-> {'SIMULADO' if dry_run else 'GERADO'}: {aluno.nome_completo} | {len(plano)} parcela(s)")

        if dry_run:
            db.rollback()
        else:
            db.commit()
    except SQLAlchemyError as e:
        logger.error(f"Erro durante a geração de parcelas: {e}")
        db.rollback()
        raise

    return parcelas_criadas


def main():
    parser = argparse.ArgumentParser(description='Gera as parcelas de alunos matriculados sem plano de pagamento')
    parser.add_argument('--aluno-id', type=int, help='Processa apenas este aluno')
    parser.add_argument('--dry-run', action='store_true', help='Mostra o que seria gerado sem gravar')
    args = parser.parse_args()

    load_dotenv()
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    db = SessionLocal()
    try:
        total = gerar_parcelas_faltantes(db, aluno_id=args.aluno_id, dry_run=args.dry_run)
        logger.info(f"SUCESSO: {total} parcela(s) {'simuladas' if args.dry_run else 'geradas'}.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
