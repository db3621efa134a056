# -*- coding: utf-8 -*-
"""
Regras de marcação de aulas: tipos permitidos por categoria, valor da aula e
cota de aulas contratadas por categoria de veículo.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from cfc.enums import CategoriaAluno, GrupoAula, StatusAula, TipoAula
from cfc.exceptions import ErroValidacao
from cfc.models.aula import Aula

VALOR_PRATICA = Decimal("10.00")
VALOR_EXAME = Decimal("20.00")


def grupo_do_tipo(tipo) -> GrupoAula:
    return TipoAula(tipo).grupo


def valor_da_aula(tipo) -> Decimal:
    return VALOR_EXAME if TipoAula(tipo).is_exame else VALOR_PRATICA


def tipos_permitidos(categoria) -> List[TipoAula]:
    """Aulas do grupo A exigem categoria A ou AB; as do grupo B, categoria B ou AB."""
    categoria = CategoriaAluno(categoria)
    if categoria == CategoriaAluno.AB:
        return list(TipoAula)
    grupo = GrupoAula(categoria.value)
    return [t for t in TipoAula if t.grupo == grupo]


def validar_tipo_para_categoria(tipo, categoria):
    tipo = TipoAula(tipo)
    if tipo not in tipos_permitidos(categoria):
        raise ErroValidacao(
            f"Aulas do tipo {tipo.rotulo} não são permitidas para alunos da categoria {CategoriaAluno(categoria).value}."
        )


@dataclass
class SituacaoCota:
    grupo: GrupoAula
    usadas: int
    maximo: int
    excedida: bool

    @property
    def sem_limite(self) -> bool:
        return not self.maximo


def maximo_do_grupo(aluno, grupo: GrupoAula) -> int:
    if grupo == GrupoAula.A:
        return aluno.max_aulas_a or 0
    return aluno.max_aulas_b or 0


def calcular_cota(aulas: Iterable, grupo: GrupoAula, maximo: int, aula_editada=None) -> SituacaoCota:
    """
    Conta as aulas do aluno no mesmo grupo que não foram canceladas.

    A aula em edição, quando pertence ao mesmo grupo e já estava sendo
    contada, não conta contra a própria cota. Cota 0 significa sem limite.
    """
    usadas = sum(
        1 for a in aulas
        if grupo_do_tipo(a.tipo) == grupo and a.status != StatusAula.CANCELADA.value
    )
    if (
        aula_editada is not None
        and grupo_do_tipo(aula_editada.tipo) == grupo
        and aula_editada.status != StatusAula.CANCELADA.value
    ):
        usadas -= 1

    excedida = bool(maximo) and usadas >= maximo
    return SituacaoCota(grupo=grupo, usadas=usadas, maximo=maximo, excedida=excedida)


def verificar_cota(db: Session, aluno, tipo, aula_editada: Optional[Aula] = None) -> SituacaoCota:
    grupo = grupo_do_tipo(tipo)
    maximo = maximo_do_grupo(aluno, grupo)
    if not maximo:
        return SituacaoCota(grupo=grupo, usadas=0, maximo=0, excedida=False)

    aulas = db.query(Aula.id, Aula.tipo, Aula.status).filter(Aula.aluno_id == aluno.id).all()
    return calcular_cota(aulas, grupo, maximo, aula_editada=aula_editada)
