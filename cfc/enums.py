# -*- coding: utf-8 -*-
"""
Enumerações do domínio e seus rótulos de exibição.

Os rótulos são resolvidos com ``match`` exaustivo terminando em ``assert_never``:
ao incluir um novo membro, o verificador de tipos aponta o rótulo que falta.
"""
from enum import Enum
from typing import assert_never


class Papel(str, Enum):
    ADMIN = "admin"
    SECRETARIA = "secretaria"
    INSTRUTOR = "instrutor"

    @property
    def rotulo(self) -> str:
        match self:
            case Papel.ADMIN:
                return "Administrador"
            case Papel.SECRETARIA:
                return "Secretaria"
            case Papel.INSTRUTOR:
                return "Instrutor"
            case _:
                assert_never(self)


# Papel principal de quem tem mais de um: admin > secretaria > instrutor
PRIORIDADE_PAPEIS = (Papel.ADMIN, Papel.SECRETARIA, Papel.INSTRUTOR)


class CategoriaAluno(str, Enum):
    A = "A"
    B = "B"
    AB = "AB"

    @property
    def rotulo(self) -> str:
        match self:
            case CategoriaAluno.A:
                return "A (Moto)"
            case CategoriaAluno.B:
                return "B (Carro)"
            case CategoriaAluno.AB:
                return "AB (Moto e Carro)"
            case _:
                assert_never(self)


class StatusAluno(str, Enum):
    ATIVO = "ativo"
    EM_FORMACAO = "em_formacao"
    FORMADO = "formado"
    DESISTENTE = "desistente"

    @property
    def rotulo(self) -> str:
        match self:
            case StatusAluno.ATIVO:
                return "Ativo"
            case StatusAluno.EM_FORMACAO:
                return "Em Formação"
            case StatusAluno.FORMADO:
                return "Formado"
            case StatusAluno.DESISTENTE:
                return "Desistente"
            case _:
                assert_never(self)


class GrupoAula(str, Enum):
    A = "A"
    B = "B"


class TipoAula(str, Enum):
    PRATICA_A = "pratica_a"
    PRATICA_B = "pratica_b"
    EXAME_A = "exame_a"
    EXAME_B = "exame_b"

    @property
    def rotulo(self) -> str:
        match self:
            case TipoAula.PRATICA_A:
                return "Prática A"
            case TipoAula.PRATICA_B:
                return "Prática B"
            case TipoAula.EXAME_A:
                return "Exame A"
            case TipoAula.EXAME_B:
                return "Exame B"
            case _:
                assert_never(self)

    @property
    def grupo(self) -> GrupoAula:
        # O grupo vem do sufixo do tipo (_a / _b)
        return GrupoAula.A if self.value.endswith("_a") else GrupoAula.B

    @property
    def is_exame(self) -> bool:
        return self.value.startswith("exame_")


class StatusAula(str, Enum):
    AGENDADA = "agendada"
    REALIZADA = "realizada"
    CANCELADA = "cancelada"
    REAGENDADA = "reagendada"

    @property
    def rotulo(self) -> str:
        match self:
            case StatusAula.AGENDADA:
                return "Agendada"
            case StatusAula.REALIZADA:
                return "Realizada"
            case StatusAula.CANCELADA:
                return "Cancelada"
            case StatusAula.REAGENDADA:
                return "Reagendada"
            case _:
                assert_never(self)


class StatusParcela(str, Enum):
    PENDENTE = "pendente"
    PAGA = "paga"
    # Nunca é gravado: derivado na leitura quando pendente e vencida
    ATRASADA = "atrasada"

    @property
    def rotulo(self) -> str:
        match self:
            case StatusParcela.PENDENTE:
                return "Pendente"
            case StatusParcela.PAGA:
                return "Paga"
            case StatusParcela.ATRASADA:
                return "Atrasada"
            case _:
                assert_never(self)


class TipoTransacao(str, Enum):
    RECEITA = "receita"
    DESPESA = "despesa"

    @property
    def rotulo(self) -> str:
        match self:
            case TipoTransacao.RECEITA:
                return "Receita"
            case TipoTransacao.DESPESA:
                return "Despesa"
            case _:
                assert_never(self)


FORMAS_PAGAMENTO = ("Dinheiro", "PIX", "Cartão de Crédito", "Cartão de Débito", "Boleto", "Transferência")

CATEGORIAS_RECEITA = ("Mensalidade", "Matrícula", "Taxa de exame", "Outros")
CATEGORIAS_DESPESA = ("Aluguel", "Salários", "Combustível", "Manutenção", "Marketing", "Material", "Impostos", "Outros")


def categorias_do_tipo(tipo: TipoTransacao) -> tuple:
    match tipo:
        case TipoTransacao.RECEITA:
            return CATEGORIAS_RECEITA
        case TipoTransacao.DESPESA:
            return CATEGORIAS_DESPESA
        case _:
            assert_never(tipo)
