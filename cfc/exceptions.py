# -*- coding: utf-8 -*-
"""
Exceções das regras de negócio.

Cada exceção carrega o status HTTP com que é devolvida; o handler registrado
em ``main.py`` faz a conversão para JSON.
"""
from fastapi import status


class ErroDominio(Exception):
    """Base das violações de regra de negócio."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, mensagem: str):
        super().__init__(mensagem)
        self.mensagem = mensagem

    @property
    def detail(self):
        return self.mensagem


class ErroValidacao(ErroDominio):
    """Dados de entrada inválidos."""


class TransicaoInvalida(ErroDominio):
    """Mudança de status não permitida."""


class AcessoNegado(ErroDominio):
    status_code = status.HTTP_403_FORBIDDEN


class SenhaIncorreta(ErroDominio):
    status_code = status.HTTP_401_UNAUTHORIZED


class RecursoNaoEncontrado(ErroDominio):
    status_code = status.HTTP_404_NOT_FOUND


class CotaExcedida(ErroDominio):
    """A marcação ultrapassa a cota contratada e precisa de confirmação do administrador."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, grupo: str, usadas: int, maximo: int):
        super().__init__(
            f"O aluno já utilizou {usadas} de {maximo} aulas da categoria {grupo}. "
            "Confirme com a senha do administrador para continuar."
        )
        self.grupo = grupo
        self.usadas = usadas
        self.maximo = maximo

    @property
    def detail(self):
        return {
            "codigo": "cota_excedida",
            "mensagem": self.mensagem,
            "grupo": self.grupo,
            "usadas": self.usadas,
            "maximo": self.maximo,
        }
