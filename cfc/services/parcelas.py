# -*- coding: utf-8 -*-
"""
Geração do plano de parcelas do curso e status de exibição das parcelas.
"""
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from cfc.enums import StatusParcela
from cfc.exceptions import ErroValidacao

CENTAVOS = Decimal("0.01")


def arredondar(valor) -> Decimal:
    return Decimal(valor).quantize(CENTAVOS, rounding=ROUND_HALF_UP)


@dataclass
class RascunhoParcela:
    numero: int
    valor: Decimal
    data_vencimento: date
    status: StatusParcela = StatusParcela.PENDENTE


def gerar_plano_parcelas(valor_curso, quantidade_parcelas: int, data_matricula: date) -> List[RascunhoParcela]:
    """
    Divide o valor do curso em parcelas mensais.

    As parcelas 1..N-1 recebem o valor arredondado para centavos e a última
    absorve a diferença, de modo que a soma seja exatamente ``valor_curso``.
    O primeiro vencimento é um mês após a matrícula.
    """
    valor_curso = Decimal(str(valor_curso))
    if valor_curso <= 0:
        raise ErroValidacao("Informe o valor do curso")
    if quantidade_parcelas < 1:
        raise ErroValidacao("Mínimo 1 parcela")

    valor_parcela = arredondar(valor_curso / quantidade_parcelas)
    ultima = arredondar(valor_curso - valor_parcela * (quantidade_parcelas - 1))
    if valor_parcela <= 0 or ultima <= 0:
        raise ErroValidacao(f"Valor do curso insuficiente para {quantidade_parcelas} parcelas")

    plano = []
    for numero in range(1, quantidade_parcelas + 1):
        plano.append(RascunhoParcela(
            numero=numero,
            valor=ultima if numero == quantidade_parcelas else valor_parcela,
            data_vencimento=data_matricula + relativedelta(months=numero),
        ))
    return plano


def status_exibicao(status: str, data_vencimento: date, hoje: Optional[date] = None) -> StatusParcela:
    """Parcela pendente com vencimento anterior a hoje é exibida como atrasada."""
    hoje = hoje or date.today()
    status = StatusParcela(status)
    if status == StatusParcela.PENDENTE and data_vencimento < hoje:
        return StatusParcela.ATRASADA
    return status
