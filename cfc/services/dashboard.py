# -*- coding: utf-8 -*-
"""
Agregação dos números do painel financeiro.

Todas as parcelas e movimentações são carregadas e reduzidas em memória a cada
requisição; o volume de uma autoescola não justifica agregação incremental.
"""
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from dateutil.relativedelta import relativedelta

from cfc.enums import StatusParcela, TipoTransacao

MESES_ABREV = ("jan", "fev", "mar", "abr", "mai", "jun", "jul", "ago", "set", "out", "nov", "dez")

ZERO = Decimal("0.00")


def rotulo_mes(inicio: date) -> str:
    return f"{MESES_ABREV[inicio.month - 1]}/{inicio.strftime('%y')}"


def _soma(valores) -> Decimal:
    return sum((Decimal(v) for v in valores), ZERO)


def _parcelas_pagas_entre(parcelas, inicio: date, fim: Optional[date] = None):
    for p in parcelas:
        if p.status != StatusParcela.PAGA.value or not p.data_pagamento:
            continue
        if p.data_pagamento < inicio or (fim is not None and p.data_pagamento > fim):
            continue
        yield p.valor


def _transacoes_entre(transacoes, tipo: TipoTransacao, inicio: date, fim: Optional[date] = None):
    for t in transacoes:
        if t.tipo != tipo.value:
            continue
        if t.data < inicio or (fim is not None and t.data > fim):
            continue
        yield t


def serie_mensal(parcelas: List, transacoes: List, hoje: date, meses: int = 6) -> List[dict]:
    """Receitas (parcelas pagas + receitas avulsas) e despesas dos últimos meses, do mais antigo ao atual."""
    primeiro_do_mes = hoje.replace(day=1)
    serie = []
    for i in range(meses - 1, -1, -1):
        inicio = primeiro_do_mes - relativedelta(months=i)
        fim = inicio + relativedelta(months=1, days=-1)
        receitas = _soma(_parcelas_pagas_entre(parcelas, inicio, fim)) + _soma(
            t.valor for t in _transacoes_entre(transacoes, TipoTransacao.RECEITA, inicio, fim)
        )
        despesas = _soma(t.valor for t in _transacoes_entre(transacoes, TipoTransacao.DESPESA, inicio, fim))
        serie.append({"rotulo": rotulo_mes(inicio), "receitas": receitas, "despesas": despesas})
    return serie


def resumo_financeiro(parcelas: Iterable, transacoes: Iterable, hoje: Optional[date] = None) -> dict:
    hoje = hoje or date.today()
    parcelas = list(parcelas)
    transacoes = list(transacoes)
    inicio_mes = hoje.replace(day=1)

    pagas_mes = _soma(_parcelas_pagas_entre(parcelas, inicio_mes))
    receitas_mes = _soma(t.valor for t in _transacoes_entre(transacoes, TipoTransacao.RECEITA, inicio_mes))
    despesas_mes_lista = list(_transacoes_entre(transacoes, TipoTransacao.DESPESA, inicio_mes))
    despesas_mes = _soma(t.valor for t in despesas_mes_lista)

    pendentes = [p for p in parcelas if p.status == StatusParcela.PENDENTE.value]
    pendente = _soma(p.valor for p in pendentes)
    atrasado = _soma(p.valor for p in pendentes if p.data_vencimento < hoje)

    por_categoria = defaultdict(lambda: ZERO)
    for t in despesas_mes_lista:
        por_categoria[t.categoria] += Decimal(t.valor)

    total_receitas = pagas_mes + receitas_mes
    return {
        "receitas_mes": total_receitas,
        "despesas_mes": despesas_mes,
        "saldo": total_receitas - despesas_mes,
        "pendente": pendente,
        "atrasado": atrasado,
        "serie_mensal": serie_mensal(parcelas, transacoes, hoje),
        "despesas_por_categoria": [
            {"categoria": categoria, "valor": valor} for categoria, valor in por_categoria.items()
        ],
    }
