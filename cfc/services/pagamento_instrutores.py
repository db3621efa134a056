# -*- coding: utf-8 -*-
"""
Relatório de pagamento dos instrutores: aulas realizadas no período, agrupadas
por instrutor.
"""
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from dateutil.relativedelta import relativedelta

from cfc.enums import TipoAula

PERIODOS = ("semana", "quinzena", "mes")


def intervalo_do_periodo(periodo: str, hoje: Optional[date] = None) -> Tuple[date, date]:
    hoje = hoje or date.today()
    if periodo == "mes":
        inicio = hoje.replace(day=1)
        return inicio, inicio + relativedelta(months=1, days=-1)
    if periodo == "quinzena":
        return hoje - timedelta(weeks=2), hoje
    if periodo == "semana":
        # Semana de domingo a sábado
        inicio = hoje - timedelta(days=(hoje.weekday() + 1) % 7)
        return inicio, inicio + timedelta(days=6)
    raise ValueError(f"Período desconhecido: {periodo}")


def agrupar_por_instrutor(aulas: Iterable) -> dict:
    por_instrutor = {}
    for aula in aulas:
        entrada = por_instrutor.setdefault(aula.instrutor_id, {
            "instrutor_id": aula.instrutor_id,
            "nome": aula.instrutor.nome_completo if aula.instrutor else "—",
            "praticas": 0,
            "exames": 0,
            "total": Decimal("0.00"),
            "aulas": [],
        })
        if TipoAula(aula.tipo).is_exame:
            entrada["exames"] += 1
        else:
            entrada["praticas"] += 1
        entrada["total"] += Decimal(aula.valor)
        entrada["aulas"].append({
            "id": aula.id,
            "data": aula.data,
            "aluno": aula.aluno.nome_completo if aula.aluno else None,
            "tipo": aula.tipo,
            "valor": aula.valor,
        })

    instrutores = sorted(por_instrutor.values(), key=lambda i: i["total"], reverse=True)
    return {
        "total_geral": sum((i["total"] for i in instrutores), Decimal("0.00")),
        "total_aulas": sum(i["praticas"] + i["exames"] for i in instrutores),
        "instrutores": instrutores,
    }
