from datetime import date, timedelta
from typing import List, Tuple

from dateutil.relativedelta import relativedelta


def dias_da_grade(modo: str, referencia: date) -> Tuple[date, date, List[date]]:
    """
    Dias exibidos na agenda, sempre começando na segunda-feira.

    No modo mês a grade é completada até a segunda anterior ao dia 1 e até o
    domingo posterior ao último dia.
    """
    if modo == "semana":
        inicio = referencia - timedelta(days=referencia.weekday())
        fim = inicio + timedelta(days=6)
        return inicio, fim, [inicio + timedelta(days=i) for i in range(7)]
    if modo == "mes":
        inicio = referencia.replace(day=1)
        fim = inicio + relativedelta(months=1, days=-1)
        primeiro = inicio - timedelta(days=inicio.weekday())
        ultimo = fim + timedelta(days=6 - fim.weekday())
        total = (ultimo - primeiro).days + 1
        return inicio, fim, [primeiro + timedelta(days=i) for i in range(total)]
    raise ValueError(f"Modo de agenda desconhecido: {modo}")
