from cfc.enums import StatusAula
from cfc.exceptions import TransicaoInvalida

# Realizada e cancelada são estados finais
TRANSICOES_AULA = {
    StatusAula.AGENDADA: {StatusAula.REALIZADA, StatusAula.CANCELADA, StatusAula.REAGENDADA},
    StatusAula.REAGENDADA: {StatusAula.REALIZADA, StatusAula.CANCELADA, StatusAula.REAGENDADA},
    StatusAula.REALIZADA: set(),
    StatusAula.CANCELADA: set(),
}


def validar_transicao(atual, nova, nova_data=None, nova_hora=None):
    atual, nova = StatusAula(atual), StatusAula(nova)
    if nova not in TRANSICOES_AULA[atual]:
        raise TransicaoInvalida(f"Não é possível alterar uma aula {atual.rotulo.lower()} para {nova.rotulo.lower()}.")
    if nova == StatusAula.REAGENDADA and nova_data is None and nova_hora is None:
        raise TransicaoInvalida("Informe a nova data ou o novo horário para reagendar a aula.")
