# -*- coding: utf-8 -*-
"""
Validação e máscaras de campos brasileiros (CPF, telefone, CEP).
"""
import re


def somente_digitos(valor):
    if valor is None:
        return None
    return re.sub(r"[^0-9]", "", valor)


def validar_cpf(cpf: str) -> bool:
    """Confere os dois dígitos verificadores do CPF."""
    digitos = somente_digitos(cpf) or ""
    if len(digitos) != 11 or digitos == digitos[0] * 11:
        return False

    for tamanho in (9, 10):
        soma = sum(int(digitos[i]) * (tamanho + 1 - i) for i in range(tamanho))
        resto = (soma * 10) % 11
        if resto == 10:
            resto = 0
        if resto != int(digitos[tamanho]):
            return False
    return True


def formatar_cpf(cpf):
    digitos = somente_digitos(cpf)
    if not digitos:
        return None
    if len(digitos) != 11:
        return digitos
    return f"{digitos[:3]}.{digitos[3:6]}.{digitos[6:9]}-{digitos[9:]}"


def formatar_telefone(telefone):
    digitos = somente_digitos(telefone)
    if not digitos:
        return None
    if len(digitos) == 11:
        return f"({digitos[:2]}) {digitos[2:7]}-{digitos[7:]}"
    if len(digitos) == 10:
        return f"({digitos[:2]}) {digitos[2:6]}-{digitos[6:]}"
    return digitos


def formatar_cep(cep):
    digitos = somente_digitos(cep)
    if not digitos:
        return None
    if len(digitos) != 8:
        return digitos
    return f"{digitos[:5]}-{digitos[5:]}"
