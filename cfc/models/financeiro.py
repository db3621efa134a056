# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para as movimentações avulsas do caixa (receitas e despesas).
"""
from datetime import date, datetime

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, String

from cfc.database import Base


class Financeiro(Base):
    __tablename__ = "financeiro"

    id = Column(Integer, primary_key=True, index=True)
    tipo = Column(String(20), nullable=False)  # 'receita' ou 'despesa'
    categoria = Column(String(50), nullable=False)
    valor = Column(Numeric(10, 2), nullable=False)
    descricao = Column(String(255), nullable=True)
    data = Column(Date, nullable=False, default=date.today, index=True)
    forma_pagamento = Column(String(50), nullable=True)

    criado_em = Column(DateTime, default=datetime.utcnow)
    atualizado_em = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
