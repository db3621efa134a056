# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para a entidade Funcionario.
"""
from datetime import datetime

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from cfc.database import Base


class Funcionario(Base):
    __tablename__ = "funcionarios"

    id = Column(Integer, primary_key=True, index=True)
    usuario_id = Column(Integer, ForeignKey("usuarios.id", ondelete="SET NULL"), nullable=True, unique=True)

    nome_completo = Column(String(150), nullable=False, index=True)
    rg = Column(String(20), nullable=True)
    cpf = Column(String(11), unique=True, index=True, nullable=True)  # apenas dígitos
    data_nascimento = Column(Date, nullable=True)
    telefone = Column(String(11), nullable=True)
    email = Column(String(100), unique=True, index=True, nullable=True)

    endereco_logradouro = Column(String(150), nullable=True)
    endereco_numero = Column(String(20), nullable=True)
    endereco_complemento = Column(String(100), nullable=True)
    endereco_bairro = Column(String(100), nullable=True)
    endereco_cidade = Column(String(100), nullable=True)
    endereco_estado = Column(String(2), nullable=True)
    endereco_cep = Column(String(8), nullable=True)

    papel = Column(String(20), nullable=False, default="instrutor")
    data_contratacao = Column(Date, nullable=True)
    foto_url = Column(String(255), nullable=True)
    ativo = Column(Boolean, default=True, nullable=False)

    criado_em = Column(DateTime, default=datetime.utcnow)
    atualizado_em = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    usuario = relationship("Usuario", back_populates="funcionario")
    aulas = relationship("Aula", back_populates="instrutor")
