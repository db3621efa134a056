from datetime import date, datetime

from sqlalchemy import Boolean, Column, Date, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from cfc.database import Base


class Aluno(Base):
    __tablename__ = "alunos"

    id = Column(Integer, primary_key=True, index=True)

    nome_completo = Column(String(150), nullable=False, index=True)
    rg = Column(String(20), nullable=True)
    cpf = Column(String(11), unique=True, index=True, nullable=True)
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

    categoria = Column(String(2), nullable=False, default="B")  # A, B ou AB
    data_matricula = Column(Date, nullable=False, default=date.today)
    status = Column(String(20), nullable=False, default="ativo")
    valor_curso = Column(Numeric(10, 2), nullable=False)
    quantidade_parcelas = Column(Integer, nullable=False, default=1)
    # 0 = sem limite
    max_aulas_a = Column(Integer, nullable=False, default=0)
    max_aulas_b = Column(Integer, nullable=False, default=0)
    observacoes = Column(Text, nullable=True)
    foto_url = Column(String(255), nullable=True)
    ativo = Column(Boolean, default=True, nullable=False)

    criado_em = Column(DateTime, default=datetime.utcnow)
    atualizado_em = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    parcelas = relationship(
        "Parcela", back_populates="aluno", cascade="all, delete-orphan", order_by="Parcela.numero"
    )
    aulas = relationship("Aula", back_populates="aluno", cascade="all, delete-orphan")
