from datetime import date, datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text, Time
from sqlalchemy.orm import relationship

from cfc.database import Base


class Aula(Base):
    __tablename__ = "aulas"

    id = Column(Integer, primary_key=True, index=True)
    aluno_id = Column(Integer, ForeignKey("alunos.id", ondelete="CASCADE"), nullable=False, index=True)
    instrutor_id = Column(Integer, ForeignKey("funcionarios.id"), nullable=False, index=True)

    data = Column(Date, nullable=False, default=date.today, index=True)
    hora_inicio = Column(Time, nullable=False)
    duracao_minutos = Column(Integer, nullable=False, default=50)
    tipo = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default="agendada")
    valor = Column(Numeric(10, 2), nullable=False)
    observacoes = Column(Text, nullable=True)

    criado_em = Column(DateTime, default=datetime.utcnow)
    atualizado_em = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    aluno = relationship("Aluno", back_populates="aulas")
    instrutor = relationship("Funcionario", back_populates="aulas")
