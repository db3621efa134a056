from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from cfc.database import Base


class Parcela(Base):
    __tablename__ = "parcelas"

    id = Column(Integer, primary_key=True, index=True)
    aluno_id = Column(Integer, ForeignKey("alunos.id", ondelete="CASCADE"), nullable=False, index=True)
    numero = Column(Integer, nullable=False)
    valor = Column(Numeric(10, 2), nullable=False)
    data_vencimento = Column(Date, nullable=False)
    # Persistido: 'pendente' ou 'paga'. 'atrasada' é calculado na leitura.
    status = Column(String(20), nullable=False, default="pendente")
    data_pagamento = Column(Date, nullable=True)
    forma_pagamento = Column(String(50), nullable=True)
    comprovante_url = Column(String(255), nullable=True)

    criado_em = Column(DateTime, default=datetime.utcnow)
    atualizado_em = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    aluno = relationship("Aluno", back_populates="parcelas")
