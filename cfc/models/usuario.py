from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from cfc.database import Base


class Usuario(Base):
    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, index=True)
    # E-mail é a chave de login
    email = Column(String(100), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=True)
    ativo = Column(Boolean, default=True, nullable=False)
    criado_em = Column(DateTime, default=datetime.utcnow)

    papeis = relationship("PapelUsuario", back_populates="usuario", cascade="all, delete-orphan")
    perfil = relationship("Perfil", back_populates="usuario", uselist=False, cascade="all, delete-orphan")
    funcionario = relationship("Funcionario", back_populates="usuario", uselist=False)


class PapelUsuario(Base):
    __tablename__ = "papeis_usuario"
    __table_args__ = (UniqueConstraint("usuario_id", "papel", name="uq_papel_usuario"),)

    id = Column(Integer, primary_key=True, index=True)
    usuario_id = Column(Integer, ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False, index=True)
    papel = Column(String(20), nullable=False)  # admin, secretaria, instrutor

    usuario = relationship("Usuario", back_populates="papeis")


class Perfil(Base):
    __tablename__ = "perfis"

    id = Column(Integer, primary_key=True, index=True)
    usuario_id = Column(Integer, ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False, unique=True)
    nome_completo = Column(String(150), nullable=False, default="")
    telefone = Column(String(20), nullable=True)
    avatar_url = Column(String(255), nullable=True)
    atualizado_em = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    usuario = relationship("Usuario", back_populates="perfil")


class SessaoRevogada(Base):
    """Tokens encerrados pelo logout (identificados pelo jti)."""
    __tablename__ = "sessoes_revogadas"

    jti = Column(String(64), primary_key=True)
    revogada_em = Column(DateTime, default=datetime.utcnow)
