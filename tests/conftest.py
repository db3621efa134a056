import io
from datetime import date
from decimal import Decimal

import email_validator
import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cfc.auth import create_access_token, get_password_hash
from cfc.database import Base, get_db
from cfc.enums import Papel
from cfc.models.aluno import Aluno
from cfc.models.funcionario import Funcionario
from cfc.models.usuario import PapelUsuario, Perfil, Usuario
from cfc.storage import get_armazenamento
from main import app

# Permite os endereços de teste "@cfc.test" (domínio reservado "test").
email_validator.TEST_ENVIRONMENT = True

SENHA = "senha-forte"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class ArmazenamentoFalso:
    def __init__(self):
        self.enviados = {}

    def upload(self, caminho, conteudo, content_type):
        self.enviados[caminho] = (conteudo.read(), content_type)

    def url_publica(self, caminho):
        return f"https://fotos.cfc.test/{caminho}"


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def armazenamento():
    return ArmazenamentoFalso()


@pytest.fixture
def client(db, armazenamento):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_armazenamento] = lambda: armazenamento
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def criar_usuario(db, email, *papeis, senha=SENHA, ativo=True):
    usuario = Usuario(
        email=email,
        hashed_password=get_password_hash(senha),
        ativo=ativo,
        papeis=[PapelUsuario(papel=p.value) for p in papeis],
        perfil=Perfil(nome_completo=email.split("@")[0].title()),
    )
    db.add(usuario)
    db.commit()
    db.refresh(usuario)
    return usuario


def cabecalho(usuario, senha_admin=None):
    headers = {"Authorization": f"Bearer {create_access_token({'sub': usuario.email})}"}
    if senha_admin is not None:
        headers["X-Senha-Admin"] = senha_admin
    return headers


@pytest.fixture
def admin(db):
    return criar_usuario(db, "admin@cfc.test", Papel.ADMIN)


@pytest.fixture
def secretaria(db):
    return criar_usuario(db, "secretaria@cfc.test", Papel.SECRETARIA)


@pytest.fixture
def instrutor_usuario(db):
    return criar_usuario(db, "instrutor@cfc.test", Papel.INSTRUTOR)


@pytest.fixture
def instrutor(db):
    funcionario = Funcionario(nome_completo="Carlos Instrutor", papel=Papel.INSTRUTOR.value)
    db.add(funcionario)
    db.commit()
    db.refresh(funcionario)
    return funcionario


def criar_aluno(db, nome="Maria Souza", categoria="B", max_aulas_a=0, max_aulas_b=0, **kwargs):
    aluno = Aluno(
        nome_completo=nome,
        categoria=categoria,
        data_matricula=kwargs.pop("data_matricula", date(2026, 1, 15)),
        valor_curso=kwargs.pop("valor_curso", Decimal("1500.00")),
        quantidade_parcelas=kwargs.pop("quantidade_parcelas", 3),
        max_aulas_a=max_aulas_a,
        max_aulas_b=max_aulas_b,
        **kwargs,
    )
    db.add(aluno)
    db.commit()
    db.refresh(aluno)
    return aluno


def imagem_png():
    buffer = io.BytesIO()
    Image.new("RGBA", (40, 60), (200, 30, 30, 255)).save(buffer, format="PNG")
    buffer.seek(0)
    return buffer
