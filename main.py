# -*- coding: utf-8 -*-
"""
Arquivo principal da aplicação FastAPI para o sistema de gestão do CFC (autoescola).
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import create_first_user
from cfc.config import settings
from cfc.database import Base, engine
from cfc.exceptions import ErroDominio

# Importação de todos os modelos para o SQLAlchemy registrar as tabelas
from cfc.models import aluno, aula, financeiro, funcionario, parcela, usuario  # noqa: F401

from cfc.routes import (alunos_fastapi, aulas_fastapi, auth_fastapi, dashboard_fastapi,
                        financeiro_fastapi, funcionarios_fastapi, parcelas_fastapi, usuarios_fastapi)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    filename=settings.LOG_FILE,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("Tabelas verificadas/criadas com sucesso.")
    create_first_user.create_first_user()
    yield


env = settings.ENVIRONMENT

docs_url = "/docs" if env != "production" else None
redoc_url = "/redoc" if env != "production" else None

# Inicializa a aplicação FastAPI
app = FastAPI(
    title="API CFC",
    description="API para gestão de autoescola: alunos, aulas, parcelas e financeiro",
    version="1.0.0",
    docs_url=docs_url,   # Será None em produção (desativa /docs)
    redoc_url=redoc_url, # Será None em produção (desativa /redoc)
    openapi_url="/openapi.json" if env != "production" else None,
    lifespan=lifespan,
)

origins = [
    settings.FRONTEND_URL,
    "http://localhost",
    "http://localhost:5173",
    "http://127.0.0.1",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ErroDominio)
async def erro_dominio_handler(request: Request, exc: ErroDominio):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# Montagem dos routers
app.include_router(auth_fastapi.router, prefix="/api/v1/auth")
app.include_router(usuarios_fastapi.router, prefix="/api/v1/usuarios")
app.include_router(funcionarios_fastapi.router, prefix="/api/v1/funcionarios")
app.include_router(alunos_fastapi.router, prefix="/api/v1/alunos")
app.include_router(aulas_fastapi.router, prefix="/api/v1/aulas")
app.include_router(parcelas_fastapi.router, prefix="/api/v1/parcelas")
app.include_router(financeiro_fastapi.router, prefix="/api/v1/financeiro")
app.include_router(dashboard_fastapi.router, prefix="/api/v1/dashboard")


@app.get("/", tags=["Root"])
async def root():
    return {
        "mensagem": "API CFC - Sistema de Gestão de Autoescola",
        "documentacao": "/docs",
        "endpoints": [
            {"auth": "/api/v1/auth"},
            {"usuarios": "/api/v1/usuarios"},
            {"funcionarios": "/api/v1/funcionarios"},
            {"alunos": "/api/v1/alunos"},
            {"aulas": "/api/v1/aulas"},
            {"parcelas": "/api/v1/parcelas"},
            {"financeiro": "/api/v1/financeiro/transacoes"},
            {"dashboard": "/api/v1/dashboard/financeiro"},
        ]
    }
