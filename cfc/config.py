# -*- coding: utf-8 -*-
"""
Configurações da aplicação lidas das variáveis de ambiente (.env).
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")

    DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./cfc.db")

    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-production")
    ALGORITHM = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 8))

    FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:5173")

    # Armazenamento de fotos (R2/S3)
    S3_ENDPOINT_URL = os.environ.get("S3_ENDPOINT_URL")
    AWS_ACCESS_KEY_ID = os.environ.get("AWS_ACCESS_KEY_ID")
    AWS_SECRET_ACCESS_KEY = os.environ.get("AWS_SECRET_ACCESS_KEY")
    S3_BUCKET_NAME = os.environ.get("S3_BUCKET_NAME")
    PUBLIC_BUCKET_URL = os.environ.get("PUBLIC_BUCKET_URL")
    MAX_FOTO_BYTES = 5 * 1024 * 1024

    # Primeiro administrador criado na inicialização
    ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", "admin@cfc.local")
    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", "admin")
    ADMIN_NOME = os.environ.get("ADMIN_NOME", "Administrador do Sistema")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FILE = os.environ.get("LOG_FILE")


settings = Settings()
