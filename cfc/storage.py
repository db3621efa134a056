# -*- coding: utf-8 -*-
"""
Armazenamento das fotos de alunos e funcionários no bucket S3/R2.
"""
import logging
import os
from datetime import datetime

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import HTTPException, UploadFile, status

from cfc.config import settings
from cfc.image_utils import processar_foto

logger = logging.getLogger(__name__)


class ArmazenamentoFotos:
    """Upload por caminho e URL pública das fotos."""

    def __init__(self, endpoint_url, access_key_id, secret_access_key, bucket_name, public_url):
        if not all([endpoint_url, access_key_id, secret_access_key, bucket_name, public_url]):
            raise HTTPException(status_code=500, detail="Configuração de armazenamento na nuvem incompleta.")
        self.bucket_name = bucket_name
        self.public_url = public_url
        self.client = boto3.client(
            's3',
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            region_name="auto",
        )

    def upload(self, caminho: str, conteudo, content_type: str) -> None:
        self.client.upload_fileobj(conteudo, self.bucket_name, caminho, ExtraArgs={'ContentType': content_type})

    def url_publica(self, caminho: str) -> str:
        return f"{self.public_url.rstrip('/')}/{caminho}"


def get_armazenamento():
    return ArmazenamentoFotos(
        settings.S3_ENDPOINT_URL,
        settings.AWS_ACCESS_KEY_ID,
        settings.AWS_SECRET_ACCESS_KEY,
        settings.S3_BUCKET_NAME,
        settings.PUBLIC_BUCKET_URL,
    )


def enviar_foto(armazenamento, pasta: str, registro_id: int, foto: UploadFile) -> str:
    """
    Valida, converte para JPEG e envia a foto. Retorna a URL pública.
    """
    conteudo = foto.file.read()
    if len(conteudo) > settings.MAX_FOTO_BYTES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="A foto deve ter no máximo 5MB")
    foto.file.seek(0)

    foto_jpeg, content_type = processar_foto(foto.file)
    if foto_jpeg is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="O arquivo enviado não é uma imagem válida.")

    base_filename, _ = os.path.splitext(foto.filename or "foto")
    caminho = f"{pasta}/{registro_id}_{int(datetime.utcnow().timestamp())}_{base_filename.replace(' ', '_')}.jpg"
    try:
        armazenamento.upload(caminho, foto_jpeg, content_type)
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Erro no upload para o bucket ({pasta}): {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Não foi possível enviar a foto.")
    return armazenamento.url_publica(caminho)
