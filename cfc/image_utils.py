import io
import logging

from PIL import Image, ImageOps, UnidentifiedImageError

logger = logging.getLogger(__name__)

# Foto de cadastro (aluno ou funcionário), proporção livre até 500x500
TAMANHO_MAXIMO = (500, 500)


def processar_foto(arquivo, tamanho_maximo=TAMANHO_MAXIMO, qualidade=85):
    """
    Normaliza a foto de cadastro para um JPEG reduzido.

    Retorna ``(buffer, content_type)`` com o buffer já posicionado no início,
    ou ``(None, None)`` se o arquivo não for uma imagem.
    """
    try:
        img = Image.open(arquivo)
        # Fotos de celular chegam giradas: aplica a orientação do EXIF
        img = ImageOps.exif_transpose(img)

        if img.mode != 'RGB':
            img = img.convert('RGB')
        img.thumbnail(tamanho_maximo, Image.Resampling.LANCZOS)

        buffer = io.BytesIO()
        img.save(buffer, format='JPEG', quality=qualidade, optimize=True)
        buffer.seek(0)
        return buffer, 'image/jpeg'

    except (UnidentifiedImageError, OSError) as e:
        logger.warning(f"Arquivo de foto recusado: {e}")
        return None, None
