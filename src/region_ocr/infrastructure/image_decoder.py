"""
Image Decoder для домена Region OCR.

Загрузка изображения из локального файла или URL:
- локальный файл читается целиком и превращается в data URI
- URL загружается анонимно (без cookies и авторизации)
- байты декодируются в numpy array (BGR) через OpenCV

Результат - LoadedImage: bitmap и метрики создаются вместе.
"""

import base64
import binascii
import io
import mimetypes
import uuid
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import unquote_to_bytes

import cv2
import httpx
import numpy as np
from loguru import logger
from PIL import Image, UnidentifiedImageError

from config.settings import (
    DISPLAY_MAX_WIDTH, DISPLAY_MAX_HEIGHT,
    IMAGE_FETCH_TIMEOUT, URL_LOAD_ERROR_MESSAGE
)
from contracts.region_dto import ImageMetrics, LoadedImage
from ..domain.interfaces import IImageDecoder
from ..domain.exceptions import (
    ImageNotFoundError,
    ImageDecodingError,
    ImageLoadError,
    ImageUnavailableError,
)
from ..geometry.display import fit_display_size


DEFAULT_MIME_TYPE = "application/octet-stream"


def to_data_uri(raw_bytes: bytes, mime_type: str) -> str:
    """Кодирует байты в data URI (base64)."""
    encoded = base64.b64encode(raw_bytes).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def parse_data_uri(data_uri: str) -> Tuple[str, bytes]:
    """
    Разбирает data URI.

    Returns:
        (mime_type, raw_bytes)

    Raises:
        ValueError: если строка не является корректным data URI
    """
    if not data_uri.startswith("data:"):
        raise ValueError("Not a data URI")

    header, sep, data = data_uri[5:].partition(",")
    if not sep:
        raise ValueError("Malformed data URI: missing ','")

    params = header.split(";")
    mime_type = params[0] or "text/plain"

    if "base64" in params[1:]:
        try:
            return mime_type, base64.b64decode(data, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Malformed base64 data: {e}")

    return mime_type, unquote_to_bytes(data)


def sniff_mime_type(raw_bytes: bytes, filename: Optional[str] = None) -> str:
    """Определяет MIME тип по содержимому (Pillow), затем по имени файла."""
    try:
        with Image.open(io.BytesIO(raw_bytes)) as pil_img:
            mime_type = Image.MIME.get(pil_img.format or "")
    except (UnidentifiedImageError, OSError):
        mime_type = None

    if not mime_type and filename:
        mime_type, _ = mimetypes.guess_type(filename)

    return mime_type or DEFAULT_MIME_TYPE


class ImageDecoder(IImageDecoder):
    """
    Декодер изображений.

    ЦКП: LoadedImage (bitmap + ImageMetrics + исходный source).
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        max_display_width: int = DISPLAY_MAX_WIDTH,
        max_display_height: int = DISPLAY_MAX_HEIGHT,
        timeout: Optional[float] = IMAGE_FETCH_TIMEOUT
    ):
        """
        Args:
            http_client: Общий httpx клиент (опционально, иначе создаётся на запрос)
            max_display_width: Ширина рамки отображения
            max_display_height: Высота рамки отображения
            timeout: Таймаут загрузки по URL (None = без таймаута)
        """
        self.http_client = http_client
        self.max_display_width = max_display_width
        self.max_display_height = max_display_height
        self.timeout = timeout

    async def load_file(self, image_path: Path) -> LoadedImage:
        image_path = Path(image_path)

        if not image_path.exists():
            raise ImageNotFoundError(
                message=f"Image not found: {image_path}",
                component="ImageDecoder"
            )

        with open(image_path, "rb") as f:
            raw_bytes = f.read()

        logger.debug(f"[ImageDecoder] Файл прочитан: {image_path.name}, {len(raw_bytes)} байт")

        return await self.load_bytes(raw_bytes, filename=image_path.name)

    async def load_bytes(self, raw_bytes: bytes, filename: Optional[str] = None) -> LoadedImage:
        source = to_data_uri(raw_bytes, sniff_mime_type(raw_bytes, filename))
        bitmap = self.decode(raw_bytes)
        return self._build(source, bitmap)

    async def load_url(self, url: str) -> LoadedImage:
        try:
            raw_bytes = await self._fetch(url)
            bitmap = self.decode(raw_bytes)
        except (httpx.HTTPError, httpx.InvalidURL, ImageDecodingError) as e:
            logger.error(f"[ImageDecoder] Не удалось загрузить {url}: {e}")
            raise ImageLoadError(
                message=URL_LOAD_ERROR_MESSAGE,
                component="ImageDecoder",
                original_error=e
            )

        return self._build(url, bitmap)

    async def read_source(self, source: str) -> bytes:
        try:
            if source.startswith("data:"):
                _, raw_bytes = parse_data_uri(source)
            elif source.startswith(("http://", "https://")):
                raw_bytes = await self._fetch(source)
            else:
                raise ValueError(f"Unsupported image source: {source[:32]}")
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            raise ImageUnavailableError(
                message="Не удалось прочитать исходное изображение",
                component="ImageDecoder",
                original_error=e
            )

        logger.debug(f"[ImageDecoder] Исходное изображение прочитано: {len(raw_bytes)} байт")
        return raw_bytes

    @staticmethod
    def decode(raw_bytes: bytes) -> np.ndarray:
        """
        Декодирует байты в numpy array (BGR).

        Raises:
            ImageDecodingError: Если не удалось декодировать изображение
        """
        nparr = np.frombuffer(raw_bytes, np.uint8)
        image = cv2.imdecode(nparr, cv2.IMREAD_COLOR) if nparr.size else None

        if image is None:
            raise ImageDecodingError(
                message="Failed to decode image",
                component="ImageDecoder"
            )

        return image

    async def _fetch(self, url: str) -> bytes:
        """Анонимный GET: без cookies и авторизации, с редиректами."""
        if self.http_client is not None:
            response = await self.http_client.get(url, follow_redirects=True)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, follow_redirects=True)

        response.raise_for_status()
        return response.content

    def _build(self, source: str, bitmap: np.ndarray) -> LoadedImage:
        natural_height, natural_width = bitmap.shape[:2]
        displayed_width, displayed_height = fit_display_size(
            natural_width, natural_height,
            self.max_display_width, self.max_display_height
        )

        loaded = LoadedImage(
            image_id=uuid.uuid4().hex,
            source=source,
            bitmap=bitmap,
            metrics=ImageMetrics(
                displayed_width=displayed_width,
                displayed_height=displayed_height,
                natural_width=natural_width,
                natural_height=natural_height,
            ),
        )

        logger.info(
            f"[ImageDecoder] Изображение загружено: {natural_width}x{natural_height} "
            f"(отображается {displayed_width}x{displayed_height})"
        )

        return loaded
