"""
Region Extractor: PixelRect -> закодированный payload.

Рисует область исходного изображения на временной поверхности
размера rect.width x rect.height и кодирует её в JPEG.

Правило округления: усечение (int()) для x, y, width и height.
Части прямоугольника за пределами изображения остаются чёрными.
"""

import math
from typing import Optional

import cv2
import numpy as np
from loguru import logger

from config.settings import (
    JPEG_QUALITY, MAX_SURFACE_PIXELS,
    OUTPUT_EXTENSION, OUTPUT_CONTENT_TYPE
)
from contracts.region_dto import Payload, PixelRect
from ..domain.interfaces import IRegionExtractor
from ..domain.exceptions import EncodingError
from .image_encoder import ImageEncoder


class RegionExtractor(IRegionExtractor):
    """
    Кроп + кодирование.

    Неудача (нет bitmap, пустой или нечисловой прямоугольник, ошибка кодировщика)
    возвращает None: оркестратор переключается на исходное изображение.
    """

    def __init__(
        self,
        encoder: Optional[ImageEncoder] = None,
        quality: int = JPEG_QUALITY,
        max_surface_pixels: int = MAX_SURFACE_PIXELS
    ):
        self.encoder = encoder or ImageEncoder()
        self.quality = quality
        self.max_surface_pixels = max_surface_pixels

    def extract(
        self,
        bitmap: Optional[np.ndarray],
        rect: Optional[PixelRect]
    ) -> Optional[Payload]:
        """
        Вырезает область и кодирует её.

        Args:
            bitmap: Декодированное изображение (BGR или Grayscale)
            rect: Прямоугольник в пикселях натурального изображения

        Returns:
            Payload с именем cropped.<ext> или None
        """
        if bitmap is None or rect is None:
            logger.debug("[RegionExtractor] Нет bitmap или прямоугольника")
            return None

        surface = self._draw(bitmap, rect)
        if surface is None:
            return None

        try:
            content = self.encoder.encode(surface, quality=self.quality)
        except (EncodingError, cv2.error) as e:
            logger.warning(f"[RegionExtractor] Кодирование не удалось: {e}")
            return None
        finally:
            del surface

        if not content:
            logger.warning("[RegionExtractor] Кодировщик вернул пустые данные")
            return None

        return Payload(
            content=content,
            filename=f"cropped.{OUTPUT_EXTENSION}",
            content_type=OUTPUT_CONTENT_TYPE,
        )

    def _draw(self, bitmap: np.ndarray, rect: PixelRect) -> Optional[np.ndarray]:
        """Копирует пересечение rect с bitmap на новую поверхность в (0, 0)."""
        if not all(math.isfinite(v) for v in (rect.x, rect.y, rect.width, rect.height)):
            logger.warning(f"[RegionExtractor] Нечисловые координаты кропа: {rect}")
            return None

        x = int(rect.x)
        y = int(rect.y)
        width = int(rect.width)
        height = int(rect.height)

        if width <= 0 or height <= 0:
            logger.debug(f"[RegionExtractor] Пустая поверхность: {width}x{height}")
            return None

        if width * height > self.max_surface_pixels:
            logger.warning(
                f"[RegionExtractor] Поверхность слишком большая: {width}x{height} "
                f"(макс {self.max_surface_pixels} px)"
            )
            return None

        surface = np.zeros((height, width) + bitmap.shape[2:], dtype=bitmap.dtype)

        src_h, src_w = bitmap.shape[:2]
        left = max(x, 0)
        top = max(y, 0)
        right = min(x + width, src_w)
        bottom = min(y + height, src_h)

        if right > left and bottom > top:
            surface[top - y:bottom - y, left - x:right - x] = bitmap[top:bottom, left:right]
        else:
            logger.debug("[RegionExtractor] Прямоугольник вне изображения, поверхность пустая")

        logger.debug(
            f"[RegionExtractor] Кроп ({x}, {y}, {width}x{height}) "
            f"из {src_w}x{src_h}"
        )

        return surface
