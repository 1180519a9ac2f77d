"""
Image Encoder.

Кодирование numpy array изображений в JPEG bytes.
Операция отвечает только за кодирование изображения в байты.
"""

import cv2
import numpy as np
from loguru import logger

from config.settings import JPEG_QUALITY
from ..domain.exceptions import EncodingError


class ImageEncoder:
    """
    Кодирует numpy array изображение в JPEG bytes.

    ЦКП: JPEG байты изображения.
    """

    @staticmethod
    def encode(image: np.ndarray, quality: int = JPEG_QUALITY) -> bytes:
        """
        Кодирует numpy array в JPEG bytes.

        Args:
            image: Изображение в формате numpy.ndarray (BGR или Grayscale)
            quality: Качество JPEG (0-100)

        Returns:
            JPEG байты изображения

        Raises:
            EncodingError: Если не удалось закодировать изображение
        """
        if image is None or image.size == 0:
            raise EncodingError(
                message="Пустое изображение",
                component="ImageEncoder"
            )

        try:
            success, buffer = cv2.imencode(
                ".jpg",
                image,
                [cv2.IMWRITE_JPEG_QUALITY, quality]
            )
        except cv2.error as e:
            raise EncodingError(
                message="Failed to encode image to JPEG",
                component="ImageEncoder",
                original_error=e
            )

        if not success or buffer is None:
            raise EncodingError(
                message="Failed to encode image to JPEG",
                component="ImageEncoder"
            )

        encoded_bytes = buffer.tobytes()

        if not encoded_bytes:
            raise EncodingError(
                message="Encoder returned no data",
                component="ImageEncoder"
            )

        logger.debug(
            f"[ImageEncoder] Изображение закодировано: "
            f"размер {len(encoded_bytes)} байт, качество {quality}"
        )

        return encoded_bytes
