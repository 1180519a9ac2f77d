"""
Pytest configuration and global fixtures.
"""
import asyncio

import cv2
import numpy as np
import pytest

from contracts.region_dto import ImageMetrics, LoadedImage
from src.region_ocr.infrastructure.image_decoder import to_data_uri


@pytest.fixture
def run():
    """Выполняет корутину в новом event loop."""
    return asyncio.run


@pytest.fixture
def quadrant_bitmap():
    """
    BGR изображение 800x600 из четырёх одноцветных четвертей.

    Верх-лево: синий, верх-право: красный,
    низ-лево: зелёный, низ-право: белый.
    """
    image = np.zeros((600, 800, 3), dtype=np.uint8)
    image[:300, :400] = (255, 0, 0)
    image[:300, 400:] = (0, 0, 255)
    image[300:, :400] = (0, 255, 0)
    image[300:, 400:] = (255, 255, 255)
    return image


@pytest.fixture
def png_bytes(quadrant_bitmap):
    """PNG байты изображения quadrant_bitmap."""
    success, buffer = cv2.imencode(".png", quadrant_bitmap)
    assert success
    return buffer.tobytes()


@pytest.fixture
def display_metrics():
    """Изображение 800x600, отображается как 400x300."""
    return ImageMetrics(
        displayed_width=400,
        displayed_height=300,
        natural_width=800,
        natural_height=600,
    )


@pytest.fixture
def loaded_image(quadrant_bitmap, png_bytes, display_metrics):
    """LoadedImage из локального файла (source - data URI)."""
    return LoadedImage(
        image_id="image-1",
        source=to_data_uri(png_bytes, "image/png"),
        bitmap=quadrant_bitmap,
        metrics=display_metrics,
    )
