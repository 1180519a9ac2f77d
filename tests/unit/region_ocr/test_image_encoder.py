import numpy as np
import pytest

from src.region_ocr.domain.exceptions import EncodingError
from src.region_ocr.rendering.image_encoder import ImageEncoder


@pytest.fixture
def rgb_image():
    """Fixture: создает RGB тестовое изображение (numpy array)."""
    image = np.zeros((100, 100, 3), dtype=np.uint8)
    image[:, :, 0] = 100  # Blue
    image[:, :, 1] = 150  # Green
    image[:, :, 2] = 200  # Red
    return image


@pytest.fixture
def grayscale_image():
    """Fixture: создает Grayscale тестовое изображение (numpy array)."""
    image = np.zeros((100, 100), dtype=np.uint8)
    image[:] = 128
    return image


def test_encode_rgb_image(rgb_image):
    """Тест: кодирование RGB изображения."""
    encoded = ImageEncoder.encode(rgb_image)

    assert isinstance(encoded, bytes)
    assert len(encoded) > 0

    # JPEG signature (FF D8 FF)
    assert encoded[:3] == b"\xff\xd8\xff"


def test_encode_grayscale_image(grayscale_image):
    """Тест: кодирование Grayscale изображения."""
    encoded = ImageEncoder.encode(grayscale_image)

    assert encoded[:3] == b"\xff\xd8\xff"


@pytest.mark.parametrize("quality", [0, 50, 100])
def test_quality_bounds(rgb_image, quality):
    """Тест: граничные значения quality дают валидный JPEG."""
    encoded = ImageEncoder.encode(rgb_image, quality=quality)

    assert encoded[:2] == b"\xff\xd8"


def test_empty_image_raises_encoding_error():
    """Тест: пустое изображение не кодируется."""
    with pytest.raises(EncodingError):
        ImageEncoder.encode(np.zeros((0, 10, 3), dtype=np.uint8))


def test_none_image_raises_encoding_error():
    with pytest.raises(EncodingError):
        ImageEncoder.encode(None)
