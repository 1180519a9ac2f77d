"""
Настройки проекта Region OCR.

Все значения можно переопределить через переменные окружения.
"""

import os
from pathlib import Path
from typing import Optional

# =============================================================================
# ПУТИ ПРОЕКТА
# =============================================================================
PROJECT_ROOT = Path(__file__).parent.parent


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value else default


def _env_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    return float(value) if value else None


# =============================================================================
# OCR.SPACE API
# =============================================================================
OCR_SPACE_ENDPOINT = os.getenv("OCR_SPACE_ENDPOINT", "https://api.ocr.space/parse/image")

# Бесплатный ключ OCR.Space (статический credential, отправляется в заголовке apikey)
OCR_SPACE_API_KEY = os.getenv("OCR_SPACE_API_KEY", "helloworld")

# Таймаут запроса в секундах. None = без таймаута
OCR_SPACE_TIMEOUT = _env_float("OCR_SPACE_TIMEOUT")

# Имя поля multipart формы
OCR_SPACE_FILE_FIELD = "file"

# =============================================================================
# НАСТРОЙКИ КОДИРОВАНИЯ
# =============================================================================
# Один фиксированный формат для кропа и для fallback
OUTPUT_EXTENSION = "jpg"
OUTPUT_CONTENT_TYPE = "image/jpeg"

# Качество JPEG (0-100)
JPEG_QUALITY = _env_int("REGION_OCR_JPEG_QUALITY", 92)

# Максимальная площадь поверхности для кропа (пиксели)
MAX_SURFACE_PIXELS = _env_int("REGION_OCR_MAX_SURFACE_PIXELS", 16384 * 16384)

# =============================================================================
# НАСТРОЙКИ ОТОБРАЖЕНИЯ
# =============================================================================
# Рамка, в которую вписывается изображение на экране (без увеличения)
DISPLAY_MAX_WIDTH = _env_int("REGION_OCR_DISPLAY_MAX_WIDTH", 600)
DISPLAY_MAX_HEIGHT = _env_int("REGION_OCR_DISPLAY_MAX_HEIGHT", 300)

# =============================================================================
# ЗАГРУЗКА ИЗОБРАЖЕНИЙ
# =============================================================================
# Таймаут загрузки изображения по URL в секундах. None = без таймаута
IMAGE_FETCH_TIMEOUT = _env_float("REGION_OCR_IMAGE_FETCH_TIMEOUT")

# Выделение по умолчанию: 50% x 50% по центру
DEFAULT_SELECTION = {"unit": "%", "x": 25, "y": 25, "width": 50, "height": 50}

# =============================================================================
# СООБЩЕНИЯ ДЛЯ ПОЛЬЗОВАТЕЛЯ
# =============================================================================
NO_IMAGE_MESSAGE = "No image loaded"
NO_TEXT_FOUND_MESSAGE = "No text found in the image"
PROCESSING_ERROR_PREFIX = "Error processing image: "
IMAGE_UNAVAILABLE_MESSAGE = "Could not read the original image"
URL_LOAD_ERROR_MESSAGE = (
    "Could not load image from URL. This may be due to CORS restrictions. "
    "Try uploading the file directly instead."
)


# =============================================================================
# ПРОВЕРКА КОНФИГУРАЦИИ
# =============================================================================
def validate_config():
    """Проверяет корректность конфигурации."""
    errors = []

    if not OCR_SPACE_ENDPOINT.startswith(("http://", "https://")):
        errors.append(f"OCR_SPACE_ENDPOINT должен быть http(s) URL: {OCR_SPACE_ENDPOINT}")

    if not OCR_SPACE_API_KEY:
        errors.append(
            "OCR_SPACE_API_KEY не указан!\n"
            "Укажите ключ в config/settings.py или через переменную окружения."
        )

    if not 0 <= JPEG_QUALITY <= 100:
        errors.append(f"JPEG_QUALITY вне диапазона [0, 100]: {JPEG_QUALITY}")

    if DISPLAY_MAX_WIDTH <= 0 or DISPLAY_MAX_HEIGHT <= 0:
        errors.append(
            f"Размер области отображения должен быть > 0: "
            f"{DISPLAY_MAX_WIDTH}x{DISPLAY_MAX_HEIGHT}"
        )

    if OCR_SPACE_TIMEOUT is not None and OCR_SPACE_TIMEOUT <= 0:
        errors.append(f"OCR_SPACE_TIMEOUT должен быть > 0: {OCR_SPACE_TIMEOUT}")

    if IMAGE_FETCH_TIMEOUT is not None and IMAGE_FETCH_TIMEOUT <= 0:
        errors.append(f"IMAGE_FETCH_TIMEOUT должен быть > 0: {IMAGE_FETCH_TIMEOUT}")

    if errors:
        raise ValueError("\n".join(errors))

    return True
