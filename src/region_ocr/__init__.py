"""
Домен Region OCR: кроп выделенной области + распознавание текста.

Этот домен отвечает за:
1. Загрузку изображения (файл или URL) и снятие его метрик
2. Перевод выделения пользователя в пиксели натурального изображения
3. Кроп области в JPEG (с fallback на исходное изображение)
4. Отправку в OCR.Space и разбор ответа

Граница домена: contracts.RecognitionResult
"""

from .geometry.crop_resolver import CropResolver
from .rendering.region_extractor import RegionExtractor
from .infrastructure.image_decoder import ImageDecoder
from .infrastructure.ocr_space_client import OCRSpaceClient

from .application.session import ImageSession
from .application.submission import SubmissionOrchestrator
from .application.workflow import RegionOCRWorkflow
from .application.factory import RegionOCRComponentFactory

__all__ = [
    # Основные классы
    "CropResolver",
    "RegionExtractor",
    "ImageDecoder",
    "OCRSpaceClient",

    # Application слой
    "ImageSession",
    "SubmissionOrchestrator",
    "RegionOCRWorkflow",
    "RegionOCRComponentFactory",
]
