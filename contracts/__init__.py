"""
Контракты DTO проекта Region OCR.

Контракты:
- Выделение -> кроп -> отправка: region_dto.py (dataclasses)
- Ответ OCR.Space: ocr_space_schema.py (Pydantic v2)
"""

from .region_dto import (
    SelectionUnit,
    Selection,
    ImageMetrics,
    PixelRect,
    Payload,
    LoadedImage,
    RecognitionErrorKind,
    RecognitionResult,
)
from .ocr_space_schema import OCRSpaceResponse, ParsedResult

__all__ = [
    # Выделение и геометрия
    "SelectionUnit",
    "Selection",
    "ImageMetrics",
    "PixelRect",
    # Отправка
    "Payload",
    "LoadedImage",
    "RecognitionErrorKind",
    "RecognitionResult",
    # OCR.Space
    "OCRSpaceResponse",
    "ParsedResult",
]
