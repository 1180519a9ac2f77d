"""
Infrastructure слой домена Region OCR.

Реализации интерфейсов: декодер изображений и клиент OCR.Space.
"""

from .image_decoder import ImageDecoder, to_data_uri, parse_data_uri, sniff_mime_type
from .ocr_space_client import OCRSpaceClient

__all__ = [
    "ImageDecoder",
    "OCRSpaceClient",
    "to_data_uri",
    "parse_data_uri",
    "sniff_mime_type",
]
