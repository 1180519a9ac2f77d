"""
Domain слой домена Region OCR.

Содержит интерфейсы (абстрактные классы) и исключения.
"""

from .interfaces import (
    IImageDecoder,
    ICropResolver,
    IRegionExtractor,
    IRecognitionService,
)

from .exceptions import (
    RegionOCRError,
    ImageProcessingError,
    ImageNotFoundError,
    ImageDecodingError,
    ImageLoadError,
    ImageUnavailableError,
    EncodingError,
    RecognitionError,
    RecognitionServiceError,
    RecognitionResponseError,
    RegionOCRConfigurationError,
)

__all__ = [
    # Интерфейсы
    "IImageDecoder",
    "ICropResolver",
    "IRegionExtractor",
    "IRecognitionService",

    # Исключения
    "RegionOCRError",
    "ImageProcessingError",
    "ImageNotFoundError",
    "ImageDecodingError",
    "ImageLoadError",
    "ImageUnavailableError",
    "EncodingError",
    "RecognitionError",
    "RecognitionServiceError",
    "RecognitionResponseError",
    "RegionOCRConfigurationError",
]
