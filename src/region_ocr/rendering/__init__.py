"""Рендер области и кодирование в JPEG."""

from .image_encoder import ImageEncoder
from .region_extractor import RegionExtractor

__all__ = ["ImageEncoder", "RegionExtractor"]
