"""
Интерфейсы (абстрактные классы) для домена Region OCR.

Домен Region OCR отвечает за:
1. Загрузку и декодирование изображения (файл или URL)
2. Перевод выделения в пиксели натурального изображения
3. Кроп и кодирование области
4. Отправку в сервис распознавания текста
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import numpy as np

from contracts.region_dto import (
    ImageMetrics,
    LoadedImage,
    Payload,
    PixelRect,
    Selection,
)
from contracts.ocr_space_schema import OCRSpaceResponse


class IImageDecoder(ABC):
    """Интерфейс декодера изображений."""

    @abstractmethod
    async def load_file(self, image_path: Path) -> LoadedImage:
        """
        Читает локальный файл и декодирует его.

        Args:
            image_path: Путь к файлу изображения

        Returns:
            LoadedImage с bitmap и метриками
        """
        pass

    @abstractmethod
    async def load_bytes(self, raw_bytes: bytes, filename: Optional[str] = None) -> LoadedImage:
        """Декодирует изображение из байтов в памяти."""
        pass

    @abstractmethod
    async def load_url(self, url: str) -> LoadedImage:
        """
        Загружает изображение по URL.

        Raises:
            ImageLoadError: если изображение не загрузилось или не декодировалось
        """
        pass

    @abstractmethod
    async def read_source(self, source: str) -> bytes:
        """
        Повторно читает исходное изображение (data URI или URL) без изменений.

        Raises:
            ImageUnavailableError: если источник недоступен
        """
        pass


class ICropResolver(ABC):
    """Интерфейс перевода выделения в пиксели натурального изображения."""

    @abstractmethod
    def resolve(
        self,
        selection: Optional[Selection],
        metrics: Optional[ImageMetrics]
    ) -> Optional[PixelRect]:
        """Возвращает PixelRect или None, если выделение невалидно."""
        pass


class IRegionExtractor(ABC):
    """Интерфейс рендера области в закодированный payload."""

    @abstractmethod
    def extract(
        self,
        bitmap: Optional[np.ndarray],
        rect: Optional[PixelRect]
    ) -> Optional[Payload]:
        """Возвращает Payload или None, если кроп не получился."""
        pass


class IRecognitionService(ABC):
    """Интерфейс сервиса распознавания текста."""

    @abstractmethod
    async def recognize(self, payload: Payload) -> OCRSpaceResponse:
        """
        Отправляет изображение на распознавание.

        Args:
            payload: Закодированное изображение с именем файла

        Returns:
            Разобранный ответ сервиса
        """
        pass
