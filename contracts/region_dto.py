"""
DTO контракт: выделение области -> кроп -> распознавание.

Описывает данные, которые проходят через цикл одной отправки:
Selection + ImageMetrics -> PixelRect -> Payload -> RecognitionResult.

ВАЖНО: Selection задаётся относительно ОТОБРАЖАЕМОГО размера изображения,
PixelRect - в пикселях НАТУРАЛЬНОГО (полного) изображения.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

import numpy as np


class SelectionUnit(str, Enum):
    """Единицы измерения выделения."""
    PERCENT = "%"
    PIXEL = "px"


@dataclass
class Selection:
    """
    Прямоугольник, нарисованный пользователем.

    Координаты в единицах unit относительно отображаемого изображения.
    Выделение без ширины или высоты считается невалидным.
    """
    unit: SelectionUnit = SelectionUnit.PERCENT
    x: float = 0
    y: float = 0
    width: Optional[float] = None
    height: Optional[float] = None

    def is_valid(self) -> bool:
        """Выделение пригодно для кропа только с ненулевыми width и height."""
        return bool(self.width) and bool(self.height)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Selection":
        """
        Создаёт Selection из словаря вида {"unit": "%", "x": 25, ...}.

        Неизвестная единица считается пикселями.
        """
        unit_value = data.get("unit", SelectionUnit.PIXEL.value)
        try:
            unit = SelectionUnit(unit_value)
        except ValueError:
            unit = SelectionUnit.PIXEL

        return cls(
            unit=unit,
            x=data.get("x") or 0,
            y=data.get("y") or 0,
            width=data.get("width"),
            height=data.get("height"),
        )

    @classmethod
    def default(cls) -> "Selection":
        """Выделение по умолчанию (50% x 50% по центру)."""
        from config.settings import DEFAULT_SELECTION
        return cls.from_dict(DEFAULT_SELECTION)


@dataclass(frozen=True)
class ImageMetrics:
    """
    Размеры загруженного изображения.

    Снимаются один раз после декодирования. Коэффициенты масштаба
    вычисляются, а не хранятся.
    """
    displayed_width: int
    displayed_height: int
    natural_width: int
    natural_height: int

    @property
    def has_layout(self) -> bool:
        """False, пока изображение не имеет отображаемого размера."""
        return self.displayed_width > 0 and self.displayed_height > 0

    @property
    def scale_x(self) -> float:
        return self.natural_width / self.displayed_width

    @property
    def scale_y(self) -> float:
        return self.natural_height / self.displayed_height


@dataclass(frozen=True)
class PixelRect:
    """Прямоугольник в пикселях натурального изображения (без клампинга)."""
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Payload:
    """Закодированное изображение для отправки в сервис распознавания."""
    content: bytes
    filename: str
    content_type: str = "image/jpeg"

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True, eq=False)
class LoadedImage:
    """
    Текущее загруженное изображение.

    bitmap и metrics живут в одном объекте и заменяются только вместе.
    source - data URI (локальный файл) или URL.
    """
    image_id: str
    source: str
    bitmap: np.ndarray = field(repr=False)
    metrics: ImageMetrics


class RecognitionErrorKind(str, Enum):
    """Ошибки, которые доходят до вызывающего кода."""
    NO_IMAGE = "no_image"
    IMAGE_UNAVAILABLE = "image_unavailable"
    NO_TEXT_FOUND = "no_text_found"
    PROCESSING_ERROR = "processing_error"


@dataclass(frozen=True)
class RecognitionResult:
    """
    Результат одной отправки.

    Либо text (может быть пустой строкой), либо error + message.
    image_id позволяет отбросить результат, если изображение уже заменено.
    """
    text: Optional[str] = None
    error: Optional[RecognitionErrorKind] = None
    message: str = ""
    image_id: Optional[str] = None
    payload_filename: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(
        cls,
        text: str,
        image_id: Optional[str] = None,
        payload_filename: Optional[str] = None
    ) -> "RecognitionResult":
        return cls(text=text, image_id=image_id, payload_filename=payload_filename)

    @classmethod
    def failure(
        cls,
        error: RecognitionErrorKind,
        message: str,
        image_id: Optional[str] = None,
        payload_filename: Optional[str] = None
    ) -> "RecognitionResult":
        return cls(
            error=error,
            message=message,
            image_id=image_id,
            payload_filename=payload_filename,
        )
