"""
Crop Resolver: выделение -> прямоугольник в пикселях натурального изображения.

Отвечает только за перевод единиц и масштаба.
Клампинг к границам изображения здесь не выполняется (это задача RegionExtractor).
"""

from typing import Optional

from loguru import logger

from contracts.region_dto import ImageMetrics, PixelRect, Selection, SelectionUnit
from ..domain.interfaces import ICropResolver


class CropResolver(ICropResolver):
    """
    Переводит Selection в PixelRect.

    PERCENT: проценты берутся от ОТОБРАЖАЕМОГО размера, затем масштабируются.
    PIXEL: выделение уже в пикселях отображения, только масштабируется.
    """

    def resolve(
        self,
        selection: Optional[Selection],
        metrics: Optional[ImageMetrics]
    ) -> Optional[PixelRect]:
        """
        Вычисляет прямоугольник кропа.

        Args:
            selection: Выделение пользователя
            metrics: Размеры загруженного изображения

        Returns:
            PixelRect или None, если выделение или метрики непригодны
        """
        if selection is None or not selection.is_valid():
            logger.debug(f"[CropResolver] Невалидное выделение: {selection}")
            return None

        if metrics is None or not metrics.has_layout:
            logger.debug(f"[CropResolver] Изображение без отображаемого размера: {metrics}")
            return None

        scale_x = metrics.scale_x
        scale_y = metrics.scale_y

        if selection.unit == SelectionUnit.PERCENT:
            rect = PixelRect(
                x=(selection.x / 100) * metrics.displayed_width * scale_x,
                y=(selection.y / 100) * metrics.displayed_height * scale_y,
                width=(selection.width / 100) * metrics.displayed_width * scale_x,
                height=(selection.height / 100) * metrics.displayed_height * scale_y,
            )
        else:
            rect = PixelRect(
                x=selection.x * scale_x,
                y=selection.y * scale_y,
                width=selection.width * scale_x,
                height=selection.height * scale_y,
            )

        logger.debug(
            f"[CropResolver] {selection.unit.value} ({selection.x}, {selection.y}, "
            f"{selection.width}x{selection.height}) -> "
            f"({rect.x:.1f}, {rect.y:.1f}, {rect.width:.1f}x{rect.height:.1f}) "
            f"scale=({scale_x:.3f}, {scale_y:.3f})"
        )

        return rect
