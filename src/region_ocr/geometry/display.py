"""
Отображаемый размер изображения.

Изображение вписывается в рамку отображения с сохранением пропорций
и без увеличения (аналог max-width / max-height в вёрстке).
"""

from typing import Tuple


def fit_display_size(
    natural_width: int,
    natural_height: int,
    max_width: int,
    max_height: int
) -> Tuple[int, int]:
    """
    Вычисляет отображаемый размер.

    Args:
        natural_width: Натуральная ширина (px)
        natural_height: Натуральная высота (px)
        max_width: Максимальная ширина рамки
        max_height: Максимальная высота рамки

    Returns:
        (width, height) в целых пикселях; (0, 0) для пустого изображения
    """
    if natural_width <= 0 or natural_height <= 0:
        return (0, 0)

    scale = min(1.0, max_width / natural_width, max_height / natural_height)

    return (
        max(1, round(natural_width * scale)),
        max(1, round(natural_height * scale)),
    )
