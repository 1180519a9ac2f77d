"""
Контекст текущего изображения и выделения.

Вместо глобального состояния UI: объект передаётся в оркестратор явно.
"""

from typing import Any, Dict, Optional, Union

from loguru import logger

from contracts.region_dto import LoadedImage, Selection


class ImageSession:
    """
    Текущее изображение + выделение.

    Изображение заменяется целиком (bitmap и метрики вместе),
    при замене выделение сбрасывается на значение по умолчанию.
    """

    def __init__(self, default_selection: Optional[Selection] = None):
        self._default_selection = default_selection or Selection.default()
        self._image: Optional[LoadedImage] = None
        self._selection: Selection = self._default_selection

    @property
    def image(self) -> Optional[LoadedImage]:
        return self._image

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def default_selection(self) -> Selection:
        return self._default_selection

    @property
    def has_image(self) -> bool:
        return self._image is not None

    def replace_image(self, loaded: LoadedImage) -> None:
        """Устанавливает новое изображение и сбрасывает выделение."""
        self._image = loaded
        self._selection = self._default_selection
        logger.debug(f"[ImageSession] Новое изображение {loaded.image_id}, выделение сброшено")

    def update_selection(self, selection: Union[Selection, Dict[str, Any], None]) -> Selection:
        """
        Обновляет выделение.

        Невалидное или отсутствующее выделение заменяется значением по умолчанию.
        """
        if isinstance(selection, dict):
            selection = Selection.from_dict(selection)

        if selection is None or not selection.is_valid():
            logger.debug(f"[ImageSession] Выделение {selection} невалидно, используется по умолчанию")
            selection = self._default_selection

        self._selection = selection
        return self._selection

    def is_current(self, image_id: Optional[str]) -> bool:
        """True, если image_id относится к текущему изображению."""
        return self._image is not None and self._image.image_id == image_id

    def clear(self) -> None:
        self._image = None
        self._selection = self._default_selection
