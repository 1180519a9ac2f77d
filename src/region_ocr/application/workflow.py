"""
Сценарий Region OCR для вызова из UI.

Загрузка изображения -> выделение -> извлечение текста.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from loguru import logger

from contracts.region_dto import LoadedImage, RecognitionResult, Selection
from ..domain.interfaces import IImageDecoder
from .session import ImageSession
from .submission import SubmissionOrchestrator


class RegionOCRWorkflow:
    """
    Связывает ImageSession, декодер и оркестратор.

    Загрузка нового изображения атомарно заменяет bitmap и метрики
    и сбрасывает выделение. При ошибке загрузки сессия не меняется.
    """

    def __init__(
        self,
        decoder: IImageDecoder,
        orchestrator: SubmissionOrchestrator,
        session: Optional[ImageSession] = None
    ):
        self.decoder = decoder
        self.orchestrator = orchestrator
        self.session = session or ImageSession(orchestrator.default_selection)
        self.last_result: Optional[RecognitionResult] = None

    async def load_file(self, image_path: Path) -> LoadedImage:
        loaded = await self.decoder.load_file(image_path)
        return self._activate(loaded)

    async def load_bytes(self, raw_bytes: bytes, filename: Optional[str] = None) -> LoadedImage:
        loaded = await self.decoder.load_bytes(raw_bytes, filename)
        return self._activate(loaded)

    async def load_url(self, url: str) -> LoadedImage:
        """
        Загружает изображение по URL.

        Raises:
            ImageLoadError: сообщение предлагает загрузить файл напрямую
        """
        loaded = await self.decoder.load_url(url)
        return self._activate(loaded)

    def select(self, selection: Union[Selection, Dict[str, Any], None]) -> Selection:
        return self.session.update_selection(selection)

    async def extract_text(self) -> RecognitionResult:
        """
        Отправляет текущее выделение на распознавание.

        last_result обновляется, только если изображение не было заменено
        во время запроса.
        """
        result = await self.orchestrator.submit_session(self.session)

        if result.image_id is None or self.session.is_current(result.image_id):
            self.last_result = result
        else:
            logger.info(f"[Workflow] Результат для заменённого изображения {result.image_id} отброшен")

        return result

    def _activate(self, loaded: LoadedImage) -> LoadedImage:
        self.session.replace_image(loaded)
        self.last_result = None
        return loaded
