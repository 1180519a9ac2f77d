"""
Оркестратор отправки области на распознавание.

Порядок:
1. Нет изображения -> NO_IMAGE (без сетевого запроса)
2. Невалидное выделение -> выделение по умолчанию
3. CropResolver -> RegionExtractor
4. Кроп не получился -> исходное изображение без изменений (image.<ext>)
5. Один multipart POST в сервис распознавания
6. ParsedResults -> текст первой записи / NO_TEXT_FOUND / PROCESSING_ERROR

Ошибки геометрии и кропа не выходят наружу: они переводят в fallback.
"""

from typing import Optional

from loguru import logger

from config.settings import (
    OUTPUT_EXTENSION, OUTPUT_CONTENT_TYPE,
    NO_IMAGE_MESSAGE, NO_TEXT_FOUND_MESSAGE,
    PROCESSING_ERROR_PREFIX, IMAGE_UNAVAILABLE_MESSAGE
)
from contracts.ocr_space_schema import OCRSpaceResponse
from contracts.region_dto import (
    LoadedImage,
    Payload,
    RecognitionErrorKind,
    RecognitionResult,
    Selection,
)
from ..domain.interfaces import (
    IImageDecoder,
    ICropResolver,
    IRegionExtractor,
    IRecognitionService,
)
from ..domain.exceptions import ImageUnavailableError
from ..infrastructure.image_decoder import sniff_mime_type
from .session import ImageSession


class SubmissionOrchestrator:
    """
    Оркестратор одной отправки.

    Координирует:
    1. Выбор выделения (пользовательское или по умолчанию)
    2. Кроп с fallback на исходное изображение
    3. Запрос к сервису и разбор ответа в RecognitionResult
    """

    def __init__(
        self,
        decoder: IImageDecoder,
        resolver: ICropResolver,
        extractor: IRegionExtractor,
        recognition_service: IRecognitionService,
        default_selection: Optional[Selection] = None
    ):
        """
        Args:
            decoder: Декодер (нужен для повторного чтения исходного изображения)
            resolver: Перевод выделения в пиксели
            extractor: Кроп и кодирование
            recognition_service: Сервис распознавания
            default_selection: Выделение по умолчанию (50% x 50% по центру)
        """
        self.decoder = decoder
        self.resolver = resolver
        self.extractor = extractor
        self.recognition_service = recognition_service
        self.default_selection = default_selection or Selection.default()

    async def submit(
        self,
        image: Optional[LoadedImage],
        selection: Optional[Selection]
    ) -> RecognitionResult:
        """
        Отправляет выделенную область на распознавание.

        Args:
            image: Текущее загруженное изображение
            selection: Выделение пользователя

        Returns:
            RecognitionResult: текст или классифицированная ошибка
        """
        if image is None:
            logger.warning("[Submission] Изображение не загружено")
            return RecognitionResult.failure(RecognitionErrorKind.NO_IMAGE, NO_IMAGE_MESSAGE)

        image_id = image.image_id
        payload: Optional[Payload] = None

        try:
            payload = await self._build_payload(image, selection)
            if payload is None:
                return RecognitionResult.failure(
                    RecognitionErrorKind.IMAGE_UNAVAILABLE,
                    IMAGE_UNAVAILABLE_MESSAGE,
                    image_id=image_id,
                )

            logger.info(f"[Submission] Отправка {payload.filename} ({payload.size} байт)")
            response = await self.recognition_service.recognize(payload)
            return self._to_result(response, image_id, payload.filename)

        except ImageUnavailableError as e:
            logger.error(f"[Submission] Исходное изображение недоступно: {e}")
            return RecognitionResult.failure(
                RecognitionErrorKind.IMAGE_UNAVAILABLE,
                IMAGE_UNAVAILABLE_MESSAGE,
                image_id=image_id,
            )
        except Exception as e:
            logger.error(f"[Submission] Ошибка: {e}")
            return RecognitionResult.failure(
                RecognitionErrorKind.PROCESSING_ERROR,
                PROCESSING_ERROR_PREFIX + str(e),
                image_id=image_id,
                payload_filename=payload.filename if payload else None,
            )

    async def submit_session(self, session: ImageSession) -> RecognitionResult:
        """Отправляет текущее изображение и выделение из контекста."""
        return await self.submit(session.image, session.selection)

    async def _build_payload(
        self,
        image: LoadedImage,
        selection: Optional[Selection]
    ) -> Optional[Payload]:
        """Кроп, а при неудаче - исходное изображение без изменений."""
        crop = selection
        if crop is None or not crop.is_valid():
            logger.debug(f"[Submission] Выделение {selection} невалидно, используется по умолчанию")
            crop = self.default_selection

        rect = self.resolver.resolve(crop, image.metrics)
        payload = self.extractor.extract(image.bitmap, rect) if rect is not None else None

        if payload is not None:
            logger.debug("[Submission] Используется кроп")
            return payload

        logger.warning("[Submission] Кроп не получился, используется исходное изображение")
        raw_bytes = await self.decoder.read_source(image.source)
        if not raw_bytes:
            logger.error("[Submission] Исходное изображение пустое")
            return None

        return Payload(
            content=raw_bytes,
            filename=f"image.{OUTPUT_EXTENSION}",
            content_type=self._content_type(raw_bytes),
        )

    @staticmethod
    def _to_result(
        response: OCRSpaceResponse,
        image_id: str,
        payload_filename: str
    ) -> RecognitionResult:
        """ParsedResults[0].ParsedText или NO_TEXT_FOUND."""
        text = response.first_text()

        if text is None:
            details = response.error_details()
            logger.warning(
                f"[Submission] Текст не найден"
                + (f": {details}" if details else "")
            )
            return RecognitionResult.failure(
                RecognitionErrorKind.NO_TEXT_FOUND,
                NO_TEXT_FOUND_MESSAGE,
                image_id=image_id,
                payload_filename=payload_filename,
            )

        logger.info(f"[Submission] Готово: {len(text)} символов")
        return RecognitionResult.success(text, image_id=image_id, payload_filename=payload_filename)

    @staticmethod
    def _content_type(raw_bytes: bytes) -> str:
        """MIME тип исходного изображения (байты отправляются без перекодирования)."""
        mime_type = sniff_mime_type(raw_bytes)
        return mime_type if mime_type.startswith("image/") else OUTPUT_CONTENT_TYPE
