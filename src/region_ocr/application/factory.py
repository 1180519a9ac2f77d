"""
Фабрика для создания компонентов домена Region OCR.

Предоставляет удобные методы для создания и конфигурации
всех компонентов домена через единый интерфейс.
"""

from typing import Optional, Dict, Any

import httpx
from loguru import logger

from config.settings import OCR_SPACE_ENDPOINT, OCR_SPACE_API_KEY, OCR_SPACE_TIMEOUT
from contracts.region_dto import Selection
from ..domain.interfaces import (
    IImageDecoder,
    ICropResolver,
    IRegionExtractor,
    IRecognitionService,
)
from ..geometry.crop_resolver import CropResolver
from ..rendering.region_extractor import RegionExtractor
from ..infrastructure.image_decoder import ImageDecoder
from ..infrastructure.ocr_space_client import OCRSpaceClient
from .session import ImageSession
from .submission import SubmissionOrchestrator
from .workflow import RegionOCRWorkflow


class RegionOCRComponentFactory:
    """
    Фабрика для создания компонентов домена Region OCR.

    Домен Region OCR отвечает за:
    - Загрузку изображения и его метрик
    - Перевод выделения в пиксели и кроп
    - Отправку в OCR.Space
    """

    @staticmethod
    def create_image_decoder(http_client: Optional[httpx.AsyncClient] = None) -> IImageDecoder:
        logger.debug("[RegionOCR] Создание декодера изображений")
        return ImageDecoder(http_client=http_client)

    @staticmethod
    def create_crop_resolver() -> ICropResolver:
        logger.debug("[RegionOCR] Создание CropResolver")
        return CropResolver()

    @staticmethod
    def create_region_extractor() -> IRegionExtractor:
        logger.debug("[RegionOCR] Создание RegionExtractor")
        return RegionExtractor()

    @staticmethod
    def create_recognition_service(
        endpoint: str = OCR_SPACE_ENDPOINT,
        api_key: str = OCR_SPACE_API_KEY,
        timeout: Optional[float] = OCR_SPACE_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None
    ) -> IRecognitionService:
        """
        Создает клиент сервиса распознавания.

        Args:
            endpoint: URL метода parse/image
            api_key: Ключ API
            timeout: Таймаут запроса (None = без таймаута)
            http_client: Общий httpx клиент (опционально)

        Returns:
            Клиент, реализующий интерфейс IRecognitionService
        """
        logger.debug("[RegionOCR] Создание клиента OCR.Space")
        return OCRSpaceClient(
            endpoint=endpoint,
            api_key=api_key,
            timeout=timeout,
            http_client=http_client
        )

    @staticmethod
    def create_orchestrator(
        decoder: Optional[IImageDecoder] = None,
        resolver: Optional[ICropResolver] = None,
        extractor: Optional[IRegionExtractor] = None,
        recognition_service: Optional[IRecognitionService] = None,
        default_selection: Optional[Selection] = None
    ) -> SubmissionOrchestrator:
        """
        Создает оркестратор отправки.

        Недостающие компоненты создаются с настройками по умолчанию.
        """
        logger.debug("[RegionOCR] Создание оркестратора отправки")

        if decoder is None:
            decoder = RegionOCRComponentFactory.create_image_decoder()

        if resolver is None:
            resolver = RegionOCRComponentFactory.create_crop_resolver()

        if extractor is None:
            extractor = RegionOCRComponentFactory.create_region_extractor()

        if recognition_service is None:
            recognition_service = RegionOCRComponentFactory.create_recognition_service()

        return SubmissionOrchestrator(
            decoder=decoder,
            resolver=resolver,
            extractor=extractor,
            recognition_service=recognition_service,
            default_selection=default_selection
        )

    @staticmethod
    def create_default_workflow(http_client: Optional[httpx.AsyncClient] = None) -> RegionOCRWorkflow:
        """
        Создает сценарий Region OCR с настройками по умолчанию.

        Args:
            http_client: Общий httpx клиент для загрузки по URL и OCR.Space

        Returns:
            Полностью сконфигурированный RegionOCRWorkflow
        """
        logger.info("[RegionOCR] Создание сценария с настройками по умолчанию")

        decoder = RegionOCRComponentFactory.create_image_decoder(http_client)
        orchestrator = RegionOCRComponentFactory.create_orchestrator(
            decoder=decoder,
            recognition_service=RegionOCRComponentFactory.create_recognition_service(
                http_client=http_client
            )
        )

        return RegionOCRWorkflow(
            decoder=decoder,
            orchestrator=orchestrator,
            session=ImageSession(orchestrator.default_selection)
        )

    @staticmethod
    def get_info() -> Dict[str, Any]:
        """
        Возвращает информацию о домене Region OCR.

        Returns:
            Словарь с информацией о доступных компонентах
        """
        return {
            "domain": "Region OCR",
            "responsibility": "Кроп выделенной области + распознавание текста",
            "output": "RecognitionResult",
            "components": {
                "image_decoder": "ImageDecoder",
                "crop_resolver": "CropResolver",
                "region_extractor": "RegionExtractor",
                "recognition_service": "OCRSpaceClient",
                "orchestrator": "SubmissionOrchestrator",
                "workflow": "RegionOCRWorkflow"
            },
            "endpoint": OCR_SPACE_ENDPOINT,
            "dependencies": ["OCR.Space API", "OpenCV", "Pillow", "httpx"]
        }
