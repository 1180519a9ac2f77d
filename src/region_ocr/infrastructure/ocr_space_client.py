"""
OCR: OCR.Space API интеграция.

- Отправка изображения multipart POST (поле file)
- Статический ключ в заголовке apikey
- Разбор JSON ответа в OCRSpaceResponse

HTTP статус не проверяется: решение принимается по телу ответа.
Повторных попыток нет.
"""

import json
from typing import Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from config.settings import (
    OCR_SPACE_ENDPOINT, OCR_SPACE_API_KEY,
    OCR_SPACE_TIMEOUT, OCR_SPACE_FILE_FIELD
)
from contracts.ocr_space_schema import OCRSpaceResponse
from contracts.region_dto import Payload
from ..domain.interfaces import IRecognitionService
from ..domain.exceptions import RecognitionServiceError, RecognitionResponseError


class OCRSpaceClient(IRecognitionService):
    """
    Клиент OCR.Space.

    Возвращает OCRSpaceResponse; интерпретация ParsedResults -
    задача SubmissionOrchestrator.
    """

    def __init__(
        self,
        endpoint: str = OCR_SPACE_ENDPOINT,
        api_key: str = OCR_SPACE_API_KEY,
        timeout: Optional[float] = OCR_SPACE_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Args:
            endpoint: URL метода parse/image
            api_key: Ключ API (заголовок apikey)
            timeout: Таймаут запроса в секундах (None = без таймаута)
            http_client: Общий httpx клиент (опционально)
        """
        self.endpoint = endpoint
        self.api_key = api_key
        self.timeout = timeout
        self.http_client = http_client

        logger.debug(f"[OCRSpaceClient] Инициализирован: {self.endpoint}")

    async def recognize(self, payload: Payload) -> OCRSpaceResponse:
        """
        Отправляет изображение на распознавание.

        Raises:
            RecognitionServiceError: сетевая ошибка
            RecognitionResponseError: ответ не JSON или не соответствует схеме
        """
        files = {OCR_SPACE_FILE_FIELD: (payload.filename, payload.content, payload.content_type)}
        headers = {"apikey": self.api_key}

        logger.debug(f"[OCRSpaceClient] POST {payload.filename} ({payload.size} байт)")

        try:
            if self.http_client is not None:
                response = await self.http_client.post(self.endpoint, headers=headers, files=files)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.endpoint, headers=headers, files=files)
        except httpx.HTTPError as e:
            raise RecognitionServiceError(
                message=f"Запрос к {self.endpoint} не выполнен",
                component="OCRSpaceClient",
                original_error=e
            )

        logger.debug(f"[OCRSpaceClient] Ответ: HTTP {response.status_code}")

        return self._parse_response(response)

    def _parse_response(self, response: httpx.Response) -> OCRSpaceResponse:
        """Парсит тело ответа в OCRSpaceResponse."""
        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise RecognitionResponseError(
                message=f"Ответ не является JSON (HTTP {response.status_code})",
                component="OCRSpaceClient",
                original_error=e
            )

        if data is not None and not isinstance(data, dict):
            logger.warning(
                f"[OCRSpaceClient] Тело ответа не объект ({type(data).__name__}), "
                f"результатов нет"
            )
            return OCRSpaceResponse()

        try:
            return OCRSpaceResponse.model_validate(data)
        except ValidationError as e:
            raise RecognitionResponseError(
                message=f"Ответ не соответствует схеме OCR.Space (HTTP {response.status_code})",
                component="OCRSpaceClient",
                original_error=e
            )
