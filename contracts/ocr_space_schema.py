"""
Контракт ответа OCR.Space API.

Используется Pydantic v2: лишние поля ответа сохраняются,
ParsedResults может отсутствовать (ошибка обработки на стороне сервиса).
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ParsedResult(BaseModel):
    """Результат распознавания одной страницы/изображения."""

    model_config = ConfigDict(extra="allow")

    ParsedText: Optional[str] = Field("", description="Распознанный текст (может быть пустым)")
    FileParseExitCode: Optional[Union[int, str]] = None
    ErrorMessage: Optional[str] = None


class OCRSpaceResponse(BaseModel):
    """Ответ POST /parse/image."""

    model_config = ConfigDict(extra="allow")

    ParsedResults: Optional[List[ParsedResult]] = None
    OCRExitCode: Optional[Union[int, str]] = None
    IsErroredOnProcessing: bool = False
    ErrorMessage: Optional[Union[str, List[str]]] = None
    ProcessingTimeInMilliseconds: Optional[Union[int, str]] = None

    def first_text(self) -> Optional[str]:
        """Текст первой записи или None, если записей нет."""
        if not self.ParsedResults:
            return None
        return self.ParsedResults[0].ParsedText or ""

    def error_details(self) -> str:
        """Сообщение об ошибке сервиса одной строкой."""
        if not self.ErrorMessage:
            return ""
        if isinstance(self.ErrorMessage, list):
            return "; ".join(self.ErrorMessage)
        return self.ErrorMessage
