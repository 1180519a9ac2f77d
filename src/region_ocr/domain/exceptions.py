"""
Исключения для домена Region OCR.

Ошибки геометрии и кропа сюда не попадают: они не исключительные
и обрабатываются fallback-веткой оркестратора.
"""

from typing import Optional


class RegionOCRError(Exception):
    """Базовое исключение для ошибок домена Region OCR."""

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        self.message = message
        self.component = component
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Region OCR Error: {self.message}"
        if self.component:
            msg += f" (Component: {self.component})"
        if self.original_error:
            msg += f" [Original: {type(self.original_error).__name__}: {str(self.original_error)}]"
        return msg


class ImageProcessingError(RegionOCRError):
    """Ошибка обработки изображения."""
    pass


class ImageNotFoundError(ImageProcessingError):
    """Изображение не найдено."""
    pass


class ImageDecodingError(ImageProcessingError):
    """Ошибка декодирования изображения."""
    pass


class ImageLoadError(ImageProcessingError):
    """
    Изображение по URL не загрузилось.

    message предназначено для пользователя: предлагает загрузить файл напрямую.
    """
    pass


class ImageUnavailableError(ImageProcessingError):
    """Исходное изображение нельзя прочитать для отправки."""
    pass


class EncodingError(ImageProcessingError):
    """Ошибка при кодировании изображения."""
    pass


class RecognitionError(RegionOCRError):
    """Ошибка сервиса распознавания."""
    pass


class RecognitionServiceError(RecognitionError):
    """Сетевая ошибка при обращении к сервису."""
    pass


class RecognitionResponseError(RecognitionError):
    """Некорректный ответ сервиса (не JSON или не по схеме)."""
    pass


class RegionOCRConfigurationError(RegionOCRError):
    """Ошибка конфигурации домена Region OCR."""
    pass
