import cv2
import httpx
import numpy as np
import pytest

from config.settings import IMAGE_FETCH_TIMEOUT, URL_LOAD_ERROR_MESSAGE
from src.region_ocr.domain.exceptions import (
    ImageDecodingError,
    ImageLoadError,
    ImageNotFoundError,
    ImageUnavailableError,
)
from src.region_ocr.infrastructure.image_decoder import (
    ImageDecoder,
    parse_data_uri,
    sniff_mime_type,
    to_data_uri,
)

IMAGE_URL = "https://images.example.com/receipt.png"


def mock_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def temp_image_png(tmp_path, png_bytes):
    """Fixture: PNG файл 800x600."""
    image_path = tmp_path / "test_image.png"
    image_path.write_bytes(png_bytes)
    return image_path


@pytest.fixture
def temp_corrupted_file(tmp_path):
    """Fixture: создает файл с некорректными данными."""
    corrupted_path = tmp_path / "corrupted.jpg"
    corrupted_path.write_bytes(b"This is not a valid image file")
    return corrupted_path


class TestDataUri:
    """Тесты data URI."""

    def test_to_data_uri_is_decodable(self, png_bytes):
        data_uri = to_data_uri(png_bytes, "image/png")

        assert data_uri.startswith("data:image/png;base64,")
        assert parse_data_uri(data_uri) == ("image/png", png_bytes)

    def test_parse_percent_encoded_data_uri(self):
        assert parse_data_uri("data:text/plain,hello%20world") == ("text/plain", b"hello world")

    @pytest.mark.parametrize("value", [
        "https://example.com/a.png",
        "data:image/png;base64",
        "data:image/png;base64,@@@not-base64@@@",
    ])
    def test_malformed_data_uri_raises(self, value):
        with pytest.raises(ValueError):
            parse_data_uri(value)


class TestSniffMimeType:
    """Тесты определения MIME типа."""

    def test_png_by_content(self, png_bytes):
        assert sniff_mime_type(png_bytes, "misleading.jpg") == "image/png"

    def test_falls_back_to_filename(self):
        assert sniff_mime_type(b"garbage", "photo.jpg") == "image/jpeg"

    def test_unknown(self):
        assert sniff_mime_type(b"garbage") == "application/octet-stream"


class TestLoadFile:
    """Тесты загрузки локального файла."""

    def test_load_png(self, run, temp_image_png, quadrant_bitmap):
        loaded = run(ImageDecoder().load_file(temp_image_png))

        assert loaded.source.startswith("data:image/png;base64,")
        assert loaded.bitmap.shape == (600, 800, 3)
        assert np.array_equal(loaded.bitmap, quadrant_bitmap)
        assert loaded.metrics.natural_width == 800
        assert loaded.metrics.natural_height == 600

    def test_displayed_size_fits_display_box(self, run, temp_image_png):
        """Тест: 800x600 в рамке 600x300 -> 400x300."""
        decoder = ImageDecoder(max_display_width=600, max_display_height=300)

        metrics = run(decoder.load_file(temp_image_png)).metrics

        assert (metrics.displayed_width, metrics.displayed_height) == (400, 300)
        assert metrics.scale_x == pytest.approx(2.0)
        assert metrics.scale_y == pytest.approx(2.0)

    def test_small_image_is_not_upscaled(self, run, tmp_path):
        path = tmp_path / "small.png"
        cv2.imwrite(str(path), np.zeros((10, 20, 3), dtype=np.uint8))

        metrics = run(ImageDecoder().load_file(path)).metrics

        assert (metrics.displayed_width, metrics.displayed_height) == (20, 10)

    def test_each_load_gets_new_image_id(self, run, temp_image_png):
        decoder = ImageDecoder()

        first = run(decoder.load_file(temp_image_png))
        second = run(decoder.load_file(temp_image_png))

        assert first.image_id != second.image_id

    def test_file_not_found_error(self, run, tmp_path):
        with pytest.raises(ImageNotFoundError, match="Image not found"):
            run(ImageDecoder().load_file(tmp_path / "non_existent.jpg"))

    def test_corrupted_file_error(self, run, temp_corrupted_file):
        with pytest.raises(ImageDecodingError, match="Failed to decode image"):
            run(ImageDecoder().load_file(temp_corrupted_file))

    def test_empty_bytes_error(self, run):
        with pytest.raises(ImageDecodingError):
            run(ImageDecoder().load_bytes(b""))


class TestLoadUrl:
    """Тесты загрузки по URL."""

    def test_load_url(self, run, png_bytes):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, content=png_bytes, headers={"content-type": "image/png"})

        loaded = run(ImageDecoder(http_client=mock_client(handler)).load_url(IMAGE_URL))

        assert loaded.source == IMAGE_URL
        assert loaded.bitmap.shape == (600, 800, 3)

        # Анонимный запрос: без cookies и авторизации
        assert "cookie" not in seen[0].headers
        assert "authorization" not in seen[0].headers

    def test_load_url_follows_redirects(self, run, png_bytes):
        def handler(request):
            if request.url.path == "/old.png":
                return httpx.Response(302, headers={"location": "https://images.example.com/new.png"})
            return httpx.Response(200, content=png_bytes)

        loaded = run(
            ImageDecoder(http_client=mock_client(handler)).load_url("https://images.example.com/old.png")
        )

        assert loaded.metrics.natural_width == 800

    @pytest.mark.parametrize("status,body", [
        (403, b"Forbidden"),
        (200, b"<html>not an image</html>"),
    ])
    def test_load_url_failure_is_user_actionable(self, run, status, body):
        """Тест: ошибка загрузки предлагает загрузить файл напрямую."""
        decoder = ImageDecoder(http_client=mock_client(lambda request: httpx.Response(status, content=body)))

        with pytest.raises(ImageLoadError) as exc_info:
            run(decoder.load_url(IMAGE_URL))

        assert exc_info.value.message == URL_LOAD_ERROR_MESSAGE
        assert "Try uploading the file directly instead." in str(exc_info.value)

    def test_malformed_url_is_load_error(self, run, png_bytes):
        """Тест: некорректный URL от пользователя -> ImageLoadError."""
        decoder = ImageDecoder(http_client=mock_client(lambda request: httpx.Response(200, content=png_bytes)))

        with pytest.raises(ImageLoadError) as exc_info:
            run(decoder.load_url("http://[::1/a.png"))

        assert exc_info.value.message == URL_LOAD_ERROR_MESSAGE

    def test_load_url_network_error(self, run):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ImageLoadError):
            run(ImageDecoder(http_client=mock_client(handler)).load_url(IMAGE_URL))


class TestReadSource:
    """Тесты повторного чтения исходного изображения."""

    def test_read_data_uri(self, run, png_bytes):
        source = to_data_uri(png_bytes, "image/png")

        assert run(ImageDecoder().read_source(source)) == png_bytes

    def test_read_url(self, run, png_bytes):
        decoder = ImageDecoder(http_client=mock_client(lambda request: httpx.Response(200, content=png_bytes)))

        assert run(decoder.read_source(IMAGE_URL)) == png_bytes

    def test_read_url_http_error(self, run):
        decoder = ImageDecoder(http_client=mock_client(lambda request: httpx.Response(500)))

        with pytest.raises(ImageUnavailableError):
            run(decoder.read_source(IMAGE_URL))

    @pytest.mark.parametrize("source", ["file:///tmp/a.png", "data:image/png;base64,%%%", "http://[::1/a.png"])
    def test_unreadable_source(self, run, source):
        with pytest.raises(ImageUnavailableError):
            run(ImageDecoder().read_source(source))


def test_fetch_timeout_has_own_setting():
    assert ImageDecoder().timeout == IMAGE_FETCH_TIMEOUT
    assert ImageDecoder(timeout=5.0).timeout == 5.0
