import pytest

from contracts.region_dto import ImageMetrics, PixelRect, Selection, SelectionUnit
from src.region_ocr.geometry.crop_resolver import CropResolver


@pytest.fixture
def resolver():
    return CropResolver()


def test_percent_selection_example(resolver, display_metrics):
    """Тест: 400x300 на экране, 800x600 натурально, 25/25/50/50 %."""
    selection = Selection(unit=SelectionUnit.PERCENT, x=25, y=25, width=50, height=50)

    rect = resolver.resolve(selection, display_metrics)

    assert rect == PixelRect(x=200, y=150, width=400, height=300)


def test_pixel_selection_is_scaled_without_percent_division(resolver, display_metrics):
    """Тест: пиксели отображения умножаются на масштаб."""
    selection = Selection(unit=SelectionUnit.PIXEL, x=10, y=20, width=100, height=50)

    rect = resolver.resolve(selection, display_metrics)

    assert rect == PixelRect(x=20, y=40, width=200, height=100)


@pytest.mark.parametrize("natural,displayed", [
    ((800, 600), (400, 300)),
    ((1200, 900), (400, 300)),
    ((400, 300), (400, 300)),
    ((1000, 250), (600, 150)),
])
def test_percent_selection_scales_linearly(resolver, natural, displayed):
    """Тест: результат пропорционален natural / displayed по каждой оси."""
    metrics = ImageMetrics(
        displayed_width=displayed[0],
        displayed_height=displayed[1],
        natural_width=natural[0],
        natural_height=natural[1],
    )
    selection = Selection(unit=SelectionUnit.PERCENT, x=10, y=20, width=30, height=40)

    rect = resolver.resolve(selection, metrics)

    assert rect.x == pytest.approx(0.10 * natural[0])
    assert rect.y == pytest.approx(0.20 * natural[1])
    assert rect.width == pytest.approx(0.30 * natural[0])
    assert rect.height == pytest.approx(0.40 * natural[1])


def test_fractional_scale_keeps_floats(resolver):
    """Тест: дробный масштаб не округляется в resolver."""
    metrics = ImageMetrics(
        displayed_width=333,
        displayed_height=333,
        natural_width=1000,
        natural_height=1000,
    )
    selection = Selection(unit=SelectionUnit.PIXEL, x=1, y=1, width=100, height=100)

    rect = resolver.resolve(selection, metrics)

    assert rect.width == pytest.approx(100 * 1000 / 333)
    assert rect.x == pytest.approx(1000 / 333)


def test_result_is_not_clamped(resolver, display_metrics):
    """Тест: выход за границы изображения сохраняется."""
    selection = Selection(unit=SelectionUnit.PERCENT, x=90, y=0, width=50, height=10)

    rect = resolver.resolve(selection, display_metrics)

    assert rect.x + rect.width > display_metrics.natural_width


@pytest.mark.parametrize("selection", [
    None,
    Selection(unit=SelectionUnit.PERCENT, x=25, y=25, width=0, height=50),
    Selection(unit=SelectionUnit.PERCENT, x=25, y=25, width=50, height=0),
    Selection(unit=SelectionUnit.PIXEL, x=0, y=0, width=None, height=10),
    Selection.from_dict({"unit": "%", "x": 10, "y": 10}),
])
def test_invalid_selection_returns_none(resolver, display_metrics, selection):
    """Тест: нулевая или отсутствующая ширина/высота -> None, без исключения."""
    assert resolver.resolve(selection, display_metrics) is None


@pytest.mark.parametrize("displayed", [(0, 300), (400, 0), (0, 0)])
def test_zero_displayed_size_returns_none(resolver, displayed):
    """Тест: изображение ещё не отображено."""
    metrics = ImageMetrics(
        displayed_width=displayed[0],
        displayed_height=displayed[1],
        natural_width=800,
        natural_height=600,
    )

    assert resolver.resolve(Selection.default(), metrics) is None


def test_missing_metrics_returns_none(resolver):
    assert resolver.resolve(Selection.default(), None) is None
