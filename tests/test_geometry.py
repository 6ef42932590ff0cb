import pytest

from utils.geometry import Rect, cover_fit, scaled_size

FRAME = Rect(200, 200, 300, 200)


def test_wide_image_fits_height_and_overflows_width():
    fit = cover_fit(800, 400, FRAME)
    assert fit.scale == pytest.approx(0.5)
    assert scaled_size(800, 400, fit.scale) == pytest.approx((400, 200))
    assert (fit.center_x, fit.center_y) == (350, 300)
    assert fit.clip == FRAME


def test_tall_image_fits_width_and_overflows_height():
    fit = cover_fit(400, 800, FRAME)
    assert fit.scale == pytest.approx(0.75)
    assert scaled_size(400, 800, fit.scale) == pytest.approx((300, 600))
    assert (fit.center_x, fit.center_y) == (350, 300)
    assert fit.clip == FRAME


@pytest.mark.parametrize("iw, ih", [(800, 400), (400, 800), (600, 400), (1, 1), (1920, 1080), (37, 999)])
@pytest.mark.parametrize("frame", [FRAME, Rect(0, 0, 50, 400), Rect(-20, 15, 640, 480)])
def test_cover_fit_fills_frame(iw, ih, frame):
    fit = cover_fit(iw, ih, frame)
    sw, sh = scaled_size(iw, ih, fit.scale)
    width_fits = sw == pytest.approx(frame.width)
    height_fits = sh == pytest.approx(frame.height)
    assert width_fits or height_fits
    assert sw >= frame.width - 1e-9
    assert sh >= frame.height - 1e-9


def test_cover_fit_is_idempotent():
    assert cover_fit(1234, 567, FRAME) == cover_fit(1234, 567, FRAME)


def test_equal_ratio_scales_to_width():
    fit = cover_fit(600, 400, FRAME)
    assert fit.scale == pytest.approx(0.5)


@pytest.mark.parametrize("iw, ih", [(0, 100), (100, 0), (-5, 10)])
def test_cover_fit_rejects_empty_images(iw, ih):
    with pytest.raises(ValueError):
        cover_fit(iw, ih, FRAME)


def test_rect_contains_point_includes_edges():
    assert FRAME.contains_point(200, 200)
    assert FRAME.contains_point(500, 400)
    assert FRAME.contains_point(350, 300)
    assert not FRAME.contains_point(199.9, 300)
    assert not FRAME.contains_point(350, 400.1)


def test_rect_intersection():
    assert FRAME.intersection(Rect(150, 250, 100, 100)) == Rect(200, 250, 50, 100)
    empty = FRAME.intersection(Rect(0, 0, 10, 10))
    assert empty.width == 0 and empty.height == 0
