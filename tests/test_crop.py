import numpy as np
import pytest

from docwarp.crop import clamp_rect, crop, crop_centered
from docwarp.errors import RepresentationUnavailable
from docwarp.geometry import Rect, Size
from docwarp.resize import resize_preserving_aspect


def gradient(h, w, channels=3):
    ys, xs = np.mgrid[0:h, 0:w]
    base = ((xs * 3 + ys * 5) % 256).astype(np.uint8)
    return np.dstack([base] * channels) if channels else base


def test_clamp_inside_is_unchanged():
    assert clamp_rect(Rect.from_xywh(10, 20, 30, 40), Size(100, 100)) == Rect.from_xywh(10, 20, 30, 40)


def test_clamp_truncates_oversized_request():
    assert clamp_rect(Rect.from_xywh(50, 60, 500, 500), Size(80, 90)) == Rect.from_xywh(50, 60, 30, 30)


def test_clamp_negative_origin_to_zero():
    assert clamp_rect(Rect.from_xywh(-15, -5, 40, 20), Size(80, 90)) == Rect.from_xywh(0, 0, 40, 20)


def test_clamp_origin_past_bounds_is_empty():
    r = clamp_rect(Rect.from_xywh(200, 200, 10, 10), Size(80, 90))
    assert (r.width, r.height) == (0, 0)


def test_crop_copies_source_region():
    img = gradient(60, 80)
    out = crop(img, Rect.from_xywh(12, 7, 25, 30))
    assert out.shape == (30, 25, 3)
    np.testing.assert_array_equal(out, img[7:37, 12:37])


def test_crop_never_exceeds_source():
    img = gradient(60, 80, channels=0)
    rng = np.random.default_rng(3)
    for _ in range(40):
        x, y = rng.uniform(-100, 150, size=2)
        w, h = rng.uniform(0, 300, size=2)
        out = crop(img, Rect.from_xywh(x, y, w, h))
        assert out.shape[0] <= 60 and out.shape[1] <= 80
        r = clamp_rect(Rect.from_xywh(x, y, w, h), Size(80, 60))
        np.testing.assert_array_equal(out, img[int(r.y):int(r.y + r.height), int(r.x):int(r.x + r.width)])


def test_crop_returns_independent_buffer():
    img = gradient(20, 20)
    before = img.copy()
    out = crop(img, Rect.from_xywh(0, 0, 10, 10))
    out[:] = 0
    np.testing.assert_array_equal(img, before)


def test_crop_centered_scenario():
    img = gradient(600, 800)
    result = crop_centered(img, Size(400, 400))
    assert result.ok
    assert result.image.shape == (400, 400, 3)

    resized = resize_preserving_aspect(img, Size(400, 400)).image
    assert resized.shape[:2] == (400, 533)
    np.testing.assert_array_equal(result.image, resized[0:400, 66:466])


@pytest.mark.parametrize("shape,target", [
    ((600, 800), (400, 400)),
    ((800, 600), (550, 425)),
    ((50, 70), (200, 120)),
    ((480, 640), (640, 480)),
])
def test_crop_centered_hits_target_exactly(shape, target):
    result = crop_centered(gradient(*shape), Size(*target))
    assert result.image.shape[:2] == (target[1], target[0])


def test_crop_centered_propagates_resize_failure():
    result = crop_centered(np.zeros((0, 0, 3), np.uint8), Size(10, 10))
    assert not result.ok
    assert isinstance(result.error, RepresentationUnavailable)
