import numpy as np
import pytest

from crop_ocr.config import PreprocessConfig
from crop_ocr.pipeline.preprocess import crop_to_ink, normalize, pre_process, resize_and_pad, to_gray

H, W = 32, 384


def test_to_gray_uses_luma_weights():
    rgb = np.array([[[255, 0, 0], [0, 255, 0], [0, 0, 255], [255, 255, 255]]], dtype=np.uint8)
    gray = to_gray(rgb)
    assert gray.dtype == np.float32
    assert gray.shape == (1, 4)
    np.testing.assert_allclose(gray[0], [0.2989, 0.5870, 0.1140, 0.9999], atol=1e-5)


def test_to_gray_ignores_alpha():
    rgba = np.zeros((2, 2, 4), dtype=np.uint8)
    rgba[..., 3] = 255
    np.testing.assert_array_equal(to_gray(rgba), np.zeros((2, 2), dtype=np.float32))


def test_uniform_crop_is_mono():
    buffer, non_mono = pre_process(np.full((H, W), 0.7, dtype=np.float32))
    assert non_mono is False
    assert buffer.shape == (H, W)
    assert buffer.dtype == np.float32


@pytest.mark.parametrize("shape", [(0, 0), (0, 10), (10, 0), (1, 1), (1, 500), (300, 2)])
def test_degenerate_dimensions_do_not_fail(shape):
    buffer, non_mono = pre_process(np.zeros(shape, dtype=np.float32))
    assert buffer.shape == (H, W)
    assert non_mono is False


def test_near_uniform_crop_respects_threshold():
    crop = np.full((10, 40), 0.5, dtype=np.float32)
    crop[3, 3] = 0.505
    assert pre_process(crop)[1] is True
    assert pre_process(crop, config=PreprocessConfig(mono_threshold=0.01))[1] is False


def test_text_crop_is_cropped_and_padded(text_crop):
    buffer, non_mono = pre_process(text_crop.astype(np.float32) / 255.0)
    assert non_mono is True
    assert buffer.shape == (H, W)
    # The 10x80 ink block fills the height and keeps its 8:1 aspect ratio.
    np.testing.assert_array_equal(buffer[:, :256], 0.0)
    np.testing.assert_array_equal(buffer[:, 256:], 1.0)


def test_dark_background_is_inverted(text_crop):
    inverted = 1.0 - text_crop.astype(np.float32) / 255.0
    light, _ = pre_process(text_crop.astype(np.float32) / 255.0)
    dark, non_mono = pre_process(inverted)
    assert non_mono is True
    np.testing.assert_array_equal(dark, light)


def test_auto_invert_can_be_disabled():
    crop = np.zeros((20, 100), dtype=np.float32)
    crop[5:15, 10:90] = 1.0
    buffer, _ = pre_process(crop, config=PreprocessConfig(auto_invert=False))
    # Without inversion the dark background is the ink, so nothing gets cropped away.
    assert buffer[0, 0] == 0.0


def test_wide_crop_fills_width():
    crop = np.ones((10, 400), dtype=np.float32)
    crop[2:8, :] = 0.0
    buffer, non_mono = pre_process(crop)
    assert non_mono is True
    np.testing.assert_array_equal(buffer[:5], 0.0)
    np.testing.assert_array_equal(buffer[5:], 1.0)


def test_custom_canvas_size(text_crop):
    buffer, _ = pre_process(text_crop.astype(np.float32), height=16, width=64)
    assert buffer.shape == (16, 64)


def test_pre_process_is_deterministic():
    rng = np.random.default_rng(7)
    crop = rng.random((24, 90), dtype=np.float32)
    first, _ = pre_process(crop)
    second, _ = pre_process(crop.copy())
    np.testing.assert_array_equal(first, second)


def test_values_stay_normalized():
    rng = np.random.default_rng(3)
    crop = rng.random((40, 120), dtype=np.float32) * 80.0 + 20.0
    buffer, _ = pre_process(crop)
    assert buffer.min() >= -1e-6
    assert buffer.max() <= 1.0 + 1e-6


def test_normalize_rejects_flat_input():
    assert normalize(np.full((3, 3), 5.0), auto_invert=True) is None


def test_crop_to_ink_without_ink_returns_input():
    gray = np.ones((4, 4), dtype=np.float32)
    assert crop_to_ink(gray, 0.6) is gray


def test_resize_and_pad_keeps_minimum_size():
    out = resize_and_pad(np.zeros((100, 1), dtype=np.float32), H, W)
    assert out.shape == (H, W)
    np.testing.assert_array_equal(out[:, 0], 0.0)
    np.testing.assert_array_equal(out[:, 1:], 1.0)
