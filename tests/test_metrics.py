import numpy as np
import pytest

from quadpress import metrics


def _uniform(height, width, color):
    return np.full((height, width, 3), color, dtype=np.int64)


def _random(height, width, seed=0):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width, 3), dtype=np.int64)


def test_uniform_block_has_no_error():
    img = _uniform(4, 4, (10, 20, 30))
    assert metrics.variance(img, 0, 0, 4, 4) == 0.0
    assert metrics.mad(img, 0, 0, 4, 4) == 0.0
    assert metrics.max_diff(img, 0, 0, 4, 4) == 0.0
    assert metrics.entropy(img, 0, 0, 4, 4) == 0.0


def test_variance_is_shift_invariant():
    img = _random(8, 8) // 2
    assert metrics.variance(img + 10, 0, 0, 8, 8) == pytest.approx(
        metrics.variance(img, 0, 0, 8, 8)
    )


def test_variance_scales_quadratically():
    img = _random(8, 8) // 2
    assert metrics.variance(img * 2, 0, 0, 8, 8) == pytest.approx(
        4 * metrics.variance(img, 0, 0, 8, 8)
    )


def test_mad_scales_linearly():
    img = _random(8, 8, seed=3) // 2
    assert metrics.mad(img * 2, 0, 0, 8, 8) == pytest.approx(
        2 * metrics.mad(img, 0, 0, 8, 8)
    )


def test_mad_is_non_negative_and_below_variance_root():
    img = _random(6, 6, seed=5)
    value = metrics.mad(img, 1, 1, 4, 4)
    assert value >= 0.0
    assert value <= 3 * np.sqrt(metrics.variance(img, 1, 1, 4, 4)) + 1e-9


def test_max_diff_single_channel_span():
    img = _uniform(2, 2, (0, 0, 0))
    img[0, 0, 0] = 255
    assert metrics.max_diff(img, 0, 0, 2, 2) == pytest.approx(85.0)


def test_max_diff_clips_block_to_image():
    img = _random(4, 4, seed=7)
    assert metrics.max_diff(img, 2, 2, 4, 4) == metrics.max_diff(img[2:, 2:], 0, 0, 2, 2)


def test_entropy_two_levels_is_one_bit():
    img = _uniform(2, 2, (0, 0, 0))
    img[0, :] = 255
    assert metrics.entropy(img, 0, 0, 2, 2) == pytest.approx(1.0)


def test_entropy_of_every_level_reaches_upper_bound():
    values = np.arange(256, dtype=np.int64).reshape(16, 16)
    img = np.stack([values, values, values], axis=-1)
    assert metrics.entropy(img, 0, 0, 16, 16) == pytest.approx(8.0)


def test_entropy_of_random_block_is_within_range():
    value = metrics.entropy(_random(10, 10, seed=11), 0, 0, 10, 10)
    assert 0.0 < value <= 8.0


def test_ssim_of_identical_blocks_is_weight_sum():
    img = _random(8, 8, seed=2)
    assert metrics.ssim(img, img, 0, 0, 8, 8) == pytest.approx(0.9999)


def test_ssim_uses_offset_into_reference():
    img = _random(10, 10, seed=4)
    block = img[3:7, 2:8]
    assert metrics.ssim(img, block, 2, 3, 6, 4) == pytest.approx(0.9999)


def test_ssim_is_symmetric():
    a = _random(6, 6, seed=8)
    b = _random(6, 6, seed=9)
    assert metrics.ssim(a, b, 0, 0, 6, 6) == pytest.approx(metrics.ssim(b, a, 0, 0, 6, 6))


def test_ssim_against_flat_average_is_lower_than_identity():
    img = _random(8, 8, seed=12)
    flat = np.broadcast_to(img.mean(axis=(0, 1)).astype(np.int64), img.shape)
    assert metrics.ssim(img, flat, 0, 0, 8, 8) < metrics.ssim(img, img, 0, 0, 8, 8)


def test_ssim_of_empty_reference_is_zero():
    assert metrics.ssim([], _uniform(2, 2, (1, 2, 3)), 0, 0, 2, 2) == 0.0