"""Block error measures used to decide whether a quadtree node is split."""

import numpy as np

_C1 = (0.01 * 255) ** 2
_C2 = (0.03 * 255) ** 2
_LUMA_WEIGHTS = np.array([0.2989, 0.5870, 0.1140])


def _block(img, x, y, width, height):
    """Return the pixels of a block, clipped to the image, as an (n, 3) array."""
    arr = np.asarray(img)
    if arr.size == 0:
        return np.empty((0, 3), dtype=np.int64)
    return arr[y:y + height, x:x + width].reshape(-1, 3)


def variance(img, x, y, width, height):
    """Sum over the RGB channels of the per-channel variance of a block."""
    pixels = _block(img, x, y, width, height).astype(np.float64)
    n = width * height
    with np.errstate(divide="ignore", invalid="ignore"):
        mean = pixels.sum(axis=0) / n
        return float(np.float64(((pixels - mean) ** 2).sum()) / n)


def mad(img, x, y, width, height):
    """Sum over the RGB channels of the mean absolute deviation of a block."""
    pixels = _block(img, x, y, width, height).astype(np.float64)
    n = width * height
    with np.errstate(divide="ignore", invalid="ignore"):
        mean = pixels.sum(axis=0) / n
        return float(np.float64(np.abs(pixels - mean).sum()) / n)


def max_diff(img, x, y, width, height):
    """Mean over the RGB channels of the value range inside a block."""
    pixels = _block(img, x, y, width, height)
    low = np.full(3, 255)
    high = np.zeros(3, dtype=np.int64)
    if len(pixels):
        low = np.minimum(low, pixels.min(axis=0))
        high = np.maximum(high, pixels.max(axis=0))
    return float((high - low).sum() / 3.0)


def entropy(img, x, y, width, height):
    """Mean over the RGB channels of the Shannon entropy (bits) of a block."""
    pixels = _block(img, x, y, width, height)
    n = width * height
    total = 0.0
    for channel in pixels.T:
        _, counts = np.unique(channel, return_counts=True)
        probabilities = counts / n
        probabilities = probabilities[probabilities > 0]
        total -= float((probabilities * np.log2(probabilities)).sum())
    return total / 3.0


def ssim(ref, pred, x, y, width, height):
    """Luma-weighted structural similarity of a block of ``ref`` and ``pred``.

    ``pred`` is indexed from its own origin; ``ref`` from (x, y).
    An empty reference image gives 0.0.
    """
    ref_arr = np.asarray(ref)
    if ref_arr.size == 0:
        return 0.0

    ref_block = ref_arr[y:y + height, x:x + width].astype(np.float64)
    rows, cols = ref_block.shape[:2]
    pred_block = np.asarray(pred, dtype=np.float64)[:rows, :cols]
    n = width * height

    with np.errstate(divide="ignore", invalid="ignore"):
        mean_ref = ref_block.sum(axis=(0, 1)) / n
        mean_pred = pred_block.sum(axis=(0, 1)) / n
        diff_ref = ref_block - mean_ref
        diff_pred = pred_block - mean_pred
        var_ref = (diff_ref * diff_ref).sum(axis=(0, 1)) / (n - 1)
        var_pred = (diff_pred * diff_pred).sum(axis=(0, 1)) / (n - 1)
        cov = (diff_ref * diff_pred).sum(axis=(0, 1)) / (n - 1)

        per_channel = ((2 * mean_ref * mean_pred + _C1) * (2 * cov + _C2)) / (
            (mean_ref ** 2 + mean_pred ** 2 + _C1) * (var_ref + var_pred + _C2)
        )
    return float(per_channel @ _LUMA_WEIGHTS)