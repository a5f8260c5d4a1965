"""Quadtree construction over an RGB image and reconstruction from it."""

import os
from dataclasses import dataclass, field
from enum import IntEnum

import numpy as np

from quadpress import metrics
from quadpress.imagefile import save_image


class ErrorMethod(IntEnum):
    """How the error of a block is measured."""

    VARIANCE = 1
    MAD = 2
    MAX_DIFF = 3
    ENTROPY = 4
    SSIM = 5


@dataclass
class Node:
    """A rectangular block of the image; a leaf is drawn with its average colour."""

    x: int
    y: int
    width: int
    height: int
    avg_color: tuple = (0, 0, 0)
    is_leaf: bool = True
    children: list = field(default_factory=list)

    def depth(self):
        """Number of levels from this node down to its deepest leaf."""
        if self.is_leaf:
            return 1
        return 1 + max((child.depth() for child in self.children), default=0)

    def count(self):
        """Number of nodes in the subtree rooted here, this one included."""
        return 1 + sum(child.count() for child in self.children)


def average_color(img, x, y, width, height):
    """Mean RGB of a block, truncated to ints; (0, 0, 0) for an empty block."""
    n = width * height
    if n <= 0:
        return (0, 0, 0)
    arr = np.asarray(img)
    if arr.size == 0:
        return (0, 0, 0)
    sums = arr[y:y + height, x:x + width].reshape(-1, 3).astype(np.float64).sum(axis=0)
    return tuple(int(total / n) for total in sums)


def _block_error(image, node, method):
    args = (node.x, node.y, node.width, node.height)
    if method is ErrorMethod.VARIANCE:
        return metrics.variance(image, *args)
    if method is ErrorMethod.MAD:
        return metrics.mad(image, *args)
    if method is ErrorMethod.MAX_DIFF:
        return metrics.max_diff(image, *args)
    if method is ErrorMethod.ENTROPY:
        return metrics.entropy(image, *args)
    flat = np.broadcast_to(
        np.array(node.avg_color, dtype=np.int64), (node.height, node.width, 3)
    )
    return 1.0 - metrics.ssim(image, flat, *args)


def _build(image, node, threshold, min_size, method):
    node.avg_color = average_color(image, node.x, node.y, node.width, node.height)
    error = _block_error(image, node, method)

    node.is_leaf = (
        error <= threshold or node.width <= min_size or node.height <= min_size
    )
    if node.is_leaf:
        return

    half_w = node.width // 2
    half_h = node.height // 2
    if half_w * half_h < min_size:
        node.is_leaf = True
        return

    x, y, w, h = node.x, node.y, node.width, node.height
    node.children = [
        Node(x, y, half_w, half_h),
        Node(x + half_w, y, w - half_w, half_h),
        Node(x, y + half_h, half_w, h - half_h),
        Node(x + half_w, y + half_h, w - half_w, h - half_h),
    ]
    for child in node.children:
        _build(image, child, threshold, min_size, method)


def build_quadtree(image, node, threshold, min_size, method):
    """Split ``node`` recursively while its block error exceeds ``threshold``.

    ``method`` is an :class:`ErrorMethod` or its number; an unknown one raises
    ``ValueError``. Returns ``node``.
    """
    method = ErrorMethod(method)
    _build(np.asarray(image), node, threshold, min_size, method)
    return node


def fill_image(img, node):
    """Paint every leaf of ``node`` into the array ``img`` in place."""
    if node is None:
        return
    if node.is_leaf:
        img[node.y:node.y + node.height, node.x:node.x + node.width] = node.avg_color
        return
    for child in node.children:
        fill_image(img, child)


def fill_image_with_depth_limit(img, node, max_depth, current_depth=0):
    """Like :func:`fill_image`, but nodes at ``max_depth`` are painted whole."""
    if node is None:
        return
    if node.is_leaf or current_depth >= max_depth:
        img[node.y:node.y + node.height, node.x:node.x + node.width] = node.avg_color
        return
    for child in node.children:
        fill_image_with_depth_limit(img, child, max_depth, current_depth + 1)


def generate_gif_frames(image, root, frame_dir):
    """Write one frame per depth, ``step_NNNN.png``, into ``frame_dir``.

    Returns the paths written, shallowest first.
    """
    shape = np.asarray(image).shape
    paths = []
    for depth in range(root.depth() + 1):
        frame = np.zeros((shape[0], shape[1], 3), dtype=np.int64)
        fill_image_with_depth_limit(frame, root, depth)
        path = os.path.join(str(frame_dir), f"step_{depth:04d}.png")
        save_image(frame, path)
        paths.append(path)
    return paths