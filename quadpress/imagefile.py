"""Reading and writing RGB images, and assembling frames into a GIF."""

import glob
import os
import subprocess
import sys

import numpy as np
from PIL import Image, UnidentifiedImageError

JPEG_QUALITY = 75


def load_image(path):
    """Load an image as an int array of shape (height, width, 3), rows top first."""
    try:
        with Image.open(path) as image:
            return np.array(image.convert("RGB"), dtype=np.int64)
    except UnidentifiedImageError as exc:
        raise ValueError(f"unsupported or unreadable image format: {path}") from exc


def save_image(img, path):
    """Write an (height, width, 3) RGB array to ``path`` as a JPEG."""
    arr = np.asarray(img)
    if arr.ndim != 3 or arr.shape[0] == 0 or arr.shape[1] == 0:
        raise ValueError("cannot save an empty image")
    data = np.ascontiguousarray(np.clip(arr[..., :3], 0, 255).astype(np.uint8))
    Image.fromarray(data).save(path, format="JPEG", quality=JPEG_QUALITY)


def generate_gif(frame_dir, gif_path):
    """Join ``step_*.png`` frames in ``frame_dir`` into an animated GIF.

    Uses ImageMagick; returns whether it succeeded.
    """
    pattern = os.path.join(str(frame_dir), "step_*.png")
    frames = sorted(glob.glob(pattern)) or [pattern]
    command = ["magick", "-delay", "50", "-loop", "0", *frames, str(gif_path)]
    try:
        ok = subprocess.run(command, check=False).returncode == 0
    except OSError:
        ok = False
    if not ok:
        print("Error. Make sure ImageMagick is installed.", file=sys.stderr)
    return ok