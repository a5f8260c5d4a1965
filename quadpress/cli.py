"""Interactive command that compresses an image with a quadtree."""

import argparse
import os
import shutil
import sys
import time

import numpy as np

from quadpress.imagefile import generate_gif, load_image, save_image
from quadpress.quadtree import (
    Node,
    build_quadtree,
    fill_image,
    generate_gif_frames,
)
from quadpress.validation import Prompter

STEP_FRAME_DIR = "steps"


def file_size(path):
    """Size of ``path`` in bytes, or -1 if it cannot be read."""
    try:
        return os.path.getsize(path)
    except OSError:
        return -1


def main(argv=None):
    """Ask for the settings, compress the image and report the result."""
    parser = argparse.ArgumentParser(
        prog="quadpress",
        description="Compress an image with a quadtree; settings are asked interactively.",
    )
    parser.parse_args(argv)

    prompter = Prompter()
    image_path = prompter.input_path()
    print(
        "1. Variance: 0 - 65025 \n"
        "2. MAD: 0 - 255 \n"
        "3. MaxDiff: 0 - 255 \n"
        "4. Entropy: 0 - 8 \n"
        "5. SSIM: 0 - 1 "
    )
    method = prompter.method()
    threshold = prompter.threshold(method)
    min_size = prompter.min_size()
    output_image_path = prompter.output_image_path()
    output_gif_path = prompter.gif_path()

    try:
        image = load_image(image_path)
    except (ValueError, OSError):
        print("Gagal memuat gambar!", file=sys.stderr)
        return 1
    height, width = image.shape[:2]
    if height == 0 or width == 0:
        print("Gagal memuat gambar!", file=sys.stderr)
        return 1

    print(f"Gambar dimuat: {width}x{height}")

    start = time.perf_counter()
    root = build_quadtree(image, Node(0, 0, width, height), threshold, min_size, method)
    duration = time.perf_counter() - start

    reconstructed = np.zeros((height, width, 3), dtype=np.int64)
    fill_image(reconstructed, root)
    save_image(reconstructed, output_image_path)

    print(f"Waktu eksekusi: {duration:g} detik")

    size_before = file_size(image_path)
    size_after = file_size(output_image_path)
    ratio = 1.0 - size_after / size_before

    print(f"Ukuran gambar sebelum: {size_before} bytes")
    print(f"Ukuran gambar setelah: {size_after} bytes")
    print(f"Persentase kompresi: {ratio * 100:g}%")
    print(f"Kedalaman pohon: {root.depth()}")
    print(f"Banyak simpul: {root.count()}")

    if output_gif_path:
        os.makedirs(STEP_FRAME_DIR, exist_ok=True)
        try:
            generate_gif_frames(image, root, STEP_FRAME_DIR)
            generate_gif(STEP_FRAME_DIR, output_gif_path)
            print(f"GIF proses kompresi disimpan ke {output_gif_path}")
        finally:
            shutil.rmtree(STEP_FRAME_DIR, ignore_errors=True)

    return 0


if __name__ == "__main__":
    sys.exit(main())