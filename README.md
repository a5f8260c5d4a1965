# quadpress

quadpress compresses an image with a quadtree. It splits the image into
quadrants, and keeps splitting each quadrant. A block is not split further when
its error is at or below a threshold, or when it reaches the minimum size. Each
leaf block is then painted with its average colour.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Usage

Start the interactive program:

```
quadpress
```

You can also run `python -m quadpress.cli`. The command takes no options except
`--help`. It asks for every setting on standard input, and the prompts and
messages are in Indonesian. If an answer is not valid, it asks again. It asks
for these settings in this order:

1. **Input image**: an absolute path to an existing `.png`, `.jpg`, `.jpeg` or `.bmp` file.
2. **Error method**, a number from 1 to 5. The program prints the usual range of each:
   - `1` Variance: 0 to 65025
   - `2` MAD (mean absolute deviation): 0 to 255
   - `3` MaxDiff (max minus min per channel, averaged): 0 to 255
   - `4` Entropy: 0 to 8
   - `5` SSIM, measured as `1 - SSIM`: 0 to 1
3. **Threshold**: any number greater than or equal to 0.
4. **Minimum block size**: a positive integer.
5. **Output image**: an absolute path with one of the image extensions above. The result is always written as JPEG, whatever the extension.
6. **GIF path**: an absolute path ending in `.gif`. This one is optional. Leave it empty to skip the GIF.

When it finishes, the program prints:

- the image dimensions
- the time taken to build the tree
- the file sizes before and after
- the compression percentage
- the tree depth and the node count

It returns 1 if the input image cannot be loaded.

### GIF output

If you give a GIF path, quadpress creates a `steps` directory in the current
working directory. It writes one frame there for each tree depth, named
`step_0000.png`, `step_0001.png` and so on. The frame data is JPEG-encoded, even
though the names end in `.png`. quadpress then joins the frames into an animated
GIF with the ImageMagick `magick` command and removes the `steps` directory. If
`magick` is not installed or fails, it prints an error and carries on.

## Library use

```python
import numpy as np

from quadpress.imagefile import load_image, save_image
from quadpress.quadtree import ErrorMethod, Node, build_quadtree, fill_image

image = load_image("/tmp/photo.png")        # int array, shape (height, width, 3)
height, width = image.shape[:2]
root = build_quadtree(image, Node(0, 0, width, height),
                      threshold=20.0, min_size=4, method=ErrorMethod.VARIANCE)

result = np.zeros_like(image)
fill_image(result, root)
save_image(result, "/tmp/photo_compressed.jpg")
print(root.depth(), root.count())
```

### Modules

- `quadpress.metrics` contains the block error measures. Each one takes
  `(img, x, y, width, height)`:
  - `variance`: the per-channel variances, summed.
  - `mad`: the per-channel mean absolute deviations, summed.
  - `max_diff`: the per-channel ranges, averaged.
  - `entropy`: the per-channel Shannon entropies in bits, averaged.
  - `ssim(ref, pred, x, y, width, height)`: a luma-weighted SSIM. It returns 0.0 for an empty reference.
- `quadpress.quadtree` contains the tree itself:
  - `ErrorMethod`, the choice of error measure.
  - `Node`, with its `depth()` and `count()` methods.
  - `average_color`.
  - `build_quadtree`, which raises `ValueError` for an unknown method.
  - `fill_image` and `fill_image_with_depth_limit`.
  - `generate_gif_frames`.
- `quadpress.imagefile` reads and writes images:
  - `load_image`, which raises `ValueError` for an unreadable format.
  - `save_image`, which writes JPEG.
  - `generate_gif`, which calls ImageMagick and returns whether it succeeded.
- `quadpress.validation` checks paths and asks for settings:
  - Path checks: `is_absolute_path`, `get_extension`, `is_valid_image_extension`, `is_valid_gif_extension` and `file_exists`.
  - `Prompter(input_stream, output_stream)`, which asks for each setting on the streams you give it. It uses standard input and standard output by default.
- `quadpress.cli` runs the command:
  - `main`, the interactive command.
  - `file_size`, which returns -1 for a file that cannot be read.

## What it does not do

- The GIF step does not work without ImageMagick's `magick` command.
- There is no way to give the settings as command-line options. The `quadpress` command always asks for them interactively.