# picturelab

A small raster image editor for grayscale and RGB images stored in a plain
text pixel format. It offers vertical and horizontal flips, transposition,
a neighbourhood blur and tile-based histogram equalisation. It keeps an
edit history with undo, previous and next steps, builds chains of random
effects, and writes images out as PNG.

The package uses only the standard library.

## Installation

```
pip install .
```

## Text format

The first line holds the width and the second the height. The pixels
follow row by row, each row on its own line and every pixel closed by a
comma: `value,` for grayscale, `red green blue,` for RGB. A 2x2 grayscale
image:

```
2
2
10,20,
30,40,
```

`picturelab.textformat` reads and writes this format with
`read_gray_image(stream)`, `read_rgb_image(stream)`,
`write_gray_image(image, stream)` and `write_rgb_image(image, stream)`.
Reading raises `ValueError` when the dimensions are missing or invalid,
when the number of pixels does not match, or when a pixel is malformed.

## Command line

```
picturelab IMAGE [--gray] [-p PROCESS ...] [-o OUT.txt] [--png OUT.png]
           [--random-effects DIR] [--seed N]
```

- `IMAGE`: an image in the text format, read as RGB unless `--gray` is given.
- `-p/--process`: a process to apply; may be repeated, applied in order.
  The choices are `blur`, `equalizer`, `vertical`, `horizontal`,
  `transpose`, `undo`, `next`, `previous` and `random_effects` (the last
  leaves the image unchanged).
- `-o/--output`: write the resulting image in the text format.
- `--png`: write the resulting image as a PNG file.
- `--random-effects DIR`: apply five randomly chosen effects one after
  another to the result and write the chain as `effect_0.txt` (the
  starting image) to `effect_5.txt` in `DIR`. `--seed` makes the choice
  repeatable.

With none of `-o`, `--png` or `--random-effects`, the result is printed in
the text format. Errors reading or writing files and malformed images are
reported on standard error with exit status 1.

```
picturelab gray.txt --gray -p horizontal -p blur --png out.png
```

## Library use

```python
import io

from picturelab.images import flip_horizontal, median_blur
from picturelab.textformat import read_gray_image, write_gray_image
from picturelab.history import History

with open("gray.txt") as stream:
    image = read_gray_image(stream)

history = History(image)
history.add(flip_horizontal(image))
history.add(median_blur(history.current, 12))
history.undo()

out = io.StringIO()
write_gray_image(history.current, out)
```

### Images (`picturelab.images`)

- `GrayImage(width, height, pixels)` and `RgbImage(width, height, pixels)`
  are immutable; pixels are stored row by row, as integers or as
  `(red, green, blue)` triples. `from_rows(rows)` builds an image from a
  list of rows, `rows()` yields the rows, and `image[row, col]` returns a
  pixel. Each has a `type` of `ImageType.GRAY` or `ImageType.RGB`.
- `flip_vertical`, `flip_horizontal` and `transpose` return new images.
- `clahe(image, tile_width, tile_height)` equalises the histogram of each
  tile separately, channel by channel. Pixel values must lie in 0..255.
- `median_blur(image, kernel_size)` replaces each pixel by an average of
  its neighbourhood: for grayscale, the pixels met on a spiral walk of
  `kernel_size` rings (`kernel_average_gray` computes one pixel); for RGB,
  a fixed window from one pixel before to seven pixels after, whatever the
  kernel size.
- `cumulative_histogram` and `min_cdf` are the helpers used by `clahe`.

### History (`picturelab.history`)

`History(image)` holds the versions of an image and a cursor on the one
shown (`current`, `position`, `type`, `len()`, iteration).

- `add(image)` appends after the newest version and moves to it; adding an
  image of the other type raises `TypeError`.
- `undo()` discards the newest version and moves to the one before it;
  `IndexError` when only one version is left.
- `previous()` and `next()` move the cursor when possible.
- `browse(version)` moves `version` steps forward; `IndexError` when there
  are not that many.

`random_effects(image, rng=None)` returns the image followed by the
results of five randomly chosen effects (blur, equalisation, flips,
transpose), each applied to the previous result.

### Processing (`picturelab.processing`)

`apply_process(history, process)` applies one `ImageProcess` to a history
and returns the image now shown: edits are appended, `UNDO`, `NEXT` and
`PREVIOUS` move through the history. `main(argv=None)` runs the command line.

### PNG export (`picturelab.pngexport`)

`encode_png(width, height, channels, data)` builds PNG bytes from 8-bit
interleaved samples (1 to 4 channels). `image_gray_from_txt(txt_path,
output_path)` and `image_rgb_from_txt(txt_path, output_path)` turn a text
image into a PNG file, raising `ValueError` for samples outside 0..255.

## What it does not do

- It has no graphical window: images are edited from the command line or
  from Python and written out as text or PNG.
- It cannot read PNG or other picture files; images must be given in the
  text format.

## Tests

```
pip install .[test]
pytest
```