"""Grayscale and RGB raster images and the pixel operations applied to them."""

from __future__ import annotations

import enum
import math
import struct
from dataclasses import dataclass, replace
from itertools import accumulate, chain
from typing import Iterable, Iterator, Sequence, Tuple, Union

INTENSITY_LEVELS = 256
RGB_BLUR_BEFORE = 1
RGB_BLUR_AFTER = 7

Rgb = Tuple[int, int, int]


class ImageType(enum.IntEnum):
    """Kind of pixel an image holds."""

    GRAY = 0
    RGB = 1


def _check_shape(width: int, height: int, count: int) -> None:
    if width < 0 or height < 0:
        raise ValueError(f"image dimensions must not be negative: {width}x{height}")
    if count != width * height:
        raise ValueError(
            f"a {width}x{height} image needs {width * height} pixels, got {count}"
        )


def _as_rgb(pixel: Iterable[int]) -> Rgb:
    values = tuple(int(v) for v in pixel)
    if len(values) != 3:
        raise ValueError(f"an RGB pixel has three components, got {values!r}")
    return values  # type: ignore[return-value]


def _shape_from_rows(rows: Sequence[Sequence]) -> Tuple[int, int]:
    height = len(rows)
    width = len(rows[0]) if rows else 0
    if any(len(row) != width for row in rows):
        raise ValueError("all rows of an image must have the same length")
    return width, height


class _RasterMixin:
    width: int
    height: int
    pixels: tuple

    def rows(self) -> Iterator[tuple]:
        """Yield the pixel rows from top to bottom."""
        for start in range(0, self.width * self.height, max(self.width, 1)):
            yield self.pixels[start:start + self.width]

    def __getitem__(self, position: Tuple[int, int]):
        row, col = position
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"pixel ({row}, {col}) is outside the image")
        return self.pixels[row * self.width + col]


@dataclass(frozen=True)
class GrayImage(_RasterMixin):
    """Grayscale image; pixels are intensities stored row by row."""

    width: int
    height: int
    pixels: Tuple[int, ...]

    type = ImageType.GRAY

    def __post_init__(self) -> None:
        object.__setattr__(self, "pixels", tuple(int(p) for p in self.pixels))
        _check_shape(self.width, self.height, len(self.pixels))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "GrayImage":
        """Build an image from a list of pixel rows."""
        width, height = _shape_from_rows(rows)
        return cls(width, height, tuple(chain.from_iterable(rows)))


@dataclass(frozen=True)
class RgbImage(_RasterMixin):
    """Colour image; pixels are (red, green, blue) triples stored row by row."""

    width: int
    height: int
    pixels: Tuple[Rgb, ...]

    type = ImageType.RGB

    def __post_init__(self) -> None:
        object.__setattr__(self, "pixels", tuple(_as_rgb(p) for p in self.pixels))
        _check_shape(self.width, self.height, len(self.pixels))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Iterable[int]]]) -> "RgbImage":
        """Build an image from a list of pixel rows."""
        width, height = _shape_from_rows(rows)
        return cls(width, height, tuple(chain.from_iterable(rows)))


Image = Union[GrayImage, RgbImage]


# ---------------------------------------------------------------- geometry


def flip_vertical(image: Image) -> Image:
    """Return the image mirrored top to bottom."""
    return replace(image, pixels=tuple(chain.from_iterable(reversed(list(image.rows())))))


def flip_horizontal(image: Image) -> Image:
    """Return the image mirrored left to right."""
    return replace(
        image, pixels=tuple(chain.from_iterable(row[::-1] for row in image.rows()))
    )


def transpose(image: Image) -> Image:
    """Return the image with rows and columns swapped."""
    columns = zip(*image.rows())
    return type(image)(image.height, image.width, tuple(chain.from_iterable(columns)))


# ---------------------------------------------------------------- histogram equalisation


def cumulative_histogram(histogram: Iterable[int]) -> list:
    """Return the running sum of a histogram."""
    return list(accumulate(histogram))


def min_cdf(cdf: Iterable[int]) -> int:
    """Return the first non-zero value of a cumulative histogram, or 0."""
    return next((value for value in cdf if value != 0), 0)


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _scale(numerator: int, denominator: int) -> int:
    if denominator == 0:
        return 0
    ratio = _f32(_f32(numerator) / _f32(denominator))
    return _round_half_away(_f32(ratio * (INTENSITY_LEVELS - 1)))


def _equalize_channel(
    values: Sequence[int], width: int, height: int, tile_width: int, tile_height: int
) -> list:
    result = [0] * len(values)
    for top in range(0, height, tile_height):
        for left in range(0, width, tile_width):
            positions = [
                row * width + col
                for row in range(top, min(top + tile_height, height))
                for col in range(left, min(left + tile_width, width))
            ]
            histogram = [0] * INTENSITY_LEVELS
            for position in positions:
                histogram[values[position]] += 1
            cdf = cumulative_histogram(histogram)
            lowest = min_cdf(cdf)
            denominator = tile_width * tile_height - lowest
            for position in positions:
                result[position] = _scale(cdf[values[position]] - lowest, denominator)
    return result


def _channels(image: Image) -> list:
    if isinstance(image, GrayImage):
        return [list(image.pixels)]
    return [list(channel) for channel in zip(*image.pixels)]


def _from_channels(image: Image, channels: list) -> Image:
    if isinstance(image, GrayImage):
        return replace(image, pixels=tuple(channels[0]))
    return replace(image, pixels=tuple(zip(*channels)))


def clahe(image: Image, tile_width: int, tile_height: int) -> Image:
    """Equalise the histogram of each tile of the image, channel by channel."""
    if tile_width < 1 or tile_height < 1:
        raise ValueError("tile dimensions must be positive")
    if not image.pixels:
        return image
    channels = _channels(image)
    if any(not 0 <= v < INTENSITY_LEVELS for channel in channels for v in channel):
        raise ValueError(f"pixel values must lie in 0..{INTENSITY_LEVELS - 1}")
    equalized = [
        _equalize_channel(channel, image.width, image.height, tile_width, tile_height)
        for channel in channels
    ]
    return _from_channels(image, equalized)


# ---------------------------------------------------------------- blurring


def kernel_average_gray(image: GrayImage, row: int, col: int, kernel: int) -> int:
    """Average the pixels met on a spiral walk of kernel*kernel steps from (row, col).

    Steps that leave the image are not counted.
    """
    if kernel < 1:
        raise ValueError("kernel size must be positive")
    if not (0 <= row < image.height and 0 <= col < image.width):
        raise ValueError(f"pixel ({row}, {col}) is outside the image")
    total = count = 0
    r, c = row, col
    for ring in range(kernel):
        for step in range(kernel):
            if 0 <= r < image.height and 0 <= c < image.width:
                total += image.pixels[r * image.width + c]
                count += 1
            delta = 1 if ring % 2 == 1 else -1
            if step < ring:
                c += delta
            else:
                r += delta
    return total // count


def _average_window(image: RgbImage, row: int, col: int) -> Rgb:
    window = [
        image.pixels[r * image.width + c]
        for r in range(max(0, row - RGB_BLUR_BEFORE), min(image.height, row + RGB_BLUR_AFTER + 1))
        for c in range(max(0, col - RGB_BLUR_BEFORE), min(image.width, col + RGB_BLUR_AFTER + 1))
    ]
    return tuple(sum(channel) // len(window) for channel in zip(*window))  # type: ignore[return-value]


def median_blur(image: Image, kernel_size: int) -> Image:
    """Replace each pixel by the average of its neighbourhood.

    Grayscale images use a spiral walk of ``kernel_size`` rings; RGB images
    always use the fixed window from one pixel before to seven pixels after.
    """
    coordinates = [(r, c) for r in range(image.height) for c in range(image.width)]
    if isinstance(image, GrayImage):
        if kernel_size < 1:
            raise ValueError("kernel size must be positive")
        pixels = tuple(kernel_average_gray(image, r, c, kernel_size) for r, c in coordinates)
    else:
        pixels = tuple(_average_window(image, r, c) for r, c in coordinates)
    return replace(image, pixels=pixels)