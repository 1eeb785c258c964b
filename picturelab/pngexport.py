"""PNG encoding of raw pixel data and of images stored in the text format."""

from __future__ import annotations

import struct
import zlib
from os import PathLike
from typing import Iterable, Sequence, Union

from picturelab.textformat import read_gray_image, read_rgb_image

PNG_SIGNATURE = bytes([137, 80, 78, 71, 13, 10, 26, 10])
COMPRESSION_LEVEL = 8
MAX_SAMPLE = 255

# Number of interleaved channels -> PNG colour type (Y, YA, RGB, RGBA).
_COLOR_TYPES = {1: 0, 2: 4, 3: 2, 4: 6}

PathType = Union[str, PathLike]


def _chunk(tag: bytes, payload: bytes) -> bytes:
    crc = zlib.crc32(tag + payload) & 0xFFFFFFFF
    return struct.pack(">I", len(payload)) + tag + payload + struct.pack(">I", crc)


def encode_png(width: int, height: int, channels: int, data: Union[bytes, Iterable[int]]) -> bytes:
    """Encode 8-bit interleaved pixel data, stored row by row, as a PNG file."""
    if channels not in _COLOR_TYPES:
        raise ValueError(f"channels must be 1, 2, 3 or 4, got {channels}")
    if width < 1 or height < 1:
        raise ValueError(f"image dimensions must be positive: {width}x{height}")
    samples = bytes(data)
    stride = width * channels
    if len(samples) != stride * height:
        raise ValueError(
            f"a {width}x{height} image with {channels} channels needs "
            f"{stride * height} bytes, got {len(samples)}"
        )
    view = memoryview(samples)
    raw = b"".join(
        b"\x00" + view[start:start + stride].tobytes()
        for start in range(0, len(samples), stride)
    )
    header = struct.pack(
        ">IIBBBBB", width, height, 8, _COLOR_TYPES[channels], 0, 0, 0
    )
    return b"".join(
        (
            PNG_SIGNATURE,
            _chunk(b"IHDR", header),
            _chunk(b"IDAT", zlib.compress(raw, COMPRESSION_LEVEL)),
            _chunk(b"IEND", b""),
        )
    )


def _check_samples(samples: Sequence[int]) -> None:
    for index, value in enumerate(samples):
        if not 0 <= value <= MAX_SAMPLE:
            raise ValueError(f"pixel sample {index} out of range: {value}")


def image_gray_from_txt(txt_path: PathType, output_path: PathType) -> None:
    """Convert a grayscale image in the text format into a PNG file."""
    with open(txt_path, encoding="utf-8") as stream:
        image = read_gray_image(stream)
    _check_samples(image.pixels)
    png = encode_png(image.width, image.height, 1, image.pixels)
    with open(output_path, "wb") as out:
        out.write(png)


def image_rgb_from_txt(txt_path: PathType, output_path: PathType) -> None:
    """Convert a colour image in the text format into a PNG file."""
    with open(txt_path, encoding="utf-8") as stream:
        image = read_rgb_image(stream)
    samples = [value for pixel in image.pixels for value in pixel]
    _check_samples(samples)
    png = encode_png(image.width, image.height, 3, samples)
    with open(output_path, "wb") as out:
        out.write(png)