"""Plain-text storage of images.

The file starts with the width and the height on lines of their own.  The
pixels follow row by row, every pixel closed by a comma and every row on its
own line: ``value,`` for grayscale, ``red green blue,`` for colour.
"""

from __future__ import annotations

from typing import List, TextIO, Tuple

from picturelab.images import GrayImage, RgbImage


def _read_header(stream: TextIO) -> Tuple[int, int, str]:
    text = stream.read()
    parts = text.split("\n", 2)
    if len(parts) < 2:
        raise ValueError("image text must start with the width and the height")
    try:
        width = int(parts[0].strip())
        height = int(parts[1].strip())
    except ValueError as exc:
        raise ValueError(f"invalid image dimensions: {parts[0]!r}, {parts[1]!r}") from exc
    if width < 0 or height < 0:
        raise ValueError(f"image dimensions must not be negative: {width}x{height}")
    body = parts[2] if len(parts) == 3 else ""
    return width, height, body


def _pixel_tokens(body: str, expected: int) -> List[str]:
    tokens = [token.strip() for token in body.split(",")]
    tokens = [token for token in tokens if token]
    if len(tokens) != expected:
        raise ValueError(f"expected {expected} pixels, found {len(tokens)}")
    return tokens


def _parse_int(token: str) -> int:
    try:
        return int(token)
    except ValueError as exc:
        raise ValueError(f"invalid pixel value: {token!r}") from exc


def read_gray_image(stream: TextIO) -> GrayImage:
    """Read a grayscale image from a text stream."""
    width, height, body = _read_header(stream)
    tokens = _pixel_tokens(body, width * height)
    return GrayImage(width, height, tuple(_parse_int(token) for token in tokens))


def read_rgb_image(stream: TextIO) -> RgbImage:
    """Read a colour image from a text stream."""
    width, height, body = _read_header(stream)
    pixels = []
    for token in _pixel_tokens(body, width * height):
        components = token.split()
        if len(components) != 3:
            raise ValueError(f"an RGB pixel needs three values, got {token!r}")
        pixels.append(tuple(_parse_int(component) for component in components))
    return RgbImage(width, height, tuple(pixels))


def _write(stream: TextIO, width: int, height: int, rows) -> None:
    stream.write(f"{width}\n{height}\n")
    stream.write("\n".join(rows))


def write_gray_image(image: GrayImage, stream: TextIO) -> None:
    """Write a grayscale image to a text stream."""
    rows = ("".join(f"{value}," for value in row) for row in image.rows())
    _write(stream, image.width, image.height, rows)


def write_rgb_image(image: RgbImage, stream: TextIO) -> None:
    """Write a colour image to a text stream."""
    rows = ("".join(f"{r} {g} {b}," for r, g, b in row) for row in image.rows())
    _write(stream, image.width, image.height, rows)