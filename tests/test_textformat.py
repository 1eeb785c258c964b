import io

import pytest

from picturelab.images import GrayImage, RgbImage
from picturelab.textformat import (
    read_gray_image,
    read_rgb_image,
    write_gray_image,
    write_rgb_image,
)


def _gray_text(image):
    buffer = io.StringIO()
    write_gray_image(image, buffer)
    return buffer.getvalue()


def _rgb_text(image):
    buffer = io.StringIO()
    write_rgb_image(image, buffer)
    return buffer.getvalue()


def test_write_gray_layout():
    image = GrayImage(2, 1, (5, 7))
    assert _gray_text(image) == "2\n1\n5,7,"


def test_write_rgb_layout():
    image = RgbImage(1, 1, ((1, 2, 3),))
    assert _rgb_text(image) == "1\n1\n1 2 3,"


def test_write_gray_rows_on_separate_lines():
    image = GrayImage.from_rows([[1, 2], [3, 4]])
    lines = _gray_text(image).split("\n")
    assert lines == ["2", "2", "1,2,", "3,4,"]


def test_gray_round_trip():
    image = GrayImage.from_rows([[0, 10, 255], [30, 40, 50]])
    assert read_gray_image(io.StringIO(_gray_text(image))) == image


def test_rgb_round_trip():
    image = RgbImage.from_rows([[(1, 2, 3), (4, 5, 6)], [(7, 8, 9), (10, 11, 12)], [(0, 0, 0), (255, 255, 255)]])
    restored = read_rgb_image(io.StringIO(_rgb_text(image)))
    assert restored == image
    assert (restored.width, restored.height) == (2, 3)


def test_read_gray_with_trailing_newlines():
    text = "3\n2\n1,2,3,\n4,5,6,\n"
    image = read_gray_image(io.StringIO(text))
    assert image.width == 3
    assert image.height == 2
    assert list(image.rows()) == [(1, 2, 3), (4, 5, 6)]


def test_read_rgb_with_trailing_newlines():
    text = "2\n1\n1 2 3,4 5 6,\n"
    image = read_rgb_image(io.StringIO(text))
    assert image.pixels == ((1, 2, 3), (4, 5, 6))


def test_empty_image_round_trip():
    image = GrayImage(0, 0, ())
    assert read_gray_image(io.StringIO(_gray_text(image))) == image


def test_missing_header_raises():
    with pytest.raises(ValueError):
        read_gray_image(io.StringIO("3"))


def test_bad_dimensions_raise():
    with pytest.raises(ValueError):
        read_gray_image(io.StringIO("a\n2\n1,2,"))


def test_too_few_pixels_raise():
    with pytest.raises(ValueError):
        read_gray_image(io.StringIO("2\n2\n1,2,3,"))


def test_too_many_pixels_raise():
    with pytest.raises(ValueError):
        read_gray_image(io.StringIO("1\n1\n1,2,"))


def test_rgb_pixel_needs_three_values():
    with pytest.raises(ValueError):
        read_rgb_image(io.StringIO("1\n1\n1 2,"))


def test_non_numeric_pixel_raises():
    with pytest.raises(ValueError):
        read_gray_image(io.StringIO("1\n1\nx,"))