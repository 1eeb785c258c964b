import struct
import zlib

import pytest

from picturelab.images import GrayImage, RgbImage
from picturelab.pngexport import (
    PNG_SIGNATURE,
    encode_png,
    image_gray_from_txt,
    image_rgb_from_txt,
)
from picturelab.textformat import write_gray_image, write_rgb_image


def _chunks(png):
    assert png[:8] == bytes([137, 80, 78, 71, 13, 10, 26, 10])
    pos = 8
    chunks = []
    while pos < len(png):
        (length,) = struct.unpack(">I", png[pos:pos + 4])
        tag = png[pos + 4:pos + 8]
        payload = png[pos + 8:pos + 8 + length]
        (crc,) = struct.unpack(">I", png[pos + 8 + length:pos + 12 + length])
        assert crc == zlib.crc32(tag + payload) & 0xFFFFFFFF
        chunks.append((tag, payload))
        pos += 12 + length
    return chunks


def _decode(png):
    chunks = _chunks(png)
    header = dict(chunks)[b"IHDR"]
    width, height, depth, color_type = struct.unpack(">IIBB", header[:10])
    channels = {0: 1, 4: 2, 2: 3, 6: 4}[color_type]
    raw = zlib.decompress(b"".join(p for t, p in chunks if t == b"IDAT"))
    stride = width * channels + 1
    rows = [raw[i:i + stride] for i in range(0, len(raw), stride)]
    assert all(row[0] == 0 for row in rows)
    return width, height, depth, color_type, b"".join(row[1:] for row in rows)


def test_signature_and_chunk_order():
    png = encode_png(2, 1, 1, [10, 20])
    assert png.startswith(PNG_SIGNATURE)
    assert [tag for tag, _ in _chunks(png)] == [b"IHDR", b"IDAT", b"IEND"]


@pytest.mark.parametrize("channels, color_type", [(1, 0), (2, 4), (3, 2), (4, 6)])
def test_color_type_follows_channels(channels, color_type):
    data = bytes(range(3 * 2 * channels))
    width, height, depth, ctype, pixels = _decode(encode_png(3, 2, channels, data))
    assert (width, height, depth, ctype) == (3, 2, 8, color_type)
    assert pixels == data


def test_round_trip_of_gray_data():
    data = bytes([0, 255, 128, 7, 99, 200])
    assert _decode(encode_png(2, 3, 1, data))[4] == data


@pytest.mark.parametrize("channels", [0, 5])
def test_invalid_channel_count(channels):
    with pytest.raises(ValueError):
        encode_png(1, 1, channels, b"\x00" * max(channels, 1))


def test_wrong_data_length():
    with pytest.raises(ValueError):
        encode_png(2, 2, 3, b"\x00" * 11)


def test_empty_image_rejected():
    with pytest.raises(ValueError):
        encode_png(0, 3, 1, b"")


def test_gray_text_to_png(tmp_path):
    image = GrayImage.from_rows([[0, 10, 20], [30, 40, 255]])
    txt = tmp_path / "gray.txt"
    with open(txt, "w", encoding="utf-8") as stream:
        write_gray_image(image, stream)
    out = tmp_path / "gray.png"
    image_gray_from_txt(txt, out)
    width, height, _, ctype, pixels = _decode(out.read_bytes())
    assert (width, height, ctype) == (3, 2, 0)
    assert list(pixels) == list(image.pixels)


def test_rgb_text_to_png(tmp_path):
    image = RgbImage.from_rows([[(1, 2, 3), (4, 5, 6)], [(7, 8, 9), (250, 251, 252)]])
    txt = tmp_path / "rgb.txt"
    with open(txt, "w", encoding="utf-8") as stream:
        write_rgb_image(image, stream)
    out = tmp_path / "rgb.png"
    image_rgb_from_txt(txt, out)
    width, height, _, ctype, pixels = _decode(out.read_bytes())
    assert (width, height, ctype) == (2, 2, 2)
    assert list(pixels) == [v for p in image.pixels for v in p]


def test_out_of_range_pixel_rejected(tmp_path):
    txt = tmp_path / "bad.txt"
    txt.write_text("2\n1\n5,300,", encoding="utf-8")
    with pytest.raises(ValueError):
        image_gray_from_txt(txt, tmp_path / "bad.png")
    assert not (tmp_path / "bad.png").exists()


def test_missing_text_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        image_rgb_from_txt(tmp_path / "absent.txt", tmp_path / "out.png")