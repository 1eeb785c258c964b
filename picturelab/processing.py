"""Editing processes applied to an image history, and the command line."""

from __future__ import annotations

import argparse
import enum
import random
import sys
from pathlib import Path
from typing import Optional, Sequence

from picturelab.history import History, random_effects
from picturelab.images import (
    GrayImage,
    RgbImage,
    clahe,
    flip_horizontal,
    flip_vertical,
    median_blur,
    transpose,
)
from picturelab.pngexport import encode_png
from picturelab.textformat import (
    read_gray_image,
    read_rgb_image,
    write_gray_image,
    write_rgb_image,
)

GRAY_BLUR_KERNEL = 12
RGB_BLUR_KERNEL = 24

Image = GrayImage | RgbImage


class ImageProcess(enum.IntEnum):
    """Operations offered by the editing menu."""

    NONE = 0
    BLUR = 1
    EQUALIZER = 2
    VERTICAL = 3
    HORIZONTAL = 4
    TRANSPOSE = 5
    UNDO = 6
    NEXT = 7
    PREVIOUS = 8
    RANDOM_EFFECTS = 9


def _blur(image: Image) -> Image:
    kernel = RGB_BLUR_KERNEL if isinstance(image, RgbImage) else GRAY_BLUR_KERNEL
    return median_blur(image, kernel)


_EDITS = {
    ImageProcess.BLUR: _blur,
    ImageProcess.EQUALIZER: lambda image: clahe(image, image.width, image.height),
    ImageProcess.VERTICAL: flip_vertical,
    ImageProcess.HORIZONTAL: flip_horizontal,
    ImageProcess.TRANSPOSE: transpose,
}


def apply_process(history: History, process: ImageProcess) -> Image:
    """Apply one menu process to the history and return the image now shown.

    Edits are computed from the shown version and appended to the history;
    undo, next and previous move through it; the other processes leave it as is.
    """
    process = ImageProcess(process)
    edit = _EDITS.get(process)
    if edit is not None:
        return history.add(edit(history.current))
    if process is ImageProcess.UNDO:
        if len(history) > 1:
            return history.undo()
    elif process is ImageProcess.NEXT:
        return history.next()
    elif process is ImageProcess.PREVIOUS:
        return history.previous()
    return history.current


def _write_text(image: Image, stream) -> None:
    if isinstance(image, RgbImage):
        write_rgb_image(image, stream)
    else:
        write_gray_image(image, stream)


def _png_bytes(image: Image) -> bytes:
    if isinstance(image, RgbImage):
        return encode_png(image.width, image.height, 3, [v for p in image.pixels for v in p])
    return encode_png(image.width, image.height, 1, image.pixels)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="picturelab", description="Apply editing processes to an image in text form."
    )
    parser.add_argument("image", help="image in the text format")
    parser.add_argument("--gray", action="store_true", help="read the image as grayscale")
    parser.add_argument(
        "-p",
        "--process",
        action="append",
        default=[],
        type=str.lower,
        choices=[p.name.lower() for p in ImageProcess if p is not ImageProcess.NONE],
        help="process to apply; may be given several times",
    )
    parser.add_argument("-o", "--output", help="write the resulting image as text")
    parser.add_argument("--png", help="write the resulting image as PNG")
    parser.add_argument(
        "--random-effects",
        metavar="DIR",
        help="write a chain of five random effects into DIR",
    )
    parser.add_argument("--seed", type=int, help="seed for the random effects")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line; return the exit status."""
    args = _build_parser().parse_args(argv)
    reader = read_gray_image if args.gray else read_rgb_image
    try:
        with open(args.image, encoding="utf-8") as stream:
            history = History(reader(stream))
        for name in args.process:
            apply_process(history, ImageProcess[name.upper()])
        result = history.current
        if args.output:
            with open(args.output, "w", encoding="utf-8") as out:
                _write_text(result, out)
        if args.png:
            Path(args.png).write_bytes(_png_bytes(result))
        if args.random_effects:
            directory = Path(args.random_effects)
            directory.mkdir(parents=True, exist_ok=True)
            chain = random_effects(result, random.Random(args.seed))
            for index, image in enumerate(chain):
                with open(directory / f"effect_{index}.txt", "w", encoding="utf-8") as out:
                    _write_text(image, out)
        if not (args.output or args.png or args.random_effects):
            _write_text(result, sys.stdout)
            sys.stdout.write("\n")
    except (OSError, ValueError) as exc:
        print(f"picturelab: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())