"""Edit history of an image and chains of random effects."""

from __future__ import annotations

import random
from typing import Iterator, List, Optional, Sequence

from picturelab.images import (
    GrayImage,
    ImageType,
    RgbImage,
    clahe,
    flip_horizontal,
    flip_vertical,
    median_blur,
    transpose,
)

RANDOM_EFFECT_COUNT = 5
RANDOM_BLUR_KERNEL = 8

Image = GrayImage | RgbImage


class History:
    """Sequence of image versions with a cursor on the one being shown.

    New versions are always appended after the newest one, whatever the
    cursor points at, and the cursor then moves to the new version.
    """

    def __init__(self, image: Image) -> None:
        self._images: List[Image] = [image]
        self._index = 0

    @property
    def type(self) -> ImageType:
        """Kind of image kept in this history."""
        return self._images[0].type

    @property
    def current(self) -> Image:
        """The version under the cursor."""
        return self._images[self._index]

    @property
    def position(self) -> int:
        """Index of the version under the cursor, counted from the oldest."""
        return self._index

    def __len__(self) -> int:
        return len(self._images)

    def __iter__(self) -> Iterator[Image]:
        return iter(self._images)

    def add(self, image: Image) -> Image:
        """Append a new version after the newest one and move to it."""
        if image.type != self.type:
            raise TypeError(
                f"cannot add a {image.type.name} image to a {self.type.name} history"
            )
        self._images.append(image)
        self._index = len(self._images) - 1
        return self.current

    def undo(self) -> Image:
        """Discard the newest version and move to the one before it."""
        if len(self._images) < 2:
            raise IndexError("there is no edit to undo")
        self._images.pop()
        self._index = len(self._images) - 1
        return self.current

    def previous(self) -> Image:
        """Move to the older version, if there is one."""
        if self._index > 0:
            self._index -= 1
        return self.current

    def next(self) -> Image:
        """Move to the newer version, if there is one."""
        if self._index < len(self._images) - 1:
            self._index += 1
        return self.current

    def browse(self, version: int) -> Image:
        """Move ``version`` steps forward from the cursor.

        A version below 1 leaves the cursor where it is.
        """
        if version < 1:
            return self.current
        target = self._index + version
        if target >= len(self._images):
            raise IndexError(f"version {version} not found")
        self._index = target
        return self.current


def _apply_effect(choice: int, image: Image) -> Image:
    if choice == 0:
        return median_blur(image, RANDOM_BLUR_KERNEL)
    if choice == 1:
        return clahe(image, image.width, image.height)
    if choice == 2:
        return flip_vertical(image)
    if choice == 3:
        return flip_horizontal(image)
    return transpose(image)


def random_effects(image: Image, rng: Optional[random.Random] = None) -> Sequence[Image]:
    """Apply five randomly chosen effects one after another.

    Returns the original image followed by the result of each effect.
    """
    rng = rng if rng is not None else random.Random()
    chain: List[Image] = [image]
    for _ in range(RANDOM_EFFECT_COUNT):
        chain.append(_apply_effect(rng.randrange(5), chain[-1]))
    return chain