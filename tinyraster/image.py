from __future__ import annotations

import enum
from typing import Union

import numpy as np
from jaxtyping import UInt8
from PIL import Image

from .types import Colour, Pixels, PixelCoords, ZBuffer, colour_from_channels

__all__ = [
    "PixelFormat",
    "Framebuffer",
    "Texture",
    "DEPTH_CLEAR",
    "create_zbuffer",
]

DEPTH_CLEAR: float = float(np.finfo(np.float64).min)
"""Initial z-buffer value: any real depth wins the first comparison."""


class PixelFormat(enum.IntEnum):
    """Pixel layout, valued by the number of bytes per pixel."""

    RGB = 3
    RGBA = 4


def _as_channels(
    values: Union[Colour, np.ndarray],
    channels: int,
) -> UInt8[np.ndarray, "*batch channel"]:
    """Convert colour values to exactly `channels` channels.

    Alpha is dropped when writing to RGB and set to opaque when an RGB value
    is written to RGBA.
    """
    arr = np.asarray(values, dtype=np.uint8)
    have = arr.shape[-1]
    if have == channels:
        return arr
    if have == 4 and channels == 3:
        return arr[..., :3]
    if have == 3 and channels == 4:
        alpha = np.full(arr.shape[:-1] + (1,), 255, dtype=np.uint8)
        return np.concatenate((arr, alpha), axis=-1)

    raise ValueError(f"Cannot convert {have} channels to {channels}")


class Framebuffer:
    """A `width` x `height` grid of 8-bit RGB or RGBA pixels.

    The origin is at the bottom-left: row `y = 0` is the bottom row of the
    picture, so the buffer is usually flipped once with `flip_vertically`
    before it is displayed or saved. Pixels are stored as a numpy array of
    shape `(height, width, channels)` and addressed as `(x, y)`.

    The same class is used read-only for textures.
    """

    __slots__ = ("_data", "pixel_format")

    def __init__(
        self,
        width: int,
        height: int,
        pixel_format: PixelFormat = PixelFormat.RGB,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid framebuffer size {width}x{height}")
        self.pixel_format = PixelFormat(pixel_format)
        self._data: Pixels = np.zeros(
            (height, width, int(self.pixel_format)), dtype=np.uint8
        )

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> "Framebuffer":
        """Wrap a copy of a `(height, width, 3 or 4)` array.

        Row 0 of the array becomes `y = 0`. Values outside `[0, 255]` are
        clipped before conversion to uint8.
        """
        arr = np.asarray(pixels)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError(f"Expected (height, width, 3|4) pixels, got {arr.shape}")
        fb = cls(arr.shape[1], arr.shape[0], PixelFormat(arr.shape[2]))
        fb._data[...] = np.clip(arr, 0, 255).astype(np.uint8)

        return fb

    @classmethod
    def from_image(cls, image: Image.Image) -> "Framebuffer":
        """Build a framebuffer from a Pillow image.

        The image's top row becomes `y = 0`; call `flip_vertically` to move
        the origin to the bottom-left when the picture is stored top-down.
        Images that are neither RGB nor RGBA are converted to RGB.
        """
        if image.mode not in ("RGB", "RGBA"):
            image = image.convert("RGB")

        return cls.from_array(np.asarray(image))

    def to_array(self) -> Pixels:
        """Copy of the pixels, `(height, width, channels)`."""
        return self._data.copy()

    def to_image(self) -> Image.Image:
        """Pillow image of the buffer, row `y = 0` at the top."""
        return Image.fromarray(np.ascontiguousarray(self._data))

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def channels(self) -> int:
        return self._data.shape[2]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Colour:
        """Colour at `(x, y)`; the zero colour outside the buffer."""
        if not self.in_bounds(x, y):
            return colour_from_channels(np.zeros(self.channels, dtype=np.uint8))

        return colour_from_channels(self._data[y, x])

    def set(self, x: int, y: int, colour: Colour) -> bool:
        """Write one pixel. Writes outside the buffer are ignored and return
        False."""
        if not self.in_bounds(x, y):
            return False
        self._data[y, x] = _as_channels(colour, self.channels)

        return True

    def fill(
        self,
        xs: PixelCoords,
        ys: PixelCoords,
        colours: Union[Colour, np.ndarray],
    ) -> None:
        """Write a batch of in-bounds pixels.

        `colours` is either one colour for every pixel or an `(n, channels)`
        array with one row per pixel.
        """
        self._data[ys, xs] = _as_channels(colours, self.channels)

    def sample(self, xs: PixelCoords, ys: PixelCoords) -> UInt8[np.ndarray, "n channel"]:
        """Read a batch of pixels, clamping coordinates into the buffer."""
        xs = np.clip(xs, 0, self.width - 1)
        ys = np.clip(ys, 0, self.height - 1)

        return self._data[ys, xs]

    def clear(self, colour: Union[Colour, None] = None) -> None:
        if colour is None:
            self._data[...] = 0
        else:
            self._data[...] = _as_channels(colour, self.channels)

    def flip_vertically(self) -> None:
        self._data = self._data[::-1].copy()

    def __repr__(self) -> str:
        return (
            f"Framebuffer({self.width}x{self.height}, {self.pixel_format.name})"
        )


Texture = Framebuffer
"""Textures are framebuffers that are only read from."""


def create_zbuffer(width: int, height: int, value: float = DEPTH_CLEAR) -> ZBuffer:
    """Flat z-buffer of `width * height` slots, indexed as `x + y * width`."""
    return np.full(width * height, value, dtype=np.float64)
