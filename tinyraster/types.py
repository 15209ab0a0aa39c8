from __future__ import annotations

import math
from typing import NamedTuple, Optional, Tuple, Union

import numpy as np
from jaxtyping import Float, Integer, Shaped, UInt8

__all__ = [
    "Point2",
    "Point3",
    "RGB",
    "RGBA",
    "Colour",
    "colour_from_channels",
    "grey",
    "modulate",
    "ZBuffer",
    "Pixels",
    "Vertices",
    "UVCoordinates",
    "FaceIndices",
    "PixelCoords",
    "Triangle",
    "TriangleUV",
]

ZBuffer = Float[np.ndarray, "pixels"]
"""Flat depth buffer, one slot per pixel, indexed as `x + y * width`."""
Pixels = UInt8[np.ndarray, "height width channel"]
# each vertex is defined by 3 float numbers, x-y-z
Vertices = Float[np.ndarray, "vertices 3"]
UVCoordinates = Float[np.ndarray, "uv_counts 2"]
# each face has 3 vertices
FaceIndices = Integer[np.ndarray, "faces 3"]
PixelCoords = Integer[np.ndarray, "n"]
Channels = Shaped[np.ndarray, "*batch channel"]


class Point2(NamedTuple):
    """2D point or vector. Coordinates may be ints (pixel addresses) or
    floats (geometry)."""

    x: float
    y: float

    def __add__(self, other: Point2) -> Point2:  # pyright: ignore[reportIncompatibleMethodOverride]
        return Point2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point2) -> Point2:
        return Point2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Point2:  # pyright: ignore[reportIncompatibleMethodOverride]
        return Point2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def dot(self, other: Point2) -> float:
        return self.x * other.x + self.y * other.y

    def truncate(self) -> Point2:
        """Integer point, truncating each coordinate toward zero."""
        return Point2(int(self.x), int(self.y))


class Point3(NamedTuple):
    """3D point or vector."""

    x: float
    y: float
    z: float

    def __add__(self, other: Point3) -> Point3:  # pyright: ignore[reportIncompatibleMethodOverride]
        return Point3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Point3) -> Point3:
        return Point3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Point3:  # pyright: ignore[reportIncompatibleMethodOverride]
        return Point3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    @property
    def xy(self) -> Point2:
        return Point2(self.x, self.y)

    def dot(self, other: Point3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Point3) -> Point3:
        return Point3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def norm(self) -> float:
        return math.sqrt(self.dot(self))

    def normalise(self) -> Point3:
        """Unit vector with the same direction.

        Raises `ZeroDivisionError` for the zero vector; callers must not
        normalise one.
        """
        length = self.norm()
        return Point3(self.x / length, self.y / length, self.z / length)

    def truncate(self) -> Point3:
        return Point3(int(self.x), int(self.y), int(self.z))


# 3 vertices in screen space (x, y as pixel coordinates, z as depth)
Triangle = Tuple[Point3, Point3, Point3]
# 3 texture coordinates, index-aligned with the triangle's vertices
TriangleUV = Tuple[Point2, Point2, Point2]


def modulate(channels: Channels, intensity: float) -> UInt8[np.ndarray, "*batch channel"]:
    """Scale the R, G and B channels by `intensity`.

    The last axis holds 3 (RGB) or 4 (RGBA) channels; alpha is passed through
    unchanged. Scaled values saturate to [0, 255] and are then truncated, so
    an intensity above 1 never wraps around.
    """
    scaled = np.asarray(channels, dtype=np.float64).copy()
    scaled[..., :3] = np.clip(scaled[..., :3] * intensity, 0.0, 255.0)

    return scaled.astype(np.uint8)


class RGB(NamedTuple):
    r: int
    g: int
    b: int

    def scaled(self, intensity: float) -> RGB:
        return RGB(*modulate(self, intensity).tolist())

    def with_alpha(self, alpha: int = 255) -> RGBA:
        return RGBA(self.r, self.g, self.b, alpha)


class RGBA(NamedTuple):
    r: int
    g: int
    b: int
    a: int = 255

    def scaled(self, intensity: float) -> RGBA:
        """Scale the colour channels; alpha is kept as is."""
        return RGBA(*modulate(self, intensity).tolist())

    def without_alpha(self) -> RGB:
        return RGB(self.r, self.g, self.b)


Colour = Union[RGB, RGBA]


def colour_from_channels(channels: Union[Tuple[int, ...], np.ndarray]) -> Colour:
    """Build the colour variant matching the number of channels."""
    values = [int(c) for c in channels]
    if len(values) == 3:
        return RGB(*values)
    if len(values) == 4:
        return RGBA(*values)

    raise ValueError(f"Unexpected channel count {len(values)}")


def grey(intensity: float, alpha: Optional[int] = None) -> Colour:
    """Grey level `intensity * 255`, the flat shading colour."""
    white = RGB(255, 255, 255) if alpha is None else RGBA(255, 255, 255, alpha)

    return white.scaled(intensity)
