from __future__ import annotations

from typing import Tuple, Union

import numpy as np
from jaxtyping import Float

from .types import PixelCoords, Point2, Point3

__all__ = [
    "DEGENERATE_EPSILON",
    "OUTSIDE",
    "barycentric",
    "barycentric_3d",
    "barycentric_grid",
    "bounding_box",
    "is_inside",
    "pixel_grid",
]

DEGENERATE_EPSILON: float = 1e-2
"""Triangles whose doubled screen-space area is below this are degenerate."""

OUTSIDE: Point3 = Point3(-1.0, 1.0, 1.0)
"""Barycentric weights returned for degenerate triangles; the negative
component makes every query point fall outside."""

Point = Union[Point2, Point3]


def barycentric(a: Point, b: Point, c: Point, p: Point) -> Point3:
    """Barycentric weights of `p` with respect to triangle `abc`.

    Only the (x, y) components are used. The weights are in vertex order
    (weight of `a`, of `b`, of `c`) and sum to 1. For a degenerate
    (zero-area) triangle `OUTSIDE` is returned.
    """
    s = Point3(c.x - a.x, b.x - a.x, a.x - p.x).cross(
        Point3(c.y - a.y, b.y - a.y, a.y - p.y)
    )
    if abs(s.z) < DEGENERATE_EPSILON:
        return OUTSIDE

    return Point3(1.0 - (s.x + s.y) / s.z, s.y / s.z, s.x / s.z)


def barycentric_3d(a: Point3, b: Point3, c: Point3, p: Point3) -> Point3:
    """Barycentric weights of `p` projected onto the plane of `abc`.

    Same vertex order and degenerate result as `barycentric`, computed from
    the triangle's edge vectors instead of the screen projection.
    """
    v0 = b - a
    v1 = c - a
    v2 = p - a

    dot00 = v0.dot(v0)
    dot01 = v0.dot(v1)
    dot02 = v0.dot(v2)
    dot11 = v1.dot(v1)
    dot12 = v1.dot(v2)

    denom = dot00 * dot11 - dot01 * dot01
    # |v0 x v1|^2, so compare against the squared area threshold
    if abs(denom) < DEGENERATE_EPSILON * DEGENERATE_EPSILON:
        return OUTSIDE

    u = (dot11 * dot02 - dot01 * dot12) / denom
    v = (dot00 * dot12 - dot01 * dot02) / denom

    return Point3(1.0 - u - v, u, v)


def barycentric_grid(
    a: Point,
    b: Point,
    c: Point,
    xs: PixelCoords,
    ys: PixelCoords,
) -> Float[np.ndarray, "3 n"]:
    """Vectorised `barycentric` over a batch of query points.

    Returns an array of shape (3, n) whose columns are the weights of the
    points `(xs[i], ys[i])`.
    """
    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)

    # cross product of (c.x-a.x, b.x-a.x, a.x-p.x) and (c.y-a.y, b.y-a.y, a.y-p.y);
    # its z component does not depend on p
    sz = (c.x - a.x) * (b.y - a.y) - (b.x - a.x) * (c.y - a.y)
    if abs(sz) < DEGENERATE_EPSILON:
        return np.broadcast_to(
            np.asarray(OUTSIDE, dtype=np.float64)[:, None], (3, xs.size)
        ).copy()

    sx = (b.x - a.x) * (a.y - ys) - (a.x - xs) * (b.y - a.y)
    sy = (a.x - xs) * (c.y - a.y) - (c.x - a.x) * (a.y - ys)

    return np.stack((1.0 - (sx + sy) / sz, sy / sz, sx / sz))


def is_inside(weights: Point3) -> bool:
    """Whether the point lies inside or on the edge of the triangle."""
    return weights.x >= 0 and weights.y >= 0 and weights.z >= 0


def bounding_box(
    t0: Point2,
    t1: Point2,
    t2: Point2,
    clamp: Point2,
) -> Tuple[Point2, Point2]:
    """Integer pixel rectangle enclosing the three points.

    The x and y extents are computed independently. The minimum corner is
    clamped to (0, 0) and the maximum corner to `clamp`, usually
    `(width - 1, height - 1)`. A triangle lying entirely outside yields a
    box with `min > max` on at least one axis.
    """
    xs = sorted((t0.x, t1.x, t2.x))
    ys = sorted((t0.y, t1.y, t2.y))

    bbox_min = Point2(max(0, xs[0]), max(0, ys[0]))
    bbox_max = Point2(min(clamp.x, xs[-1]), min(clamp.y, ys[-1]))

    return bbox_min, bbox_max


def pixel_grid(bbox_min: Point2, bbox_max: Point2) -> Tuple[PixelCoords, PixelCoords]:
    """Flattened x and y coordinates of every pixel in the inclusive box."""
    xs, ys = np.meshgrid(
        np.arange(bbox_min.x, bbox_max.x + 1, dtype=np.int64),
        np.arange(bbox_min.y, bbox_max.y + 1, dtype=np.int64),
    )

    return xs.ravel(), ys.ravel()
