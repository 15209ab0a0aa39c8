from __future__ import annotations

import numpy as np

from .geometry import barycentric_grid, bounding_box, pixel_grid
from .image import Framebuffer, Texture
from .types import Colour, Point2, Triangle, TriangleUV, ZBuffer, modulate

__all__ = ["line", "triangle", "triangle_texture"]


def line(p0: Point2, p1: Point2, image: Framebuffer, colour: Colour) -> None:
    """Draw the segment from `p0` to `p1` with Bresenham's algorithm.

    Iterates the major axis from the smaller to the larger coordinate, so the
    pixel at the far end of that axis is not drawn and `line(a, b)` covers
    exactly the same pixels as `line(b, a)`.
    """
    x0, y0 = p0
    x1, y1 = p1
    steep = False
    if abs(x0 - x1) < abs(y0 - y1):
        x0, y0 = y0, x0
        x1, y1 = y1, x1
        steep = True
    if x0 > x1:
        x0, x1 = x1, x0
        y0, y1 = y1, y0

    dx = x1 - x0
    dy = y1 - y0
    d_error2 = abs(dy) * 2
    error2 = 0
    y_step = 1 if y1 > y0 else -1
    y = y0
    for x in range(x0, x1):
        if steep:
            image.set(y, x, colour)
        else:
            image.set(x, y, colour)
        error2 += d_error2
        if error2 > dx:
            y += y_step
            error2 -= dx * 2


def _check_zbuffer(z_buffer: ZBuffer, image: Framebuffer) -> None:
    if not isinstance(z_buffer, np.ndarray):
        raise TypeError(f"z_buffer must be a numpy array, got {type(z_buffer).__name__}")
    if z_buffer.ndim != 1 or len(z_buffer) != image.width * image.height:
        raise ValueError(
            f"z_buffer size error: shape {z_buffer.shape} for a "
            f"{image.width}x{image.height} image"
        )


def _fragments(t: Triangle, image: Framebuffer):
    """Pixels of `image` covered by `t`, with their barycentric weights.

    Returns `(xs, ys, weights)` with weights of shape (3, n).
    """
    t0, t1, t2 = t
    bbox_min, bbox_max = bounding_box(
        t0.xy.truncate(),
        t1.xy.truncate(),
        t2.xy.truncate(),
        Point2(image.width - 1, image.height - 1),
    )
    xs, ys = pixel_grid(bbox_min, bbox_max)
    weights = barycentric_grid(t0.xy, t1.xy, t2.xy, xs, ys)
    inside = (weights >= 0.0).all(axis=0)

    return xs[inside], ys[inside], weights[:, inside]


def _depth_test(t: Triangle, weights, xs, ys, z_buffer: ZBuffer, width: int):
    """Update the z-buffer where the fragment is strictly nearer.

    Returns the mask of fragments that passed. Each pixel appears at most
    once per triangle, so the scatter has no conflicting writes.
    """
    z = weights[0] * t[0].z + weights[1] * t[1].z + weights[2] * t[2].z
    idx = xs + ys * width
    nearer = z_buffer[idx] < z
    z_buffer[idx[nearer]] = z[nearer]

    return nearer


def triangle(
    t: Triangle,
    z_buffer: ZBuffer,
    image: Framebuffer,
    colour: Colour,
) -> None:
    """Fill triangle `t` (screen space) with a solid colour.

    A pixel is painted when it lies inside or on the triangle and its
    interpolated depth is strictly greater than the z-buffer value there;
    larger z is nearer to the viewer.

    Raises `ValueError` if `z_buffer` does not hold exactly one slot per pixel.
    """
    _check_zbuffer(z_buffer, image)
    xs, ys, weights = _fragments(t, image)
    nearer = _depth_test(t, weights, xs, ys, z_buffer, image.width)
    image.fill(xs[nearer], ys[nearer], colour)


def triangle_texture(
    t: Triangle,
    uv: TriangleUV,
    z_buffer: ZBuffer,
    image: Framebuffer,
    texture: Texture,
    intensity: float,
) -> None:
    """Fill triangle `t` with texels from `texture`, scaled by `intensity`.

    UVs are interpolated linearly in screen space and flipped as
    `(1, 1) - uv` before sampling texel `(u * tw, v * th)`. Colour channels
    saturate at 255; alpha is kept.

    Raises `ValueError` if `z_buffer` does not hold exactly one slot per pixel.
    """
    _check_zbuffer(z_buffer, image)
    xs, ys, weights = _fragments(t, image)
    nearer = _depth_test(t, weights, xs, ys, z_buffer, image.width)
    xs, ys, weights = xs[nearer], ys[nearer], weights[:, nearer]

    uvs = np.asarray(uv, dtype=np.float64)
    uv_p = 1.0 - weights.T @ uvs
    texels = texture.sample(
        (uv_p[:, 0] * texture.width).astype(np.int64),
        (uv_p[:, 1] * texture.height).astype(np.int64),
    )
    image.fill(xs, ys, modulate(texels, intensity))
