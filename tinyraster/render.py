from __future__ import annotations

import logging
from typing import NamedTuple, Tuple

from .draw import line, triangle, triangle_texture
from .image import DEPTH_CLEAR, Framebuffer, Texture, create_zbuffer
from .model import Model
from .shading import flat_intensity
from .types import RGB, Colour, Point3, Triangle, grey

__all__ = [
    "LightParameters",
    "RenderParameters",
    "viewport",
    "render_wireframe",
    "render_flat",
    "render_textured",
]

logger = logging.getLogger(__name__)


class RenderParameters(NamedTuple):
    """Parameters shared by the model renderers."""

    depth_clear: float = DEPTH_CLEAR
    """value every z-buffer slot starts from; any nearer depth must be
        strictly greater."""
    wireframe_colour: Colour = RGB(255, 255, 255)
    """colour of wireframe edges."""


class LightParameters(NamedTuple):
    """Single directional light."""

    direction: Tuple[float, float, float] = (0.0, 0.0, -1.0)
    """direction the light travels, in model space. The default lights
        faces turned toward a viewer on the +z side."""

    def unit_direction(self) -> Point3:
        return Point3(*self.direction).normalise()


def viewport(v: Point3, width: int, height: int) -> Point3:
    """Map normalised device coordinates ([-1, 1] on x and y) to screen
    space. z is kept as the depth."""
    return Point3((v.x + 1.0) * width / 2.0, (v.y + 1.0) * height / 2.0, v.z)


def _to_screen(t: Triangle, image: Framebuffer) -> Triangle:
    return (
        viewport(t[0], image.width, image.height),
        viewport(t[1], image.width, image.height),
        viewport(t[2], image.width, image.height),
    )


def render_wireframe(
    model: Model,
    image: Framebuffer,
    params: RenderParameters = RenderParameters(),
) -> int:
    """Draw every triangle edge of `model`. Returns the number of triangles."""
    drawn = 0
    for group in model.groups:
        for positions, _ in model.triangles(group):
            screen = [v.xy.truncate() for v in _to_screen(positions, image)]
            for i in range(3):
                line(screen[i], screen[(i + 1) % 3], image, params.wireframe_colour)
            drawn += 1

    logger.info("wireframe: %d triangles drawn into %r", drawn, image)

    return drawn


def render_flat(
    model: Model,
    image: Framebuffer,
    light: LightParameters = LightParameters(),
    params: RenderParameters = RenderParameters(),
) -> int:
    """Fill the faces of `model` with flat grey shading.

    Each surface group gets its own z-buffer. Faces turned away from the
    light are culled. Returns the number of triangles rasterized.
    """
    direction = light.unit_direction()
    drawn = 0
    for i, group in enumerate(model.groups):
        z_buffer = create_zbuffer(image.width, image.height, params.depth_clear)
        culled = 0
        for positions, _ in model.triangles(group):
            intensity = flat_intensity(*positions, direction)
            if intensity <= 0.0:
                culled += 1
                continue
            triangle(_to_screen(positions, image), z_buffer, image, grey(intensity))
            drawn += 1
        logger.debug("group %d: %d faces, %d culled", i, len(group.faces), culled)

    logger.info("flat: %d triangles drawn into %r", drawn, image)

    return drawn


def render_textured(
    model: Model,
    image: Framebuffer,
    texture: Texture,
    light: LightParameters = LightParameters(),
    params: RenderParameters = RenderParameters(),
) -> int:
    """Fill the faces of `model` with `texture`, modulated by flat shading.

    Raises `ValueError` if the model has no texture coordinates. Returns the
    number of triangles rasterized.
    """
    if not model.textured:
        raise ValueError("model has no texture coordinates")

    direction = light.unit_direction()
    drawn = 0
    for i, group in enumerate(model.groups):
        z_buffer = create_zbuffer(image.width, image.height, params.depth_clear)
        culled = 0
        for positions, uvs in model.triangles(group):
            intensity = flat_intensity(*positions, direction)
            if intensity <= 0.0:
                culled += 1
                continue
            assert uvs is not None
            triangle_texture(
                _to_screen(positions, image),
                uvs,
                z_buffer,
                image,
                texture,
                intensity,
            )
            drawn += 1
        logger.debug("group %d: %d faces, %d culled", i, len(group.faces), culled)

    logger.info("textured: %d triangles drawn into %r", drawn, image)

    return drawn
