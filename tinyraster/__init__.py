from .draw import line, triangle, triangle_texture
from .geometry import (
    barycentric,
    barycentric_3d,
    barycentric_grid,
    bounding_box,
    is_inside,
)
from .image import DEPTH_CLEAR, Framebuffer, PixelFormat, Texture, create_zbuffer
from .model import FaceGroup, Model
from .render import (
    LightParameters,
    RenderParameters,
    render_flat,
    render_textured,
    render_wireframe,
    viewport,
)
from .shading import face_normal, flat_intensity
from .shapes import create_cube
from .types import RGB, RGBA, Colour, Point2, Point3, ZBuffer, grey, modulate

__all__ = [
    "barycentric",
    "barycentric_3d",
    "barycentric_grid",
    "bounding_box",
    "Colour",
    "create_cube",
    "create_zbuffer",
    "DEPTH_CLEAR",
    "face_normal",
    "FaceGroup",
    "flat_intensity",
    "Framebuffer",
    "grey",
    "is_inside",
    "LightParameters",
    "line",
    "Model",
    "modulate",
    "PixelFormat",
    "Point2",
    "Point3",
    "render_flat",
    "render_textured",
    "render_wireframe",
    "RenderParameters",
    "RGB",
    "RGBA",
    "Texture",
    "triangle",
    "triangle_texture",
    "viewport",
    "ZBuffer",
]
