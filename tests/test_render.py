import logging
import math

import pytest

from tinyraster.image import Framebuffer
from tinyraster.model import Model
from tinyraster.render import (
    LightParameters,
    RenderParameters,
    render_flat,
    render_textured,
    render_wireframe,
    viewport,
)
from tinyraster.shading import face_normal, flat_intensity
from tinyraster.shapes import create_cube
from tinyraster.types import RGB, Point3, grey

WHITE = RGB(255, 255, 255)
BLACK = RGB(0, 0, 0)
RED = RGB(255, 0, 0)


def test_viewport():
    assert viewport(Point3(-1.0, -1.0, 0.25), 100, 50) == Point3(0.0, 0.0, 0.25)
    assert viewport(Point3(0.0, 0.0, 0.0), 100, 50) == Point3(50.0, 25.0, 0.0)
    assert viewport(Point3(1.0, 1.0, -2.0), 100, 50) == Point3(100.0, 50.0, -2.0)


def test_face_normal_and_intensity():
    v0, v1, v2 = Point3(0, 0, 0), Point3(1, 0, 0), Point3(0, 1, 0)
    assert face_normal(v0, v1, v2) == Point3(0.0, 0.0, -1.0)
    light = Point3(0.0, 0.0, -1.0)
    assert flat_intensity(v0, v1, v2, light) == pytest.approx(1.0)
    assert flat_intensity(v0, v2, v1, light) == pytest.approx(-1.0)


def test_degenerate_face_has_no_intensity():
    v = Point3(1, 1, 1)
    assert face_normal(v, v, Point3(2, 2, 2)) is None
    assert flat_intensity(v, v, Point3(2, 2, 2), Point3(0, 0, -1)) == 0.0


def test_render_wireframe_cube():
    image = Framebuffer(64, 64)
    assert render_wireframe(create_cube(0.5), image) == 12
    assert image.get(16, 16) == WHITE
    assert image.get(30, 16) == WHITE
    assert image.get(5, 5) == BLACK


def test_render_wireframe_colour():
    image = Framebuffer(64, 64)
    render_wireframe(create_cube(0.5), image, RenderParameters(wireframe_colour=RED))
    assert image.get(30, 16) == RED


def test_render_flat_cube_culls_back_faces(caplog):
    image = Framebuffer(64, 64)
    with caplog.at_level(logging.DEBUG, logger="tinyraster.render"):
        drawn = render_flat(create_cube(0.5), image)
    # only the two triangles facing +z are lit by the default light
    assert drawn == 2
    assert image.get(32, 32) == WHITE
    assert image.get(5, 5) == BLACK
    assert "10 culled" in caplog.text


def test_render_flat_light_direction():
    image = Framebuffer(64, 64)
    drawn = render_flat(create_cube(0.5), image, LightParameters(direction=(0.0, 0.0, 1.0)))
    assert drawn == 2
    # the -z face is lit instead and projects onto the same pixels
    assert image.get(32, 32) == WHITE


def test_render_textured_cube():
    texture = Framebuffer(2, 2)
    texture.set(0, 0, RED)
    texture.set(1, 1, WHITE)
    image = Framebuffer(64, 64)
    assert render_textured(create_cube(0.5), image, texture) == 2
    # near the face's (u, v) = (0, 0) corner the flipped uv samples texel (1, 1)
    assert image.get(17, 17) == WHITE
    # near (u, v) = (1, 1) it samples texel (0, 0)
    assert image.get(47, 47) == RED


def test_render_textured_requires_uvs():
    model = Model.create([(0, 0, 0), (1, 0, 0), (0, 1, 0)], [(0, 1, 2)])
    with pytest.raises(ValueError):
        render_textured(model, Framebuffer(4, 4), Framebuffer(1, 1))


# both triangles cover the same screen pixels; B is further away and tilted
TRI_A = [(-1.0, -1.0, 0.5), (1.0, -1.0, 0.5), (-1.0, 1.0, 0.5)]
TRI_B = [(-1.0, -1.0, -0.5), (1.0, -1.0, -0.5), (-1.0, 1.0, 0.0)]


def test_groups_use_separate_zbuffers():
    model = Model.from_groups(TRI_A + TRI_B, [([(0, 1, 2)], None), ([(3, 4, 5)], None)])
    image = Framebuffer(32, 32)
    assert render_flat(model, image) == 2
    assert image.get(4, 4) == grey(4 / math.sqrt(17))


def test_single_group_shares_zbuffer():
    model = Model.create(TRI_A + TRI_B, [(0, 1, 2), (3, 4, 5)])
    image = Framebuffer(32, 32)
    assert render_flat(model, image) == 2
    assert image.get(4, 4) == WHITE
