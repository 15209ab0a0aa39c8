import math

import numpy as np
import pytest

from tinyraster.types import RGB, RGBA, Point2, Point3, colour_from_channels, grey, modulate


def test_point2_arithmetic():
    a = Point2(1, 2)
    b = Point2(3, -4)
    assert a + b == Point2(4, -2)
    assert b - a == Point2(2, -6)
    assert a * 2 == Point2(2, 4)
    assert 2 * a == Point2(2, 4)
    assert a.dot(b) == 1 * 3 + 2 * -4


def test_point2_truncate_toward_zero():
    assert Point2(2.9, -1.7).truncate() == Point2(2, -1)
    assert isinstance(Point2(2.9, 1.2).truncate().x, int)


def test_point3_cross_and_dot():
    x = Point3(1.0, 0.0, 0.0)
    y = Point3(0.0, 1.0, 0.0)
    assert x.cross(y) == Point3(0.0, 0.0, 1.0)
    assert y.cross(x) == Point3(0.0, 0.0, -1.0)
    assert x.dot(y) == 0.0
    assert Point3(1, 2, 3).dot(Point3(4, 5, 6)) == 32


def test_point3_normalise():
    unit = Point3(3.0, 0.0, 4.0).normalise()
    assert unit.norm() == pytest.approx(1.0)
    assert unit == pytest.approx((0.6, 0.0, 0.8))


def test_point3_normalise_zero_vector_raises():
    with pytest.raises(ZeroDivisionError):
        Point3(0.0, 0.0, 0.0).normalise()


def test_point3_xy_projection():
    assert Point3(1.5, 2.5, -3.0).xy == Point2(1.5, 2.5)
    assert math.isclose(Point3(1.0, 1.0, 1.0).norm(), math.sqrt(3))


def test_rgb_scaled_truncates():
    assert RGB(200, 101, 3).scaled(0.5) == RGB(100, 50, 1)


def test_rgba_scaled_keeps_alpha():
    assert RGBA(200, 100, 50, 77).scaled(0.5) == RGBA(100, 50, 25, 77)


def test_scaled_saturates_instead_of_wrapping():
    assert RGB(200, 100, 0).scaled(2.0) == RGB(255, 200, 0)
    assert RGB(200, 100, 0).scaled(-1.0) == RGB(0, 0, 0)


def test_modulate_batch_matches_scalar():
    pixels = np.array([[10, 20, 30, 40], [250, 128, 1, 255]], dtype=np.uint8)
    out = modulate(pixels, 0.75)
    assert out.dtype == np.uint8
    for row, expected in zip(out, pixels):
        assert tuple(row) == RGBA(*expected.tolist()).scaled(0.75)


def test_colour_from_channels():
    assert colour_from_channels((1, 2, 3)) == RGB(1, 2, 3)
    assert colour_from_channels(np.array([1, 2, 3, 4], dtype=np.uint8)) == RGBA(1, 2, 3, 4)
    with pytest.raises(ValueError):
        colour_from_channels((1, 2))


def test_grey():
    assert grey(1.0) == RGB(255, 255, 255)
    assert grey(0.5) == RGB(127, 127, 127)
    assert grey(0.5, alpha=10) == RGBA(127, 127, 127, 10)
