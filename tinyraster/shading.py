from __future__ import annotations

from typing import Optional

from .types import Point3

__all__ = ["face_normal", "flat_intensity"]


def face_normal(v0: Point3, v1: Point3, v2: Point3) -> Optional[Point3]:
    """Unit normal of the face, or None when the face has no area.

    Follows the `(v2 - v0) x (v1 - v0)` convention: for counter-clockwise
    faces it points into the mesh, so a light shining along -z lights the
    faces turned toward a viewer on the +z side.
    """
    n = (v2 - v0).cross(v1 - v0)
    if n.norm() == 0.0:
        return None

    return n.normalise()


def flat_intensity(v0: Point3, v1: Point3, v2: Point3, direction: Point3) -> float:
    """Lambert intensity of the face under one directional light.

    Values <= 0 mean the face is turned away (back-face) and should be
    skipped; degenerate faces get 0.0.
    """
    normal = face_normal(v0, v1, v2)
    if normal is None:
        return 0.0

    return normal.dot(direction)
