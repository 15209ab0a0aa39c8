from __future__ import annotations

import numpy as np

from .model import Model

__all__ = ["create_cube"]

_verts = np.array(
    (
        # back
        (-1.0, -1.0, 1.0),  # 0
        (1.0, -1.0, 1.0),  # 1
        (1.0, 1.0, 1.0),  # 2
        (-1.0, 1.0, 1.0),  # 3
        # front
        (-1.0, -1.0, -1.0),  # 4
        (1.0, -1.0, -1.0),  # 5
        (1.0, 1.0, -1.0),  # 6
        (-1.0, 1.0, -1.0),  # 7
    )
)
_uvs = np.array(
    (
        (0.0, 0.0),  # 0
        (1.0, 0.0),  # 1
        (1.0, 1.0),  # 2
        (0.0, 1.0),  # 3
    )
)
# counter-clockwise seen from outside, two triangles per face
_faces = np.array(
    (
        # back (+z)
        (0, 1, 2),
        (0, 2, 3),
        # front (-z)
        (5, 4, 7),
        (5, 7, 6),
        # right (+x)
        (1, 5, 6),
        (1, 6, 2),
        # left (-x)
        (4, 0, 3),
        (4, 3, 7),
        # top (+y)
        (3, 2, 6),
        (3, 6, 7),
        # bottom (-y)
        (4, 5, 1),
        (4, 1, 0),
    )
)
# every face maps the whole texture
_faces_uv = np.tile(np.array(((0, 1, 2), (0, 2, 3))), (6, 1))


def create_cube(size: float = 1.0) -> Model:
    """Textured cube centred at the origin with half-extent `size`.

    One surface group of 12 triangles.
    """
    return Model.create(_verts * size, _faces, uvs=_uvs, faces_uv=_faces_uv)
