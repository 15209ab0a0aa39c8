from __future__ import annotations

import logging
from typing import Iterator, NamedTuple, Optional, Tuple, Union

import numpy as np
from jaxtyping import Integer

from .types import FaceIndices, Point2, Point3, Triangle, TriangleUV, UVCoordinates, Vertices

__all__ = ["FaceGroup", "Model", "index_in_bound"]

logger = logging.getLogger(__name__)


def index_in_bound(
    indices: Integer[np.ndarray, "*any"],
    bound: Union[int, Tuple[int, int]],
) -> bool:
    """True when every index lies in `[0, bound)`, or in `[lo, hi)` for a pair.

    An empty index array is always in bound.
    """
    _min, _max = (0, bound) if isinstance(bound, int) else bound
    indices = np.asarray(indices)
    if indices.size == 0:
        return True

    return bool((indices >= _min).all() and (indices < _max).all())


def _as_faces(faces, name: str) -> FaceIndices:
    arr = np.asarray(faces)
    if arr.size == 0:
        return np.zeros((0, 3), dtype=np.int64)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"{name} must have shape (faces, 3), got {arr.shape}")
    if not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"{name} must hold integer indices, got {arr.dtype}")

    return arr.astype(np.int64)


class FaceGroup(NamedTuple):
    """A surface group: faces rendered against one shared z-buffer."""

    faces: FaceIndices
    """vertex indices, 3 per face."""
    faces_uv: Optional[FaceIndices] = None
    """texture coordinate indices, aligned with `faces`."""


class Model(NamedTuple):
    """Triangle mesh with optional texture coordinates.

    Faces are partitioned into surface groups; the renderer allocates one
    z-buffer per group.
    """

    verts: Vertices
    uvs: Optional[UVCoordinates]
    groups: Tuple[FaceGroup, ...]

    @classmethod
    def create(
        cls,
        verts,
        faces,
        uvs=None,
        faces_uv=None,
    ) -> "Model":
        """Build a single-group model from array-likes and validate it."""
        return cls.from_groups(verts, [(faces, faces_uv)], uvs=uvs)

    @classmethod
    def from_groups(cls, verts, groups, uvs=None) -> "Model":
        """Build a model from `(faces, faces_uv)` pairs, one per surface group.

        Raises `ValueError` on malformed arrays or out-of-range indices.
        """
        _verts = np.asarray(verts, dtype=np.float64)
        if _verts.ndim != 2 or _verts.shape[1] != 3:
            raise ValueError(f"verts must have shape (vertices, 3), got {_verts.shape}")

        _uvs: Optional[UVCoordinates] = None
        if uvs is not None:
            _uvs = np.asarray(uvs, dtype=np.float64)
            # Wavefront files may carry a third (w) texture component
            if _uvs.ndim != 2 or _uvs.shape[1] not in (2, 3):
                raise ValueError(f"uvs must have shape (uv_counts, 2), got {_uvs.shape}")
            _uvs = _uvs[:, :2]

        _groups = []
        for i, (faces, faces_uv) in enumerate(groups):
            _faces = _as_faces(faces, f"group {i} faces")
            if not index_in_bound(_faces, len(_verts)):
                raise ValueError(f"group {i} has vertex indices out of range")

            _faces_uv: Optional[FaceIndices] = None
            if faces_uv is not None:
                if _uvs is None:
                    raise ValueError(f"group {i} has uv faces but the model has no uvs")
                _faces_uv = _as_faces(faces_uv, f"group {i} faces_uv")
                if _faces_uv.shape != _faces.shape:
                    raise ValueError(
                        f"group {i} faces_uv shape {_faces_uv.shape} does not "
                        f"match faces shape {_faces.shape}"
                    )
                if not index_in_bound(_faces_uv, len(_uvs)):
                    raise ValueError(f"group {i} has uv indices out of range")

            _groups.append(FaceGroup(_faces, _faces_uv))

        model = cls(verts=_verts, uvs=_uvs, groups=tuple(_groups))
        logger.debug(
            "model with %d vertices, %d faces in %d groups",
            len(_verts),
            model.face_count,
            len(_groups),
        )

        return model

    @property
    def face_count(self) -> int:
        return sum(len(group.faces) for group in self.groups)

    @property
    def textured(self) -> bool:
        """Whether every group carries texture coordinates."""
        return self.uvs is not None and all(
            group.faces_uv is not None for group in self.groups
        )

    def vertex(self, index: int) -> Point3:
        return Point3(*self.verts[index].tolist())

    def uv(self, index: int) -> Point2:
        assert self.uvs is not None
        return Point2(*self.uvs[index].tolist())

    def triangles(
        self, group: FaceGroup
    ) -> Iterator[Tuple[Triangle, Optional[TriangleUV]]]:
        """Yield `(positions, uvs)` for each face of `group`.

        `uvs` is None when the group has no texture coordinates.
        """
        for i, face in enumerate(group.faces):
            positions = (
                self.vertex(face[0]),
                self.vertex(face[1]),
                self.vertex(face[2]),
            )
            if group.faces_uv is None:
                yield positions, None
                continue
            face_uv = group.faces_uv[i]
            yield positions, (
                self.uv(face_uv[0]),
                self.uv(face_uv[1]),
                self.uv(face_uv[2]),
            )
