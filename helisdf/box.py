"""Axis-aligned bounding boxes for 2-D and 3-D signed distance fields.

Every geometry reports a :class:`Box` that contains its whole zero-set.
Boxes may be looser than the tight bound but never tighter.
"""

from __future__ import annotations

import itertools
from typing import Optional, Sequence

import numpy as np
import numpy.typing as npt

from .errors import InvalidParameterError
from .xform import apply_transform

_Array = npt.NDArray[np.floating]


class Box:
    """Axis-aligned box given by its *min* and *max* corners.

    The dimension (2 or 3) is taken from the corner length.  Corners are
    stored as read-only arrays; every operation returns a new box.
    """

    __slots__ = ("min", "max")

    def __init__(self, min: Sequence[float], max: Sequence[float]) -> None:
        lo = np.array(min, dtype=float)
        hi = np.array(max, dtype=float)
        if lo.ndim != 1 or lo.shape != hi.shape or lo.shape[0] not in (2, 3):
            raise InvalidParameterError(
                f"box corners must be matching 2-D or 3-D vectors, got {lo.shape} and {hi.shape}"
            )
        if np.any(lo > hi):
            raise InvalidParameterError(f"box min {lo} exceeds max {hi}")
        lo.setflags(write=False)
        hi.setflags(write=False)
        self.min = lo
        self.max = hi

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_points(cls, points: Sequence[Sequence[float]]) -> Box:
        """Smallest box enclosing *points* (shape ``(N, 2)`` or ``(N, 3)``)."""
        pts = np.asarray(points, dtype=float)
        if pts.ndim != 2 or pts.shape[0] == 0:
            raise InvalidParameterError("need at least one point to build a box")
        return cls(pts.min(axis=0), pts.max(axis=0))

    @classmethod
    def from_center_size(cls, center: Sequence[float], size: Sequence[float]) -> Box:
        """Box of full extent *size* centred on *center*."""
        c = np.asarray(center, dtype=float)
        half = 0.5 * np.abs(np.asarray(size, dtype=float))
        return cls(c - half, c + half)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def ndim(self) -> int:
        return self.min.shape[0]

    def center(self) -> _Array:
        """``(min + max) / 2``."""
        return 0.5 * (self.min + self.max)

    def size(self) -> _Array:
        """``max - min``."""
        return self.max - self.min

    def vertices(self) -> _Array:
        """All ``2**ndim`` corners, shape ``(2**ndim, ndim)``."""
        corners = itertools.product(*zip(self.min, self.max))
        return np.array(list(corners), dtype=float)

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    def extend(self, other: Box) -> Box:
        """Union: the smallest box containing this box and *other*."""
        return Box(np.minimum(self.min, other.min), np.maximum(self.max, other.max))

    def intersect(self, other: Box) -> Box:
        """Overlap of two boxes.

        Disjoint boxes collapse to a degenerate box on the shared range.
        """
        lo = np.maximum(self.min, other.min)
        hi = np.minimum(self.max, other.max)
        return Box(np.minimum(lo, hi), hi)

    def enlarge(self, delta: float | Sequence[float]) -> Box:
        """Move every face outward by *delta* (scalar or per-axis)."""
        d = np.broadcast_to(np.asarray(delta, dtype=float), self.min.shape)
        return Box(self.min - d, self.max + d)

    def translate(self, v: Sequence[float]) -> Box:
        v = np.asarray(v, dtype=float)
        return Box(self.min + v, self.max + v)

    def scale(self, s: float) -> Box:
        """Scale about the origin by a positive factor *s*."""
        return Box(self.min * s, self.max * s)

    def transform(self, m: _Array) -> Box:
        """Push every corner through the homogeneous matrix *m* and re-enclose."""
        return Box.from_points(apply_transform(np.asarray(m, dtype=float), self.vertices()))

    def contains(self, p: _Array, tolerance: float = 0.0) -> npt.NDArray[np.bool_]:
        """Vectorized containment test for points of shape ``(..., ndim)``."""
        p = np.asarray(p, dtype=float)
        inside = (p >= self.min - tolerance) & (p <= self.max + tolerance)
        return np.all(inside, axis=-1)

    # ------------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------------

    def random_set(self, n: int, rng: Optional[np.random.Generator] = None) -> _Array:
        """*n* points drawn uniformly from ``[min, max)``, shape ``(n, ndim)``."""
        rng = np.random.default_rng() if rng is None else rng
        return rng.uniform(self.min, self.max, size=(n, self.ndim))

    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Box):
            return NotImplemented
        return bool(np.array_equal(self.min, other.min) and np.array_equal(self.max, other.max))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Box(min={self.min.tolist()}, max={self.max.tolist()})"
