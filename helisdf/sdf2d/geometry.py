"""2D geometry primitives and operators for signed distance functions."""

from __future__ import annotations

from typing import Callable, Sequence, Union

import numpy as np
import numpy.typing as npt

from . import sdf_lib as sdf
from .polygon import Polygon
from ..box import Box
from ..errors import InvalidParameterError
from ..xform import rotate2d, translate2d

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------
_Array = npt.NDArray[np.floating]
_SDFFunc = Callable[[_Array], _Array]


# ===========================================================================
# Base class
# ===========================================================================

class Geometry2D:
    """Base class for 2D signed-distance-function geometries.

    A ``Geometry2D`` wraps a callable ``func(p) -> distances`` where *p* is
    a ``(..., 2)`` array of 2D points and the return value is a ``(...)``
    array of signed distances, together with a conservative bounding box.

    Subclasses override ``__init__`` to pass the appropriate primitive SDF and
    box to ``super().__init__(func, bbox)``.  Instances are immutable.

    Implements:
    - Contract:           :meth:`evaluate`, :meth:`bounding_box`
    - Boolean operations: :meth:`union`, :meth:`subtract`, :meth:`intersect`
    - Modifiers:          :meth:`round`, :meth:`onion`
    - Transforms:         :meth:`translate`, :meth:`rotate`, :meth:`scale`,
                          :meth:`transform`
    """

    def __init__(self, func: _SDFFunc, bbox: Box) -> None:
        if bbox.ndim != 2:
            raise InvalidParameterError("a 2D geometry needs a 2D bounding box")
        self._func = func
        self._bb = bbox

    def sdf(self, p: _Array) -> _Array:
        """Evaluate signed distance at *p* (shape ``(..., 2)``)."""
        return self._func(p)

    def __call__(self, p: _Array) -> _Array:
        return self._func(p)

    def evaluate(self, p: Union[Sequence[float], _Array]) -> Union[float, _Array]:
        """Signed distance at *p*.

        A single point ``(x, y)`` returns a ``float``; a batch of shape
        ``(..., 2)`` returns an array of shape ``(...)``.
        """
        p = np.asarray(p, dtype=float)
        d = self._func(p)
        return float(d) if p.ndim == 1 else d

    def bounding_box(self) -> Box:
        """Axis-aligned box containing the zero-set of this geometry."""
        return self._bb

    # ------------------------------------------------------------------
    # Boolean operations
    # ------------------------------------------------------------------

    def union(self, other: Geometry2D) -> Geometry2D:
        """Return the union (min) of this shape and *other*."""
        return Union2D(self, other)

    def subtract(self, other: Geometry2D) -> Geometry2D:
        """Subtract *other* from this shape."""
        return Difference2D(self, other)

    def intersect(self, other: Geometry2D) -> Geometry2D:
        """Return the intersection (max) of this shape and *other*."""
        return Intersection2D(self, other)

    # ------------------------------------------------------------------
    # Modifiers
    # ------------------------------------------------------------------

    def round(self, rad: float) -> Geometry2D:
        """Round the surface outward by *rad*."""
        return Offset2D(self, rad)

    def onion(self, thickness: float) -> Geometry2D:
        """Turn the solid into a hollow shell of *thickness*."""
        return Geometry2D(
            lambda p: sdf.opOnion(self.sdf(p), thickness),
            self._bb.enlarge(abs(thickness)),
        )

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def translate(self, tx: float, ty: float) -> Geometry2D:
        """Translate by ``(tx, ty)``."""
        return Transform2D(self, translate2d((tx, ty)))

    def rotate(self, angle_rad: float) -> Geometry2D:
        """Rotate by *angle_rad* radians (counter-clockwise)."""
        return Transform2D(self, rotate2d(angle_rad))

    def scale(self, s: float) -> Geometry2D:
        """Uniformly scale by factor *s*."""
        if s <= 0.0:
            raise InvalidParameterError(f"scale factor must be > 0, got {s}")
        return Geometry2D(lambda p: sdf.opScale(p, s, self.sdf), self._bb.scale(s))

    def transform(self, m: _Array) -> Geometry2D:
        """Apply the 3x3 homogeneous matrix *m*."""
        return Transform2D(self, m)


# ===========================================================================
# Primitive shapes
# ===========================================================================

class Circle2D(Geometry2D):
    """Circle centred at origin with given *radius*."""

    def __init__(self, radius: float) -> None:
        if radius <= 0.0:
            raise InvalidParameterError(f"radius must be > 0, got {radius}")
        super().__init__(
            lambda p: sdf.sdCircle(p, radius),
            Box((-radius, -radius), (radius, radius)),
        )


class Box2D(Geometry2D):
    """Axis-aligned rectangle with *half_size* ``(hx, hy)`` centred at origin.

    A non-zero *round* rounds the corners with that radius.
    """

    def __init__(self, half_size: Sequence[float], round: float = 0.0) -> None:
        b = np.array(half_size, dtype=float)
        if b.shape != (2,) or np.any(b <= 0.0):
            raise InvalidParameterError(f"half_size must be two positive values, got {half_size}")
        if not 0.0 <= round <= b.min():
            raise InvalidParameterError(f"round must be in [0, {b.min()}], got {round}")
        if round > 0.0:
            func = lambda p: sdf.sdRoundedBox2D(p, b, round)  # noqa: E731
        else:
            func = lambda p: sdf.sdBox2D(p, b)  # noqa: E731
        super().__init__(func, Box(-b, b))


class Polygon2D(Geometry2D):
    """Arbitrary convex or concave polygon from N 2-D *vertices*.

    *vertices* may be an ``(N, 2)`` sequence or an unfrozen
    :class:`~helisdf.sdf2d.polygon.Polygon` builder.  Self-intersecting
    input gives a finite but unreliable field.
    """

    def __init__(self, vertices: Union[Polygon, Sequence[Sequence[float]], _Array]) -> None:
        if isinstance(vertices, Polygon):
            vertices = vertices.freeze()
        v = np.array(vertices, dtype=float)
        if v.ndim != 2 or v.shape[1] != 2 or v.shape[0] < 3:
            raise InvalidParameterError(f"need at least 3 vertices of shape (N, 2), got {v.shape}")
        if not np.all(np.isfinite(v)):
            raise InvalidParameterError("polygon vertices must be finite")
        v.setflags(write=False)
        self.vertices = v
        super().__init__(lambda p: sdf.sdPolygon2D(p, v), Box.from_points(v))


# ===========================================================================
# Operators
# ===========================================================================

class Union2D(Geometry2D):
    """Union of two or more 2-D geometries (minimum SDF).

    With ``k > 0`` the seams are blended by a polynomial smooth minimum.
    """

    def __init__(self, *geoms: Geometry2D, k: float = 0.0) -> None:
        if not geoms:
            raise InvalidParameterError("Union2D needs at least one geometry")
        if k < 0.0:
            raise InvalidParameterError(f"smoothing k must be >= 0, got {k}")

        def _sdf(p: _Array) -> _Array:
            d = geoms[0].sdf(p)
            for g in geoms[1:]:
                d = sdf.opSmoothUnion(d, g.sdf(p), k) if k > 0.0 else sdf.opUnion(d, g.sdf(p))
            return d

        bb = geoms[0].bounding_box()
        for g in geoms[1:]:
            bb = bb.extend(g.bounding_box())
        super().__init__(_sdf, bb.enlarge(k) if k > 0.0 else bb)


class Intersection2D(Geometry2D):
    """Intersection of two or more 2-D geometries (maximum SDF)."""

    def __init__(self, *geoms: Geometry2D) -> None:
        if not geoms:
            raise InvalidParameterError("Intersection2D needs at least one geometry")

        def _sdf(p: _Array) -> _Array:
            d = geoms[0].sdf(p)
            for g in geoms[1:]:
                d = sdf.opIntersection(d, g.sdf(p))
            return d

        bb = geoms[0].bounding_box()
        for g in geoms[1:]:
            bb = bb.intersect(g.bounding_box())
        super().__init__(_sdf, bb)


class Difference2D(Geometry2D):
    """Subtract *cutter* from *base*."""

    def __init__(self, base: Geometry2D, cutter: Geometry2D) -> None:
        super().__init__(
            lambda p: sdf.opSubtraction(cutter.sdf(p), base.sdf(p)),
            base.bounding_box(),
        )


class Offset2D(Geometry2D):
    """Grow (positive *delta*) or shrink (negative *delta*) a geometry."""

    def __init__(self, geom: Geometry2D, delta: float) -> None:
        super().__init__(
            lambda p: geom.sdf(p) - delta,
            geom.bounding_box().enlarge(max(delta, 0.0)),
        )


class Transform2D(Geometry2D):
    """Place *geom* with the invertible 3x3 homogeneous matrix *m*.

    Distances are preserved only for rigid motions (rotation + translation).
    """

    def __init__(self, geom: Geometry2D, m: _Array) -> None:
        m = np.array(m, dtype=float)
        if m.shape != (3, 3):
            raise InvalidParameterError(f"2D transform must be 3x3, got {m.shape}")
        try:
            inv = np.linalg.inv(m)
        except np.linalg.LinAlgError as exc:
            raise InvalidParameterError("2D transform matrix is singular") from exc
        self.matrix = m
        super().__init__(
            lambda p: sdf.opTx2D(p, inv, geom.sdf),
            geom.bounding_box().transform(m),
        )
