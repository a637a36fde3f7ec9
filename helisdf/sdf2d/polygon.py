"""Polygon profile builder.

A :class:`Polygon` collects vertices one at a time.  Any vertex may carry a
smoothing request, which :meth:`Polygon.freeze` resolves into a circular
fillet tangent to both adjacent edges.  The frozen result is a read-only
``(N, 2)`` array, ready for :class:`~helisdf.sdf2d.Polygon2D`.

Usage::

    from helisdf.sdf2d import Polygon, Polygon2D

    tri = Polygon()
    tri.add(0.0, 0.0)
    tri.add(1.0, 0.0).smooth(0.1, 5)
    tri.add(0.0, 1.0)
    profile = Polygon2D(tri.freeze())
"""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

import numpy as np
import numpy.typing as npt

from .._common import TAU, cross, dot, length, normalize
from ..errors import InvalidParameterError
from ..xform import rotate2d

logger = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]

DEFAULT_FACETS = 5

# |sin| of the corner angle below which a vertex counts as straight or folded back.
_COLINEAR_EPS = 1e-9


class Polygon:
    """Append-only builder for a closed polygon with optional rounded vertices."""

    def __init__(self) -> None:
        self._vertices: List[Tuple[float, float]] = []
        self._smoothing: Dict[int, Tuple[float, int]] = {}

    def __len__(self) -> int:
        return len(self._vertices)

    def add(self, x: float, y: float) -> Polygon:
        """Append the vertex ``(x, y)``."""
        self._vertices.append((float(x), float(y)))
        return self

    def smooth(self, radius: float, facets: int = DEFAULT_FACETS) -> Polygon:
        """Round the most recently added vertex with a fillet of *radius*.

        The fillet is drawn with *facets* line segments.
        """
        if not self._vertices:
            raise InvalidParameterError("smooth() needs a vertex to act on")
        if radius < 0.0:
            raise InvalidParameterError(f"fillet radius must be >= 0, got {radius}")
        if int(facets) < 1:
            raise InvalidParameterError(f"fillet needs at least one facet, got {facets}")
        self._smoothing[len(self._vertices) - 1] = (float(radius), int(facets))
        return self

    def freeze(self) -> _Array:
        """Resolve all fillets and return the final read-only vertex array."""
        v = np.array(self._vertices, dtype=float).reshape(-1, 2)
        n = len(v)
        out: List[_Array] = []
        for i in range(n):
            radius, facets = self._smoothing.get(i, (0.0, 0))
            if radius == 0.0 or n < 3:
                out.append(v[i][None, :])
                continue
            out.append(_fillet(v[(i - 1) % n], v[i], v[(i + 1) % n], radius, facets, i))
        result = np.concatenate(out, axis=0) if out else np.empty((0, 2))
        result.setflags(write=False)
        return result


def _fillet(
    vp: _Array, v: _Array, vn: _Array, radius: float, facets: int, index: int
) -> _Array:
    """Replace corner *v* (between *vp* and *vn*) with ``facets + 1`` arc points."""
    lp = float(length(vp - v))
    ln = float(length(vn - v))
    if lp == 0.0 or ln == 0.0:
        logger.warning("vertex %d has a zero-length edge; fillet skipped", index)
        return v[None, :]

    v0 = normalize(vp - v)
    v1 = normalize(vn - v)
    if abs(float(cross(v0, v1))) < _COLINEAR_EPS:
        logger.debug("vertex %d is not a corner; fillet skipped", index)
        return v[None, :]

    theta = np.arccos(np.clip(dot(v0, v1), -1.0, 1.0))
    half = 0.5 * theta
    # distance from the vertex to the tangent points
    d1 = radius / np.tan(half)
    limit = 0.5 * min(lp, ln)
    if d1 > limit:
        logger.warning(
            "fillet radius %g at vertex %d exceeds its edges; clamped to %g",
            radius, index, limit * np.tan(half),
        )
        d1 = limit
        radius = d1 * np.tan(half)

    p0 = v + v0 * d1
    c = v + normalize(v0 + v1) * (radius / np.sin(half))
    dtheta = np.sign(cross(v1, v0)) * (np.pi - theta) / facets
    rm = rotate2d(dtheta)[:2, :2]

    points = np.empty((facets + 1, 2))
    rv = p0 - c
    for k in range(facets + 1):
        points[k] = c + rv
        rv = rm @ rv
    return points


def nagon(n: int, radius: float) -> _Array:
    """Vertices of a regular *n*-gon with circumradius *radius*, first vertex on +X."""
    if n < 3:
        raise InvalidParameterError(f"a polygon needs at least 3 sides, got {n}")
    if radius <= 0.0:
        raise InvalidParameterError(f"radius must be > 0, got {radius}")
    theta = np.arange(n) * (TAU / n)
    return np.stack([radius * np.cos(theta), radius * np.sin(theta)], axis=-1)
