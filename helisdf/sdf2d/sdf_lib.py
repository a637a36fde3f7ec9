"""2-D SDF math primitives for the sdf2d package.

Re-exports all shared helpers from :mod:`helisdf._common`, then adds the 2-D
primitive SDFs and the 2-D transform operator.

All functions accept and return ``numpy.ndarray`` objects and support
broadcasting over arbitrary leading batch dimensions.  A "point array" *p*
has shape ``(..., 2)``; scalar SDF results have shape ``(...,)``.

Formulas are adapted from Inigo Quilez's distance function reference:
https://iquilezles.org/articles/distfunctions2d/
"""

from __future__ import annotations

import numpy as np

from .._common import *  # noqa: F401, F403  re-export shared helpers
from .._common import _F  # explicit import so _F is available for annotations

# Smallest positive double; stands in for the squared length of a zero edge.
_TINY = np.finfo(float).tiny


# ===========================================================================
# 2-D primitive SDFs
# ===========================================================================

def sdCircle(p: _F, r: float) -> _F:
    """2-D circle of radius *r* centred at origin."""
    return length(p) - r


def sdBox2D(p: _F, b: _F) -> _F:
    """2-D axis-aligned box with half-extents *b* ``(bx, by)``."""
    d = np.abs(p) - b
    return length(np.maximum(d, 0.0)) + np.minimum(np.maximum(d[..., 0], d[..., 1]), 0.0)


def sdRoundedBox2D(p: _F, b: _F, r: float) -> _F:
    """2-D rounded box with half-extents *b* and corner radius *r*."""
    d = np.abs(p) - b + r
    return length(np.maximum(d, 0.0)) + np.minimum(np.maximum(d[..., 0], d[..., 1]), 0.0) - r


def sdPolygon2D(p: _F, v: _F) -> _F:
    """2-D polygon from *N* vertices *v* (shape ``(N, 2)``).

    Distance is the minimum over all edge segments; the sign comes from a
    crossing-number test.  Zero-length edges contribute their endpoint
    distance and never flip the sign.
    """
    n = v.shape[0]
    d = dot2(p - v[0])
    s = np.ones(np.shape(d))
    for i in range(n):
        j = (i + 1) % n
        e = v[j] - v[i]
        w = p - v[i]
        h = clamp(dot(w, e) / max(dot2(e), _TINY), 0.0, 1.0)
        b = w - e * h[..., None]
        d = np.minimum(d, dot2(b))
        c0 = p[..., 1] >= v[i][1]
        c1 = p[..., 1] < v[j][1]
        c2 = e[0] * w[..., 1] > e[1] * w[..., 0]
        crossing = (c0 & c1 & c2) | (~c0 & ~c1 & ~c2)
        s = np.where(crossing, -s, s)
    return s * np.sqrt(d)


# ===========================================================================
# 2-D transform operator
# ===========================================================================

def opTx2D(p: _F, inv: _F, sdf_func: "_SDFFunc") -> _F:  # type: ignore[name-defined]
    """Evaluate *sdf_func* in the local frame given by the inverse matrix *inv* (3x3)."""
    return sdf_func(p @ inv[:2, :2].T + inv[:2, 2])
