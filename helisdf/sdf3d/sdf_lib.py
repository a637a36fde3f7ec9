"""3-D SDF math primitives for the sdf3d package.

Re-exports all shared helpers from :mod:`helisdf._common`, then adds the 3-D
primitive SDFs and the space-mapping operators that lift 2-D profiles into
3-D (extrusion, revolution, rotated copies and the helical screw map).

All functions accept and return ``numpy.ndarray`` objects and support
broadcasting over arbitrary leading batch dimensions.  A "point array" *p*
has shape ``(..., 3)``; scalar SDF results have shape ``(...,)``.  The
symmetry axis of every round primitive is Z.

Primitive formulas are adapted from Inigo Quilez's distance function
reference: https://iquilezles.org/articles/distfunctions/
"""

from __future__ import annotations

import numpy as np

from .._common import *  # noqa: F401, F403  re-export shared helpers
from .._common import _F  # explicit import so _F is available for annotations


# ===========================================================================
# 3-D primitive SDFs
# ===========================================================================

def sdSphere(p: _F, s: float) -> _F:
    """Sphere of radius *s* centred at the origin."""
    return length(p) - s


def sdBox(p: _F, b: _F) -> _F:
    """Axis-aligned box with half-extents *b* ``(bx, by, bz)``."""
    q = np.abs(p) - b
    return length(np.maximum(q, 0.0)) + np.minimum(np.max(q, axis=-1), 0.0)


def sdRoundBox(p: _F, b: _F, r: float) -> _F:
    """Axis-aligned box with half-extents *b* and edge radius *r*."""
    q = np.abs(p) - b + r
    return length(np.maximum(q, 0.0)) + np.minimum(np.max(q, axis=-1), 0.0) - r


def sdRoundedCylinder(p: _F, ra: float, rb: float, h: float) -> _F:
    """Cylinder on Z of outer radius *ra*, edge radius *rb*, half-height *h*.

    Radial ``|xy| - ra`` and axial ``|z| - h`` distances are combined by a
    rounded maximum; ``rb = 0`` gives sharp edges.
    """
    d = vec2(length(p[..., :2]) - ra + rb, np.abs(p[..., 2]) - h + rb)
    return (
        np.minimum(np.maximum(d[..., 0], d[..., 1]), 0.0)
        + length(np.maximum(d, 0.0))
        - rb
    )


def sdCappedCone(p: _F, h: float, r1: float, r2: float) -> _F:
    """Capped cone on Z with half-height *h*, radius *r1* at ``-h`` and *r2* at ``+h``."""
    q  = vec2(length(p[..., :2]), p[..., 2])
    k1 = vec2(r2, h)
    k2 = vec2(r2 - r1, 2.0 * h)
    ca = vec2(
        q[..., 0] - np.minimum(q[..., 0], np.where(q[..., 1] < 0.0, r1, r2)),
        np.abs(q[..., 1]) - h,
    )
    cb = q - k1 + k2 * clamp(dot(k1 - q, k2) / dot2(k2), 0.0, 1.0)[..., None]
    s  = np.where((cb[..., 0] < 0.0) & (ca[..., 1] < 0.0), -1.0, 1.0)
    return s * np.sqrt(np.minimum(dot2(ca), dot2(cb)))


# ===========================================================================
# 2-D -> 3-D space mappings
# ===========================================================================

def opExtrusion(p: _F, primitive2d: "_SDFFunc", h: float) -> _F:  # type: ignore[name-defined]
    """Extrude a 2-D primitive along Z to half-height *h*: ``max(d2, |z| - h)``."""
    return np.maximum(primitive2d(p[..., :2]), np.abs(p[..., 2]) - h)


def opRevolution(p: _F, primitive2d: "_SDFFunc") -> _F:  # type: ignore[name-defined]
    """Revolve a 2-D half-profile about Z: the profile sees ``(|xy|, z)``."""
    return primitive2d(vec2(length(p[..., :2]), p[..., 2]))


def opRotateCopy(p: _F, primitive3d: "_SDFFunc", theta: float) -> _F:  # type: ignore[name-defined]
    """Repeat a primitive every *theta* radians about Z.

    The query angle is folded into the sector ``[-theta/2, theta/2)``, so the
    primitive should sit around the +X axis.
    """
    xy = polar_to_xy(
        length(p[..., :2]),
        saw_tooth(np.arctan2(p[..., 1], p[..., 0]), theta),
    )
    return primitive3d(vec3(xy[..., 0], xy[..., 1], p[..., 2]))


def opScrew(
    p: _F,
    thread2d: "_SDFFunc",  # type: ignore[name-defined]
    pitch: float,
    lead: float,
    half_length: float,
) -> _F:
    """Sweep a 2-D thread profile along a helix about Z.

    The profile's x axis runs along the screw axis (one pitch period centred
    on zero) and its y axis is the distance from the screw axis.  A point at
    angle ``theta`` is shifted down by ``lead * theta / TAU`` so a full turn
    advances exactly one *lead*, then folded into a single pitch with a
    saw-tooth.  The helix is cut to ``|z| <= half_length``.
    """
    theta = np.arctan2(p[..., 1], p[..., 0])
    z = p[..., 2] - lead * theta / TAU
    q = vec2(saw_tooth(z, pitch), length(p[..., :2]))
    d0 = thread2d(q)
    d1 = np.abs(p[..., 2]) - half_length
    return np.maximum(d0, d1)


# ===========================================================================
# Transform operator
# ===========================================================================

def opTx(p: _F, inv: _F, primitive3d: "_SDFFunc") -> _F:  # type: ignore[name-defined]
    """Evaluate *primitive3d* in the local frame given by the inverse matrix *inv* (4x4)."""
    return primitive3d(p @ inv[:3, :3].T + inv[:3, 3])
