"""Shared vector kernel used by both sdf2d and sdf3d.

This module provides:

* **Type alias**: :data:`_F`
* **Constants**: :data:`TAU`
* **Vector constructors**: :func:`vec2`, :func:`vec3`
* **Vector math**: :func:`length`, :func:`length2`, :func:`dot`, :func:`dot2`,
  :func:`cross`, :func:`normalize`, :func:`vmin`, :func:`vmax`,
  :func:`min_component`, :func:`max_component`
* **Scalar helpers**: :func:`clamp`, :func:`saw_tooth`, :func:`polar_to_xy`,
  :func:`dtor`, :func:`rtod`
* **Shared boolean/domain operators** (used by both 2D and 3D geometry):
  :func:`opUnion`, :func:`opSubtraction`, :func:`opIntersection`,
  :func:`opSmoothUnion`, :func:`opOnion`, :func:`opScale`

All functions are pure: they never modify their inputs and return new arrays.
Vectors are ``numpy`` arrays whose last axis holds the components, so every
helper broadcasts over arbitrary leading batch dimensions.

Not meant to be imported directly by end users; import from
``helisdf.sdf2d`` or ``helisdf.sdf3d`` instead.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------
_F = npt.NDArray[np.floating]

TAU = 2.0 * np.pi

__all__ = [
    "_F", "TAU",
    "vec2", "vec3",
    "length", "length2", "dot", "dot2", "cross", "normalize",
    "vmin", "vmax", "min_component", "max_component",
    "clamp", "saw_tooth", "polar_to_xy", "dtor", "rtod",
    "opUnion", "opSubtraction", "opIntersection", "opSmoothUnion",
    "opOnion", "opScale",
]


# ===========================================================================
# Vector constructors
# ===========================================================================

def vec2(x: _F, y: _F) -> _F:
    """Stack *x* and *y* into a ``(..., 2)`` array."""
    x, y = np.broadcast_arrays(x, y)
    return np.stack([x, y], axis=-1)


def vec3(x: _F, y: _F, z: _F) -> _F:
    """Stack *x*, *y*, *z* into a ``(..., 3)`` array."""
    x, y, z = np.broadcast_arrays(x, y, z)
    return np.stack([x, y, z], axis=-1)


# ===========================================================================
# Vector math
# ===========================================================================

def length(v: _F) -> _F:
    """Euclidean length along the last axis."""
    return np.linalg.norm(v, axis=-1)


def length2(v: _F) -> _F:
    """Squared Euclidean length along the last axis."""
    return np.sum(v * v, axis=-1)


def dot(a: _F, b: _F) -> _F:
    """Dot product along the last axis."""
    return np.sum(a * b, axis=-1)


def dot2(a: _F) -> _F:
    """Squared length: ``dot(a, a)``."""
    return dot(a, a)


def cross(a: _F, b: _F) -> _F:
    """Cross product.

    For 3-D vectors this is the usual vector product.  For 2-D vectors it is
    the scalar ``a.x * b.y - a.y * b.x`` (the z component of the 3-D product).
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.shape[-1] == 2:
        return a[..., 0] * b[..., 1] - a[..., 1] * b[..., 0]
    return np.cross(a, b)


def normalize(v: _F) -> _F:
    """Unit vector along *v*.

    A zero-length input yields NaN components; callers must guard.
    """
    v = np.asarray(v, dtype=float)
    with np.errstate(invalid="ignore", divide="ignore"):
        return v / length(v)[..., None]


def vmin(a: _F, b: _F) -> _F:
    """Component-wise minimum of two vectors."""
    return np.minimum(a, b)


def vmax(a: _F, b: _F) -> _F:
    """Component-wise maximum of two vectors."""
    return np.maximum(a, b)


def min_component(v: _F) -> _F:
    """Smallest component along the last axis."""
    return np.min(v, axis=-1)


def max_component(v: _F) -> _F:
    """Largest component along the last axis."""
    return np.max(v, axis=-1)


# ===========================================================================
# Scalar helpers
# ===========================================================================

def clamp(x: _F, lo: float | _F, hi: float | _F) -> _F:
    """Clamp *x* element-wise to ``[lo, hi]``."""
    return np.minimum(np.maximum(x, lo), hi)


def saw_tooth(x: _F, period: float) -> _F:
    """Fold *x* into one period centred on zero: result lies in ``[-period/2, period/2)``.

    ``period`` must be positive.
    """
    t = (x + 0.5 * period) / period
    return period * (t - np.floor(t)) - 0.5 * period


def polar_to_xy(r: _F, theta: _F) -> _F:
    """Polar ``(r, theta)`` to a ``(..., 2)`` cartesian array."""
    return vec2(r * np.cos(theta), r * np.sin(theta))


def dtor(degrees: float) -> float:
    """Degrees to radians."""
    return degrees * np.pi / 180.0


def rtod(radians: float) -> float:
    """Radians to degrees."""
    return radians * 180.0 / np.pi


# ===========================================================================
# Shared boolean / domain operators (used by both sdf2d and sdf3d)
# ===========================================================================

def opUnion(d1: _F, d2: _F) -> _F:
    """Union of two SDFs: ``min(d1, d2)``."""
    return np.minimum(d1, d2)


def opSubtraction(d1: _F, d2: _F) -> _F:
    """Subtract *d1* from *d2*: ``max(-d1, d2)``."""
    return np.maximum(-d1, d2)


def opIntersection(d1: _F, d2: _F) -> _F:
    """Intersection of two SDFs: ``max(d1, d2)``."""
    return np.maximum(d1, d2)


def opSmoothUnion(d1: _F, d2: _F, k: float) -> _F:
    """Polynomial smooth union; never lower than ``min(d1, d2) - k``."""
    k = k * 4.0
    h = np.maximum(k - np.abs(d1 - d2), 0.0)
    return np.minimum(d1, d2) - h * h * 0.25 / k


def opOnion(sdf_val: _F, thickness: float) -> _F:
    """Turn a solid into a shell of *thickness*."""
    return np.abs(sdf_val) - thickness


def opScale(p: _F, s: float, primitive: "_SDFFunc") -> _F:  # type: ignore[name-defined]
    """Uniformly scale a primitive by factor *s*."""
    return primitive(p / s) * s
