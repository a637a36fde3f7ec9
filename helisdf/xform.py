"""Homogeneous transform matrices for 2-D (3x3) and 3-D (4x4) geometry.

Matrices act on column vectors: a point ``p`` maps to ``M @ [p, 1]``.
Compose with ``@``: ``translate3d(...) @ rotate_x(...)`` rotates first.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import numpy.typing as npt

from ._common import normalize

_Array = npt.NDArray[np.floating]


# ===========================================================================
# 2-D
# ===========================================================================

def translate2d(v: Sequence[float]) -> _Array:
    """3x3 translation by ``(vx, vy)``."""
    m = np.eye(3)
    m[:2, 2] = v
    return m


def scale2d(v: Sequence[float]) -> _Array:
    """3x3 per-axis scale by ``(sx, sy)``."""
    return np.diag([v[0], v[1], 1.0])


def rotate2d(angle_rad: float) -> _Array:
    """3x3 counter-clockwise rotation by *angle_rad*."""
    c = np.cos(angle_rad)
    s = np.sin(angle_rad)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


# ===========================================================================
# 3-D
# ===========================================================================

def translate3d(v: Sequence[float]) -> _Array:
    """4x4 translation by ``(vx, vy, vz)``."""
    m = np.eye(4)
    m[:3, 3] = v
    return m


def scale3d(v: Sequence[float]) -> _Array:
    """4x4 per-axis scale by ``(sx, sy, sz)``."""
    return np.diag([v[0], v[1], v[2], 1.0])


def rotate_x(angle_rad: float) -> _Array:
    """4x4 rotation about the X axis."""
    c = np.cos(angle_rad)
    s = np.sin(angle_rad)
    return np.array([
        [1.0, 0.0, 0.0, 0.0],
        [0.0, c, -s, 0.0],
        [0.0, s, c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def rotate_y(angle_rad: float) -> _Array:
    """4x4 rotation about the Y axis."""
    c = np.cos(angle_rad)
    s = np.sin(angle_rad)
    return np.array([
        [c, 0.0, s, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [-s, 0.0, c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def rotate_z(angle_rad: float) -> _Array:
    """4x4 rotation about the Z axis."""
    c = np.cos(angle_rad)
    s = np.sin(angle_rad)
    return np.array([
        [c, -s, 0.0, 0.0],
        [s, c, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def rotate3d(axis: Sequence[float], angle_rad: float) -> _Array:
    """4x4 rotation by *angle_rad* about an arbitrary *axis* (Rodrigues)."""
    x, y, z = normalize(np.asarray(axis, dtype=float))
    c = np.cos(angle_rad)
    s = np.sin(angle_rad)
    t = 1.0 - c
    m = np.eye(4)
    m[:3, :3] = [
        [t * x * x + c,     t * x * y - s * z, t * x * z + s * y],
        [t * x * y + s * z, t * y * y + c,     t * y * z - s * x],
        [t * x * z - s * y, t * y * z + s * x, t * z * z + c],
    ]
    return m


# ===========================================================================
# Application
# ===========================================================================

def apply_transform(m: _Array, p: _Array) -> _Array:
    """Apply homogeneous matrix *m* to the points *p* (shape ``(..., n)``)."""
    n = m.shape[0] - 1
    return p @ m[:n, :n].T + m[:n, n]
