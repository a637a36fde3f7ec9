"""Grid sampling utilities for 2D and 3D signed distance functions."""

from __future__ import annotations

import os
from typing import Optional, Sequence, Tuple, Union

import numpy as np
import numpy.typing as npt

from .errors import InvalidParameterError
from .sdf2d.geometry import Geometry2D
from .sdf3d.geometry import Geometry3D

_Array = npt.NDArray[np.floating]
_Bounds = Sequence[Tuple[float, float]]
_Geometry = Union[Geometry2D, Geometry3D]


def cell_centers(bounds: _Bounds, resolution: Sequence[int]) -> _Array:
    """Cell-centred sample points of a uniform grid.

    Parameters
    ----------
    bounds:
        ``((x0, x1), (y0, y1)[, (z0, z1)])`` physical extents of the domain.
    resolution:
        ``(nx, ny[, nz])`` number of cells along each axis.

    Returns
    -------
    numpy.ndarray
        Shape ``(ny, nx, 2)`` or ``(nz, ny, nx, 3)``, last axis first
        in memory.
    """
    if len(bounds) != len(resolution) or len(bounds) not in (2, 3):
        raise InvalidParameterError("bounds and resolution must both be 2-D or both be 3-D")
    if any(int(n) < 1 for n in resolution):
        raise InvalidParameterError(f"resolution must be >= 1 on every axis, got {resolution}")

    axes = []
    for (a0, a1), n in zip(bounds, resolution):
        axes.append(np.linspace(a0, a1, n, endpoint=False) + (a1 - a0) / (2.0 * n))

    grids = np.meshgrid(*reversed(axes), indexing="ij")
    return np.stack(list(reversed(grids)), axis=-1)


def sample_levelset(
    geom: _Geometry,
    resolution: Sequence[int],
    bounds: Optional[_Bounds] = None,
) -> _Array:
    """Sample *geom* on a uniform cell-centred grid.

    *bounds* default to the geometry's bounding box.  The result has shape
    ``(ny, nx)`` for 2-D geometries and ``(nz, ny, nx)`` for 3-D ones.
    """
    if bounds is None:
        bb = geom.bounding_box()
        bounds = list(zip(bb.min, bb.max))
    p = cell_centers(bounds, resolution)
    if p.shape[-1] != geom.bounding_box().ndim:
        raise InvalidParameterError("grid dimension does not match the geometry")
    return geom.sdf(p)


def save_npy(path: str, phi: _Array) -> None:
    """Save *phi* array to *path* (creates parent directories if needed)."""
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    np.save(path, phi)
