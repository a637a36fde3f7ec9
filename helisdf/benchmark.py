"""Evaluation speed benchmark for 2D and 3D geometries.

Points are drawn uniformly from the bounding box scaled by
:data:`BENCHMARK_SCALE` about its centre, so some fall outside the solid.
The whole batch is evaluated in one vectorized call.
"""

from __future__ import annotations

import logging
import time
from typing import Optional, Union

import numpy as np

from .box import Box
from .errors import InvalidParameterError
from .sdf2d.geometry import Geometry2D
from .sdf3d.geometry import Geometry3D

logger = logging.getLogger(__name__)

N_EVALS = 1_000_000
BENCHMARK_SCALE = 1.2


def format_eps(eps: float) -> str:
    """Human readable evaluations per second, e.g. ``"3.20 M evals/sec"``."""
    if eps > 1e9:
        return f"{eps / 1e9:.2f} G evals/sec"
    if eps > 1e6:
        return f"{eps / 1e6:.2f} M evals/sec"
    if eps > 1e3:
        return f"{eps / 1e3:.2f} K evals/sec"
    return f"{eps:.2f} evals/sec"


def benchmark_sdf(
    description: str,
    geom: Union[Geometry2D, Geometry3D],
    n_evals: int = N_EVALS,
    rng: Optional[np.random.Generator] = None,
) -> float:
    """Time one batched evaluation of *n_evals* random points.

    Returns the measured evaluations per second and logs it at INFO level
    together with *description*.
    """
    if n_evals < 1:
        raise InvalidParameterError(f"n_evals must be >= 1, got {n_evals}")
    bb = geom.bounding_box()
    region = Box.from_center_size(bb.center(), bb.size() * BENCHMARK_SCALE)
    points = region.random_set(n_evals, rng)

    start = time.perf_counter()
    geom.sdf(points)
    elapsed = time.perf_counter() - start

    eps = n_evals / max(elapsed, np.finfo(float).eps)
    logger.info("%s %s", description, format_eps(eps))
    return eps
