"""Composite 2-D shapes built from the sdf2d primitives."""

from __future__ import annotations

from typing import Sequence

from .geometry import Box2D, Difference2D, Geometry2D, Union2D
from ..errors import InvalidParameterError


def FingerButton2D(size: Sequence[float], gap: float, length: float) -> Geometry2D:
    """Outline of a flexible push button cut into a panel.

    The button of full extent *size* ``(w, h)`` hangs off a finger of the
    given *length*; both are separated from the surrounding panel by a slot of
    width *gap*.  The result is the slot itself, ready to be extruded and
    subtracted from a panel.
    """
    sx, sy = float(size[0]), float(size[1])
    if sx <= 0.0 or sy <= 0.0 or gap <= 0.0 or length <= 0.0:
        raise InvalidParameterError("button size, gap and length must all be > 0")

    # rounding radius based on button size
    r0 = 0.4 * min(sx, sy)
    r1 = r0 + gap
    # finger width and offset
    fw = 0.7 * sx
    f_ofs = 0.5 * (length + sy)

    button = Box2D((0.5 * sx, 0.5 * sy), r0)
    surround = Box2D((0.5 * sx + gap, 0.5 * sy + gap), r1)

    finger = Box2D((0.5 * fw, 0.5 * length)).translate(0.0, f_ofs)
    fx_half = (0.5 * fw + gap, 0.5 * length)
    finger_surround = Box2D(fx_half, min(r0, *fx_half)).translate(0.0, f_ofs)

    return Difference2D(Union2D(surround, finger_surround), Union2D(button, finger))
