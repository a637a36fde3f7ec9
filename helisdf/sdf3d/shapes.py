"""Composite 3-D parts: holes, washers, hex heads, knurls and standoffs.

Each factory returns an ordinary :class:`~helisdf.sdf3d.geometry.Geometry3D`
assembled from the primitives and operators of this package.  Parts are
centred on the origin with Z as their axis.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import Union

from .geometry import (
    Cone3D,
    Cylinder3D,
    Difference3D,
    Extrude3D,
    Geometry3D,
    Intersection3D,
    RotateCopy3D,
    Screw3D,
    Sphere3D,
    Transform3D,
    Union3D,
)
from .._common import TAU, dtor
from ..errors import InvalidParameterError
from ..sdf2d.geometry import Offset2D, Polygon2D
from ..sdf2d.polygon import Polygon, nagon
from ..xform import rotate_x, translate3d

logger = logging.getLogger(__name__)

# Helix angle of the knurl on a knurled head.
KNURL_ANGLE = dtor(45.0)


# ===========================================================================
# Holes
# ===========================================================================

def CounterBoredHole3D(length: float, radius: float, cb_radius: float, cb_depth: float) -> Geometry3D:
    """Hole of *radius* through *length* with a counter bore at the top (+Z) end."""
    if cb_radius <= radius:
        raise InvalidParameterError(f"counter bore radius {cb_radius} must exceed hole radius {radius}")
    if not 0.0 < cb_depth <= length:
        raise InvalidParameterError(f"counter bore depth must be in (0, {length}], got {cb_depth}")
    hole = Cylinder3D(length, radius)
    bore = Cylinder3D(cb_depth, cb_radius).translate(0.0, 0.0, 0.5 * (length - cb_depth))
    return Union3D(hole, bore)


def ChamferedHole3D(length: float, radius: float, ch_radius: float) -> Geometry3D:
    """Hole of *radius* through *length* with a 45 degree chamfer at the top end."""
    if not 0.0 < ch_radius <= length:
        raise InvalidParameterError(f"chamfer radius must be in (0, {length}], got {ch_radius}")
    hole = Cylinder3D(length, radius)
    chamfer = Cone3D(ch_radius, radius, radius + ch_radius).translate(0.0, 0.0, 0.5 * (length - ch_radius))
    return Union3D(hole, chamfer)


def CounterSunkHole3D(length: float, radius: float) -> Geometry3D:
    """Hole with a 45 degree countersink as wide as the hole radius."""
    return ChamferedHole3D(length, radius, radius)


# ===========================================================================
# Washers and heads
# ===========================================================================

def Washer3D(thickness: float, r_inner: float, r_outer: float) -> Geometry3D:
    """Flat washer: an annulus of *thickness* between *r_inner* and *r_outer*."""
    if thickness <= 0.0:
        raise InvalidParameterError(f"washer thickness must be > 0, got {thickness}")
    if r_inner < 0.0 or r_inner >= r_outer:
        raise InvalidParameterError(
            f"washer radii need 0 <= r_inner < r_outer, got {r_inner}, {r_outer}"
        )
    outer = Cylinder3D(thickness, r_outer)
    if r_inner == 0.0:
        return outer
    return Difference3D(outer, Cylinder3D(thickness, r_inner))


class HexRound(enum.Enum):
    """Which faces of a hex head get the spherical chamfer."""

    NONE = ""
    TOP = "t"
    BOTTOM = "b"
    BOTH = "tb"

    @classmethod
    def parse(cls, value: Union[HexRound, str]) -> HexRound:
        try:
            return cls(value)
        except ValueError:
            raise InvalidParameterError(
                f"unknown hex rounding {value!r}, expected one of {[m.value for m in cls]}"
            ) from None


def HexHead3D(radius: float, height: float, round: Union[HexRound, str] = HexRound.NONE) -> Geometry3D:
    """Hexagonal head for a bolt or nut.

    Parameters
    ----------
    radius:
        Corner radius of the hexagon.
    height:
        Head height.
    round:
        Spherical chamfer on the top, bottom, both or neither face.
    """
    mode = HexRound.parse(round)
    if radius <= 0.0 or height <= 0.0:
        raise InvalidParameterError(f"hex head radius and height must be > 0, got {radius}, {height}")

    corner_round = radius * 0.08
    hex_2d = Offset2D(Polygon2D(nagon(6, radius - corner_round)), corner_round)
    head = Extrude3D(hex_2d, height)
    if mode is HexRound.NONE:
        return head

    top_round = radius * 1.6
    d = radius * math.cos(dtor(30.0))
    z_ofs = math.sqrt(top_round * top_round - d * d) - 0.5 * height
    sphere = Sphere3D(top_round)
    if mode in (HexRound.TOP, HexRound.BOTH):
        head = Intersection3D(head, sphere.translate(0.0, 0.0, -z_ofs))
    if mode in (HexRound.BOTTOM, HexRound.BOTH):
        head = Intersection3D(head, sphere.translate(0.0, 0.0, z_ofs))
    return head


# ===========================================================================
# Knurls
# ===========================================================================

def KnurlProfile(radius: float, pitch: float, height: float) -> Polygon2D:
    """One pitch period of a triangular knurl ridge of *height* on a cylinder of *radius*."""
    knurl = Polygon()
    knurl.add(0.5 * pitch, 0.0)
    knurl.add(0.5 * pitch, radius)
    knurl.add(0.0, radius + height)
    knurl.add(-0.5 * pitch, radius)
    knurl.add(-0.5 * pitch, 0.0)
    return Polygon2D(knurl)


def knurl_starts(radius: float, pitch: float, theta: float) -> int:
    """Thread starts giving a helix angle close to *theta* at *radius*.

    ``floor(2 pi r tan(theta) / pitch)``, never less than one.
    """
    n = max(1, int(math.floor(TAU * radius * math.tan(theta) / pitch)))
    logger.debug("knurl r=%g pitch=%g theta=%g uses %d starts", radius, pitch, theta, n)
    return n


def Knurl3D(length: float, radius: float, pitch: float, height: float, theta: float) -> Geometry3D:
    """Diamond knurled cylinder.

    The knurl is the intersection of a left and a right hand multi-start
    screw sharing one profile; the start count follows from the helix angle
    *theta* (radians) via :func:`knurl_starts`.
    """
    if radius <= 0.0 or pitch <= 0.0 or height <= 0.0:
        raise InvalidParameterError(
            f"knurl radius, pitch and height must be > 0, got {radius}, {pitch}, {height}"
        )
    if not 0.0 < theta < 0.5 * math.pi:
        raise InvalidParameterError(f"knurl helix angle must be in (0, pi/2), got {theta}")

    n = knurl_starts(radius, pitch, theta)
    profile = KnurlProfile(radius, pitch, height)
    right = Screw3D(profile, length, pitch, n)
    left = Screw3D(profile, length, pitch, -n)
    return Intersection3D(right, left)


def KnurledHead3D(radius: float, height: float, pitch: float) -> Geometry3D:
    """Cylindrical thumb-screw head with a 45 degree knurl."""
    if radius <= 0.0 or height <= 0.0 or pitch <= 0.0:
        raise InvalidParameterError(
            f"knurled head radius, height and pitch must be > 0, got {radius}, {height}, {pitch}"
        )
    cylinder_round = radius * 0.05
    knurl_length = pitch * math.floor((height - cylinder_round) / pitch)
    if knurl_length <= 0.0:
        raise InvalidParameterError(f"knurl pitch {pitch} does not fit in head height {height}")
    knurl = Knurl3D(knurl_length, radius, pitch, pitch * 0.3, KNURL_ANGLE)
    return Union3D(Cylinder3D(height, radius, cylinder_round), knurl)


# ===========================================================================
# Board standoffs
# ===========================================================================

@dataclass(frozen=True)
class StandoffParams:
    """Dimensions of a PCB standoff pillar with optional hole and support webs."""

    pillar_height: float
    pillar_radius: float
    hole_depth: float = 0.0
    hole_radius: float = 0.0
    number_webs: int = 0
    web_height: float = 0.0
    web_radius: float = 0.0
    web_width: float = 0.0


def _pillar_web(k: StandoffParams) -> Geometry3D:
    w = Polygon()
    w.add(0.0, 0.0)
    w.add(k.web_radius, 0.0)
    w.add(0.0, k.web_height)
    web = Extrude3D(Polygon2D(w), k.web_width)
    m = translate3d((0.0, 0.0, -0.5 * k.pillar_height)) @ rotate_x(dtor(90.0))
    return Transform3D(web, m)


def Standoff3D(k: StandoffParams) -> Geometry3D:
    """Standoff pillar sitting on ``z = -pillar_height/2``.

    Webs are triangular gussets spread evenly around the pillar foot; the
    hole is bored from the top face.
    """
    if k.pillar_height <= 0.0 or k.pillar_radius <= 0.0:
        raise InvalidParameterError("standoff pillar height and radius must be > 0")
    if k.number_webs < 0:
        raise InvalidParameterError(f"number of webs must be >= 0, got {k.number_webs}")
    if k.number_webs and min(k.web_height, k.web_radius, k.web_width) <= 0.0:
        raise InvalidParameterError("web height, radius and width must be > 0 when webs are used")
    if k.hole_radius < 0.0 or k.hole_depth < 0.0:
        raise InvalidParameterError("hole radius and depth must be >= 0")
    if k.hole_radius >= k.pillar_radius or k.hole_depth > k.pillar_height:
        raise InvalidParameterError("standoff hole does not fit inside the pillar")

    s = Cylinder3D(k.pillar_height, k.pillar_radius)
    if k.number_webs:
        s = Union3D(s, RotateCopy3D(_pillar_web(k), k.number_webs))
    if k.hole_radius > 0.0 and k.hole_depth > 0.0:
        hole = Cylinder3D(k.hole_depth, k.hole_radius)
        s = Difference3D(s, hole.translate(0.0, 0.0, 0.5 * (k.pillar_height - k.hole_depth)))
    if k.number_webs:
        # trim webs that stand proud of the pillar top
        s = Intersection3D(s, Cylinder3D(k.pillar_height, max(2.0 * k.web_radius, k.pillar_radius)))
    return s
