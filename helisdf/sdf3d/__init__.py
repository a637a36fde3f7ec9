"""
sdf3d: 3D Signed Distance Functions
===================================

3-D primitives, boolean operators, the 2-D to 3-D lifting operators and the
helical screw mapping, plus a small library of composite parts.

Implemented features
--------------------
- Primitive shapes: Sphere3D, Box3D, Cylinder3D, Cone3D
- Operators: Union3D (optionally smooth), Intersection3D, Difference3D,
  Offset3D, Transform3D
- 2-D to 3-D: Extrude3D, Revolve3D, Screw3D; RotateCopy3D for radial arrays
- Transforms: translate, rotate_x/y/z, scale, round, onion
- Parts: washers, holes, hex and knurled heads, knurls, standoffs

Quick start
-----------
::

    from helisdf.threads import ISOThread, ThreadMode
    from helisdf.sdf3d import Screw3D

    profile = ISOThread(3.0, 1.0, ThreadMode.EXTERNAL)
    m6 = Screw3D(profile, length=20.0, pitch=1.0, starts=1)
    m6.evaluate((3.0, 0.0, 0.0))   # -> float, ~0 on the crest
    m6.bounding_box()              # -> Box
"""

from .geometry import (
    # Base class
    Geometry3D,

    # Primitive shapes
    Sphere3D,
    Box3D,
    Cylinder3D,
    Cone3D,

    # Operators
    Union3D,
    Intersection3D,
    Difference3D,
    Offset3D,
    Transform3D,

    # 2-D -> 3-D
    Extrude3D,
    Revolve3D,
    RotateCopy3D,
    Screw3D,
)
from .shapes import (
    KNURL_ANGLE,
    ChamferedHole3D,
    CounterBoredHole3D,
    CounterSunkHole3D,
    HexHead3D,
    HexRound,
    Knurl3D,
    KnurledHead3D,
    KnurlProfile,
    StandoffParams,
    Standoff3D,
    Washer3D,
    knurl_starts,
)

__all__ = [
    # Base
    "Geometry3D",

    # Primitive shapes
    "Sphere3D",
    "Box3D",
    "Cylinder3D",
    "Cone3D",

    # Operators
    "Union3D",
    "Intersection3D",
    "Difference3D",
    "Offset3D",
    "Transform3D",

    # 2-D -> 3-D
    "Extrude3D",
    "Revolve3D",
    "RotateCopy3D",
    "Screw3D",

    # Parts
    "Washer3D",
    "CounterBoredHole3D",
    "ChamferedHole3D",
    "CounterSunkHole3D",
    "HexRound",
    "HexHead3D",
    "KNURL_ANGLE",
    "KnurlProfile",
    "knurl_starts",
    "Knurl3D",
    "KnurledHead3D",
    "StandoffParams",
    "Standoff3D",
]
