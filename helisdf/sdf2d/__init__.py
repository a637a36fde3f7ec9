"""
sdf2d: 2D Signed Distance Functions
===================================

2-D primitives, operators and the polygon profile builder used to describe
cross sections (thread profiles, extrusion and revolution outlines).

Implemented features
--------------------
- Primitive shapes: Circle2D, Box2D, Polygon2D
- Polygon builder with per-vertex fillets: :class:`Polygon`, :func:`nagon`
- Operators: Union2D (optionally smooth), Intersection2D, Difference2D,
  Offset2D, Transform2D
- Transforms: translate, rotate, scale, round, onion
- Shapes: FingerButton2D

Quick start
-----------
::

    from helisdf.sdf2d import Polygon, Polygon2D, Circle2D, Union2D

    tri = Polygon().add(0, 0).add(1, 0).smooth(0.1).add(0, 1)
    shape = Union2D(Polygon2D(tri), Circle2D(0.25))
    shape.evaluate((0.2, 0.2))     # -> float
    shape.bounding_box()           # -> Box
"""

from .geometry import (
    # Base class
    Geometry2D,

    # Primitive shapes
    Circle2D,
    Box2D,
    Polygon2D,

    # Operators
    Union2D,
    Intersection2D,
    Difference2D,
    Offset2D,
    Transform2D,
)
from .polygon import DEFAULT_FACETS, Polygon, nagon
from .shapes import FingerButton2D

__all__ = [
    # Base
    "Geometry2D",

    # Primitive shapes
    "Circle2D",
    "Box2D",
    "Polygon2D",

    # Operators
    "Union2D",
    "Intersection2D",
    "Difference2D",
    "Offset2D",
    "Transform2D",

    # Polygon builder
    "Polygon",
    "nagon",
    "DEFAULT_FACETS",

    # Shapes
    "FingerButton2D",
]
