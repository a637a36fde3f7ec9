"""3D geometry primitives and operators for signed distance functions."""

from __future__ import annotations

import numbers
from typing import Callable, Sequence, Union

import numpy as np
import numpy.typing as npt

from . import sdf_lib as sdf
from ..box import Box
from ..errors import InvalidParameterError
from ..sdf2d.geometry import Geometry2D
from ..xform import rotate_x, rotate_y, rotate_z, translate3d

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------
_Array = npt.NDArray[np.floating]
_SDFFunc = Callable[[_Array], _Array]


# ===========================================================================
# Base class
# ===========================================================================

class Geometry3D:
    """Base class for 3D signed-distance-function geometries.

    A ``Geometry3D`` wraps a callable ``func(p) -> distances`` where *p* is
    a ``(..., 3)`` array of 3D points and the return value is a ``(...)``
    array of signed distances, together with a conservative bounding box.

    Implements:
    - Contract:           :meth:`evaluate`, :meth:`bounding_box`
    - Boolean operations: :meth:`union`, :meth:`subtract`, :meth:`intersect`
    - Modifiers:          :meth:`round`, :meth:`onion`
    - Transforms:         :meth:`translate`, :meth:`scale`, :meth:`transform`
    - Rotations:          :meth:`rotate_x`, :meth:`rotate_y`, :meth:`rotate_z`
    """

    def __init__(self, func: _SDFFunc, bbox: Box) -> None:
        if bbox.ndim != 3:
            raise InvalidParameterError("a 3D geometry needs a 3D bounding box")
        self._func = func
        self._bb = bbox

    def sdf(self, p: _Array) -> _Array:
        """Evaluate signed distance at *p* (shape ``(..., 3)``)."""
        return self._func(p)

    def __call__(self, p: _Array) -> _Array:
        return self._func(p)

    def evaluate(self, p: Union[Sequence[float], _Array]) -> Union[float, _Array]:
        """Signed distance at *p*.

        A single point ``(x, y, z)`` returns a ``float``; a batch of shape
        ``(..., 3)`` returns an array of shape ``(...)``.
        """
        p = np.asarray(p, dtype=float)
        d = self._func(p)
        return float(d) if p.ndim == 1 else d

    def bounding_box(self) -> Box:
        """Axis-aligned box containing the zero-set of this geometry."""
        return self._bb

    # ------------------------------------------------------------------
    # Boolean operations
    # ------------------------------------------------------------------

    def union(self, other: Geometry3D) -> Geometry3D:
        """Return the union (min) of this shape and *other*."""
        return Union3D(self, other)

    def subtract(self, other: Geometry3D) -> Geometry3D:
        """Subtract *other* from this shape."""
        return Difference3D(self, other)

    def intersect(self, other: Geometry3D) -> Geometry3D:
        """Return the intersection (max) of this shape and *other*."""
        return Intersection3D(self, other)

    # ------------------------------------------------------------------
    # Modifiers
    # ------------------------------------------------------------------

    def round(self, rad: float) -> Geometry3D:
        """Round the surface outward by *rad*."""
        return Offset3D(self, rad)

    def onion(self, thickness: float) -> Geometry3D:
        """Turn the solid into a hollow shell of *thickness*."""
        return Geometry3D(
            lambda p: sdf.opOnion(self.sdf(p), thickness),
            self._bb.enlarge(abs(thickness)),
        )

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def translate(self, tx: float, ty: float, tz: float) -> Geometry3D:
        """Translate by ``(tx, ty, tz)``."""
        return Transform3D(self, translate3d((tx, ty, tz)))

    def scale(self, s: float) -> Geometry3D:
        """Uniformly scale by factor *s*."""
        if s <= 0.0:
            raise InvalidParameterError(f"scale factor must be > 0, got {s}")
        return Geometry3D(lambda p: sdf.opScale(p, s, self.sdf), self._bb.scale(s))

    def transform(self, m: _Array) -> Geometry3D:
        """Apply the 4x4 homogeneous matrix *m*."""
        return Transform3D(self, m)

    def rotate_x(self, angle_rad: float) -> Geometry3D:
        """Rotate around the X axis by *angle_rad* radians."""
        return Transform3D(self, rotate_x(angle_rad))

    def rotate_y(self, angle_rad: float) -> Geometry3D:
        """Rotate around the Y axis by *angle_rad* radians."""
        return Transform3D(self, rotate_y(angle_rad))

    def rotate_z(self, angle_rad: float) -> Geometry3D:
        """Rotate around the Z axis by *angle_rad* radians."""
        return Transform3D(self, rotate_z(angle_rad))


# ===========================================================================
# Primitive shapes
# ===========================================================================

class Sphere3D(Geometry3D):
    """Sphere centred at origin with given *radius*."""

    def __init__(self, radius: float) -> None:
        if radius <= 0.0:
            raise InvalidParameterError(f"radius must be > 0, got {radius}")
        super().__init__(
            lambda p: sdf.sdSphere(p, radius),
            Box((-radius,) * 3, (radius,) * 3),
        )


class Box3D(Geometry3D):
    """Axis-aligned box with *half_size* ``(hx, hy, hz)`` centred at origin.

    A non-zero *round* rounds the edges and corners with that radius.
    """

    def __init__(self, half_size: Sequence[float], round: float = 0.0) -> None:
        b = np.array(half_size, dtype=float)
        if b.shape != (3,) or np.any(b <= 0.0):
            raise InvalidParameterError(f"half_size must be three positive values, got {half_size}")
        if not 0.0 <= round <= b.min():
            raise InvalidParameterError(f"round must be in [0, {b.min()}], got {round}")
        if round > 0.0:
            func = lambda p: sdf.sdRoundBox(p, b, round)  # noqa: E731
        else:
            func = lambda p: sdf.sdBox(p, b)  # noqa: E731
        super().__init__(func, Box(-b, b))


class Cylinder3D(Geometry3D):
    """Cylinder on the Z axis, centred at origin.

    Parameters
    ----------
    height:
        Full axial length.
    radius:
        Outer radius.
    round:
        Edge rounding radius, at most ``min(radius, height / 2)``.
    """

    def __init__(self, height: float, radius: float, round: float = 0.0) -> None:
        if height <= 0.0 or radius <= 0.0:
            raise InvalidParameterError(
                f"cylinder height and radius must be > 0, got {height}, {radius}"
            )
        if not 0.0 <= round <= min(radius, 0.5 * height):
            raise InvalidParameterError(
                f"round must be in [0, {min(radius, 0.5 * height)}], got {round}"
            )
        h = 0.5 * height
        super().__init__(
            lambda p: sdf.sdRoundedCylinder(p, radius, round, h),
            Box((-radius, -radius, -h), (radius, radius, h)),
        )


class Cone3D(Geometry3D):
    """Truncated cone on the Z axis, centred at origin.

    Radius *r0* sits at ``z = -height/2`` and *r1* at ``z = +height/2``.
    With *round* > 0 the cone is inset by the rounding radius and grown back,
    which rounds both rims.
    """

    def __init__(self, height: float, r0: float, r1: float, round: float = 0.0) -> None:
        if height <= 0.0:
            raise InvalidParameterError(f"cone height must be > 0, got {height}")
        if r0 < 0.0 or r1 < 0.0 or r0 == r1 == 0.0:
            raise InvalidParameterError(f"cone radii must be >= 0 and not both zero, got {r0}, {r1}")
        if not 0.0 <= round < 0.5 * height:
            raise InvalidParameterError(f"round must be in [0, {0.5 * height}), got {round}")

        h = 0.5 * height
        ra, rb = r0, r1
        if round > 0.0:
            # slant direction and its outward normal in (r, z)
            u = sdf.normalize(np.array([r1 - r0, height]))
            n = np.array([u[1], -u[0]])
            ofs = round / n[0]
            ra = r0 - (1.0 + n[1]) * ofs
            rb = r1 - (1.0 - n[1]) * ofs
            if ra < 0.0 or rb < 0.0:
                raise InvalidParameterError(f"round {round} is too large for cone radii {r0}, {r1}")
        hi = h - round

        r = max(r0, r1)
        super().__init__(
            lambda p: sdf.sdCappedCone(p, hi, ra, rb) - round,
            Box((-r, -r, -h), (r, r, h)),
        )


# ===========================================================================
# Operators
# ===========================================================================

class Union3D(Geometry3D):
    """Union of two or more 3-D geometries (minimum SDF).

    With ``k > 0`` the seams are blended by a polynomial smooth minimum.
    """

    def __init__(self, *geoms: Geometry3D, k: float = 0.0) -> None:
        if not geoms:
            raise InvalidParameterError("Union3D needs at least one geometry")
        if k < 0.0:
            raise InvalidParameterError(f"smoothing k must be >= 0, got {k}")

        def _sdf(p: _Array) -> _Array:
            d = geoms[0].sdf(p)
            for g in geoms[1:]:
                d = sdf.opSmoothUnion(d, g.sdf(p), k) if k > 0.0 else sdf.opUnion(d, g.sdf(p))
            return d

        bb = geoms[0].bounding_box()
        for g in geoms[1:]:
            bb = bb.extend(g.bounding_box())
        super().__init__(_sdf, bb.enlarge(k) if k > 0.0 else bb)


class Intersection3D(Geometry3D):
    """Intersection of two or more 3-D geometries (maximum SDF)."""

    def __init__(self, *geoms: Geometry3D) -> None:
        if not geoms:
            raise InvalidParameterError("Intersection3D needs at least one geometry")

        def _sdf(p: _Array) -> _Array:
            d = geoms[0].sdf(p)
            for g in geoms[1:]:
                d = sdf.opIntersection(d, g.sdf(p))
            return d

        bb = geoms[0].bounding_box()
        for g in geoms[1:]:
            bb = bb.intersect(g.bounding_box())
        super().__init__(_sdf, bb)


class Difference3D(Geometry3D):
    """Subtract *cutter* from *base*."""

    def __init__(self, base: Geometry3D, cutter: Geometry3D) -> None:
        super().__init__(
            lambda p: sdf.opSubtraction(cutter.sdf(p), base.sdf(p)),
            base.bounding_box(),
        )


class Offset3D(Geometry3D):
    """Grow (positive *delta*) or shrink (negative *delta*) a geometry."""

    def __init__(self, geom: Geometry3D, delta: float) -> None:
        super().__init__(
            lambda p: geom.sdf(p) - delta,
            geom.bounding_box().enlarge(max(delta, 0.0)),
        )


class Transform3D(Geometry3D):
    """Place *geom* with the invertible 4x4 homogeneous matrix *m*.

    Distances are preserved only for rigid motions (rotation + translation).
    """

    def __init__(self, geom: Geometry3D, m: _Array) -> None:
        m = np.array(m, dtype=float)
        if m.shape != (4, 4):
            raise InvalidParameterError(f"3D transform must be 4x4, got {m.shape}")
        try:
            inv = np.linalg.inv(m)
        except np.linalg.LinAlgError as exc:
            raise InvalidParameterError("3D transform matrix is singular") from exc
        self.matrix = m
        super().__init__(
            lambda p: sdf.opTx(p, inv, geom.sdf),
            geom.bounding_box().transform(m),
        )


# ===========================================================================
# 2-D -> 3-D operators
# ===========================================================================

class Extrude3D(Geometry3D):
    """Extrude a 2-D *profile* along Z to a total *height*, centred at origin."""

    def __init__(self, profile: Geometry2D, height: float) -> None:
        if height <= 0.0:
            raise InvalidParameterError(f"extrusion height must be > 0, got {height}")
        h = 0.5 * height
        bb = profile.bounding_box()
        super().__init__(
            lambda p: sdf.opExtrusion(p, profile.sdf, h),
            Box((*bb.min, -h), (*bb.max, h)),
        )


class Revolve3D(Geometry3D):
    """Solid of revolution about Z.

    The profile's x axis is the distance from the Z axis and its y axis
    maps to Z; only the ``x >= 0`` half of the profile is swept.
    """

    def __init__(self, profile: Geometry2D) -> None:
        bb = profile.bounding_box()
        r = max(abs(bb.min[0]), abs(bb.max[0]))
        super().__init__(
            lambda p: sdf.opRevolution(p, profile.sdf),
            Box((-r, -r, bb.min[1]), (r, r, bb.max[1])),
        )


class RotateCopy3D(Geometry3D):
    """*n* evenly spaced copies of *geom* around the Z axis.

    The copies are folded out of the sector centred on the +X axis, so
    *geom* should fit within ``±pi/n`` of it.
    """

    def __init__(self, geom: Geometry3D, n: int) -> None:
        if not isinstance(n, numbers.Integral) or n < 1:
            raise InvalidParameterError(f"copy count must be an integer >= 1, got {n!r}")
        theta = sdf.TAU / int(n)
        bb = geom.bounding_box()
        r = float(np.max(sdf.length(bb.vertices()[:, :2])))
        self.copies = int(n)
        super().__init__(
            lambda p: sdf.opRotateCopy(p, geom.sdf, theta),
            Box((-r, -r, bb.min[2]), (r, r, bb.max[2])),
        )


class Screw3D(Geometry3D):
    """Helical sweep of a 2-D thread *profile* about the Z axis.

    The profile describes one pitch period: its x axis runs along the screw
    axis (centred on zero) and its y axis is the distance from the axis.
    Querying never builds geometry; each point is mapped back into the
    profile's frame by an angle-dependent shift of ``lead * theta / 2pi``
    followed by a saw-tooth fold of period *pitch*.

    Parameters
    ----------
    profile:
        Thread cross section, e.g. from :func:`helisdf.threads.ISOThread`.
    length:
        Total axial length, centred on ``z = 0``.
    pitch:
        Axial distance between neighbouring crests of one start.
    starts:
        Number of interleaved thread starts; negative for a left hand thread.

    Attributes
    ----------
    lead:
        Axial advance per turn, ``pitch * starts``.
    """

    def __init__(self, profile: Geometry2D, length: float, pitch: float, starts: int = 1) -> None:
        if pitch <= 0.0:
            raise InvalidParameterError(f"screw pitch must be > 0, got {pitch}")
        if length <= 0.0:
            raise InvalidParameterError(f"screw length must be > 0, got {length}")
        if not isinstance(starts, numbers.Integral) or starts == 0:
            raise InvalidParameterError(f"screw starts must be a non-zero integer, got {starts!r}")

        self.profile = profile
        self.pitch = float(pitch)
        self.starts = int(starts)
        self.lead = self.pitch * self.starts
        self.length = float(length)

        half = 0.5 * self.length
        pitch, lead = self.pitch, self.lead
        # the max y of the profile is the outer radius of the thread
        r = float(profile.bounding_box().max[1])
        super().__init__(
            lambda p: sdf.opScrew(p, profile.sdf, pitch, lead, half),
            Box((-r, -r, -half), (r, r, half)),
        )
