"""Screw thread profiles and the standard thread database.

Thread profiles are 2-D polygons covering one (or two) pitch periods of a
single thread, centred on the y axis.  The x axis is the screw axis and the
y axis is the distance from it, which is the frame
:class:`~helisdf.sdf3d.Screw3D` expects.  No thread tolerancing is applied:
adjust the radius to get clearance between mating parts.

Usage::

    from helisdf.threads import ISOThread, ThreadMode, default_thread_database
    from helisdf.sdf3d import Screw3D

    t = default_thread_database().lookup("M6x1")
    profile = ISOThread(t.radius, t.pitch, ThreadMode.EXTERNAL)
    bolt = Screw3D(profile, 20.0, t.pitch)
"""

from __future__ import annotations

import enum
import functools
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Optional, Union

from ._common import dtor
from .errors import InvalidParameterError, UnknownThreadError
from .sdf2d.geometry import Polygon2D
from .sdf2d.polygon import Polygon

logger = logging.getLogger(__name__)


class ThreadMode(enum.Enum):
    """Internal (nut) or external (bolt) thread form."""

    INTERNAL = "internal"
    EXTERNAL = "external"

    @classmethod
    def parse(cls, value: Union[ThreadMode, str]) -> ThreadMode:
        try:
            return cls(value)
        except ValueError:
            raise InvalidParameterError(
                f"unknown thread mode {value!r}, expected 'internal' or 'external'"
            ) from None


class Units(enum.Enum):
    INCH = "inch"
    MM = "mm"


def _check(radius: float, pitch: float) -> None:
    if radius <= 0.0:
        raise InvalidParameterError(f"thread radius must be > 0, got {radius}")
    if pitch <= 0.0:
        raise InvalidParameterError(f"thread pitch must be > 0, got {pitch}")


# ===========================================================================
# Thread profiles
# ===========================================================================

def AcmeThread(radius: float, pitch: float) -> Polygon2D:
    """Profile of an acme (29 degree trapezoidal) thread.

    Parameters
    ----------
    radius:
        Major radius of the thread.
    pitch:
        Thread to thread distance.
    """
    _check(radius, pitch)
    h = radius - 0.5 * pitch
    if h <= 0.0:
        raise InvalidParameterError(f"acme pitch {pitch} is too coarse for radius {radius}")
    theta = dtor(29.0 / 2.0)
    delta = 0.25 * pitch * math.tan(theta)
    x_ofs0 = 0.25 * pitch - delta
    x_ofs1 = 0.25 * pitch + delta

    acme = Polygon()
    acme.add(radius, 0.0)
    acme.add(radius, h)
    acme.add(x_ofs1, h)
    acme.add(x_ofs0, radius)
    acme.add(-x_ofs0, radius)
    acme.add(-x_ofs1, h)
    acme.add(-radius, h)
    acme.add(-radius, 0.0)
    return Polygon2D(acme)


def ISOThread(radius: float, pitch: float, mode: Union[ThreadMode, str] = ThreadMode.EXTERNAL) -> Polygon2D:
    """Profile of an ISO metric or Unified (UTS) 60 degree thread.

    External threads get a rounded root and a flat crest; internal threads
    get a flat minor diameter and a rounded crest.  See
    https://en.wikipedia.org/wiki/ISO_metric_screw_thread
    """
    mode = ThreadMode.parse(mode)
    _check(radius, pitch)
    theta = dtor(30.0)
    h = pitch / (2.0 * math.tan(theta))
    r_major = radius
    r0 = r_major - (7.0 / 8.0) * h
    if r0 <= 0.0:
        raise InvalidParameterError(f"ISO pitch {pitch} is too coarse for radius {radius}")

    iso = Polygon()
    if mode is ThreadMode.EXTERNAL:
        r_root = (pitch / 8.0) / math.cos(theta)
        x_ofs = pitch / 16.0
        iso.add(pitch, 0.0)
        iso.add(pitch, r0 + h)
        iso.add(0.5 * pitch, r0).smooth(r_root, 5)
        iso.add(x_ofs, r_major)
        iso.add(-x_ofs, r_major)
        iso.add(-0.5 * pitch, r0).smooth(r_root, 5)
        iso.add(-pitch, r0 + h)
        iso.add(-pitch, 0.0)
    else:
        r_minor = r0 + h / 4.0
        r_crest = (pitch / 16.0) / math.cos(theta)
        x_ofs = pitch / 8.0
        iso.add(pitch, 0.0)
        iso.add(pitch, r_minor)
        iso.add(0.5 * pitch - x_ofs, r_minor)
        iso.add(0.0, r0 + h).smooth(r_crest, 5)
        iso.add(-0.5 * pitch + x_ofs, r_minor)
        iso.add(-pitch, r_minor)
        iso.add(-pitch, 0.0)
    return Polygon2D(iso)


def _buttress(radius: float, pitch: float, rounds: Iterable[float]) -> Polygon2D:
    _check(radius, pitch)
    t0 = math.tan(dtor(45.0))
    t1 = math.tan(dtor(7.0))
    b = 0.6  # thread engagement
    h0 = pitch / (t0 + t1)
    h1 = (0.5 * b * pitch) + (0.5 * h0)
    hp = 0.5 * pitch
    if radius - h1 <= 0.0:
        raise InvalidParameterError(f"buttress pitch {pitch} is too coarse for radius {radius}")

    r_flank, r_root, r_crest = rounds
    tp = Polygon()
    tp.add(pitch, 0.0)
    tp.add(pitch, radius)
    tp.add(hp - (h0 - h1) * t1, radius).smooth(r_flank * pitch, 5)
    tp.add(t0 * h0 - hp, radius - h1).smooth(r_root * pitch, 5)
    tp.add((h0 - h1) * t0 - hp, radius).smooth(r_crest * pitch, 5)
    tp.add(-pitch, radius)
    tp.add(-pitch, 0.0)
    return Polygon2D(tp)


def ANSIButtressThread(radius: float, pitch: float) -> Polygon2D:
    """Profile of an ANSI 45/7 buttress thread (ASME B1.9-1973)."""
    return _buttress(radius, pitch, (0.0, 0.0714, 0.0))


def PlasticButtressThread(radius: float, pitch: float) -> Polygon2D:
    """Screw-top style plastic buttress thread: the ANSI 45/7 form with more rounding."""
    return _buttress(radius, pitch, (0.05, 0.15, 0.15))


# ===========================================================================
# Thread database
# ===========================================================================

@dataclass(frozen=True)
class ThreadParameters:
    """Nominal dimensions of a standard screw thread.

    A negative *hex_flat2flat* means the standard defines no hex head.
    """

    name: str
    radius: float
    pitch: float
    hex_flat2flat: float
    units: Units

    def hex_radius(self) -> float:
        """Corner radius of the matching hex head."""
        if self.hex_flat2flat < 0.0:
            raise InvalidParameterError(f"no hex head flat to flat distance defined for {self.name}")
        return self.hex_flat2flat / (2.0 * math.cos(dtor(30.0)))

    def hex_height(self) -> float:
        """Empirical height of the matching hex head."""
        return 2.0 * self.hex_radius() * (5.0 / 12.0)


def uts_entry(name: str, diameter: float, tpi: float, hex_f2f: float) -> ThreadParameters:
    """Unified Thread Standard entry: inch diameter and threads per inch."""
    return ThreadParameters(name, diameter / 2.0, 1.0 / tpi, hex_f2f, Units.INCH)


def iso_entry(name: str, diameter: float, pitch: float, hex_f2f: float) -> ThreadParameters:
    """ISO metric entry: millimetre diameter and pitch."""
    return ThreadParameters(name, diameter / 2.0, pitch, hex_f2f, Units.MM)


class ThreadDatabase(Mapping[str, ThreadParameters]):
    """Read-only registry of thread parameters keyed by thread name.

    Build one with :meth:`standard` (or share the process-wide instance from
    :func:`default_thread_database`) and pass it to the code that needs it.
    """

    def __init__(self, threads: Iterable[ThreadParameters]) -> None:
        table = {}
        for t in threads:
            if t.name in table:
                raise InvalidParameterError(f"duplicate thread name {t.name!r}")
            table[t.name] = t
        self._threads = MappingProxyType(table)

    def __getitem__(self, name: str) -> ThreadParameters:
        return self._threads[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._threads)

    def __len__(self) -> int:
        return len(self._threads)

    def get(self, name: str, default: Optional[ThreadParameters] = None) -> Optional[ThreadParameters]:
        """Parameters for *name*, or *default* when it is not registered."""
        return self._threads.get(name, default)

    def lookup(self, name: str) -> ThreadParameters:
        """Parameters for *name*; raises :class:`UnknownThreadError` when missing."""
        try:
            return self._threads[name]
        except KeyError:
            raise UnknownThreadError(f"thread {name!r} not found") from None

    @classmethod
    def standard(cls) -> ThreadDatabase:
        """UTS coarse/fine and ISO coarse/fine threads."""
        db = cls(_STANDARD_THREADS)
        logger.debug("built standard thread database with %d entries", len(db))
        return db


@functools.lru_cache(maxsize=None)
def default_thread_database() -> ThreadDatabase:
    """The standard database, built once on first use."""
    return ThreadDatabase.standard()


_STANDARD_THREADS = (
    # UTS coarse
    uts_entry("unc_1/4", 1.0 / 4.0, 20, 7.0 / 16.0),
    uts_entry("unc_5/16", 5.0 / 16.0, 18, 1.0 / 2.0),
    uts_entry("unc_3/8", 3.0 / 8.0, 16, 9.0 / 16.0),
    uts_entry("unc_7/16", 7.0 / 16.0, 14, 5.0 / 8.0),
    uts_entry("unc_1/2", 1.0 / 2.0, 13, 3.0 / 4.0),
    uts_entry("unc_9/16", 9.0 / 16.0, 12, 13.0 / 16.0),
    uts_entry("unc_5/8", 5.0 / 8.0, 11, 15.0 / 16.0),
    uts_entry("unc_3/4", 3.0 / 4.0, 10, 9.0 / 8.0),
    uts_entry("unc_7/8", 7.0 / 8.0, 9, 21.0 / 16.0),
    uts_entry("unc_1", 1.0, 8, 3.0 / 2.0),
    # UTS fine
    uts_entry("unf_1/4", 1.0 / 4.0, 28, 7.0 / 16.0),
    uts_entry("unf_5/16", 5.0 / 16.0, 24, 1.0 / 2.0),
    uts_entry("unf_3/8", 3.0 / 8.0, 24, 9.0 / 16.0),
    uts_entry("unf_7/16", 7.0 / 16.0, 20, 5.0 / 8.0),
    uts_entry("unf_1/2", 1.0 / 2.0, 20, 3.0 / 4.0),
    uts_entry("unf_9/16", 9.0 / 16.0, 18, 13.0 / 16.0),
    uts_entry("unf_5/8", 5.0 / 8.0, 18, 15.0 / 16.0),
    uts_entry("unf_3/4", 3.0 / 4.0, 16, 9.0 / 8.0),
    uts_entry("unf_7/8", 7.0 / 8.0, 14, 21.0 / 16.0),
    uts_entry("unf_1", 1.0, 12, 3.0 / 2.0),
    # ISO coarse
    iso_entry("M1x0.25", 1, 0.25, -1),
    iso_entry("M1.2x0.25", 1.2, 0.25, -1),
    iso_entry("M1.6x0.35", 1.6, 0.35, 3.2),
    iso_entry("M2x0.4", 2, 0.4, 4),
    iso_entry("M2.5x0.45", 2.5, 0.45, 5),
    iso_entry("M3x0.5", 3, 0.5, 6),
    iso_entry("M4x0.7", 4, 0.7, 7),
    iso_entry("M5x0.8", 5, 0.8, 8),
    iso_entry("M6x1", 6, 1, 10),
    iso_entry("M8x1.25", 8, 1.25, 13),
    iso_entry("M10x1.5", 10, 1.5, 17),
    iso_entry("M12x1.75", 12, 1.75, 19),
    iso_entry("M16x2", 16, 2, 24),
    iso_entry("M20x2.5", 20, 2.5, 30),
    iso_entry("M24x3", 24, 3, 36),
    iso_entry("M30x3.5", 30, 3.5, 46),
    iso_entry("M36x4", 36, 4, 55),
    iso_entry("M42x4.5", 42, 4.5, 65),
    iso_entry("M48x5", 48, 5, 75),
    iso_entry("M56x5.5", 56, 5.5, 85),
    iso_entry("M64x6", 64, 6, 95),
    # ISO fine
    iso_entry("M1x0.2", 1, 0.2, -1),
    iso_entry("M1.2x0.2", 1.2, 0.2, -1),
    iso_entry("M1.6x0.2", 1.6, 0.2, 3.2),
    iso_entry("M2x0.25", 2, 0.25, 4),
    iso_entry("M2.5x0.35", 2.5, 0.35, 5),
    iso_entry("M3x0.35", 3, 0.35, 6),
    iso_entry("M4x0.5", 4, 0.5, 7),
    iso_entry("M5x0.5", 5, 0.5, 8),
    iso_entry("M6x0.75", 6, 0.75, 10),
    iso_entry("M8x1", 8, 1, 13),
    iso_entry("M10x1.25", 10, 1.25, 17),
    iso_entry("M12x1.5", 12, 1.5, 19),
    iso_entry("M16x1.5", 16, 1.5, 24),
    iso_entry("M20x2", 20, 2, 30),
    iso_entry("M24x2", 24, 2, 36),
    iso_entry("M30x2", 30, 2, 46),
    iso_entry("M36x3", 36, 3, 55),
    iso_entry("M42x3", 42, 3, 65),
    iso_entry("M48x3", 48, 3, 75),
    iso_entry("M56x4", 56, 4, 85),
    iso_entry("M64x4", 64, 4, 95),
)
