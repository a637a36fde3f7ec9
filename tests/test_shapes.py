"""Tests for the composite 3-D parts in helisdf.sdf3d.shapes."""

import dataclasses
import logging

import numpy as np
import numpy.testing as npt
import pytest

from helisdf import Box, InvalidParameterError
from helisdf.sdf3d import (
    KNURL_ANGLE,
    ChamferedHole3D,
    CounterBoredHole3D,
    CounterSunkHole3D,
    Cylinder3D,
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


def _grid(n: int = 9, half: float = 6.0) -> np.ndarray:
    lin = np.linspace(-half, half, n)
    Z, Y, X = np.meshgrid(lin, lin, lin, indexing="ij")
    return np.stack([X, Y, Z], axis=-1)


# ===========================================================================
# Holes
# ===========================================================================

class TestHoles:
    def test_counter_bore(self):
        h = CounterBoredHole3D(10.0, 1.0, 2.0, 3.0)
        assert h.evaluate((1.5, 0.0, 4.5)) < 0.0
        assert h.evaluate((1.5, 0.0, 0.0)) > 0.0
        assert h.evaluate((0.0, 0.0, -4.0)) < 0.0

    @pytest.mark.parametrize("args", [(10.0, 1.0, 1.0, 3.0), (10.0, 1.0, 2.0, 11.0), (10.0, 1.0, 2.0, 0.0)])
    def test_counter_bore_rejects_bad_params(self, args):
        with pytest.raises(InvalidParameterError):
            CounterBoredHole3D(*args)

    def test_chamfer_widens_towards_top(self):
        h = ChamferedHole3D(10.0, 1.0, 1.0)
        assert h.evaluate((1.8, 0.0, 4.95)) < 0.0
        assert h.evaluate((1.8, 0.0, 4.5)) > 0.0

    def test_chamfer_rejects_bad_radius(self):
        with pytest.raises(InvalidParameterError):
            ChamferedHole3D(2.0, 1.0, 3.0)

    def test_countersink_is_chamfer_of_hole_radius(self):
        p = _grid(half=3.0)
        npt.assert_allclose(CounterSunkHole3D(6.0, 1.0).sdf(p), ChamferedHole3D(6.0, 1.0, 1.0).sdf(p))


# ===========================================================================
# Washers
# ===========================================================================

class TestWasher3D:
    def test_annulus(self):
        w = Washer3D(2.0, 3.0, 5.0)
        assert w.evaluate((4.0, 0.0, 0.0)) == pytest.approx(-1.0)
        assert w.evaluate((2.0, 0.0, 0.0)) == pytest.approx(1.0)
        assert w.evaluate((6.0, 0.0, 0.0)) == pytest.approx(1.0)

    def test_keyword_annulus_end_to_end(self):
        w = Washer3D(thickness=2.0, r_inner=3.0, r_outer=6.0)
        assert w.evaluate((4.5, 0.0, 0.0)) < 0.0
        assert w.evaluate((2.0, 0.0, 0.0)) > 0.0
        assert w.evaluate((4.5, 0.0, 0.0)) == pytest.approx(-1.0)
        assert w.evaluate((2.0, 0.0, 0.0)) == pytest.approx(1.0)

    def test_solid_when_no_inner_radius(self):
        w = Washer3D(2.0, 0.0, 5.0)
        assert isinstance(w, Cylinder3D)
        assert w.evaluate((0.0, 0.0, 0.0)) == pytest.approx(-1.0)

    def test_bounding_box(self):
        assert Washer3D(2.0, 3.0, 5.0).bounding_box() == Box((-5, -5, -1), (5, 5, 1))

    @pytest.mark.parametrize("args", [(0.0, 1.0, 2.0), (1.0, 2.0, 2.0), (1.0, 3.0, 2.0), (1.0, -1.0, 2.0)])
    def test_rejects_bad_params(self, args):
        with pytest.raises(InvalidParameterError):
            Washer3D(*args)


# ===========================================================================
# Hex heads
# ===========================================================================

class TestHexHead3D:
    def test_plain_head(self):
        h = HexHead3D(5.0, 4.0)
        assert h.evaluate((0.0, 0.0, 0.0)) == pytest.approx(-2.0)
        assert h.evaluate((5.0, 0.0, 0.0)) == pytest.approx(0.0, abs=1e-9)
        assert h.evaluate((0.0, 0.0, 2.0)) == pytest.approx(0.0, abs=1e-12)

    def test_top_rounding_cuts_upper_corners(self):
        plain = HexHead3D(5.0, 4.0)
        top = HexHead3D(5.0, 4.0, HexRound.TOP)
        corner = (4.9, 0.0, 1.95)
        assert plain.evaluate(corner) < 0.0
        assert top.evaluate(corner) > 0.0
        assert top.evaluate((4.9, 0.0, -1.95)) < 0.0

    def test_bottom_rounding_cuts_lower_corners(self):
        bottom = HexHead3D(5.0, 4.0, "b")
        assert bottom.evaluate((4.9, 0.0, 1.95)) < 0.0
        assert bottom.evaluate((4.9, 0.0, -1.95)) > 0.0

    def test_both_is_point_symmetric(self):
        both = HexHead3D(5.0, 4.0, "tb")
        p = _grid()
        npt.assert_allclose(both.sdf(p), both.sdf(-p), atol=1e-9)

    @pytest.mark.parametrize("value, member", [
        ("", HexRound.NONE), ("t", HexRound.TOP), ("b", HexRound.BOTTOM),
        ("tb", HexRound.BOTH), (HexRound.BOTH, HexRound.BOTH),
    ])
    def test_round_parse(self, value, member):
        assert HexRound.parse(value) is member

    def test_rejects_unknown_rounding(self):
        with pytest.raises(InvalidParameterError):
            HexHead3D(5.0, 4.0, "x")

    def test_rejects_bad_size(self):
        with pytest.raises(InvalidParameterError):
            HexHead3D(0.0, 4.0)


# ===========================================================================
# Knurls
# ===========================================================================

class TestKnurl:
    def test_starts_from_helix_angle(self):
        assert knurl_starts(5.0, 1.0, KNURL_ANGLE) == 31
        assert knurl_starts(1.0, 1.0, KNURL_ANGLE) == 6

    def test_starts_never_below_one(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="helisdf.sdf3d.shapes"):
            assert knurl_starts(0.1, 1.0, 0.1) == 1
        assert caplog.records

    def test_profile_ridge(self):
        k = KnurlProfile(1.0, 1.0, 0.3)
        npt.assert_allclose(k.bounding_box().min, [-0.5, 0.0])
        npt.assert_allclose(k.bounding_box().max, [0.5, 1.3])
        assert k.evaluate((0.0, 1.3)) == pytest.approx(0.0, abs=1e-12)

    def test_core_and_outside(self):
        k = Knurl3D(4.0, 1.0, 1.0, 0.3, KNURL_ANGLE)
        assert k.evaluate((0.5, 0.0, 0.0)) < 0.0
        assert k.evaluate((1.5, 0.0, 0.0)) > 0.0
        assert k.evaluate((0.0, 0.0, 2.5)) > 0.0

    def test_even_starts_point_symmetric(self):
        k = Knurl3D(4.0, 1.0, 1.0, 0.3, KNURL_ANGLE)
        p = Box((-1.2, -1.2, -1.5), (1.2, 1.2, 1.5)).random_set(2000, np.random.default_rng(3))
        npt.assert_allclose(k.sdf(p), k.sdf(-p), atol=1e-9)

    @pytest.mark.parametrize("theta", [0.0, np.pi / 2, -0.1])
    def test_rejects_bad_angle(self, theta):
        with pytest.raises(InvalidParameterError):
            Knurl3D(4.0, 1.0, 1.0, 0.3, theta)

    def test_knurled_head(self):
        h = KnurledHead3D(5.0, 4.0, 1.0)
        assert h.evaluate((0.0, 0.0, 0.0)) == pytest.approx(-2.0, abs=1e-9)
        bb = h.bounding_box()
        npt.assert_allclose(bb.max, [5.3, 5.3, 2.0], atol=1e-12)

    def test_knurled_head_rejects_coarse_pitch(self):
        with pytest.raises(InvalidParameterError):
            KnurledHead3D(5.0, 4.0, 5.0)


# ===========================================================================
# Standoffs
# ===========================================================================

class TestStandoff3D:
    params = StandoffParams(
        pillar_height=10.0,
        pillar_radius=3.0,
        hole_depth=5.0,
        hole_radius=1.0,
        number_webs=4,
        web_height=5.0,
        web_radius=6.0,
        web_width=1.0,
    )

    def test_pillar_and_hole(self):
        s = Standoff3D(self.params)
        assert s.evaluate((2.0, 0.0, 0.0)) < 0.0
        assert s.evaluate((0.0, 0.0, 4.0)) > 0.0
        assert s.evaluate((0.0, 0.0, -2.0)) < 0.0

    def test_webs_at_the_foot(self):
        s = Standoff3D(self.params)
        for p in [(4.0, 0.0, -4.5), (0.0, 4.0, -4.5), (-4.0, 0.0, -4.5), (0.0, -4.0, -4.5)]:
            assert s.evaluate(p) < 0.0
        assert s.evaluate((4.0, 0.0, -1.0)) > 0.0
        assert s.evaluate((4.0, 4.0, -4.5)) > 0.0

    def test_plain_pillar(self):
        s = Standoff3D(StandoffParams(pillar_height=10.0, pillar_radius=3.0))
        assert s.evaluate((0.0, 0.0, 0.0)) == pytest.approx(-3.0)

    def test_params_are_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            self.params.pillar_height = 1.0

    @pytest.mark.parametrize("changes", [
        {"pillar_height": 0.0},
        {"hole_radius": 3.0},
        {"hole_depth": 11.0},
        {"number_webs": -1},
        {"web_width": 0.0},
    ])
    def test_rejects_bad_params(self, changes):
        with pytest.raises(InvalidParameterError):
            Standoff3D(dataclasses.replace(self.params, **changes))
