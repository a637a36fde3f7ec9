"""Tests for the shared vector kernel and the 2-D / 3-D sdf_lib math.

Tests verify:
- Correct sign (negative inside, positive outside, zero on surface)
- Exact or near-exact distance at analytically known points
- Array shape / broadcasting consistency
"""

import numpy as np
import numpy.testing as npt
import pytest

from helisdf import _common as common
from helisdf.sdf2d import sdf_lib as sdf2
from helisdf.sdf3d import sdf_lib as sdf3


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _p3(*xyz) -> np.ndarray:
    """Single 3-D point as shape ``(1, 3)``."""
    return np.array([list(xyz)], dtype=float)


def _p2(*xy) -> np.ndarray:
    """Single 2-D point as shape ``(1, 2)``."""
    return np.array([list(xy)], dtype=float)


def _grid3(n: int = 8) -> np.ndarray:
    """Uniform ``n³`` grid of 3-D points in ``[-1, 1]³`` (shape ``(n, n, n, 3)``)."""
    lin = np.linspace(-1.0, 1.0, n)
    Z, Y, X = np.meshgrid(lin, lin, lin, indexing="ij")
    return np.stack([X, Y, Z], axis=-1)


_SQUARE = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])


# ===========================================================================
# Vector helpers
# ===========================================================================

class TestVecHelpers:
    def test_vec2_shape(self):
        v = common.vec2(np.array([1.0, 2.0]), np.array([3.0, 4.0]))
        assert v.shape == (2, 2)

    def test_vec3_broadcasts_scalars(self):
        v = common.vec3(np.ones(5), 0.0, 2.0)
        assert v.shape == (5, 3)
        npt.assert_allclose(v[:, 2], 2.0)

    def test_length_and_length2(self):
        v = np.array([[3.0, 4.0]])
        npt.assert_allclose(common.length(v), [5.0])
        npt.assert_allclose(common.length2(v), [25.0])

    def test_cross_2d_is_scalar(self):
        assert common.cross(np.array([1.0, 0.0]), np.array([0.0, 1.0])) == pytest.approx(1.0)
        assert common.cross(np.array([0.0, 1.0]), np.array([1.0, 0.0])) == pytest.approx(-1.0)

    def test_cross_3d(self):
        npt.assert_allclose(
            common.cross(np.array([1.0, 0.0, 0.0]), np.array([0.0, 1.0, 0.0])),
            [0.0, 0.0, 1.0],
        )

    def test_normalize_unit_length(self):
        v = common.normalize(np.array([[3.0, 4.0, 12.0]]))
        npt.assert_allclose(common.length(v), [1.0])

    def test_normalize_zero_is_nan(self):
        assert np.all(np.isnan(common.normalize(np.zeros(3))))

    def test_component_min_max(self):
        a = np.array([1.0, 5.0, -2.0])
        b = np.array([3.0, 0.0, -1.0])
        npt.assert_allclose(common.vmin(a, b), [1.0, 0.0, -2.0])
        npt.assert_allclose(common.vmax(a, b), [3.0, 5.0, -1.0])
        assert common.min_component(a) == -2.0
        assert common.max_component(a) == 5.0

    def test_polar_to_xy(self):
        npt.assert_allclose(common.polar_to_xy(2.0, np.pi / 2), [0.0, 2.0], atol=1e-12)

    def test_degree_conversion_round_trip(self):
        assert common.dtor(180.0) == pytest.approx(np.pi)
        assert common.rtod(common.dtor(37.5)) == pytest.approx(37.5)


# ===========================================================================
# Saw-tooth fold
# ===========================================================================

class TestSawTooth:
    def test_identity_inside_period(self):
        npt.assert_allclose(common.saw_tooth(np.array([0.0, 0.3, -0.3]), 1.0), [0.0, 0.3, -0.3])

    def test_folds_into_half_open_range(self):
        x = np.linspace(-7.3, 9.1, 1001)
        s = common.saw_tooth(x, 1.5)
        assert np.all(s >= -0.75)
        assert np.all(s < 0.75)

    def test_upper_edge_maps_to_lower_edge(self):
        assert common.saw_tooth(0.5, 1.0) == pytest.approx(-0.5)

    def test_periodic(self):
        x = np.linspace(-1.9, 1.9, 97)
        npt.assert_allclose(common.saw_tooth(x + 3 * 0.8, 0.8), common.saw_tooth(x, 0.8), atol=1e-12)

    def test_wraps_past_half_period(self):
        assert common.saw_tooth(0.7, 1.0) == pytest.approx(-0.3)


# ===========================================================================
# Shared boolean operators
# ===========================================================================

class TestBooleanOps:
    def test_union_intersection_subtraction(self):
        a = np.array([-1.0, 2.0])
        b = np.array([0.5, -3.0])
        npt.assert_allclose(common.opUnion(a, b), [-1.0, -3.0])
        npt.assert_allclose(common.opIntersection(a, b), [0.5, 2.0])
        npt.assert_allclose(common.opSubtraction(b, a), [-0.5, 3.0])

    def test_smooth_union_far_apart_is_min(self):
        assert common.opSmoothUnion(np.array(0.0), np.array(10.0), 1.0) == pytest.approx(0.0)

    def test_smooth_union_max_reduction_is_k(self):
        assert common.opSmoothUnion(np.array(0.0), np.array(0.0), 0.25) == pytest.approx(-0.25)

    def test_onion(self):
        npt.assert_allclose(common.opOnion(np.array([-0.5, 0.0, 0.5]), 0.1), [0.4, -0.1, 0.4])

    def test_shared_helpers_reexported(self):
        for name in common.__all__:
            assert getattr(sdf2, name) is getattr(common, name)
            assert getattr(sdf3, name) is getattr(common, name)
        assert set(common.__all__) <= set(dir(common))


# ===========================================================================
# 2-D primitives
# ===========================================================================

class TestSdf2D:
    def test_circle(self):
        npt.assert_allclose(sdf2.sdCircle(_p2(0.0, 2.0), 2.0), [0.0], atol=1e-12)

    def test_box2d_inside_and_outside(self):
        b = np.array([1.0, 0.5])
        npt.assert_allclose(sdf2.sdBox2D(_p2(0.0, 0.0), b), [-0.5])
        npt.assert_allclose(sdf2.sdBox2D(_p2(2.0, 0.0), b), [1.0])

    def test_rounded_box2d_corner(self):
        b = np.array([1.0, 1.0])
        # corner arc centre sits at (0.8, 0.8)
        d = sdf2.sdRoundedBox2D(_p2(0.8 + 0.2 / np.sqrt(2), 0.8 + 0.2 / np.sqrt(2)), b, 0.2)
        npt.assert_allclose(d, [0.0], atol=1e-12)

    def test_polygon_square(self):
        p = np.array([[0.5, 0.5], [1.0, 0.5], [2.0, 0.5]])
        npt.assert_allclose(sdf2.sdPolygon2D(p, _SQUARE), [-0.5, 0.0, 1.0], atol=1e-12)

    def test_polygon_tolerates_duplicate_vertices(self):
        v = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])
        d = sdf2.sdPolygon2D(np.array([[0.5, 0.5], [1.0, 0.0], [1.5, 0.0]]), v)
        assert np.all(np.isfinite(d))
        npt.assert_allclose(d, [-0.5, 0.0, 0.5], atol=1e-12)

    def test_polygon_batch_shape(self):
        p = np.zeros((4, 5, 2))
        assert sdf2.sdPolygon2D(p, _SQUARE).shape == (4, 5)


# ===========================================================================
# 3-D primitives and mappings
# ===========================================================================

class TestSdf3D:
    def test_sphere(self):
        npt.assert_allclose(sdf3.sdSphere(_p3(0.0, 0.0, 0.0), 0.3), [-0.3])

    def test_box(self):
        b = np.array([0.2, 0.3, 0.4])
        npt.assert_allclose(sdf3.sdBox(_p3(0.2, 0.0, 0.0), b), [0.0], atol=1e-12)
        npt.assert_allclose(sdf3.sdBox(_p3(0.0, 0.0, 0.0), b), [-0.2])

    def test_round_box_face(self):
        b = np.array([0.5, 0.5, 0.5])
        npt.assert_allclose(sdf3.sdRoundBox(_p3(0.5, 0.0, 0.0), b, 0.1), [0.0], atol=1e-12)

    def test_rounded_cylinder_faces(self):
        p = np.array([[1.0, 0.0, 0.0], [0.0, 0.0, 2.0], [0.0, 0.0, 0.0]])
        npt.assert_allclose(sdf3.sdRoundedCylinder(p, 1.0, 0.0, 2.0), [0.0, 0.0, -1.0], atol=1e-12)

    def test_rounded_cylinder_edge_is_rounded(self):
        d_sharp = sdf3.sdRoundedCylinder(_p3(1.0, 0.0, 2.0), 1.0, 0.0, 2.0)
        d_round = sdf3.sdRoundedCylinder(_p3(1.0, 0.0, 2.0), 1.0, 0.2, 2.0)
        assert d_round[0] > d_sharp[0]

    def test_capped_cone_slant(self):
        # half-height 1, radius 1 at the bottom and 0.5 at the top
        npt.assert_allclose(sdf3.sdCappedCone(_p3(0.75, 0.0, 0.0), 1.0, 1.0, 0.5), [0.0], atol=1e-12)
        npt.assert_allclose(sdf3.sdCappedCone(_p3(0.0, 0.0, 1.0), 1.0, 1.0, 0.5), [0.0], atol=1e-12)
        assert sdf3.sdCappedCone(_p3(0.0, 0.0, 0.0), 1.0, 1.0, 0.5)[0] < 0

    def test_extrusion_caps(self):
        circle = lambda q: sdf2.sdCircle(q, 1.0)
        npt.assert_allclose(sdf3.opExtrusion(_p3(0.0, 0.0, 0.5), circle, 0.5), [0.0], atol=1e-12)
        npt.assert_allclose(sdf3.opExtrusion(_p3(0.0, 0.0, 0.0), circle, 0.5), [-0.5])

    def test_revolution_of_offset_circle_is_torus(self):
        tube = lambda q: sdf2.sdCircle(q - np.array([1.0, 0.0]), 0.25)
        p = np.array([[0.0, 1.25, 0.0], [-1.0, 0.0, 0.0]])
        npt.assert_allclose(sdf3.opRevolution(p, tube), [0.0, -0.25], atol=1e-12)

    def test_rotate_copy_repeats(self):
        ball = lambda q: sdf3.sdSphere(q - np.array([1.0, 0.0, 0.0]), 0.2)
        p = np.array([[0.0, 1.0, 0.0], [-1.0, 0.0, 0.0], [0.0, -1.0, 0.0]])
        npt.assert_allclose(sdf3.opRotateCopy(p, ball, np.pi / 2), [-0.2, -0.2, -0.2], atol=1e-12)

    def test_tx_applies_inverse(self):
        inv = np.eye(4)
        inv[:3, 3] = (-1.0, 0.0, 0.0)
        npt.assert_allclose(
            sdf3.opTx(_p3(1.0, 0.0, 0.0), inv, lambda q: sdf3.sdSphere(q, 0.5)), [-0.5]
        )

    def test_batch_shape_preserved(self):
        assert sdf3.sdSphere(_grid3(6), 0.5).shape == (6, 6, 6)
