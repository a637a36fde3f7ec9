"""Tests for thread profiles and the thread database."""

import dataclasses
import logging
import math

import numpy as np
import numpy.testing as npt
import pytest

from helisdf import InvalidParameterError, UnknownThreadError
from helisdf.sdf2d import Polygon2D
from helisdf.threads import (
    AcmeThread,
    ANSIButtressThread,
    ISOThread,
    PlasticButtressThread,
    ThreadDatabase,
    ThreadMode,
    ThreadParameters,
    Units,
    default_thread_database,
    iso_entry,
    uts_entry,
)


def _grid(half: float = 6.0, n: int = 33) -> np.ndarray:
    lin = np.linspace(-half, half, n)
    Y, X = np.meshgrid(lin, lin, indexing="ij")
    return np.stack([X, Y], axis=-1)


# ===========================================================================
# Profiles
# ===========================================================================

class TestProfiles:
    def test_iso_external_crest_and_core(self):
        t = ISOThread(3.0, 1.0, ThreadMode.EXTERNAL)
        assert isinstance(t, Polygon2D)
        assert t.evaluate((0.0, 3.0)) == pytest.approx(0.0, abs=1e-12)
        assert t.evaluate((0.0, 1.0)) < 0.0
        assert t.evaluate((0.0, 3.5)) > 0.0

    def test_iso_external_profile_height(self):
        h = 1.0 / (2.0 * math.tan(math.radians(30.0)))
        t = ISOThread(3.0, 1.0)
        assert t.bounding_box().max[1] == pytest.approx(3.0 + h / 8.0)

    def test_iso_external_root_is_rounded(self):
        h = 1.0 / (2.0 * math.tan(math.radians(30.0)))
        r0 = 3.0 - 7.0 / 8.0 * h
        # the sharp root vertex is replaced by an arc above it
        assert ISOThread(3.0, 1.0).evaluate((0.5, r0)) < 0.0

    def test_iso_internal(self):
        t = ISOThread(3.0, 1.0, "internal")
        assert t.evaluate((0.0, 1.0)) < 0.0
        assert t.evaluate((0.0, 3.2)) > 0.0
        assert not np.allclose(t.sdf(_grid(4.0)), ISOThread(3.0, 1.0).sdf(_grid(4.0)))

    def test_mode_parse(self):
        assert ThreadMode.parse("external") is ThreadMode.EXTERNAL
        assert ThreadMode.parse(ThreadMode.INTERNAL) is ThreadMode.INTERNAL

    def test_unknown_mode_raises(self):
        with pytest.raises(InvalidParameterError):
            ISOThread(3.0, 1.0, "sideways")

    def test_invalid_parameter_is_value_error(self):
        with pytest.raises(ValueError):
            ISOThread(3.0, 1.0, "sideways")

    def test_acme(self):
        t = AcmeThread(5.0, 2.0)
        assert t.evaluate((0.0, 5.0)) == pytest.approx(0.0, abs=1e-12)
        assert t.evaluate((0.0, 2.0)) < 0.0
        assert t.bounding_box().max[1] == pytest.approx(5.0)

    def test_buttress(self):
        t = ANSIButtressThread(5.0, 1.0)
        assert t.evaluate((0.0, 2.0)) < 0.0
        assert t.evaluate((0.0, 5.5)) > 0.0
        assert t.bounding_box().max[1] == pytest.approx(5.0)

    def test_plastic_buttress_is_rounder(self):
        p = _grid()
        assert not np.allclose(PlasticButtressThread(5.0, 1.0).sdf(p), ANSIButtressThread(5.0, 1.0).sdf(p))

    @pytest.mark.parametrize("make, args", [
        (AcmeThread, (1.0, 2.0)),
        (ISOThread, (0.5, 1.0)),
        (ANSIButtressThread, (0.5, 1.0)),
        (PlasticButtressThread, (0.5, 1.0)),
        (ISOThread, (0.0, 1.0)),
        (AcmeThread, (5.0, 0.0)),
    ])
    def test_rejects_bad_size(self, make, args):
        with pytest.raises(InvalidParameterError):
            make(*args)

    def test_profiles_are_finite(self):
        p = _grid()
        for t in (AcmeThread(5.0, 2.0), ISOThread(5.0, 1.0), ISOThread(5.0, 1.0, "internal"),
                  ANSIButtressThread(5.0, 1.0), PlasticButtressThread(5.0, 1.0)):
            assert np.all(np.isfinite(t.sdf(p)))


# ===========================================================================
# Thread parameters
# ===========================================================================

class TestThreadParameters:
    def test_iso_entry_halves_diameter(self):
        t = iso_entry("M6x1", 6, 1, 10)
        assert t == ThreadParameters("M6x1", 3.0, 1.0, 10, Units.MM)

    def test_uts_entry_converts_tpi(self):
        t = uts_entry("unc_1/4", 0.25, 20, 7.0 / 16.0)
        assert t.radius == pytest.approx(0.125)
        assert t.pitch == pytest.approx(0.05)
        assert t.units is Units.INCH

    def test_hex_dimensions(self):
        t = iso_entry("M6x1", 6, 1, 10)
        assert t.hex_radius() == pytest.approx(10.0 / math.sqrt(3.0))
        assert t.hex_height() == pytest.approx(2.0 * 10.0 / math.sqrt(3.0) * 5.0 / 12.0)

    def test_no_hex_head(self):
        with pytest.raises(InvalidParameterError):
            iso_entry("M1x0.25", 1, 0.25, -1).hex_radius()

    def test_frozen(self):
        t = iso_entry("M6x1", 6, 1, 10)
        with pytest.raises(dataclasses.FrozenInstanceError):
            t.pitch = 2.0


# ===========================================================================
# Database
# ===========================================================================

class TestThreadDatabase:
    def test_default_is_shared(self):
        assert default_thread_database() is default_thread_database()

    def test_standard_contents(self):
        db = default_thread_database()
        assert len(db) == 62
        assert "M6x1" in db
        assert "unf_1/2" in db
        m6 = db.lookup("M6x1")
        assert (m6.radius, m6.pitch, m6.units) == (3.0, 1.0, Units.MM)

    def test_get_missing_returns_default(self):
        db = default_thread_database()
        assert db.get("M7x9") is None
        sentinel = iso_entry("M7x9", 7, 9, 11)
        assert db.get("M7x9", sentinel) is sentinel

    def test_lookup_missing_raises(self):
        with pytest.raises(UnknownThreadError):
            default_thread_database().lookup("M7x9")

    def test_unknown_thread_is_lookup_error(self):
        with pytest.raises(LookupError):
            default_thread_database().lookup("nope")

    def test_read_only(self):
        db = default_thread_database()
        with pytest.raises(TypeError):
            db["M7x1"] = iso_entry("M7x1", 7, 1, 11)

    def test_custom_database(self):
        db = ThreadDatabase([iso_entry("M7x1", 7, 1, 11)])
        assert list(db) == ["M7x1"]
        assert db["M7x1"].radius == pytest.approx(3.5)

    def test_duplicate_names_rejected(self):
        with pytest.raises(InvalidParameterError):
            ThreadDatabase([iso_entry("M7x1", 7, 1, 11), iso_entry("M7x1", 7, 1, 12)])

    def test_standard_logs(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="helisdf.threads"):
            ThreadDatabase.standard()
        assert any("thread database" in r.message for r in caplog.records)

    def test_every_standard_thread_builds(self):
        for t in default_thread_database().values():
            profile = ISOThread(t.radius, t.pitch)
            npt.assert_allclose(profile.evaluate((0.0, t.radius)), 0.0, atol=1e-9)
