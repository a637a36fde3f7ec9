"""Tests for the evaluation speed benchmark."""

import logging

import numpy as np
import pytest

from helisdf import InvalidParameterError
from helisdf.benchmark import benchmark_sdf, format_eps
from helisdf.sdf2d import Circle2D
from helisdf.sdf3d import HexHead3D


@pytest.mark.parametrize("eps, text", [
    (3.2e9, "3.20 G evals/sec"),
    (4.567e6, "4.57 M evals/sec"),
    (12_346.0, "12.35 K evals/sec"),
    (12.0, "12.00 evals/sec"),
])
def test_format_eps(eps, text):
    assert format_eps(eps) == text


def test_benchmark_logs_rate(caplog):
    with caplog.at_level(logging.INFO, logger="helisdf.benchmark"):
        eps = benchmark_sdf("hex head", HexHead3D(5.0, 4.0, "tb"), n_evals=1000,
                            rng=np.random.default_rng(0))
    assert eps > 0.0
    assert any(r.message.startswith("hex head ") and "evals/sec" in r.message for r in caplog.records)


def test_benchmark_2d():
    assert benchmark_sdf("circle", Circle2D(1.0), n_evals=10) > 0.0


def test_benchmark_rejects_empty_batch():
    with pytest.raises(InvalidParameterError):
        benchmark_sdf("circle", Circle2D(1.0), n_evals=0)
