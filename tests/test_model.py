"""
Tests for the conductance model.
"""

import math

import numpy as np
import pytest

from condsens.doe import lhs_sample
from condsens.model import conductance, evaluate


class TestConductance:
    """Closed-form values and domain checks."""

    def test_reference_value(self):
        # z_m = 1200, z_d = 700, z_0 = 100 -> ln(5)
        expected = 250.0 / (6.25 * math.log(5.0) ** 2)
        assert conductance(250.0, 1000.0, 0.7, 0.1) == pytest.approx(expected)
        assert conductance(250.0, 1000.0, 0.7, 0.1) == pytest.approx(15.4422, rel=1e-4)

    def test_scalar_returns_float(self):
        assert isinstance(conductance(250.0, 1000.0, 0.7, 0.1), float)

    def test_proportional_to_windspeed(self):
        assert conductance(500.0, 1000.0, 0.7, 0.1) == pytest.approx(
            2.0 * conductance(250.0, 1000.0, 0.7, 0.1))

    def test_zero_windspeed(self):
        assert conductance(0.0, 1000.0, 0.7, 0.1) == 0.0

    def test_vectorised(self):
        out = conductance(np.array([250.0, 260.0]), 1000.0, 0.7, np.array([0.1, 0.11]))
        assert out.shape == (2,)
        assert out[0] == conductance(250.0, 1000.0, 0.7, 0.1)

    @pytest.mark.parametrize("args, message", [
        ((250.0, 0.0, 0.7, 0.1), "height"),
        ((250.0, -10.0, 0.7, 0.1), "height"),
        ((250.0, 1000.0, 0.7, 0.0), "k_o"),
        ((250.0, 1000.0, 0.7, -0.1), "k_o"),
        ((-1.0, 1000.0, 0.7, 0.1), "windspeed"),
        ((250.0, 1000.0, 1.3, 0.1), "z_0"),
        ((250.0, 1000.0, 0.7, 1.2), "z_0"),
        ((float("nan"), 1000.0, 0.7, 0.1), "finite"),
        ((250.0, float("inf"), 0.7, 0.1), "finite"),
    ])
    def test_non_physical_inputs_raise(self, args, message):
        with pytest.raises(ValueError, match=message):
            conductance(*args)

    def test_one_bad_row_rejects_array(self):
        with pytest.raises(ValueError, match="1 offending"):
            conductance(np.array([250.0, 250.0]), np.array([1000.0, 0.0]), 0.7, 0.1)


class TestEvaluate:
    """Row-wise evaluation of a sample matrix."""

    def test_deterministic(self, default_specs):
        _, specs = default_specs
        X = lhs_sample(specs, 100, seed=11)
        assert np.array_equal(evaluate(X), evaluate(X.copy()))

    @pytest.mark.parametrize("n", [1, 2, 10, 100])
    def test_length_matches_sample_count(self, default_specs, n):
        _, specs = default_specs
        y = evaluate(lhs_sample(specs, n, seed=n))
        assert y.shape == (n,)
        assert np.all(np.isfinite(y))
        assert np.all(y > 0)

    def test_rows_match_scalar_model(self, default_specs):
        _, specs = default_specs
        X = lhs_sample(specs, 5, seed=2)
        y = evaluate(X)
        for row, value in zip(X, y):
            assert value == pytest.approx(conductance(*row), rel=1e-12)

    def test_wrong_column_count(self):
        with pytest.raises(ValueError):
            evaluate(np.ones((3, 3)))
