"""Tests for the Nadaraya-Watson point estimate."""

import warnings

import numpy as np
import pytest

from nadaraya_watson.exceptions import DimensionMismatch, InvalidParameter
from nadaraya_watson.regression import (
    check_bandwidth,
    check_confidence_level,
    check_inputs,
    kernel_estimate,
)


class TestKernelEstimate:
    """Tests for kernel_estimate."""

    def test_output_shape(self, sine_data, x_eval):
        """One prediction per evaluation point."""
        x, y = sine_data
        y_pred = kernel_estimate(x, y, x_eval, 0.5)
        assert y_pred.shape == x_eval.shape

    def test_linear_midpoint(self, linear_data):
        """Symmetric kernel around the middle of a line gives the line value."""
        x, y = linear_data
        y_pred = kernel_estimate(x, y, [3.0], 1.0)
        np.testing.assert_allclose(y_pred, [3.0], rtol=1e-12)

    @pytest.mark.parametrize("bandwidth", [0.5, 3.0, 100.0])
    def test_constant_response(self, bandwidth):
        """Constant response is reproduced exactly up to rounding."""
        x = np.array([-2.0, 0.0, 0.3, 1.0, 4.0])
        y = np.full_like(x, 7.25)
        y_pred = kernel_estimate(x, y, np.linspace(-1, 3, 9), bandwidth)
        np.testing.assert_allclose(y_pred, 7.25, rtol=1e-12)

    @pytest.mark.parametrize("bandwidth", [0.1, 1.0, 10.0])
    def test_single_observation(self, bandwidth):
        """With one observation every prediction is that response."""
        y_pred = kernel_estimate([2.0], [-3.5], [1.0, 2.0, 2.5], bandwidth)
        np.testing.assert_allclose(y_pred, -3.5, rtol=1e-12)

    def test_deterministic(self, sine_data, x_eval):
        """Repeated calls give bit-identical output."""
        x, y = sine_data
        first = kernel_estimate(x, y, x_eval, 0.5)
        second = kernel_estimate(x, y, x_eval, 0.5)
        np.testing.assert_array_equal(first, second)

    def test_permutation_invariance(self, sine_data, x_eval):
        """Reordering the pairs does not change the estimate."""
        x, y = sine_data
        perm = np.random.RandomState(0).permutation(len(x))
        np.testing.assert_allclose(
            kernel_estimate(x, y, x_eval, 0.5),
            kernel_estimate(x[perm], y[perm], x_eval, 0.5),
            rtol=1e-12,
        )

    def test_matches_explicit_weighted_average(self, sine_data):
        """Agrees with the textbook double loop."""
        x, y = sine_data
        x_eval = np.array([0.0, 2.5, 7.0])
        bandwidth = 0.8
        norm_factor = 1.0 / (bandwidth * np.sqrt(2 * np.pi))

        expected = []
        for point in x_eval:
            sum_weights = 0.0
            sum_weighted_y = 0.0
            for x_i, y_i in zip(x, y):
                dist = (x_i - point) / bandwidth
                weight = norm_factor * np.exp(-0.5 * dist * dist)
                sum_weights += weight
                sum_weighted_y += weight * y_i
            expected.append(sum_weighted_y / sum_weights)

        np.testing.assert_allclose(
            kernel_estimate(x, y, x_eval, bandwidth), expected, rtol=1e-10
        )

    def test_tracks_sine(self, sine_data, x_eval):
        """Smoothed curve follows the underlying function."""
        x, y = sine_data
        y_pred = kernel_estimate(x, y, x_eval, 0.4)
        assert np.max(np.abs(y_pred - np.sin(x_eval))) < 0.4

    def test_zero_total_weight_is_nan(self):
        """Far evaluation points produce NaN, not an error or fallback."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            y_pred = kernel_estimate([0.0, 1.0], [1.0, 2.0], [0.5, 1e6], 0.1)
        assert np.isfinite(y_pred[0])
        assert np.isnan(y_pred[1])

    def test_accepts_lists(self):
        """Plain sequences are converted."""
        y_pred = kernel_estimate([1, 2, 3], [1, 2, 3], [2], 1)
        assert y_pred.dtype == np.float64


class TestCheckInputs:
    """Tests for input validation."""

    def test_dimension_mismatch(self):
        """Different lengths of x and y are rejected."""
        with pytest.raises(DimensionMismatch, match="same length"):
            kernel_estimate([1.0, 2.0, 3.0], [1.0, 2.0], [1.0], 1.0)

    @pytest.mark.parametrize("bandwidth", [0.0, -1.0, np.nan])
    def test_invalid_bandwidth(self, bandwidth):
        """Non-positive bandwidth is rejected."""
        with pytest.raises(InvalidParameter, match="Bandwidth"):
            kernel_estimate([1.0, 2.0], [1.0, 2.0], [1.0], bandwidth)

    def test_bandwidth_type(self):
        """Non-numeric bandwidth is rejected."""
        with pytest.raises(InvalidParameter):
            check_bandwidth("wide")

    def test_empty_eval(self):
        """Empty evaluation set is rejected."""
        with pytest.raises(InvalidParameter, match="cannot be empty"):
            kernel_estimate([1.0, 2.0], [1.0, 2.0], [], 1.0)

    def test_empty_observations(self):
        """Empty observation set is rejected."""
        with pytest.raises(InvalidParameter):
            kernel_estimate([], [], [1.0], 1.0)

    def test_dimension_checked_before_bandwidth(self):
        """Length mismatch is reported first."""
        with pytest.raises(DimensionMismatch):
            check_inputs([1.0, 2.0], [1.0], [], -1.0, conf_level=2.0)

    def test_confidence_checked_before_eval(self):
        """Confidence level is reported before an empty evaluation set."""
        with pytest.raises(InvalidParameter, match="Confidence"):
            check_inputs([1.0], [1.0], [], 1.0, conf_level=1.0)

    def test_errors_are_value_errors(self):
        """Both error types can be caught as ValueError."""
        with pytest.raises(ValueError):
            kernel_estimate([1.0], [1.0, 2.0], [1.0], 1.0)
        with pytest.raises(ValueError):
            kernel_estimate([1.0], [1.0], [1.0], 0.0)

    def test_non_finite_input(self):
        """NaN in the data is rejected during conversion."""
        with pytest.raises(ValueError):
            kernel_estimate([1.0, np.nan], [1.0, 2.0], [1.0], 1.0)

    def test_two_dimensional_input(self):
        """Matrices are not accepted as predictors."""
        with pytest.raises(ValueError, match="one-dimensional"):
            kernel_estimate(np.ones((3, 2)), np.ones(3), [1.0], 1.0)

    @pytest.mark.parametrize("conf_level", [0.0, 1.0, -0.5, 1.5, np.nan])
    def test_invalid_confidence_level(self, conf_level):
        """Confidence level outside (0, 1) is rejected."""
        with pytest.raises(InvalidParameter):
            check_confidence_level(conf_level)

    def test_valid_confidence_level(self):
        """Confidence level inside (0, 1) passes through."""
        assert check_confidence_level(0.9) == 0.9
