"""
Nadaraya-Watson point estimate with a fixed-bandwidth Gaussian kernel.

    ŷ(x) = Σ K((x_i - x) / h) * y_i / Σ K((x_i - x) / h)

Includes the input checks shared by the bootstrap and the public
entry points.
"""

import logging
import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from sklearn.utils import check_array

from nadaraya_watson.exceptions import DimensionMismatch, InvalidParameter
from nadaraya_watson.kernels import gaussian_kernel_weights

logger = logging.getLogger(__name__)


def _as_float_vector(values: ArrayLike, name: str) -> NDArray[np.floating]:
    """Convert input to a finite 1-D float64 array."""
    values = check_array(
        values,
        ensure_2d=False,
        dtype=np.float64,
        ensure_min_samples=0,
        input_name=name,
    )
    if values.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional, got shape {values.shape}")
    return values


def check_bandwidth(bandwidth: float) -> float:
    """Validate that the bandwidth is a positive real number."""
    if isinstance(bandwidth, bool) or not isinstance(bandwidth, numbers.Real):
        raise InvalidParameter(
            f"Bandwidth must be a positive real number, got {bandwidth!r}."
        )
    # Also rejects NaN
    if not bandwidth > 0:
        raise InvalidParameter(f"Bandwidth must be a positive value, got {bandwidth}.")
    return float(bandwidth)


def check_confidence_level(conf_level: float) -> float:
    """Validate that the confidence level lies in the open interval (0, 1)."""
    if isinstance(conf_level, bool) or not isinstance(conf_level, numbers.Real):
        raise InvalidParameter(
            f"Confidence level must be a real number, got {conf_level!r}."
        )
    if not 0 < conf_level < 1:
        raise InvalidParameter(
            f"Confidence level must be between 0 and 1, got {conf_level}."
        )
    return float(conf_level)


def check_inputs(
    x: ArrayLike,
    y: ArrayLike,
    x_eval: ArrayLike,
    bandwidth: float,
    conf_level: float | None = None,
) -> tuple[NDArray[np.floating], NDArray[np.floating], NDArray[np.floating], float]:
    """
    Validate and convert regression inputs.

    Checks run in a fixed order: matching lengths of ``x`` and ``y``,
    positive bandwidth, confidence level (when given), non-empty
    evaluation set, non-empty observation set.

    Parameters
    ----------
    x : array-like of shape (n_samples,)
        Predictor values
    y : array-like of shape (n_samples,)
        Response values
    x_eval : array-like of shape (n_eval,)
        Evaluation points
    bandwidth : float
        Kernel bandwidth
    conf_level : float or None, default=None
        Confidence level to validate alongside the data

    Returns
    -------
    x, y, x_eval : ndarray
        Float64 1-D arrays
    bandwidth : float
        Validated bandwidth

    Raises
    ------
    DimensionMismatch
        If ``x`` and ``y`` differ in length.
    InvalidParameter
        If the bandwidth, confidence level or evaluation set is invalid.
    """
    x = _as_float_vector(x, "x")
    y = _as_float_vector(y, "y")
    x_eval = _as_float_vector(x_eval, "x_eval")

    if x.shape[0] != y.shape[0]:
        raise DimensionMismatch(
            "The vectors 'x' and 'y' must be of the same length, "
            f"got {x.shape[0]} and {y.shape[0]}."
        )
    bandwidth = check_bandwidth(bandwidth)
    if conf_level is not None:
        check_confidence_level(conf_level)
    if x_eval.shape[0] == 0:
        raise InvalidParameter("The evaluation points 'x_eval' cannot be empty.")
    if x.shape[0] == 0:
        raise InvalidParameter("At least one observation is required.")

    return x, y, x_eval, bandwidth


def kernel_estimate(
    x: ArrayLike,
    y: ArrayLike,
    x_eval: ArrayLike,
    bandwidth: float,
    check_input: bool = True,
) -> NDArray[np.floating]:
    """
    Nadaraya-Watson estimate at each evaluation point.

    Every observation contributes to every evaluation point, so the cost
    is O(n_samples * n_eval).

    If all weights at an evaluation point underflow to zero (the point lies
    many bandwidths away from every observation) the weighted average is
    0/0 and the prediction is NaN. This is returned as-is, not replaced
    by a fallback value.

    Parameters
    ----------
    x : array-like of shape (n_samples,)
        Predictor values
    y : array-like of shape (n_samples,)
        Response values
    x_eval : array-like of shape (n_eval,)
        Evaluation points
    bandwidth : float
        Gaussian kernel bandwidth, must be positive
    check_input : bool, default=True
        Skip validation when False. Only for callers that already ran
        :func:`check_inputs` on the same data.

    Returns
    -------
    y_pred : ndarray of shape (n_eval,)
        Predicted values

    Examples
    --------
    >>> x = np.linspace(0, 10, 100)
    >>> y = np.sin(x) + 0.2 * np.random.randn(100)
    >>> y_pred = kernel_estimate(x, y, np.linspace(0, 10, 50), bandwidth=0.5)
    """
    if check_input:
        x, y, x_eval, bandwidth = check_inputs(x, y, x_eval, bandwidth)
        logger.debug(
            "Kernel estimate: n_samples=%d, n_eval=%d, bandwidth=%g",
            x.shape[0],
            x_eval.shape[0],
            bandwidth,
        )

    weights = gaussian_kernel_weights(x_eval, x, bandwidth)

    # Zero total weight gives NaN on purpose; keep numpy quiet about it
    with np.errstate(invalid="ignore", divide="ignore"):
        y_pred = np.sum(weights * y, axis=1) / np.sum(weights, axis=1)

    return y_pred
