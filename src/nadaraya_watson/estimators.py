"""
Nadaraya-Watson regression entry points.

Includes:
- ``nadaraya_watson``: point estimate plus optional bootstrap interval
- ``NadarayaWatson``: sklearn-compatible estimator around the same estimate
"""

import logging
import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from sklearn.base import BaseEstimator, RegressorMixin
from sklearn.utils.validation import check_is_fitted, validate_data

from nadaraya_watson.bootstrap import (
    IndexSampler,
    RandomState,
    bootstrap_interval,
    bootstrap_predictions,
    percentile_interval,
)
from nadaraya_watson.exceptions import InvalidParameter
from nadaraya_watson.regression import check_bandwidth, check_inputs, kernel_estimate

logger = logging.getLogger(__name__)


def nadaraya_watson(
    x: ArrayLike,
    y: ArrayLike,
    x_eval: ArrayLike,
    bandwidth: float,
    n_boot: int = 0,
    conf_level: float = 0.95,
    *,
    random_state: RandomState = None,
    sampler: IndexSampler | None = None,
    n_jobs: int | None = None,
) -> dict[str, NDArray[np.floating]]:
    """
    Nadaraya-Watson kernel regression with a Gaussian kernel.

    Computes a smoothed estimate of the conditional mean of ``y`` given
    ``x`` at each point of ``x_eval``. With ``n_boot > 0`` a pairs
    bootstrap percentile interval is added.

    Args:
        x: Predictor values of shape (n_samples,).
        y: Response values of shape (n_samples,).
        x_eval: Points at which to evaluate the regression function.
        bandwidth: Positive Gaussian kernel bandwidth.
        n_boot: Number of bootstrap replicates. 0 (or a negative value)
            disables interval estimation.
        conf_level: Two-sided confidence level in (0, 1). Validated even
            when no bootstrap is requested.
        random_state: Seed for reproducible resampling.
        sampler: ``sampler(n, rng)`` returning ``n`` indices in ``[0, n)``.
        n_jobs: Number of joblib worker threads for the bootstrap.

    Returns:
        Dict with ``"y_pred"``. When ``n_boot > 0`` it also has ``"lower"``
        and ``"upper"``; otherwise those keys are absent.

    Raises:
        DimensionMismatch: If ``x`` and ``y`` differ in length.
        InvalidParameter: If ``bandwidth``, ``conf_level``, ``n_boot`` or
            ``x_eval`` is invalid.

    Example:
        >>> x = np.sort(np.random.uniform(0, 10, 100))
        >>> y = np.sin(x) + np.random.normal(scale=0.2, size=100)
        >>> x_eval = np.linspace(0, 10, 100)
        >>> result = nadaraya_watson(x, y, x_eval, 0.5, n_boot=100)
        >>> result["lower"].shape
        (100,)
    """
    x, y, x_eval, bandwidth = check_inputs(x, y, x_eval, bandwidth, conf_level)
    if isinstance(n_boot, bool) or not isinstance(n_boot, numbers.Integral):
        raise InvalidParameter(f"n_boot must be an integer, got {n_boot!r}.")

    y_pred = kernel_estimate(x, y, x_eval, bandwidth, check_input=False)

    n_nonfinite = int(np.sum(~np.isfinite(y_pred)))
    if n_nonfinite:
        logger.warning(
            "%d of %d evaluation points have zero total kernel weight "
            "(bandwidth=%g); their predictions are NaN.",
            n_nonfinite,
            y_pred.shape[0],
            bandwidth,
        )

    result = {"y_pred": y_pred}
    if n_boot <= 0:
        return result

    logger.debug(
        "Bootstrap: n_samples=%d, n_eval=%d, n_boot=%d, n_jobs=%s",
        x.shape[0],
        x_eval.shape[0],
        n_boot,
        n_jobs,
    )
    samples = bootstrap_predictions(
        x,
        y,
        x_eval,
        bandwidth,
        int(n_boot),
        sampler=sampler,
        random_state=random_state,
        n_jobs=n_jobs,
        check_input=False,
    )
    interval = percentile_interval(samples, conf_level)

    result["lower"] = interval.lower
    result["upper"] = interval.upper
    return result


class NadarayaWatson(RegressorMixin, BaseEstimator):
    """
    Nadaraya-Watson kernel regression estimator.

    Local constant regression with a fixed-bandwidth Gaussian kernel:

        ŷ(x) = Σ K((x_i - x) / h) * y_i / Σ K((x_i - x) / h)

    Only a single predictor is supported.

    Parameters
    ----------
    bandwidth : float, default=1.0
        Gaussian kernel bandwidth, must be positive

    Attributes
    ----------
    X_ : ndarray of shape (n_samples, 1)
        Training data

    y_ : ndarray of shape (n_samples,)
        Training targets

    bandwidth_ : float
        Validated bandwidth

    n_features_in_ : int
        Number of features seen during fit

    Examples
    --------
    >>> import numpy as np
    >>> from nadaraya_watson import NadarayaWatson
    >>> X = np.random.uniform(0, 10, (100, 1))
    >>> y = np.sin(X[:, 0]) + 0.2 * np.random.randn(100)
    >>> model = NadarayaWatson(bandwidth=0.5).fit(X, y)
    >>> y_pred, lower, upper = model.predict_interval(X[:5], n_boot=200)
    """

    def __init__(self, bandwidth: float = 1.0):
        self.bandwidth = bandwidth

    def fit(self, X: NDArray, y: NDArray) -> "NadarayaWatson":
        """
        Fit the Nadaraya-Watson model.

        Parameters
        ----------
        X : array-like of shape (n_samples, 1)
            Training data
        y : array-like of shape (n_samples,)
            Target values

        Returns
        -------
        self
            Fitted estimator
        """
        X, y = validate_data(self, X, y, y_numeric=True, dtype=np.float64)
        if X.shape[1] != 1:
            raise ValueError(
                f"NadarayaWatson supports a single predictor, got {X.shape[1]} features."
            )

        self.bandwidth_ = check_bandwidth(self.bandwidth)
        self.X_ = X
        self.y_ = y.astype(np.float64)

        return self

    def predict(self, X: NDArray) -> NDArray[np.floating]:
        """
        Predict using the Nadaraya-Watson estimator.

        Parameters
        ----------
        X : array-like of shape (n_samples, 1)
            Samples to predict

        Returns
        -------
        y_pred : ndarray of shape (n_samples,)
            Predicted values
        """
        check_is_fitted(self)
        X = validate_data(self, X, dtype=np.float64, reset=False)
        return kernel_estimate(
            self.X_[:, 0], self.y_, X[:, 0], self.bandwidth_, check_input=False
        )

    def predict_interval(
        self,
        X: NDArray,
        n_boot: int = 1000,
        conf_level: float = 0.95,
        random_state: RandomState = None,
        n_jobs: int | None = None,
    ) -> tuple[NDArray[np.floating], NDArray[np.floating], NDArray[np.floating]]:
        """
        Predict with bootstrap percentile confidence bounds.

        Parameters
        ----------
        X : array-like of shape (n_samples, 1)
            Samples to predict
        n_boot : int, default=1000
            Number of bootstrap replicates
        conf_level : float, default=0.95
            Two-sided confidence level in (0, 1)
        random_state : int, Generator, RandomState, SeedSequence or None
            Seed for reproducible resampling
        n_jobs : int or None, default=None
            Number of joblib worker threads

        Returns
        -------
        y_pred : ndarray of shape (n_samples,)
            Predicted values
        lower : ndarray of shape (n_samples,)
            Lower confidence bounds
        upper : ndarray of shape (n_samples,)
            Upper confidence bounds
        """
        y_pred = self.predict(X)
        X = validate_data(self, X, dtype=np.float64, reset=False)

        interval = bootstrap_interval(
            self.X_[:, 0],
            self.y_,
            X[:, 0],
            self.bandwidth_,
            n_boot,
            conf_level,
            random_state=random_state,
            n_jobs=n_jobs,
        )
        return y_pred, interval.lower, interval.upper
