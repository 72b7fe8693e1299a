"""
Pairs bootstrap percentile intervals for the Nadaraya-Watson estimate.

Each replicate resamples the (x_i, y_i) pairs with replacement, reruns
the kernel estimate and stores one row of the bootstrap sample matrix.
Bounds are order statistics of each column:

    lower_idx = floor(n_boot * (1 - conf_level) / 2)
    upper_idx = ceil(n_boot * (1 + conf_level) / 2) - 1

both clamped into [0, n_boot - 1].
"""

import logging
import math
import numbers
from dataclasses import dataclass
from typing import Callable

import numpy as np
from joblib import Parallel, delayed
from numpy.typing import ArrayLike, NDArray

from nadaraya_watson.exceptions import InvalidParameter
from nadaraya_watson.regression import (
    check_confidence_level,
    check_inputs,
    kernel_estimate,
)

logger = logging.getLogger(__name__)

IndexSampler = Callable[[int, np.random.Generator], ArrayLike]

RandomState = (
    int | np.random.Generator | np.random.RandomState | np.random.SeedSequence | None
)


@dataclass
class BootstrapIntervalResult:
    """Result of a bootstrap percentile interval computation."""

    lower: NDArray[np.floating]
    upper: NDArray[np.floating]
    confidence_level: float
    n_boot: int
    lower_index: int
    upper_index: int

    def __str__(self) -> str:
        return (
            f"Bootstrap Percentile Interval\n"
            f"  Confidence level: {self.confidence_level:.0%}\n"
            f"  Replicates: {self.n_boot}\n"
            f"  Order statistics: [{self.lower_index}, {self.upper_index}]\n"
            f"  Mean width: {np.mean(self.upper - self.lower):.4f}"
        )


def sample_with_replacement(n: int, rng: np.random.Generator) -> NDArray[np.intp]:
    """Draw ``n`` indices uniformly from ``{0, ..., n-1}`` with replacement."""
    return rng.integers(0, n, size=n)


def check_n_boot(n_boot: int) -> int:
    """Validate that the number of bootstrap replicates is a positive integer."""
    if isinstance(n_boot, bool) or not isinstance(n_boot, numbers.Integral):
        raise InvalidParameter(f"n_boot must be an integer, got {n_boot!r}.")
    if n_boot <= 0:
        raise InvalidParameter(f"n_boot must be positive, got {n_boot}.")
    return int(n_boot)


def percentile_indices(n_boot: int, conf_level: float) -> tuple[int, int]:
    """
    Order statistic indices of an equal-tailed percentile interval.

    The lower index rounds down and the upper index rounds up, then both
    are clamped into ``[0, n_boot - 1]``.

    Parameters
    ----------
    n_boot : int
        Number of bootstrap replicates
    conf_level : float
        Two-sided confidence level in (0, 1)

    Returns
    -------
    lower_idx, upper_idx : int
        Indices into the ascending sorted replicates

    Examples
    --------
    >>> percentile_indices(100, 0.5)
    (25, 74)
    >>> percentile_indices(1, 0.95)
    (0, 0)
    """
    lower_idx = math.floor(n_boot * (1 - conf_level) / 2.0)
    upper_idx = math.ceil(n_boot * (1 + conf_level) / 2.0) - 1

    lower_idx = max(0, min(n_boot - 1, lower_idx))
    upper_idx = max(0, min(n_boot - 1, upper_idx))

    return lower_idx, upper_idx


def _spawn_generators(random_state: RandomState, n_boot: int) -> list[np.random.Generator]:
    """One independent generator per replicate."""
    if isinstance(random_state, np.random.RandomState):
        # Legacy generators (e.g. from sklearn.utils.check_random_state)
        random_state = random_state.randint(np.iinfo(np.int32).max)
    return np.random.default_rng(random_state).spawn(n_boot)


def _bootstrap_replicate(
    x: NDArray[np.floating],
    y: NDArray[np.floating],
    x_eval: NDArray[np.floating],
    bandwidth: float,
    sampler: IndexSampler,
    rng: np.random.Generator,
) -> NDArray[np.floating]:
    """Resample the pairs once and return the kernel estimate on the resample."""
    n_samples = x.shape[0]
    indices = np.asarray(sampler(n_samples, rng))

    if indices.shape != (n_samples,) or not np.issubdtype(indices.dtype, np.integer):
        raise InvalidParameter(
            f"Sampler must return {n_samples} integer indices, "
            f"got shape {indices.shape} and dtype {indices.dtype}."
        )
    if np.any(indices < 0) or np.any(indices >= n_samples):
        raise InvalidParameter(
            f"Sampler returned indices outside [0, {n_samples - 1}]."
        )

    # Same index selects both members of a pair
    x_boot = x[indices]
    y_boot = y[indices]

    return kernel_estimate(x_boot, y_boot, x_eval, bandwidth, check_input=False)


def bootstrap_predictions(
    x: ArrayLike,
    y: ArrayLike,
    x_eval: ArrayLike,
    bandwidth: float,
    n_boot: int,
    sampler: IndexSampler | None = None,
    random_state: RandomState = None,
    n_jobs: int | None = None,
    check_input: bool = True,
) -> NDArray[np.floating]:
    """
    Kernel estimates on ``n_boot`` pairs bootstrap resamples.

    Replicates are independent and can run on several threads. Each one
    draws from its own generator spawned from ``random_state``, so the
    result for a given seed does not depend on ``n_jobs``.

    Parameters
    ----------
    x : array-like of shape (n_samples,)
        Predictor values
    y : array-like of shape (n_samples,)
        Response values
    x_eval : array-like of shape (n_eval,)
        Evaluation points
    bandwidth : float
        Gaussian kernel bandwidth
    n_boot : int
        Number of bootstrap replicates, must be positive
    sampler : callable, default=None
        ``sampler(n, rng)`` returning ``n`` indices in ``[0, n)``.
        Defaults to :func:`sample_with_replacement`.
    random_state : int, Generator, RandomState, SeedSequence or None
        Seed for the replicate generators
    n_jobs : int or None, default=None
        Number of joblib workers (threads). None means sequential.
    check_input : bool, default=True
        Skip validation when False

    Returns
    -------
    samples : ndarray of shape (n_boot, n_eval)
        Row ``b`` holds the estimate of replicate ``b``
    """
    if check_input:
        x, y, x_eval, bandwidth = check_inputs(x, y, x_eval, bandwidth)
        n_boot = check_n_boot(n_boot)

    if sampler is None:
        sampler = sample_with_replacement

    generators = _spawn_generators(random_state, n_boot)

    rows = Parallel(n_jobs=n_jobs, prefer="threads")(
        delayed(_bootstrap_replicate)(x, y, x_eval, bandwidth, sampler, rng)
        for rng in generators
    )

    return np.vstack(rows)


def percentile_interval(
    samples: NDArray[np.floating],
    conf_level: float = 0.95,
) -> BootstrapIntervalResult:
    """
    Equal-tailed percentile interval from a bootstrap sample matrix.

    Picks discrete order statistics of each column (no interpolation
    between neighbours).

    Parameters
    ----------
    samples : ndarray of shape (n_boot, n_eval)
        Bootstrap predictions, one row per replicate
    conf_level : float, default=0.95
        Two-sided confidence level in (0, 1)

    Returns
    -------
    BootstrapIntervalResult
        Lower and upper bounds for each evaluation point
    """
    conf_level = check_confidence_level(conf_level)
    samples = np.asarray(samples, dtype=np.float64)
    if samples.ndim != 2 or samples.shape[0] == 0:
        raise InvalidParameter(
            f"samples must have shape (n_boot, n_eval) with n_boot > 0, "
            f"got {samples.shape}."
        )

    n_boot = samples.shape[0]
    lower_idx, upper_idx = percentile_indices(n_boot, conf_level)
    logger.debug(
        "Percentile interval: n_boot=%d, conf_level=%g, order statistics=(%d, %d)",
        n_boot,
        conf_level,
        lower_idx,
        upper_idx,
    )
    if lower_idx == 0 and upper_idx == n_boot - 1:
        logger.warning(
            "n_boot=%d is too small to resolve a %g interval; "
            "bounds are the bootstrap minimum and maximum.",
            n_boot,
            conf_level,
        )

    sorted_samples = np.sort(samples, axis=0)

    return BootstrapIntervalResult(
        lower=sorted_samples[lower_idx].copy(),
        upper=sorted_samples[upper_idx].copy(),
        confidence_level=conf_level,
        n_boot=n_boot,
        lower_index=lower_idx,
        upper_index=upper_idx,
    )


def bootstrap_interval(
    x: ArrayLike,
    y: ArrayLike,
    x_eval: ArrayLike,
    bandwidth: float,
    n_boot: int,
    conf_level: float = 0.95,
    *,
    sampler: IndexSampler | None = None,
    random_state: RandomState = None,
    n_jobs: int | None = None,
) -> BootstrapIntervalResult:
    """
    Bootstrap percentile confidence interval for the Nadaraya-Watson estimate.

    The pairs (x_i, y_i) are resampled with replacement ``n_boot`` times,
    the kernel estimate is recomputed on each resample, and the bounds at
    each evaluation point are order statistics of the replicates.

    Args:
        x: Predictor values of shape (n_samples,).
        y: Response values of shape (n_samples,).
        x_eval: Evaluation points of shape (n_eval,).
        bandwidth: Gaussian kernel bandwidth, must be positive.
        n_boot: Number of bootstrap replicates, must be positive.
        conf_level: Two-sided confidence level in (0, 1).
        sampler: ``sampler(n, rng)`` returning ``n`` indices in ``[0, n)``.
        random_state: Seed for reproducible resampling.
        n_jobs: Number of joblib worker threads.

    Returns:
        BootstrapIntervalResult with lower and upper bounds.

    Raises:
        DimensionMismatch: If ``x`` and ``y`` differ in length.
        InvalidParameter: If ``bandwidth``, ``n_boot``, ``conf_level`` or
            ``x_eval`` is invalid.

    References:
        Efron, B. and Tibshirani, R. (1993). "An Introduction to the
        Bootstrap." Chapman & Hall, chapter 13.

    Example:
        >>> ci = bootstrap_interval(x, y, x_eval, bandwidth=0.5, n_boot=200)
        >>> print(f"95% CI width: {np.mean(ci.upper - ci.lower):.4f}")
    """
    x, y, x_eval, bandwidth = check_inputs(x, y, x_eval, bandwidth, conf_level)
    n_boot = check_n_boot(n_boot)

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
        n_boot,
        sampler=sampler,
        random_state=random_state,
        n_jobs=n_jobs,
        check_input=False,
    )

    return percentile_interval(samples, conf_level)
