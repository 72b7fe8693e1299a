"""
Nadaraya-Watson Kernel Regression

Gaussian-kernel Nadaraya-Watson regression with a fixed bandwidth and
pairs bootstrap percentile confidence intervals.

Features:
- Vectorized Gaussian-kernel weighted average at arbitrary query points
- Nonparametric pairs bootstrap with injectable index sampler
- Reproducible, thread-parallel replicates (one spawned generator each)
- Equal-tailed percentile intervals from discrete order statistics
- sklearn-compatible estimator
"""

from nadaraya_watson.bootstrap import (
    BootstrapIntervalResult,
    bootstrap_interval,
    bootstrap_predictions,
    percentile_indices,
    percentile_interval,
    sample_with_replacement,
)
from nadaraya_watson.estimators import (
    NadarayaWatson,
    nadaraya_watson,
)
from nadaraya_watson.exceptions import (
    DimensionMismatch,
    InvalidParameter,
    NadarayaWatsonError,
)
from nadaraya_watson.kernels import (
    gaussian_kernel,
    gaussian_kernel_weights,
)
from nadaraya_watson.regression import kernel_estimate

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "nadaraya_watson",
    "NadarayaWatson",
    # Estimation
    "kernel_estimate",
    "gaussian_kernel",
    "gaussian_kernel_weights",
    # Bootstrap
    "bootstrap_interval",
    "bootstrap_predictions",
    "percentile_interval",
    "percentile_indices",
    "sample_with_replacement",
    "BootstrapIntervalResult",
    # Errors
    "NadarayaWatsonError",
    "DimensionMismatch",
    "InvalidParameter",
]
