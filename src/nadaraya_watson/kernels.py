"""
Gaussian kernel used by the Nadaraya-Watson estimator.

The kernel is normalized and supports vectorized operations.
"""

import numpy as np
from numpy.typing import NDArray


def gaussian_kernel(u: NDArray[np.floating]) -> NDArray[np.floating]:
    """
    Gaussian (normal) kernel.

    K(u) = (1/sqrt(2*pi)) * exp(-0.5 * u^2)

    Parameters
    ----------
    u : ndarray
        Scaled distances (x_i - x) / h

    Returns
    -------
    ndarray
        Kernel weights
    """
    return np.exp(-0.5 * u**2) / np.sqrt(2 * np.pi)


def gaussian_kernel_weights(
    x_eval: NDArray[np.floating],
    x: NDArray[np.floating],
    bandwidth: float,
) -> NDArray[np.floating]:
    """
    Compute Gaussian kernel weights between evaluation and sample points.

    w_ij = (1 / (h * sqrt(2*pi))) * exp(-0.5 * ((x_i - x_eval_j) / h)^2)

    No truncation is applied: every sample point gets a weight for every
    evaluation point, and weights far from the bandwidth underflow to 0.

    Parameters
    ----------
    x_eval : ndarray of shape (n_eval,)
        Evaluation points
    x : ndarray of shape (n_samples,)
        Sample points
    bandwidth : float
        Kernel bandwidth h > 0

    Returns
    -------
    ndarray of shape (n_eval, n_samples)
        Kernel weight of each sample point at each evaluation point
    """
    x_eval = np.asarray(x_eval, dtype=np.float64)
    x = np.asarray(x, dtype=np.float64)

    # (n_eval, n_samples)
    scaled = (x[np.newaxis, :] - x_eval[:, np.newaxis]) / bandwidth

    return gaussian_kernel(scaled) / bandwidth
