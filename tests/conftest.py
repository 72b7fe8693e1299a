"""Pytest fixtures for Nadaraya-Watson tests."""

import numpy as np
import pytest


@pytest.fixture
def random_state():
    """Fixed random state for reproducibility."""
    return np.random.RandomState(42)


@pytest.fixture
def sine_data(random_state):
    """Noisy sine curve, sorted predictors."""
    n = 100
    x = np.sort(random_state.uniform(0, 10, n))
    y = np.sin(x) + 0.2 * random_state.randn(n)
    return x, y


@pytest.fixture
def x_eval():
    """Evaluation grid inside the data range."""
    return np.linspace(0.5, 9.5, 25)


@pytest.fixture
def linear_data():
    """Five points on the identity line."""
    x = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
    return x, x.copy()
