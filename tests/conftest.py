import numpy as np
import pytest

from mcmc_primer.data import NIGHyperparameters, simulate_observations


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def hyper():
    return NIGHyperparameters(alpha=2.0, beta=1.0, m=0.0, kappa=0.5)


@pytest.fixture
def observations():
    # The primer's worked example: 100 draws from N(2, 1.5)
    return simulate_observations(100, 2.0, np.sqrt(1.5), np.random.default_rng(2024))
