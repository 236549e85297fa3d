"""
Prior and posterior predictive simulation for the Normal model.

Replicated datasets are returned as (n_draws, n_obs) arrays, one row per
parameter draw.
"""

from typing import Callable

import numpy as np

from .data import NIGHyperparameters, SeedLike, make_rng, sample_prior, validate_observations


def _simulate_normal_rows(mu: np.ndarray, sigma2: np.ndarray, n_obs: int,
                          rng: np.random.Generator) -> np.ndarray:
    if n_obs < 1:
        raise ValueError("n_obs must be >= 1")
    mu = np.asarray(mu, dtype=float).ravel()
    sigma2 = np.asarray(sigma2, dtype=float).ravel()
    if mu.shape != sigma2.shape:
        raise ValueError("mu and sigma2 draws must have the same length")
    if mu.size == 0:
        raise ValueError("need at least one parameter draw")
    if np.any(sigma2 <= 0):
        raise ValueError("sigma2 draws must be strictly positive")
    z = rng.standard_normal((mu.size, int(n_obs)))
    return mu[:, None] + np.sqrt(sigma2)[:, None] * z


def prior_predictive(hyper: NIGHyperparameters, n_obs: int, rng: SeedLike = None,
                     n_draws: int = 1000) -> np.ndarray:
    """Simulate datasets from the prior: draw (mu, sigma^2), then y | mu, sigma^2."""
    rng = make_rng(rng)
    mu, sigma2 = sample_prior(hyper, rng, size=n_draws)
    return _simulate_normal_rows(mu, sigma2, n_obs, rng)


def posterior_predictive(mu_samples, sigma2_samples, n_obs: int,
                         rng: SeedLike = None) -> np.ndarray:
    """Simulate one replicated dataset of size n_obs per posterior draw."""
    rng = make_rng(rng)
    return _simulate_normal_rows(mu_samples, sigma2_samples, n_obs, rng)


def predictive_pvalue(y, replicated: np.ndarray,
                      statistic: Callable[[np.ndarray], float] = np.mean) -> float:
    """Bayesian p-value P(T(y_rep) >= T(y)) over the replicated datasets.

    Values near 0 or 1 flag a feature of the data the model does not reproduce.
    """
    y = validate_observations(y)
    replicated = np.atleast_2d(np.asarray(replicated, dtype=float))
    t_obs = float(statistic(y))
    t_rep = np.array([float(statistic(row)) for row in replicated])
    return float(np.mean(t_rep >= t_obs))
