"""
Data classes, random-number handling and data generators.

This module contains:
- Hyperparameters of the Normal-Inverse-Gamma model
- MCMC run configuration (iterations, burn-in, thinning, seed)
- Generator helpers that replace global RNG state
- Observation and prior simulation for the worked examples

Samplers never touch np.random's global state: every draw goes through a
numpy Generator passed in explicitly (or built here from a seed).
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

import numpy as np


SeedLike = Union[None, int, np.random.SeedSequence, np.random.Generator]


# =============================================================================
# Random-number source
# =============================================================================

def make_rng(seed: SeedLike = None) -> np.random.Generator:
    """Return a Generator for `seed`.

    An existing Generator is returned as-is so a caller can thread one
    stream through several calls.
    """
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def spawn_rngs(seed: SeedLike, n: int) -> List[np.random.Generator]:
    """Independent generators for `n` separate chains."""
    if n <= 0:
        raise ValueError("n must be positive")
    if isinstance(seed, np.random.Generator):
        return seed.spawn(n)
    if not isinstance(seed, np.random.SeedSequence):
        seed = np.random.SeedSequence(seed)
    return [np.random.default_rng(s) for s in seed.spawn(n)]


# =============================================================================
# Model and run configuration
# =============================================================================

@dataclass(frozen=True)
class NIGHyperparameters:
    """Normal-Inverse-Gamma prior hyperparameters.

    Model:
        sigma^2 ~ InvGamma(alpha, beta)      (shape / rate)
        mu | sigma^2 ~ N(m, kappa * sigma^2)

    Attributes:
        alpha: Inverse-Gamma shape for sigma^2
        beta: Inverse-Gamma rate for sigma^2
        m: Prior mean of mu
        kappa: Scale factor of the prior variance of mu (inf = flat prior)
    """
    alpha: float = 2.0
    beta: float = 1.0
    m: float = 0.0
    kappa: float = 0.5

    def __post_init__(self):
        if not (self.alpha > 0 and np.isfinite(self.alpha)):
            raise ValueError(f"alpha must be positive and finite, got {self.alpha}")
        if not (self.beta > 0 and np.isfinite(self.beta)):
            raise ValueError(f"beta must be positive and finite, got {self.beta}")
        if not self.kappa > 0:
            raise ValueError(f"kappa must be positive, got {self.kappa}")
        if not np.isfinite(self.m):
            raise ValueError(f"m must be finite, got {self.m}")

    @property
    def prior_precision_weight(self) -> float:
        """1 / kappa, the number of pseudo-observations carried by the prior."""
        return float(1.0 / self.kappa)

    def sigma2_prior_mode(self) -> float:
        return float(self.beta / (self.alpha + 1.0))

    def __repr__(self):
        return (f"NIG(alpha={self.alpha}, beta={self.beta}, "
                f"m={self.m}, kappa={self.kappa})")


@dataclass
class MCMCConfig:
    """Run configuration shared by the Gibbs and Metropolis-Hastings samplers.

    burn_in and thinning only shape the derived `*_samples` arrays; the raw
    chains always keep every iteration.
    """
    n_iterations: int = 2000
    burn_in: int = 0
    thinning: int = 1
    seed: Optional[int] = None

    # Progress printing; 0 disables it
    log_every: int = 0

    def __post_init__(self):
        validate_n_iterations(self.n_iterations)
        if self.burn_in < 0 or self.burn_in >= self.n_iterations:
            raise ValueError(
                f"burn_in must satisfy 0 <= burn_in < n_iterations, got {self.burn_in}"
            )
        if self.thinning < 1:
            raise ValueError(f"thinning must be >= 1, got {self.thinning}")
        if self.log_every < 0:
            raise ValueError("log_every must be non-negative")

    @property
    def n_kept(self) -> int:
        """Number of draws left after burn-in and thinning."""
        return len(range(self.burn_in, self.n_iterations, self.thinning))


def validate_n_iterations(n_iterations: int) -> int:
    if isinstance(n_iterations, bool) or int(n_iterations) != n_iterations:
        raise ValueError(f"n_iterations must be an integer, got {n_iterations!r}")
    if n_iterations < 1:
        raise ValueError(f"n_iterations must be >= 1, got {n_iterations}")
    return int(n_iterations)


def validate_observations(y) -> np.ndarray:
    """Return a private float copy of `y`, rejecting empty or non-finite data."""
    y = np.array(y, dtype=float).ravel()
    if y.size == 0:
        raise ValueError("observation vector must contain at least one value")
    if not np.all(np.isfinite(y)):
        raise ValueError("observation vector must be finite")
    return y


# =============================================================================
# Generators
# =============================================================================

def simulate_observations(n: int, mu: float, sigma: float,
                          rng: SeedLike = None) -> np.ndarray:
    """Draw n i.i.d. observations from N(mu, sigma^2).

    Args:
        n: Number of observations
        mu: Mean
        sigma: Standard deviation (not variance)
        rng: Generator or seed
    """
    if n < 1:
        raise ValueError("n must be >= 1")
    if sigma <= 0:
        raise ValueError("sigma must be positive")
    rng = make_rng(rng)
    return rng.normal(mu, sigma, size=int(n))


def sample_prior(hyper: NIGHyperparameters, rng: SeedLike = None,
                 size: int = 1) -> Tuple[np.ndarray, np.ndarray]:
    """Draw (mu, sigma^2) pairs from the Normal-Inverse-Gamma prior.

    sigma^2 uses the same reciprocal-of-Gamma construction as the sampler.
    """
    if size < 1:
        raise ValueError("size must be >= 1")
    if np.isinf(hyper.kappa):
        raise ValueError("cannot sample mu from a flat prior (kappa = inf)")
    rng = make_rng(rng)
    sigma2 = 1.0 / rng.gamma(hyper.alpha, 1.0 / hyper.beta, size=int(size))
    mu = rng.normal(hyper.m, np.sqrt(hyper.kappa * sigma2))
    return mu, sigma2
