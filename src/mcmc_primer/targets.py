"""
Log-density targets for the Metropolis-Hastings sampler.

Each factory validates its parameters once and returns a plain callable
theta -> log p(theta) (up to a constant), the interface expected by
`metropolis_hastings`.
"""

from typing import Callable, Tuple

import numpy as np
from scipy import stats

from .data import NIGHyperparameters, validate_observations
from .kernels import gamma_logpdf, inv_gamma_logpdf, sum_sq_dev


LogTarget = Callable[[float], float]


def _check_shape_rate(shape: float, rate: float) -> None:
    if not (shape > 0 and np.isfinite(shape)):
        raise ValueError(f"shape must be positive and finite, got {shape}")
    if not (rate > 0 and np.isfinite(rate)):
        raise ValueError(f"rate must be positive and finite, got {rate}")


def gamma_log_target(shape: float, rate: float) -> LogTarget:
    """log Gamma(shape, rate) density; mean shape/rate, variance shape/rate^2."""
    _check_shape_rate(shape, rate)
    shape = float(shape)
    rate = float(rate)

    def log_target(theta: float) -> float:
        return float(gamma_logpdf(float(theta), shape, rate))

    return log_target


def inverse_gamma_log_target(shape: float, rate: float) -> LogTarget:
    """log InvGamma(shape, rate) density; mean rate/(shape-1) for shape > 1."""
    _check_shape_rate(shape, rate)
    shape = float(shape)
    rate = float(rate)

    def log_target(theta: float) -> float:
        return float(inv_gamma_logpdf(float(theta), shape, rate))

    return log_target


def sigma2_conditional_params(y, mu: float,
                              hyper: NIGHyperparameters) -> Tuple[float, float]:
    """(shape, rate) of sigma^2 | mu, y ~ InvGamma(alpha + n/2, beta + 0.5 * sum((y - mu)^2))."""
    y = validate_observations(y)
    shape = hyper.alpha + 0.5 * y.size
    rate = hyper.beta + 0.5 * float(sum_sq_dev(y, float(mu)))
    return float(shape), float(rate)


def sigma2_conditional_log_target(y, mu: float,
                                  hyper: NIGHyperparameters) -> LogTarget:
    """Full conditional of sigma^2 given mu, as used by the Gibbs sampler.

    Sampling it with Metropolis-Hastings must agree with the exact Gibbs draw.
    """
    return inverse_gamma_log_target(*sigma2_conditional_params(y, mu, hyper))


# scipy parameterizes both families by scale: Gamma scale = 1/rate,
# InvGamma scale = rate.

def gamma_distribution(shape: float, rate: float):
    """Frozen scipy Gamma(shape, rate) for reference moments and densities."""
    _check_shape_rate(shape, rate)
    return stats.gamma(a=float(shape), scale=1.0 / float(rate))


def inverse_gamma_distribution(shape: float, rate: float):
    """Frozen scipy InvGamma(shape, rate) for reference moments and densities."""
    _check_shape_rate(shape, rate)
    return stats.invgamma(a=float(shape), scale=float(rate))
