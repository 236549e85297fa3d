"""
MCMC samplers for the primer's two worked examples.

This module contains:
- A Gibbs sampler for the Normal-Inverse-Gamma model (mu, sigma^2)
- A random-walk Metropolis-Hastings sampler on log(theta) for any
  positive-support target

Both are plain functions over in-memory arrays, plus thin sampler classes
that add run configuration (seed, burn-in, thinning, progress printing).
Every random draw goes through the Generator passed in; preconditions are
checked before the first iteration so a bad call never returns a partial
chain.
"""

import math
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from .config import TARGET_ACCEPT_HIGH, TARGET_ACCEPT_LOW
from .data import (
    MCMCConfig,
    NIGHyperparameters,
    SeedLike,
    make_rng,
    validate_n_iterations,
    validate_observations,
)
from .diagnostics import discard_burn_in, effective_sample_size
from .kernels import NUMBA_JIT_ENABLED, sum_sq_dev


# =============================================================================
# Conditional draws (Normal-Inverse-Gamma)
# =============================================================================

def sample_inverse_gamma(shape: float, rate: float, rng: np.random.Generator,
                         size: Optional[int] = None):
    """Draw from InvGamma(shape, rate) as the reciprocal of a Gamma(shape, rate) draw.

    numpy parameterizes Gamma by scale, so rate enters as scale = 1 / rate.
    """
    if shape <= 0.0 or rate <= 0.0:
        raise ValueError("shape and rate must be positive")
    return 1.0 / rng.gamma(shape, 1.0 / rate, size=size)


def mu_conditional_moments(y_bar: float, n: int, sigma2: float,
                           hyper: NIGHyperparameters) -> Tuple[float, float]:
    """Mean and variance of mu | sigma^2, y.

        mu*  = (n * y_bar + m / kappa) / (n + 1 / kappa)
        v*   = sigma^2 / (n + 1 / kappa)
    """
    w = n + hyper.prior_precision_weight
    mu_star = (n * y_bar + hyper.m * hyper.prior_precision_weight) / w
    return float(mu_star), float(sigma2 / w)


def sample_mu_conditional(y_bar: float, n: int, sigma2: float,
                          hyper: NIGHyperparameters, rng: np.random.Generator,
                          size: Optional[int] = None):
    mu_star, v_star = mu_conditional_moments(y_bar, n, sigma2, hyper)
    return rng.normal(mu_star, math.sqrt(v_star), size=size)


def sample_sigma2_conditional(y: np.ndarray, mu: float, hyper: NIGHyperparameters,
                              rng: np.random.Generator) -> float:
    """Draw sigma^2 | mu, y ~ InvGamma(alpha + n/2, beta + 0.5 * sum((y - mu)^2))."""
    a_post = hyper.alpha + 0.5 * y.shape[0]
    b_post = hyper.beta + 0.5 * float(sum_sq_dev(y, float(mu)))
    return float(sample_inverse_gamma(a_post, b_post, rng))


# =============================================================================
# Component A: Gibbs sampler
# =============================================================================

def gibbs_nig(
    y,
    n_iterations: int,
    hyper: NIGHyperparameters,
    rng: SeedLike = None,
    *,
    log_every: int = 0,
) -> Tuple[np.ndarray, np.ndarray]:
    """Sequential-scan Gibbs sampler for (mu, sigma^2).

    The chain starts at the sample mean and unbiased sample variance. Each
    iteration draws mu_t from its conditional given sigma^2_{t-1}, then
    sigma^2_t from its conditional given the new mu_t.

    Args:
        y: Observations (n >= 1)
        n_iterations: Number of draws T
        hyper: Prior hyperparameters
        rng: Generator or seed
        log_every: Print progress every this many iterations (0 = never)

    Returns:
        Tuple of (mu_chain, sigma2_chain), each of length T
    """
    if not isinstance(hyper, NIGHyperparameters):
        raise TypeError("hyper must be an NIGHyperparameters instance")
    y = validate_observations(y)
    n_iterations = validate_n_iterations(n_iterations)
    rng = make_rng(rng)

    n = int(y.size)
    y_bar = float(np.mean(y))
    mu = y_bar
    # One observation has no sample variance; start at the prior mode instead
    sigma2 = float(np.var(y, ddof=1)) if n > 1 else hyper.sigma2_prior_mode()

    mu_chain = np.zeros(n_iterations)
    sigma2_chain = np.zeros(n_iterations)

    for t in range(n_iterations):
        mu = float(sample_mu_conditional(y_bar, n, sigma2, hyper, rng))
        sigma2 = sample_sigma2_conditional(y, mu, hyper, rng)

        mu_chain[t] = mu
        sigma2_chain[t] = sigma2

        if log_every > 0 and (t + 1) % log_every == 0:
            print(f"  Iteration {t+1}/{n_iterations}, "
                  f"mu={mu:.4f}, sigma2={sigma2:.4f}", flush=True)

    return mu_chain, sigma2_chain


# =============================================================================
# Component B: Metropolis-Hastings on the log scale
# =============================================================================

def _log_jacobian(theta: float) -> float:
    # log |d log(theta) / d theta|
    return -math.log(theta)


def _validate_mh_inputs(log_target: Callable[[float], float], step_size: float,
                        theta0: float) -> float:
    if not callable(log_target):
        raise TypeError("log_target must be callable")
    if not (step_size > 0 and np.isfinite(step_size)):
        raise ValueError(f"step_size must be positive and finite, got {step_size}")
    if not (theta0 > 0 and np.isfinite(theta0)):
        raise ValueError(f"theta0 must be strictly positive and finite, got {theta0}")
    log_p0 = float(log_target(float(theta0)))
    if not np.isfinite(log_p0):
        raise ValueError(f"log_target(theta0) must be finite, got {log_p0}")
    return log_p0


def metropolis_hastings(
    log_target: Callable[[float], float],
    step_size: float,
    n_iterations: int,
    theta0: float,
    rng: SeedLike = None,
    *,
    log_every: int = 0,
) -> Tuple[np.ndarray, int]:
    """Random-walk Metropolis-Hastings on log(theta) for a positive-support target.

    Proposals are v ~ N(log(theta), step_size), theta' = exp(v). The walk is
    symmetric in log space, so the acceptance ratio carries the Jacobian of
    the log transform:

        log_r = min(0, [log p(theta') + log J(theta)] - [log p(theta) + log J(theta')])

    with log J(theta) = -log(theta). A rejected proposal records the current
    value again.

    Args:
        log_target: theta -> log density (up to a constant)
        step_size: Proposal standard deviation on the log scale
        n_iterations: Number of draws T
        theta0: Strictly positive starting value
        rng: Generator or seed
        log_every: Print progress every this many iterations (0 = never)

    Returns:
        Tuple of (chain of length T, number of accepted proposals)
    """
    n_iterations = validate_n_iterations(n_iterations)
    log_p = _validate_mh_inputs(log_target, step_size, theta0)
    rng = make_rng(rng)

    theta = float(theta0)
    chain = np.zeros(n_iterations)
    n_accepted = 0

    for t in range(n_iterations):
        v = rng.normal(math.log(theta), step_size)
        u = rng.random()
        theta_prop = math.exp(v) if v < 709.0 else math.inf

        # exp() under/overflow leaves the support; such proposals are rejected
        if 0.0 < theta_prop < math.inf:
            log_p_prop = float(log_target(theta_prop))
            # NaN or infinite log density counts as outside the support
            if math.isfinite(log_p_prop):
                log_ratio = min(
                    0.0,
                    (log_p_prop + _log_jacobian(theta)) - (log_p + _log_jacobian(theta_prop)),
                )
            else:
                log_ratio = -math.inf
            log_u = math.log(u) if u > 0.0 else -math.inf
            if log_ratio > -math.inf and log_ratio >= log_u:
                theta = theta_prop
                log_p = log_p_prop
                n_accepted += 1

        chain[t] = theta

        if log_every > 0 and (t + 1) % log_every == 0:
            print(f"  Iteration {t+1}/{n_iterations}, theta={theta:.4f}, "
                  f"accept={n_accepted / (t + 1):.2f}", flush=True)

    return chain, n_accepted


# =============================================================================
# Sampler classes
# =============================================================================

def _warn_if_jit_disabled():
    if not NUMBA_JIT_ENABLED:
        print("  Note: NUMBA_DISABLE_JIT=1, kernels run as plain Python (slow)", flush=True)


class NIGGibbsSampler:
    """Gibbs sampler for the Normal-Inverse-Gamma model.

    Model:
        y_i | mu, sigma^2 ~ N(mu, sigma^2)
        mu | sigma^2 ~ N(m, kappa * sigma^2)
        sigma^2 ~ InvGamma(alpha, beta)
    """

    def __init__(self, y, hyper: NIGHyperparameters, config: MCMCConfig):
        if not isinstance(hyper, NIGHyperparameters):
            raise TypeError("hyper must be an NIGHyperparameters instance")
        self.y = validate_observations(y)
        self.hyper = hyper
        self.config = config
        self.n = int(self.y.size)

        if self.config.log_every > 0:
            print(f"Gibbs sampler using {self.n} observations, {self.hyper}", flush=True)
            _warn_if_jit_disabled()

    def run_chain(self, rng: SeedLike = None) -> Tuple[np.ndarray, np.ndarray]:
        """Run a single chain.

        Args:
            rng: Generator or seed; defaults to config.seed

        Returns:
            Tuple of (mu_chain, sigma2_chain)
        """
        rng = make_rng(self.config.seed if rng is None else rng)
        return gibbs_nig(
            self.y,
            self.config.n_iterations,
            self.hyper,
            rng,
            log_every=self.config.log_every,
        )

    def run(self, rng: SeedLike = None) -> Dict:
        """Run the chain and apply burn-in and thinning.

        Returns:
            Dictionary with raw chains, kept samples and effective sample sizes
        """
        mu_chain, sigma2_chain = self.run_chain(rng)

        burn = int(self.config.burn_in)
        thin = int(self.config.thinning)
        mu_samples = discard_burn_in(mu_chain, burn, thin)
        sigma2_samples = discard_burn_in(sigma2_chain, burn, thin)

        results = {
            'mu_chain': mu_chain,
            'sigma2_chain': sigma2_chain,
            'mu_samples': mu_samples,
            'sigma2_samples': sigma2_samples,
            'ess_mu': effective_sample_size(mu_samples),
            'ess_sigma2': effective_sample_size(sigma2_samples),
        }

        if self.config.log_every > 0:
            print(f"Gibbs chain complete: kept {mu_samples.size} draws, "
                  f"ESS(mu)={results['ess_mu']:.0f}, "
                  f"ESS(sigma2)={results['ess_sigma2']:.0f}", flush=True)
        return results


class LogScaleMHSampler:
    """Random-walk Metropolis-Hastings on log(theta) with a fixed step size.

    The step size is not adapted; aim for an acceptance rate of roughly
    20-30%. Too small a step gives high acceptance and slow mixing, too large
    a step gives long runs of rejections.
    """

    def __init__(
        self,
        log_target: Callable[[float], float],
        theta0: float,
        step_size: float,
        config: MCMCConfig,
    ):
        _validate_mh_inputs(log_target, step_size, theta0)
        self.log_target = log_target
        self.theta0 = float(theta0)
        self.step_size = float(step_size)
        self.config = config

        if self.config.log_every > 0:
            print(f"MH sampler: theta0={self.theta0:.4f}, step_size={self.step_size}", flush=True)
            _warn_if_jit_disabled()

    def run_chain(self, rng: SeedLike = None) -> Tuple[np.ndarray, int]:
        rng = make_rng(self.config.seed if rng is None else rng)
        return metropolis_hastings(
            self.log_target,
            self.step_size,
            self.config.n_iterations,
            self.theta0,
            rng,
            log_every=self.config.log_every,
        )

    def run(self, rng: SeedLike = None) -> Dict:
        """Run the chain and apply burn-in and thinning.

        Returns:
            Dictionary with the raw chain, kept samples, acceptance rate and ESS
        """
        chain, n_accepted = self.run_chain(rng)
        samples = discard_burn_in(chain, int(self.config.burn_in), int(self.config.thinning))
        accept_rate = n_accepted / float(self.config.n_iterations)

        results = {
            'theta_chain': chain,
            'theta_samples': samples,
            'n_accepted': int(n_accepted),
            'acceptance_rate': float(accept_rate),
            'ess_theta': effective_sample_size(samples),
        }

        if self.config.log_every > 0:
            in_band = TARGET_ACCEPT_LOW <= accept_rate <= TARGET_ACCEPT_HIGH
            print(f"MH chain complete: acceptance={accept_rate:.2f} "
                  f"{'OK' if in_band else 'outside 20-30%, consider retuning step_size'}, "
                  f"ESS={results['ess_theta']:.0f}", flush=True)
        return results
