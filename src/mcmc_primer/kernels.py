"""Numba-accelerated kernels for the samplers and diagnostics.

These are the pieces evaluated once per iteration (or per lag) in a tight
Python loop:
- The sufficient statistic sum((y - mu)^2) for the sigma^2 update.
- Gamma and Inverse-Gamma log densities (shape / rate) for MH targets.
- Sample autocorrelation up to a maximum lag.

None of the kernels draw random numbers, so compiled and interpreted runs
produce identical chains for a given Generator.
"""

from __future__ import annotations

import math

import numpy as np
from numba import config as numba_config
from numba import njit


NUMBA_JIT_ENABLED = not bool(getattr(numba_config, "DISABLE_JIT", 0))


@njit(cache=True)
def sum_sq_dev(y: np.ndarray, mu: float) -> float:
    total = 0.0
    for i in range(y.shape[0]):
        d = y[i] - mu
        total += d * d
    return total


@njit(cache=True)
def gamma_logpdf(x: float, shape: float, rate: float) -> float:
    """log Gamma(x | shape, rate); -inf outside the support."""
    if x <= 0.0 or not math.isfinite(x):
        return -math.inf
    return (shape * math.log(rate) - math.lgamma(shape)
            + (shape - 1.0) * math.log(x) - rate * x)


@njit(cache=True)
def inv_gamma_logpdf(x: float, shape: float, rate: float) -> float:
    """log InvGamma(x | shape, rate); -inf outside the support."""
    if x <= 0.0 or not math.isfinite(x):
        return -math.inf
    return (shape * math.log(rate) - math.lgamma(shape)
            - (shape + 1.0) * math.log(x) - rate / x)


@njit(cache=True)
def autocorr_kernel(x: np.ndarray, max_lag: int) -> np.ndarray:
    """rho_k = c_k / c_0 with the biased (1/n) autocovariance, k = 0..max_lag."""
    n = x.shape[0]
    out = np.zeros(max_lag + 1)
    mean = 0.0
    for i in range(n):
        mean += x[i]
    mean /= n

    c0 = 0.0
    for i in range(n):
        d = x[i] - mean
        c0 += d * d
    if c0 == 0.0:
        # Constant chain: define rho_0 = 1, the rest 0
        out[0] = 1.0
        return out

    for k in range(max_lag + 1):
        ck = 0.0
        for i in range(n - k):
            ck += (x[i] - mean) * (x[i + k] - mean)
        out[k] = ck / c0
    return out
