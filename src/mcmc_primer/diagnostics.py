"""
Convergence diagnostics for single-parameter chains.

- Autocorrelation and effective sample size (Geyer initial positive sequence)
- Gelman-Rubin R-hat across independently run chains
- Running mean, acceptance rate, burn-in / thinning
"""

from typing import List, Optional, Sequence

import numpy as np

from .kernels import autocorr_kernel


def _as_chain(x) -> np.ndarray:
    x = np.ascontiguousarray(np.asarray(x, dtype=float).ravel())
    if x.size == 0:
        raise ValueError("chain must contain at least one draw")
    return x


def discard_burn_in(chain, burn_in: int = 0, thinning: int = 1) -> np.ndarray:
    """Drop the first `burn_in` draws and keep every `thinning`-th one after."""
    chain = np.asarray(chain)
    if burn_in < 0 or burn_in >= chain.shape[0]:
        raise ValueError(
            f"burn_in must satisfy 0 <= burn_in < len(chain), got {burn_in}"
        )
    if thinning < 1:
        raise ValueError("thinning must be >= 1")
    return chain[burn_in::thinning]


def autocorrelation(x, max_lag: Optional[int] = None) -> np.ndarray:
    """Sample autocorrelation rho_0..rho_max_lag (rho_0 = 1).

    Args:
        x: 1-D chain
        max_lag: Largest lag; defaults to min(100, len(x) - 1)

    Returns:
        Array of length max_lag + 1
    """
    x = _as_chain(x)
    n = x.size
    if max_lag is None:
        max_lag = min(100, n - 1)
    if max_lag < 0 or max_lag >= n:
        raise ValueError(f"max_lag must be in [0, {n - 1}], got {max_lag}")
    return autocorr_kernel(x, int(max_lag))


def effective_sample_size(x) -> float:
    """Effective sample size n / tau with Geyer's initial positive sequence.

    tau = -1 + 2 * sum_k (rho_2k + rho_2k+1), summed while the pair sums stay
    positive. A constant chain carries no information beyond one draw.
    """
    x = _as_chain(x)
    n = x.size
    if n < 4:
        return float(n)
    if np.ptp(x) == 0.0:
        return 1.0

    max_lag = min(n - 1, max(100, n // 2))
    rho = autocorr_kernel(x, int(max_lag))

    tau = -1.0
    for k in range(0, max_lag - 1, 2):
        pair = rho[k] + rho[k + 1]
        if pair <= 0.0:
            break
        tau += 2.0 * pair
    tau = max(tau, 1.0 / n)
    return float(n / tau)


def gelman_rubin(chains: Sequence[np.ndarray]) -> float:
    """Gelman-Rubin R-hat for independently run chains of one parameter.

    Chains are truncated to the shortest length. Values < 1.1 are the usual
    convergence threshold. Returns NaN when R-hat is undefined (fewer than
    two chains, fewer than two draws, or zero within-chain variance).
    """
    chains: List[np.ndarray] = [_as_chain(c) for c in chains]
    m = len(chains)
    if m < 2:
        return float("nan")
    n = min(c.size for c in chains)
    if n < 2:
        return float("nan")

    xs = np.stack([c[:n] for c in chains], axis=0)  # (m, n)
    chain_means = xs.mean(axis=1)
    B = n * np.var(chain_means, ddof=1)
    W = float(np.mean(xs.var(axis=1, ddof=1)))
    if W <= 0.0:
        return float("nan")

    var_plus = ((n - 1) / n) * W + (1 / n) * B
    return float(np.sqrt(var_plus / W))


def running_mean(x) -> np.ndarray:
    x = _as_chain(x)
    return np.cumsum(x) / np.arange(1, x.size + 1)


def acceptance_rate(chain) -> float:
    """Fraction of transitions where the chain moved.

    For a Metropolis-Hastings chain this is the empirical acceptance rate
    (an accepted proposal equal to the current value is not distinguishable).
    """
    chain = _as_chain(chain)
    if chain.size < 2:
        return float("nan")
    return float(np.mean(chain[1:] != chain[:-1]))
