import numpy as np
import pytest
from scipy import stats

from mcmc_primer.data import MCMCConfig, NIGHyperparameters
from mcmc_primer.samplers import (
    NIGGibbsSampler,
    gibbs_nig,
    mu_conditional_moments,
    sample_inverse_gamma,
    sample_mu_conditional,
    sample_sigma2_conditional,
)


def _reference_chain(y, n_iterations, hyper, seed):
    """Sequential scan written out: mu_t | sigma2_{t-1}, then sigma2_t | mu_t."""
    rng = np.random.default_rng(seed)
    n = y.size
    y_bar = float(np.mean(y))
    sigma2 = float(np.var(y, ddof=1))
    w = n + 1.0 / hyper.kappa
    mus, sigma2s = [], []
    for _ in range(n_iterations):
        mu_star = (n * y_bar + hyper.m * (1.0 / hyper.kappa)) / w
        mu = float(rng.normal(mu_star, np.sqrt(sigma2 / w)))
        ss = 0.0
        for yi in y:
            d = yi - mu
            ss += d * d
        a_post = hyper.alpha + 0.5 * n
        b_post = hyper.beta + 0.5 * ss
        sigma2 = float(1.0 / rng.gamma(a_post, 1.0 / b_post))
        mus.append(mu)
        sigma2s.append(sigma2)
    return np.array(mus), np.array(sigma2s)


def test_matches_sequential_scan_reference(observations, hyper):
    mu, sigma2 = gibbs_nig(observations, 300, hyper, 31)
    mu_ref, sigma2_ref = _reference_chain(observations, 300, hyper, 31)
    np.testing.assert_allclose(mu, mu_ref, rtol=1e-12, atol=0)
    np.testing.assert_allclose(sigma2, sigma2_ref, rtol=1e-12, atol=0)


def test_chain_lengths_match_iterations(observations, hyper, rng):
    mu, sigma2 = gibbs_nig(observations, 250, hyper, rng)
    assert mu.shape == (250,)
    assert sigma2.shape == (250,)


def test_sigma2_draws_strictly_positive(observations, hyper, rng):
    _, sigma2 = gibbs_nig(observations, 2000, hyper, rng)
    assert np.all(sigma2 > 0)
    assert np.all(np.isfinite(sigma2))


def test_fixed_seed_gives_identical_chains(observations, hyper):
    mu_a, s_a = gibbs_nig(observations, 500, hyper, 99)
    mu_b, s_b = gibbs_nig(observations, 500, hyper, np.random.default_rng(99))
    np.testing.assert_array_equal(mu_a, mu_b)
    np.testing.assert_array_equal(s_a, s_b)


def test_different_seeds_give_different_chains(observations, hyper):
    mu_a, _ = gibbs_nig(observations, 50, hyper, 1)
    mu_b, _ = gibbs_nig(observations, 50, hyper, 2)
    assert not np.array_equal(mu_a, mu_b)


def test_observations_not_mutated(observations, hyper, rng):
    before = observations.copy()
    gibbs_nig(observations, 20, hyper, rng)
    np.testing.assert_array_equal(observations, before)


def test_single_observation_does_not_crash(hyper, rng):
    mu, sigma2 = gibbs_nig([1.7], 300, hyper, rng)
    assert np.all(np.isfinite(mu))
    assert np.all(sigma2 > 0)


def test_constant_observations(hyper, rng):
    mu, sigma2 = gibbs_nig(np.full(10, 3.0), 100, hyper, rng)
    assert np.all(np.isfinite(mu))
    assert np.all(sigma2 > 0)


def test_single_iteration(observations, hyper, rng):
    mu, sigma2 = gibbs_nig(observations, 1, hyper, rng)
    assert mu.shape == sigma2.shape == (1,)


@pytest.mark.parametrize("y, n_iterations", [
    ([], 10),
    ([1.0, 2.0], 0),
    ([1.0, 2.0], -3),
    ([1.0, np.nan], 10),
])
def test_preconditions_fail_before_sampling(hyper, y, n_iterations):
    with pytest.raises(ValueError):
        gibbs_nig(y, n_iterations, hyper, 0)


def test_requires_hyperparameter_record(observations):
    with pytest.raises(TypeError):
        gibbs_nig(observations, 10, {"alpha": 2.0, "beta": 1.0, "m": 0.0, "kappa": 0.5})


def test_mu_conditional_moments_formula(hyper):
    mu_star, v_star = mu_conditional_moments(2.0, 10, 1.5, hyper)
    # n + 1/kappa = 12
    assert mu_star == pytest.approx((10 * 2.0 + 0.0 / 0.5) / 12.0)
    assert v_star == pytest.approx(1.5 / 12.0)


def test_mu_conditional_weak_prior_converges_to_sample_mean():
    for kappa in (1e12, np.inf):
        hyper = NIGHyperparameters(alpha=2.0, beta=1.0, m=-50.0, kappa=kappa)
        mu_star, v_star = mu_conditional_moments(3.25, 7, 2.0, hyper)
        assert mu_star == pytest.approx(3.25, abs=1e-9)
        assert v_star == pytest.approx(2.0 / 7)


def test_mu_conditional_matches_analytic_with_sigma2_pinned(hyper, rng):
    y_bar, n, sigma2 = 1.8, 40, 2.3
    mu_star, v_star = mu_conditional_moments(y_bar, n, sigma2, hyper)
    draws = sample_mu_conditional(y_bar, n, sigma2, hyper, rng, size=200000)
    se = np.sqrt(v_star / draws.size)
    assert abs(np.mean(draws) - mu_star) < 5 * se
    assert np.var(draws) == pytest.approx(v_star, rel=0.02)


def test_inverse_gamma_is_reciprocal_gamma_with_rate(rng):
    shape, rate = 6.0, 2.5
    draws = sample_inverse_gamma(shape, rate, rng, size=100000)
    reference = stats.invgamma(a=shape, scale=rate)
    assert np.all(draws > 0)
    assert np.mean(draws) == pytest.approx(reference.mean(), rel=0.02)
    assert np.var(draws) == pytest.approx(reference.var(), rel=0.08)


def test_inverse_gamma_rejects_non_positive(rng):
    with pytest.raises(ValueError):
        sample_inverse_gamma(0.0, 1.0, rng)
    with pytest.raises(ValueError):
        sample_inverse_gamma(1.0, -1.0, rng)


def test_sigma2_conditional_matches_analytic(observations, hyper, rng):
    mu = 2.1
    shape = hyper.alpha + observations.size / 2
    rate = hyper.beta + 0.5 * np.sum((observations - mu) ** 2)
    draws = np.array([sample_sigma2_conditional(observations, mu, hyper, rng)
                      for _ in range(20000)])
    assert np.mean(draws) == pytest.approx(rate / (shape - 1), rel=0.01)


def test_end_to_end_recovers_simulation_truth(observations, hyper):
    mu, sigma2 = gibbs_nig(observations, 2000, hyper, 7)
    n = observations.size

    # Close to the data-generating values
    assert abs(np.mean(mu) - 2.0) < 0.5
    assert abs(np.mean(sigma2) - 1.5) < 0.75

    # And to what this dataset implies under the prior
    expected_mu = n * np.mean(observations) / (n + 1 / hyper.kappa)
    posterior_sd = np.sqrt(np.var(observations, ddof=1) / n)
    assert abs(np.mean(mu) - expected_mu) < 3 * posterior_sd
    expected_sigma2 = (hyper.beta + 0.5 * (n - 1) * np.var(observations, ddof=1)) / (hyper.alpha + n / 2 - 1)
    assert np.mean(sigma2) == pytest.approx(expected_sigma2, rel=0.1)


def test_sampler_class_applies_burn_in_and_thinning(observations, hyper):
    config = MCMCConfig(n_iterations=600, burn_in=100, thinning=5, seed=3)
    results = NIGGibbsSampler(observations, hyper, config).run()

    assert results['mu_chain'].shape == (600,)
    assert results['sigma2_chain'].shape == (600,)
    assert results['mu_samples'].shape == (config.n_kept,)
    np.testing.assert_array_equal(results['mu_samples'], results['mu_chain'][100::5])
    assert results['ess_mu'] > 0
    assert results['ess_sigma2'] > 0


def test_sampler_class_uses_config_seed(observations, hyper):
    config = MCMCConfig(n_iterations=100, seed=12)
    a = NIGGibbsSampler(observations, hyper, config).run_chain()
    b = gibbs_nig(observations, 100, hyper, 12)
    np.testing.assert_array_equal(a[0], b[0])
    np.testing.assert_array_equal(a[1], b[1])


def test_progress_printing(observations, hyper, capsys):
    config = MCMCConfig(n_iterations=20, log_every=10, seed=0)
    NIGGibbsSampler(observations, hyper, config).run()
    out = capsys.readouterr().out
    assert "Iteration 10/20" in out
    assert "Iteration 20/20" in out
