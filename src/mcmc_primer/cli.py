"""
Command-line interface entry points.

These functions are registered as console scripts in pyproject.toml.
Usage after installing the package:
    nig-gibbs-demo
    mh-gamma-demo
"""

import numpy as np

from .config import configure_plotting, GIBBS_DIR, MH_DIR
from .data import MCMCConfig, NIGHyperparameters, make_rng, simulate_observations
from .samplers import NIGGibbsSampler, LogScaleMHSampler
from .targets import gamma_distribution, gamma_log_target
from .analysis import PosteriorAnalyzer, draws_to_csv, summary_to_latex
from .predictive import posterior_predictive, predictive_pvalue
from .visualization import PosteriorVisualizer


def gibbs_demo():
    """Gibbs sampler on simulated Normal data with a Normal-Inverse-Gamma prior."""
    configure_plotting()
    rng = make_rng(42)

    print("\n" + "="*70)
    print("GIBBS SAMPLER: NORMAL-INVERSE-GAMMA MODEL")
    print("="*70)

    GIBBS_DIR.mkdir(parents=True, exist_ok=True)

    true_mu, true_sigma2 = 2.0, 1.5
    y = simulate_observations(100, true_mu, np.sqrt(true_sigma2), rng)
    hyper = NIGHyperparameters(alpha=2.0, beta=1.0, m=0.0, kappa=0.5)
    config = MCMCConfig(n_iterations=2000, burn_in=200, thinning=1, log_every=500)

    print(f"\nData: n={y.size}, mean={np.mean(y):.4f}, var={np.var(y, ddof=1):.4f}")
    print(f"Prior: {hyper}")

    sampler = NIGGibbsSampler(y, hyper, config)
    results = sampler.run(rng)

    draws = {'mu': results['mu_samples'], 'sigma2': results['sigma2_samples']}
    analyzer = PosteriorAnalyzer(draws, true_values={'mu': true_mu, 'sigma2': true_sigma2})
    analyzer.print_summary("GIBBS POSTERIOR SUMMARY")

    summary = analyzer.summary()
    summary.to_csv(GIBBS_DIR / "summary.csv")
    summary_to_latex(summary, GIBBS_DIR / "summary.tex",
                     caption="Posterior summary, Normal-Inverse-Gamma model",
                     label="tab:nig-gibbs")
    draws_to_csv({'mu': results['mu_chain'], 'sigma2': results['sigma2_chain']},
                 GIBBS_DIR / "draws.csv")

    replicated = posterior_predictive(draws['mu'], draws['sigma2'], y.size, rng)
    print(f"Posterior predictive p-value (sd): "
          f"{predictive_pvalue(y, replicated, lambda a: np.std(a, ddof=1)):.3f}")

    print("\nGenerating plots...")
    PosteriorVisualizer.plot_diagnostics(
        {'mu': results['mu_chain'], 'sigma2': results['sigma2_chain']},
        str(GIBBS_DIR / "gibbs_diagnostics.png"),
        burn_in=config.burn_in,
        true_values={'mu': true_mu, 'sigma2': true_sigma2},
    )
    PosteriorVisualizer.plot_intervals(draws, str(GIBBS_DIR / "gibbs_intervals.png"))
    PosteriorVisualizer.plot_posterior_predictive(
        y, replicated, str(GIBBS_DIR / "gibbs_ppc.png")
    )

    print("\nGibbs demo complete!")
    return summary, results


def mh_gamma_demo():
    """Log-scale Metropolis-Hastings against a Gamma(3, 1) target."""
    configure_plotting()
    rng = make_rng(123)

    print("\n" + "="*70)
    print("METROPOLIS-HASTINGS: GAMMA(3, 1) TARGET")
    print("="*70)

    MH_DIR.mkdir(parents=True, exist_ok=True)

    shape, rate = 3.0, 1.0
    theta0 = float(rng.gamma(shape, 1.0 / rate))
    config = MCMCConfig(n_iterations=10000, burn_in=1000, thinning=1, log_every=2500)

    sampler = LogScaleMHSampler(gamma_log_target(shape, rate), theta0,
                                step_size=2.5, config=config)
    results = sampler.run(rng)

    draws = {'theta': results['theta_samples']}
    analyzer = PosteriorAnalyzer(draws, true_values={'theta': shape / rate})
    analyzer.print_summary("MH POSTERIOR SUMMARY")
    reference = gamma_distribution(shape, rate)
    print(f"Acceptance rate: {results['acceptance_rate']:.3f}")
    print(f"Sample variance: {np.var(results['theta_samples'], ddof=1):.4f} "
          f"(target {reference.var():.4f})")

    summary = analyzer.summary()
    summary.to_csv(MH_DIR / "summary.csv")
    summary_to_latex(summary, MH_DIR / "summary.tex",
                     caption="Metropolis-Hastings draws, Gamma(3, 1) target",
                     label="tab:mh-gamma")

    print("\nGenerating plots...")
    PosteriorVisualizer.plot_diagnostics(
        {'theta': results['theta_chain']},
        str(MH_DIR / "mh_diagnostics.png"),
        burn_in=config.burn_in,
        true_values={'theta': shape / rate},
    )

    print("\nMetropolis-Hastings demo complete!")
    return summary, results
