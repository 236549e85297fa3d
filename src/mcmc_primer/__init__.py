"""
MCMC Primer: Gibbs and Metropolis-Hastings Sampling

Reference implementations of the samplers used to teach Markov Chain
Monte Carlo, with the Normal-Inverse-Gamma model as the running example.

Modules live under src/mcmc_primer/:
- data.py: Hyperparameters, run configuration, RNG handling, simulators
- samplers.py: Gibbs and log-scale Metropolis-Hastings samplers
- targets.py: Log-density targets for Metropolis-Hastings
- diagnostics.py: Autocorrelation, ESS, R-hat, running mean
- predictive.py: Prior and posterior predictive simulation
- analysis.py: Posterior summary tables and metrics
- visualization.py: Diagnostic plotting
- cli.py: Command-line entry points
- config.py: Configuration and path constants
- kernels.py: Numba kernels
"""

from .data import (
    NIGHyperparameters,
    MCMCConfig,
    make_rng,
    spawn_rngs,
    simulate_observations,
    sample_prior,
)

from .samplers import (
    gibbs_nig,
    metropolis_hastings,
    sample_inverse_gamma,
    NIGGibbsSampler,
    LogScaleMHSampler,
)

from .targets import (
    gamma_log_target,
    inverse_gamma_log_target,
    sigma2_conditional_log_target,
)

from .diagnostics import (
    autocorrelation,
    effective_sample_size,
    gelman_rubin,
    running_mean,
    acceptance_rate,
    discard_burn_in,
)

from .predictive import prior_predictive, posterior_predictive, predictive_pvalue

from .analysis import PosteriorAnalyzer, posterior_summary, summary_to_latex

from .visualization import PosteriorVisualizer

from .config import configure_plotting

__version__ = "0.1.0"

__all__ = [
    # Data and configuration
    "NIGHyperparameters",
    "MCMCConfig",
    "make_rng",
    "spawn_rngs",
    "simulate_observations",
    "sample_prior",
    # Samplers
    "gibbs_nig",
    "metropolis_hastings",
    "sample_inverse_gamma",
    "NIGGibbsSampler",
    "LogScaleMHSampler",
    # Targets
    "gamma_log_target",
    "inverse_gamma_log_target",
    "sigma2_conditional_log_target",
    # Diagnostics
    "autocorrelation",
    "effective_sample_size",
    "gelman_rubin",
    "running_mean",
    "acceptance_rate",
    "discard_burn_in",
    # Predictive checks
    "prior_predictive",
    "posterior_predictive",
    "predictive_pvalue",
    # Analysis
    "PosteriorAnalyzer",
    "posterior_summary",
    "summary_to_latex",
    # Visualization
    "PosteriorVisualizer",
    # Config
    "configure_plotting",
]
