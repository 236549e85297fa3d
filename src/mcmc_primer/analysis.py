"""
Posterior summaries and results analysis.

This module turns draw sequences into the tables reported for each
example: mean, standard deviation and 2.5/50/97.5% quantiles per
parameter, with CSV and LaTeX export, plus simulation-study metrics
against a known true value.
"""

from pathlib import Path
from typing import Dict, Mapping, Optional, Union

import numpy as np
import pandas as pd

from .diagnostics import effective_sample_size


SUMMARY_COLUMNS = ["mean", "sd", "2.5%", "50%", "97.5%", "ess"]


def summarize_samples(x: np.ndarray) -> Dict[str, float]:
    x = np.asarray(x, dtype=float).ravel()
    if x.size == 0:
        return {c: np.nan for c in SUMMARY_COLUMNS}
    q025, q50, q975 = np.percentile(x, [2.5, 50, 97.5])
    return {
        "mean": float(np.mean(x)),
        "sd": float(np.std(x, ddof=1)) if x.size > 1 else 0.0,
        "2.5%": float(q025),
        "50%": float(q50),
        "97.5%": float(q975),
        "ess": effective_sample_size(x),
    }


def posterior_summary(draws: Mapping[str, np.ndarray]) -> pd.DataFrame:
    """Summary table with one row per parameter.

    Args:
        draws: Mapping of parameter name -> 1-D draw sequence

    Returns:
        DataFrame indexed by parameter with columns mean, sd, 2.5%, 50%, 97.5%, ess
    """
    if not draws:
        raise ValueError("draws must contain at least one parameter")
    rows = {name: summarize_samples(x) for name, x in draws.items()}
    df = pd.DataFrame.from_dict(rows, orient="index", columns=SUMMARY_COLUMNS)
    df.index.name = "parameter"
    return df


def summary_to_latex(summary: pd.DataFrame, save_path: Optional[Union[str, Path]] = None,
                     *, caption: Optional[str] = None, label: Optional[str] = None,
                     float_format: str = "%.3f") -> str:
    """Render a summary table as a LaTeX tabular (and optionally write it)."""
    latex = summary.to_latex(
        float_format=float_format,
        caption=caption,
        label=label,
        escape=True,
    )
    if save_path is not None:
        Path(save_path).write_text(latex, encoding="utf-8")
    return latex


def draws_to_frame(draws: Mapping[str, np.ndarray]) -> pd.DataFrame:
    """One column per parameter, one row per iteration."""
    lengths = {len(np.asarray(v)) for v in draws.values()}
    if len(lengths) != 1:
        raise ValueError("all draw sequences must have the same length")
    df = pd.DataFrame({k: np.asarray(v, dtype=float) for k, v in draws.items()})
    df.index.name = "iteration"
    return df


def draws_to_csv(draws: Mapping[str, np.ndarray], save_path: Union[str, Path]) -> None:
    draws_to_frame(draws).to_csv(save_path)


def compute_parameter_metrics(samples: np.ndarray, true_value: float) -> Dict:
    """Compute standard metrics for a single parameter.

    Args:
        samples: Posterior samples
        true_value: True parameter value

    Returns:
        Dictionary with estimate, bias, RMSE, CI, coverage
    """
    samples = np.asarray(samples, dtype=float)
    estimate = np.mean(samples)
    ci_lower, ci_upper = np.percentile(samples, [2.5, 97.5])
    return {
        'estimate': float(estimate),
        'median': float(np.median(samples)),
        'bias': float(estimate - true_value),
        'rmse': float(np.sqrt(np.mean((samples - true_value) ** 2))),
        'posterior_sd': float(np.std(samples)),
        'ci_lower': float(ci_lower),
        'ci_upper': float(ci_upper),
        'ci_width': float(ci_upper - ci_lower),
        'coverage': bool(ci_lower <= true_value <= ci_upper),
    }


class PosteriorAnalyzer:
    """Summarize sampler output, optionally against known true values."""

    def __init__(self, draws: Mapping[str, np.ndarray],
                 true_values: Optional[Mapping[str, float]] = None):
        """Initialize analyzer.

        Args:
            draws: Mapping of parameter name -> kept samples
            true_values: Optional mapping of parameter name -> true value
        """
        self.draws = dict(draws)
        self.true_values = dict(true_values or {})
        unknown = set(self.true_values) - set(self.draws)
        if unknown:
            raise ValueError(f"true values given for unknown parameters: {sorted(unknown)}")

    def summary(self) -> pd.DataFrame:
        return posterior_summary(self.draws)

    def compute_metrics(self) -> Dict[str, Dict]:
        return {
            name: compute_parameter_metrics(self.draws[name], tv)
            for name, tv in self.true_values.items()
        }

    def print_summary(self, title: str = "POSTERIOR SUMMARY"):
        """Print formatted summary."""
        summary = self.summary()
        print("\n" + "=" * 60)
        print(title)
        print("=" * 60)
        print(summary.to_string(float_format=lambda v: f"{v:.4f}"))

        metrics = self.compute_metrics()
        for name, m in metrics.items():
            print(f"\n{name}: true={self.true_values[name]:.4f}, "
                  f"est={m['estimate']:.4f}, bias={m['bias']:+.4f}, "
                  f"95% CI=[{m['ci_lower']:.4f}, {m['ci_upper']:.4f}], "
                  f"coverage={m['coverage']}")
        print("=" * 60 + "\n")
