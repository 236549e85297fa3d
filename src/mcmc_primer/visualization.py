"""
Publication-quality plotting for MCMC results.

- Per-parameter diagnostics: trace, posterior, autocorrelation, running mean
- Credible-interval plot across parameters
- Posterior predictive overlay against the observed data
"""

from typing import Dict, Mapping, Optional

import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns

from .diagnostics import autocorrelation, discard_burn_in, running_mean


class PosteriorVisualizer:
    """Create diagnostic plots for one or more parameter chains."""

    @staticmethod
    def plot_diagnostics(
        chains: Mapping[str, np.ndarray],
        save_path: str,
        *,
        burn_in: int = 0,
        true_values: Optional[Dict[str, float]] = None,
        max_lag: int = 50,
    ):
        """Four panels per parameter: trace, posterior, autocorrelation, running mean.

        Args:
            chains: Mapping of parameter name -> full chain (including burn-in)
            save_path: Path to save the figure
            burn_in: Iterations shaded on the trace and dropped elsewhere
            true_values: Optional reference values drawn as dashed lines
            max_lag: Largest autocorrelation lag shown
        """
        if not chains:
            raise ValueError("chains must contain at least one parameter")
        true_values = true_values or {}
        kept_draws = {name: discard_burn_in(np.asarray(chain, dtype=float), burn_in)
                      for name, chain in chains.items()}

        n_params = len(chains)
        fig, axes = plt.subplots(nrows=n_params, ncols=4,
                                 figsize=(16, 3.2 * n_params), squeeze=False)
        colors = sns.color_palette("husl", n_params)

        for r, (name, chain) in enumerate(chains.items()):
            chain = np.asarray(chain, dtype=float)
            kept = kept_draws[name]
            tv = true_values.get(name)

            # Trace
            ax = axes[r, 0]
            ax.plot(chain, linewidth=0.8, alpha=0.8, color=colors[r])
            if burn_in > 0:
                ax.axvspan(0, burn_in, color='gray', alpha=0.2, label='Burn-in')
            if tv is not None:
                ax.axhline(tv, color='red', linestyle='--', linewidth=1.3, label='True')
            if burn_in > 0 or tv is not None:
                ax.legend(frameon=True, framealpha=0.9)
            ax.set_title(f'Trace: {name}')
            ax.set_xlabel('Iteration')
            ax.grid(True, alpha=0.3)

            # Posterior
            ax = axes[r, 1]
            sns.histplot(kept, bins=40, stat='density', kde=True, ax=ax,
                         color=colors[r], edgecolor='black', linewidth=0.5)
            ax.axvline(float(np.mean(kept)), color='navy', linestyle='-',
                       linewidth=1.3, label='Mean')
            if tv is not None:
                ax.axvline(tv, color='red', linestyle='--', linewidth=1.3, label='True')
            ax.set_title(f'Posterior: {name}')
            ax.legend(frameon=True, framealpha=0.9)
            ax.grid(True, alpha=0.3, axis='y')

            # Autocorrelation
            ax = axes[r, 2]
            lag = min(max_lag, kept.size - 1)
            acf = autocorrelation(kept, lag)
            ax.bar(np.arange(lag + 1), acf, width=0.8, color=colors[r], alpha=0.8)
            ax.axhline(0, color='black', linestyle='-', linewidth=0.5)
            ax.set_title(f'Autocorrelation: {name}')
            ax.set_xlabel('Lag')
            ax.grid(True, alpha=0.3)

            # Running mean
            ax = axes[r, 3]
            ax.plot(running_mean(kept), linewidth=1.5, color=colors[r])
            if tv is not None:
                ax.axhline(tv, color='red', linestyle='--', linewidth=1.3)
            ax.set_title(f'Running mean: {name}')
            ax.set_xlabel('Iteration (post burn-in)')
            ax.grid(True, alpha=0.3)

        plt.tight_layout()
        plt.savefig(save_path, dpi=300, bbox_inches='tight')
        print(f"Diagnostics saved to {save_path}")
        plt.close(fig)

    @staticmethod
    def plot_intervals(samples: Mapping[str, np.ndarray], save_path: str,
                       *, inner: float = 0.5, outer: float = 0.95):
        """Credible intervals per parameter: thick inner band, thin outer band, median dot."""
        if not 0.0 < inner < outer < 1.0:
            raise ValueError("need 0 < inner < outer < 1")
        names = list(samples)
        fig, ax = plt.subplots(figsize=(8, 1.0 + 0.8 * len(names)))

        for i, name in enumerate(names):
            x = np.asarray(samples[name], dtype=float)
            lo_o, hi_o = np.percentile(x, [50 * (1 - outer), 50 * (1 + outer)])
            lo_i, hi_i = np.percentile(x, [50 * (1 - inner), 50 * (1 + inner)])
            ax.plot([lo_o, hi_o], [i, i], color='steelblue', linewidth=1.5)
            ax.plot([lo_i, hi_i], [i, i], color='steelblue', linewidth=5)
            ax.plot(np.median(x), i, 'o', color='white', markeredgecolor='navy', markersize=7)

        ax.set_yticks(range(len(names)))
        ax.set_yticklabels(names)
        ax.invert_yaxis()
        ax.set_xlabel('Value')
        ax.set_title(f'Posterior intervals ({int(100 * inner)}% / {int(100 * outer)}%)')
        ax.grid(True, alpha=0.3, axis='x')

        plt.tight_layout()
        plt.savefig(save_path, dpi=300, bbox_inches='tight')
        print(f"Interval plot saved to {save_path}")
        plt.close(fig)

    @staticmethod
    def plot_posterior_predictive(y: np.ndarray, replicated: np.ndarray, save_path: str,
                                  *, n_overlay: int = 50):
        """Overlay densities of replicated datasets on the observed data."""
        y = np.asarray(y, dtype=float)
        replicated = np.atleast_2d(np.asarray(replicated, dtype=float))
        n_overlay = min(n_overlay, replicated.shape[0])

        fig, ax = plt.subplots(figsize=(8, 5))
        for row in replicated[:n_overlay]:
            sns.kdeplot(row, ax=ax, color='lightsteelblue', linewidth=0.7, alpha=0.5)
        sns.kdeplot(y, ax=ax, color='navy', linewidth=2.0, label='Observed')
        ax.plot([], [], color='lightsteelblue', label=f'Replicated ({n_overlay})')
        ax.set_xlabel('y')
        ax.set_ylabel('Density')
        ax.set_title('Posterior predictive check')
        ax.legend(frameon=True, framealpha=0.9)
        ax.grid(True, alpha=0.3)

        plt.tight_layout()
        plt.savefig(save_path, dpi=300, bbox_inches='tight')
        print(f"Posterior predictive plot saved to {save_path}")
        plt.close(fig)
