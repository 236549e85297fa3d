"""
Global configuration for plotting, paths, and constants.

Sampler settings live in the dataclasses of data.py; this module only
holds what is shared by the demos and the plotting code.
"""

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path


def configure_plotting(font_scale: float = 1.1):
    """Plot defaults for trace and posterior panels.

    Long traces get thin lines; saved figures are written at 300 dpi with a
    tight bounding box so the four-panel grids stay readable.
    """
    sns.set_theme(style="whitegrid", context="paper", font_scale=font_scale)
    plt.rcParams.update({
        'savefig.dpi': 300,
        'savefig.bbox': 'tight',
        'lines.linewidth': 0.9,
        'axes.titleweight': 'semibold',
        'axes.formatter.useoffset': False,
        'legend.frameon': True,
        'mathtext.fontset': 'cm',
    })


# Path constants
REPO_ROOT = Path(__file__).resolve().parents[2]
OUTPUTS_DIR = REPO_ROOT / "outputs"
GIBBS_DIR = OUTPUTS_DIR / "gibbs"
MH_DIR = OUTPUTS_DIR / "metropolis_hastings"

# Acceptance-rate band recommended for the log-scale random walk
TARGET_ACCEPT_LOW = 0.20
TARGET_ACCEPT_HIGH = 0.30
