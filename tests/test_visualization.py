import numpy as np
import pytest

from mcmc_primer import cli
from mcmc_primer.config import configure_plotting
from mcmc_primer.visualization import PosteriorVisualizer


@pytest.fixture
def chains(rng):
    return {
        'mu': rng.normal(2.0, 0.1, size=400),
        'sigma2': 1.0 / rng.gamma(50.0, 1.0 / 75.0, size=400),
    }


def test_plot_diagnostics_writes_file(chains, tmp_path):
    configure_plotting()
    path = tmp_path / "diag.png"
    PosteriorVisualizer.plot_diagnostics(chains, str(path), burn_in=50,
                                         true_values={'mu': 2.0})
    assert path.exists() and path.stat().st_size > 0


def test_plot_diagnostics_rejects_empty(tmp_path):
    with pytest.raises(ValueError):
        PosteriorVisualizer.plot_diagnostics({}, str(tmp_path / "x.png"))


def test_plot_diagnostics_rejects_burn_in_past_chain(chains, tmp_path):
    path = tmp_path / "diag.png"
    with pytest.raises(ValueError, match="burn_in"):
        PosteriorVisualizer.plot_diagnostics(chains, str(path), burn_in=400)
    assert not path.exists()


def test_configure_plotting_sets_save_defaults():
    import matplotlib.pyplot as plt

    configure_plotting()
    assert plt.rcParams["savefig.dpi"] == 300
    assert plt.rcParams["savefig.bbox"] == "tight"


def test_plot_intervals_writes_file(chains, tmp_path):
    path = tmp_path / "intervals.png"
    PosteriorVisualizer.plot_intervals(chains, str(path))
    assert path.exists()
    with pytest.raises(ValueError):
        PosteriorVisualizer.plot_intervals(chains, str(path), inner=0.9, outer=0.5)


def test_plot_posterior_predictive_writes_file(rng, tmp_path):
    y = rng.normal(size=60)
    reps = rng.normal(size=(20, 60))
    path = tmp_path / "ppc.png"
    PosteriorVisualizer.plot_posterior_predictive(y, reps, str(path), n_overlay=10)
    assert path.exists()


def test_gibbs_demo(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "GIBBS_DIR", tmp_path)
    summary, results = cli.gibbs_demo()
    assert list(summary.index) == ['mu', 'sigma2']
    assert abs(summary.loc['mu', 'mean'] - 2.0) < 0.5
    assert results['mu_chain'].shape == (2000,)
    for name in ("summary.csv", "summary.tex", "draws.csv",
                 "gibbs_diagnostics.png", "gibbs_intervals.png", "gibbs_ppc.png"):
        assert (tmp_path / name).exists()


def test_mh_gamma_demo(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "MH_DIR", tmp_path)
    summary, results = cli.mh_gamma_demo()
    assert summary.loc['theta', 'mean'] == pytest.approx(3.0, abs=0.4)
    assert np.all(results['theta_chain'] > 0)
    assert (tmp_path / "mh_diagnostics.png").exists()
