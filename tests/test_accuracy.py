import numpy as np
import pandas as pd
import pytest

from pgmath.utils import (
    Kernel,
    accuracy_dataframe,
    kernel_grid,
    load_config,
    relative_errors,
    sampling_summary,
)


@pytest.fixture
def small_config():
    config = load_config()
    config.accuracy.erfc.num = 101
    config.accuracy.lgamma.num = 101
    config.accuracy.gammaq.shape = [0.3, 2.0, 7.5]
    config.accuracy.gammaq.x = [0.5, 3.0, 20.0]
    config.sampling.draws = 20000
    config.tolerance.erfc = 3e-9
    config.tolerance.lgamma = 2e-9
    return config


def test_kernel_grid_shapes(small_config):
    erfc_grid = kernel_grid(Kernel.ERFC, small_config)
    assert erfc_grid.shape == (101,)
    assert erfc_grid[0] == -6.5
    assert erfc_grid[-1] == 25.0

    lgamma_grid = kernel_grid(Kernel.LGAMMA, small_config)
    assert lgamma_grid.shape == (101,)
    assert np.all(np.diff(np.log(lgamma_grid)) > 0)

    gammaq_grid = kernel_grid(Kernel.GAMMAQ, small_config)
    assert gammaq_grid.shape == (9, 2)
    assert set(gammaq_grid[:, 0]) == {0.3, 2.0, 7.5}
    assert set(gammaq_grid[:, 1]) == {0.5, 3.0, 20.0}


def test_kernel_grid_unknown_spacing(small_config):
    small_config.accuracy.erfc.spacing = "chebyshev"
    with pytest.raises(ValueError, match="spacing"):
        kernel_grid(Kernel.ERFC, small_config)


def test_relative_errors_skip_zero_reference():
    errors = relative_errors(Kernel.ERFC, np.array([0.5, 30.0]))
    assert errors[0] < 1e-8
    assert np.isnan(errors[1])

    # lgamma(1) == 0
    errors = relative_errors(Kernel.LGAMMA, np.array([1.0, 3.5]))
    assert np.isnan(errors[0])
    assert errors[1] < 1e-8


def test_relative_errors_gammaq():
    points = np.array([[2.0, 1.0], [4.2, 3.0], [0.7, 10.0]])
    assert np.all(relative_errors(Kernel.GAMMAQ, points) < 1e-6)
    assert np.all(relative_errors(Kernel.GAMMAQ_UNNORMALIZED, points) < 1e-6)


def test_accuracy_dataframe(small_config):
    report = accuracy_dataframe(small_config)

    assert isinstance(report, pd.DataFrame)
    assert list(report.index) == list(Kernel)
    assert report.index.name == "kernel"
    assert list(report.columns) == [
        "n_points",
        "max_rel_error",
        "mean_rel_error",
        "tolerance",
        "passed",
    ]
    assert report.loc[Kernel.GAMMAQ, "n_points"] == 9
    assert bool(report["passed"].all())
    assert np.all(report["max_rel_error"] >= report["mean_rel_error"])


def test_accuracy_dataframe_warns_on_failure(small_config):
    small_config.tolerance.erfc = 0.0
    with pytest.warns(UserWarning, match="ERFC"):
        report = accuracy_dataframe(small_config)
    assert not report.loc[Kernel.ERFC, "passed"]


def test_sampling_summary(small_config):
    summary = sampling_summary(small_config)

    assert isinstance(summary, pd.Series)
    assert summary["draws"] == 20000
    assert summary["analytic_mean"] == pytest.approx(4.25, rel=1e-9)
    assert summary["min_sample"] > small_config.sampling.truncation
    assert abs(summary["z_score"]) < 5.0
