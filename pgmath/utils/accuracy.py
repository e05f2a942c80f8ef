from __future__ import annotations

import math
import warnings
from enum import Enum
from typing import Optional

import numba as nb  # type: ignore
import numpy as np
import numpy.typing as npt
import pandas as pd  # type: ignore
import scipy.special as sc  # type: ignore
from dotmap import DotMap

from pgmath.sampling import TruncatedGamma, TruncatedGammaParams, random_left_bounded_gamma
from pgmath.special import erfc, incomplete_gamma_q, lgamma
from pgmath.utils.config import load_config

__all__ = [
    "Kernel",
    "kernel_grid",
    "relative_errors",
    "accuracy_dataframe",
    "sampling_summary",
]


class Kernel(Enum):
    ERFC = 0
    LGAMMA = 1
    GAMMAQ = 2  # normalized, Q(p, x)
    GAMMAQ_UNNORMALIZED = 3  # Gamma(p, x)

    @property
    def config_key(self) -> str:
        return self.name.lower()


def kernel_grid(kernel: Kernel, config: Optional[DotMap] = None) -> npt.NDArray[np.float64]:
    """
    Evaluation points of a kernel as described by `config.accuracy`.

    Returns
    -------
    points : npt.NDArray[np.float64]
        1D array of arguments for ERFC and LGAMMA.
        (n, 2) array of (p, x) pairs for GAMMAQ and GAMMAQ_UNNORMALIZED.
    """
    if config is None:
        config = load_config()

    if kernel in (Kernel.GAMMAQ, Kernel.GAMMAQ_UNNORMALIZED):
        section = config.accuracy.gammaq
        p, x = np.meshgrid(
            np.asarray(section.shape, dtype=np.float64),
            np.asarray(section.x, dtype=np.float64),
            indexing="ij",
        )
        return np.column_stack((p.ravel(), x.ravel()))

    section = config.accuracy[kernel.config_key]
    if section.spacing == "log":
        return np.geomspace(section.start, section.stop, int(section.num))
    elif section.spacing == "linear":
        return np.linspace(section.start, section.stop, int(section.num))
    else:
        raise ValueError(f"Unknown grid spacing: {section.spacing}")


def relative_errors(kernel: Kernel, points: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """
    Relative error of a kernel against its scipy.special counterpart.

    Parameters
    ----------
    kernel : Kernel
        Which kernel to check.
    points : npt.NDArray[np.float64]
        Arguments in the layout returned by `kernel_grid`.

    Returns
    -------
    errors : npt.NDArray[np.float64]
        |ours - reference| / |reference|. np.nan where the reference is zero
        or not finite.
    """
    points = np.asarray(points, dtype=np.float64)

    if kernel == Kernel.ERFC:
        ours = np.array([erfc(x) for x in points])
        reference = sc.erfc(points)
    elif kernel == Kernel.LGAMMA:
        ours = np.array([lgamma(z) for z in points])
        reference = sc.gammaln(points)
    elif kernel == Kernel.GAMMAQ:
        ours = np.array([incomplete_gamma_q(p, x, True) for p, x in points])
        reference = sc.gammaincc(points[:, 0], points[:, 1])
    elif kernel == Kernel.GAMMAQ_UNNORMALIZED:
        ours = np.array([incomplete_gamma_q(p, x, False) for p, x in points])
        reference = sc.gammaincc(points[:, 0], points[:, 1]) * sc.gamma(points[:, 0])
    else:
        raise ValueError(f"Unknown kernel: {kernel}")

    valid = np.isfinite(reference) & (reference != 0)
    errors = np.full(ours.shape, np.nan, dtype=np.float64)
    errors[valid] = np.abs(ours[valid] - reference[valid]) / np.abs(reference[valid])
    return errors


def accuracy_dataframe(config: Optional[DotMap] = None) -> pd.DataFrame:
    """
    Summarise the relative error of every kernel over its configured grid.

    Returns
    -------
    report : pd.DataFrame
        Indexed by `Kernel`, with columns n_points, max_rel_error,
        mean_rel_error, tolerance and passed.
    """
    if config is None:
        config = load_config()

    rows = []
    for kernel in Kernel:
        errors = relative_errors(kernel, kernel_grid(kernel, config))
        errors = errors[~np.isnan(errors)]
        tolerance = float(config.tolerance[kernel.config_key])

        if errors.size == 0:
            max_err, mean_err = np.nan, np.nan
        else:
            max_err, mean_err = float(errors.max()), float(errors.mean())

        passed = bool(max_err <= tolerance)
        if not passed:
            warnings.warn(
                f"{kernel.name} relative error {max_err:.3e} exceeds tolerance {tolerance:.1e}"
            )
        rows.append((errors.size, max_err, mean_err, tolerance, passed))

    report = pd.DataFrame(
        rows,
        columns=["n_points", "max_rel_error", "mean_rel_error", "tolerance", "passed"],
        index=[kernel for kernel in Kernel],
    )
    report.index.name = "kernel"
    return report


def sampling_summary(config: Optional[DotMap] = None) -> pd.Series:
    """
    Compare the empirical mean of the truncated gamma sampler with the analytic
    mean of the truncated distribution.

    Returns
    -------
    summary : pd.Series
        draws, empirical_mean, analytic_mean, std_error, z_score and min_sample.
    """
    if config is None:
        config = load_config()

    section = config.sampling
    params = TruncatedGammaParams(
        shape=float(section.shape),
        rate=float(section.rate),
        truncation=float(section.truncation),
    )
    dist = TruncatedGamma(params=params, rng=np.random.default_rng(section.seed))
    draws = _draw_many(dist.rng, *params.unpack(), int(section.draws))

    empirical_mean = float(draws.mean())
    std_error = float(draws.std(ddof=1)) / math.sqrt(draws.size)
    analytic_mean = dist.mean()

    return pd.Series(
        {
            "draws": draws.size,
            "empirical_mean": empirical_mean,
            "analytic_mean": analytic_mean,
            "std_error": std_error,
            "z_score": (empirical_mean - analytic_mean) / std_error,
            "min_sample": float(draws.min()),
        }
    )


@nb.njit()
def _draw_many(
    rng: np.random.Generator, a: float, b: float, t: float, n: int
) -> npt.NDArray[np.float64]:
    out = np.empty(n, dtype=np.float64)
    for i in range(n):
        out[i] = random_left_bounded_gamma(rng, a, b, t)
    return out
