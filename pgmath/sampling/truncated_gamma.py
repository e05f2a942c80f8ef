from __future__ import annotations

import math
import warnings
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numba as nb  # type: ignore
import numpy as np

from pgmath.sampling.source import RandomSource
from pgmath.special import incomplete_gamma_q

__all__ = [
    "random_left_bounded_gamma",
    "sample_truncated_gamma",
    "TruncatedGammaParams",
    "TruncatedGamma",
]


@nb.njit()
def random_left_bounded_gamma(rng: np.random.Generator, a: float, b: float, t: float) -> float:
    """
    Sample from X ~ Gamma(a, rate=b) truncated on the interval {x | x > t}.

    For a > 1 we use the algorithm described in Dagpunar (1978).
    For a == 1, we truncate an Exponential of rate=b.
    For a < 1, we use algorithm [A4] described in Philippe (1997).

    The rejection loops have no iteration cap. Each proposal consumes one
    standard exponential followed by one standard uniform draw.

    Parameters
    ----------
    rng : np.random.Generator
        Source of standard exponential and standard uniform variates.
    a : float
        Shape, a > 0.
    b : float
        Rate, b > 0.
    t : float
        Truncation point, t > 0.

    Returns
    -------
    float
        A sample strictly greater than t.
    """
    if a > 1.0:
        b = t * b
        amin1 = a - 1.0
        bmina = b - a
        c0 = 0.5 * (bmina + math.sqrt(bmina * bmina + 4.0 * b)) / b
        one_minus_c0 = 1.0 - c0
        log_m = amin1 * (math.log(amin1 / one_minus_c0) - 1.0)

        while True:
            x = b + rng.standard_exponential() / c0
            threshold = amin1 * math.log(x) - x * one_minus_c0 - log_m
            if math.log1p(-rng.random()) <= threshold:
                return t * (x / b)
    elif a == 1.0:
        return t + rng.standard_exponential() / b
    else:
        amin1 = a - 1.0
        tb = t * b
        while True:
            x = 1.0 + rng.standard_exponential() / tb
            if math.log1p(-rng.random()) <= amin1 * math.log(x):
                return t * x


def sample_truncated_gamma(
    generator: Union[np.random.Generator, RandomSource], a: float, b: float, t: float
) -> float:
    """
    Draw one sample from Gamma(shape=a, rate=b) conditioned on exceeding t.

    A `np.random.Generator` runs through the compiled kernel. Any other object
    following the `RandomSource` protocol runs the same algorithm in the
    interpreter.

    Parameters
    ----------
    generator : Union[np.random.Generator, RandomSource]
        Caller owned random source. It is advanced by a data dependent number
        of draws.
    a, b, t : float
        Shape, rate and truncation point. All must be positive; they are not
        checked here.

    Returns
    -------
    float
        A sample strictly greater than t.
    """
    if isinstance(generator, np.random.Generator):
        return random_left_bounded_gamma(generator, float(a), float(b), float(t))
    elif isinstance(generator, RandomSource):
        return random_left_bounded_gamma.py_func(generator, float(a), float(b), float(t))
    else:
        raise TypeError("generator must follow the RandomSource protocol")


@dataclass
class TruncatedGammaParams:
    shape: float  # a, shape of the parent gamma distribution
    rate: float  # b, rate of the parent gamma distribution
    truncation: float  # t, samples are conditioned on X > t

    def size(self):
        return 3

    def unpack(self) -> Tuple[float, float, float]:
        return (self.shape, self.rate, self.truncation)

    def copy(self) -> TruncatedGammaParams:
        return TruncatedGammaParams(*self.unpack())


class TruncatedGamma:
    """
    Gamma(shape, rate) distribution restricted to X > truncation.

    Draws come from `random_left_bounded_gamma`; the analytic quantities are
    built on the normalized upper incomplete gamma function.
    """

    __slots__ = ("params", "rng")

    params: TruncatedGammaParams
    rng: np.random.Generator

    def __init__(
        self,
        params: Optional[TruncatedGammaParams] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        if params is None:
            self.params = TruncatedGammaParams(shape=1.0, rate=1.0, truncation=1.0)
        else:
            _params_check(params)
            self.params = params.copy()

        if rng is None:
            self.rng = np.random.default_rng()
        elif isinstance(rng, np.random.Generator):
            self.rng = rng
        else:
            self.rng = np.random.default_rng(rng)  # type: ignore

    def copy(self, rng: Optional[np.random.Generator] = None) -> TruncatedGamma:
        """
        Copy with the same parameters. Without `rng` the copy shares this
        object's generator, so their draws interleave on one stream.
        """
        if rng is None:
            rng = np.random.default_rng(self.rng)

        return TruncatedGamma(params=self.get_params(), rng=rng)

    def get_params(self) -> TruncatedGammaParams:
        return self.params.copy()

    def update_params(self, params: TruncatedGammaParams) -> None:
        _params_check(params)
        self.params = params.copy()

    def draw(self) -> float:
        a, b, t = self.params.unpack()
        return random_left_bounded_gamma(self.rng, float(a), float(b), float(t))

    def survival(self, x: float) -> float:
        """
        P(X > x) for the truncated distribution. Equal to 1 for x <= truncation.
        """
        a, b, t = self.params.unpack()
        if x <= t:
            return 1.0
        return _q_ratio(a, b * x, a, b * t)

    def cdf(self, x: float) -> float:
        return 1.0 - self.survival(x)

    def mean(self) -> float:
        a, b, t = self.params.unpack()
        return a / b * _q_ratio(a + 1.0, b * t, a, b * t)

    def variance(self) -> float:
        a, b, t = self.params.unpack()
        second_moment = a * (a + 1.0) / (b * b) * _q_ratio(a + 2.0, b * t, a, b * t)
        return second_moment - self.mean() ** 2


def _q_ratio(p_num: float, x_num: float, p_den: float, x_den: float) -> float:
    """
    ### This is an internal function.

    Q(p_num, x_num) / Q(p_den, x_den). Returns np.nan with a warning when the
    denominator underflows.
    """
    denominator = incomplete_gamma_q(p_den, x_den, True)
    if denominator == 0.0:
        warnings.warn(
            "Q({}, {}) underflows to zero, the truncated gamma quantity is undefined".format(
                p_den, x_den
            ),
            RuntimeWarning,
        )
        return np.nan
    return incomplete_gamma_q(p_num, x_num, True) / denominator


def _params_check(params: TruncatedGammaParams) -> None:
    if not isinstance(params, TruncatedGammaParams):
        raise TypeError("params must be a TruncatedGammaParams")

    for name, value in zip(("shape", "rate", "truncation"), params.unpack()):
        if not np.isfinite(value):
            raise ValueError(f"{name} must be finite")
        if value <= 0:
            raise ValueError(f"{name} must be positive")
