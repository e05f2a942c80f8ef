import pytest
import numpy as np
import numpy.typing as npt
from typing import Callable, Iterable, Tuple

from pgmath.utils.accuracy import _draw_many


class ReplaySource:
    """
    A RandomSource that replays fixed exponential and uniform draws in order.
    Running out of draws raises IndexError.
    """

    def __init__(self, exponentials: Iterable[float], uniforms: Iterable[float]):
        self._exponentials = list(exponentials)
        self._uniforms = list(uniforms)
        self.n_exponential = 0
        self.n_uniform = 0

    def standard_exponential(self) -> float:
        value = self._exponentials[self.n_exponential]
        self.n_exponential += 1
        return value

    def random(self) -> float:
        value = self._uniforms[self.n_uniform]
        self.n_uniform += 1
        return value


@pytest.fixture
def replay_source() -> Callable[..., ReplaySource]:
    return ReplaySource


@pytest.fixture(scope="session")
def truncated_gamma_draws() -> Callable[[float, float, float, int, int], npt.NDArray[np.float64]]:
    """
    Draw `n` samples of Gamma(a, rate=b) truncated at t, with a fresh seeded generator.
    Results are cached for the session.
    """
    cache = {}

    def draw(a: float, b: float, t: float, n: int = 100000, seed: int = 0) -> npt.NDArray[np.float64]:
        key: Tuple[float, float, float, int, int] = (a, b, t, n, seed)
        if key not in cache:
            rng = np.random.default_rng(seed)
            cache[key] = _draw_many(rng, float(a), float(b), float(t), n)
        return cache[key]

    return draw
