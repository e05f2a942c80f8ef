import math

import numpy as np
import pytest
import scipy.special as sc

from pgmath.special import erfc


def test_erfc_at_zero():
    assert erfc(0.0) == 1.0
    assert erfc(-0.0) == 1.0
    assert erfc(1e-17) == 1.0


@pytest.mark.parametrize(
    "x, expected",
    [
        (-6.1, 2.0),
        (-40.0, 2.0),
        (-1e300, 2.0),
        (26.7, 0.0),
        (100.0, 0.0),
        (1e300, 0.0),
    ],
)
def test_erfc_saturation(x, expected):
    assert erfc(x) == expected


def test_erfc_bounds():
    for x in np.linspace(-30.0, 30.0, 6001):
        value = erfc(x)
        assert 0.0 <= value <= 2.0


def test_erfc_reflection():
    for x in np.linspace(0.0, 30.0, 3001):
        assert np.isclose(erfc(x) + erfc(-x), 2.0, rtol=1e-9, atol=0)


def test_erfc_monotonic():
    values = np.array([erfc(x) for x in np.linspace(-8.0, 30.0, 7601)])
    assert np.all(np.diff(values) <= 0)


@pytest.mark.parametrize(
    "start, stop",
    [
        (-6.0, -1e-3),  # reflected half
        (1e-6, 0.5),  # erf rational
        (0.5, 4.0),  # erfc * exp(x^2) rational
        (4.0, 25.0),  # asymptotic tail
    ],
)
def test_erfc_vs_scipy(start, stop):
    x = np.linspace(start, stop, 1001)
    ours = np.array([erfc(v) for v in x])
    assert np.allclose(ours, sc.erfc(x), rtol=3e-9, atol=0)


def test_erfc_vs_math():
    for x in (-3.3, -0.75, 0.25, 1.0, 2.5, 7.0, 15.0):
        assert erfc(x) == pytest.approx(math.erfc(x), rel=3e-9)


def test_erfc_far_tail():
    # exp(-x^2) / x drops below DBL_MIN before x reaches the saturation bound
    assert erfc(26.6) == 0.0
    assert 0.0 < erfc(26.0) < 1e-290
