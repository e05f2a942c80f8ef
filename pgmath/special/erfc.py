from __future__ import annotations

import math

import numba as nb  # type: ignore

from pgmath.constants import DBL_EPSILON, DBL_MIN, ONE_SQRTPI

__all__ = ["erfc"]

# Below this erfc(x) rounds to 2, above _BIG_VAL it is smaller than DBL_MIN.
_SMALL_VAL: float = -6.003636680306125
_BIG_VAL: float = 26.615717509251258


@nb.njit("f8(f8)", cache=True)
def _erfc_upper(x: float) -> float:
    """
    ### This is an internal function. Use `erfc` instead.

    Complementary error function for `x >= DBL_EPSILON`.
    """
    if x < 0.5:
        # Cody's rational approximation of erf(x) / x in x^2
        p0 = 3.20937758913846947e03
        p1 = 3.77485237685302021e02
        p2 = 1.13864154151050156e02
        p3 = 3.16112374387056560e00
        p4 = 1.85777706184603153e-01
        q0 = 2.84423683343917062e03
        q1 = 1.28261652607737228e03
        q2 = 2.44024637934444173e02
        q3 = 2.36012909523441209e01
        z = x * x
        return 1.0 - x * ((((p4 * z + p3) * z + p2) * z + p1) * z + p0) / (
            (((z + q3) * z + q2) * z + q1) * z + q0
        )
    elif x < 4.0:
        # erfc(x) * exp(x^2) in x (Temme)
        p0 = 7.3738883116
        p1 = 6.8650184849
        p2 = 3.0317993362
        p3 = 5.6316961891e-01
        p4 = 4.3187787405e-05
        q0 = 7.3739608908
        q1 = 1.5184908190e01
        q2 = 1.2795529509e01
        q3 = 5.3542167949
        return math.exp(-x * x) * ((((p4 * x + p3) * x + p2) * x + p1) * x + p0) / (
            (((x + q3) * x + q2) * x + q1) * x + q0
        )
    elif x < _BIG_VAL:
        z = x * x
        y = math.exp(-z)

        # The result underflows anyway, don't scale a vanishing y by 1 / x.
        if x * DBL_MIN > y * ONE_SQRTPI:
            return 0.0

        p0 = -4.25799643553e-02
        p1 = -1.96068973726e-01
        p2 = -5.16882262185e-02
        q0 = 1.50942070545e-01
        q1 = 9.21452411694e-01
        z = 1.0 / z
        z *= ((p2 * z + p1) * z + p0) / ((z + q1) * z + q0)
        return y * (ONE_SQRTPI + z) / x
    else:
        return 0.0


@nb.njit("f8(f8)", cache=True)
def erfc(x: float) -> float:
    """
    Compute the complementary error function.

    Rational Chebyshev approximations as described by Cody (1969), with
    polynomial coefficients taken from Temme (1994) and the Netlib `specfun`
    package. The maximum relative error against the standard library `erfc` is
    about 1.08e-09.

    Parameters
    ----------
    x : float
        Any finite real number.

    Returns
    -------
    float
        erfc(x), in the closed interval [0, 2].

    References
    ----------
    Cody, W. J. Rational Chebyshev approximations for the error function.
    Math. Comp. 23 (1969), 631-637.

    Temme, N. (1994). A Set of Algorithms for the Incomplete Gamma Functions.
    Probability in the Engineering and Informational Sciences, 8(2), 291-307.
    """
    if x < _SMALL_VAL:
        return 2.0
    elif x < -DBL_EPSILON:
        return 2.0 - _erfc_upper(-x)
    elif x < DBL_EPSILON:
        return 1.0
    return _erfc_upper(x)
