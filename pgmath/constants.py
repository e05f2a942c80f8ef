from __future__ import annotations

import sys

__all__ = [
    "MAX_EXP",
    "LS2PI",
    "ONE_SQRTPI",
    "DBL_EPSILON",
    "DBL_MIN",
    "CONFLUENT_EPSILON",
    "CONFLUENT_MAX_ITER",
]

# Module level floats are frozen into the jitted kernels as constants.
MAX_EXP: float = 708.3964202663686  # maximum allowed exp() argument
LS2PI: float = 0.9189385332046727  # log(sqrt(2 * pi))
ONE_SQRTPI: float = 0.5641895835477563  # 1 / sqrt(pi)

DBL_EPSILON: float = sys.float_info.epsilon
DBL_MIN: float = sys.float_info.min

# Modified Lentz stopping rule for the confluent continued fractions
CONFLUENT_EPSILON: float = 1e-07
CONFLUENT_MAX_ITER: int = 100
