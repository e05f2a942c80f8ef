from .erfc import erfc
from .gammaq import incomplete_gamma_q, regularized_gamma_p
from .lgamma import LOGFACTORIAL, lgamma

__all__ = [
    "erfc",
    "lgamma",
    "LOGFACTORIAL",
    "incomplete_gamma_q",
    "regularized_gamma_p",
]
