from .sampling import (
    RandomSource,
    TruncatedGamma,
    TruncatedGammaParams,
    random_left_bounded_gamma,
    sample_truncated_gamma,
)
from .special import erfc, incomplete_gamma_q, lgamma, regularized_gamma_p

__version__ = "0.1.0"

__all__ = [
    "erfc",
    "lgamma",
    "incomplete_gamma_q",
    "regularized_gamma_p",
    "RandomSource",
    "TruncatedGamma",
    "TruncatedGammaParams",
    "random_left_bounded_gamma",
    "sample_truncated_gamma",
]
