from .source import RandomSource
from .truncated_gamma import (
    TruncatedGamma,
    TruncatedGammaParams,
    random_left_bounded_gamma,
    sample_truncated_gamma,
)

__all__ = [
    "RandomSource",
    "TruncatedGamma",
    "TruncatedGammaParams",
    "random_left_bounded_gamma",
    "sample_truncated_gamma",
]
