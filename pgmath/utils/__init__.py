from .accuracy import (
    Kernel,
    accuracy_dataframe,
    kernel_grid,
    relative_errors,
    sampling_summary,
)
from .config import DEFAULT_CONFIG, load_config

__all__ = [
    "Kernel",
    "accuracy_dataframe",
    "kernel_grid",
    "relative_errors",
    "sampling_summary",
    "DEFAULT_CONFIG",
    "load_config",
]
