from __future__ import annotations

import copy
import os
from typing import Any, Optional, Union

import yaml
from dotmap import DotMap

__all__ = ["DEFAULT_CONFIG", "load_config"]

DEFAULT_CONFIG: dict[str, Any] = {
    "accuracy": {
        "erfc": {"start": -6.5, "stop": 25.0, "num": 2001, "spacing": "linear"},
        "lgamma": {"start": 1e-6, "stop": 250.0, "num": 2001, "spacing": "log"},
        "gammaq": {
            "shape": [0.3, 1.0, 2.5, 4.2, 7.0, 15.3, 42.7],
            "x": [0.1, 0.5, 1.0, 3.0, 10.0, 25.0, 60.0],
        },
    },
    "sampling": {
        "seed": 12345,
        "draws": 100000,
        "shape": 2.0,
        "rate": 1.0,
        "truncation": 3.0,
    },
    "tolerance": {
        "erfc": 2e-9,
        "lgamma": 1e-9,
        "gammaq": 1e-6,
        "gammaq_unnormalized": 1e-6,
    },
}


def load_config(path: Optional[Union[str, os.PathLike]] = None) -> DotMap:
    """
    Load a YAML configuration for the accuracy and sampling diagnostics.

    Parameters
    ----------
    path : Optional[Union[str, os.PathLike]]
        YAML file. Its values are laid over `DEFAULT_CONFIG`, so it only needs
        the keys it changes. If None, the defaults are returned.

    Returns
    -------
    config : DotMap
        Attribute style access, e.g. `config.sampling.seed`.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path is None:
        return DotMap(config)

    with open(path) as f:
        user = yaml.load(f, Loader=yaml.FullLoader)

    if user is None:
        return DotMap(config)
    if not isinstance(user, dict):
        raise ValueError("config file must contain a mapping")

    unknown = set(user) - set(config)
    if unknown:
        raise ValueError(f"Unknown config sections: {sorted(unknown)}")

    return DotMap(_merge(config, user))


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _merge(base[key], value)
        else:
            base[key] = value
    return base
