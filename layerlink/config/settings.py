"""Environment-backed defaults for topology construction."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

import numpy as np

from layerlink.core.scalars import SCALAR_DTYPES

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """Global settings loaded from environment variables."""

    validate_links: bool = True
    default_dtype: str = "float64"

    def scalar_dtype(self) -> np.dtype[Any]:
        return SCALAR_DTYPES[self.default_dtype]


def load_settings_from_env() -> Settings:
    """Load settings from process environment with safe fallbacks."""
    return Settings(
        validate_links=_read_bool_env("LAYERLINK_VALIDATE_LINKS", True),
        default_dtype=_read_dtype_env("LAYERLINK_DEFAULT_DTYPE", "float64"),
    )


def _read_bool_env(key: str, default_value: bool) -> bool:
    raw_value = os.getenv(key)
    if raw_value is None:
        return default_value
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Environment variable {key} must be a boolean.")


def _read_dtype_env(key: str, default_value: str) -> str:
    raw_value = os.getenv(key)
    if raw_value is None:
        return default_value
    normalized = raw_value.strip().lower()
    if normalized not in SCALAR_DTYPES:
        choices = ", ".join(SCALAR_DTYPES)
        raise ValueError(f"Environment variable {key} must be one of: {choices}.")
    return normalized
