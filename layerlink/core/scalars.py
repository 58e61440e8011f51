"""Scalar dtype handling shared by nodes and layers."""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import DTypeLike

DEFAULT_DTYPE = np.dtype(np.float64)

SCALAR_DTYPES: dict[str, np.dtype[Any]] = {
    "float16": np.dtype(np.float16),
    "float32": np.dtype(np.float32),
    "float64": np.dtype(np.float64),
    "longdouble": np.dtype(np.longdouble),
}


def resolve_dtype(dtype: DTypeLike | None) -> np.dtype[Any]:
    """Normalize a dtype argument and reject non-floating types."""
    if dtype is None:
        return DEFAULT_DTYPE
    if isinstance(dtype, str) and dtype in SCALAR_DTYPES:
        return SCALAR_DTYPES[dtype]
    try:
        resolved = np.dtype(dtype)
    except TypeError as exc:
        raise ValueError(f"Unsupported scalar dtype: {dtype!r}") from exc
    if not np.issubdtype(resolved, np.floating):
        raise ValueError(f"Scalar dtype must be floating point, got {resolved}")
    return resolved
