"""A single computational unit: weight vector, bias and transfer function."""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from layerlink.core.activators import Activator, TransferFunc, resolve_activator
from layerlink.core.errors import DimensionMismatchError
from layerlink.core.scalars import resolve_dtype

_UNSET: Any = object()


class Node:
    """Immutable unit computing transfer(dot(weight, input) + bias).

    The weight length is the node's fan-in. A node with an empty weight is
    legal and its output is transfer(bias) for an empty input.
    """

    def __init__(
        self,
        weight: ArrayLike = (),
        transfer: Activator | str | TransferFunc | None = None,
        bias: float = 0.0,
        dtype: DTypeLike | None = None,
    ) -> None:
        self._dtype = resolve_dtype(dtype)
        resolved_weight = np.array(weight, dtype=self._dtype)
        if resolved_weight.ndim != 1:
            raise ValueError(f"weight must be one-dimensional, got shape {resolved_weight.shape}")
        resolved_weight.setflags(write=False)
        self._weight: NDArray[Any] = resolved_weight
        self._bias = self._dtype.type(bias)
        self._transfer = resolve_activator(transfer)

    @property
    def weight(self) -> NDArray[Any]:
        return self._weight

    @property
    def bias(self) -> Any:
        return self._bias

    @property
    def transfer(self) -> Activator:
        return self._transfer

    @property
    def dtype(self) -> np.dtype[Any]:
        return self._dtype

    @property
    def fan_in(self) -> int:
        return int(self._weight.shape[0])

    def compute(self, input_vector: ArrayLike) -> Any:
        """Return the node output for one input vector."""
        values = np.asarray(input_vector, dtype=self._dtype)
        if values.ndim != 1:
            raise DimensionMismatchError(
                expected=self.fan_in, actual=int(values.size), shape=tuple(values.shape)
            )
        if values.shape[0] != self.fan_in:
            raise DimensionMismatchError(expected=self.fan_in, actual=int(values.shape[0]))
        linear_sum = np.dot(self._weight, values) + self._bias
        return self._dtype.type(self._transfer(linear_sum))

    def with_parameters(
        self,
        weight: ArrayLike = _UNSET,
        bias: float = _UNSET,
        transfer: Activator | str | TransferFunc = _UNSET,
    ) -> "Node":
        """Return a copy of this node with some parameters replaced."""
        return Node(
            weight=self._weight if weight is _UNSET else weight,
            transfer=self._transfer if transfer is _UNSET else transfer,
            bias=self._bias if bias is _UNSET else bias,
            dtype=self._dtype,
        )

    def __repr__(self) -> str:
        return (
            f"Node(fan_in={self.fan_in}, bias={float(self._bias)!r}, "
            f"transfer={self._transfer.name}, dtype={self._dtype})"
        )
