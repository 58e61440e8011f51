"""Exception types raised by layer, node and connection operations."""

from __future__ import annotations


class LayerlinkError(Exception):
    """Base class for layerlink failures."""


class DimensionMismatchError(LayerlinkError, ValueError):
    """Input vector length differs from a node's fan-in."""

    def __init__(self, expected: int, actual: int, shape: tuple[int, ...] | None = None) -> None:
        if shape is None:
            message = f"Input has length {actual}, node expects {expected}"
        else:
            message = f"Input has shape {shape}, node expects a vector of length {expected}"
        super().__init__(message)
        self.expected = expected
        self.actual = actual
        self.shape = shape


class InvalidReferenceError(LayerlinkError, RuntimeError):
    """A node reference outlived the layer that owns the node."""


class LinkerContractError(LayerlinkError, ValueError):
    """A linker returned a reference that is not a member of its source layer."""
