"""Linker policies decide which source nodes feed a given target node."""

from __future__ import annotations

from typing import Protocol, Sequence

from layerlink.core.layer import Layer, NodeRef
from layerlink.core.node import Node


class Linker(Protocol):
    """Policy contract for wiring a source layer into one target node.

    Implementations must not mutate their arguments and must only return refs
    to members of `source`, in the order the edges should be stored.
    """

    def __call__(self, source: Layer, target_node: Node) -> Sequence[NodeRef]:
        """Return the incoming edges of `target_node`."""


def full(source: Layer, target_node: Node) -> tuple[NodeRef, ...]:
    """Dense wiring: every source node, in source index order."""
    return source.refs()


LINKERS: dict[str, Linker] = {
    "full": full,
}


def get_linker(name: str) -> Linker:
    """Get a linker policy by name."""
    if name not in LINKERS:
        available = ", ".join(LINKERS.keys())
        raise ValueError(f"Unknown linker '{name}'. Available: {available}")
    return LINKERS[name]
