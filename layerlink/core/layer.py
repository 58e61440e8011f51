"""Fixed-size layers of nodes and non-owning references into them."""

from __future__ import annotations

import itertools
import logging
import numbers
import weakref
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator

import numpy as np
from numpy.typing import ArrayLike, DTypeLike

from layerlink.core.activators import Activator, TransferFunc
from layerlink.core.errors import InvalidReferenceError
from layerlink.core.node import Node
from layerlink.core.scalars import resolve_dtype

logger = logging.getLogger(__name__)

NodeFactory = Callable[[int], Node]

_layer_keys = itertools.count(1)


@dataclass(frozen=True)
class NodeRef:
    """Handle to the node at `index` of the layer identified by `layer_key`.

    The handle never keeps the layer alive. Equality and hashing use only the
    key and index, so refs built twice against the same layer compare equal.
    """

    layer_key: int
    index: int
    _layer: weakref.ReferenceType[Layer] = field(compare=False, repr=False)

    @property
    def is_alive(self) -> bool:
        layer = self._layer()
        return layer is not None and not layer.released

    def layer(self) -> Layer:
        """Return the owning layer, failing if it has been torn down."""
        layer = self._layer()
        if layer is None:
            raise InvalidReferenceError(
                f"Layer {self.layer_key} no longer exists; cannot reach node {self.index}"
            )
        if layer.released:
            raise InvalidReferenceError(
                f"Layer {self.layer_key} was released; cannot reach node {self.index}"
            )
        return layer

    def resolve(self) -> Node:
        return self.layer().at(self.index)


class Layer:
    """Ordered, fixed-size collection of nodes owned by this layer.

    Nodes are either built from shared construction arguments or produced by
    `node_factory(index)`. Index order is the node identity used by linkers
    and connections.
    """

    def __init__(
        self,
        size: int,
        *,
        weight: ArrayLike = (),
        transfer: Activator | str | TransferFunc | None = None,
        bias: float = 0.0,
        dtype: DTypeLike | None = None,
        node_factory: NodeFactory | None = None,
    ) -> None:
        if not isinstance(size, numbers.Integral) or isinstance(size, bool):
            raise TypeError(f"size must be an integer, got {size!r}")
        if size < 0:
            raise ValueError("size must be non-negative")
        self._dtype = resolve_dtype(dtype)
        self.key = next(_layer_keys)
        self._released = False

        nodes: list[Node] = []
        for index in range(int(size)):
            if node_factory is None:
                node = Node(weight=weight, transfer=transfer, bias=bias, dtype=self._dtype)
            else:
                node = node_factory(index)
                self._check_node(node, index)
            nodes.append(node)
        self._nodes: tuple[Node, ...] = tuple(nodes)
        self._size = len(self._nodes)
        logger.debug("Built layer %d with %d nodes of %s", self.key, self._size, self._dtype)

    @classmethod
    def from_nodes(cls, nodes: Iterable[Node], dtype: DTypeLike | None = None) -> Layer:
        """Build a layer that owns the given nodes in order."""
        node_list = list(nodes)
        if dtype is None and node_list:
            dtype = node_list[0].dtype
        return cls(len(node_list), dtype=dtype, node_factory=node_list.__getitem__)

    @property
    def size(self) -> int:
        return self._size

    @property
    def dtype(self) -> np.dtype[Any]:
        return self._dtype

    @property
    def released(self) -> bool:
        return self._released

    @property
    def nodes(self) -> tuple[Node, ...]:
        self._ensure_live()
        return self._nodes

    def at(self, index: int) -> Node:
        """Return the node at `index`; only 0 <= index < size is valid."""
        self._ensure_live()
        if not 0 <= index < self._size:
            raise IndexError(f"Node index {index} out of range for layer of size {self._size}")
        return self._nodes[index]

    def ref(self, index: int) -> NodeRef:
        """Return a non-owning handle to the node at `index`."""
        self.at(index)
        return NodeRef(layer_key=self.key, index=index, _layer=weakref.ref(self))

    def refs(self) -> tuple[NodeRef, ...]:
        self._ensure_live()
        handle = weakref.ref(self)
        return tuple(
            NodeRef(layer_key=self.key, index=index, _layer=handle) for index in range(self._size)
        )

    def release(self) -> None:
        """Tear the layer down; outstanding refs fail from now on."""
        if self._released:
            return
        self._nodes = ()
        self._released = True
        logger.debug("Released layer %d", self.key)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.at(index)

    def __repr__(self) -> str:
        state = ", released" if self._released else ""
        return f"Layer(key={self.key}, size={self._size}, dtype={self._dtype}{state})"

    def _check_node(self, node: Node, index: int) -> None:
        if not isinstance(node, Node):
            raise TypeError(f"node_factory returned {type(node).__name__} at index {index}")
        if node.dtype != self._dtype:
            raise ValueError(
                f"Node {index} has dtype {node.dtype}, layer expects {self._dtype}"
            )

    def _ensure_live(self) -> None:
        if self._released:
            raise InvalidReferenceError(f"Layer {self.key} was released")
