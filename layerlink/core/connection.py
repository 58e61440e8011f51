"""Adjacency between a source layer and a target layer."""

from __future__ import annotations

import logging
import weakref

from layerlink.config.settings import load_settings_from_env
from layerlink.core.errors import InvalidReferenceError, LinkerContractError
from layerlink.core.layer import Layer, NodeRef
from layerlink.core.linkers import Linker, full, get_linker
from layerlink.core.node import Node

logger = logging.getLogger(__name__)


class Connection:
    """Immutable, non-owning wiring of `source` into `target`.

    `adjacency[i]` holds the refs returned by the linker for target node `i`,
    in the linker's order. The connection never keeps either layer alive;
    reaching a node after its layer is gone raises InvalidReferenceError.
    """

    def __init__(
        self,
        source: Layer,
        target: Layer,
        linker: Linker | str = full,
        validate: bool | None = None,
    ) -> None:
        if validate is None:
            validate = load_settings_from_env().validate_links
        self._source = weakref.ref(source)
        self._target = weakref.ref(target)
        self._source_key = source.key
        self._target_key = target.key
        if isinstance(linker, str):
            linker = get_linker(linker)
        self._linker = linker

        adjacency: list[tuple[NodeRef, ...]] = []
        for target_index, target_node in enumerate(target.nodes):
            edges = tuple(linker(source, target_node))
            if validate:
                self._check_edges(source, target_index, edges)
            adjacency.append(edges)
        self._adjacency: tuple[tuple[NodeRef, ...], ...] = tuple(adjacency)
        logger.debug(
            "Connected layer %d -> layer %d: %d targets, %d edges",
            self._source_key,
            self._target_key,
            len(self._adjacency),
            self.edge_count,
        )

    @property
    def adjacency(self) -> tuple[tuple[NodeRef, ...], ...]:
        return self._adjacency

    @property
    def linker(self) -> Linker:
        return self._linker

    @property
    def edge_count(self) -> int:
        return sum(len(edges) for edges in self._adjacency)

    @property
    def source(self) -> Layer:
        return self._live_layer(self._source, self._source_key, "source")

    @property
    def target(self) -> Layer:
        return self._live_layer(self._target, self._target_key, "target")

    @property
    def is_alive(self) -> bool:
        """True while both endpoint layers exist and are not released."""
        for handle in (self._source, self._target):
            layer = handle()
            if layer is None or layer.released:
                return False
        return True

    def get(self, index: int) -> tuple[NodeRef, ...]:
        """Incoming edges of target node `index`."""
        self._check_index(index)
        return self._adjacency[index]

    def resolve(self, index: int) -> tuple[Node, ...]:
        """Live source nodes feeding target node `index`."""
        return tuple(ref.resolve() for ref in self.get(index))

    def __len__(self) -> int:
        return len(self._adjacency)

    def __repr__(self) -> str:
        return (
            f"Connection(source={self._source_key}, target={self._target_key}, "
            f"targets={len(self._adjacency)}, edges={self.edge_count})"
        )

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._adjacency):
            raise IndexError(
                f"Target index {index} out of range for connection of {len(self._adjacency)} targets"
            )

    def _check_edges(self, source: Layer, target_index: int, edges: tuple[NodeRef, ...]) -> None:
        seen: set[int] = set()
        for edge in edges:
            if not isinstance(edge, NodeRef):
                raise LinkerContractError(
                    f"Linker returned {type(edge).__name__} for target {target_index}, expected NodeRef"
                )
            if edge.layer_key != source.key:
                raise LinkerContractError(
                    f"Linker wired target {target_index} to layer {edge.layer_key}, "
                    f"which is not the source layer {source.key}"
                )
            if not 0 <= edge.index < source.size:
                raise LinkerContractError(
                    f"Linker wired target {target_index} to source index {edge.index}, "
                    f"outside a layer of size {source.size}"
                )
            if edge.index in seen:
                raise LinkerContractError(
                    f"Linker wired source node {edge.index} into target {target_index} twice"
                )
            seen.add(edge.index)

    @staticmethod
    def _live_layer(handle: weakref.ReferenceType[Layer], key: int, role: str) -> Layer:
        layer = handle()
        if layer is None:
            raise InvalidReferenceError(f"The {role} layer {key} no longer exists")
        if layer.released:
            raise InvalidReferenceError(f"The {role} layer {key} was released")
        return layer
