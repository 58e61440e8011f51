"""Named transfer functions usable as a node's activator.

Each function is pure and works elementwise, so it accepts a numpy scalar,
a Python float or an array. Scalars stay scalars and keep their dtype.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike

logger = logging.getLogger(__name__)

TransferFunc = Callable[[Any], Any]


def linear(values: ArrayLike) -> Any:
    """Identity transfer."""
    return np.asarray(values)[()]


def tanh(values: ArrayLike) -> Any:
    """Hyperbolic tangent, bounded in (-1, 1)."""
    return np.tanh(values)


def sigmoid(values: ArrayLike) -> Any:
    """Saturating default transfer.

    Same curve as tanh, bounded in (-1, 1). Not the logistic function.
    """
    return np.tanh(values)


def elu(values: ArrayLike) -> Any:
    """Exponential linear unit: identity for s >= 0, e^s - 1 below zero."""
    array = np.asarray(values)
    negative_part = np.expm1(np.minimum(array, 0))
    return np.where(array >= 0, array, negative_part)[()]


def softplus(values: ArrayLike) -> Any:
    """log(1 + e^s) without overflow for large s."""
    array = np.asarray(values)
    return np.logaddexp(np.zeros_like(array), array)[()]


def bent_identity(values: ArrayLike) -> Any:
    """(sqrt(s^2 + 1) - 1) / 2 + s."""
    array = np.asarray(values)
    return ((np.hypot(array, 1) - 1) / 2 + array)[()]


@dataclass(frozen=True)
class Activator:
    """A named transfer function with descriptive metadata."""

    name: str
    func: TransferFunc
    properties: dict[str, Any] = field(default_factory=dict, compare=False)

    def __call__(self, values: ArrayLike) -> Any:
        return self.func(values)

    def __repr__(self) -> str:
        return f"Activator({self.name})"


ACTIVATORS: dict[str, Activator] = {
    "linear": Activator(
        name="linear",
        func=linear,
        properties={
            "bounded": False,
            "range": (-np.inf, np.inf),
            "description": "Identity function - no nonlinearity",
        },
    ),
    "tanh": Activator(
        name="tanh",
        func=tanh,
        properties={
            "bounded": True,
            "range": (-1.0, 1.0),
            "description": "Hyperbolic tangent - smooth, zero-centered",
        },
    ),
    "sigmoid": Activator(
        name="sigmoid",
        func=sigmoid,
        properties={
            "bounded": True,
            "range": (-1.0, 1.0),
            "description": "Default saturating transfer, same curve as tanh",
        },
    ),
    "elu": Activator(
        name="elu",
        func=elu,
        properties={
            "bounded": False,
            "range": (-1.0, np.inf),
            "description": "ELU - exponential for negatives, linear for positives",
        },
    ),
    "softplus": Activator(
        name="softplus",
        func=softplus,
        properties={
            "bounded": False,
            "range": (0.0, np.inf),
            "description": "Softplus - smooth approximation of ReLU",
        },
    ),
    "bent_identity": Activator(
        name="bent_identity",
        func=bent_identity,
        properties={
            "bounded": False,
            "range": (-np.inf, np.inf),
            "description": "Bent identity - smooth, unbounded, near-linear",
        },
    ),
}

DEFAULT_ACTIVATOR_NAME = "sigmoid"


def get_activator(name: str) -> Activator:
    """Get an activator by name."""
    if name not in ACTIVATORS:
        available = ", ".join(ACTIVATORS.keys())
        raise ValueError(f"Unknown activator '{name}'. Available: {available}")
    return ACTIVATORS[name]


def default_activator() -> Activator:
    return ACTIVATORS[DEFAULT_ACTIVATOR_NAME]


def list_activators() -> dict[str, dict[str, Any]]:
    """List all registered activators with their properties."""
    return {name: dict(activator.properties) for name, activator in ACTIVATORS.items()}


def register_activator(activator: Activator, replace: bool = False) -> Activator:
    """Add a named activator to the registry."""
    if not activator.name:
        raise ValueError("activator name cannot be empty")
    if activator.name in ACTIVATORS:
        if not replace:
            raise ValueError(f"Activator '{activator.name}' is already registered")
        logger.warning("Replacing registered activator '%s'", activator.name)
    ACTIVATORS[activator.name] = activator
    return activator


def resolve_activator(value: Activator | str | TransferFunc | None) -> Activator:
    """Turn a name, Activator or plain callable into an Activator."""
    if value is None:
        return default_activator()
    if isinstance(value, Activator):
        return value
    if isinstance(value, str):
        return get_activator(value)
    if callable(value):
        return Activator(name=getattr(value, "__name__", "custom"), func=value)
    raise TypeError(f"Cannot use {type(value).__name__} as an activator")
