from __future__ import annotations

import math

import numpy as np
import pytest

from layerlink.core.activators import get_activator, sigmoid
from layerlink.core.errors import DimensionMismatchError
from layerlink.core.node import Node


def test_should_compute_weighted_sum_plus_bias_through_transfer() -> None:
    node = Node(weight=[2.0, 3.0], bias=1.0, transfer="linear")
    assert node.compute([1.0, 1.0]) == pytest.approx(6.0)


def test_should_apply_softplus_to_zero_sum() -> None:
    node = Node(weight=[1.0], transfer="softplus")
    assert node.compute([0.0]) == pytest.approx(math.log(2.0))


def test_should_match_reference_formula_for_random_inputs() -> None:
    rng = np.random.default_rng(7)
    for activator_name in ("linear", "sigmoid", "elu", "softplus", "bent_identity"):
        weight = rng.normal(size=5)
        bias = float(rng.normal())
        values = rng.normal(size=5)
        node = Node(weight=weight, bias=bias, transfer=activator_name)
        expected = get_activator(activator_name)(np.dot(weight, values) + bias)
        assert node.compute(values) == pytest.approx(float(expected))
        assert node.compute(values) == node.compute(values)


def test_should_default_to_sigmoid_and_zero_bias() -> None:
    node = Node(weight=[0.5, 0.5])
    assert node.transfer.name == "sigmoid"
    assert node.bias == 0.0
    assert node.compute([1.0, 1.0]) == pytest.approx(float(sigmoid(1.0)))


def test_should_raise_dimension_mismatch_without_side_effects() -> None:
    node = Node(weight=[1.0, 2.0], bias=0.5, transfer="linear")
    with pytest.raises(DimensionMismatchError) as error:
        node.compute([1.0, 2.0, 3.0])
    assert error.value.expected == 2
    assert error.value.actual == 3
    assert isinstance(error.value, ValueError)
    np.testing.assert_array_equal(node.weight, [1.0, 2.0])
    assert node.compute([1.0, 1.0]) == pytest.approx(3.5)


def test_should_reduce_empty_weight_to_transfer_of_bias() -> None:
    node = Node(bias=0.25, transfer="tanh")
    assert node.fan_in == 0
    assert node.compute([]) == pytest.approx(math.tanh(0.25))
    with pytest.raises(DimensionMismatchError):
        node.compute([1.0])


def test_should_keep_parameters_read_only() -> None:
    node = Node(weight=[1.0, 2.0])
    with pytest.raises(ValueError):
        node.weight[0] = 5.0


def test_should_not_alias_caller_weight_array() -> None:
    weight = np.array([1.0, 2.0])
    node = Node(weight=weight, transfer="linear")
    weight[0] = 100.0
    assert node.compute([1.0, 0.0]) == pytest.approx(1.0)


def test_should_thread_scalar_dtype_through_compute() -> None:
    node = Node(weight=[1.0, 2.0], transfer="linear", dtype=np.float32)
    output = node.compute([0.5, 0.25])
    assert node.weight.dtype == np.float32
    assert isinstance(output, np.float32)
    assert output == pytest.approx(1.0)


def test_should_reject_non_floating_dtype_and_matrix_weight() -> None:
    with pytest.raises(ValueError, match="floating point"):
        Node(weight=[1, 2], dtype=np.int64)
    with pytest.raises(ValueError, match="one-dimensional"):
        Node(weight=[[1.0], [2.0]])


def test_should_raise_dimension_mismatch_for_non_vector_input() -> None:
    node = Node(weight=[1.0], transfer="linear")
    with pytest.raises(DimensionMismatchError, match=r"shape \(1, 1\)") as matrix_error:
        node.compute([[1.0]])
    assert matrix_error.value.shape == (1, 1)
    assert matrix_error.value.expected == 1
    with pytest.raises(DimensionMismatchError, match=r"shape \(\)") as scalar_error:
        node.compute(1.0)
    assert scalar_error.value.shape == ()


def test_should_derive_new_node_with_replaced_parameters() -> None:
    node = Node(weight=[1.0, 1.0], bias=0.0, transfer="linear")
    shifted = node.with_parameters(bias=2.0)
    rewired = node.with_parameters(weight=[3.0], transfer="softplus")

    assert node.compute([1.0, 1.0]) == pytest.approx(2.0)
    assert shifted.compute([1.0, 1.0]) == pytest.approx(4.0)
    assert rewired.fan_in == 1
    assert rewired.transfer.name == "softplus"
    assert rewired.compute([0.0]) == pytest.approx(math.log(2.0))
