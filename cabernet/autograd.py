"""Nodes of the computation graph and the binary operations built on them.

A ``Node`` holds a float32 array.  Leaf nodes return themselves from
``forward`` and accumulate incoming gradients in ``backward``.  Operation
nodes recompute their value from their operands in ``forward`` and pass
gradients on to their operands in ``backward``.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

DTYPE = np.float32


def _shape_of(shape: Iterable[int]) -> tuple[int, ...]:
    return tuple(int(dimension) for dimension in shape)


def _detached(array: np.ndarray) -> "Node":
    """Wrap a copy of ``array`` in a leaf node that takes no gradient."""
    node = Node(array.shape)
    node.data[...] = array
    return node


class Node:
    """A tensor in the computation graph."""

    def __init__(self, shape: Iterable[int] = (), requires_gradient: bool = False):
        self.shape = _shape_of(shape)
        self.data = np.zeros(self.shape, dtype=DTYPE)
        self.requires_gradient = bool(requires_gradient)
        self.gradient: np.ndarray | None = (
            np.zeros(self.shape, dtype=DTYPE) if self.requires_gradient else None
        )

    @property
    def size(self) -> int:
        return int(self.data.size)

    @property
    def rank(self) -> int:
        return len(self.shape)

    def forward(self) -> "Node":
        """Compute this node's value and return the node itself."""
        return self

    def backward(self, gradient: "Node") -> None:
        """Accumulate ``gradient`` into this node's gradient buffer."""
        if not self.requires_gradient:
            return
        if gradient.shape != self.shape:
            raise ValueError("shape mismatch")
        if self.gradient is None or self.gradient.shape != self.shape:
            self.gradient = np.zeros(self.shape, dtype=DTYPE)
        self.gradient += gradient.data

    def reshape(self, shape: Iterable[int]) -> None:
        """Give the node a new shape, keeping its values when the size allows."""
        new_shape = _shape_of(shape)
        new_size = int(np.prod(new_shape, dtype=np.int64))
        if new_size == self.data.size:
            self.data = self.data.reshape(new_shape)
            if self.gradient is not None:
                self.gradient = self.gradient.reshape(new_shape)
        else:
            self.data = np.zeros(new_shape, dtype=DTYPE)
            if self.gradient is not None:
                self.gradient = np.zeros(new_shape, dtype=DTYPE)
        self.shape = new_shape

    def copy(self, other: "Node") -> None:
        """Take over the shape and values of ``other``."""
        self.reshape(other.shape)
        self.data[...] = other.data

    def add(self, other: "Node") -> None:
        """Add ``other`` to this node element by element, in place."""
        if self.shape != other.shape:
            raise ValueError("shape mismatch")
        self.data += other.data

    def multiply(self, other: "Node") -> None:
        """Multiply this node by ``other`` element by element, in place."""
        if self.shape != other.shape:
            raise ValueError("shape mismatch")
        self.data *= other.data

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(shape={self.shape}, "
            f"requires_gradient={self.requires_gradient})"
        )


class Operation(Node):
    """A node computed from two operands."""

    def __init__(self, first: Node, second: Node):
        super().__init__((), False)
        self.first_operand = first
        self.second_operand = second
        self.requires_gradient = first.requires_gradient or second.requires_gradient


class Addition(Operation):
    """Element-wise sum of two nodes of the same shape."""

    def __init__(self, first: Node, second: Node):
        super().__init__(first, second)
        if first.shape != second.shape:
            raise ValueError("shape mismatch")
        self.reshape(first.shape)

    def forward(self) -> Node:
        first = self.first_operand.forward().data
        second = self.second_operand.forward().data
        np.add(first, second, out=self.data)
        return self

    def backward(self, gradient: Node) -> None:
        first, second = self.first_operand, self.second_operand
        if first.requires_gradient:
            if second.requires_gradient:
                first.backward(_detached(gradient.data))
            else:
                first.backward(gradient)
        if second.requires_gradient:
            second.backward(gradient)


class Multiplication(Operation):
    """Element-wise product of two nodes of the same shape."""

    def __init__(self, first: Node, second: Node):
        super().__init__(first, second)
        if first.shape != second.shape:
            raise ValueError("shape mismatch")
        self.reshape(first.shape)

    def forward(self) -> Node:
        first = self.first_operand.forward().data
        second = self.second_operand.forward().data
        np.multiply(first, second, out=self.data)
        return self

    def backward(self, gradient: Node) -> None:
        first, second = self.first_operand, self.second_operand
        if first.requires_gradient:
            first.backward(_detached(gradient.data * second.data))
        if second.requires_gradient:
            second.backward(_detached(gradient.data * first.data))


class Matmul(Operation):
    """Matrix product of two rank-2 nodes."""

    def __init__(self, first: Node, second: Node):
        super().__init__(first, second)
        if first.rank != 2 or second.rank != 2:
            raise ValueError("rank mismatch")
        if first.shape[-1] != second.shape[0]:
            raise ValueError("shape mismatch")
        self.reshape((first.shape[0], second.shape[-1]))

    @property
    def rows_dimension(self) -> int:
        return self.first_operand.shape[0]

    @property
    def inner_dimension(self) -> int:
        return self.first_operand.shape[-1]

    @property
    def columns_dimension(self) -> int:
        return self.second_operand.shape[-1]

    def forward(self) -> Node:
        first = self.first_operand.forward().data
        second = self.second_operand.forward().data
        np.matmul(first, second, out=self.data)
        return self

    def backward(self, gradient: Node) -> None:
        upstream = gradient.data.reshape(self.rows_dimension, self.columns_dimension)
        first, second = self.first_operand, self.second_operand
        if first.requires_gradient:
            first.backward(_detached(upstream @ second.data.T))
        if second.requires_gradient:
            second.backward(_detached(first.data.T @ upstream))