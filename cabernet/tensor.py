"""User-facing tensors: float tensors that take part in the graph, and int tensors."""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable, Iterator, Sequence

import numpy as np

from cabernet.autograd import DTYPE, Addition, Matmul, Multiplication, Node

INT_DTYPE = np.int32


class Initializer(enum.Enum):
    """Distributions that can fill a tensor."""

    He = "he"


def _format_elements(values: Iterable[object]) -> str:
    return "[" + "".join(f"{value}, " for value in values) + "]"


def _format_float(value: float) -> str:
    return format(float(value), "g")


def _check_length(count: int, size: int) -> None:
    if count > size:
        raise ValueError(f"{count} values do not fit in a tensor of size {size}")


class Tensor:
    """A float tensor backed by a node of the computation graph."""

    def __init__(
        self,
        shape: Iterable[int] = (),
        requires_gradient: bool = False,
        detached: bool = False,
    ):
        self._node = Node(shape, bool(requires_gradient))
        self.detached = bool(detached)

    @classmethod
    def from_node(cls, node: Node) -> "Tensor":
        """Wrap an existing node without copying it."""
        tensor = cls.__new__(cls)
        tensor._node = node
        tensor.detached = False
        return tensor

    @property
    def internal(self) -> Node:
        return self._node

    @property
    def data(self) -> np.ndarray:
        return self._node.data

    @property
    def shape(self) -> tuple[int, ...]:
        return self._node.shape

    @property
    def rank(self) -> int:
        return self._node.rank

    @property
    def size(self) -> int:
        return self._node.size

    @property
    def requires_gradient(self) -> bool:
        return self._node.requires_gradient

    def reshape(self, shape: Iterable[int]) -> None:
        if self._node is None:
            self._node = Node(shape, False)
        self._node.reshape(shape)

    def gradient(self) -> "Tensor":
        """Return a copy of the accumulated gradient as a new tensor."""
        source = self._node.gradient
        if source is None:
            raise ValueError("tensor does not require gradient")
        result = Tensor(self.shape, False)
        result.data[...] = source.reshape(self.shape)
        return result

    def backward(self, gradient: "Tensor") -> None:
        self._node.backward(gradient.internal)

    def perform(self) -> None:
        self._node.forward()

    def copy(self, other: "Tensor | Node") -> None:
        node = other.internal if isinstance(other, Tensor) else other
        self._node.copy(node)

    def fill(self, value: "Initializer | float | Sequence[float]") -> None:
        """Fill with a distribution, a single value, or leading values from a sequence."""
        flat = self._node.data.reshape(-1)
        if isinstance(value, Initializer):
            if value is Initializer.He:
                if not self.shape or self.shape[-1] == 0:
                    raise ValueError("cannot initialize a tensor without a last dimension")
                deviation = math.sqrt(2.0 / self.shape[-1])
                rng = np.random.default_rng()
                flat[...] = rng.normal(0.0, deviation, size=flat.size)
            else:
                raise ValueError("Invalid initializer")
        elif isinstance(value, (int, float, np.number)):
            flat[...] = value
        else:
            values = np.asarray(list(value), dtype=DTYPE)
            _check_length(values.size, flat.size)
            flat[: values.size] = values

    def __iter__(self) -> Iterator[float]:
        return (float(element) for element in self._node.data.reshape(-1))

    def __len__(self) -> int:
        return self.size

    def __add__(self, other: "Tensor") -> "Tensor":
        return Tensor.from_node(Addition(self.internal, other.internal))

    def __mul__(self, other: "Tensor") -> "Tensor":
        return Tensor.from_node(Multiplication(self.internal, other.internal))

    def __str__(self) -> str:
        return _format_elements(_format_float(element) for element in self)

    def __repr__(self) -> str:
        return f"Tensor(shape={self.shape}, requires_gradient={self.requires_gradient})"


class IntTensor:
    """An integer tensor, used for class labels and indices."""

    def __init__(self, shape: Iterable[int] = ()):
        self.data = np.zeros(tuple(int(d) for d in shape), dtype=INT_DTYPE)

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(self.data.shape)

    @property
    def rank(self) -> int:
        return self.data.ndim

    @property
    def size(self) -> int:
        return int(self.data.size)

    def reshape(self, shape: Iterable[int]) -> None:
        new_shape = tuple(int(d) for d in shape)
        if int(np.prod(new_shape, dtype=np.int64)) == self.data.size:
            self.data = self.data.reshape(new_shape)
        else:
            self.data = np.zeros(new_shape, dtype=INT_DTYPE)

    def fill(self, value: "int | Sequence[int]") -> None:
        flat = self.data.reshape(-1)
        if isinstance(value, (int, np.integer)):
            flat[...] = value
        else:
            values = np.asarray(list(value), dtype=INT_DTYPE)
            _check_length(values.size, flat.size)
            flat[: values.size] = values

    def copy(self, other: "IntTensor") -> None:
        self.data = np.array(other.data, dtype=INT_DTYPE, copy=True)

    def __iter__(self) -> Iterator[int]:
        return (int(element) for element in self.data.reshape(-1))

    def __len__(self) -> int:
        return self.size

    def __str__(self) -> str:
        return _format_elements(self)

    def __repr__(self) -> str:
        return f"IntTensor(shape={self.shape})"


def matmul(first: Tensor, second: Tensor) -> Tensor:
    """Matrix product of two rank-2 tensors, as a graph node."""
    return Tensor.from_node(Matmul(first.internal, second.internal))