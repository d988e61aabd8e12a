"""Optimizers that update graph parameters from their gradients."""

from __future__ import annotations

import abc

import numpy as np

from cabernet.autograd import DTYPE, Node
from cabernet.tensor import Tensor


class Optimizer(abc.ABC):
    """Holds a list of parameters and updates each on every step."""

    def __init__(self) -> None:
        self.parameters: list[Node] = []

    def add_parameter(self, parameter: "Node | Tensor") -> None:
        node = parameter.internal if isinstance(parameter, Tensor) else parameter
        self.parameters.append(node)

    def step(self) -> None:
        for parameter in self.parameters:
            self.update(parameter)

    @abc.abstractmethod
    def update(self, parameter: Node) -> None:
        """Update one parameter in place."""


class SGD(Optimizer):
    """Plain stochastic gradient descent."""

    def __init__(self, learning_rate: float):
        super().__init__()
        self.learning_rate = float(learning_rate)

    def update(self, parameter: Node) -> None:
        gradient = parameter.gradient
        if gradient is None:
            raise ValueError("parameter does not require gradient")
        parameter.data -= DTYPE(self.learning_rate) * gradient.reshape(parameter.shape)
        gradient[...] = np.zeros((), dtype=DTYPE)