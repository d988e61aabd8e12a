"""Float tensors with reverse-mode automatic differentiation, int tensors and an SGD optimizer."""

__version__ = "0.1.0"
__all__ = ["autograd", "tensor", "optimizers"]