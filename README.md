# cabernet

A compact float32 tensor library with reverse-mode automatic
differentiation and a plain SGD optimizer, built on numpy.

## Installation

```
pip install .
```

## Modules

### `cabernet.tensor`

- `Tensor(shape=(), requires_gradient=False, detached=False)` holds float32
  data. When `requires_gradient` is true it also keeps a gradient buffer.
  - `fill(value)` takes a single number, a sequence of leading values
    (`ValueError` if there are more values than elements), or
    `Initializer.He`, which draws from a normal distribution with standard
    deviation `sqrt(2 / shape[-1])`.
  - `a + b` and `a * b` build element-wise addition and multiplication
    nodes; both operands must have the same shape.
  - `perform()` evaluates the graph behind the tensor; `backward(gradient)`
    sends `gradient` back to every tensor that requires one, where it is
    accumulated.
  - `gradient()` returns a copy of the accumulated gradient as a new
    tensor (`ValueError` if the tensor takes no gradient).
  - `reshape(shape)`, `copy(other)`, iteration over the flattened values,
    `len()`, and the properties `shape`, `rank`, `size`, `data`,
    `requires_gradient` and `internal` (the underlying graph node).
  - `Tensor.from_node(node)` wraps an existing graph node.
  - `str(tensor)` gives the flattened values as `[1, 2, 3, ]`.
- `matmul(first, second)` builds the matrix product of two rank-2 tensors.
- `IntTensor(shape=())` holds int32 data such as class labels, with
  `fill`, `reshape`, `copy`, iteration, `len()` and `str()`.
- `Initializer` names the available fill distributions (`He`).

### `cabernet.autograd`

The graph nodes: `Node` (a leaf that accumulates gradients), `Operation`
(a node with two operands), and the operations `Addition`,
`Multiplication` and `Matmul`. Building an operation from operands of
unsuitable shape or rank raises `ValueError`.

### `cabernet.optimizers`

- `Optimizer` is the abstract base: `add_parameter(parameter)` registers a
  `Tensor` or `Node`, and `step()` calls `update` on each one.
- `SGD(learning_rate)` subtracts `learning_rate * gradient` from each
  parameter and then sets its gradient to zero.

## Example

```python
from cabernet.tensor import Tensor, matmul
from cabernet.optimizers import SGD

x = Tensor((2, 2), requires_gradient=True)
x.fill([1.0, 2.0, 3.0, 4.0])
w = Tensor((2, 2), requires_gradient=True)
w.fill(0.5)

y = matmul(x, w) + x
y.perform()
print(y)

seed = Tensor((2, 2))
seed.fill(1.0)
y.backward(seed)
print(w.gradient())

optimizer = SGD(0.1)
optimizer.add_parameter(w)
optimizer.step()
print(w)
```

## What it does not do

The package provides tensors, the three operations above and SGD. It has
no neural-network layers (linear, convolution, pooling, activation or
softmax functions), no loss functions, no dataset loading and no
command-line program.

## Running the tests

```
pip install ".[test]"
pytest
```