import numpy as np
import pytest

from cabernet.autograd import Addition, Matmul, Multiplication, Node, Operation


def make(shape, values, requires_gradient=False):
    node = Node(shape, requires_gradient)
    node.data[...] = np.asarray(values, dtype=np.float32).reshape(shape)
    return node


def test_node_shape_size_rank():
    node = Node((2, 3), True)
    assert node.shape == (2, 3)
    assert node.size == 6
    assert node.rank == 2
    assert node.gradient.shape == (2, 3)


def test_leaf_forward_returns_itself():
    node = make((2,), [1, 2])
    assert node.forward() is node


def test_leaf_backward_accumulates():
    node = Node((2, 2), True)
    incoming = make((2, 2), [1, 2, 3, 4])
    node.backward(incoming)
    node.backward(incoming)
    np.testing.assert_allclose(node.gradient, 2 * incoming.data)


def test_leaf_backward_ignored_without_gradient():
    node = Node((2,), False)
    node.backward(make((2,), [1, 1]))
    assert node.gradient is None


def test_reshape_keeps_values_when_size_matches():
    node = make((2, 3), [1, 2, 3, 4, 5, 6])
    node.reshape((3, 2))
    assert node.shape == (3, 2)
    assert node.data.ravel().tolist() == [1, 2, 3, 4, 5, 6]


def test_reshape_to_new_size():
    node = make((2,), [1, 2])
    node.reshape((4, 4))
    assert node.shape == (4, 4)
    assert node.size == 16


def test_copy_takes_shape_and_values():
    source = make((2, 2), [5, 6, 7, 8])
    target = Node((3,))
    target.copy(source)
    assert target.shape == (2, 2)
    np.testing.assert_array_equal(target.data, source.data)
    source.data[0, 0] = 100
    assert target.data[0, 0] == 5


def test_add_in_place():
    first = make((3,), [1, 2, 3])
    second = make((3,), [4, 5, 6])
    first.add(second)
    assert first.data.tolist() == [5, 7, 9]


def test_multiply_in_place():
    first = make((3,), [1, 2, 3])
    second = make((3,), [4, 5, 6])
    first.multiply(second)
    assert first.data.tolist() == [4, 10, 18]


@pytest.mark.parametrize("method", ["add", "multiply"])
def test_in_place_shape_mismatch(method):
    first = Node((2,))
    with pytest.raises(ValueError, match="shape mismatch"):
        getattr(first, method)(Node((3,)))


def test_operation_requires_gradient_from_operands():
    assert Operation(Node((1,), False), Node((1,), True)).requires_gradient
    assert not Operation(Node((1,), False), Node((1,), False)).requires_gradient


def test_addition_forward():
    first = make((2, 2), [1, 2, 3, 4])
    second = make((2, 2), [10, 20, 30, 40])
    result = Addition(first, second)
    assert result.forward() is result
    assert result.data.ravel().tolist() == [11, 22, 33, 44]


def test_addition_shape_mismatch():
    with pytest.raises(ValueError, match="shape mismatch"):
        Addition(Node((2, 2)), Node((4,)))


def test_addition_backward_passes_gradient_to_both():
    first = make((2,), [1, 2], True)
    second = make((2,), [3, 4], True)
    result = Addition(first, second)
    result.forward()
    upstream = make((2,), [0.5, -1])
    result.backward(upstream)
    np.testing.assert_allclose(first.gradient, upstream.data)
    np.testing.assert_allclose(second.gradient, upstream.data)


def test_addition_backward_skips_constant_operand():
    first = make((2,), [1, 2], False)
    second = make((2,), [3, 4], True)
    result = Addition(first, second)
    result.forward()
    result.backward(make((2,), [2, 3]))
    assert first.gradient is None
    assert second.gradient.tolist() == [2, 3]


def test_multiplication_forward():
    first = make((3,), [1, -2, 3])
    second = make((3,), [2, 2, -1])
    result = Multiplication(first, second).forward()
    np.testing.assert_allclose(result.data, first.data * second.data)


def test_multiplication_shape_mismatch():
    with pytest.raises(ValueError, match="shape mismatch"):
        Multiplication(Node((3,)), Node((1, 3)))


def test_multiplication_backward_with_ones_gives_other_operand():
    first = make((3,), [1, 2, 3], True)
    second = make((3,), [4, 5, 6], True)
    result = Multiplication(first, second)
    result.forward()
    upstream = make((3,), [1, 1, 1])
    result.backward(upstream)
    np.testing.assert_allclose(first.gradient, second.data)
    np.testing.assert_allclose(second.gradient, first.data)
    assert upstream.data.tolist() == [1, 1, 1]


def test_matmul_shape():
    result = Matmul(Node((2, 3)), Node((3, 5)))
    assert result.shape == (2, 5)
    assert (result.rows_dimension, result.inner_dimension, result.columns_dimension) == (2, 3, 5)


def test_matmul_rank_mismatch():
    with pytest.raises(ValueError, match="rank mismatch"):
        Matmul(Node((2, 3, 1)), Node((3, 2)))


def test_matmul_inner_shape_mismatch():
    with pytest.raises(ValueError, match="shape mismatch"):
        Matmul(Node((2, 3)), Node((2, 3)))


def test_matmul_with_identity_returns_operand():
    first = make((2, 3), [1, 2, 3, 4, 5, 6])
    identity = make((3, 3), np.eye(3))
    result = Matmul(first, identity).forward()
    np.testing.assert_allclose(result.data, first.data)


def test_matmul_backward_through_identity():
    identity = make((2, 2), np.eye(2), True)
    second = make((2, 3), [1, 2, 3, 4, 5, 6], True)
    result = Matmul(identity, second)
    result.forward()
    upstream = make((2, 3), [1, 0, -1, 2, 3, 4])
    result.backward(upstream)
    np.testing.assert_allclose(second.gradient, upstream.data)
    assert identity.gradient.shape == (2, 2)


def test_chained_graph_forward_recomputes_from_leaves():
    first = make((2,), [1, 2])
    second = make((2,), [3, 4])
    total = Addition(Multiplication(first, second), first)
    total.forward()
    first.data[...] = [0, 0]
    total.forward()
    assert total.data.tolist() == [0, 0]