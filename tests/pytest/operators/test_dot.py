import numpy as np
import pytest

from nnop.operators import NNOperDot, OpValidationError
from nnop.types import NNTensorType, PartialShape


def infer(a, b, dtype_a="float32", dtype_b="float32"):
    return NNOperDot().validate_and_infer_types(
        [NNTensorType(a, dtype_a), NNTensorType(b, dtype_b)]
    )[0]


def test_dot_shape():
    assert infer([4, 8], [8, 3]).shape == PartialShape([4, 3])


def test_dot_dynamic():
    assert infer([None, 8], [None, 3]).shape == PartialShape([None, 3])
    assert infer(PartialShape.dynamic(), [8, 3]).shape == PartialShape([None, 3])


def test_dot_reduction_mismatch():
    with pytest.raises(OpValidationError, match="Reduction dimensions do not match"):
        infer([4, 8], [7, 3])


def test_dot_rank():
    with pytest.raises(OpValidationError, match="Argument 1 must have rank 2"):
        infer([4, 8], [8])


def test_dot_element_types():
    with pytest.raises(OpValidationError, match="element types do not match"):
        infer([4, 8], [8, 3], "float32", "float64")


def test_dot_rank_reported_before_element_types():
    with pytest.raises(OpValidationError, match="Argument 1 must have rank 2"):
        infer([4, 8], [8], "float32", "float64")


def test_dot_forward():
    a = np.arange(6, dtype="float32").reshape(2, 3)
    b = np.arange(12, dtype="float32").reshape(3, 4)
    np.testing.assert_array_equal(NNOperDot().forward([a, b])[0], a @ b)
