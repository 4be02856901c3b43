import numpy as np
import pytest

from nnop.operators import NNOperSlice, OpValidationError
from nnop.types import NNTensorType, PartialShape


def infer(op, shape, dtype="float32"):
    return op.validate_and_infer_types([NNTensorType(shape, dtype)])[0]


def test_slice_shape():
    op = NNOperSlice([2, 0], [7, 4], [2, 2])
    out = infer(op, [10, 4])
    assert out.shape == PartialShape([3, 2])
    assert str(out) == "float32{3,2}"


def test_slice_dynamic_input():
    op = NNOperSlice([0], [12])
    assert infer(op, [None]).shape == PartialShape([12])
    assert infer(op, PartialShape.dynamic()).shape == PartialShape([12])


def test_slice_out_of_range():
    with pytest.raises(OpValidationError, match="out of range"):
        infer(NNOperSlice([0], [12]), [10])


def test_slice_rank_mismatch():
    with pytest.raises(OpValidationError, match="Input rank does not match"):
        infer(NNOperSlice([0], [2]), [4, 4])


def test_slice_forward():
    op = NNOperSlice([1], [8], [3])
    out = op.forward([np.arange(10)])[0]
    np.testing.assert_array_equal(out, [1, 4, 7])
