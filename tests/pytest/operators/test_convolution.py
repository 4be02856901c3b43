import numpy as np
import pytest

from nnop.operators import NNOperConvolution, OpValidationError
from nnop.types import NNTensorType, PartialShape


def infer(op, data, filters, dtype="float32"):
    return op.validate_and_infer_types(
        [NNTensorType(data, dtype), NNTensorType(filters, dtype)]
    )[0]


def test_conv_nchw():
    op = NNOperConvolution(
        window_movement_strides=2, padding_below=3, padding_above=3
    )
    out = infer(op, [1, 3, 224, 224], [64, 3, 7, 7])
    assert out.shape == PartialShape([1, 64, 112, 112])


def test_conv_nhwc():
    op = NNOperConvolution(data_format="NHWC")
    out = infer(op, [2, 10, 12, 3], [3, 3, 3, 8])
    assert out.shape == PartialShape([2, 8, 10, 8])


def test_conv_dilation_and_asymmetric_padding():
    op = NNOperConvolution(
        window_dilation_strides=(2, 1), padding_below=(1, 0), padding_above=(0, 2)
    )
    out = infer(op, [1, 1, 9, 9], [1, 1, 3, 3])
    # H: 9 + 1 - 5 + 1, W: 9 + 2 - 3 + 1
    assert out.shape == PartialShape([1, 1, 6, 9])


def test_conv_attrs_normalized():
    op = NNOperConvolution(window_movement_strides=(2,), padding_below=[1, 2])
    assert op.strides == (2, 2)
    assert op.padding_below == (1, 2)
    assert op.padding_above == (0, 0)
    assert op.dilations == (1, 1)


def test_conv_dynamic_spatial():
    op = NNOperConvolution()
    out = infer(op, [1, 3, None, 8], [4, 3, 3, 3])
    assert out.shape == PartialShape([1, 4, None, 6])
    out = infer(op, PartialShape.dynamic(), [4, 3, 3, 3])
    assert out.shape == PartialShape([None, 4, None, None])


def test_conv_channels_mismatch():
    with pytest.raises(OpValidationError, match="channel count"):
        infer(NNOperConvolution(), [1, 3, 8, 8], [4, 2, 3, 3])


def test_conv_window_too_large():
    with pytest.raises(OpValidationError, match="larger than the data shape"):
        infer(NNOperConvolution(), [1, 3, 2, 8], [4, 3, 3, 3])


def test_conv_rank():
    with pytest.raises(OpValidationError, match="Data batch must have rank 4"):
        infer(NNOperConvolution(), [1, 3, 8], [4, 3, 3, 3])


def test_conv_rank_reported_before_element_types():
    op = NNOperConvolution()
    with pytest.raises(OpValidationError, match="Data batch must have rank 4"):
        op.validate_and_infer_types(
            [
                NNTensorType([1, 3, 8], "float32"),
                NNTensorType([4, 3, 3, 3], "int32"),
            ]
        )


def test_conv_window_reported_before_channels():
    with pytest.raises(OpValidationError, match="larger than the data shape"):
        infer(NNOperConvolution(), [1, 3, 2, 8], [4, 2, 3, 3])


def test_conv_zero_stride():
    op = NNOperConvolution(window_movement_strides=(1, 0))
    with pytest.raises(OpValidationError, match="stride is not positive at axis 1"):
        infer(op, [1, 3, 8, 8], [4, 3, 3, 3])


def test_conv_bad_data_format():
    with pytest.raises(OpValidationError, match="Unsupported data format"):
        infer(NNOperConvolution(data_format="NCDHW"), [1, 3, 8, 8], [4, 3, 3, 3])


@pytest.mark.parametrize("data_format", ["NCHW", "NHWC"])
def test_conv_forward_matches_loops(data_format):
    op = NNOperConvolution(
        window_movement_strides=(2, 1), window_dilation_strides=(1, 2),
        padding_below=1, padding_above=(0, 1), data_format=data_format,
    )
    rng = np.random.default_rng(0)
    data = rng.random((1, 2, 6, 7)).astype("float32")
    filters = rng.random((3, 2, 3, 2)).astype("float32")
    padded = np.pad(data, [(0, 0), (0, 0), (1, 0), (1, 1)])
    expected = np.zeros((1, 3, 3, 7), dtype="float32")
    for f, ho, wo in np.ndindex(3, 3, 7):
        for c, kh, kw in np.ndindex(2, 3, 2):
            expected[0, f, ho, wo] += (
                padded[0, c, ho * 2 + kh, wo + kw * 2] * filters[f, c, kh, kw]
            )
    if data_format == "NHWC":
        out = op.forward([data.transpose(0, 2, 3, 1), filters.transpose(2, 3, 1, 0)])[0]
        out = out.transpose(0, 3, 1, 2)
    else:
        out = op.forward([data, filters])[0]
    expected_shape = infer(
        op,
        list(data.shape) if data_format == "NCHW" else [1, 6, 7, 2],
        list(filters.shape) if data_format == "NCHW" else [3, 2, 2, 3],
    ).shape
    assert expected_shape.to_shape() == (
        (1, 3, 3, 7) if data_format == "NCHW" else (1, 3, 7, 3)
    )
    np.testing.assert_allclose(out, expected, rtol=1e-5)
