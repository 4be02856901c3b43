#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from typing_extensions import override
from collections.abc import Sequence
from typing import TypeAlias
import logging
import numpy as np
import numpy.typing

from nnop.itf.data import TensorType
from nnop.types import Dimension, ElementType, NNTensorType, PartialShape

from .operator import NNOperator, format_list

__all__ = [
    "NNOperConvolution",
    "DATA_FORMATS",
]

logger = logging.getLogger(__name__)


NNOperPairAttr: TypeAlias = int | tuple[int] | tuple[int, int]

# Axis positions of (batch, channels, spatial...) in data tensors and
# (output channels, input channels, kernel spatial...) in filters tensors.
DATA_FORMATS = {
    "NCHW": {"data": (0, 1, 2, 3), "filters": (0, 1, 2, 3)},
    "NHWC": {"data": (0, 3, 1, 2), "filters": (3, 2, 0, 1)},
}


def _pair(value: NNOperPairAttr, default: int) -> tuple[int, ...]:
    if value is None:
        return (default, default)
    if isinstance(value, int):
        return (value, value)
    value = tuple(value)
    if len(value) == 1:
        return (value[0], value[0])
    return value


class NNOperConvolution(NNOperator):
    """2D convolution over NCHW or NHWC data.

    Filters are laid out [F, C, KH, KW] for NCHW data and [KH, KW, C, F]
    for NHWC data. Attributes are per spatial axis, in (H, W) order.
    Checks follow the common order of NNOperator: input ranks, element
    types, then attributes and their fit with the inputs.
    """

    NUM_INPUTS = 2

    def __init__(
        self,
        window_movement_strides: NNOperPairAttr = 1,
        window_dilation_strides: NNOperPairAttr = 1,
        padding_below: NNOperPairAttr = 0,
        padding_above: NNOperPairAttr = 0,
        data_format: str = "NCHW",
    ) -> None:
        super().__init__(
            "Convolution",
            window_movement_strides=_pair(window_movement_strides, 1),
            window_dilation_strides=_pair(window_dilation_strides, 1),
            padding_below=_pair(padding_below, 0),
            padding_above=_pair(padding_above, 0),
            data_format=data_format,
        )

    @property
    def strides(self) -> tuple[int, ...]:
        return self.attrs.window_movement_strides

    @property
    def dilations(self) -> tuple[int, ...]:
        return self.attrs.window_dilation_strides

    @property
    def padding_below(self) -> tuple[int, ...]:
        return self.attrs.padding_below

    @property
    def padding_above(self) -> tuple[int, ...]:
        return self.attrs.padding_above

    @property
    def data_format(self) -> str:
        return self.attrs.data_format

    @property
    def is_nchw(self) -> bool:
        return self.data_format == "NCHW"

    @staticmethod
    def _dims(shape: PartialShape, axes: Sequence[int]) -> list[Dimension]:
        if shape.rank.is_dynamic:
            return [Dimension.dynamic() for _ in axes]
        return [shape[axis] for axis in axes]

    def _check_attrs(self) -> None:
        for attr in [
            "window_movement_strides",
            "window_dilation_strides",
            "padding_below",
            "padding_above",
        ]:
            value = getattr(self.attrs, attr)
            self.check(
                len(value) == 2,
                f"Attribute {attr} must have 2 spatial values, got {format_list(value)}.",
            )
        for i in range(2):
            self.check(
                self.strides[i] > 0,
                f"Window movement stride is not positive at axis {i} "
                f"(strides: {format_list(self.strides)}).",
            )
            self.check(
                self.dilations[i] > 0,
                f"Window dilation stride is not positive at axis {i} "
                f"(dilations: {format_list(self.dilations)}).",
            )
            self.check(
                self.padding_below[i] >= 0 and self.padding_above[i] >= 0,
                f"Padding is negative at axis {i} (padding below: "
                f"{format_list(self.padding_below)}, padding above: "
                f"{format_list(self.padding_above)}).",
            )
        self.check(
            self.data_format in DATA_FORMATS,
            f"Unsupported data format: {self.data_format}, expected one of "
            f"{format_list(DATA_FORMATS.keys())}.",
        )

    @override
    def validate_and_infer_types(
        self, inputs_types: Sequence[TensorType]
    ) -> list[NNTensorType]:
        self._check_num_inputs(inputs_types)
        data_shape = inputs_types[0].shape
        filters_shape = inputs_types[1].shape

        self.check(
            data_shape.rank.compatible(4),
            f"Data batch must have rank 4 (data batch shape: {data_shape}).",
        )
        self.check(
            filters_shape.rank.compatible(4),
            f"Filters must have rank 4 (filters shape: {filters_shape}).",
        )

        data_et = inputs_types[0].dtype
        filters_et = inputs_types[1].dtype
        merged_et = ElementType.merge(data_et, filters_et)
        self.check(
            merged_et is not None,
            f"Element types for data batch and filters do not match (data batch "
            f"element type: {data_et}, filters element type: {filters_et}).",
        )
        assert merged_et is not None

        self._check_attrs()

        layout = DATA_FORMATS[self.data_format]
        n, c, h, w = self._dims(data_shape, layout["data"])
        f, fc, kh, kw = self._dims(filters_shape, layout["filters"])

        spatial = []
        for i, (size, ksize) in enumerate([(h, kh), (w, kw)]):
            padded = size + self.padding_below[i] + self.padding_above[i]
            window = Dimension.dynamic()
            if ksize.is_static:
                self.check(
                    ksize.length > 0,
                    f"Filters spatial dimension is zero at axis {i} "
                    f"(filters shape: {filters_shape}).",
                )
                window = Dimension((ksize.length - 1) * self.dilations[i] + 1)
            if padded.is_static and window.is_static:
                self.check(
                    window.length <= padded.length,
                    f"Window after dilation has dimension {window} larger than the "
                    f"data shape after padding {padded} at axis {i} "
                    f"(data batch shape: {data_shape}, filters shape: {filters_shape}).",
                )
                spatial.append(
                    Dimension((padded.length - window.length) // self.strides[i] + 1)
                )
            else:
                spatial.append(Dimension.dynamic())

        channels = Dimension.merge(c, fc)
        self.check(
            channels is not None,
            f"Data batch channel count ({c}) does not match filter input channel "
            f"count ({fc}) (data batch shape: {data_shape}, filters shape: "
            f"{filters_shape}).",
        )

        ho, wo = spatial
        if self.is_nchw:
            result_shape = PartialShape([n, f, ho, wo])
        else:
            result_shape = PartialShape([n, ho, wo, f])
        logger.debug(
            "%s: inferred %s%s from %s, %s",
            self.name,
            merged_et,
            result_shape,
            data_shape,
            filters_shape,
        )
        return [NNTensorType(result_shape, merged_et)]

    @override
    def forward(
        self, inputs: Sequence[numpy.typing.NDArray]
    ) -> list[numpy.typing.NDArray]:
        data, filters = inputs
        if not self.is_nchw:
            data = data.transpose(0, 3, 1, 2)
            filters = filters.transpose(3, 2, 0, 1)
        (pbh, pbw), (pah, paw) = self.padding_below, self.padding_above
        sh, sw = self.strides
        dh, dw = self.dilations
        padded = np.pad(data, [(0, 0), (0, 0), (pbh, pah), (pbw, paw)])
        _, _, h, w = padded.shape
        f, _, kh, kw = filters.shape
        oh = (h - (kh - 1) * dh - 1) // sh + 1
        ow = (w - (kw - 1) * dw - 1) // sw + 1
        out = np.zeros((data.shape[0], f, oh, ow), dtype=data.dtype)
        for vkh in range(kh):
            for vkw in range(kw):
                patch = padded[
                    :,
                    :,
                    vkh * dh : vkh * dh + sh * (oh - 1) + 1 : sh,
                    vkw * dw : vkw * dw + sw * (ow - 1) + 1 : sw,
                ]
                out += np.einsum("nchw,fc->nfhw", patch, filters[:, :, vkh, vkw])
        if not self.is_nchw:
            out = out.transpose(0, 2, 3, 1)
        return [np.ascontiguousarray(out)]
