#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from typing_extensions import override
from collections.abc import Sequence
import numpy.typing

from nnop.itf.data import TensorType
from nnop.types import NNTensorType

from .operator import NNOperator, format_list
from .slicing import (
    Coordinate,
    default_strides,
    check_slice_bounds,
    check_upper_bounds_in_range,
    slice_shape,
    slice_index,
)

__all__ = [
    "NNOperSlice",
]


class NNOperSlice(NNOperator):
    """Extracts a strided slice of arg0."""

    NUM_INPUTS = 1

    def __init__(
        self,
        lower_bounds: Sequence[int],
        upper_bounds: Sequence[int],
        strides: Sequence[int] | None = None,
    ) -> None:
        lower_bounds = tuple(lower_bounds)
        upper_bounds = tuple(upper_bounds)
        strides = default_strides(lower_bounds, strides)
        super().__init__(
            "Slice",
            lower_bounds=lower_bounds,
            upper_bounds=upper_bounds,
            strides=strides,
        )

    @property
    def lower_bounds(self) -> Coordinate:
        return self.attrs.lower_bounds

    @property
    def upper_bounds(self) -> Coordinate:
        return self.attrs.upper_bounds

    @property
    def strides(self) -> Coordinate:
        return self.attrs.strides

    @override
    def validate_and_infer_types(
        self, inputs_types: Sequence[TensorType]
    ) -> list[NNTensorType]:
        self._check_num_inputs(inputs_types)
        arg_shape = inputs_types[0].shape
        output_rank = check_slice_bounds(
            self, self.lower_bounds, self.upper_bounds, self.strides
        )
        self.check(
            arg_shape.rank.is_dynamic or arg_shape.rank.length == output_rank,
            f"Input rank does not match the rank of the lower bounds "
            f"({format_list(self.lower_bounds)}), upper bounds "
            f"({format_list(self.upper_bounds)}), and strides "
            f"({format_list(self.strides)}) (argument shape: {arg_shape}).",
        )
        check_upper_bounds_in_range(self, self.upper_bounds, arg_shape)
        result_shape = slice_shape(self.lower_bounds, self.upper_bounds, self.strides)
        return [NNTensorType(result_shape, inputs_types[0].dtype)]

    @override
    def forward(
        self, inputs: Sequence[numpy.typing.NDArray]
    ) -> list[numpy.typing.NDArray]:
        index = slice_index(self.lower_bounds, self.upper_bounds, self.strides)
        return [inputs[0][index].copy()]
