#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from typing_extensions import override
from collections.abc import Sequence
import logging
import numpy.typing

from nnop.itf.data import TensorType
from nnop.types import Dimension, ElementType, NNTensorType, PartialShape

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
    "NNOperReplaceSlice",
]

logger = logging.getLogger(__name__)


class NNOperReplaceSlice(NNOperator):
    """Copies arg0 and overwrites a strided slice of it with arg1.

    Attributes:
        lower_bounds: first included coordinate per axis
        upper_bounds: first excluded coordinate per axis
        strides: step per axis, all ones when omitted
    """

    NUM_INPUTS = 2

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
            "ReplaceSlice",
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
        arg0_shape = inputs_types[0].shape
        arg1_shape = inputs_types[1].shape

        merged_args_rank = Dimension.merge(arg0_shape.rank, arg1_shape.rank)
        self.check(
            merged_args_rank is not None,
            f"Argument ranks do not match (arg0 shape: {arg0_shape}, "
            f"arg1 shape: {arg1_shape}).",
        )
        assert merged_args_rank is not None

        arg0_et = inputs_types[0].dtype
        arg1_et = inputs_types[1].dtype
        merged_args_et = ElementType.merge(arg0_et, arg1_et)
        self.check(
            merged_args_et is not None,
            f"Argument element types do not match (arg0 element type: {arg0_et}, "
            f"arg1 element type: {arg1_et}).",
        )
        assert merged_args_et is not None

        output_rank = check_slice_bounds(
            self, self.lower_bounds, self.upper_bounds, self.strides
        )
        self.check(
            merged_args_rank.is_dynamic or merged_args_rank.length == output_rank,
            "Argument ranks do not match the rank of the lower bounds "
            f"({format_list(self.lower_bounds)}), upper bounds "
            f"({format_list(self.upper_bounds)}), and strides "
            f"({format_list(self.strides)}).",
        )

        check_upper_bounds_in_range(self, self.upper_bounds, arg0_shape)
        sliced_shape = slice_shape(self.lower_bounds, self.upper_bounds, self.strides)

        self.check(
            arg1_shape.compatible(sliced_shape),
            f"Shape of replacement tensor ({arg1_shape}) does not match the slice "
            f"shape ({sliced_shape}).",
        )

        # The attributes fix the output rank even when arg0's rank is unknown
        if arg0_shape.rank.is_static:
            result_shape = arg0_shape
        else:
            result_shape = PartialShape.dynamic(output_rank)
        logger.debug(
            "%s: inferred %s%s from %s, %s",
            self.name,
            merged_args_et,
            result_shape,
            arg0_shape,
            arg1_shape,
        )
        return [NNTensorType(result_shape, merged_args_et)]

    @override
    def forward(
        self, inputs: Sequence[numpy.typing.NDArray]
    ) -> list[numpy.typing.NDArray]:
        arg0, arg1 = inputs
        out = arg0.copy()
        out[slice_index(self.lower_bounds, self.upper_bounds, self.strides)] = arg1
        return [out]
