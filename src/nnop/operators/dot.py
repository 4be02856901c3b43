#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from typing_extensions import override
from collections.abc import Sequence
import numpy as np
import numpy.typing

from nnop.itf.data import TensorType
from nnop.types import Dimension, ElementType, NNTensorType, PartialShape

from .operator import NNOperator

__all__ = [
    "NNOperDot",
]


class NNOperDot(NNOperator):
    """Matrix product of [I, K] and [K, J] inputs."""

    NUM_INPUTS = 2

    def __init__(self) -> None:
        super().__init__("Dot")

    @override
    def validate_and_infer_types(
        self, inputs_types: Sequence[TensorType]
    ) -> list[NNTensorType]:
        self._check_num_inputs(inputs_types)
        a_shape, b_shape = inputs_types[0].shape, inputs_types[1].shape
        for idx, shape in enumerate([a_shape, b_shape]):
            self.check(
                shape.rank.compatible(2),
                f"Argument {idx} must have rank 2 (arg{idx} shape: {shape}).",
            )
        merged_et = ElementType.merge(inputs_types[0].dtype, inputs_types[1].dtype)
        self.check(
            merged_et is not None,
            f"Argument element types do not match (arg0 element type: "
            f"{inputs_types[0].dtype}, arg1 element type: {inputs_types[1].dtype}).",
        )
        i, k = a_shape if a_shape.rank.is_static else PartialShape.dynamic(2)
        bk, j = b_shape if b_shape.rank.is_static else PartialShape.dynamic(2)
        self.check(
            Dimension.merge(k, bk) is not None,
            f"Reduction dimensions do not match (arg0 shape: {a_shape}, "
            f"arg1 shape: {b_shape}).",
        )
        return [NNTensorType(PartialShape([i, j]), merged_et)]

    @override
    def forward(
        self, inputs: Sequence[numpy.typing.NDArray]
    ) -> list[numpy.typing.NDArray]:
        return [np.matmul(inputs[0], inputs[1])]
