#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from typing_extensions import override
from collections.abc import Sequence
from typing import TypeAlias, Any, NoReturn
from types import SimpleNamespace as NS
import numpy.typing

from nnop.itf.operator import Operator
from nnop.itf.data import TensorType
from nnop.types import NNTensorType

from .exceptions import OpValidationError

__all__ = [
    "NNOperator",
    "NNOperParameter",
]


NNOperatorAttr: TypeAlias = Any
NNOperatorAttrs: TypeAlias = NS


def format_list(values: Sequence[Any]) -> str:
    return "[" + ", ".join(str(v) for v in values) + "]"


class NNOperator(Operator):
    """Base of operator kinds.

    validate_and_infer_types() of every kind checks in the same staged
    order and reports the first failure: number of inputs, input ranks,
    element types, attributes self consistency, attributes against the
    input shapes, operands compatibility. Then the outputs are built.
    """

    NUM_INPUTS = 0

    def __init__(self, name: str, **attrs: NNOperatorAttr) -> None:
        self._name = name
        self._attrs = NS(**attrs)

    @property
    @override
    def name(self) -> str:
        return self._name

    @property
    @override
    def attrs(self) -> NNOperatorAttrs:
        return self._attrs

    def fail(self, message: str) -> NoReturn:
        raise OpValidationError(self._name, message)

    def check(self, cond: bool, message: str) -> None:
        if not cond:
            self.fail(message)

    def _check_num_inputs(self, inputs_types: Sequence[TensorType]) -> None:
        self.check(
            len(inputs_types) == self.NUM_INPUTS,
            f"Expected {self.NUM_INPUTS} inputs, got {len(inputs_types)}.",
        )

    @override
    def validate_and_infer_types(
        self, inputs_types: Sequence[TensorType]
    ) -> list[NNTensorType]:
        return [NNTensorType(t.shape, t.dtype) for t in inputs_types]

    @override
    def forward(
        self, inputs: Sequence[numpy.typing.NDArray]
    ) -> list[numpy.typing.NDArray]:
        return list(inputs)

    @override
    def __str__(self) -> str:
        attrs = ", ".join(f"{k}={v}" for k, v in self._attrs.__dict__.items())
        return f"{self._name}({attrs})"


class NNOperParameter(NNOperator):
    """Graph input, its output type is given at construction."""

    def __init__(self, type: NNTensorType) -> None:
        super().__init__("Parameter")
        self._type = type

    @property
    def type(self) -> NNTensorType:
        return self._type

    @override
    def validate_and_infer_types(
        self, inputs_types: Sequence[TensorType]
    ) -> list[NNTensorType]:
        self._check_num_inputs(inputs_types)
        return [self._type]

    @override
    def forward(
        self, inputs: Sequence[numpy.typing.NDArray]
    ) -> list[numpy.typing.NDArray]:
        raise RuntimeError("parameters are bound by the caller, not evaluated")

    @override
    def __str__(self) -> str:
        return f"{self._name}({self._type})"
