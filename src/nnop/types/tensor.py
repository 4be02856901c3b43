#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from typing_extensions import override

from nnop.itf.data import TensorType

from .dimension import Dimension
from .shape import PartialShape, ShapeLike
from .element import ElementType, ElementTypeLike

__all__ = [
    "NNTensorType",
]


class NNTensorType(TensorType):
    def __init__(self, shape: ShapeLike = None, dtype: ElementTypeLike = None) -> None:
        self._shape = PartialShape.of(shape)
        self._dtype = ElementType.of(dtype)

    @property
    @override
    def shape(self) -> PartialShape:
        return self._shape

    @property
    @override
    def dtype(self) -> ElementType:
        return self._dtype

    @property
    @override
    def rank(self) -> Dimension:
        return self._shape.rank

    @override
    def is_constant(self) -> bool:
        return self._shape.is_static and self._dtype.is_static

    @property
    def constant_shape(self) -> tuple[int, ...]:
        return self._shape.to_shape()

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NNTensorType):
            return NotImplemented
        return self._shape == other._shape and self._dtype == other._dtype

    @override
    def __hash__(self) -> int:
        return hash((self._shape, self._dtype))

    @override
    def __str__(self) -> str:
        return f"{self._dtype}{self._shape}"

    @override
    def __repr__(self) -> str:
        return f"NNTensorType(shape={self._shape!r}, dtype={self._dtype.name!r})"
