#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from dataclasses import dataclass
from typing_extensions import override
from typing import TypeAlias, Union
import numpy as np

__all__ = [
    "ElementType",
    "ElementTypeLike",
]


ElementTypeLike: TypeAlias = Union[str, None, "ElementType"]


@dataclass(frozen=True)
class ElementType:
    """The scalar type of a tensor's elements.

    The "dynamic" element type stands for a not yet specified type and
    merges with any other type.
    """

    name: str
    bitwidth: int
    is_real: bool
    is_signed: bool
    c_type: str

    @property
    def is_dynamic(self) -> bool:
        return self.name == "dynamic"

    @property
    def is_static(self) -> bool:
        return not self.is_dynamic

    @property
    def np_dtype(self) -> np.dtype:
        assert self.is_static, "numpy dtype requested on dynamic element type"
        return np.dtype(self.name)

    @classmethod
    def from_name(cls, name: str) -> "ElementType":
        canonical = _ALIASES.get(name, name)
        if canonical not in _TYPES:
            raise ValueError(f"unknown element type: {name}")
        return _TYPES[canonical]

    @classmethod
    def of(cls, etype: ElementTypeLike) -> "ElementType":
        if isinstance(etype, ElementType):
            return etype
        if etype is None:
            return _TYPES["dynamic"]
        return cls.from_name(etype)

    @staticmethod
    def merge(a: ElementTypeLike, b: ElementTypeLike) -> "ElementType | None":
        """Returns the common element type of a and b or None on mismatch."""
        a, b = ElementType.of(a), ElementType.of(b)
        if a.is_dynamic:
            return b
        if b.is_dynamic or a == b:
            return a
        return None

    @override
    def __str__(self) -> str:
        return self.name


_TYPES = {
    et.name: et
    for et in [
        ElementType("dynamic", 0, False, False, ""),
        ElementType("bool", 8, False, True, "char"),
        ElementType("float16", 16, True, True, "half"),
        ElementType("float32", 32, True, True, "float"),
        ElementType("float64", 64, True, True, "double"),
        ElementType("int8", 8, False, True, "int8_t"),
        ElementType("int16", 16, False, True, "int16_t"),
        ElementType("int32", 32, False, True, "int32_t"),
        ElementType("int64", 64, False, True, "int64_t"),
        ElementType("uint8", 8, False, False, "uint8_t"),
        ElementType("uint16", 16, False, False, "uint16_t"),
        ElementType("uint32", 32, False, False, "uint32_t"),
        ElementType("uint64", 64, False, False, "uint64_t"),
    ]
}

_ALIASES = {
    "boolean": "bool",
    "f16": "float16",
    "f32": "float32",
    "f64": "float64",
    "i8": "int8",
    "i16": "int16",
    "i32": "int32",
    "i64": "int64",
    "u8": "uint8",
    "u16": "uint16",
    "u32": "uint32",
    "u64": "uint64",
}

dynamic = _TYPES["dynamic"]
boolean = _TYPES["bool"]
f16 = _TYPES["float16"]
f32 = _TYPES["float32"]
f64 = _TYPES["float64"]
i8 = _TYPES["int8"]
i16 = _TYPES["int16"]
i32 = _TYPES["int32"]
i64 = _TYPES["int64"]
u8 = _TYPES["uint8"]
u16 = _TYPES["uint16"]
u32 = _TYPES["uint32"]
u64 = _TYPES["uint64"]
