#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from collections.abc import Iterator, Mapping, Sequence
from typing_extensions import override
from enum import Enum

from nnop.types import PartialShape

from .template import Template, render

__all__ = [
    "Substitutions",
    "vector_to_string",
]


def vector_to_string(values: Sequence[int]) -> str:
    return "[" + ", ".join(str(int(v)) for v in values) + "]"


class Substitutions(Mapping[str, str]):
    """Substitution map whose values are formatted from typed values.

    Each setter formats one kind of value such that all translators
    render shapes, integer lists and scalars the same way.
    Setters return self for chaining.
    """

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def _set(self, key: str, value: str) -> "Substitutions":
        assert Template.PATTERN.fullmatch(f"@{key}@"), f"invalid template key: {key!r}"
        self._values[key] = value
        return self

    def shape(self, key: str, shape: PartialShape) -> "Substitutions":
        return self._set(key, vector_to_string(shape.to_shape()))

    def ints(self, key: str, values: Sequence[int]) -> "Substitutions":
        return self._set(key, vector_to_string(values))

    def integer(self, key: str, value: int) -> "Substitutions":
        assert isinstance(value, int) and not isinstance(value, bool), (
            f"expected int for key {key}: {value!r}"
        )
        return self._set(key, str(value))

    def text(self, key: str, value: str | Enum) -> "Substitutions":
        if isinstance(value, Enum):
            value = value.value
        assert isinstance(value, str), f"expected str for key {key}: {value!r}"
        return self._set(key, value)

    def template(self, key: str, template: str | Template) -> "Substitutions":
        """Sets key to template rendered with the current substitutions."""
        return self._set(key, render(template, self))

    @override
    def __getitem__(self, key: str) -> str:
        return self._values[key]

    @override
    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    @override
    def __len__(self) -> int:
        return len(self._values)
