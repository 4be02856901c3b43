#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from typing_extensions import override
from typing import TypeAlias, Union

__all__ = [
    "Dimension",
    "DimensionLike",
]


DimensionLike: TypeAlias = Union[int, None, "Dimension"]


class Dimension:
    """A tensor dimension which is either a static length or dynamic.

    A dynamic dimension acts as a wildcard for compatibility checks and
    merges, two static dimensions are compatible only when equal.
    Dimensions are immutable.
    """

    __slots__ = ("_length",)

    def __init__(self, length: int | None = None) -> None:
        if length is not None:
            if isinstance(length, bool) or not isinstance(length, int):
                raise TypeError(f"dimension length must be an int: {length!r}")
            if length < 0:
                raise ValueError(f"dimension length must be non negative: {length}")
        object.__setattr__(self, "_length", length)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def dynamic(cls) -> "Dimension":
        return cls(None)

    @classmethod
    def of(cls, dim: DimensionLike) -> "Dimension":
        if isinstance(dim, Dimension):
            return dim
        return cls(dim)

    @property
    def is_static(self) -> bool:
        return self._length is not None

    @property
    def is_dynamic(self) -> bool:
        return self._length is None

    @property
    def length(self) -> int:
        assert self._length is not None, "static length requested on dynamic dimension"
        return self._length

    def __int__(self) -> int:
        return self.length

    def compatible(self, other: DimensionLike) -> bool:
        other = Dimension.of(other)
        return self.is_dynamic or other.is_dynamic or self._length == other._length

    def same_scheme(self, other: DimensionLike) -> bool:
        other = Dimension.of(other)
        return self._length == other._length

    def relaxes(self, other: DimensionLike) -> bool:
        """True when self is at least as general as other."""
        other = Dimension.of(other)
        return self.is_dynamic or self._length == other._length

    def refines(self, other: DimensionLike) -> bool:
        """True when self is at least as specific as other."""
        other = Dimension.of(other)
        return other.is_dynamic or self._length == other._length

    @staticmethod
    def merge(a: DimensionLike, b: DimensionLike) -> "Dimension | None":
        """Returns the most specific dimension compatible with a and b.

        Returns None when a and b are static and differ.
        """
        a, b = Dimension.of(a), Dimension.of(b)
        if a.is_dynamic:
            return b
        if b.is_dynamic:
            return a
        if a._length != b._length:
            return None
        return a

    def _arith(self, other: DimensionLike, fn) -> "Dimension":
        other = Dimension.of(other)
        if self.is_dynamic or other.is_dynamic:
            return Dimension.dynamic()
        return Dimension(fn(self.length, other.length))

    def __add__(self, other: DimensionLike) -> "Dimension":
        return self._arith(other, lambda x, y: x + y)

    def __sub__(self, other: DimensionLike) -> "Dimension":
        return self._arith(other, lambda x, y: x - y)

    def __mul__(self, other: DimensionLike) -> "Dimension":
        return self._arith(other, lambda x, y: x * y)

    __radd__ = __add__
    __rmul__ = __mul__

    @override
    def __eq__(self, other: object) -> bool:
        if isinstance(other, int) and not isinstance(other, bool):
            return self._length == other
        if not isinstance(other, Dimension):
            return NotImplemented
        return self._length == other._length

    @override
    def __hash__(self) -> int:
        # Consistent with equality to plain ints
        return hash(self._length)

    @override
    def __str__(self) -> str:
        return "?" if self._length is None else str(self._length)

    @override
    def __repr__(self) -> str:
        return f"Dimension({self._length})"
