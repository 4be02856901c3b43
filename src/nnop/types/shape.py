#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from typing_extensions import override
from collections.abc import Iterable, Iterator
from typing import TypeAlias, Union

from .dimension import Dimension, DimensionLike

__all__ = [
    "PartialShape",
    "ShapeLike",
]


ShapeLike: TypeAlias = Union[None, Iterable[DimensionLike], "PartialShape"]


class PartialShape:
    """A tensor shape with possibly unknown rank or dimensions.

    A PartialShape is either of dynamic rank, in which case nothing is
    known about its dimensions, or of static rank with a tuple of
    Dimension, each of which may be dynamic.
    Once built, the rank and dimensions of a shape never change.
    """

    __slots__ = ("_dims",)

    def __init__(self, dims: Iterable[DimensionLike] | None = None) -> None:
        if dims is None:
            dims_tuple = None
        else:
            dims_tuple = tuple(Dimension.of(d) for d in dims)
        object.__setattr__(self, "_dims", dims_tuple)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def dynamic(cls, rank: DimensionLike = None) -> "PartialShape":
        rank = Dimension.of(rank)
        if rank.is_dynamic:
            return cls(None)
        return cls([Dimension.dynamic()] * rank.length)

    @classmethod
    def of(cls, shape: ShapeLike) -> "PartialShape":
        if isinstance(shape, PartialShape):
            return shape
        return cls(shape)

    @property
    def rank(self) -> Dimension:
        if self._dims is None:
            return Dimension.dynamic()
        return Dimension(len(self._dims))

    @property
    def dims(self) -> tuple[Dimension, ...]:
        assert self._dims is not None, "dimensions requested on dynamic rank shape"
        return self._dims

    @property
    def is_static(self) -> bool:
        return self._dims is not None and all(d.is_static for d in self._dims)

    @property
    def is_dynamic(self) -> bool:
        return not self.is_static

    def __len__(self) -> int:
        return len(self.dims)

    def __iter__(self) -> Iterator[Dimension]:
        return iter(self.dims)

    def __getitem__(self, idx: int) -> Dimension:
        dims = self.dims
        assert 0 <= idx < len(dims), (
            f"shape index out of range: {idx} for rank {len(dims)}"
        )
        return dims[idx]

    def to_shape(self) -> tuple[int, ...]:
        assert self.is_static, f"static shape requested on dynamic shape: {self}"
        return tuple(d.length for d in self.dims)

    def compatible(self, other: ShapeLike) -> bool:
        other = PartialShape.of(other)
        if self._dims is None or other._dims is None:
            return True
        if len(self._dims) != len(other._dims):
            return False
        return all(a.compatible(b) for a, b in zip(self._dims, other._dims))

    def same_scheme(self, other: ShapeLike) -> bool:
        other = PartialShape.of(other)
        if self._dims is None or other._dims is None:
            return self._dims is None and other._dims is None
        if len(self._dims) != len(other._dims):
            return False
        return all(a.same_scheme(b) for a, b in zip(self._dims, other._dims))

    def relaxes(self, other: ShapeLike) -> bool:
        other = PartialShape.of(other)
        if self._dims is None:
            return True
        if other._dims is None or len(self._dims) != len(other._dims):
            return False
        return all(a.relaxes(b) for a, b in zip(self._dims, other._dims))

    def refines(self, other: ShapeLike) -> bool:
        other = PartialShape.of(other)
        if other._dims is None:
            return True
        if self._dims is None or len(self._dims) != len(other._dims):
            return False
        return all(a.refines(b) for a, b in zip(self._dims, other._dims))

    @staticmethod
    def merge(a: ShapeLike, b: ShapeLike) -> "PartialShape | None":
        """Returns the most specific shape compatible with a and b.

        Returns None when a and b are not compatible.
        """
        a, b = PartialShape.of(a), PartialShape.of(b)
        if a._dims is None:
            return b
        if b._dims is None:
            return a
        if len(a._dims) != len(b._dims):
            return None
        merged = []
        for da, db in zip(a._dims, b._dims):
            dim = Dimension.merge(da, db)
            if dim is None:
                return None
            merged.append(dim)
        return PartialShape(merged)

    @override
    def __eq__(self, other: object) -> bool:
        if isinstance(other, (tuple, list)):
            other = PartialShape(other)
        if not isinstance(other, PartialShape):
            return NotImplemented
        return self.same_scheme(other)

    @override
    def __hash__(self) -> int:
        # Consistent with equality to tuples of ints
        return hash(self._dims)

    @override
    def __str__(self) -> str:
        if self._dims is None:
            return "?"
        return "{" + ",".join(str(d) for d in self._dims) + "}"

    @override
    def __repr__(self) -> str:
        if self._dims is None:
            return "PartialShape(None)"
        return f"PartialShape([{', '.join(repr(d._length) for d in self._dims)}])"
