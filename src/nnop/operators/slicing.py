#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from collections.abc import Sequence
from typing import TypeAlias

from nnop.types import Dimension, PartialShape

from .operator import NNOperator, format_list

__all__ = [
    "Coordinate",
    "Strides",
    "default_strides",
    "check_slice_bounds",
    "check_upper_bounds_in_range",
    "sliced_dim",
    "slice_shape",
    "slice_index",
]


Coordinate: TypeAlias = tuple[int, ...]
Strides: TypeAlias = tuple[int, ...]


def default_strides(lower_bounds: Sequence[int], strides: Sequence[int] | None) -> Strides:
    """Returns the strides, all ones of the bounds rank when none are given."""
    if strides is None or len(strides) == 0:
        return tuple([1] * len(lower_bounds))
    return tuple(strides)


def check_slice_bounds(
    op: NNOperator, lower_bounds: Coordinate, upper_bounds: Coordinate, strides: Strides
) -> int:
    """Checks bounds and strides self consistency and returns the slice rank."""
    op.check(
        len(lower_bounds) == len(upper_bounds) and len(lower_bounds) == len(strides),
        f"Ranks of lower bounds ({format_list(lower_bounds)}), upper bounds "
        f"({format_list(upper_bounds)}) and strides ({format_list(strides)}) "
        "do not match.",
    )
    rank = len(upper_bounds)
    for i in range(rank):
        op.check(
            lower_bounds[i] >= 0,
            f"Lower bound for slice is negative at axis {i} "
            f"(lower bounds: {format_list(lower_bounds)}).",
        )
        op.check(
            lower_bounds[i] <= upper_bounds[i],
            f"Lower bound for slice is greater than upper bound at axis {i} "
            f"(lower bounds: {format_list(lower_bounds)}, "
            f"upper bounds: {format_list(upper_bounds)}).",
        )
        op.check(
            strides[i] != 0,
            f"Stride for slice is zero at axis {i} (strides: {format_list(strides)}).",
        )
        op.check(
            strides[i] > 0,
            f"Stride for slice is negative at axis {i} "
            f"(strides: {format_list(strides)}).",
        )
    return rank


def sliced_dim(lower: int, upper: int, stride: int) -> int:
    # Every stride-th element, plus a partial final one.
    extent = upper - lower
    return extent // stride + (0 if extent % stride == 0 else 1)


def check_upper_bounds_in_range(
    op: NNOperator, upper_bounds: Coordinate, arg_shape: PartialShape
) -> None:
    """Checks upper bounds against the statically known input dimensions.

    Dynamic rank or dynamic dimensions are accepted as is.
    """
    if arg_shape.rank.is_dynamic:
        return
    for i, upper in enumerate(upper_bounds):
        dim = arg_shape[i]
        op.check(
            dim.is_dynamic or upper <= dim.length,
            f"Upper bound for slice at axis {i} is out of range "
            f"(upper bounds: {format_list(upper_bounds)}, argument shape: {arg_shape}).",
        )


def slice_shape(
    lower_bounds: Coordinate, upper_bounds: Coordinate, strides: Strides
) -> PartialShape:
    return PartialShape(
        [
            Dimension(sliced_dim(lower, upper, stride))
            for lower, upper, stride in zip(lower_bounds, upper_bounds, strides)
        ]
    )


def slice_index(
    lower_bounds: Coordinate, upper_bounds: Coordinate, strides: Strides
) -> tuple[slice, ...]:
    """Returns the numpy index of the slice."""
    return tuple(
        slice(lower, upper, stride)
        for lower, upper, stride in zip(lower_bounds, upper_bounds, strides)
    )
