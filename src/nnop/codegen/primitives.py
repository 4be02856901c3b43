#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from enum import Enum

__all__ = [
    "Primitive",
    "ExecutionPlan",
    "get_primitive",
    "get_plan",
]


class Primitive(Enum):
    """Backend primitives called by the direct dialect."""

    CONV2D_NCHW = "topi.nn.conv2d_nchw"
    CONV2D_NHWC = "topi.nn.conv2d_nhwc"
    MATMUL = "topi.nn.matmul"
    STRIDED_SLICE = "topi.strided_slice"


class ExecutionPlan(Enum):
    """Execution plans hinted to the scheduler by the indexed dialect."""

    CONVFWD_NCHW = "convfwd_nchw_v1"
    CONVFWD_NHWC = "convfwd_nhwc_v1"
    MATMUL = "matmul_v1"
    SLICE = "slice_v1"
    REPLACE_SLICE = "replace_slice_v1"


# Layout "" stands for layout independent operators.
_PRIMITIVES: dict[tuple[str, str], Primitive] = {
    ("Convolution", "NCHW"): Primitive.CONV2D_NCHW,
    ("Convolution", "NHWC"): Primitive.CONV2D_NHWC,
    ("Dot", ""): Primitive.MATMUL,
    ("Slice", ""): Primitive.STRIDED_SLICE,
}

_PLANS: dict[tuple[str, str], ExecutionPlan] = {
    ("Convolution", "NCHW"): ExecutionPlan.CONVFWD_NCHW,
    ("Convolution", "NHWC"): ExecutionPlan.CONVFWD_NHWC,
    ("Dot", ""): ExecutionPlan.MATMUL,
    ("Slice", ""): ExecutionPlan.SLICE,
    ("ReplaceSlice", ""): ExecutionPlan.REPLACE_SLICE,
}


def get_primitive(kind: str, layout: str = "") -> Primitive:
    key = (kind, layout)
    assert key in _PRIMITIVES, f"no backend primitive for {kind} with layout {layout!r}"
    return _PRIMITIVES[key]


def get_plan(kind: str, layout: str = "") -> ExecutionPlan:
    key = (kind, layout)
    assert key in _PLANS, f"no execution plan for {kind} with layout {layout!r}"
    return _PLANS[key]
