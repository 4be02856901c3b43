#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from collections.abc import Sequence

from nnop.graphs.node import NNNode

from ..template import Template
from ..substitutions import Substitutions
from ..primitives import Primitive

__all__ = [
    "affine_index",
    "axes_names",
    "layout",
    "direct_code",
]


DIRECT_TEMPLATE = Template(
    " - @inputs@ output(@output_shape@, topi=@primitive@(@args@)); "
)
DIRECT_INPUT_TEMPLATE = Template('input("@input_name@", @input_shape@);')


def affine_index(offset: int, terms: Sequence[tuple[str, int]]) -> str:
    """Formats offset + sum(axis * scale) with unit scales and zero offset elided."""
    parts = [f"{offset}"] if offset != 0 else []
    for axis, scale in terms:
        parts.append(axis if scale == 1 else f"{axis} * {scale}")
    return " + ".join(parts) if parts else "0"


def axes_names(rank: int, prefix: str = "D") -> list[str]:
    return [f"{prefix}{i}" for i in range(rank)]


def layout(indices: Sequence[str]) -> str:
    return "[" + ", ".join(indices) + "]"


def direct_code(node: NNNode, primitive: Primitive, attrs: str = "") -> str:
    """Renders a primitive call over all node inputs, followed by attrs."""
    inputs = []
    args = []
    for idx in range(len(node.inputs)):
        subs = (
            Substitutions()
            .text("input_name", f"input{idx}")
            .shape("input_shape", node.input_shape(idx))
        )
        inputs.append(DIRECT_INPUT_TEMPLATE.render(subs))
        args.append(f'args("input{idx}")')
    if attrs:
        args.append(attrs)
    subs = (
        Substitutions()
        .text("inputs", " ".join(inputs))
        .shape("output_shape", node.output_shape(0))
        .text("primitive", primitive)
        .text("args", ", ".join(args))
    )
    return DIRECT_TEMPLATE.render(subs)
