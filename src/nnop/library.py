#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from nnop.operators import (
    NNOperParameter,
    NNOperConvolution,
    NNOperReplaceSlice,
    NNOperSlice,
    NNOperDot,
)
from nnop.codegen.fragment import Dialect
from nnop.codegen.translators import convolution, replace_slice, slice, dot
from nnop.registry import register_operator, has_operator

__all__ = [
    "load_operators",
]


def load_operators() -> None:
    if has_operator("Convolution"):
        return
    register_operator("Parameter", NNOperParameter)
    register_operator(
        "Convolution",
        NNOperConvolution,
        {
            Dialect.DIRECT: convolution.translate_direct,
            Dialect.INDEXED: convolution.translate_indexed,
        },
    )
    register_operator(
        "ReplaceSlice",
        NNOperReplaceSlice,
        {Dialect.INDEXED: replace_slice.translate_indexed},
    )
    register_operator(
        "Slice",
        NNOperSlice,
        {
            Dialect.DIRECT: slice.translate_direct,
            Dialect.INDEXED: slice.translate_indexed,
        },
    )
    register_operator(
        "Dot",
        NNOperDot,
        {
            Dialect.DIRECT: dot.translate_direct,
            Dialect.INDEXED: dot.translate_indexed,
        },
    )


load_operators()
