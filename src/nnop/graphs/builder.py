#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from types import TracebackType
from typing import Any

from .graph import NNGraph
from .context import NNGraphContext
from .node import NNNode


class graph_builder:
    """Collects the nodes created in its scope into an NNGraph.

    The graph is built when the scope exits. With infer=True the graph
    types are also inferred at that point, such that validation errors
    are raised at the end of the block.
    """

    def __init__(self, infer: bool = False, **graph_kwargs: Any) -> None:
        self._infer = infer
        self._graph_kwargs = graph_kwargs
        self._graph: NNGraph | None = None

    def __enter__(self) -> "graph_builder":
        NNGraphContext.push(**self._graph_kwargs)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        scope = NNGraphContext.pop()
        if exc_type is not None:
            return
        self._graph = scope.graph
        if self._infer:
            self._graph.infer_types()

    @property
    def graph(self) -> NNGraph:
        assert self._graph is not None, "can't get graph inside builder context"
        return self._graph

    def set_outputs(self, *outs: NNNode) -> None:
        NNGraphContext.outputs(*outs)

    def set_inputs(self, *inps: NNNode) -> None:
        NNGraphContext.inputs(*inps)
