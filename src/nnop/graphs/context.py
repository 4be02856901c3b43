#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from typing import Any
import threading

from .graph import NNGraph
from .node import NNNode
from .utils import NNGraphUtils


__all__ = [
    "NNGraphContext",
]


class NNGraphScope:
    def __init__(self, **graph_kwargs: Any) -> None:
        self._nodes: list[NNNode] = []
        self._outputs: list[NNNode] = []
        self._inputs: list[NNNode] = []
        self._graph_kwargs = graph_kwargs

    def add_nodes(self, *nodes: NNNode) -> None:
        self._nodes.extend(nodes)

    def add_outputs(self, *outs: NNNode) -> None:
        self._outputs.extend(outs)

    def add_inputs(self, *inps: NNNode) -> None:
        self._inputs.extend(inps)

    def _infer_inputs(self, inps_seed: list[NNNode]) -> list[NNNode]:
        # Parameters of the scope, then parameters captured from outer scopes
        params = [node for node in self._nodes if node.is_parameter]
        inputs = NNGraphUtils.unique(
            inps_seed + params + NNGraphUtils.get_external_inputs(self._nodes)
        )
        for node in inputs:
            if not node.is_parameter:
                raise RuntimeError(
                    f"graph input {node.name} is not a parameter: {node.kind}"
                )
        return inputs

    def _infer_outputs(self, outs_seed: list[NNNode]) -> list[NNNode]:
        sinks = [
            node for node in NNGraphUtils.get_sinks(self._nodes) if not node.is_parameter
        ]
        return NNGraphUtils.unique(outs_seed + sinks)

    @property
    def graph(self) -> NNGraph:
        graph = NNGraph(**self._graph_kwargs)
        inputs = self._infer_inputs(self._inputs)
        outputs = self._infer_outputs(self._outputs)
        defs = set(self._nodes)
        graph.add_nodes([node for node in inputs if node not in defs] + self._nodes)
        graph.set_inputs(inputs)
        graph.set_outputs(outputs)
        return graph


class NNGraphScopes(threading.local):
    _scopes: list[NNGraphScope]

    def __init__(self) -> None:
        # Initialize a global graph builder by default
        self._scopes = [NNGraphScope()]

    def push(self, **graph_kwargs: Any) -> None:
        self._scopes.append(NNGraphScope(**graph_kwargs))

    def pop(self) -> NNGraphScope:
        assert len(self._scopes) > 1
        return self._scopes.pop()

    @property
    def current(self) -> NNGraphScope:
        return self._scopes[-1]

    def append(self, node: NNNode) -> NNNode:
        # The default global scope does not retain nodes
        for scope in self._scopes[1:]:
            scope.add_nodes(node)
        return node

    def outputs(self, *outs: NNNode) -> None:
        return self.current.add_outputs(*outs)

    def inputs(self, *inps: NNNode) -> None:
        return self.current.add_inputs(*inps)


NNGraphContext = NNGraphScopes()
