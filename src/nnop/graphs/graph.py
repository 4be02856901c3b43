#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from typing_extensions import override
from collections.abc import Sequence
from typing import TypeAlias
import logging
import numpy.typing

from nnop.itf.graph import Graph
from nnop.types import NNTensorType
from nnop.codegen.fragment import Dialect, KernelFragment
from nnop.registry import translate

from .node import NNNode
from .utils import NNGraphUtils

__all__ = [
    "NNGraph",
]

logger = logging.getLogger(__name__)


InputsType: TypeAlias = list[NNNode]
OutputsType: TypeAlias = list[NNNode]
NodesType: TypeAlias = list[NNNode]


class NNGraph(Graph):
    def __init__(self, name: str | None = None) -> None:
        self._inputs: InputsType = []
        self._outputs: OutputsType = []
        self._nodes: NodesType = []
        self._name = name

    @property
    @override
    def name(self) -> str:
        return "" if self._name is None else self._name

    @property
    @override
    def nodes(self) -> dict[str, NNNode]:
        return {node.name: node for node in self._nodes}

    @property
    @override
    def inputs(self) -> list[str]:
        return [node.name for node in self._inputs]

    @property
    @override
    def outputs(self) -> list[str]:
        return [node.name for node in self._outputs]

    def add_nodes(self, nodes: NodesType) -> None:
        names = {node.name for node in self._nodes}
        for node in nodes:
            if node.name in names:
                raise RuntimeError(f"non unique name for node: {node.name}")
            names.add(node.name)
        self._nodes.extend(nodes)

    @property
    def inputs_nodes(self) -> list[NNNode]:
        return self._inputs

    @property
    def outputs_nodes(self) -> list[NNNode]:
        return self._outputs

    def set_inputs(self, inputs: InputsType) -> None:
        assert all(node.is_parameter for node in inputs), "graph inputs must be parameters"
        self._inputs = inputs

    def set_outputs(self, outputs: OutputsType) -> None:
        self._outputs = outputs

    def topological_nodes(self) -> list[NNNode]:
        return NNGraphUtils.get_nodes_topological(self._nodes)

    @override
    def infer_types(self) -> list[NNTensorType]:
        for node in self.topological_nodes():
            if not node.is_resolved:
                node.infer_types()
        outputs_types = [node.outputs_types[0] for node in self._outputs]
        logger.info(
            "graph %s: inferred outputs %s",
            self.name,
            ", ".join(str(t) for t in outputs_types),
        )
        return outputs_types

    @override
    def translate(self, dialect: Dialect | str) -> dict[str, KernelFragment]:
        """Translates all operation nodes, in topological order.

        Types must have been inferred before.
        """
        dialect = Dialect.from_name(dialect)
        return {
            node.name: translate(node, dialect)
            for node in self.topological_nodes()
            if not node.is_parameter
        }

    @override
    def forward(
        self, inputs: Sequence[numpy.typing.NDArray]
    ) -> list[numpy.typing.NDArray]:
        assert len(inputs) == len(self._inputs), (
            f"forward inputs size mismatch: {len(inputs)} != {len(self._inputs)}"
        )
        outputs_map = {node.name: inp for node, inp in zip(self._inputs, inputs)}
        for node in self.topological_nodes():
            if node.is_parameter:
                assert node.name in outputs_map, f"unbound graph input: {node.name}"
                continue
            inps = [outputs_map[name] for name in node.inputs]
            outputs_map[node.name] = node.forward(inps)[0]
        return [outputs_map[node.name] for node in self._outputs]

    @override
    def __str__(self) -> str:
        nodes = NNGraphUtils.get_nodes_topological_from_seed(
            self._nodes, self._outputs
        )
        graph_str = "graph:\n"
        if self.name != "":
            graph_str += f"  name: {self._name}\n"
        if len(self._inputs) > 0:
            graph_str += "  inputs:\n"
            for name in self.inputs:
                graph_str += f"  - {name}\n"
        else:
            graph_str += "  inputs: []\n"
        if len(self._outputs) > 0:
            graph_str += "  outputs:\n"
            for name in self.outputs:
                graph_str += f"  - {name}\n"
        else:
            graph_str += "  outputs: []\n"
        if len(self._nodes) > 0:
            graph_str += "  nodes:\n"
            for node in nodes:
                graph_str += f"    {node.name}: {node}\n"
        else:
            graph_str += "  nodes: {}\n"
        return graph_str
