#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from collections.abc import Iterable

from .node import NNNode


__all__ = [
    "NNGraphUtils",
]


class NNGraphUtils:
    @staticmethod
    def unique(nodes: Iterable[NNNode]) -> list[NNNode]:
        """Returns nodes without duplicates, first occurrence order."""
        return list({node.node_idx: node for node in nodes}.values())

    @staticmethod
    def get_sinks(nodes: list[NNNode]) -> list[NNNode]:
        """Returns the nodes not consumed by any other node of nodes."""
        consumed = {src.node_idx for node in nodes for src in node.inputs_nodes}
        return [node for node in nodes if node.node_idx not in consumed]

    @staticmethod
    def get_external_inputs(nodes: list[NNNode]) -> list[NNNode]:
        """Returns the producers read by nodes but not part of nodes."""
        defined = {node.node_idx for node in nodes}
        return NNGraphUtils.unique(
            src
            for node in nodes
            for src in node.inputs_nodes
            if src.node_idx not in defined
        )

    @staticmethod
    def get_nodes_topological_from_seed(
        nodes: list[NNNode], seed: list[NNNode]
    ) -> list[NNNode]:
        """Returns the nodes reachable backward from seed, producers first.

        The walk is restricted to nodes, and the order among independent
        producers follows the inputs order.
        """
        assert len(NNGraphUtils.unique(nodes)) == len(nodes), "duplicate nodes"
        members = {node.node_idx for node in nodes}
        assert all(node.node_idx in members for node in seed), "seed outside nodes"
        ordered: list[NNNode] = []
        visited: set[int] = set()
        for root in seed:
            stack = [(root, False)]
            while stack:
                node, expanded = stack.pop()
                if expanded:
                    ordered.append(node)
                    continue
                if node.node_idx in visited or node.node_idx not in members:
                    continue
                visited.add(node.node_idx)
                stack.append((node, True))
                for src in reversed(node.inputs_nodes):
                    stack.append((src, False))
        return ordered

    @staticmethod
    def get_nodes_topological(nodes: list[NNNode]) -> list[NNNode]:
        return NNGraphUtils.get_nodes_topological_from_seed(
            nodes, NNGraphUtils.get_sinks(nodes)
        )
