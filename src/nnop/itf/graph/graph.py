#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any
import numpy.typing

from .node import Node
from ..data import TensorType


class Graph(ABC):
    """A dataflow graph of operator instances.

    Nodes are keyed by a name unique within the graph. Graph inputs are
    parameter nodes whose types are given, every other node type is
    resolved by infer_types(), producers before consumers. Once resolved,
    each operation node can be translated to kernel source.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Returns the name of this graph, empty when anonymous."""
        ...

    @property
    @abstractmethod
    def nodes(self) -> dict[str, Node]:
        """Returns all nodes of the graph keyed by name, parameters included."""
        ...

    @property
    @abstractmethod
    def inputs(self) -> list[str]:
        """Returns the names of the graph parameters, in binding order."""
        ...

    @property
    @abstractmethod
    def outputs(self) -> list[str]:
        """Returns the names of the nodes whose results leave the graph."""
        ...

    @abstractmethod
    def infer_types(self) -> Sequence[TensorType]:
        """Validates nodes and resolves their outputs types.

        Raises:
            OpValidationError: on the first node failing validation

        Returns:
            The graph outputs types
        """
        ...

    @abstractmethod
    def translate(self, dialect: Any) -> Mapping[str, Any]:
        """Translates each operation node, types must be inferred first.

        Args:
            dialect: the kernel dialect or its name

        Returns:
            The kernel fragments keyed by node name, in topological order
        """
        ...

    @abstractmethod
    def forward(
        self, inputs: Sequence[numpy.typing.NDArray]
    ) -> list[numpy.typing.NDArray]:
        """Evaluates the graph on arrays bound to the graph inputs."""
        ...
