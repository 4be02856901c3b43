#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from abc import ABC, abstractmethod
from collections.abc import Sequence
from ..operator.operator import Operator
from ..data import TensorType


class Node(ABC):
    """An abstract representation of an operator instance in a dataflow graph.

    A Node names a specific operation: an Operator with fixed attributes,
    references to the nodes producing its inputs, and output tensor type
    slots. The output slots are resolved exactly once by type inference,
    after which the node is never mutated again.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Returns the node name, unique within its graph."""
        ...

    @property
    @abstractmethod
    def kind(self) -> str:
        """Returns the operator kind, for instance "Convolution"."""
        ...

    @property
    @abstractmethod
    def inputs(self) -> list[str]:
        """Returns the names of the producers of the node inputs."""
        ...

    @property
    @abstractmethod
    def operator(self) -> Operator:
        """Returns the operator holding the kind attributes and inference rule."""
        ...

    @property
    @abstractmethod
    def inputs_types(self) -> Sequence[TensorType]:
        """Returns the resolved types of the node inputs.

        Reading an input whose producer is not yet resolved is a
        programming error.

        Returns:
            List of input tensor types
        """
        ...

    @property
    @abstractmethod
    def outputs_types(self) -> Sequence[TensorType]:
        """Returns the resolved types of the node outputs.

        Returns:
            List of output tensor types
        """
        ...

    @abstractmethod
    def infer_types(self) -> Sequence[TensorType]:
        """Validates the node and resolves its output types.

        Returns:
            List of inferred output tensor types
        """
        ...
