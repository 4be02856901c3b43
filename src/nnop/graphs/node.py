#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from typing_extensions import override
from collections.abc import Sequence
import logging
import threading
import numpy.typing

from nnop.itf.graph import Node
from nnop.operators import NNOperator, NNOperParameter, OpValidationError
from nnop.types import NNTensorType, PartialShape, ElementType

__all__ = [
    "NNNode",
]

logger = logging.getLogger(__name__)


class NNNodeCounter:
    def __init__(self) -> None:
        self._count = 0
        self._lock = threading.Lock()

    def get_idx(self) -> int:
        with self._lock:
            idx = self._count
            self._count += 1
        return idx


class NNNode(Node):
    """An operator instance in the graph.

    The node owns its operator, references its input producing nodes,
    and holds output slots which are resolved once by infer_types().
    Parameter nodes are resolved at construction.
    """

    _counter = NNNodeCounter()

    def __init__(
        self,
        operator: NNOperator,
        inputs: Sequence["NNNode"] = (),
        name: str | None = None,
    ) -> None:
        self._idx = self._counter.get_idx()
        self._operator = operator
        self._inputs_nodes = tuple(inputs)
        self._name = f"%{self._idx}" if name is None else name
        self._outputs_types: tuple[NNTensorType, ...] | None = None
        if isinstance(operator, NNOperParameter):
            assert len(self._inputs_nodes) == 0, "parameter nodes have no inputs"
            self._outputs_types = (operator.type,)

    @property
    @override
    def name(self) -> str:
        return self._name

    @property
    @override
    def kind(self) -> str:
        return self._operator.name

    @property
    @override
    def operator(self) -> NNOperator:
        return self._operator

    @property
    def node_idx(self) -> int:
        return self._idx

    @property
    def is_parameter(self) -> bool:
        return isinstance(self._operator, NNOperParameter)

    @property
    @override
    def inputs(self) -> list[str]:
        return [node.name for node in self._inputs_nodes]

    @property
    def inputs_nodes(self) -> tuple["NNNode", ...]:
        return self._inputs_nodes

    @property
    def is_resolved(self) -> bool:
        return self._outputs_types is not None

    @property
    @override
    def inputs_types(self) -> tuple[NNTensorType, ...]:
        for node in self._inputs_nodes:
            assert node.is_resolved, (
                f"input {node.name} of node {self.name} read before being resolved"
            )
        return tuple(node.outputs_types[0] for node in self._inputs_nodes)

    @property
    @override
    def outputs_types(self) -> tuple[NNTensorType, ...]:
        assert self._outputs_types is not None, (
            f"outputs of node {self.name} read before being resolved"
        )
        return self._outputs_types

    def input_shape(self, idx: int) -> PartialShape:
        return self.inputs_types[idx].shape

    def input_element_type(self, idx: int) -> ElementType:
        return self.inputs_types[idx].dtype

    def output_shape(self, idx: int = 0) -> PartialShape:
        return self.outputs_types[idx].shape

    def output_element_type(self, idx: int = 0) -> ElementType:
        return self.outputs_types[idx].dtype

    @override
    def infer_types(self) -> tuple[NNTensorType, ...]:
        if self.is_parameter:
            return self.outputs_types
        assert self._outputs_types is None, f"node {self.name} already resolved"
        try:
            outputs_types = self._operator.validate_and_infer_types(self.inputs_types)
        except OpValidationError as e:
            raise OpValidationError(e.op, e.message, node=self.name) from e
        self._outputs_types = tuple(outputs_types)
        logger.debug(
            "%s: %s -> %s",
            self.name,
            self.kind,
            ", ".join(str(t) for t in self._outputs_types),
        )
        return self._outputs_types

    def forward(
        self, inputs: Sequence[numpy.typing.NDArray]
    ) -> list[numpy.typing.NDArray]:
        assert len(inputs) == len(self._inputs_nodes), (
            f"len of inputs mismatch : {len(inputs)} != {len(self._inputs_nodes)}"
        )
        return list(self._operator.forward(inputs))

    @override
    def __str__(self) -> str:
        params = list(self.inputs)
        params += [f"{attr}={value}" for attr, value in self._operator.attrs.__dict__.items()]
        if self.is_parameter:
            params.append(str(self.outputs_types[0]))
        return f"{self.kind}({', '.join(params)})"
