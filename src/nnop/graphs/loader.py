#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
"""Graph descriptions in YAML.

A description lists graph inputs, nodes and outputs, for instance:

    name: conv
    inputs:
      - name: x
        shape: 1, 3, ?, ?
        dtype: float32
      - name: w
        shape: 64, 3, 7, 7
    nodes:
      - name: y
        op: Convolution
        inputs: x, w
        attrs:
          window_movement_strides: 2, 2
          padding_below: 3, 3
          padding_above: 3, 3
          data_format: NCHW
    outputs: y

Dimensions written ? are dynamic, a shape written "?" is of dynamic rank.
"""
from typing import Any
import logging
import strictyaml
from strictyaml import Map, MapPattern, Optional, Seq, Str, CommaSeparated

from nnop.operators import NNOperParameter
from nnop.registry import get_operator
from nnop.types import NNTensorType, PartialShape

from .graph import NNGraph
from .node import NNNode

__all__ = [
    "GraphLoadError",
    "load_graph",
    "parse_shape",
]

logger = logging.getLogger(__name__)


class GraphLoadError(RuntimeError):
    """Raised when a graph description is malformed."""

    pass


SCHEMA = Map(
    {
        Optional("name"): Str(),
        "inputs": Seq(
            Map(
                {
                    "name": Str(),
                    "shape": Str(),
                    Optional("dtype", default="float32"): Str(),
                }
            )
        ),
        "nodes": Seq(
            Map(
                {
                    "name": Str(),
                    "op": Str(),
                    "inputs": CommaSeparated(Str()),
                    Optional("attrs"): MapPattern(Str(), Str()),
                }
            )
        ),
        Optional("outputs"): CommaSeparated(Str()),
    }
)

INTS_ATTRS = {
    "lower_bounds",
    "upper_bounds",
    "strides",
    "window_movement_strides",
    "window_dilation_strides",
    "padding_below",
    "padding_above",
}


def _parse_int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise GraphLoadError(f"expected integer, got: {value!r}") from None


def parse_shape(text: str) -> PartialShape:
    text = text.strip()
    if text == "?":
        return PartialShape.dynamic()
    if text == "":
        return PartialShape([])
    return PartialShape(
        [
            None if dim.strip() == "?" else _parse_int(dim.strip())
            for dim in text.split(",")
        ]
    )


def _parse_attrs(attrs: dict[str, str]) -> dict[str, Any]:
    parsed: dict[str, Any] = {}
    for name, value in attrs.items():
        if name in INTS_ATTRS:
            items = [v.strip() for v in value.split(",") if v.strip() != ""]
            parsed[name] = tuple(_parse_int(v) for v in items)
        else:
            parsed[name] = value.strip()
    return parsed


def load_graph(text: str) -> NNGraph:
    try:
        desc = strictyaml.load(text, SCHEMA).data
    except strictyaml.YAMLValidationError as e:
        raise GraphLoadError(f"invalid graph description:\n{e}") from e

    nodes: dict[str, NNNode] = {}
    inputs = []
    for inp in desc["inputs"]:
        name = inp["name"]
        if name in nodes:
            raise GraphLoadError(f"duplicate node name: {name}")
        try:
            tensor_type = NNTensorType(
                parse_shape(inp["shape"]), inp.get("dtype", "float32")
            )
        except ValueError as e:
            raise GraphLoadError(f"input {name}: {e}") from e
        nodes[name] = NNNode(NNOperParameter(tensor_type), name=name)
        inputs.append(nodes[name])

    for desc_node in desc["nodes"]:
        name, kind = desc_node["name"], desc_node["op"]
        if name in nodes:
            raise GraphLoadError(f"duplicate node name: {name}")
        try:
            definition = get_operator(kind)
        except ValueError as e:
            raise GraphLoadError(f"node {name}: {e}") from e
        if definition.operator is NNOperParameter:
            raise GraphLoadError(f"node {name}: parameters must be declared as inputs")
        node_inputs = [inp.strip() for inp in desc_node["inputs"]]
        missing = [inp for inp in node_inputs if inp not in nodes]
        if missing:
            raise GraphLoadError(f"node {name}: undefined inputs {missing}")
        attrs = _parse_attrs(desc_node.get("attrs", {}))
        try:
            operator = definition.operator(**attrs)
        except (TypeError, ValueError) as e:
            raise GraphLoadError(f"node {name}: invalid attributes for {kind}: {e}") from e
        nodes[name] = NNNode(
            operator, [nodes[inp] for inp in node_inputs], name=name
        )

    outputs = desc.get("outputs")
    if outputs is None:
        used = {inp.strip() for n in desc["nodes"] for inp in n["inputs"]}
        outputs = [n["name"] for n in desc["nodes"] if n["name"] not in used]
    outputs = [out.strip() for out in outputs]
    missing = [out for out in outputs if out not in nodes]
    if missing:
        raise GraphLoadError(f"undefined outputs {missing}")

    graph = NNGraph(name=desc.get("name"))
    graph.add_nodes(list(nodes.values()))
    graph.set_inputs(inputs)
    graph.set_outputs([nodes[out] for out in outputs])
    logger.debug("loaded graph %s with %d nodes", graph.name, len(nodes))
    return graph
