#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeAlias
import logging

from nnop.operators import NNOperator
from nnop.codegen.fragment import Dialect, KernelFragment

if TYPE_CHECKING:
    from nnop.graphs.node import NNNode

__all__ = [
    "OperatorDefinition",
    "register_operator",
    "get_operator",
    "has_operator",
    "list_operators",
    "get_translator",
    "translate",
]

logger = logging.getLogger(__name__)

Translator: TypeAlias = Callable[["NNNode"], KernelFragment]


@dataclass(frozen=True)
class OperatorDefinition:
    """The inference rule and translators of one operator kind."""

    kind: str
    operator: type[NNOperator]
    translators: Mapping[Dialect, Translator] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "translators", MappingProxyType(dict(self.translators)))


_OPERATOR_REGISTRY: dict[str, OperatorDefinition] = {}


def register_operator(
    kind: str,
    operator: type[NNOperator],
    translators: Mapping[Dialect, Translator] | None = None,
) -> OperatorDefinition:
    if kind in _OPERATOR_REGISTRY:
        raise RuntimeError(f"operator {kind} is already registered")
    definition = OperatorDefinition(kind, operator, translators or {})
    _OPERATOR_REGISTRY[kind] = definition
    logger.debug(
        "registered operator %s with dialects %s",
        kind,
        [d.value for d in definition.translators],
    )
    return definition


def get_operator(kind: str) -> OperatorDefinition:
    if kind not in _OPERATOR_REGISTRY:
        raise ValueError(f"operator {kind} not registered in operator registry")
    return _OPERATOR_REGISTRY[kind]


def has_operator(kind: str) -> bool:
    return kind in _OPERATOR_REGISTRY


def list_operators(dialect: Dialect | None = None) -> list[str]:
    return [
        kind
        for kind, definition in _OPERATOR_REGISTRY.items()
        if dialect is None or dialect in definition.translators
    ]


def get_translator(kind: str, dialect: Dialect) -> Translator:
    definition = get_operator(kind)
    if dialect not in definition.translators:
        raise NotImplementedError(
            f"operator {kind} has no translator for the {dialect.value} dialect"
        )
    return definition.translators[dialect]


def translate(node: "NNNode", dialect: Dialect | str) -> KernelFragment:
    dialect = Dialect.from_name(dialect)
    return get_translator(node.kind, dialect)(node)
