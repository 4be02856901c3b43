#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from dataclasses import dataclass
from typing_extensions import override
from enum import Enum

from .template import render

__all__ = [
    "Dialect",
    "KernelFragment",
]


class Dialect(Enum):
    DIRECT = "direct"
    INDEXED = "indexed"

    @classmethod
    def from_name(cls, name: "str | Dialect") -> "Dialect":
        if isinstance(name, Dialect):
            return name
        try:
            return cls(name.lower())
        except ValueError:
            raise ValueError(
                f"unknown dialect: {name}, expected one of "
                f"{[d.value for d in cls]}"
            ) from None


PLAN_RULE = " ## @: plan/@plan@ "


@dataclass(frozen=True)
class KernelFragment:
    """Kernel source of one operator instance.

    Attributes:
        dialect: the dialect the code is written in
        code: the kernel source
        plan: execution plan tag, for the indexed dialect only
    """

    dialect: Dialect
    code: str
    plan: str | None = None

    def __post_init__(self) -> None:
        assert self.plan is None or self.dialect == Dialect.INDEXED, (
            f"execution plan only applies to the indexed dialect: {self.plan}"
        )

    @property
    def plan_rule(self) -> str:
        if self.plan is None:
            return ""
        return render(PLAN_RULE, {"plan": self.plan})

    @property
    def text(self) -> str:
        return self.code + self.plan_rule

    @override
    def __str__(self) -> str:
        return self.text
