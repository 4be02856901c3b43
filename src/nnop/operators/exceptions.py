#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
"""Operator-related exceptions."""


class OpValidationError(RuntimeError):
    """Raised when an operator's attributes or inputs are invalid."""

    def __init__(self, op: str, message: str, node: str | None = None) -> None:
        self.op = op
        self.node = node
        self.message = message
        where = op if node is None else f"{op} ({node})"
        super().__init__(f"{where}: {message}")
