#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from collections.abc import Mapping
from typing_extensions import override
import re

__all__ = [
    "Template",
    "render",
]


class Template:
    """
    Replace a serie of @key@ placeholders in a text.

    Keys are ASCII identifiers. Replacement is a single textual pass,
    hence placeholders appearing in substituted values are kept as is
    and can be resolved by a later render of the result.
    """

    PATTERN = re.compile(r"@([A-Za-z_][A-Za-z0-9_]*)@")

    def __init__(self, text: str) -> None:
        self._text = text
        self._keys = tuple(dict.fromkeys(self.PATTERN.findall(text)))

    @property
    def text(self) -> str:
        return self._text

    @property
    def keys(self) -> tuple[str, ...]:
        return self._keys

    def render(self, substitutions: Mapping[str, str]) -> str:
        missing = [key for key in self._keys if key not in substitutions]
        assert not missing, (
            f"missing substitutions for template keys {missing}: {self._text!r}"
        )
        return self.PATTERN.sub(lambda m: str(substitutions[m.group(1)]), self._text)

    @override
    def __str__(self) -> str:
        return self._text


def render(template: str | Template, substitutions: Mapping[str, str]) -> str:
    if not isinstance(template, Template):
        template = Template(template)
    return template.render(substitutions)
