#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
import importlib.metadata

from . import library  # type: ignore

__version__ = importlib.metadata.version("nnop")
