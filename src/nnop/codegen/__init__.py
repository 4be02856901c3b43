#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from .template import Template, render  # type: ignore
from .substitutions import Substitutions  # type: ignore
from .primitives import Primitive, ExecutionPlan  # type: ignore
from .fragment import Dialect, KernelFragment  # type: ignore
