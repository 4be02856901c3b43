#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from .dimension import Dimension  # type: ignore
from .shape import PartialShape  # type: ignore
from .element import ElementType  # type: ignore
from .tensor import NNTensorType  # type: ignore
from . import element  # type: ignore
