#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from . import (
    convolution,  # type: ignore
    replace_slice,  # type: ignore
    slice,  # type: ignore
    dot,  # type: ignore
)
