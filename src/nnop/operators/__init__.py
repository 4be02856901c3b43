#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from .exceptions import OpValidationError  # type: ignore
from .operator import NNOperator, NNOperParameter  # type: ignore
from .convolution import NNOperConvolution  # type: ignore
from .replace_slice import NNOperReplaceSlice  # type: ignore
from .slice import NNOperSlice  # type: ignore
from .dot import NNOperDot  # type: ignore
