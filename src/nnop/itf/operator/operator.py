#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any
import numpy.typing

from ..data.tensor import TensorType


class Operator(ABC):
    """An abstract representation of the algebraic operation for a node.

    An Operator owns the kind-specific attributes of an operation, fixed at
    construction. It validates these attributes against the input tensor
    types and infers the output tensor types. It also provides a reference
    evaluation on numpy arrays.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Returns the operator kind, unique among operators.

        Returns:
            The operator's kind name
        """
        ...

    @property
    @abstractmethod
    def attrs(self) -> Any:
        """Returns the attributes of this operator.

        Returns:
            The namespace of attributes by name
        """
        ...

    @abstractmethod
    def validate_and_infer_types(
        self, inputs_types: Sequence[TensorType]
    ) -> Sequence[TensorType]:
        """Validates attributes and inputs and infers output tensor types.

        Args:
            inputs_types: List of input tensor types, possibly partial

        Returns:
            List of inferred output tensor types

        Raises:
            OpValidationError: on the first violated constraint
        """
        ...

    @abstractmethod
    def forward(
        self, inputs: Sequence[numpy.typing.NDArray]
    ) -> Sequence[numpy.typing.NDArray]:
        """Evaluate the operator on input arrays to produce output arrays.

        Args:
            inputs: List of input arrays

        Returns:
            List of output arrays
        """
        ...
