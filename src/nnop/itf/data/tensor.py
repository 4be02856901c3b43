#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nnop.types.dimension import Dimension
    from nnop.types.shape import PartialShape
    from nnop.types.element import ElementType


class TensorType(ABC):
    """An abstract representation of a tensor slot's type information.

    A TensorType pairs a possibly partial shape with an element type.
    It is the unit consumed and produced by operator inference: input slots
    of an operator instance are read from it, and inference resolves the
    output slots into new TensorType objects.
    """

    @property
    @abstractmethod
    def shape(self) -> "PartialShape":
        """Returns the tensor's partial shape.

        Returns:
            The shape, possibly of dynamic rank or with dynamic dimensions
        """
        ...

    @property
    @abstractmethod
    def dtype(self) -> "ElementType":
        """Returns the tensor's element type.

        Returns:
            The element type, possibly the dynamic element type
        """
        ...

    @property
    @abstractmethod
    def rank(self) -> "Dimension":
        """Returns the number of dimensions in the tensor.

        Returns:
            The tensor's rank, dynamic when unknown
        """
        ...

    @abstractmethod
    def is_constant(self) -> bool:
        """Returns whether both shape and element type are fully known.

        Returns:
            True if the type is fully static
        """
        ...
