import pytest

import nnop
from nnop.codegen import Dialect
from nnop.library import load_operators
from nnop.operators import NNOperConvolution, NNOperator
from nnop.registry import (
    get_operator,
    get_translator,
    has_operator,
    list_operators,
    register_operator,
)


def test_library_registered():
    assert list_operators() == ["Parameter", "Convolution", "ReplaceSlice", "Slice", "Dot"]
    assert get_operator("Convolution").operator is NNOperConvolution
    assert has_operator("Dot")
    assert not has_operator("Softmax")


def test_list_by_dialect():
    assert list_operators(Dialect.DIRECT) == ["Convolution", "Slice", "Dot"]
    assert list_operators(Dialect.INDEXED) == ["Convolution", "ReplaceSlice", "Slice", "Dot"]


def test_load_operators_idempotent():
    load_operators()
    assert len(list_operators()) == 5


def test_duplicate_registration():
    with pytest.raises(RuntimeError, match="already registered"):
        register_operator("Dot", NNOperator)


def test_unknown_operator():
    with pytest.raises(ValueError, match="not registered"):
        get_operator("Softmax")


def test_translators_read_only():
    definition = get_operator("ReplaceSlice")
    with pytest.raises(TypeError):
        definition.translators[Dialect.DIRECT] = lambda node: None
    with pytest.raises(NotImplementedError):
        get_translator("ReplaceSlice", Dialect.DIRECT)
    with pytest.raises(NotImplementedError):
        get_translator("Parameter", Dialect.INDEXED)


def test_package_version():
    assert isinstance(nnop.__version__, str)
