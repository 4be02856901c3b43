import pytest

from nnop.codegen import Substitutions, Primitive
from nnop.codegen.substitutions import vector_to_string
from nnop.types import PartialShape


def test_vector_to_string():
    assert vector_to_string([1, 3, 224]) == "[1, 3, 224]"
    assert vector_to_string([]) == "[]"


def test_typed_setters():
    subs = (
        Substitutions()
        .shape("shape", PartialShape([1, 64, 112, 112]))
        .ints("stride", (2, 2))
        .integer("height", 112)
        .text("primitive", Primitive.CONV2D_NCHW)
        .text("name", "input0")
    )
    assert dict(subs) == {
        "shape": "[1, 64, 112, 112]",
        "stride": "[2, 2]",
        "height": "112",
        "primitive": "topi.nn.conv2d_nchw",
        "name": "input0",
    }
    assert len(subs) == 5


def test_template_uses_current_values():
    subs = Substitutions().integer("pad", 3).integer("stride", 2)
    subs.template("index", "-@pad@ + HO * @stride@ + KH")
    assert subs["index"] == "-3 + HO * 2 + KH"


def test_dynamic_shape_is_fatal():
    with pytest.raises(AssertionError):
        Substitutions().shape("shape", PartialShape([1, None]))


def test_integer_rejects_non_int():
    with pytest.raises(AssertionError):
        Substitutions().integer("flag", True)
    with pytest.raises(AssertionError):
        Substitutions().integer("size", "3")


def test_invalid_key():
    with pytest.raises(AssertionError, match="invalid template key"):
        Substitutions().text("not a key", "x")
