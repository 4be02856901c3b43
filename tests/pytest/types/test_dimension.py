import pytest

from nnop.types import Dimension


def test_static_and_dynamic():
    d = Dimension(3)
    assert d.is_static and not d.is_dynamic
    assert d.length == 3
    assert int(d) == 3
    assert str(d) == "3"
    dyn = Dimension.dynamic()
    assert dyn.is_dynamic and not dyn.is_static
    assert str(dyn) == "?"


def test_dynamic_length_is_fatal():
    with pytest.raises(AssertionError):
        Dimension.dynamic().length


def test_negative_length_rejected():
    with pytest.raises(ValueError):
        Dimension(-1)


def test_compatible():
    assert Dimension(3).compatible(3)
    assert not Dimension(3).compatible(4)
    assert Dimension(3).compatible(Dimension.dynamic())
    assert Dimension.dynamic().compatible(Dimension(4))


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (3, 3, 3),
        (3, None, 3),
        (None, 4, 4),
        (None, None, None),
    ],
)
def test_merge(a, b, expected):
    merged = Dimension.merge(Dimension(a), Dimension(b))
    assert merged is not None
    assert merged == Dimension(expected)
    assert Dimension.merge(Dimension(b), Dimension(a)) == merged
    assert merged.compatible(a) and merged.compatible(b)


def test_merge_incompatible_fails():
    a, b = Dimension(3), Dimension(4)
    assert Dimension.merge(a, b) is None
    assert a.length == 3 and b.length == 4


def test_relaxes_refines():
    assert Dimension.dynamic().relaxes(3)
    assert not Dimension(3).relaxes(Dimension.dynamic())
    assert Dimension(3).refines(Dimension.dynamic())
    assert Dimension(3).refines(3)
    assert not Dimension(3).refines(4)


def test_arithmetic():
    assert Dimension(3) + 2 == 5
    assert Dimension(3) * Dimension(4) == 12
    assert Dimension(7) - 2 == 5
    assert (Dimension.dynamic() + 2).is_dynamic
    assert (Dimension(3) * Dimension.dynamic()).is_dynamic


def test_immutable():
    d = Dimension(3)
    with pytest.raises(AttributeError):
        d._length = 4


def test_hash_matches_int():
    assert hash(Dimension(3)) == hash(3)
    assert 3 in {Dimension(3)}
    assert Dimension(3) in {3}
    assert {Dimension(3): "x"}[3] == "x"
    assert len({Dimension.dynamic(), Dimension.dynamic()}) == 1
