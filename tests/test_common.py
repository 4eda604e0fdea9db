import pytest

from suiarb.common import add


def test_it_works():
    assert add(2, 2) == 4


def test_add_is_commutative():
    assert add(7, 3) == add(3, 7)


def test_add_overflow_raises():
    with pytest.raises(OverflowError):
        add(2**64 - 1, 1)


def test_add_negative_raises():
    with pytest.raises(ValueError):
        add(-1, 2)