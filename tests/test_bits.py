import pytest

from pintsized.bits import bit, clear_bit, set_bit, test_bit


def test_bit_pinned_values():
    assert bit(0) == 1
    assert bit(4) == 16


@pytest.mark.parametrize("index", range(64))
def test_set_bit_on_zero_equals_bit(index):
    assert set_bit(0, index) == bit(index)


@pytest.mark.parametrize("index", [0, 1, 7, 31, 32, 63])
def test_clear_undoes_set(index):
    value = bit(3) | bit(40)
    if not test_bit(value, index):
        assert clear_bit(set_bit(value, index), index) == value
    else:
        assert set_bit(clear_bit(value, index), index) == value


def test_test_bit_only_matches_own_index():
    for i in range(64):
        value = bit(i)
        assert [j for j in range(64) if test_bit(value, j)] == [i]


def test_set_bit_is_idempotent():
    once = set_bit(0, 12)
    assert set_bit(once, 12) == once


def test_clear_bit_on_unset_keeps_value():
    value = bit(5)
    assert clear_bit(value, 6) == value
    assert clear_bit(value, 5) == 0


@pytest.mark.parametrize("index", [-1, 64, 100])
def test_out_of_range_index_raises(index):
    with pytest.raises(ValueError):
        bit(index)
    with pytest.raises(ValueError):
        test_bit(0, index)