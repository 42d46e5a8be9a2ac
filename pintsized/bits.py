"""Bit manipulation helpers for 64-bit flag words."""

_WORD_BITS = 64


def _check_index(index: int) -> None:
    if not 0 <= index < _WORD_BITS:
        raise ValueError(f"bit index must be in [0, {_WORD_BITS}), got {index}")


def bit(n: int) -> int:
    """Return an integer with only bit ``n`` set."""
    _check_index(n)
    return 1 << n


def set_bit(value: int, index: int) -> int:
    """Return ``value`` with bit ``index`` set."""
    return value | bit(index)


def clear_bit(value: int, index: int) -> int:
    """Return ``value`` with bit ``index`` cleared."""
    return value & ~bit(index)


def test_bit(value: int, index: int) -> bool:
    """Return whether bit ``index`` of ``value`` is set."""
    return (value & bit(index)) != 0