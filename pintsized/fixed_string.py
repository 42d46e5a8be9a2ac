"""A string with a fixed maximum number of characters."""

from __future__ import annotations

from typing import Union

_Text = Union["FixedString", str]


class FixedString:
    """Text that silently truncates to at most ``capacity`` characters."""

    __slots__ = ("_capacity", "_text")

    def __init__(self, text: _Text = "", capacity: int = 64) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._text = ""
        self.set(text)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def text(self) -> str:
        return self._text

    @staticmethod
    def _coerce(other: _Text) -> str:
        if isinstance(other, FixedString):
            return other._text
        if isinstance(other, str):
            return other
        raise TypeError(f"expected str or FixedString, got {type(other).__name__}")

    def set(self, text: _Text) -> None:
        """Replace the contents, truncating to the capacity."""
        self._text = self._coerce(text)[: self._capacity]

    def equals(self, other: _Text) -> bool:
        return self._text == self._coerce(other)

    def equals_ignore_case(self, other: _Text) -> bool:
        other_text = self._coerce(other)
        if len(other_text) != len(self._text):
            return False
        return self._text.lower() == other_text.lower()

    def contains(self, substring: _Text) -> bool:
        return self._coerce(substring) in self._text

    def begins_with(self, prefix: _Text) -> bool:
        return self._text.startswith(self._coerce(prefix))

    def ends_with(self, suffix: _Text) -> bool:
        return self._text.endswith(self._coerce(suffix))

    def __iadd__(self, other: _Text) -> FixedString:
        self._text = (self._text + self._coerce(other))[: self._capacity]
        return self

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (FixedString, str)):
            return self.equals(other)
        return NotImplemented

    __hash__ = None  # mutable

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"FixedString({self._text!r}, capacity={self._capacity})"