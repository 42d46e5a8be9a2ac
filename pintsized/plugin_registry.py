"""A registry of named plugin factories."""

from __future__ import annotations

from typing import Callable, Generic, Optional, TypeVar

from .fixed_string import FixedString

T = TypeVar("T")

_NAME_CAPACITY = 32


def _key(name: object) -> str:
    return str(FixedString(str(name), _NAME_CAPACITY))


class PluginRegistry(Generic[T]):
    """Maps plugin names, truncated to 32 characters, to factories."""

    def __init__(self) -> None:
        self._factories: dict[str, Callable[[], T]] = {}

    def register_plugin(self, name: object, factory: Callable[[], T]) -> bool:
        """Register ``factory`` under ``name``; False if the name is taken."""
        key = _key(name)
        if key in self._factories:
            return False
        self._factories[key] = factory
        return True

    def create_plugin(self, name: object) -> Optional[T]:
        """Build a new plugin, or return None if ``name`` is not registered."""
        factory = self._factories.get(_key(name))
        return None if factory is None else factory()

    def __contains__(self, name: object) -> bool:
        return _key(name) in self._factories

    def __len__(self) -> int:
        return len(self._factories)