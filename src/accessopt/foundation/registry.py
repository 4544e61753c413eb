"""
Generic registry for named components (solver backends).
"""

from __future__ import annotations

from typing import Any, Generic, ItemsView, TypeVar

T = TypeVar("T")


class Registry(Generic[T]):
    """
    A simple registry mapping names to items.

    Keys are case-insensitive and treat '_' and '-' as the same character, so
    "L_BFGS_B" and "l-bfgs-b" refer to the same entry.
    """

    def __init__(self, name: str = "Registry") -> None:
        self._name = name
        self._items: dict[str, T] = {}

    @staticmethod
    def normalize(key: str) -> str:
        return key.strip().lower().replace("_", "-")

    def register(self, key: str, item: T, *, override: bool = False) -> T:
        """
        Register ``item`` under ``key``.

        Raises ValueError on a duplicate key unless ``override`` is True.
        """
        name = self.normalize(key)
        if name in self._items and not override:
            raise ValueError(f"Key '{name}' already exists in registry '{self._name}'")
        self._items[name] = item
        return item

    def unregister(self, key: str) -> T:
        """Remove and return the item registered under ``key``."""
        name = self.normalize(key)
        if name not in self._items:
            raise KeyError(f"Key '{name}' not found in registry '{self._name}'")
        return self._items.pop(name)

    def get(self, key: str, default: Any = ...) -> T:
        """
        Retrieve an item by key.

        Args:
            key: Name of the item to retrieve.
            default: Value to return if key missing. If not provided, raises KeyError.
        """
        name = self.normalize(key)
        if name not in self._items:
            if default is not ...:
                return default
            raise KeyError(f"Key '{name}' not found in registry '{self._name}'")
        return self._items[name]

    def list(self) -> list[str]:
        """Return a sorted list of registered keys."""
        return sorted(self._items.keys())

    def __contains__(self, key: str) -> bool:
        return self.normalize(key) in self._items

    def items(self) -> ItemsView[str, T]:
        return self._items.items()
