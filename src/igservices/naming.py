# src/igservices/naming.py
from __future__ import annotations

from collections.abc import Iterable, Iterator

from .context import ContextStore
from .models import NamingSystem


class NamingSystemRegistry:
    """Read-only set of NamingSystems, queried for uri-typed unique identifiers."""

    def __init__(self, naming_systems: Iterable[NamingSystem] = ()):
        self._systems = tuple(naming_systems)

    @classmethod
    def from_context(cls, context: ContextStore) -> NamingSystemRegistry:
        return cls(context.naming_systems())

    def __iter__(self) -> Iterator[NamingSystem]:
        return iter(self._systems)

    def __len__(self) -> int:
        return len(self._systems)

    def has_uri(self, url: str) -> bool:
        return any(ns.has_uri(url) for ns in self._systems)
