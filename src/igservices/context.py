# src/igservices/context.py
"""The context store: canonical resources the host has already loaded, queried by kind, url and version."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from typing import Any

from .enums import ResourceKind
from .errors import FetchError
from .models import CanonicalResource, NamingSystem, resource_from_element
from .urls import split_version
from .versions import resource_names


def _version_key(version: str | None) -> tuple:
    if not version:
        return ()
    return tuple((0, int(p), "") if p.isdigit() else (1, 0, p) for p in version.split("."))


def _kind_name(kind: ResourceKind | str | None) -> str | None:
    if kind is None or kind == ResourceKind.unknown:
        return None
    return kind.value if isinstance(kind, ResourceKind) else kind


def _defines_resource_type(resource: CanonicalResource) -> bool:
    extra = resource.model_extra or {}
    return (
        resource.resource_type == "StructureDefinition"
        and extra.get("kind") == "resource"
        and extra.get("derivation") == "specialization"
        and not extra.get("abstract", False)
        and isinstance(extra.get("type"), str)
    )


class ContextStore:
    """Populated by the host before a run; the services only ever read from it."""

    def __init__(self, version: str | None = None, resources: Iterable[CanonicalResource | dict[str, Any]] = ()):
        self.version = version
        self._by_url: dict[str, list[CanonicalResource]] = defaultdict(list)
        self._by_type: dict[str, list[CanonicalResource]] = defaultdict(list)
        self._defined_types: set[str] = set()
        for r in resources:
            self.add(r)

    def add(self, resource: CanonicalResource | dict[str, Any]) -> CanonicalResource:
        if isinstance(resource, dict):
            resource = resource_from_element(resource)
        if resource.url:
            self._by_url[resource.url].append(resource)
        self._by_type[resource.resource_type].append(resource)
        if _defines_resource_type(resource):
            self._defined_types.add(resource.model_extra["type"])
        return resource

    def __len__(self) -> int:
        return sum(len(v) for v in self._by_type.values())

    @property
    def resource_names(self) -> frozenset[str]:
        """Resource types of the store's FHIR version, plus any defined by its StructureDefinitions."""
        return resource_names(self.version) | self._defined_types

    def fetch_resource(self, kind: ResourceKind | str | None, url: str) -> CanonicalResource | None:
        """Find a resource by url (optionally ``url|version``); without a version the highest one wins."""
        base, version = split_version(url)
        candidates = self._by_url.get(base, [])
        name = _kind_name(kind)
        if name is not None:
            candidates = [r for r in candidates if r.resource_type == name]
        if version is not None:
            candidates = [r for r in candidates if r.version == version]
        if not candidates:
            return None
        return max(candidates, key=lambda r: _version_key(r.version))

    def fetch_resources_by_url(self, url: str) -> list[CanonicalResource]:
        return list(self._by_url.get(url, []))

    def fetch_resources_by_type(self, kind: ResourceKind | str) -> list[CanonicalResource]:
        name = _kind_name(kind)
        if name is None:
            return []
        return list(self._by_type.get(name, []))

    def fetch_resource_with_exception(self, url: str) -> CanonicalResource:
        resource = self.fetch_resource(None, url)
        if resource is None:
            raise FetchError(f"Unable to find resource {url}")
        return resource

    def has_resource(self, url: str) -> bool:
        return self.fetch_resource(None, url) is not None

    def naming_systems(self) -> list[NamingSystem]:
        return [r for r in self._by_type.get("NamingSystem", []) if isinstance(r, NamingSystem)]
