# src/igservices/existence.py
"""
Existence checks: does a reference point at something real?

Cheaper than resolution and structured independently of it: allow-lists, known
external systems, wildcard masks and the guide's own resources can all answer
"yes" without any content being loaded.
"""

from __future__ import annotations

from collections.abc import Iterable

import typer

from . import sid
from .authored import iter_resources
from .constants import (
    BUILD_EXTENSION_URLS,
    CORE_SPEC_PREFIX,
    FHIRPATH_ACCEPTED_VERSIONS,
    FHIRPATH_SYSTEM_PREFIX,
    OTHER_URL_EXTRAS,
    STRUCTURE_MAPPING_PATH,
)
from .errors import FetchError
from .snapshot import SourceSnapshot
from .urls import path_url, split_fragment, split_version, url_matches
from .versions import canonical_resource_names


def default_other_urls() -> frozenset[str]:
    return frozenset(sid.all_systems()) | frozenset(OTHER_URL_EXTRAS)


class ExistenceChecker:
    def __init__(self, snapshot: SourceSnapshot, mapping_urls: Iterable[str] = (), verbose: int = 0):
        self.snapshot = snapshot
        self.verbose = verbose
        self.other_urls: frozenset[str] = frozenset()
        self.mapping_urls: frozenset[str] = frozenset()
        self.init_other_urls(mapping_urls)

    def init_other_urls(self, mapping_urls: Iterable[str] | None = None) -> None:
        """Rebuild the allow-lists.

        Replaces both sets wholesale. Not safe to call while another thread is inside
        ``resolve_url``; call it between runs only. ``None`` keeps the current mapping urls.
        """
        self.other_urls = default_other_urls()
        if mapping_urls is not None:
            self.mapping_urls = frozenset(mapping_urls)

    def resolve_url(self, path: str, url: str, kind: str | None = None, canonical: bool = False) -> bool:
        result, rule = self._decide(path or "", url, canonical)
        if self.verbose >= 2:
            typer.echo(f"[exists] {url} -> {str(result).lower()} ({rule})")
        return result

    def _decide(self, path: str, url: str, canonical: bool) -> tuple[bool, str]:
        u, v = split_version(url)

        if u in self.other_urls or url in self.other_urls:
            return True, "allow-list"

        if sid.is_known_sid(u):
            return v is None or not sid.is_invalid_version(u, v), "known-system"

        if u.startswith(FHIRPATH_SYSTEM_PREFIX):
            return v is None or v in FHIRPATH_ACCEPTED_VERSIONS, "fhirpath-system"

        if STRUCTURE_MAPPING_PATH in path and (u in self.mapping_urls or url in self.mapping_urls):
            return True, "mapping-url"

        # Only StructureMaps are addressed by wildcard
        if "*" in url:
            for sm in self.snapshot.context.fetch_resources_by_type("StructureMap"):
                if url_matches(url, sm.url):
                    return True, "structure-map-mask"

        if self._authored_match(url, canonical):
            return True, "authored"

        if self.snapshot.naming_systems.has_uri(u):
            return True, "naming-system"

        base, _ = split_fragment(url)
        if any(sm.has_target(base) for sm in self.snapshot.spec_maps):
            return True, "spec-map"

        if u.startswith(CORE_SPEC_PREFIX):
            if u in BUILD_EXTENSION_URLS:
                return True, "build-extension"
            try:
                return self.snapshot.context.fetch_resource_with_exception(url) is not None, "context"
            except FetchError:
                return False, "context"

        # TODO: confirm whether unrecognized external namespaces should default to False
        return True, "default"

    def _authored_match(self, url: str, canonical: bool) -> bool:
        guide = self.snapshot.canonical
        if not guide or not url.startswith(guide):
            return False
        allowed = canonical_resource_names(self.snapshot.context.version) if canonical else None
        for r in iter_resources(self.snapshot.files):
            if path_url(guide, r.kind, r.id) == url and (allowed is None or r.kind in allowed):
                return True
        return False
