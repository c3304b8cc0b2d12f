# src/igservices/resolver.py
"""Content resolution: turns a reference into a content node by searching the snapshot's sources in order."""

from __future__ import annotations

from typing import Any, Protocol

import typer

from .authored import iter_resources
from .content import ContentNode, bundle_entries, resource_type
from .enums import ResourceKind
from .errors import FetchError
from .snapshot import SourceSnapshot
from .urls import Reference, classify


class ResourceFetcher(Protocol):
    """Protocol for the content side of the validator callbacks."""

    def fetch(self, url: str | None, app_context: Any = None) -> ContentNode | None:
        """Resolve ``url`` to a content node.

        Args:
            url: The reference as found in the document (relative, absolute, may carry |version)
            app_context: Optional Bundle node whose entries are searched before the authored set

        Returns:
            The content node, or None when nothing matches

        Raises:
            FetchError: Malformed input or unreadable package content
        """
        ...


class Resolver:
    """Ordered multi-source lookup. First source that answers wins; nothing is cached."""

    def __init__(self, snapshot: SourceSnapshot, verbose: int = 0):
        self.snapshot = snapshot
        self.verbose = verbose

    def fetch(self, url: str | None, app_context: Any = None) -> ContentNode | None:
        if url is None:
            return None
        if not isinstance(url, str):
            raise FetchError(f"Reference must be a string, got {type(url).__name__}")

        ref = classify(url, self.snapshot.canonical)

        for source, lookup in (
            ("context", self._from_context),
            ("implicit-vs", self._from_implicit_value_set),
            ("package", self._from_package_canonical),
            ("bundle", lambda r: self._from_containing_bundle(r, app_context)),
            ("authored", self._from_authored),
            ("authored-bundle", self._from_authored_bundles),
            ("package-example", self._from_package_examples),
        ):
            node = lookup(ref)
            if node is not None:
                if self.verbose >= 2:
                    typer.echo(f"[fetch] {url} -> {source} ({resource_type(node)})")
                return node
            if self.verbose >= 3:
                typer.echo(f"[fetch] {url}: no match in {source}")

        if self.verbose >= 2:
            typer.echo(f"[fetch] {url} -> not found")
        return None

    def _from_context(self, ref: Reference) -> ContentNode | None:
        if ref.kind == ResourceKind.unknown:
            return None
        res = self.snapshot.context.fetch_resource(ref.kind, ref.url)
        if res is None:
            return None
        if res.element is not None:
            return res.element
        return res.to_element()

    def _from_implicit_value_set(self, ref: Reference) -> ContentNode | None:
        return self.snapshot.implicit_value_sets(ref.raw)

    def _from_package_canonical(self, ref: Reference) -> ContentNode | None:
        if not ref.is_absolute:
            return None
        for npm in self.snapshot.packages:
            if not npm.matches_canonical(ref.raw):
                continue
            parts = ref.raw[len(npm.canonical) :].lstrip("/").split("/")
            if len(parts) < 2:
                continue
            kind, rid = parts[0], parts[1]
            node = npm.load_resource(kind, rid)
            if node is None:
                node = npm.load_example_resource(kind, rid)
            if node is not None:
                return node
        return None

    def _from_containing_bundle(self, ref: Reference, app_context: Any) -> ContentNode | None:
        if app_context is None:
            return None
        for full_url, resource in bundle_entries(app_context):
            if full_url is not None and full_url == ref.raw:
                return resource
            if len(ref.segments) == 2 and _is(resource, ref.segments[0], ref.segments[1]):
                return resource
        return None

    def _from_authored(self, ref: Reference) -> ContentNode | None:
        local = ref.local_segments(self.snapshot.canonical)
        if local is None or len(local) != 2:
            return None
        kind, rid = local
        for r in iter_resources(self.snapshot.files):
            if r.kind == kind and r.id == rid:
                return r.element
        return None

    def _from_authored_bundles(self, ref: Reference) -> ContentNode | None:
        if not ref.is_absolute:
            return None
        for r in iter_resources(self.snapshot.files):
            if not r.is_bundle:
                continue
            for full_url, resource in bundle_entries(r.element):
                if full_url == ref.raw:
                    return resource
        return None

    def _from_package_examples(self, ref: Reference) -> ContentNode | None:
        if len(ref.segments) < 2 or ref.segments[-2] not in self.snapshot.context.resource_names:
            return None
        kind, rid = ref.segments[-2], ref.segments[-1]
        for npm in reversed(self.snapshot.packages):
            node = npm.load_example_resource(kind, rid)
            if node is not None:
                return node
        return None


def _is(resource: ContentNode, kind: str, rid: str) -> bool:
    return resource_type(resource) == kind and resource.get("id") == rid
