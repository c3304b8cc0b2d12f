# src/igservices/services.py
"""
The callback object handed to the validator.

Composes the resolver, the existence checker and the policy advisor over a single
read-only snapshot. Safe to share between validation workers as long as the
snapshot is not mutated and ``init_other_urls`` is not called mid-run.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import requests

from .content import ContentNode
from .enums import (
    CodedContentValidationAction,
    ContainedReferenceValidationPolicy,
    ElementValidationAction,
    ReferenceValidationPolicy,
    ResourceValidationAction,
)
from .existence import ExistenceChecker
from .models import CanonicalResource
from .policy import PolicyAdvisor
from .resolver import Resolver
from .snapshot import SourceSnapshot


class ValidationServices:
    def __init__(
        self,
        snapshot: SourceSnapshot,
        bundle_references_resolve: bool = False,
        mapping_urls: Iterable[str] = (),
        verbose: int = 0,
    ):
        self.snapshot = snapshot
        self.resolver = Resolver(snapshot, verbose=verbose)
        self.existence = ExistenceChecker(snapshot, mapping_urls=mapping_urls, verbose=verbose)
        self.advisor = PolicyAdvisor(snapshot.context, bundle_references_resolve=bundle_references_resolve, verbose=verbose)

    # content

    def fetch(self, url: str | None, app_context: Any = None) -> ContentNode | None:
        return self.resolver.fetch(url, app_context)

    def fetch_raw(self, url: str) -> bytes:
        """Blocking GET with no timeout and no retry; network and HTTP errors propagate.

        Only http and https are fetched. Other schemes (file:, ftp:) raise
        ``requests.exceptions.InvalidSchema``.
        """
        response = requests.get(url, timeout=None)
        response.raise_for_status()
        return response.content

    def fetch_canonical_resource(self, url: str, app_context: Any = None) -> CanonicalResource | None:
        return None

    def fetches_canonical_resource(self, url: str) -> bool:
        return False

    def set_locale(self, locale: str | None) -> ValidationServices:
        return self

    # existence

    def resolve_url(self, path: str, url: str, kind: str | None = None, canonical: bool = False) -> bool:
        return self.existence.resolve_url(path, url, kind, canonical)

    @property
    def other_urls(self) -> frozenset[str]:
        return self.existence.other_urls

    @property
    def mapping_urls(self) -> frozenset[str]:
        return self.existence.mapping_urls

    def init_other_urls(self, mapping_urls: Iterable[str] | None = None) -> None:
        self.existence.init_other_urls(mapping_urls)

    # policy

    @property
    def bundle_references_resolve(self) -> bool:
        return self.advisor.bundle_references_resolve

    def policy_for_contained(self, path: str, url: str, **context: Any) -> ContainedReferenceValidationPolicy:
        return self.advisor.policy_for_contained(path, url, **context)

    def policy_for_reference(self, path: str, url: str | None = None, **context: Any) -> ReferenceValidationPolicy:
        return self.advisor.policy_for_reference(path, url, **context)

    def policy_for_coded_content(
        self, stack_path: str, definition: dict[str, Any] | None, **context: Any
    ) -> frozenset[CodedContentValidationAction]:
        return self.advisor.policy_for_coded_content(stack_path, definition, **context)

    def policy_for_resource(self, path: str, **context: Any) -> frozenset[ResourceValidationAction]:
        return self.advisor.policy_for_resource(path, **context)

    def policy_for_element(self, path: str, **context: Any) -> frozenset[ElementValidationAction]:
        return self.advisor.policy_for_element(path, **context)

    def fetch_canonical_resource_versions(self, url: str) -> set[str]:
        return self.advisor.fetch_canonical_resource_versions(url)
