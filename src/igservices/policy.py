# src/igservices/policy.py
"""Validation policy decisions per call site. Every function here is total and does no I/O."""

from __future__ import annotations

from typing import Any, Protocol

import typer

from .constants import R4B_IG_PARAMETER_CODE_PATH, UNVERSIONED
from .context import ContextStore
from .enums import (
    BindingKind,
    BindingPurpose,
    CodedContentValidationAction,
    ContainedReferenceValidationPolicy,
    ElementValidationAction,
    ReferenceValidationPolicy,
    ResourceValidationAction,
)
from .versions import is_r4b

ALL_CODED_CONTENT_ACTIONS = frozenset(CodedContentValidationAction)
ALL_RESOURCE_ACTIONS = frozenset(ResourceValidationAction)
ALL_ELEMENT_ACTIONS = frozenset(ElementValidationAction)


class ValidationPolicyAdvisor(Protocol):
    """Protocol for the policy side of the validator callbacks.

    Call-site details beyond the path (structure, element definition, binding) are passed
    as keyword arguments; implementations may ignore any of them.
    """

    def policy_for_contained(self, path: str, url: str) -> ContainedReferenceValidationPolicy: ...

    def policy_for_reference(self, path: str, url: str | None = None) -> ReferenceValidationPolicy: ...

    def policy_for_coded_content(
        self, stack_path: str, definition: dict[str, Any] | None
    ) -> frozenset[CodedContentValidationAction]: ...

    def policy_for_resource(self, path: str) -> frozenset[ResourceValidationAction]: ...

    def policy_for_element(self, path: str) -> frozenset[ElementValidationAction]: ...

    def fetch_canonical_resource_versions(self, url: str) -> set[str]: ...


def _base_path(definition: dict[str, Any] | None) -> str | None:
    if not isinstance(definition, dict):
        return None
    base = definition.get("base")
    if isinstance(base, dict):
        return base.get("path")
    return None


class PolicyAdvisor:
    def __init__(self, context: ContextStore, bundle_references_resolve: bool = False, verbose: int = 0):
        self.context = context
        self.bundle_references_resolve = bundle_references_resolve
        self.verbose = verbose

    def policy_for_contained(
        self,
        path: str,
        url: str,
        *,
        structure: dict[str, Any] | None = None,
        element: dict[str, Any] | None = None,
        container_type: str | None = None,
        container_id: str | None = None,
        containing_resource_type: str | None = None,
        app_context: Any = None,
    ) -> ContainedReferenceValidationPolicy:
        return ContainedReferenceValidationPolicy.check_valid

    def policy_for_reference(self, path: str, url: str | None = None, *, app_context: Any = None) -> ReferenceValidationPolicy:
        if path.startswith("Bundle.") and not self.bundle_references_resolve:
            policy = ReferenceValidationPolicy.check_type_if_exists
        else:
            policy = ReferenceValidationPolicy.check_exists_and_type
        if self.verbose >= 3:
            typer.echo(f"[policy] reference {path} -> {policy.value}")
        return policy

    def policy_for_coded_content(
        self,
        stack_path: str,
        definition: dict[str, Any] | None,
        *,
        structure: dict[str, Any] | None = None,
        kind: BindingKind | None = None,
        purpose: BindingPurpose | None = None,
        value_set: dict[str, Any] | None = None,
        systems: list[str] | None = None,
        app_context: Any = None,
    ) -> frozenset[CodedContentValidationAction]:
        # R4B shipped this binding against a code system that never existed
        if is_r4b(self.context.version) and _base_path(definition) == R4B_IG_PARAMETER_CODE_PATH:
            if self.verbose >= 3:
                typer.echo(f"[policy] coded content {stack_path} -> none (R4B IG parameter code)")
            return frozenset()
        return ALL_CODED_CONTENT_ACTIONS

    def policy_for_resource(
        self, path: str, *, structure: dict[str, Any] | None = None, app_context: Any = None
    ) -> frozenset[ResourceValidationAction]:
        return ALL_RESOURCE_ACTIONS

    def policy_for_element(
        self,
        path: str,
        *,
        structure: dict[str, Any] | None = None,
        element: dict[str, Any] | None = None,
        app_context: Any = None,
    ) -> frozenset[ElementValidationAction]:
        return ALL_ELEMENT_ACTIONS

    def fetch_canonical_resource_versions(self, url: str) -> set[str]:
        return {r.version or UNVERSIONED for r in self.context.fetch_resources_by_url(url)}
