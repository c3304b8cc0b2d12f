# src/igservices/models.py
"""Typed views of the canonical resources held in the context store."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CanonicalResource(BaseModel):
    """A resource with a canonical url. Unknown JSON properties are kept as extras.

    ``element`` holds the content node the resource was read from, when there is one;
    it is never serialized.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    resource_type: str = Field(alias="resourceType")
    id: str | None = None
    url: str | None = None
    version: str | None = None
    name: str | None = None
    status: str | None = None
    element: dict[str, Any] | None = Field(default=None, exclude=True)

    @property
    def versioned_url(self) -> str | None:
        if self.url is None:
            return None
        return f"{self.url}|{self.version}" if self.version else self.url

    def to_element(self) -> dict[str, Any]:
        """Synthesize a content node from the typed fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class NamingSystemUniqueId(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str
    value: str | None = None
    preferred: bool | None = None


class NamingSystem(CanonicalResource):
    resource_type: str = Field(default="NamingSystem", alias="resourceType")
    unique_id: list[NamingSystemUniqueId] = Field(default_factory=list, alias="uniqueId")

    def has_uri(self, url: str) -> bool:
        return any(uid.type == "uri" and uid.value is not None and uid.value == url for uid in self.unique_id)


def resource_from_element(node: dict[str, Any], keep_element: bool = True) -> CanonicalResource:
    """Build the typed resource for a content node; NamingSystems get their own model."""
    data = dict(node)
    data.pop("element", None)
    if keep_element:
        data["element"] = node
    if node.get("resourceType") == "NamingSystem":
        return NamingSystem.model_validate(data)
    return CanonicalResource.model_validate(data)
