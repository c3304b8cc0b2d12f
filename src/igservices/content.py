# src/igservices/content.py
"""
Content nodes.

A content node is the JSON form of a resource: a dict with a ``resourceType``.
Bundles keep their inline resources under ``entry[].resource`` with an optional ``entry[].fullUrl``.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from .errors import FetchError

ContentNode = dict[str, Any]

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")


def load_yaml_safe(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def parse_single(data: bytes | str, source: str) -> ContentNode:
    """Parse one JSON resource. ``source`` names where the bytes came from, for error messages."""
    try:
        node = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise FetchError(f"Unable to parse {source}: {e}") from e

    if not is_resource(node):
        raise FetchError(f"{source} does not contain a resource (no resourceType)")
    return node


def load_content_file(path: Path) -> Any:
    """Read a .json/.yaml/.yml file as raw JSON data (not necessarily a resource)."""
    try:
        if path.suffix in YAML_SUFFIXES:
            return load_yaml_safe(path)
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise FetchError(f"Unable to read {path}: {e}") from e
    except (ValueError, yaml.YAMLError) as e:
        # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise FetchError(f"Unable to parse {path}: {e}") from e


def is_resource(node: Any) -> bool:
    return isinstance(node, dict) and isinstance(node.get("resourceType"), str)


def resource_type(node: ContentNode) -> str:
    return node.get("resourceType", "")


def bundle_entries(bundle: Any) -> Iterator[tuple[str | None, ContentNode]]:
    """Yield (fullUrl, resource) for every entry that has an inline resource."""
    if not isinstance(bundle, dict):
        return
    entries = bundle.get("entry")
    if not isinstance(entries, list):
        return
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        resource = entry.get("resource")
        if not is_resource(resource):
            continue
        full_url = entry.get("fullUrl")
        yield (full_url if isinstance(full_url, str) else None), resource
