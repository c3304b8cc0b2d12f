# src/igservices/packages.py
"""
Dependency packages, read from unpacked NPM-style package directories.

Layout:
    <root>/package/package.json        name, version, canonical
    <root>/package/<Kind>-<id>.json    conformance resources
    <root>/package/example/...         example resources
Either folder may carry a .index.json listing filename/resourceType/id.
"""

from __future__ import annotations

import json
import warnings
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer

from .content import ContentNode, is_resource, parse_single
from .errors import FetchError

INDEX_FILE = ".index.json"


def _read_index(folder: Path) -> dict[tuple[str, str], str]:
    index_path = folder / INDEX_FILE
    if not index_path.exists():
        return {}
    try:
        data = json.loads(index_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise FetchError(f"Unable to read package index {index_path}: {e}") from e

    files = data.get("files", []) if isinstance(data, dict) else None
    if not isinstance(files, list) or not all(isinstance(entry, dict) for entry in files):
        raise FetchError(f"Malformed package index {index_path}: expected an object with a 'files' list of objects")

    out: dict[tuple[str, str], str] = {}
    for entry in files:
        kind, rid, filename = entry.get("resourceType"), entry.get("id"), entry.get("filename")
        if kind and rid and filename:
            out[(kind, rid)] = filename
    return out


@dataclass(frozen=True, slots=True)
class NpmPackage:
    root: Path
    name: str
    version: str | None = None
    canonical: str | None = None

    @property
    def folder(self) -> Path:
        return self.root / "package"

    @property
    def example_folder(self) -> Path:
        return self.folder / "example"

    def __str__(self) -> str:
        return f"{self.name}#{self.version}" if self.version else self.name

    def matches_canonical(self, url: str) -> bool:
        return bool(self.canonical) and url.startswith(self.canonical)

    def load_resource(self, kind: str, rid: str) -> ContentNode | None:
        return self._load(self.folder, kind, rid)

    def load_example_resource(self, kind: str, rid: str) -> ContentNode | None:
        return self._load(self.example_folder, kind, rid)

    def iter_resources(self) -> Iterator[ContentNode]:
        """Every resource in the main folder (examples excluded)."""
        for path in sorted(self.folder.glob("*.json")):
            if path.name in ("package.json", INDEX_FILE):
                continue
            node = self._read(path)
            if is_resource(node):
                yield node

    def _load(self, folder: Path, kind: str, rid: str) -> ContentNode | None:
        if not folder.is_dir():
            return None
        path = folder / f"{kind}-{rid}.json"
        if not path.exists():
            filename = _read_index(folder).get((kind, rid))
            if filename is None:
                return None
            path = folder / filename
            if not path.exists():
                raise FetchError(f"Package {self} lists {filename} for {kind}/{rid} but the file is missing")
        return parse_single(self._read_bytes(path), f"{self}:{path.name}")

    def _read_bytes(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise FetchError(f"Unable to read {path} from package {self}: {e}") from e

    def _read(self, path: Path) -> Any:
        try:
            return json.loads(self._read_bytes(path))
        except ValueError as e:
            raise FetchError(f"Unable to parse {path} from package {self}: {e}") from e


def load_package(root: Path, verbose: int = 0) -> NpmPackage:
    manifest = root / "package" / "package.json"
    if not manifest.exists():
        raise FileNotFoundError(f"Not a package directory (no package/package.json): {root}")

    try:
        meta = json.loads(manifest.read_text(encoding="utf-8"))
    except ValueError as e:
        raise ValueError(f"Invalid package manifest {manifest}: {e}") from e

    npm = NpmPackage(
        root=root,
        name=meta.get("name", root.name),
        version=meta.get("version"),
        canonical=meta.get("canonical"),
    )

    if npm.canonical is None:
        warnings.warn(f"Package {npm} declares no canonical; only example fallback will use it", UserWarning, stacklevel=2)

    if verbose >= 1:
        typer.echo(f"[load] package {npm} canonical={npm.canonical}")

    return npm
