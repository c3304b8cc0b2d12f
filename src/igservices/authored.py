# src/igservices/authored.py
"""The local authored set: the files of the guide being validated and the resources they hold."""

from __future__ import annotations

import warnings
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

import typer

from .content import JSON_SUFFIXES, YAML_SUFFIXES, ContentNode, is_resource, load_content_file


@dataclass(frozen=True, slots=True)
class FetchedResource:
    kind: str
    id: str
    element: ContentNode

    @property
    def is_bundle(self) -> bool:
        return self.kind == "Bundle"


@dataclass(frozen=True, slots=True)
class FetchedFile:
    path: Path
    resources: tuple[FetchedResource, ...] = field(default_factory=tuple)


def iter_resources(files: Iterable[FetchedFile]) -> Iterator[FetchedResource]:
    for f in files:
        yield from f.resources


def _candidate_files(paths: Iterable[Path]) -> list[Path]:
    suffixes = JSON_SUFFIXES + YAML_SUFFIXES
    found: list[Path] = []
    for p in paths:
        if p.is_dir():
            found.extend(sorted(c for c in p.rglob("*") if c.is_file() and c.suffix in suffixes))
        elif p.is_file():
            found.append(p)
        else:
            raise FileNotFoundError(f"Authored content not found: {p}")
    return found


def load_authored_file(path: Path) -> FetchedFile:
    data = load_content_file(path)
    nodes = data if isinstance(data, list) else [data]

    resources = []
    for node in nodes:
        if not is_resource(node):
            warnings.warn(f"{path}: skipping content without a resourceType", UserWarning, stacklevel=2)
            continue
        rid = node.get("id")
        if not isinstance(rid, str) or not rid:
            rid = path.stem
            warnings.warn(f"{path}: resource has no id, using '{rid}'", UserWarning, stacklevel=2)
        resources.append(FetchedResource(kind=node["resourceType"], id=rid, element=node))

    return FetchedFile(path=path, resources=tuple(resources))


def load_authored(paths: Iterable[Path], verbose: int = 0) -> tuple[FetchedFile, ...]:
    """Load every .json/.yaml/.yml file under ``paths``, in sorted order per directory."""
    files = tuple(load_authored_file(p) for p in _candidate_files(paths))

    if verbose >= 1:
        count = sum(len(f.resources) for f in files)
        typer.echo(f"[load] {count} authored resources in {len(files)} files")

    return files
