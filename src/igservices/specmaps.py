# src/igservices/specmaps.py
"""External version maps: the published page/anchor targets of other specifications (spec.internals)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

import typer

from .urls import split_fragment


@dataclass(frozen=True, slots=True)
class SpecMap:
    base: str
    targets: frozenset[str] = field(default_factory=frozenset)
    name: str | None = None

    def has_target(self, url: str) -> bool:
        base = self.base.rstrip("/")
        if url.startswith(base + "/"):
            target = url[len(base) + 1 :]
        elif url.startswith(base):
            target = url[len(base) :]
        else:
            return False
        target, _ = split_fragment(target)
        return target in self.targets


def load_spec_map(path: Path, verbose: int = 0) -> SpecMap:
    """Read a spec.internals file. The base is ``webUrl``, falling back to ``base`` then ``canonical``."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as e:
        raise ValueError(f"Invalid spec map {path}: {e}") from e

    base = data.get("webUrl") or data.get("base") or data.get("canonical")
    if not base:
        raise ValueError(f"Spec map {path} has no webUrl/base/canonical")

    spec_map = SpecMap(base=base, targets=frozenset(data.get("targets", [])), name=data.get("name"))

    if verbose >= 1:
        typer.echo(f"[load] spec map {base} ({len(spec_map.targets)} targets)")

    return spec_map
