# src/igservices/config.py
"""Builds a snapshot and its services from a YAML configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import typer

from .authored import load_authored
from .content import load_yaml_safe
from .context import ContextStore
from .packages import NpmPackage, load_package
from .services import ValidationServices
from .snapshot import SourceSnapshot
from .specmaps import load_spec_map
from .versions import canonical_resource_names


@dataclass(slots=True)
class ServicesConfig:
    canonical: str
    fhir_version: str | None = None
    bundle_references_resolve: bool = False
    authored: list[Path] = field(default_factory=list)
    packages: list[Path] = field(default_factory=list)
    context: list[Path] = field(default_factory=list)
    spec_maps: list[Path] = field(default_factory=list)
    mapping_urls: list[str] = field(default_factory=list)
    verbose: int = 0


def _paths(raw: Any, root: Path, key: str) -> list[Path]:
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        raise ValueError(f"'{key}' must be a path or a list of paths")
    return [p if p.is_absolute() else root / p for p in (Path(str(x)) for x in raw)]


def load_config(path: Path) -> ServicesConfig:
    """Read a YAML config. Relative paths are taken from the config file's directory."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = load_yaml_safe(path) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: config must be a mapping")

    canonical = data.get("canonical")
    if not canonical:
        raise ValueError(f"{path}: 'canonical' is required")

    root = path.parent
    fhir_version = data.get("fhir_version")
    return ServicesConfig(
        canonical=str(canonical),
        fhir_version=str(fhir_version) if fhir_version is not None else None,
        bundle_references_resolve=bool(data.get("bundle_references_resolve", False)),
        authored=_paths(data.get("authored"), root, "authored"),
        packages=_paths(data.get("packages"), root, "packages"),
        context=_paths(data.get("context"), root, "context"),
        spec_maps=_paths(data.get("spec_maps"), root, "spec_maps"),
        mapping_urls=[str(u) for u in data.get("mapping_urls") or []],
        verbose=int(data.get("verbose", 0)),
    )


def populate_context(store: ContextStore, packages: list[NpmPackage], verbose: int = 0) -> int:
    """Add every canonical resource the packages carry. Returns how many were added."""
    allowed = canonical_resource_names(store.version)
    added = 0
    for npm in packages:
        for node in npm.iter_resources():
            if node["resourceType"] in allowed and isinstance(node.get("url"), str):
                store.add(node)
                added += 1
    if verbose >= 1:
        typer.echo(f"[load] context store: {added} canonical resources")
    return added


def build_snapshot(cfg: ServicesConfig) -> SourceSnapshot:
    packages = [load_package(p, cfg.verbose) for p in cfg.packages]
    context_packages = [load_package(p, cfg.verbose) for p in cfg.context]

    store = ContextStore(version=cfg.fhir_version)
    populate_context(store, context_packages + packages, cfg.verbose)

    return SourceSnapshot.build(
        canonical=cfg.canonical,
        context=store,
        files=load_authored(cfg.authored, cfg.verbose),
        packages=packages,
        spec_maps=[load_spec_map(p, cfg.verbose) for p in cfg.spec_maps],
    )


def build_services(cfg: ServicesConfig) -> ValidationServices:
    return ValidationServices(
        build_snapshot(cfg),
        bundle_references_resolve=cfg.bundle_references_resolve,
        mapping_urls=cfg.mapping_urls,
        verbose=cfg.verbose,
    )
