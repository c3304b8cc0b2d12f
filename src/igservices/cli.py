#!/usr/bin/env python3
# src/igservices/cli.py


from __future__ import annotations

import json
import sys
from pathlib import Path

import typer

from .config import build_services, load_config
from .content import load_content_file
from .errors import FetchError
from .services import ValidationServices

app = typer.Typer(
    name="igservices",
    help="Resolve references and inspect validation policy for a FHIR implementation guide.",
    add_completion=False,
)


def _verbosity_callback(value: int):
    return max(0, min(value, 3))


def _services(config: Path, verbose: int) -> ValidationServices:
    try:
        cfg = load_config(config)
    except (FileNotFoundError, ValueError) as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1) from e

    cfg.verbose = max(cfg.verbose, verbose)

    try:
        return build_services(cfg)
    except (FileNotFoundError, ValueError) as e:
        typer.secho(f"Unable to load sources: {e}", fg=typer.colors.RED)
        raise typer.Exit(1) from e


@app.command()
def info() -> None:
    print("igservices resolution order")
    print("-" * 80)
    print("fetch (content):")
    print("  1. context store (ValueSet, StructureDefinition, CodeSystem, OperationDefinition, Questionnaire)")
    print("  2. implicit value sets (SNOMED CT ?fhir_vs, LOINC /vs, UCUM /vs, mime types)")
    print("  3. dependency packages whose canonical prefixes the reference (resource, then example)")
    print("  4. containing bundle (fullUrl, then Kind/id)")
    print("  5. authored resources (Kind/id under the guide's canonical)")
    print("  6. entries of authored bundles (fullUrl)")
    print("  7. package examples, last package first")
    print("-" * 80)
    print("exists (reachability):")
    print("  allow-list, known systems, FHIRPath types, mapping urls, StructureMap masks,")
    print("  authored resources, naming systems, spec maps, core spec; anything else exists")


@app.command()
def diagnose() -> None:
    print("igservices Environment Check\n")

    deps = {
        "typer": "Typer",
        "yaml": "PyYAML",
        "pydantic": "Pydantic",
        "requests": "Requests",
    }

    print("Dependencies")
    print("-" * 50)
    print(f"{'Package':<30} {'Status':<10} {'Version'}")
    print("-" * 50)

    for module, name in deps.items():
        try:
            m = __import__(module)
            version = getattr(m, "__version__", "unknown")
            print(f"{name:<30} {'[OK]':<10} {version}")
        except ImportError:
            print(f"{name:<30} {'[MISSING]':<10} {'not installed'}")
    print(f"\nPython: {sys.version}")


@app.command()
def fetch(
    ref: str = typer.Argument(..., help="Reference to resolve (relative or absolute)"),
    config: Path = typer.Option(..., "--config", "-c", exists=True, help="YAML config describing the sources"),
    bundle: Path | None = typer.Option(None, "--bundle", exists=True, help="Bundle to search as containing context"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, callback=_verbosity_callback),
) -> None:
    services = _services(config, verbose)

    try:
        app_context = load_content_file(bundle) if bundle is not None else None
        node = services.fetch(ref, app_context)
    except FetchError as e:
        typer.secho(f"❌ {e}", fg=typer.colors.RED)
        raise typer.Exit(2) from e

    if node is None:
        print(f"not found: {ref}")
        raise typer.Exit(1)

    print(json.dumps(node, indent=2, ensure_ascii=False))


@app.command()
def exists(
    ref: str = typer.Argument(..., help="Reference to check"),
    config: Path = typer.Option(..., "--config", "-c", exists=True, help="YAML config describing the sources"),
    path: str = typer.Option("", "--path", help="Call-site path, e.g. StructureDefinition.mapping.uri"),
    kind: str | None = typer.Option(None, "--type", help="Expected resource type"),
    canonical: bool = typer.Option(False, "--canonical", help="Only canonical resources count"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, callback=_verbosity_callback),
) -> None:
    services = _services(config, verbose)
    print(str(services.resolve_url(path, ref, kind, canonical)).lower())


@app.command()
def versions(
    url: str = typer.Argument(..., help="Canonical url"),
    config: Path = typer.Option(..., "--config", "-c", exists=True, help="YAML config describing the sources"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, callback=_verbosity_callback),
) -> None:
    services = _services(config, verbose)
    found = sorted(services.fetch_canonical_resource_versions(url))
    if not found:
        print(f"no resources for {url}")
        return
    for v in found:
        print(v)


@app.command()
def policy(
    path: str = typer.Argument(..., help="Call-site path, e.g. Bundle.entry.resource.subject"),
    config: Path = typer.Option(..., "--config", "-c", exists=True, help="YAML config describing the sources"),
    url: str | None = typer.Option(None, "--url", help="Reference found at the path"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, callback=_verbosity_callback),
) -> None:
    services = _services(config, verbose)
    print(services.policy_for_reference(path, url).value)


if __name__ == "__main__":
    app()
