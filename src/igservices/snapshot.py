# src/igservices/snapshot.py
from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from .authored import FetchedFile
from .context import ContextStore
from .implicit_valuesets import build_implicit_value_set
from .naming import NamingSystemRegistry
from .packages import NpmPackage
from .specmaps import SpecMap

ValueSetSynthesizer = Callable[[str], dict[str, Any] | None]


@dataclass(frozen=True, slots=True)
class SourceSnapshot:
    """Every source the services consult, fixed for the duration of one validation run.

    ``packages`` is in precedence order: the resolver walks it forwards for canonical
    matches and backwards for the example fallback.
    """

    canonical: str
    context: ContextStore
    files: tuple[FetchedFile, ...] = ()
    packages: tuple[NpmPackage, ...] = ()
    naming_systems: NamingSystemRegistry = NamingSystemRegistry()
    spec_maps: tuple[SpecMap, ...] = ()
    implicit_value_sets: ValueSetSynthesizer = build_implicit_value_set

    @classmethod
    def build(
        cls,
        canonical: str,
        context: ContextStore,
        files: Iterable[FetchedFile] = (),
        packages: Iterable[NpmPackage] = (),
        naming_systems: NamingSystemRegistry | None = None,
        spec_maps: Iterable[SpecMap] = (),
        implicit_value_sets: ValueSetSynthesizer = build_implicit_value_set,
    ) -> SourceSnapshot:
        if naming_systems is None:
            naming_systems = NamingSystemRegistry.from_context(context)
        return cls(
            canonical=canonical,
            context=context,
            files=tuple(files),
            packages=tuple(packages),
            naming_systems=naming_systems,
            spec_maps=tuple(spec_maps),
            implicit_value_sets=implicit_value_sets,
        )
