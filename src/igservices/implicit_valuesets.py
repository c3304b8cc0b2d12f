# src/igservices/implicit_valuesets.py
"""Value sets that code systems define implicitly by url convention (SNOMED CT ?fhir_vs, LOINC /vs, ...)."""

from __future__ import annotations

from typing import Any

from .sid import LOINC, SNOMED, UCUM

MIMETYPES_VS = "http://hl7.org/fhir/ValueSet/mimetypes"
MIMETYPES_SYSTEM = "urn:ietf:bcp:13"


def _value_set(url: str, name: str, include: dict[str, Any]) -> dict[str, Any]:
    return {
        "resourceType": "ValueSet",
        "url": url,
        "name": name,
        "status": "active",
        "compose": {"include": [include]},
    }


def _snomed(url: str) -> dict[str, Any] | None:
    base, _, query = url.partition("?")
    if not query.startswith("fhir_vs"):
        return None
    # Edition-specific urls carry the edition in the path: http://snomed.info/sct/{module}
    include: dict[str, Any] = {"system": SNOMED}
    if base != SNOMED:
        include["version"] = base
    if query == "fhir_vs":
        return _value_set(url, "SCTAll", include)
    spec = query[len("fhir_vs=") :] if query.startswith("fhir_vs=") else None
    if spec is None:
        return None
    if spec.startswith("isa/"):
        code = spec[len("isa/") :]
        include["filter"] = [{"property": "concept", "op": "is-a", "value": code}]
        return _value_set(url, f"SCTIsA{code}", include)
    if spec.startswith("refset/"):
        code = spec[len("refset/") :]
        include["filter"] = [{"property": "concept", "op": "in", "value": code}]
        return _value_set(url, f"SCTRefSet{code}", include)
    return None


def _loinc(url: str) -> dict[str, Any] | None:
    if url == f"{LOINC}/vs":
        return _value_set(url, "LOINCAll", {"system": LOINC})
    code = url[len(f"{LOINC}/vs/") :]
    if code.startswith("LP"):
        include = {"system": LOINC, "filter": [{"property": "ancestor", "op": "=", "value": code}]}
        return _value_set(url, f"LOINCPart{code}", include)
    if code.startswith("LL"):
        include = {"system": LOINC, "filter": [{"property": "LIST", "op": "=", "value": code}]}
        return _value_set(url, f"LOINCAnswers{code}", include)
    return None


def build_implicit_value_set(url: str | None) -> dict[str, Any] | None:
    """Return a ValueSet content node if ``url`` names an implicit value set, else None."""
    if not url:
        return None
    if url.startswith(SNOMED):
        return _snomed(url)
    if url == f"{LOINC}/vs" or url.startswith(f"{LOINC}/vs/"):
        return _loinc(url)
    if url == f"{UCUM}/vs":
        return _value_set(url, "UCUMAll", {"system": UCUM})
    if url == MIMETYPES_VS:
        return _value_set(url, "MimeTypes", {"system": MIMETYPES_SYSTEM})
    return None
