# src/igservices/urls.py
"""Reference classification: absolute/relative, |version, #fragment, * wildcards and kind inference."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import ResourceKind

_ABSOLUTE_SCHEMES = ("http:", "https:", "urn:", "ftp:", "file:")

# Order matters: the first keyword found in the url decides the kind
_KIND_MARKERS: tuple[tuple[str, ResourceKind], ...] = (
    ("/ValueSet/", ResourceKind.value_set),
    ("/StructureDefinition/", ResourceKind.structure_definition),
    ("/CodeSystem/", ResourceKind.code_system),
    ("/OperationDefinition/", ResourceKind.operation_definition),
    ("/Questionnaire/", ResourceKind.questionnaire),
)


def is_absolute_url(ref: str | None) -> bool:
    return bool(ref) and ref.startswith(_ABSOLUTE_SCHEMES)


def path_url(*parts: str) -> str:
    """Join url parts with exactly one '/' between them."""
    out = ""
    for part in parts:
        if not part:
            continue
        if not out:
            out = part
        elif out.endswith("/") and part.startswith("/"):
            out += part[1:]
        elif out.endswith("/") or part.startswith("/"):
            out += part
        else:
            out += "/" + part
    return out


def split_version(url: str) -> tuple[str, str | None]:
    if "|" in url:
        base, version = url.split("|", 1)
        return base, version
    return url, None


def split_fragment(url: str) -> tuple[str, str | None]:
    if "#" in url:
        base, frag = url.split("#", 1)
        return base, frag
    return url, None


def split_segments(ref: str) -> tuple[str, ...]:
    parts = ref.split("/")
    # Trailing empty strings carry no segment information
    while parts and parts[-1] == "":
        parts.pop()
    return tuple(parts)


def infer_kind(url: str) -> ResourceKind:
    for marker, kind in _KIND_MARKERS:
        if marker in url:
            return kind
    return ResourceKind.unknown


def url_matches(mask: str, url: str | None) -> bool:
    """Wildcard match: the text before '*' is a prefix, the text after it a suffix.

    The candidate must be strictly longer than the mask.
    """
    if not url or "*" not in mask:
        return False
    star = mask.index("*")
    return len(url) > len(mask) and url.startswith(mask[:star]) and url.endswith(mask[star + 1 :])


@dataclass(frozen=True, slots=True)
class Reference:
    raw: str
    url: str
    is_absolute: bool
    base: str
    version: str | None
    fragment: str | None
    is_wildcard: bool
    segments: tuple[str, ...]
    kind: ResourceKind

    def local_segments(self, canonical_base: str | None) -> tuple[str, ...] | None:
        """Path segments relative to the guide, or None when the reference points outside it."""
        if not self.is_absolute:
            return self.segments
        if canonical_base and self.raw.startswith(canonical_base):
            rest = self.raw[len(canonical_base) :]
            if not rest or rest.startswith("/") or canonical_base.endswith("/"):
                return split_segments(rest.lstrip("/"))
        return None


def classify(ref: str, canonical_base: str | None) -> Reference:
    absolute = is_absolute_url(ref)
    url = ref if absolute or not canonical_base else path_url(canonical_base, ref)
    base, version = split_version(url)
    _, fragment = split_fragment(base)
    return Reference(
        raw=ref,
        url=url,
        is_absolute=absolute,
        base=base,
        version=version,
        fragment=fragment,
        is_wildcard="*" in ref,
        segments=split_segments(ref),
        kind=infer_kind(url),
    )
