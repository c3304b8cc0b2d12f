# tests/test_urls.py

import pytest

from igservices.enums import ResourceKind
from igservices.urls import classify, infer_kind, is_absolute_url, path_url, split_segments, url_matches

CANONICAL = "http://example.org/fhir/myig"


class TestClassify:
    def test_relative_reference(self):
        ref = classify("StructureDefinition/my-profile", CANONICAL)
        assert not ref.is_absolute
        assert ref.url == f"{CANONICAL}/StructureDefinition/my-profile"
        assert ref.segments == ("StructureDefinition", "my-profile")
        assert ref.kind == ResourceKind.structure_definition

    def test_version_and_fragment(self):
        ref = classify("http://example.org/fhir/ValueSet/vs#frag|1.2.0", CANONICAL)
        assert ref.is_absolute
        assert ref.base == "http://example.org/fhir/ValueSet/vs#frag"
        assert ref.version == "1.2.0"
        assert ref.fragment == "frag"
        assert ref.kind == ResourceKind.value_set

    def test_plain_url(self):
        ref = classify("http://loinc.org", CANONICAL)
        assert ref.version is None
        assert ref.fragment is None
        assert not ref.is_wildcard
        assert ref.kind == ResourceKind.unknown

    def test_wildcard(self):
        assert classify("http://example.org/*/profile", CANONICAL).is_wildcard

    @pytest.mark.parametrize("raw", ["", "|", "#", "///", "not a url at all"])
    def test_never_raises(self, raw):
        ref = classify(raw, CANONICAL)
        assert ref.raw == raw

    def test_without_canonical_relative_stays_relative(self):
        assert classify("Patient/1", None).url == "Patient/1"

    def test_local_segments(self):
        assert classify(f"{CANONICAL}/Patient/p1", CANONICAL).local_segments(CANONICAL) == ("Patient", "p1")
        assert classify("Patient/p1", CANONICAL).local_segments(CANONICAL) == ("Patient", "p1")
        assert classify("http://other.org/Patient/p1", CANONICAL).local_segments(CANONICAL) is None

    def test_local_segments_need_a_path_boundary(self):
        assert classify(f"{CANONICAL}Patient/p1", CANONICAL).local_segments(CANONICAL) is None
        assert classify(f"{CANONICAL}-r2/Patient/p1", CANONICAL).local_segments(CANONICAL) is None
        assert classify(CANONICAL, CANONICAL).local_segments(CANONICAL) == ()
        assert classify(f"{CANONICAL}/Patient/p1", f"{CANONICAL}/").local_segments(f"{CANONICAL}/") == ("Patient", "p1")


@pytest.mark.parametrize(
    "url,kind",
    [
        ("http://x.org/ValueSet/a", ResourceKind.value_set),
        ("http://x.org/StructureDefinition/a", ResourceKind.structure_definition),
        ("http://x.org/CodeSystem/a", ResourceKind.code_system),
        ("http://x.org/OperationDefinition/a", ResourceKind.operation_definition),
        ("http://x.org/Questionnaire/a", ResourceKind.questionnaire),
        ("http://x.org/QuestionnaireResponse/a", ResourceKind.unknown),
        ("ValueSet/a", ResourceKind.unknown),
        ("http://x.org/StructureMap/a", ResourceKind.unknown),
    ],
)
def test_infer_kind(url, kind):
    assert infer_kind(url) == kind


def test_is_absolute_url():
    assert is_absolute_url("http://x.org")
    assert is_absolute_url("https://x.org")
    assert is_absolute_url("urn:uuid:1234")
    assert not is_absolute_url("Patient/1")
    assert not is_absolute_url("#local")
    assert not is_absolute_url(None)


def test_path_url():
    assert path_url("http://x.org/fhir", "Patient", "1") == "http://x.org/fhir/Patient/1"
    assert path_url("http://x.org/fhir/", "/Patient") == "http://x.org/fhir/Patient"
    assert path_url("http://x.org/fhir/", "Patient") == "http://x.org/fhir/Patient"


def test_split_segments_drops_trailing_empties():
    assert split_segments("Patient/1/") == ("Patient", "1")


class TestUrlMatches:
    def test_longer_with_prefix_and_suffix(self):
        assert url_matches("http://example.org/*/profile", "http://example.org/a/b/profile")

    def test_not_strictly_longer(self):
        assert not url_matches("http://example.org/*/profile", "http://example.org/profile")

    def test_wrong_suffix(self):
        assert not url_matches("http://example.org/*/profile", "http://example.org/a/b/other")

    def test_no_candidate(self):
        assert not url_matches("http://example.org/*", None)
