# tests/conftest.py

import json
from pathlib import Path

import pytest
import yaml

from igservices.authored import load_authored
from igservices.context import ContextStore
from igservices.models import CanonicalResource
from igservices.packages import load_package
from igservices.snapshot import SourceSnapshot

CANONICAL = "http://example.org/fhir/myig"
PKG_A = "http://example.org/fhir/pkg-a"
PKG_B = "http://example.org/fhir/pkg-b"


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2))
    return path


def write_package(root: Path, name: str, canonical: str | None, resources=(), examples=()) -> Path:
    meta = {"name": name, "version": "1.0.0"}
    if canonical:
        meta["canonical"] = canonical
    write_json(root / "package" / "package.json", meta)
    for r in resources:
        write_json(root / "package" / f"{r['resourceType']}-{r['id']}.json", r)
    for r in examples:
        write_json(root / "package" / "example" / f"{r['resourceType']}-{r['id']}.json", r)
    return root


@pytest.fixture
def ig_dir(tmp_path):
    res = tmp_path / "input" / "resources"
    write_json(res / "Patient-p1.json", {"resourceType": "Patient", "id": "p1"})
    write_json(
        res / "StructureDefinition-my-profile.json",
        {
            "resourceType": "StructureDefinition",
            "id": "my-profile",
            "url": f"{CANONICAL}/StructureDefinition/my-profile",
        },
    )
    write_json(
        res / "Bundle-b1.json",
        {
            "resourceType": "Bundle",
            "id": "b1",
            "type": "collection",
            "entry": [
                {
                    "fullUrl": "urn:uuid:8f4e1a52-0c2d-4d5e-9d0c-1b2f3c4d5e6f",
                    "resource": {"resourceType": "Observation", "id": "o1", "status": "final"},
                },
                {"fullUrl": "http://other.org/fhir/Device/d1"},
            ],
        },
    )
    (res / "practitioners.yaml").write_text(
        yaml.dump([{"resourceType": "Practitioner", "id": "dr1"}, {"resourceType": "Practitioner", "id": "dr2"}])
    )

    deps = tmp_path / "deps"
    write_package(
        deps / "pkg-a",
        "example.pkg.a",
        PKG_A,
        resources=[
            {
                "resourceType": "StructureDefinition",
                "id": "a-profile",
                "url": f"{PKG_A}/StructureDefinition/a-profile",
            },
            {
                "resourceType": "ValueSet",
                "id": "colors",
                "url": f"{PKG_A}/ValueSet/colors",
                "version": "1.0.0",
                "status": "active",
            },
        ],
        examples=[
            {"resourceType": "Patient", "id": "ex1", "gender": "female"},
            {"resourceType": "Patient", "id": "only-a"},
        ],
    )
    write_package(
        deps / "pkg-b",
        "example.pkg.b",
        PKG_B,
        examples=[{"resourceType": "Patient", "id": "ex1", "gender": "male"}],
    )
    return tmp_path


@pytest.fixture
def context_store():
    store = ContextStore(version="4.0.1")
    store.add(
        {
            "resourceType": "ValueSet",
            "id": "colors",
            "url": "http://example.org/fhir/ValueSet/colors",
            "version": "1.0.0",
            "status": "active",
            "compose": {"include": [{"system": "http://example.org/colors"}]},
        }
    )
    store.add(
        CanonicalResource(
            resource_type="CodeSystem",
            id="shapes",
            url="http://example.org/fhir/CodeSystem/shapes",
            status="draft",
        )
    )
    store.add(
        {
            "resourceType": "StructureMap",
            "id": "a-to-b",
            "url": "http://example.org/a/b/profile",
        }
    )
    store.add(
        {
            "resourceType": "NamingSystem",
            "id": "mrn",
            "name": "MRN",
            "uniqueId": [
                {"type": "uri", "value": "http://hospital.example.org/mrn", "preferred": True},
                {"type": "oid", "value": "1.2.3.4.5"},
            ],
        }
    )
    store.add(
        {
            "resourceType": "StructureDefinition",
            "id": "Patient",
            "url": "http://hl7.org/fhir/StructureDefinition/Patient",
            "version": "4.0.1",
        }
    )
    return store


@pytest.fixture
def snapshot(ig_dir, context_store):
    return SourceSnapshot.build(
        canonical=CANONICAL,
        context=context_store,
        files=load_authored([ig_dir / "input" / "resources"]),
        packages=[load_package(ig_dir / "deps" / "pkg-a"), load_package(ig_dir / "deps" / "pkg-b")],
    )


@pytest.fixture
def config_file(ig_dir):
    path = ig_dir / "igservices.yaml"
    path.write_text(
        yaml.dump(
            {
                "canonical": CANONICAL,
                "fhir_version": "4.0.1",
                "authored": ["input/resources"],
                "packages": ["deps/pkg-a", "deps/pkg-b"],
                "mapping_urls": ["http://example.org/mapping/v2"],
            }
        )
    )
    return path
