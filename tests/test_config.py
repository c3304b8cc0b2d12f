# tests/test_config.py

import json

import pytest
import yaml
from conftest import CANONICAL, PKG_A

from igservices.config import ServicesConfig, build_services, build_snapshot, load_config


class TestLoadConfig:
    def test_paths_relative_to_config(self, config_file, ig_dir):
        cfg = load_config(config_file)
        assert cfg.canonical == CANONICAL
        assert cfg.fhir_version == "4.0.1"
        assert cfg.authored == [ig_dir / "input" / "resources"]
        assert cfg.packages == [ig_dir / "deps" / "pkg-a", ig_dir / "deps" / "pkg-b"]
        assert cfg.mapping_urls == ["http://example.org/mapping/v2"]
        assert cfg.bundle_references_resolve is False

    def test_single_path_string(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text(yaml.dump({"canonical": CANONICAL, "authored": "input"}))
        assert load_config(path).authored == [tmp_path / "input"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_missing_canonical(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text(yaml.dump({"fhir_version": "4.0.1"}))
        with pytest.raises(ValueError, match="'canonical' is required"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text(yaml.dump(["canonical"]))
        with pytest.raises(ValueError, match="must be a mapping"):
            load_config(path)

    def test_bad_path_list(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text(yaml.dump({"canonical": CANONICAL, "packages": {"a": 1}}))
        with pytest.raises(ValueError, match="'packages' must be"):
            load_config(path)


class TestBuild:
    def test_snapshot(self, config_file):
        snapshot = build_snapshot(load_config(config_file))
        assert snapshot.canonical == CANONICAL
        assert [p.name for p in snapshot.packages] == ["example.pkg.a", "example.pkg.b"]
        assert len(snapshot.files) == 4
        # Canonical resources of dependency packages are loaded into the context store
        assert snapshot.context.fetch_resource("ValueSet", f"{PKG_A}/ValueSet/colors") is not None
        assert snapshot.context.version == "4.0.1"

    def test_context_packages_and_spec_maps(self, ig_dir):
        core = ig_dir / "deps" / "core"
        (core / "package").mkdir(parents=True)
        (core / "package" / "package.json").write_text(json.dumps({"name": "hl7.fhir.r4.core", "version": "4.0.1"}))
        (core / "package" / "StructureDefinition-Patient.json").write_text(
            json.dumps(
                {
                    "resourceType": "StructureDefinition",
                    "id": "Patient",
                    "url": "http://hl7.org/fhir/StructureDefinition/Patient",
                    "version": "4.0.1",
                }
            )
        )
        (core / "package" / "Patient-example.json").write_text(json.dumps({"resourceType": "Patient", "id": "example"}))
        (ig_dir / "spec.internals").write_text(json.dumps({"webUrl": "http://hl7.org/fhir/R4", "targets": ["patient.html"]}))

        cfg = ServicesConfig(
            canonical=CANONICAL,
            fhir_version="4.0.1",
            context=[core],
            spec_maps=[ig_dir / "spec.internals"],
        )
        with pytest.warns(UserWarning, match="declares no canonical"):
            services = build_services(cfg)

        assert services.resolve_url("x", "http://hl7.org/fhir/StructureDefinition/Patient") is True
        assert services.resolve_url("x", "http://hl7.org/fhir/R4/patient.html") is True
        # Non-canonical resources never enter the context store
        assert len(services.snapshot.context) == 1

    def test_services_options(self, config_file):
        services = build_services(load_config(config_file))
        assert services.mapping_urls == frozenset({"http://example.org/mapping/v2"})
        assert services.bundle_references_resolve is False
