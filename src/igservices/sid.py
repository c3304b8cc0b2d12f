# src/igservices/sid.py
"""Well-known external identifier systems (SIDs) that are not hosted as FHIR resources."""

from __future__ import annotations

import re

SNOMED = "http://snomed.info/sct"
LOINC = "http://loinc.org"
UCUM = "http://unitsofmeasure.org"
RXNORM = "http://www.nlm.nih.gov/research/umls/rxnorm"

_SNOMED_VERSION = re.compile(r"^http://snomed\.info/sct/\d+(/version/\d{8})?$")

_SYSTEMS = (
    SNOMED,
    LOINC,
    UCUM,
    RXNORM,
    "http://www.ama-assn.org/go/cpt",
    "http://www.nlm.nih.gov/research/umls/mesh",
    "http://hl7.org/fhir/sid/icd-9-cm",
    "http://hl7.org/fhir/sid/icd-10",
    "http://hl7.org/fhir/sid/icd-10-cm",
    "http://hl7.org/fhir/sid/icd-10-pcs",
    "http://hl7.org/fhir/sid/cvx",
    "http://hl7.org/fhir/sid/ndc",
    "http://hl7.org/fhir/sid/us-ssn",
    "http://hl7.org/fhir/sid/us-npi",
    "http://hl7.org/fhir/sid/ex-icd-10-procedures",
    "http://nucc.org/provider-taxonomy",
    "http://fdasis.nlm.nih.gov",
    "http://www.whocc.no/atc",
    "http://dicom.nema.org/resources/ontology/DCM",
    "urn:ietf:bcp:47",
    "urn:ietf:bcp:13",
    "urn:iso:std:iso:3166",
    "urn:iso:std:iso:3166:-2",
    "urn:iso:std:iso:4217",
    "urn:iso:std:iso:11073:10101",
    "urn:oid:1.2.36.1.2001.1005.17",
    "http://unstats.un.org/unsd/methods/m49/m49.htm",
    "http://varnomen.hgvs.org",
    "http://www.genenames.org",
    "http://www.ensembl.org",
    "http://www.ncbi.nlm.nih.gov/refseq",
    "http://www.ncbi.nlm.nih.gov/clinvar",
    "http://sequenceontology.org",
    "http://cancer.sanger.ac.uk/cancergenome/projects/cosmic",
    "http://www.ebi.ac.uk/ipd/imgt/hla",
)


def all_systems() -> tuple[str, ...]:
    return _SYSTEMS


def is_snomed(url: str) -> bool:
    return url == SNOMED or url.startswith(SNOMED + "/")


def is_known_sid(url: str) -> bool:
    return is_snomed(url) or url in _SYSTEMS


def is_invalid_version(url: str, version: str | None) -> bool:
    """True if ``version`` is not an acceptable version string for the system at ``url``.

    Only SNOMED CT constrains its versions (edition URIs); other systems accept anything.
    """
    if version is None:
        return False
    if is_snomed(url):
        return _SNOMED_VERSION.match(version) is None
    return False
