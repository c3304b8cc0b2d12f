# src/igservices/constants.py
"""Fixed URL tables shared by the resolver, the existence checker and the policy advisor."""

CORE_SPEC_PREFIX = "http://hl7.org/fhir"

FHIRPATH_SYSTEM_PREFIX = "http://hl7.org/fhirpath/System."
FHIRPATH_ACCEPTED_VERSIONS = frozenset({"2.0.0", "1.3.0", "1.2.0", "1.1.0", "1.0.0", "0.3.0", "0.2.0"})

STRUCTURE_MAPPING_PATH = "StructureDefinition.mapping"

UNVERSIONED = "{{unversioned}}"

# Only valid on R4B: the IG parameter code was a fixed code system there
R4B_IG_PARAMETER_CODE_PATH = "ImplementationGuide.definition.parameter.code"

OTHER_URL_EXTRAS = (
    "http://hl7.org/fhir/w5",
    "http://hl7.org/fhir/fivews",
    "http://hl7.org/fhir/workflow",
    "http://hl7.org/fhir/tools/StructureDefinition/resource-information",
    "http://hl7.org/fhir/ConsentPolicy/opt-out",
    "http://hl7.org/fhir/ConsentPolicy/opt-in",
)

_BUILD = "http://hl7.org/fhir/build/StructureDefinition/"

BUILD_EXTENSION_URLS = frozenset(
    _BUILD + name
    for name in (
        "committee-notes",
        "display-hint",
        "entered-in-error-status",
        "english",
        "fmm-level",
        "hierarchy",
        "json-name",
        "logical-target",
        "no-binding",
        "normative-version",
        "op-example",
        "op-example-header",
        "summary",
        "svg",
        "template",
        "todo",
        "uml-dir",
        "uml-break",
        "xml-name",
        "xml-no-order",
    )
)
