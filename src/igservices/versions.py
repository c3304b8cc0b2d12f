# src/igservices/versions.py
"""FHIR version helpers: version families and the resource names each one defines."""

from __future__ import annotations

_COMMON_CANONICAL = frozenset(
    {
        "ActivityDefinition",
        "CapabilityStatement",
        "ChargeItemDefinition",
        "CodeSystem",
        "CompartmentDefinition",
        "ConceptMap",
        "EventDefinition",
        "Evidence",
        "EvidenceVariable",
        "ExampleScenario",
        "GraphDefinition",
        "ImplementationGuide",
        "Library",
        "Measure",
        "MessageDefinition",
        "NamingSystem",
        "OperationDefinition",
        "PlanDefinition",
        "Questionnaire",
        "SearchParameter",
        "StructureDefinition",
        "StructureMap",
        "TerminologyCapabilities",
        "TestScript",
        "ValueSet",
    }
)

_R4_ONLY_CANONICAL = frozenset(
    {
        "EffectEvidenceSynthesis",
        "ResearchDefinition",
        "ResearchElementDefinition",
        "RiskEvidenceSynthesis",
    }
)

_R4B_ADDED_CANONICAL = frozenset({"Citation", "EvidenceReport", "SubscriptionTopic"})

_R5_ADDED_CANONICAL = frozenset(
    {
        "ActorDefinition",
        "Citation",
        "ConditionDefinition",
        "EvidenceReport",
        "ObservationDefinition",
        "Requirements",
        "SpecimenDefinition",
        "SubscriptionTopic",
        "TestPlan",
    }
)

_COMMON_RESOURCES = frozenset(
    {
        "Account",
        "AdverseEvent",
        "AllergyIntolerance",
        "Appointment",
        "AppointmentResponse",
        "AuditEvent",
        "Basic",
        "Binary",
        "BiologicallyDerivedProduct",
        "BodyStructure",
        "Bundle",
        "CarePlan",
        "CareTeam",
        "ChargeItem",
        "Claim",
        "ClaimResponse",
        "ClinicalImpression",
        "Communication",
        "CommunicationRequest",
        "Composition",
        "Condition",
        "Consent",
        "Contract",
        "Coverage",
        "CoverageEligibilityRequest",
        "CoverageEligibilityResponse",
        "DetectedIssue",
        "Device",
        "DeviceDefinition",
        "DeviceMetric",
        "DeviceRequest",
        "DiagnosticReport",
        "DocumentReference",
        "Encounter",
        "Endpoint",
        "EnrollmentRequest",
        "EnrollmentResponse",
        "EpisodeOfCare",
        "ExplanationOfBenefit",
        "FamilyMemberHistory",
        "Flag",
        "Goal",
        "Group",
        "GuidanceResponse",
        "HealthcareService",
        "ImagingStudy",
        "Immunization",
        "ImmunizationEvaluation",
        "ImmunizationRecommendation",
        "InsurancePlan",
        "Invoice",
        "Linkage",
        "List",
        "Location",
        "MeasureReport",
        "Medication",
        "MedicationAdministration",
        "MedicationDispense",
        "MedicationKnowledge",
        "MedicationRequest",
        "MedicationStatement",
        "MessageHeader",
        "MolecularSequence",
        "NutritionOrder",
        "Observation",
        "OperationOutcome",
        "Organization",
        "OrganizationAffiliation",
        "Parameters",
        "Patient",
        "PaymentNotice",
        "PaymentReconciliation",
        "Person",
        "Practitioner",
        "PractitionerRole",
        "Procedure",
        "Provenance",
        "QuestionnaireResponse",
        "RelatedPerson",
        "ResearchStudy",
        "ResearchSubject",
        "RiskAssessment",
        "Schedule",
        "ServiceRequest",
        "Slot",
        "Specimen",
        "Subscription",
        "Substance",
        "SubstanceNucleicAcid",
        "SubstancePolymer",
        "SubstanceProtein",
        "SubstanceReferenceInformation",
        "SubstanceSourceMaterial",
        "SupplyDelivery",
        "SupplyRequest",
        "Task",
        "TestReport",
        "VerificationResult",
        "VisionPrescription",
    }
)

# Dropped or made canonical in R5
_R4_R4B_RESOURCES = frozenset(
    {
        "CatalogEntry",
        "DeviceUseStatement",
        "DocumentManifest",
        "Media",
        "ObservationDefinition",
        "RequestGroup",
        "SpecimenDefinition",
    }
)

# Replaced by the product definition resources in R4B
_R4_ONLY_RESOURCES = frozenset(
    {
        "MedicinalProduct",
        "MedicinalProductAuthorization",
        "MedicinalProductContraindication",
        "MedicinalProductIndication",
        "MedicinalProductIngredient",
        "MedicinalProductInteraction",
        "MedicinalProductManufactured",
        "MedicinalProductPackaged",
        "MedicinalProductPharmaceutical",
        "MedicinalProductUndesirableEffect",
        "SubstanceSpecification",
    }
)

_R4B_R5_RESOURCES = frozenset(
    {
        "AdministrableProductDefinition",
        "ClinicalUseDefinition",
        "Ingredient",
        "ManufacturedItemDefinition",
        "MedicinalProductDefinition",
        "NutritionProduct",
        "PackagedProductDefinition",
        "RegulatedAuthorization",
        "SubscriptionStatus",
        "SubstanceDefinition",
    }
)

_R5_ADDED_RESOURCES = frozenset(
    {
        "ArtifactAssessment",
        "BiologicallyDerivedProductDispense",
        "DeviceDispense",
        "DeviceUsage",
        "EncounterHistory",
        "FormularyItem",
        "GenomicStudy",
        "ImagingSelection",
        "InventoryItem",
        "InventoryReport",
        "NutritionIntake",
        "Permission",
        "RequestOrchestration",
        "Transport",
    }
)


def is_r4b(version: str | None) -> bool:
    return bool(version) and version.startswith(("4.1", "4.3"))


def is_r5(version: str | None) -> bool:
    return bool(version) and version.startswith(("5.", "6."))


def canonical_resource_names(version: str | None) -> frozenset[str]:
    """Names of resource types that carry a canonical url in the given FHIR version.

    Unknown or missing versions are treated as R4.
    """
    if is_r5(version):
        return _COMMON_CANONICAL | _R5_ADDED_CANONICAL
    if is_r4b(version):
        return _COMMON_CANONICAL | _R4B_ADDED_CANONICAL
    return _COMMON_CANONICAL | _R4_ONLY_CANONICAL


def resource_names(version: str | None) -> frozenset[str]:
    """Every concrete resource type name defined by the given FHIR version."""
    if is_r5(version):
        others = _R4B_R5_RESOURCES | _R5_ADDED_RESOURCES
    elif is_r4b(version):
        others = _R4_R4B_RESOURCES | _R4B_R5_RESOURCES
    else:
        others = _R4_R4B_RESOURCES | _R4_ONLY_RESOURCES
    return canonical_resource_names(version) | _COMMON_RESOURCES | others
