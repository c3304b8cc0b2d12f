# src/igservices/enums.py
from enum import Enum


class ResourceKind(str, Enum):
    value_set = "ValueSet"
    structure_definition = "StructureDefinition"
    code_system = "CodeSystem"
    operation_definition = "OperationDefinition"
    questionnaire = "Questionnaire"
    unknown = "unknown"


class ContainedReferenceValidationPolicy(str, Enum):
    ignore = "ignore"
    check_type = "check-type"
    check_valid = "check-valid"


class ReferenceValidationPolicy(str, Enum):
    ignore = "ignore"
    check_type_if_exists = "check-type-if-exists"
    check_exists = "check-exists"
    check_exists_and_type = "check-exists-and-type"
    check_valid = "check-valid"


class CodedContentValidationAction(str, Enum):
    vs_check = "vs-check"
    vs_check_this_code = "vs-check-this-code"
    not_found = "not-found"
    invalid_code = "invalid-code"
    invalid_display = "invalid-display"
    cannot_infer = "cannot-infer"
    code_rule = "code-rule"
    vs_invalid = "vs-invalid"
    status_check = "status-check"


class ResourceValidationAction(str, Enum):
    base_type = "base-type"
    status_check = "status-check"


class ElementValidationAction(str, Enum):
    cardinality = "cardinality"
    invariants = "invariants"
    bindings = "bindings"
    status_check = "status-check"


class BindingKind(str, Enum):
    primary = "primary"
    max_value_set = "max-value-set"
    additional = "additional"


class BindingPurpose(str, Enum):
    minimum = "minimum"
    required = "required"
    extensible = "extensible"
    current = "current"
    preferred = "preferred"
    ui = "ui"
