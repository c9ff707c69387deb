"""JSON Schema validation engine for the form.

The form's validation rules are expressed as a Draft 7 JSON Schema, one
property schema per validated field, and checked with the jsonschema library.
Each jsonschema error is translated back into the FieldError of the rule it
came from, so the message a user sees is always the one from the rule table.

Only the fields listed in VALIDATION_RULES are validated. Every other field
is valid regardless of its content.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import jsonschema
from jsonschema import Draft7Validator

from formstate.errors import FieldError
from formstate.types import ErrorRecord, FieldErrorCode, FormRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationRule:
    """One row of the validation rule table.

    Attributes:
        field: Field the rule applies to
        schema: JSON Schema fragment the field's value must satisfy
        code: Error code reported on failure
        message: Inline message reported on failure
    """
    field: str
    schema: Dict[str, Any]
    code: FieldErrorCode
    message: str


# Characters String.prototype.trim() strips: ECMAScript WhiteSpace and LineTerminator
_TRIMMED = "\\t\\n\\v\\f\\r \\u00a0\\u1680\\u2000-\\u200a\\u2028\\u2029\\u202f\\u205f\\u3000\\ufeff"

VALIDATION_RULES: Tuple[ValidationRule, ...] = (
    # Trimmed length > 0: at least one character trim() would keep
    ValidationRule(
        "fullName",
        {"type": "string", "pattern": f"[^{_TRIMMED}]"},
        FieldErrorCode.REQUIRED,
        "Full name is required",
    ),
    ValidationRule(
        "email", {"type": "string", "pattern": "@"}, FieldErrorCode.INVALID_FORMAT, "Valid email required"
    ),
    # minLength counts code points, not UTF-16 units
    ValidationRule(
        "password", {"type": "string", "minLength": 8}, FieldErrorCode.TOO_SHORT, "Minimum 8 characters"
    ),
    ValidationRule(
        "gender", {"type": "string", "minLength": 1}, FieldErrorCode.REQUIRED, "Please select a gender"
    ),
    ValidationRule(
        "country", {"type": "string", "minLength": 1}, FieldErrorCode.REQUIRED, "Select a country"
    ),
    ValidationRule(
        "priority", {"type": "string", "minLength": 1}, FieldErrorCode.REQUIRED, "Select priority"
    ),
    ValidationRule(
        "rating",
        {"type": "integer", "not": {"const": 0}},
        FieldErrorCode.REQUIRED,
        "Please rate your experience",
    ),
    ValidationRule(
        "acceptTerms",
        {"const": True},
        FieldErrorCode.INVALID_VALUE,
        "You must accept terms and conditions",
    ),
)

RULES_BY_FIELD: Dict[str, ValidationRule] = {rule.field: rule for rule in VALIDATION_RULES}


def build_schema(rules: Tuple[ValidationRule, ...] = VALIDATION_RULES) -> Dict[str, Any]:
    """Assemble the object schema for a rule table.

    A validated field that is missing from the record fails with its rule's
    message, the same as an empty value would.
    """
    return {
        "type": "object",
        "properties": {rule.field: rule.schema for rule in rules},
        "required": [rule.field for rule in rules],
    }


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating a FormRecord.

    Attributes:
        is_valid: Whether the record passed every rule
        errors: Field-level errors in rule-table order (empty if valid)

    Examples:
        >>> from formstate.fields import default_record
        >>> result = ValidationEngine().validate(default_record())
        >>> result.is_valid
        False
        >>> result.error_record["rating"]
        'Please rate your experience'
    """
    is_valid: bool
    errors: List[FieldError] = field(default_factory=list)

    @property
    def error_record(self) -> ErrorRecord:
        """The errors as a sparse field-to-message mapping."""
        return {error.path: error.message for error in self.errors}

    @property
    def invalid_fields(self) -> List[str]:
        """Names of the fields that failed, in rule-table order."""
        return [error.path for error in self.errors]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "isValid": self.is_valid,
            "errors": [e.to_dict() for e in self.errors],
        }


class ValidationEngine:
    """Checks a FormRecord against the validation rule table.

    Every rule is evaluated independently; one failing rule never hides
    another. Validation is a pure function of the record.

    Examples:
        >>> engine = ValidationEngine()
        >>> from formstate.fields import default_record
        >>> len(engine.validate(default_record()).errors)
        8
    """

    def __init__(self, rules: Tuple[ValidationRule, ...] = VALIDATION_RULES) -> None:
        """Initialize the engine with a rule table.

        Args:
            rules: Rule table to check records against

        Raises:
            jsonschema.SchemaError: If a rule's schema fragment is invalid
        """
        self.rules = rules
        self._rules_by_field = {rule.field: rule for rule in rules}
        self.schema = build_schema(rules)
        Draft7Validator.check_schema(self.schema)
        self.validator = Draft7Validator(self.schema)

    def validate(self, record: FormRecord) -> ValidationResult:
        """Validate a record against every rule.

        Args:
            record: The FormRecord to check

        Returns:
            ValidationResult with at most one FieldError per field
        """
        failed: Dict[str, FieldError] = {}
        for error in self.validator.iter_errors(record):
            field_error = self._translate_error(error)
            if field_error is not None and field_error.path not in failed:
                failed[field_error.path] = field_error

        # Report in rule-table order regardless of jsonschema's iteration order
        errors = [failed[rule.field] for rule in self.rules if rule.field in failed]
        if errors:
            logger.debug("Validation failed for fields: %s", ", ".join(e.path for e in errors))
        return ValidationResult(is_valid=not errors, errors=errors)

    def _translate_error(self, error: jsonschema.ValidationError) -> Optional[FieldError]:
        """Map a jsonschema error back to the FieldError of its rule.

        Returns None for errors that do not belong to any field rule, such as
        a record that is not a mapping at all.
        """
        if error.validator == "required":
            # jsonschema reports "'name' is a required property"
            field_name = error.message.split("'")[1] if "'" in error.message else ""
        elif error.path:
            field_name = str(error.path[0])
        else:
            return None

        rule = self._rules_by_field.get(field_name)
        if rule is None:
            return None
        return FieldError(path=rule.field, code=rule.code, message=rule.message)


_default_engine: Optional[ValidationEngine] = None


def validate_record(record: FormRecord) -> ErrorRecord:
    """Validate a record with the standard rule table.

    Returns:
        Sparse ErrorRecord; an empty mapping means the record is valid

    Examples:
        >>> from formstate.fields import default_record
        >>> sorted(validate_record(default_record()))[:3]
        ['acceptTerms', 'country', 'email']
    """
    global _default_engine
    if _default_engine is None:
        _default_engine = ValidationEngine()
    return _default_engine.validate(record).error_record


__all__ = [
    "ValidationRule",
    "VALIDATION_RULES",
    "RULES_BY_FIELD",
    "build_schema",
    "ValidationEngine",
    "ValidationResult",
    "validate_record",
]
