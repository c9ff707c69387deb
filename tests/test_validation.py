"""Unit tests for the validation engine.

Tests cover:
- Each rule of the rule table in isolation
- Exact error messages and codes
- Independence of rules (no short-circuit)
- Fields without rules
- Purity and ordering of results
"""

import pytest

from formstate.errors import FieldError
from formstate.fields import default_record
from formstate.types import FieldErrorCode
from formstate.validation import (
    RULES_BY_FIELD,
    VALIDATION_RULES,
    ValidationEngine,
    ValidationResult,
    build_schema,
    validate_record,
)


ALL_MESSAGES = {
    "fullName": "Full name is required",
    "email": "Valid email required",
    "password": "Minimum 8 characters",
    "gender": "Please select a gender",
    "country": "Select a country",
    "priority": "Select priority",
    "rating": "Please rate your experience",
    "acceptTerms": "You must accept terms and conditions",
}


def valid_record():
    record = default_record()
    record.update(
        fullName="Ada Lovelace",
        email="ada@x.io",
        password="longenough1",
        gender="Female",
        country="usa",
        priority="low",
        rating=4,
        acceptTerms=True,
    )
    return record


@pytest.fixture
def engine():
    return ValidationEngine()


class TestRuleTable:
    """Test the shape of the rule table."""

    def test_rule_messages(self):
        """Should carry exactly the documented field messages."""
        assert {rule.field: rule.message for rule in VALIDATION_RULES} == ALL_MESSAGES

    def test_schema_is_valid_draft7(self):
        """Should build a schema that jsonschema accepts."""
        from jsonschema import Draft7Validator

        Draft7Validator.check_schema(build_schema())

    def test_schema_requires_every_validated_field(self):
        """Should list every rule field as required."""
        assert set(build_schema()["required"]) == set(RULES_BY_FIELD)


class TestDefaultRecordValidation:
    """Test validation of a freshly created record."""

    def test_default_record_fails_every_rule(self, engine):
        """Should report all eight rule errors at once."""
        result = engine.validate(default_record())

        assert result.is_valid is False
        assert result.error_record == ALL_MESSAGES

    def test_errors_follow_rule_table_order(self, engine):
        """Should list errors in rule-table order."""
        result = engine.validate(default_record())
        assert result.invalid_fields == [rule.field for rule in VALIDATION_RULES]

    def test_valid_record_has_no_errors(self, engine):
        """Should pass a record that satisfies every rule."""
        result = engine.validate(valid_record())

        assert result.is_valid is True
        assert result.errors == []
        assert result.error_record == {}


class TestFullName:
    """Test the fullName rule (trimmed length > 0)."""

    @pytest.mark.parametrize("value", ["", " ", "   \t\n"])
    def test_blank_names_fail(self, engine, value):
        """Should reject empty and whitespace-only names."""
        record = valid_record()
        record["fullName"] = value
        result = engine.validate(record)

        assert result.error_record == {"fullName": "Full name is required"}
        assert result.errors[0].code == FieldErrorCode.REQUIRED

    def test_padded_name_passes(self, engine):
        """Should accept a name surrounded by whitespace."""
        record = valid_record()
        record["fullName"] = "  Ada  "
        assert engine.validate(record).is_valid is True


class TestEmail:
    """Test the email rule (contains '@')."""

    @pytest.mark.parametrize("value", ["", "x", "ada.x.io"])
    def test_without_at_fails(self, engine, value):
        """Should reject addresses without an @ character."""
        record = valid_record()
        record["email"] = value
        result = engine.validate(record)

        assert result.error_record == {"email": "Valid email required"}
        assert result.errors[0].code == FieldErrorCode.INVALID_FORMAT

    @pytest.mark.parametrize("value", ["@", "a@", "@b", "ada@x.io"])
    def test_with_at_passes(self, engine, value):
        """Should accept anything containing @, as the rule is only that."""
        record = valid_record()
        record["email"] = value
        assert engine.validate(record).is_valid is True


class TestPassword:
    """Test the password rule (length >= 8)."""

    def test_seven_characters_fail(self, engine):
        """Should reject a password one character short."""
        record = valid_record()
        record["password"] = "1234567"
        result = engine.validate(record)

        assert result.error_record == {"password": "Minimum 8 characters"}
        assert result.errors[0].code == FieldErrorCode.TOO_SHORT

    def test_eight_characters_pass(self, engine):
        """Should accept exactly eight characters."""
        record = valid_record()
        record["password"] = "12345678"
        assert engine.validate(record).is_valid is True

    def test_whitespace_counts(self, engine):
        """Should count whitespace towards the length."""
        record = valid_record()
        record["password"] = " " * 8
        assert engine.validate(record).is_valid is True


class TestSelections:
    """Test the non-empty rules for gender, country and priority."""

    @pytest.mark.parametrize(
        "field_name,message",
        [
            ("gender", "Please select a gender"),
            ("country", "Select a country"),
            ("priority", "Select priority"),
        ],
    )
    def test_empty_selection_fails(self, engine, field_name, message):
        """Should reject an empty selection."""
        record = valid_record()
        record[field_name] = ""
        assert engine.validate(record).error_record == {field_name: message}


class TestRatingAndTerms:
    """Test the rating and acceptTerms rules."""

    def test_unrated_fails(self, engine):
        """Should reject rating 0."""
        record = valid_record()
        record["rating"] = 0
        assert engine.validate(record).error_record == {
            "rating": "Please rate your experience"
        }

    @pytest.mark.parametrize("value", [1, 2, 3, 4, 5])
    def test_any_star_passes(self, engine, value):
        """Should accept every rating from 1 to 5."""
        record = valid_record()
        record["rating"] = value
        assert engine.validate(record).is_valid is True

    def test_terms_not_accepted_fails(self, engine):
        """Should reject acceptTerms False."""
        record = valid_record()
        record["acceptTerms"] = False
        result = engine.validate(record)

        assert result.error_record == {"acceptTerms": "You must accept terms and conditions"}
        assert result.errors[0].code == FieldErrorCode.INVALID_VALUE


class TestUnvalidatedFields:
    """Test fields without a rule."""

    def test_arbitrary_content_is_valid(self, engine):
        """Should ignore the content of fields without a rule."""
        record = valid_record()
        record.update(
            search="",
            age="not a number",
            phoneNumber="???",
            birthDate="yesterday",
            department="",
            state="",
            clientMatch="nobody",
            interests={"Anything"},
        )
        assert engine.validate(record).is_valid is True


class TestMissingAndMalformed:
    """Test records that lack validated keys."""

    def test_missing_field_reports_rule_message(self, engine):
        """Should report a missing validated field with its rule message."""
        record = valid_record()
        del record["email"]
        assert engine.validate(record).error_record == {"email": "Valid email required"}

    def test_empty_mapping_reports_every_rule(self, engine):
        """Should treat every missing validated field as failing."""
        assert engine.validate({}).error_record == ALL_MESSAGES


class TestWrongValueTypes:
    """Test records whose validated values have the wrong type."""

    @pytest.mark.parametrize("value", [None, 123])
    @pytest.mark.parametrize(
        "field_name", ["fullName", "email", "password", "gender", "country", "priority"]
    )
    def test_non_string_fails_string_rule(self, engine, field_name, value):
        """Should report a non-string value with the rule's message."""
        record = valid_record()
        record[field_name] = value
        assert engine.validate(record).error_record == {
            field_name: ALL_MESSAGES[field_name]
        }

    @pytest.mark.parametrize("value", [None, "4", 2.5])
    def test_non_integer_rating_fails(self, engine, value):
        """Should report a rating that is not an integer."""
        record = valid_record()
        record["rating"] = value
        assert engine.validate(record).error_record == {
            "rating": "Please rate your experience"
        }

    @pytest.mark.parametrize("value", [1, "yes"])
    def test_truthy_non_bool_terms_fail(self, engine, value):
        """Should only accept acceptTerms True."""
        record = valid_record()
        record["acceptTerms"] = value
        assert "acceptTerms" in engine.validate(record).error_record


class TestTrimSemantics:
    """Test the fullName rule against the characters trim() strips."""

    @pytest.mark.parametrize("value", ["\ufeff", "\u00a0", "\u2028", "\u3000 \t", "\v\f\r"])
    def test_trimmed_whitespace_fails(self, engine, value):
        """Should reject names made only of characters trim() removes."""
        record = valid_record()
        record["fullName"] = value
        assert engine.validate(record).error_record == {"fullName": "Full name is required"}

    @pytest.mark.parametrize("value", ["\x1f", "\u200b", "\u0085"])
    def test_characters_trim_keeps_pass(self, engine, value):
        """Should accept characters trim() keeps, including some Python treats as whitespace."""
        record = valid_record()
        record["fullName"] = value
        assert engine.validate(record).is_valid is True


class TestPasswordLength:
    """Test how the password rule counts characters."""

    def test_length_counts_code_points(self, engine):
        """Should count each code point once, including astral characters."""
        record = valid_record()
        record["password"] = "\U0001F600" * 4
        assert engine.validate(record).error_record == {"password": "Minimum 8 characters"}

        record["password"] = "\U0001F600" * 8
        assert engine.validate(record).is_valid is True


class TestPurity:
    """Test that validation is deterministic and side-effect free."""

    def test_repeated_validation_is_identical(self, engine):
        """Should return equal results for the same record."""
        record = default_record()
        record["fullName"] = "Ada"
        assert engine.validate(record) == engine.validate(record)

    def test_record_is_not_modified(self, engine):
        """Should leave the record untouched."""
        record = valid_record()
        before = dict(record)
        engine.validate(record)
        assert record == before

    def test_validate_record_helper(self):
        """Should return the sparse ErrorRecord directly."""
        assert validate_record(valid_record()) == {}
        assert validate_record(default_record()) == ALL_MESSAGES


class TestValidationResult:
    """Test ValidationResult serialization."""

    def test_to_dict(self):
        """Should serialize errors with camelCase keys."""
        result = ValidationResult(
            is_valid=False,
            errors=[FieldError("email", FieldErrorCode.INVALID_FORMAT, "Valid email required")],
        )
        assert result.to_dict() == {
            "isValid": False,
            "errors": [
                {"path": "email", "code": "invalid_format", "message": "Valid email required"}
            ],
        }

    def test_field_error_round_trip(self):
        """Should rebuild a FieldError from its dict form."""
        error = FieldError("rating", FieldErrorCode.REQUIRED, "Please rate your experience")
        assert FieldError.from_dict(error.to_dict()) == error
