"""Unit tests for the field catalogue and record helpers."""

import json

import pytest

from formstate.errors import UnknownFieldError
from formstate.fields import (
    FIELD_NAMES,
    FIELDS_BY_NAME,
    FORM_FIELDS,
    default_record,
    get_field,
    iter_fields,
    record_to_dict,
    snapshot_record,
)
from formstate.types import FieldKind


class TestFieldCatalogue:
    """Test the fixed set of form fields."""

    def test_field_names_are_unique(self):
        """Should not define any field twice."""
        assert len(FIELD_NAMES) == len(set(FIELD_NAMES))
        assert len(FORM_FIELDS) == len(FIELDS_BY_NAME)

    def test_source_fields_are_present(self):
        """Should define every field of the form."""
        expected = {
            "fullName", "email", "password", "showPassword", "search", "age",
            "phoneNumber", "birthDate", "department", "bioDescription", "volume",
            "country", "state", "priority", "clientMatch", "gender", "interests",
            "aboutCode", "keepDataFor", "rating", "fieldStatus", "acceptTerms",
        }
        assert set(FIELD_NAMES) == expected

    def test_checkbox_fields(self):
        """Should mark only single checkboxes as boolean fields."""
        checkboxes = {spec.name for spec in FORM_FIELDS if spec.is_checkbox}
        assert checkboxes == {"showPassword", "acceptTerms"}

    def test_interests_is_the_only_multi_select(self):
        """Should expose interests as the multi-select group."""
        groups = [spec.name for spec in iter_fields(FieldKind.MULTI_SELECT)]
        assert groups == ["interests"]

    def test_choice_options(self):
        """Should carry the options the form offers."""
        assert get_field("country").option_values == (
            "usa", "uk", "canada", "australia", "germany"
        )
        assert get_field("gender").option_values == (
            "Male", "Female", "Non-binary", "Prefer not to say"
        )
        assert "Gaming" in get_field("interests").option_values

    def test_get_unknown_field_raises(self):
        """Should raise UnknownFieldError for a name outside the catalogue."""
        with pytest.raises(UnknownFieldError) as exc_info:
            get_field("volcanoAlert")
        assert exc_info.value.name == "volcanoAlert"
        assert "volcanoAlert" in str(exc_info.value)


class TestDefaultRecord:
    """Test the all-default FormRecord."""

    def test_every_key_present(self):
        """Should include every known field."""
        assert list(default_record()) == list(FIELD_NAMES)

    def test_default_values(self):
        """Should represent absent input with empty, zero or false defaults."""
        record = default_record()
        assert record["fullName"] == ""
        assert record["age"] == ""
        assert record["rating"] == 0
        assert record["acceptTerms"] is False
        assert record["showPassword"] is False
        assert record["interests"] == set()
        assert record["volume"] == 50

    def test_default_sets_are_not_shared(self):
        """Should give every record its own interests set."""
        first = default_record()
        second = default_record()
        first["interests"].add("Music")
        assert second["interests"] == set()


class TestSnapshots:
    """Test snapshot and serialization helpers."""

    def test_snapshot_is_detached(self):
        """Should not reflect later edits to the source record."""
        record = default_record()
        record["interests"].add("Travel")
        snapshot = snapshot_record(record)

        record["interests"].add("Music")
        record["fullName"] = "changed"

        assert snapshot["interests"] == frozenset({"Travel"})
        assert snapshot["fullName"] == ""

    def test_record_to_dict_is_json_serializable(self):
        """Should convert sets to sorted lists."""
        record = default_record()
        record["interests"] = {"Sports", "Cooking"}
        data = record_to_dict(record)

        assert data["interests"] == ["Cooking", "Sports"]
        assert json.loads(json.dumps(data)) == data
