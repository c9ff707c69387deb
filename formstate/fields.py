"""Field catalogue for the form.

The form has a fixed, known set of fields. Each FieldSpec records the field's
storage kind, its default (the value that stands for "no user input") and, for
choice-like fields, the options the rendering layer offers.

FORM_FIELDS is ordered the way the fields appear on the form.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

from formstate.errors import UnknownFieldError
from formstate.types import FieldKind, FormRecord


@dataclass(frozen=True)
class FieldSpec:
    """Static description of one form field.

    Attributes:
        name: Key of the field in the FormRecord
        kind: Storage kind, drives coercion in set_field
        default: Value representing absent input
        label: Display label for the rendering layer
        options: Allowed choices for choice and multi-select fields,
            as (value, label) pairs
        minimum: Lower bound for range and rating fields
        maximum: Upper bound for range and rating fields

    Examples:
        >>> spec = FieldSpec(name="fullName", kind=FieldKind.TEXT, default="", label="Full Name")
        >>> spec.is_checkbox
        False
    """
    name: str
    kind: FieldKind
    default: Any
    label: str
    options: Tuple[Tuple[str, str], ...] = ()
    minimum: Optional[int] = None
    maximum: Optional[int] = None

    @property
    def is_checkbox(self) -> bool:
        """Whether the field is a single checkbox with boolean coercion."""
        return self.kind == FieldKind.BOOLEAN

    @property
    def option_values(self) -> Tuple[str, ...]:
        """Option values without their labels."""
        return tuple(value for value, _ in self.options)

    def fresh_default(self) -> Any:
        """Return a new default value, never shared between records."""
        if self.kind == FieldKind.MULTI_SELECT:
            return set()
        return self.default


def _same(*values: str) -> Tuple[Tuple[str, str], ...]:
    return tuple((value, value) for value in values)


FORM_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("fullName", FieldKind.TEXT, "", "Full Name"),
    FieldSpec("email", FieldKind.TEXT, "", "Email Address"),
    FieldSpec("password", FieldKind.TEXT, "", "Password"),
    FieldSpec("showPassword", FieldKind.BOOLEAN, False, "Show password"),
    FieldSpec("search", FieldKind.TEXT, "", "Search"),
    FieldSpec("age", FieldKind.NUMBER, "", "Age"),
    FieldSpec("phoneNumber", FieldKind.TEXT, "", "Phone Number"),
    FieldSpec("birthDate", FieldKind.TEXT, "", "Birth Date"),
    FieldSpec("department", FieldKind.TEXT, "", "Department"),
    FieldSpec("bioDescription", FieldKind.TEXT, "", "Bio"),
    FieldSpec("volume", FieldKind.RANGE, 50, "Volume Level", minimum=0, maximum=100),
    FieldSpec(
        "country",
        FieldKind.CHOICE,
        "",
        "Country",
        options=(
            ("usa", "United States"),
            ("uk", "United Kingdom"),
            ("canada", "Canada"),
            ("australia", "Australia"),
            ("germany", "Germany"),
        ),
    ),
    FieldSpec(
        "state",
        FieldKind.CHOICE,
        "",
        "State/Province",
        options=(("ca", "California"), ("ny", "New York"), ("tx", "Texas"), ("fl", "Florida")),
    ),
    FieldSpec(
        "priority",
        FieldKind.CHOICE,
        "",
        "Priority",
        options=(("low", "Low"), ("medium", "Medium"), ("high", "High"), ("urgent", "Urgent")),
    ),
    FieldSpec(
        "clientMatch",
        FieldKind.CHOICE,
        "",
        "Client Match",
        options=(("client1", "Client A"), ("client2", "Client B"), ("client3", "Client C")),
    ),
    FieldSpec(
        "gender",
        FieldKind.CHOICE,
        "",
        "Gender",
        options=_same("Male", "Female", "Non-binary", "Prefer not to say"),
    ),
    FieldSpec(
        "interests",
        FieldKind.MULTI_SELECT,
        frozenset(),
        "Interests",
        options=_same("Reading", "Sports", "Music", "Travel", "Cooking", "Gaming"),
    ),
    FieldSpec("aboutCode", FieldKind.TEXT, "", "About Code"),
    FieldSpec("keepDataFor", FieldKind.TEXT, "", "Keep Data For"),
    FieldSpec("rating", FieldKind.RATING, 0, "Rating", minimum=0, maximum=5),
    FieldSpec("fieldStatus", FieldKind.TEXT, "", "Field Status"),
    FieldSpec("acceptTerms", FieldKind.BOOLEAN, False, "I accept the terms and conditions"),
)

FIELDS_BY_NAME: Dict[str, FieldSpec] = {spec.name: spec for spec in FORM_FIELDS}

FIELD_NAMES: Tuple[str, ...] = tuple(FIELDS_BY_NAME)


def get_field(name: str) -> FieldSpec:
    """Look up a field by name.

    Raises:
        UnknownFieldError: If name is not one of the fixed fields
    """
    try:
        return FIELDS_BY_NAME[name]
    except KeyError:
        raise UnknownFieldError(name) from None


def default_record() -> FormRecord:
    """Build a FormRecord with every field at its default.

    Examples:
        >>> record = default_record()
        >>> record["fullName"], record["rating"], record["interests"]
        ('', 0, set())
    """
    return {spec.name: spec.fresh_default() for spec in FORM_FIELDS}


def snapshot_record(record: FormRecord) -> FormRecord:
    """Copy a record so later edits cannot reach the copy.

    Multi-select values are frozen into frozensets.
    """
    snapshot: FormRecord = {}
    for name, value in record.items():
        if FIELDS_BY_NAME[name].kind == FieldKind.MULTI_SELECT:
            snapshot[name] = frozenset(value)
        else:
            snapshot[name] = value
    return snapshot


def record_to_dict(record: FormRecord) -> Dict[str, Any]:
    """Convert a record to JSON-serializable data.

    Multi-select values become sorted lists.

    Examples:
        >>> data = record_to_dict({**default_record(), "interests": {"Music", "Gaming"}})
        >>> data["interests"]
        ['Gaming', 'Music']
    """
    result: Dict[str, Any] = {}
    for name, value in record.items():
        if isinstance(value, (set, frozenset)):
            result[name] = sorted(value)
        else:
            result[name] = value
    return result


def iter_fields(kind: Optional[FieldKind] = None) -> Iterable[FieldSpec]:
    """Iterate field specs in form order, optionally filtered by kind."""
    for spec in FORM_FIELDS:
        if kind is None or spec.kind == kind:
            yield spec


__all__ = [
    "FieldSpec",
    "FORM_FIELDS",
    "FIELDS_BY_NAME",
    "FIELD_NAMES",
    "get_field",
    "default_record",
    "snapshot_record",
    "record_to_dict",
    "iter_fields",
]
