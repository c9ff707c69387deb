"""FormStateEngine: the controlled-form state and validation core.

The engine owns one form session: the current FormRecord, the current
ErrorRecord, the session settings (including the theme) and an event log.
A rendering layer reads ``record`` and ``errors`` for display and drives the
form exclusively through the mutation operations below; everything it needs
to know about changes arrives as FormEvents on ``emitter``.

Usage:
    >>> from formstate.engine import FormStateEngine
    >>> engine = FormStateEngine()
    >>> result = engine.try_submit()
    >>> result.ok
    False
    >>> engine.set_field("fullName", "Ada Lovelace")
    >>> "fullName" in engine.errors
    False
"""

import logging
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from formstate.errors import FieldKindError, FieldValueError, RatingOutOfRangeError
from formstate.events import EventEmitter, FormEvent
from formstate.fields import (
    FieldSpec,
    default_record,
    get_field,
    record_to_dict,
    snapshot_record,
)
from formstate.submission import LoggingSubmitter, SubmissionReceipt, Submitter
from formstate.types import ErrorRecord, EventType, FieldKind, FormRecord, Theme
from formstate.validation import RULES_BY_FIELD, ValidationEngine

logger = logging.getLogger(__name__)


SUBMIT_FAILED_NOTICE = "Please fix the errors before submitting"
SUBMIT_SUCCESS_NOTICE = "Form submitted successfully! Check console for data."
CANCEL_NOTICE = "Form cancelled"

MIN_STAR_RATING = 1
MAX_STAR_RATING = 5


@dataclass(frozen=True)
class FormSettings:
    """Per-session configuration for a FormStateEngine.

    Attributes:
        form_id: Identifier stamped on every event of the session
        theme: Presentation theme the rendering layer should apply
    """
    form_id: str = "modern_form"
    theme: Theme = Theme.LIGHT

    def __post_init__(self):
        if isinstance(self.theme, str) and not isinstance(self.theme, Theme):
            object.__setattr__(self, "theme", Theme(self.theme))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {"formId": self.form_id, "theme": self.theme.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormSettings":
        """Create FormSettings from dict. Missing keys take their defaults."""
        return cls(
            form_id=data.get("formId", "modern_form"),
            theme=Theme(data.get("theme", Theme.LIGHT.value)),
        )


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of FormStateEngine.try_submit.

    Attributes:
        ok: Whether the record passed validation and was submitted
        notice: Blocking notice the rendering layer should show
        errors: Validation errors (empty when ok)
        record: Snapshot handed to the submitter (None when not ok)
        receipt: What the submitter reported back (None when not ok)
    """
    ok: bool
    notice: str
    errors: ErrorRecord = field(default_factory=dict)
    record: Optional[FormRecord] = None
    receipt: Optional[SubmissionReceipt] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {"ok": self.ok, "notice": self.notice}
        if self.errors:
            result["errors"] = dict(self.errors)
        if self.record is not None:
            result["record"] = record_to_dict(self.record)
        if self.receipt is not None:
            result["receipt"] = self.receipt.to_dict()
        return result


class FormStateEngine:
    """State container and validation core for a single form session.

    All operations are synchronous. Validation failures are returned as
    data; only caller contract violations (unknown field, wrong field kind,
    out-of-range value) raise, as FormContractError subclasses.

    Attributes:
        settings: Session settings (form id and theme)
        emitter: Dispatches every FormEvent to subscribed listeners

    Examples:
        >>> engine = FormStateEngine()
        >>> engine.toggle_set_membership("interests", "Music")
        >>> sorted(engine.record["interests"])
        ['Music']
        >>> engine.set_rating(4)
        >>> engine.record["rating"]
        4
    """

    def __init__(
        self,
        settings: Optional[FormSettings] = None,
        submitter: Optional[Submitter] = None,
        emitter: Optional[EventEmitter] = None,
    ):
        """Initialize the engine with an all-default FormRecord.

        Args:
            settings: Session settings; defaults to FormSettings()
            submitter: Collaborator that receives valid records; defaults to
                a LoggingSubmitter
            emitter: Event emitter to dispatch on; defaults to a new one
        """
        self.settings = settings or FormSettings()
        self.submitter: Submitter = submitter if submitter is not None else LoggingSubmitter()
        self.emitter = emitter if emitter is not None else EventEmitter()
        self._validation_engine = ValidationEngine()
        self._record: FormRecord = default_record()
        self._errors: ErrorRecord = {}
        self._events: List[FormEvent] = []

    # Read access

    @property
    def form_id(self) -> str:
        return self.settings.form_id

    @property
    def theme(self) -> Theme:
        return self.settings.theme

    @property
    def record(self) -> FormRecord:
        """Snapshot of the current field values."""
        return snapshot_record(self._record)

    @property
    def errors(self) -> ErrorRecord:
        """Copy of the current error mapping."""
        return dict(self._errors)

    @property
    def is_valid(self) -> bool:
        """Whether the current record would pass validation.

        Unlike validate(), this does not touch the current errors.
        """
        return self._validation_engine.validate(self._record).is_valid

    @property
    def can_submit(self) -> bool:
        """Whether the terms have been accepted, which enables submitting."""
        return bool(self._record["acceptTerms"])

    def field_error(self, name: str) -> Optional[str]:
        """Current error message for a field, or None."""
        get_field(name)
        return self._errors.get(name)

    def get_events(self) -> List[FormEvent]:
        """All events emitted by this engine, oldest first."""
        return list(self._events)

    # Mutation surface

    def set_field(self, name: str, value: Any) -> None:
        """Overwrite a field's value.

        Checkbox fields are coerced to bool, multi-select fields to a set.
        An existing error on the field is cleared immediately; nothing is
        re-validated until the next submit.

        Raises:
            UnknownFieldError: If name is not a known field
            FieldValueError: If value has the wrong type or is out of range
        """
        spec = get_field(name)
        self._record[name] = self._coerce(spec, value)
        cleared = self._clear_error(name)

        logger.debug("Field %s updated", name)
        self._emit(EventType.FIELD_UPDATED, {"field": name, "errorCleared": cleared})

    def toggle_set_membership(self, group: str, item: str) -> None:
        """Add item to a multi-select field, or remove it if already present.

        Raises:
            UnknownFieldError: If group is not a known field
            FieldKindError: If group is not a multi-select field
            FieldValueError: If item is not a string
        """
        spec = get_field(group)
        if spec.kind != FieldKind.MULTI_SELECT:
            raise FieldKindError(group, FieldKind.MULTI_SELECT.value, spec.kind.value)
        if not isinstance(item, str):
            raise FieldValueError(
                group, item, f"Field '{group}' holds strings, got {type(item).__name__}"
            )

        members = self._record[group]
        selected = item not in members
        if selected:
            members.add(item)
        else:
            members.discard(item)

        cleared = self._clear_error(group) if group in RULES_BY_FIELD else False
        self._emit(
            EventType.FIELD_TOGGLED,
            {"field": group, "item": item, "selected": selected, "errorCleared": cleared},
        )

    def set_rating(self, value: int) -> None:
        """Set the star rating and clear any rating error.

        Raises:
            RatingOutOfRangeError: If value is not an int in [1, 5]
        """
        if not _is_int(value) or not MIN_STAR_RATING <= value <= MAX_STAR_RATING:
            raise RatingOutOfRangeError(value)

        self._record["rating"] = value
        cleared = self._clear_error("rating")
        self._emit(EventType.RATING_SET, {"rating": value, "errorCleared": cleared})

    def validate(self) -> ErrorRecord:
        """Check every rule against the current record.

        The result replaces the current errors wholesale.

        Returns:
            Sparse ErrorRecord; empty means the form is valid
        """
        result = self._validation_engine.validate(self._record)
        self._errors = result.error_record

        if result.is_valid:
            self._emit(EventType.VALIDATION_PASSED)
        else:
            logger.info(
                "Form %s failed validation: %s", self.form_id, ", ".join(result.invalid_fields)
            )
            self._emit(
                EventType.VALIDATION_FAILED,
                {"errors": [error.to_dict() for error in result.errors]},
            )
        return dict(self._errors)

    def try_submit(self) -> SubmitResult:
        """Validate and, if valid, hand a snapshot to the submitter.

        State is left untouched after a successful submit; only reset() and
        cancel() restore the defaults.
        """
        errors = self.validate()
        if errors:
            return SubmitResult(ok=False, notice=SUBMIT_FAILED_NOTICE, errors=errors)

        snapshot = snapshot_record(self._record)
        receipt = self.submitter.submit(snapshot)
        logger.info("Form %s submitted as %s", self.form_id, receipt.submission_id)
        self._emit(EventType.FORM_SUBMITTED, {"submissionId": receipt.submission_id})
        return SubmitResult(
            ok=True,
            notice=SUBMIT_SUCCESS_NOTICE,
            record=snapshot,
            receipt=receipt,
        )

    def reset(self) -> None:
        """Restore every field to its default and drop all errors."""
        self._record = default_record()
        self._errors = {}
        logger.info("Form reset")
        self._emit(EventType.FORM_RESET)

    def cancel(self) -> str:
        """Reset the form and return the cancellation notice."""
        self.reset()
        self._emit(EventType.FORM_CANCELLED)
        return CANCEL_NOTICE

    def toggle_theme(self) -> Theme:
        """Switch between light and dark theme for this session.

        Returns:
            The theme now in effect
        """
        previous = self.settings.theme
        self.settings = FormSettings(form_id=self.settings.form_id, theme=previous.toggled())
        self._emit(
            EventType.THEME_CHANGED,
            {"from": previous.value, "to": self.settings.theme.value},
        )
        return self.settings.theme

    # Internals

    def _coerce(self, spec: FieldSpec, value: Any) -> Any:
        if spec.kind == FieldKind.BOOLEAN:
            return bool(value)

        if spec.kind == FieldKind.MULTI_SELECT:
            if isinstance(value, str) or not isinstance(value, Iterable):
                raise FieldValueError(
                    spec.name, value, f"Field '{spec.name}' expects a collection of strings"
                )
            items = set(value)
            if not all(isinstance(item, str) for item in items):
                raise FieldValueError(
                    spec.name, value, f"Field '{spec.name}' expects a collection of strings"
                )
            return items

        if spec.kind in (FieldKind.RATING, FieldKind.RANGE):
            if not _is_int(value) or not spec.minimum <= value <= spec.maximum:
                raise FieldValueError(
                    spec.name,
                    value,
                    f"Field '{spec.name}' must be an integer between "
                    f"{spec.minimum} and {spec.maximum}, got {value!r}",
                )
            return value

        if spec.kind == FieldKind.NUMBER:
            # Number inputs report their raw text, "" while empty
            if isinstance(value, (str, float)) or _is_int(value):
                return value
            raise FieldValueError(
                spec.name, value, f"Field '{spec.name}' expects a number or string"
            )

        if not isinstance(value, str):
            raise FieldValueError(
                spec.name,
                value,
                f"Field '{spec.name}' expects a string, got {type(value).__name__}",
            )
        return value

    def _clear_error(self, name: str) -> bool:
        if name in self._errors:
            del self._errors[name]
            return True
        return False

    def _emit(self, event_type: EventType, payload: Optional[Dict[str, Any]] = None) -> None:
        event = FormEvent(
            event_id=f"evt_{uuid.uuid4().hex[:16]}",
            type=event_type,
            form_id=self.form_id,
            ts=datetime.now(timezone.utc),
            payload=payload,
        )
        self._events.append(event)
        self.emitter.emit(event)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


__all__ = [
    "FormStateEngine",
    "FormSettings",
    "SubmitResult",
    "SUBMIT_FAILED_NOTICE",
    "SUBMIT_SUCCESS_NOTICE",
    "CANCEL_NOTICE",
]
