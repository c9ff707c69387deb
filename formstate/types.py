"""Core type definitions for the formstate engine.

This module defines the fundamental types used throughout formstate:
- FieldKind: How a field's value is stored and coerced
- FieldErrorCode: Validation error codes for individual fields
- EventType: Event types emitted by the engine
- Theme: Light/dark presentation theme carried as explicit configuration
- FormRecord / ErrorRecord: The value and error mappings the engine owns

These types form the contract between the rendering layer and the engine.
"""

from enum import Enum
from typing import Any, Dict


FormRecord = Dict[str, Any]
"""Complete mapping of field name to current value. Every known key is present."""

ErrorRecord = Dict[str, str]
"""Sparse mapping of field name to validation message."""


class FieldKind(str, Enum):
    """Storage kind of a form field.

    Determines how set_field coerces and checks incoming values.
    """
    TEXT = "text"
    BOOLEAN = "boolean"
    NUMBER = "number"
    RANGE = "range"
    CHOICE = "choice"
    MULTI_SELECT = "multi_select"
    RATING = "rating"


class FieldErrorCode(str, Enum):
    """Validation error codes for individual field failures."""
    REQUIRED = "required"
    INVALID_FORMAT = "invalid_format"
    INVALID_VALUE = "invalid_value"
    TOO_SHORT = "too_short"


class EventType(str, Enum):
    """Event types emitted by FormStateEngine.

    Every mutation of the form emits exactly one typed event.
    """
    FIELD_UPDATED = "field.updated"
    FIELD_TOGGLED = "field.toggled"
    RATING_SET = "rating.set"
    VALIDATION_PASSED = "validation.passed"
    VALIDATION_FAILED = "validation.failed"
    FORM_SUBMITTED = "form.submitted"
    FORM_RESET = "form.reset"
    FORM_CANCELLED = "form.cancelled"
    THEME_CHANGED = "theme.changed"


class Theme(str, Enum):
    """Presentation theme for a form session.

    The engine only carries the value; applying it (e.g. as a ``data-theme``
    attribute) is up to the rendering layer.

    Examples:
        >>> Theme.LIGHT.toggled()
        <Theme.DARK: 'dark'>
        >>> Theme.LIGHT.toggle_label
        'Dark Mode'
    """
    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "Theme":
        """Return the opposite theme."""
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT

    @property
    def attribute(self) -> str:
        """Value for the document-level ``data-theme`` attribute."""
        return self.value

    @property
    def toggle_label(self) -> str:
        """Caption of the toggle button, naming the theme it switches to."""
        return "Dark Mode" if self is Theme.LIGHT else "Light Mode"


__all__ = [
    "FormRecord",
    "ErrorRecord",
    "FieldKind",
    "FieldErrorCode",
    "EventType",
    "Theme",
]
