"""Error types for the formstate engine.

There are two distinct families here:

- FieldError: a single field validation failure, returned as data. Validation
  failures never escape the engine as exceptions.
- FormContractError and its subclasses: raised when a caller invokes an engine
  operation with an out-of-domain argument (unknown field, wrong field kind,
  out-of-range rating). These are programming errors, not recoverable runtime
  conditions. They subclass AssertionError so they fail loudly, and are raised
  explicitly so they survive ``python -O``.
"""

from dataclasses import dataclass
from typing import Any, Dict

from formstate.types import FieldErrorCode


@dataclass(frozen=True)
class FieldError:
    """Per-field validation error details.

    Attributes:
        path: Field name (e.g., "email")
        code: Specific validation error code
        message: Human-readable error description shown inline

    Examples:
        >>> err = FieldError(
        ...     path="email",
        ...     code=FieldErrorCode.INVALID_FORMAT,
        ...     message="Valid email required",
        ... )
        >>> err.path
        'email'
    """
    path: str
    code: FieldErrorCode
    message: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "path": self.path,
            "code": self.code.value if isinstance(self.code, FieldErrorCode) else self.code,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldError":
        """Create FieldError from dict."""
        code = data["code"]
        if isinstance(code, str):
            code = FieldErrorCode(code)
        return cls(path=data["path"], code=code, message=data["message"])


class FormContractError(AssertionError):
    """Base for caller contract violations against FormStateEngine."""


class UnknownFieldError(FormContractError, KeyError):
    """Raised when an operation names a field outside the fixed field set.

    Attributes:
        name: The unknown field name
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown form field: '{name}'")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class FieldKindError(FormContractError):
    """Raised when an operation is applied to a field of the wrong kind.

    Attributes:
        name: Field the operation was applied to
        expected: Kind the operation requires
        actual: Kind the field actually has
    """

    def __init__(self, name: str, expected: str, actual: str):
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Field '{name}' is a {actual} field; this operation requires a {expected} field"
        )


class FieldValueError(FormContractError, ValueError):
    """Raised when a value is of the wrong type or out of range for its field.

    Attributes:
        name: Field the value was meant for
        value: The rejected value
    """

    def __init__(self, name: str, value: Any, message: str):
        self.name = name
        self.value = value
        super().__init__(message)


class RatingOutOfRangeError(FieldValueError):
    """Raised when set_rating receives anything but an int in [1, 5]."""

    def __init__(self, value: Any):
        super().__init__(
            "rating",
            value,
            f"Rating must be an integer between 1 and 5, got {value!r}",
        )


__all__ = [
    "FieldError",
    "FormContractError",
    "UnknownFieldError",
    "FieldKindError",
    "FieldValueError",
    "RatingOutOfRangeError",
]
