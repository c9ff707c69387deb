"""formstate: controlled form state and validation engine.

formstate is the logic core behind a browser input form. It provides:
- A fixed field catalogue with defaults for every field
- Controlled edits with checkbox coercion and grouped-checkbox toggles
- A star-rating field restricted to 1..5 once rated
- Rule-table validation that returns inline errors as data
- Clear-on-touch error handling
- Submission through a pluggable collaborator
- An event stream a rendering layer can re-render from

Markup, styling and applying the theme to a document are left to the
rendering layer.

Basic usage:
    >>> from formstate import FormStateEngine
    >>> engine = FormStateEngine()
    >>> engine.set_field("fullName", "Ada Lovelace")
    >>> engine.record["fullName"]
    'Ada Lovelace'
"""

__version__ = "0.1.0"
__author__ = "formstate contributors"

# Version info
VERSION = (0, 1, 0)

# Core exports
from formstate.engine import FormSettings, FormStateEngine, SubmitResult
from formstate.types import Theme

# Package metadata
__all__ = [
    "__version__",
    "VERSION",
    "FormStateEngine",
    "FormSettings",
    "SubmitResult",
    "Theme",
]
