"""Submission collaborator for the formstate engine.

FormStateEngine hands a finalized record to a Submitter once validation
passes. The engine only depends on the Submitter protocol; LoggingSubmitter
is the default implementation, which keeps the payloads in memory and logs
them instead of sending them anywhere.
"""

import json
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List

from dateutil.parser import isoparse
from typing_extensions import Protocol, runtime_checkable

from formstate.fields import record_to_dict, snapshot_record
from formstate.types import FormRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionReceipt:
    """Outcome reported by a Submitter for an accepted record.

    Attributes:
        submission_id: Identifier assigned to the submission (e.g., "sub_3f2a...")
        received_at: UTC timestamp when the record was accepted
    """
    submission_id: str
    received_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "submissionId": self.submission_id,
            "receivedAt": self.received_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SubmissionReceipt":
        """Create SubmissionReceipt from dict."""
        return cls(
            submission_id=data["submissionId"],
            received_at=isoparse(data["receivedAt"]),
        )


@runtime_checkable
class Submitter(Protocol):
    """Anything that can accept a validated FormRecord."""

    def submit(self, record: FormRecord) -> SubmissionReceipt:
        ...


@dataclass
class LoggingSubmitter:
    """Submitter that records payloads and logs them.

    Attributes:
        submissions: Every record accepted so far, oldest first

    Examples:
        >>> from formstate.fields import default_record
        >>> submitter = LoggingSubmitter()
        >>> receipt = submitter.submit(default_record())
        >>> receipt.submission_id.startswith("sub_")
        True
        >>> len(submitter.submissions)
        1
    """
    submissions: List[FormRecord] = field(default_factory=list)

    def submit(self, record: FormRecord) -> SubmissionReceipt:
        """Store a snapshot of the record and log it as JSON."""
        payload = snapshot_record(record)
        self.submissions.append(payload)

        receipt = SubmissionReceipt(
            submission_id=f"sub_{uuid.uuid4().hex[:16]}",
            received_at=datetime.now(timezone.utc),
        )
        logger.info("FORM SUBMITTED SUCCESSFULLY (%s)", receipt.submission_id)
        logger.info("Form Data: %s", json.dumps(record_to_dict(payload), indent=2))
        return receipt

    @property
    def last_submission(self) -> FormRecord:
        """The most recently accepted record.

        Raises:
            LookupError: If nothing has been submitted yet
        """
        if not self.submissions:
            raise LookupError("No form has been submitted")
        return self.submissions[-1]


__all__ = [
    "SubmissionReceipt",
    "Submitter",
    "LoggingSubmitter",
]
