"""
Registry of recoverable input issues.

Normalization recovers from every issue listed here by substituting a
default. The codes exist so that log records and diagnostics name the
recovered condition consistently.
"""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class IssueSpec:
    """Definition of a single recoverable issue."""

    code: str
    message: str
    recovery: str  # What the pipeline substitutes


class IssueCode(Enum):
    """Recoverable issue registry.

    Usage:
        logger.debug("...", extra={"error_code": IssueCode.UNPARSABLE_DATE.value.code})
    """

    MALFORMED_PAYLOAD = IssueSpec(
        "MALFORMED_PAYLOAD",
        "Extraction payload is not a JSON object",
        "empty record with defaults",
    )
    MALFORMED_FIELD = IssueSpec(
        "MALFORMED_FIELD",
        "Payload field has an unexpected type",
        "field treated as absent",
    )
    UNPARSABLE_DATE = IssueSpec(
        "UNPARSABLE_DATE",
        "Date text could not be parsed",
        "empty date string",
    )
    UNPARSABLE_AGE = IssueSpec(
        "UNPARSABLE_AGE",
        "Chronological age could not be parsed",
        "zeroed age",
    )
    UNCLASSIFIABLE_DOCUMENT = IssueSpec(
        "UNCLASSIFIABLE_DOCUMENT",
        "No document signature reached the confidence threshold",
        "documentType Unknown",
    )
    UNPARSABLE_LLM_OUTPUT = IssueSpec(
        "UNPARSABLE_LLM_OUTPUT",
        "LLM output contained no JSON object",
        "empty payload",
    )

    @classmethod
    def get_spec(cls, code: str) -> IssueSpec:
        """Look up an issue by its string code.

        Raises:
            KeyError: If the code is not registered
        """
        for member in cls:
            if member.value.code == code:
                return member.value
        raise KeyError(code)
