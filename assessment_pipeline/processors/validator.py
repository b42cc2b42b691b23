"""
Opt-in strict checks over a normalized record.

Normalization always produces a record, even from garbage. Consumers that
need stronger guarantees (a known form type, a usable test date) run these
checks before persisting or billing.
"""

from typing import Any, Iterable

from assessment_pipeline.config.settings import UNKNOWN_DOCUMENT_TYPE
from assessment_pipeline.core.exceptions import RecordValidationError
from assessment_pipeline.models.dto import AssessmentRecord, AssessmentType
from assessment_pipeline.utils.dates import parse_date

DEFAULT_REQUIRED_CHECKS = ("form_type_known", "test_date_valid", "has_scores")


def validate_record(record: AssessmentRecord) -> dict[str, Any]:
    """
    Evaluate every strict check on a record.

    Returns:
      A dict with ``checks`` (name -> bool) and ``verdict`` (all True).
    """
    test_dt = parse_date(record.test_date, include_time=True)
    birth_dt = parse_date(record.birth_date)
    buckets = record.scores.model_dump()
    patient = record.patient_info

    checks = {
        "form_type_known": record.form_type in {t.value for t in AssessmentType},
        "form_type_present": bool(record.form_type) and record.form_type != UNKNOWN_DOCUMENT_TYPE,
        "test_date_valid": test_dt is not None,
        "birth_date_valid": birth_dt is not None,
        "birth_before_test": (
            birth_dt is not None and test_dt is not None and birth_dt <= test_dt
        ),
        "patient_named": bool(patient.name or patient.first_name or patient.last_name),
        "has_scores": any(bool(bucket) for bucket in buckets.values()),
    }

    return {"checks": checks, "verdict": all(checks.values())}


def ensure_valid(
    record: AssessmentRecord, required: Iterable[str] = DEFAULT_REQUIRED_CHECKS
) -> AssessmentRecord:
    """
    Raise unless every required check passes.

    Raises:
      RecordValidationError: Listing the failed required checks.
      KeyError: If a required check name is unknown.
    """
    checks = validate_record(record)["checks"]
    failed = [name for name in required if not checks[name]]
    if failed:
        raise RecordValidationError(failed, checks)
    return record
