"""
Presentation helpers over a normalized record.

Builds the score summary table of the results view and the narrative
summary sentence used to seed a report. Lookups go through `resolve`, so
they tolerate the label variations OCR produces.
"""

from typing import Any

from assessment_pipeline.config.constants import (
    COMPOSITE_SCORES,
    PERCENTILES,
    SCORE_SUMMARY_ROWS,
    STANDARD_SCORES,
)
from assessment_pipeline.models.dto import AssessmentRecord
from assessment_pipeline.processors.field_alias_resolver import ABSENT, resolve

NOT_AVAILABLE = "N/A"

_COLUMNS = ("rawScore", "standardScore", "percentile", "confidenceInterval")


def _lookup(buckets: dict[str, Any], bucket: str, candidates: tuple[str, ...]) -> Any:
    value = resolve(buckets.get(bucket), candidates)
    if value is ABSENT or value is None or value == "":
        return None
    return value


def build_score_summary(record: AssessmentRecord) -> list[dict[str, Any]]:
    """
    Return one row per summary measure.

    Each row has ``label`` and the four columns ``rawScore``,
    ``standardScore``, ``percentile``, ``confidenceInterval``; a value that
    cannot be found is None.
    """
    buckets = record.scores.model_dump(by_alias=True)
    rows = []
    for label, columns in SCORE_SUMMARY_ROWS:
        row: dict[str, Any] = {"label": label}
        for column, (bucket, candidates) in zip(_COLUMNS, columns):
            row[column] = _lookup(buckets, bucket, candidates)
        rows.append(row)
    return rows


def _display(value: Any) -> str:
    return NOT_AVAILABLE if value is None else str(value)


def _percentile_clause(value: Any) -> str:
    return "" if value is None else f" ({value}th percentile)"


def summarize_record(record: AssessmentRecord) -> str:
    """Narrative one-paragraph summary of the AC/EC/Total results."""
    buckets = record.scores.model_dump(by_alias=True)
    patient = record.patient_info
    child_name = patient.name or " ".join(p for p in (patient.first_name, patient.last_name) if p)
    child_name = child_name or "The client"

    age = record.chronological_age
    age_text = f"{age.years}-{age.months}" if (age.years or age.months) else ""

    ac_ss = _display(_lookup(buckets, STANDARD_SCORES, ("AC Standard Score", "AC", "Auditory")))
    ec_ss = _display(_lookup(buckets, STANDARD_SCORES, ("EC Standard Score", "EC", "Expressive")))
    total = _display(
        _lookup(buckets, COMPOSITE_SCORES, ("Standard Score Total", "Total Standard", "Language"))
    )
    ac_pr = _percentile_clause(_lookup(buckets, PERCENTILES, ("AC Percentile", "AC", "Auditory")))
    ec_pr = _percentile_clause(_lookup(buckets, PERCENTILES, ("EC Percentile", "EC", "Expressive")))

    form_type = record.form_type
    subject = f"{child_name} ({age_text})" if age_text else child_name
    return (
        f"{subject} was administered the {form_type}. "
        f"{child_name} obtained a standard score of {ac_ss}{ac_pr} "
        f"on the Auditory Comprehension subtest and a standard score of {ec_ss}{ec_pr} "
        f"on the Expressive Communication subtest. "
        f"{child_name}'s Total Language standard score was {total}."
    )
