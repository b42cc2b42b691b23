"""
Assessment normalizer.

Composes the alias, name, date/age, classifier and score components into a
single-pass transform from a raw OCR extraction payload to the canonical
`AssessmentRecord`. Every step degrades to defaults; nothing here raises for
malformed input.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Optional

from assessment_pipeline.config.constants import (
    DROPPED_PATIENT_KEYS,
    PATIENT_INFO_FIELDS,
    RECOGNIZED_PAYLOAD_KEYS,
    SCORE_BUCKETS,
    UNCLASSIFIED_SCORES_KEY,
)
from assessment_pipeline.config.settings import UNKNOWN_DOCUMENT_TYPE
from assessment_pipeline.core.exceptions import ValidationError
from assessment_pipeline.core.settings import get_settings
from assessment_pipeline.errors.codes import IssueCode
from assessment_pipeline.models.dto import (
    AssessmentRecord,
    ChronologicalAge,
    ClassificationResult,
    PatientInfo,
    ScoreBuckets,
)
from assessment_pipeline.processors.document_classifier import (
    canonical_form_type,
    classify,
)
from assessment_pipeline.processors.form_enrichment import get_enrichment
from assessment_pipeline.processors.llm_response import parse_llm_payload
from assessment_pipeline.processors.name_splitter import split_name
from assessment_pipeline.processors.score_taxonomy import partition_scores
from assessment_pipeline.utils.dates import normalize_date_text, parse_age, parse_date
from assessment_pipeline.utils.fields import as_mapping, as_text, first_present

logger = logging.getLogger(__name__)

# Keys that would collide with PatientInfo fields if passed through
_PATIENT_RESERVED = frozenset(PATIENT_INFO_FIELDS) | frozenset(PatientInfo.model_fields)


def _log_malformed(field: str, value: Any) -> None:
    logger.debug(
        "Ignoring malformed %s of type %s",
        field,
        type(value).__name__,
        extra={"error_code": IssueCode.MALFORMED_FIELD.value.code, "field": field},
    )


def _resolve_patient_info(payload: Mapping[str, Any]) -> PatientInfo:
    source: dict[str, Any] = {}
    for key in ("patientInfo", "childInfo"):
        value = payload.get(key)
        if isinstance(value, Mapping) and value:
            source = as_mapping(value)
            break
        if value is not None and not isinstance(value, Mapping):
            _log_malformed(key, value)

    info = {field: as_text(source.get(field)) for field in PATIENT_INFO_FIELDS}
    if info["name"] and not (info["firstName"] and info["lastName"]):
        parts = split_name(info["name"])
        info["firstName"] = info["firstName"] or parts["firstName"]
        info["lastName"] = info["lastName"] or parts["lastName"]

    passthrough = {
        key: value
        for key, value in source.items()
        if key not in _PATIENT_RESERVED and key not in DROPPED_PATIENT_KEYS
    }
    return PatientInfo.model_validate({**passthrough, **info})


def _date_candidate(source: Mapping[str, Any], key: str) -> Optional[str]:
    value = source.get(key)
    if isinstance(value, str):
        return value if value.strip() else None
    if value is not None:
        _log_malformed(key, value)
    return None


def _age_candidate(source: Mapping[str, Any]) -> Any:
    value = source.get("chronologicalAge")
    if isinstance(value, Mapping):
        return value or None
    if isinstance(value, str):
        return value if value.strip() else None
    if value is not None:
        _log_malformed("chronologicalAge", value)
    return None


def _resolve_date(
    payload: Mapping[str, Any], date_info: Mapping[str, Any], key: str, include_time: bool
) -> str:
    # A wrong-typed top-level value is absent, so dateInfo still applies
    raw_value = first_present(_date_candidate(payload, key), _date_candidate(date_info, key))
    text = normalize_date_text(raw_value, include_time=include_time)
    if raw_value is not None and not text:
        logger.warning(
            "Could not parse %s; leaving it empty",
            key,
            extra={"error_code": IssueCode.UNPARSABLE_DATE.value.code, "field": key},
        )
    return text


def _resolve_other_fields(
    payload: Mapping[str, Any], unclassified: dict[str, Any]
) -> dict[str, Any]:
    other = as_mapping(payload.get("otherFields"))
    if payload.get("otherFields") is not None and not isinstance(payload.get("otherFields"), Mapping):
        _log_malformed("otherFields", payload.get("otherFields"))

    for key, value in payload.items():
        if key not in RECOGNIZED_PAYLOAD_KEYS:
            other[key] = value

    if unclassified:
        kept = as_mapping(other.get(UNCLASSIFIED_SCORES_KEY))
        kept.update(unclassified)
        other[UNCLASSIFIED_SCORES_KEY] = kept
    return other


def normalize(raw: Any, document_type: Optional[str] = None) -> AssessmentRecord:
    """
    Transform a raw extraction payload into the canonical record.

    Args:
      raw: Parsed OCR/LLM JSON. Anything but an object yields a default record.
      document_type: Classified or caller-supplied form type. When empty, the
        payload's own ``formType`` is used, then "Unknown".

    Returns:
      A new, immutable AssessmentRecord.
    """
    if not isinstance(raw, Mapping):
        logger.warning(
            "Extraction payload is not an object",
            extra={"error_code": IssueCode.MALFORMED_PAYLOAD.value.code},
        )
    payload = as_mapping(raw)

    form_type = (
        as_text(document_type) or as_text(payload.get("formType")) or UNKNOWN_DOCUMENT_TYPE
    )

    date_info = payload.get("dateInfo")
    if date_info is not None and not isinstance(date_info, Mapping):
        _log_malformed("dateInfo", date_info)
    date_info = as_mapping(date_info)

    age_raw = first_present(_age_candidate(payload), _age_candidate(date_info))

    raw_scores = payload.get("scores")
    buckets, unclassified = partition_scores(raw_scores)
    if isinstance(raw_scores, Mapping):
        enrichment_type = canonical_form_type(form_type) or form_type
        get_enrichment(enrichment_type)(raw_scores, buckets, unclassified)

    record = AssessmentRecord(
        form_type=form_type,
        patient_info=_resolve_patient_info(payload),
        test_date=_resolve_date(payload, date_info, "testDate", include_time=True),
        birth_date=_resolve_date(payload, date_info, "birthDate", include_time=False),
        chronological_age=ChronologicalAge(**parse_age(age_raw)),
        scores=ScoreBuckets.model_validate(buckets),
        other_fields=_resolve_other_fields(payload, unclassified),
    )

    logger.info(
        "Normalized assessment record",
        extra={"form_type": form_type},
    )
    return record


def resolve_document_type(
    payload: Any,
    text: Optional[str] = None,
    override: Optional[str] = None,
) -> tuple[str, Optional[ClassificationResult]]:
    """
    Decide the form type for a payload.

    A caller override bypasses the classifier. Otherwise the classifier runs
    over ``text`` (or the serialized payload) and replaces the payload's own
    ``formType`` only when the payload has none or the classifier is
    confident enough.

    Returns:
      ``(document_type, classification)``; classification is None when an
      override was used.
    """
    override_text = as_text(override)
    if override_text:
        return canonical_form_type(override_text) or override_text, None

    data = as_mapping(payload)
    payload_type = as_text(data.get("formType"))

    if isinstance(text, str) and text.strip():
        classification = classify(text)
    else:
        classification = classify(json.dumps(data, ensure_ascii=False, default=str))

    threshold = get_settings().CLASSIFIER_OVERRIDE_CONFIDENCE
    if classification.is_document and (
        not payload_type or classification.confidence > threshold
    ):
        return classification.document_type, classification

    if payload_type:
        return canonical_form_type(payload_type) or payload_type, classification
    return UNKNOWN_DOCUMENT_TYPE, classification


def process_extraction(
    raw: Any,
    text: Optional[str] = None,
    document_type: Optional[str] = None,
) -> tuple[AssessmentRecord, Optional[ClassificationResult]]:
    """
    Full flow for one extraction event: unwrap, classify, normalize.

    Args:
      raw: Payload dict, or raw LLM output text to be unwrapped.
      text: Optional OCR free text to classify instead of the payload.
      document_type: Optional caller override bypassing the classifier.
    """
    payload = parse_llm_payload(raw) if isinstance(raw, (str, bytes)) else raw
    resolved_type, classification = resolve_document_type(payload, text=text, override=document_type)
    return normalize(payload, resolved_type), classification


def apply_score_edit(
    record: AssessmentRecord,
    bucket: Optional[str],
    key: str,
    value: Any,
) -> AssessmentRecord:
    """
    Return a copy of ``record`` with one score edited.

    Bucketing is re-run on the edited scores. With
    ``bucket=None`` the key is treated as a loose score and re-bucketed by
    keyword; if it matches no bucket it lands in
    ``otherFields["unclassifiedScores"]``.

    Raises:
      ValidationError: If ``bucket`` is not a canonical bucket name.
    """
    if bucket is not None and bucket not in SCORE_BUCKETS:
        raise ValidationError(
            f"Unknown score bucket '{bucket}'",
            field="bucket",
            details={"detail": f"Expected one of {', '.join(SCORE_BUCKETS)}"},
        )

    scores: dict[str, Any] = record.scores.model_dump(by_alias=True)
    if bucket is None:
        scores[str(key)] = value
    else:
        scores[bucket][str(key)] = value

    buckets, unclassified = partition_scores(scores)
    other = dict(record.other_fields)
    if unclassified:
        kept = as_mapping(other.get(UNCLASSIFIED_SCORES_KEY))
        kept.update(unclassified)
        other[UNCLASSIFIED_SCORES_KEY] = kept

    return record.model_copy(
        update={"scores": ScoreBuckets.model_validate(buckets), "other_fields": other}
    )


def to_persistence_document(record: AssessmentRecord) -> dict[str, Any]:
    """
    Shape a record for a document store.

    ``testDate`` keeps its time of day; ``birthDate`` is normalized to
    midnight. Unparsable or empty dates become None.
    """
    document = record.to_dict()
    document["type"] = record.form_type
    document["testDate"] = parse_date(record.test_date, include_time=True)
    document["birthDate"] = parse_date(record.birth_date, include_time=False)
    return document
