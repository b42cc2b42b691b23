"""
Normalization pipeline for OCR-extracted clinical assessment forms.
"""

from assessment_pipeline.models.dto import (
    AssessmentRecord,
    AssessmentType,
    ChronologicalAge,
    ClassificationResult,
    PatientInfo,
    PatternMatch,
    ScoreBuckets,
)
from assessment_pipeline.orchestrator import (
    apply_score_edit,
    normalize,
    process_extraction,
    resolve_document_type,
    to_persistence_document,
)
from assessment_pipeline.processors.document_classifier import classify
from assessment_pipeline.processors.field_alias_resolver import ABSENT, resolve
from assessment_pipeline.processors.name_splitter import split_name
from assessment_pipeline.processors.score_taxonomy import normalize_scores
from assessment_pipeline.utils.dates import parse_age, parse_date

__version__ = "0.1.0"

__all__ = [
    "ABSENT",
    "AssessmentRecord",
    "AssessmentType",
    "ChronologicalAge",
    "ClassificationResult",
    "PatientInfo",
    "PatternMatch",
    "ScoreBuckets",
    "apply_score_edit",
    "classify",
    "normalize",
    "normalize_scores",
    "parse_age",
    "parse_date",
    "process_extraction",
    "resolve",
    "resolve_document_type",
    "split_name",
    "to_persistence_document",
]
