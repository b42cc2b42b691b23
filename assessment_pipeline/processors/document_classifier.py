"""
Signature-phrase document classifier.

Scores OCR text against the literal phrases printed on each known
assessment form and reports which phrases were found, so every decision is
explainable from the returned `matched_patterns`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

from rapidfuzz import fuzz

from assessment_pipeline.config.constants import DOCUMENT_SIGNATURES
from assessment_pipeline.config.settings import UNKNOWN_DOCUMENT_TYPE
from assessment_pipeline.core.settings import get_settings
from assessment_pipeline.errors.codes import IssueCode
from assessment_pipeline.models.dto import (
    AssessmentType,
    ClassificationResult,
    PatternMatch,
)

logger = logging.getLogger(__name__)


def _score_signature(
    text_lower: str, phrases: Sequence[str]
) -> tuple[int, float, list[PatternMatch]]:
    patterns = [PatternMatch(name=p, found=p.lower() in text_lower) for p in phrases]
    match_count = sum(1 for p in patterns if p.found)
    confidence = match_count / len(phrases) if phrases else 0.0
    return match_count, confidence, patterns


def classify(
    text: Any,
    signatures: Mapping[str, Sequence[str]] | None = None,
    threshold: float | None = None,
) -> ClassificationResult:
    """
    Classify OCR text as one of the known assessment forms.

    The best type has the most matched phrases; equal counts are broken by
    higher confidence (matches / phrases), and a full tie keeps the type
    listed first.

    Args:
      text: Raw OCR text. Non-string or empty input is Unknown.
      signatures: Document type -> signature phrases (defaults to the
        built-in table).
      threshold: Minimum confidence for ``is_document`` (defaults to
        ``CLASSIFICATION_THRESHOLD``).

    Returns:
      ClassificationResult for the best type, or Unknown.
    """
    if not isinstance(text, str) or not text:
        return ClassificationResult()

    table = DOCUMENT_SIGNATURES if signatures is None else signatures
    min_confidence = get_settings().CLASSIFICATION_THRESHOLD if threshold is None else threshold
    text_lower = text.lower()

    best_type = UNKNOWN_DOCUMENT_TYPE
    best_key = (0, 0.0)
    best_patterns: list[PatternMatch] = []

    for doc_type, phrases in table.items():
        match_count, confidence, patterns = _score_signature(text_lower, phrases)
        if (match_count, confidence) > best_key:
            best_type = doc_type
            best_key = (match_count, confidence)
            best_patterns = patterns

    confidence = best_key[1]
    is_document = confidence >= min_confidence and best_key[0] > 0

    if not is_document:
        logger.debug(
            "No document signature reached threshold",
            extra={
                "error_code": IssueCode.UNCLASSIFIABLE_DOCUMENT.value.code,
                "confidence": confidence,
            },
        )
    else:
        logger.debug(
            "Classified document",
            extra={"document_type": best_type, "confidence": confidence},
        )

    return ClassificationResult(
        is_document=is_document,
        document_type=best_type if is_document else UNKNOWN_DOCUMENT_TYPE,
        confidence=confidence,
        matched_patterns=best_patterns,
    )


def identify_assessment_type(text: Any) -> AssessmentType | None:
    """Classify text and map the result onto a known AssessmentType."""
    result = classify(text)
    if not result.is_document:
        return None
    try:
        return AssessmentType(result.document_type)
    except ValueError:
        return None


def _squash(name: str) -> str:
    return re.sub(r"[^a-z0-9]", "", name.casefold())


_EDITION = re.compile(r"(?:^|[\s-])(\d+|[ivx]+)$", re.IGNORECASE)
_ROMAN = {"i": 1, "ii": 2, "iii": 3, "iv": 4, "v": 5, "vi": 6, "vii": 7, "viii": 8, "ix": 9, "x": 10}


def _edition(name: str) -> int | None:
    """Trailing edition number of a form label ("OWLS-II" -> 2, "PLS-5" -> 5)."""
    match = _EDITION.search(name.strip())
    if not match:
        return None
    token = match.group(1).casefold()
    return int(token) if token.isdigit() else _ROMAN.get(token)


def canonical_form_type(name: Any, fuzzy_threshold: int | None = None) -> str | None:
    """
    Map a free-form form-type label onto a known AssessmentType value.

    Tries an exact match, then a punctuation-insensitive match ("PLS5",
    "pls 5"), then a rapidfuzz ratio against the type names and their
    first signature phrase. A label naming a different edition ("PLS-4",
    "OWLS-I") never fuzzy-matches.

    Returns:
      The canonical type string, or None if nothing is close enough.
    """
    if not isinstance(name, str) or not name.strip():
        return None
    label = name.strip()
    known = [t.value for t in AssessmentType]

    if label in known:
        return label

    squashed = _squash(label)
    for value in known:
        if _squash(value) == squashed:
            return value

    threshold = get_settings().FORM_TYPE_FUZZY_THRESHOLD if fuzzy_threshold is None else fuzzy_threshold
    label_edition = _edition(label)
    best_value, best_score = None, 0
    for value in known:
        # Another edition of the same test is a different form
        if label_edition is not None and label_edition != _edition(value):
            continue
        candidates = [value] + list(DOCUMENT_SIGNATURES.get(value, ())[:1])
        for candidate in candidates:
            score = int(fuzz.ratio(label.casefold(), candidate.casefold()))
            if score > best_score:
                best_value, best_score = value, score

    return best_value if best_score >= threshold else None
