"""
Reshape an arbitrary score dictionary into the five-bucket taxonomy.

Canonical buckets already present are copied forward verbatim. Loose
scalar scores at the top level are re-bucketed by ordered keyword tests on
the lower-cased key (see BUCKET_KEYWORD_RULES). Nested objects other than
the canonical buckets are left for form-specific enrichment.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from assessment_pipeline.config.constants import BUCKET_KEYWORD_RULES, SCORE_BUCKETS
from assessment_pipeline.errors.codes import IssueCode
from assessment_pipeline.utils.fields import is_scalar

logger = logging.getLogger(__name__)


def empty_buckets() -> dict[str, dict[str, Any]]:
    return {bucket: {} for bucket in SCORE_BUCKETS}


def bucket_for_key(key: Any) -> str | None:
    """Return the bucket a loose score key belongs to, or None."""
    key_lower = str(key).lower()
    for markers, bucket in BUCKET_KEYWORD_RULES:
        if any(marker in key_lower for marker in markers):
            return bucket
    return None


def partition_scores(
    raw: Any,
) -> tuple[dict[str, dict[str, Any]], dict[str, Any]]:
    """
    Split a raw score dictionary into canonical buckets and leftovers.

    Args:
      raw: The payload's ``scores`` value; anything but a mapping is empty.

    Returns:
      ``(buckets, unclassified)`` where ``buckets`` always holds all five
      canonical keys and ``unclassified`` holds loose scalar scores that
      matched no bucket.
    """
    buckets = empty_buckets()
    unclassified: dict[str, Any] = {}
    if not isinstance(raw, Mapping):
        if raw is not None:
            logger.debug(
                "Scores value is not an object",
                extra={"error_code": IssueCode.MALFORMED_FIELD.value.code, "field": "scores"},
            )
        return buckets, unclassified

    for bucket in SCORE_BUCKETS:
        existing = raw.get(bucket)
        if isinstance(existing, Mapping):
            buckets[bucket].update({str(k): v for k, v in existing.items()})
        elif existing is not None:
            logger.debug(
                "Score bucket is not an object",
                extra={"error_code": IssueCode.MALFORMED_FIELD.value.code, "bucket": bucket},
            )

    for key, value in raw.items():
        if key in SCORE_BUCKETS or not is_scalar(value):
            continue
        bucket = bucket_for_key(key)
        if bucket is None:
            unclassified[str(key)] = value
        else:
            buckets[bucket][str(key)] = value

    return buckets, unclassified


def normalize_scores(raw: Any) -> dict[str, dict[str, Any]]:
    """
    Return the five canonical score buckets for ``raw``.

    Every bucket key is always present; loose keys that match no bucket
    are dropped (see `partition_scores` to keep them).
    """
    buckets, _ = partition_scores(raw)
    return buckets
