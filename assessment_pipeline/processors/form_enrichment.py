"""
Form-type specific enrichment hooks.

Some exports flatten every score into one ``scores.all`` map. Each hook
routes those entries into the canonical buckets; a form type without a
registered hook gets the generic single-keyword routing.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable

from assessment_pipeline.config.constants import (
    FLATTENED_SCORES_KEY,
    PLS5_COMPOUND_RULES,
)
from assessment_pipeline.models.dto import AssessmentType
from assessment_pipeline.processors.score_taxonomy import bucket_for_key

logger = logging.getLogger(__name__)

# hook(raw_scores, buckets, unclassified) mutates the in-progress buckets
EnrichmentHook = Callable[[Mapping[str, Any], dict[str, dict[str, Any]], dict[str, Any]], None]

_REGISTRY: dict[str, EnrichmentHook] = {}


def register_enrichment(form_type: str) -> Callable[[EnrichmentHook], EnrichmentHook]:
    """Decorator registering a hook for one form type."""

    def deco(fn: EnrichmentHook) -> EnrichmentHook:
        _REGISTRY[form_type] = fn
        return fn

    return deco


def _flattened(raw_scores: Mapping[str, Any]) -> Mapping[str, Any]:
    flat = raw_scores.get(FLATTENED_SCORES_KEY)
    return flat if isinstance(flat, Mapping) else {}


def enrich_generic(
    raw_scores: Mapping[str, Any],
    buckets: dict[str, dict[str, Any]],
    unclassified: dict[str, Any],
) -> None:
    """Route ``scores.all`` entries by single keyword, keeping source keys."""
    for key, value in _flattened(raw_scores).items():
        bucket = bucket_for_key(key)
        if bucket is None:
            unclassified[str(key)] = value
        else:
            buckets[bucket][str(key)] = value


@register_enrichment(AssessmentType.PLS5.value)
def enrich_pls5(
    raw_scores: Mapping[str, Any],
    buckets: dict[str, dict[str, Any]],
    unclassified: dict[str, Any],
) -> None:
    """
    Route PLS-5 ``scores.all`` entries.

    Flattened PLS-5 exports encode both the subtest (AC, EC, total) and the
    metric in one key, e.g. "acStandardScore". A region marker AND a metric
    marker must both appear for a compound rule to fire; otherwise the
    single-keyword rules apply.
    """
    for key, value in _flattened(raw_scores).items():
        key_lower = str(key).lower()
        for region, metric, bucket, target in PLS5_COMPOUND_RULES:
            if region in key_lower and metric in key_lower:
                buckets[bucket][target or str(key)] = value
                break
        else:
            bucket = bucket_for_key(key)
            if bucket is None:
                unclassified[str(key)] = value
            else:
                buckets[bucket][str(key)] = value


def get_enrichment(form_type: str) -> EnrichmentHook:
    return _REGISTRY.get(form_type, enrich_generic)
