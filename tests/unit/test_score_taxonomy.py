"""Unit tests for the five-bucket score taxonomy."""

import copy

from assessment_pipeline.config.constants import SCORE_BUCKETS
from assessment_pipeline.processors.score_taxonomy import (
    bucket_for_key,
    normalize_scores,
    partition_scores,
)


class TestBucketForKey:
    """Ordered single-keyword rules."""

    def test_raw(self):
        assert bucket_for_key("AC Raw") == "rawScores"

    def test_raw_beats_standard(self):
        assert bucket_for_key("Raw Standard Score") == "rawScores"

    def test_standard(self):
        assert bucket_for_key("EC Standard Score") == "standardScores"

    def test_percentile_and_rank(self):
        assert bucket_for_key("AC Percentile") == "percentiles"
        assert bucket_for_key("Percentile Rank") == "percentiles"
        assert bucket_for_key("rank") == "percentiles"

    def test_confidence_and_interval(self):
        assert bucket_for_key("90% Confidence") == "confidenceIntervals"
        assert bucket_for_key("interval") == "confidenceIntervals"

    def test_composite(self):
        assert bucket_for_key("Total Language") == "compositeScores"
        assert bucket_for_key("Composite") == "compositeScores"

    def test_unmatched(self):
        assert bucket_for_key("Growth Scale Value") is None


class TestNormalizeScores:
    """Tests for normalize_scores / partition_scores."""

    def test_all_buckets_present_for_empty_input(self):
        buckets = normalize_scores({})
        assert list(buckets) == list(SCORE_BUCKETS)
        assert all(v == {} for v in buckets.values())

    def test_non_mapping_input(self):
        for raw in (None, "75", [1, 2], 42):
            assert normalize_scores(raw) == {b: {} for b in SCORE_BUCKETS}

    def test_existing_buckets_copied(self):
        raw = {"standardScores": {"AC Standard Score": 75}}
        assert normalize_scores(raw)["standardScores"] == {"AC Standard Score": 75}

    def test_loose_scores_rebucketed(self):
        raw = {"AC Raw": 30, "Total Language": 137, "AC Percentile": 5}
        buckets = normalize_scores(raw)

        assert buckets["rawScores"] == {"AC Raw": 30}
        assert buckets["compositeScores"] == {"Total Language": 137}
        assert buckets["percentiles"] == {"AC Percentile": 5}

    def test_loose_score_merges_with_existing_bucket(self):
        raw = {"rawScores": {"EC Raw": 20}, "AC Raw": 30}
        assert normalize_scores(raw)["rawScores"] == {"EC Raw": 20, "AC Raw": 30}

    def test_malformed_bucket_treated_as_empty(self):
        assert normalize_scores({"rawScores": "36"})["rawScores"] == {}

    def test_nested_non_bucket_objects_ignored(self):
        buckets = normalize_scores({"all": {"acRawScore": 30}})
        assert all(v == {} for v in buckets.values())

    def test_unclassified_kept_by_partition(self):
        buckets, unclassified = partition_scores({"Growth Scale Value": 410, "AC Raw": 3})
        assert unclassified == {"Growth Scale Value": 410}
        assert buckets["rawScores"] == {"AC Raw": 3}

    def test_unclassified_dropped_by_normalize(self):
        buckets = normalize_scores({"Growth Scale Value": 410})
        assert "Growth Scale Value" not in str(buckets)

    def test_input_not_mutated(self):
        raw = {"rawScores": {"AC Raw Score": 36}, "EC Raw": 20}
        before = copy.deepcopy(raw)

        buckets = normalize_scores(raw)
        buckets["rawScores"]["extra"] = 1

        assert raw == before
