"""
Static lookup tables for classification and score bucketing.

Every table here is an ordered rule list evaluated top to bottom; order is
behaviorally significant.
"""

from typing import Optional


# Known assessment forms and the literal phrases printed on them
DOCUMENT_SIGNATURES: dict[str, tuple[str, ...]] = {
    "PLS-5": (
        "Preschool Language Scales",
        "PLS-5",
        "Fifth Edition",
        "Auditory Comprehension",
        "Expressive Communication",
        "Language Score",
    ),
    "CELF-5": (
        "Clinical Evaluation of Language Fundamentals",
        "CELF-5",
        "Language Content Index",
        "Language Structure Index",
    ),
    "GFTA-3": (
        "Goldman-Fristoe Test",
        "GFTA-3",
        "Articulation",
        "Sounds-in-Words",
    ),
    "OWLS-II": (
        "Oral and Written Language Scales",
        "OWLS-II",
        "Listening Comprehension",
        "Oral Expression",
    ),
    "REEL-4": (
        "Receptive-Expressive Emergent Language Test",
        "REEL-4",
        "Receptive Language",
        "Expressive Language",
    ),
}


# Canonical score buckets, in output order
RAW_SCORES = "rawScores"
STANDARD_SCORES = "standardScores"
PERCENTILES = "percentiles"
CONFIDENCE_INTERVALS = "confidenceIntervals"
COMPOSITE_SCORES = "compositeScores"

SCORE_BUCKETS: tuple[str, ...] = (
    RAW_SCORES,
    STANDARD_SCORES,
    PERCENTILES,
    CONFIDENCE_INTERVALS,
    COMPOSITE_SCORES,
)

# Legacy flattened score map some exports put under scores.all
FLATTENED_SCORES_KEY = "all"


# Single-keyword bucketing for loose score keys: (markers, bucket).
# A key containing both "raw" and "standard" lands in rawScores.
BUCKET_KEYWORD_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("raw",), RAW_SCORES),
    (("standard",), STANDARD_SCORES),
    (("percentile", "rank"), PERCENTILES),
    (("confidence", "interval"), CONFIDENCE_INTERVALS),
    (("total", "composite"), COMPOSITE_SCORES),
)


# Alias resolver domain fallback: (candidate triggers, bag key markers)
ALIAS_MARKER_GROUPS: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (("ac", "auditory"), ("ac", "auditory")),
    (("ec", "expressive"), ("ec", "expressive")),
    (("total", "composite"), ("total", "composite")),
    (("raw",), ("raw",)),
    (("standard", "ss"), ("standard", "ss")),
    (("percentile", "rank"), ("percentile", "rank")),
    (("confidence", "interval"), ("confidence", "interval")),
)


# PLS-5 flattened export rules: (region marker, metric marker, bucket, target key).
# A target key of None keeps the source key.
PLS5_COMPOUND_RULES: tuple[tuple[str, str, str, Optional[str]], ...] = (
    ("ac", "raw", RAW_SCORES, "AC Raw Score"),
    ("ec", "raw", RAW_SCORES, "EC Raw Score"),
    ("ac", "standard", STANDARD_SCORES, "AC Standard Score"),
    ("ec", "standard", STANDARD_SCORES, "EC Standard Score"),
    ("total", "standard", COMPOSITE_SCORES, "Standard Score Total"),
    ("ac", "percentile", PERCENTILES, None),
    ("ec", "percentile", PERCENTILES, None),
    ("ac", "confidence", CONFIDENCE_INTERVALS, None),
    ("ec", "confidence", CONFIDENCE_INTERVALS, None),
)


# Top-level payload keys consumed by the normalizer; everything else is
# carried into otherFields.
RECOGNIZED_PAYLOAD_KEYS: frozenset[str] = frozenset(
    {
        "formType",
        "patientInfo",
        "childInfo",
        "testDate",
        "birthDate",
        "chronologicalAge",
        "dateInfo",
        "scores",
        "otherFields",
    }
)

PATIENT_INFO_FIELDS: tuple[str, ...] = ("name", "firstName", "lastName", "sex", "grade")

# Patient keys dropped from the passthrough (chronologicalAge is canonical)
DROPPED_PATIENT_KEYS: frozenset[str] = frozenset({"age"})

UNCLASSIFIED_SCORES_KEY = "unclassifiedScores"


# Score summary rows: (label, [(bucket, candidates) per column])
SCORE_SUMMARY_ROWS: tuple[tuple[str, tuple[tuple[str, tuple[str, ...]], ...]], ...] = (
    (
        "Auditory Comprehension (AC)",
        (
            (RAW_SCORES, ("AC Raw Score", "AC", "Auditory")),
            (STANDARD_SCORES, ("AC Standard Score", "AC", "Auditory")),
            (PERCENTILES, ("AC Percentile", "AC", "Auditory")),
            (CONFIDENCE_INTERVALS, ("AC Confidence", "AC", "Auditory")),
        ),
    ),
    (
        "Expressive Communication (EC)",
        (
            (RAW_SCORES, ("EC Raw Score", "EC", "Expressive")),
            (STANDARD_SCORES, ("EC Standard Score", "EC", "Expressive")),
            (PERCENTILES, ("EC Percentile", "EC", "Expressive")),
            (CONFIDENCE_INTERVALS, ("EC Confidence", "EC", "Expressive")),
        ),
    ),
    (
        "Total Language Score",
        (
            (COMPOSITE_SCORES, ("Total Raw", "Total", "Language")),
            (COMPOSITE_SCORES, ("Standard Score Total", "Total Standard", "Language")),
            (COMPOSITE_SCORES, ("Total Percentile", "Total", "Language")),
            (CONFIDENCE_INTERVALS, ("Total Confidence", "Total", "Language")),
        ),
    ),
)
