"""Shared fixtures for pipeline tests."""

import pytest

from assessment_pipeline.core.settings import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop cached settings so monkeypatched environment takes effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def pls5_text():
    """OCR text containing exactly 3 of the 6 PLS-5 signature phrases."""
    return (
        "PRESCHOOL LANGUAGE SCALES  Record Form\n"
        "Auditory Comprehension ....  Expressive Communication ....\n"
        "Examiner notes: child cooperative."
    )


@pytest.fixture
def flattened_pls5_payload():
    return {
        "childInfo": {"name": "Harry S.", "sex": "M", "grade": "Pre-K"},
        "scores": {"all": {"acStandardScore": 75, "ecPercentile": 1}},
        "chronologicalAge": "4-0",
    }


@pytest.fixture
def structured_payload():
    return {
        "formType": "PLS-5",
        "childInfo": {"name": "Sarah Johnson", "sex": "F", "grade": "K", "age": "4"},
        "testDate": "07/07/2024",
        "birthDate": "2020-07-07",
        "chronologicalAge": {"years": 4, "months": 0},
        "scores": {
            "rawScores": {"AC Raw Score": 36, "EC Raw Score": 27},
            "standardScores": {"AC Standard Score": 75, "EC Standard Score": 62},
            "percentiles": {"AC Percentile": 5, "EC Percentile": 1},
            "confidenceIntervals": {"AC Confidence": "71-85", "EC Confidence": "59-70"},
            "compositeScores": {"Standard Score Total": 137},
        },
        "examinerInfo": {"name": "Dr. Lee"},
        "otherFields": {"notes": "Used picture book"},
    }
