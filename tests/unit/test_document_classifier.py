"""Unit tests for the signature-phrase document classifier."""

import pytest

from assessment_pipeline.models.dto import AssessmentType
from assessment_pipeline.processors.document_classifier import (
    canonical_form_type,
    classify,
    identify_assessment_type,
)


class TestClassify:
    """Tests for classify."""

    def test_three_of_six_pls5_phrases(self, pls5_text):
        result = classify(pls5_text)

        assert result.is_document is True
        assert result.document_type == "PLS-5"
        assert result.confidence == pytest.approx(0.5)
        found = [p.name for p in result.matched_patterns if p.found]
        assert found == [
            "Preschool Language Scales",
            "Auditory Comprehension",
            "Expressive Communication",
        ]
        assert len(result.matched_patterns) == 6

    def test_matching_is_case_insensitive(self):
        result = classify("celf-5 clinical evaluation of language fundamentals")
        assert result.document_type == "CELF-5"
        assert result.confidence == pytest.approx(0.5)

    def test_below_threshold_is_unknown(self, pls5_text):
        """Patterns of the best type are still reported for diagnostics."""
        result = classify(pls5_text, threshold=0.6)

        assert result.is_document is False
        assert result.document_type == "Unknown"
        assert result.confidence == pytest.approx(0.5)
        assert len(result.matched_patterns) == 6

    def test_no_matches(self):
        result = classify("Grocery list: milk, eggs")

        assert result.is_document is False
        assert result.document_type == "Unknown"
        assert result.confidence == 0.0
        assert result.matched_patterns == []

    @pytest.mark.parametrize("text", ["", None, 123, ["PLS-5"]])
    def test_empty_or_non_text(self, text):
        result = classify(text)
        assert result.is_document is False
        assert result.document_type == "Unknown"

    def test_more_matches_beats_higher_confidence(self):
        signatures = {"A": ("x", "y", "a", "b", "c", "d"), "B": ("z",)}
        result = classify("x y z", signatures=signatures, threshold=0.0)
        assert result.document_type == "A"

    def test_equal_counts_broken_by_confidence(self):
        signatures = {"A": ("x", "y", "w"), "B": ("x", "q")}
        result = classify("x", signatures=signatures, threshold=0.0)
        assert result.document_type == "B"

    def test_full_tie_keeps_first_listed(self):
        signatures = {"A": ("x", "y"), "B": ("x", "q")}
        result = classify("x", signatures=signatures, threshold=0.0)
        assert result.document_type == "A"

    def test_to_dict_uses_camel_case(self, pls5_text):
        data = classify(pls5_text).to_dict()
        assert data["isDocument"] is True
        assert data["documentType"] == "PLS-5"
        assert data["matchedPatterns"][0] == {"name": "Preschool Language Scales", "found": True}


class TestIdentifyAssessmentType:
    def test_known(self, pls5_text):
        assert identify_assessment_type(pls5_text) is AssessmentType.PLS5

    def test_unknown(self):
        assert identify_assessment_type("nothing here") is None


class TestCanonicalFormType:
    """Tests for canonical_form_type."""

    @pytest.mark.parametrize("label", ["PLS-5", "PLS5", "pls 5", " pls-5 "])
    def test_punctuation_and_case_insensitive(self, label):
        assert canonical_form_type(label) == "PLS-5"

    def test_owls(self):
        assert canonical_form_type("owls ii") == "OWLS-II"

    def test_fuzzy_against_title(self):
        assert canonical_form_type("Preschool Language Scale") == "PLS-5"

    def test_other_edition_not_collapsed(self):
        assert canonical_form_type("PLS-4") is None

    def test_other_edition_roman_numeral(self):
        assert canonical_form_type("OWLS-I") is None
        assert canonical_form_type("OWLS II") == "OWLS-II"

    def test_other_edition_rejected_at_any_threshold(self):
        assert canonical_form_type("PLS-6", fuzzy_threshold=0) is None

    def test_threshold_override(self):
        assert canonical_form_type("PLS-5 form") is None
        assert canonical_form_type("PLS-5 form", fuzzy_threshold=60) == "PLS-5"

    @pytest.mark.parametrize("label", ["", "   ", None, 5])
    def test_empty(self, label):
        assert canonical_form_type(label) is None
