"""Unit tests for strict record validation."""

import pytest

from assessment_pipeline.core.exceptions import RecordValidationError
from assessment_pipeline.models.dto import AssessmentRecord
from assessment_pipeline.orchestrator import normalize
from assessment_pipeline.processors.validator import ensure_valid, validate_record


class TestValidateRecord:
    """Tests for validate_record."""

    def test_complete_record_passes(self, structured_payload):
        result = validate_record(normalize(structured_payload))

        assert result["verdict"] is True
        assert all(result["checks"].values())

    def test_empty_record(self):
        result = validate_record(normalize({}))
        checks = result["checks"]

        assert result["verdict"] is False
        assert checks["form_type_known"] is False
        assert checks["form_type_present"] is False
        assert checks["test_date_valid"] is False
        assert checks["has_scores"] is False
        assert checks["patient_named"] is False

    def test_custom_form_type_present_but_unknown(self):
        checks = validate_record(AssessmentRecord(form_type="District Intake"))["checks"]
        assert checks["form_type_present"] is True
        assert checks["form_type_known"] is False

    def test_birth_after_test(self):
        record = AssessmentRecord(
            form_type="PLS-5", test_date="2020-01-01", birth_date="2021-01-01"
        )
        checks = validate_record(record)["checks"]

        assert checks["test_date_valid"] is True
        assert checks["birth_date_valid"] is True
        assert checks["birth_before_test"] is False


class TestEnsureValid:
    """Tests for ensure_valid."""

    def test_returns_record(self, structured_payload):
        record = normalize(structured_payload)
        assert ensure_valid(record) is record

    def test_raises_with_failed_checks(self):
        with pytest.raises(RecordValidationError) as exc_info:
            ensure_valid(normalize({}))

        error = exc_info.value
        assert error.failed_checks == ["form_type_known", "test_date_valid", "has_scores"]
        assert error.http_status == 422
        assert error.details["field"] == "form_type_known"
        assert error.to_dict()["code"] == "RECORD_VALIDATION_FAILED"

    def test_custom_required_checks(self):
        record = AssessmentRecord(form_type="PLS-5")
        assert ensure_valid(record, required=["form_type_known"]) is record

        with pytest.raises(RecordValidationError) as exc_info:
            ensure_valid(record, required=["patient_named"])
        assert exc_info.value.failed_checks == ["patient_named"]

    def test_unknown_check_name(self):
        with pytest.raises(KeyError):
            ensure_valid(AssessmentRecord(form_type="PLS-5"), required=["no_such_check"])
