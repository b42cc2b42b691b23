"""
Typed contracts produced by the pipeline.

Attributes are snake_case; the JSON shape handed to persistence and
presentation layers uses the camelCase aliases.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AssessmentType(str, Enum):
    """Assessment forms with a known signature."""

    PLS5 = "PLS-5"
    CELF5 = "CELF-5"
    GFTA3 = "GFTA-3"
    OWLS2 = "OWLS-II"
    REEL4 = "REEL-4"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class PatientInfo(_CamelModel):
    """
    Subject details. Unknown keys reported by OCR are passed through.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True, extra="allow"
    )

    name: str = ""
    first_name: str = ""
    last_name: str = ""
    sex: str = ""
    grade: str = ""


class ChronologicalAge(_CamelModel):
    years: int = 0
    months: int = 0


class ScoreBuckets(_CamelModel):
    """
    Fixed five-bucket score taxonomy. Every bucket is always present.
    """

    raw_scores: dict[str, Any] = Field(default_factory=dict)
    standard_scores: dict[str, Any] = Field(default_factory=dict)
    percentiles: dict[str, Any] = Field(default_factory=dict)
    confidence_intervals: dict[str, Any] = Field(default_factory=dict)
    composite_scores: dict[str, Any] = Field(default_factory=dict)


class AssessmentRecord(_CamelModel):
    """
    Canonical, persistence-ready assessment record.
    """

    form_type: str
    patient_info: PatientInfo = Field(default_factory=PatientInfo)
    test_date: str = ""
    birth_date: str = ""
    chronological_age: ChronologicalAge = Field(default_factory=ChronologicalAge)
    scores: ScoreBuckets = Field(default_factory=ScoreBuckets)
    other_fields: dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase JSON-ready shape."""
        return self.model_dump(by_alias=True)


class PatternMatch(_CamelModel):
    name: str
    found: bool


class ClassificationResult(_CamelModel):
    """
    Result of the signature-phrase document classifier.
    """

    is_document: bool = False
    document_type: str = "Unknown"
    confidence: float = 0.0
    matched_patterns: list[PatternMatch] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
