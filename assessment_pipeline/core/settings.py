"""
Centralized runtime settings using Pydantic.

Every field has a default, so the pipeline runs without any environment.
Deployments may override values through environment variables or `.env`.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings

from assessment_pipeline.config.settings import (
    CLASSIFICATION_THRESHOLD,
    CLASSIFIER_OVERRIDE_CONFIDENCE,
    FORM_TYPE_FUZZY_THRESHOLD,
)


class AppSettings(BaseSettings):
    """General pipeline settings."""

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    CLASSIFICATION_THRESHOLD: float = CLASSIFICATION_THRESHOLD
    CLASSIFIER_OVERRIDE_CONFIDENCE: float = CLASSIFIER_OVERRIDE_CONFIDENCE
    FORM_TYPE_FUZZY_THRESHOLD: int = FORM_TYPE_FUZZY_THRESHOLD

    model_config = {"case_sensitive": True, "env_file": ".env", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Load settings once per process."""
    return AppSettings()
