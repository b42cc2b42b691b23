# =============================================================================
# Classification
# =============================================================================

CLASSIFICATION_THRESHOLD = 0.3  # Minimum confidence for isDocument
CLASSIFIER_OVERRIDE_CONFIDENCE = 0.5  # Above this, classifier beats payload formType
FORM_TYPE_FUZZY_THRESHOLD = 85  # rapidfuzz ratio (0-100) for formType canonicalization

UNKNOWN_DOCUMENT_TYPE = "Unknown"


# =============================================================================
# Record Defaults
# =============================================================================

DEFAULT_AGE_YEARS = 0
DEFAULT_AGE_MONTHS = 0

# Output format for normalized date text
DATE_OUTPUT_FORMAT = "%Y-%m-%d"
DATETIME_OUTPUT_FORMAT = "%Y-%m-%dT%H:%M:%S"
