"""
Utilities for date and chronological-age parsing.

OCR output writes dates and ages in whatever form the examiner used on the
paper form. Every function here is total: unparsable input yields None (dates)
or a zeroed age, never an exception.
"""

import logging
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from assessment_pipeline.config.settings import (
    DATE_OUTPUT_FORMAT,
    DATETIME_OUTPUT_FORMAT,
    DEFAULT_AGE_MONTHS,
    DEFAULT_AGE_YEARS,
)
from assessment_pipeline.errors.codes import IssueCode
from assessment_pipeline.utils.fields import as_int

logger = logging.getLogger(__name__)

# Explicit numeric layouts, tried in order: (pattern, group index of year, month, day)
_NUMERIC_DATE_PATTERNS: tuple[tuple[re.Pattern, tuple[int, int, int]], ...] = (
    (re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$"), (3, 1, 2)),  # MM/DD/YYYY
    (re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$"), (1, 2, 3)),  # YYYY-MM-DD
    (re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4})$"), (3, 1, 2)),  # MM-DD-YYYY
)

# General fallback layouts for free-form dates
_FALLBACK_FORMATS: tuple[str, ...] = (
    "%B %d, %Y",
    "%B %d %Y",
    "%b %d, %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%m/%d/%y",
    "%Y/%m/%d",
    "%d.%m.%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %I:%M %p",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
)

_AGE_PAIR = re.compile(r"(\d+)(?:\s*-\s*|\s+)(\d+)")
_AGE_YEARS = re.compile(r"(\d+)\s*years?", re.IGNORECASE)
_AGE_MONTHS = re.compile(r"(\d+)\s*months?", re.IGNORECASE)


def parse_date(date_value: Any, include_time: bool = False) -> datetime | None:
    """
    Parse a date written in any of the layouts seen on assessment forms.

    Args:
      date_value: Raw date value; expected to be a string.
      include_time: Keep the time of day when the text carries one.
        Otherwise the result is normalized to midnight.

    Returns:
      A naive ``datetime`` if parsing succeeds, otherwise None.
    """
    if not isinstance(date_value, str):
        return None
    text = date_value.strip()
    if not text:
        return None

    parsed = _parse_numeric(text)
    if parsed is None:
        parsed = _parse_general(text)
    if parsed is None:
        logger.debug(
            "Unparsable date text",
            extra={"error_code": IssueCode.UNPARSABLE_DATE.value.code},
        )
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.replace(tzinfo=None)
    if not include_time:
        parsed = datetime(parsed.year, parsed.month, parsed.day)
    return parsed


def _parse_numeric(text: str) -> datetime | None:
    for pattern, (y_idx, m_idx, d_idx) in _NUMERIC_DATE_PATTERNS:
        match = pattern.match(text)
        if not match:
            continue
        try:
            return datetime(
                int(match.group(y_idx)), int(match.group(m_idx)), int(match.group(d_idx))
            )
        except ValueError:
            # Shape matched but the calendar date does not exist (e.g. 02/30/2024)
            return None
    return None


def _parse_general(text: str) -> datetime | None:
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def format_date(dt: datetime | None) -> str:
    """
    Render a parsed date as normalized text.

    Midnight values render as ``YYYY-MM-DD``; values with a time of day
    render as ``YYYY-MM-DDTHH:MM:SS``. None renders as "".
    """
    if dt is None:
        return ""
    if (dt.hour, dt.minute, dt.second) == (0, 0, 0):
        return dt.strftime(DATE_OUTPUT_FORMAT)
    return dt.strftime(DATETIME_OUTPUT_FORMAT)


def normalize_date_text(date_value: Any, include_time: bool = False) -> str:
    """Parse and re-render a date; unparsable input becomes ""."""
    return format_date(parse_date(date_value, include_time=include_time))


def parse_age(age_value: Any) -> dict[str, int]:
    """
    Parse a chronological age into ``{"years": int, "months": int}``.

    Accepts an existing ``{years, months}`` mapping (missing parts default
    to 0), a numeric pair such as "4-0" or "4 0", or verbose text such as
    "4 years 3 months". Anything else yields a zeroed age.
    """
    if isinstance(age_value, Mapping):
        return {
            "years": as_int(age_value.get("years"), DEFAULT_AGE_YEARS),
            "months": as_int(age_value.get("months"), DEFAULT_AGE_MONTHS),
        }

    if not isinstance(age_value, str):
        if age_value is not None:
            logger.debug(
                "Chronological age has unexpected type %s",
                type(age_value).__name__,
                extra={"error_code": IssueCode.UNPARSABLE_AGE.value.code},
            )
        return {"years": DEFAULT_AGE_YEARS, "months": DEFAULT_AGE_MONTHS}

    pair = _AGE_PAIR.search(age_value)
    if pair:
        return {"years": int(pair.group(1)), "months": int(pair.group(2))}

    years = _AGE_YEARS.search(age_value)
    months = _AGE_MONTHS.search(age_value)
    if not years and not months:
        logger.debug(
            "Unparsable chronological age text",
            extra={"error_code": IssueCode.UNPARSABLE_AGE.value.code},
        )
    return {
        "years": int(years.group(1)) if years else DEFAULT_AGE_YEARS,
        "months": int(months.group(1)) if months else DEFAULT_AGE_MONTHS,
    }
