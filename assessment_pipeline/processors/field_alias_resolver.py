"""
Tiered lookup of a labeled value under any of several candidate names.

OCR runs label the same score differently ("AC Standard Score",
"Auditory Comprehension SS", "ac_standard"). `resolve` tries, in strict
order, and stops at the first hit:

  1. exact key match, candidate by candidate in caller order;
  2. case-insensitive substring match, candidate by candidate;
  3. domain-keyword fallback driven by ALIAS_MARKER_GROUPS.

Callers must put the most specific candidate first.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from assessment_pipeline.config.constants import ALIAS_MARKER_GROUPS


class _Absent:
    """Sentinel distinguishing "absent" from a stored None."""

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


def _try_exact(bag: Mapping, candidates: Sequence[str]) -> Any:
    for candidate in candidates:
        if candidate in bag:
            return bag[candidate]
    return ABSENT


def _try_substring(bag: Mapping, candidates: Sequence[str]) -> Any:
    lowered_keys = [(str(key).lower(), key) for key in bag]
    for candidate in candidates:
        needle = candidate.lower()
        if not needle:
            continue
        for key_lower, key in lowered_keys:
            if needle in key_lower:
                return bag[key]
    return ABSENT


def _try_domain_markers(bag: Mapping, candidates: Sequence[str]) -> Any:
    lowered_candidates = [c.lower() for c in candidates]
    lowered_keys = [(str(key).lower(), key) for key in bag]
    for triggers, markers in ALIAS_MARKER_GROUPS:
        if not any(t in c for c in lowered_candidates for t in triggers):
            continue
        for key_lower, key in lowered_keys:
            if any(m in key_lower for m in markers):
                return bag[key]
    return ABSENT


_STRATEGIES = (_try_exact, _try_substring, _try_domain_markers)


def resolve(bag: Any, candidates: Sequence[str], default: Any = ABSENT) -> Any:
    """
    Return the best-matching value in ``bag`` for the candidate names.

    Args:
      bag: Mapping of labels to values. Any other value is treated as
        already resolved and returned as is; None is absent.
      candidates: Candidate labels, most specific first.
      default: Returned when nothing matches (``ABSENT`` unless given).

    Returns:
      The matched value, or ``default``.
    """
    if bag is None:
        return default
    if not isinstance(bag, Mapping):
        return bag

    names = [c for c in candidates if isinstance(c, str)]
    for strategy in _STRATEGIES:
        value = strategy(bag, names)
        if value is not ABSENT:
            return value
    return default
