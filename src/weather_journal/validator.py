"""Validate and normalize raw form input into an ObservationCandidate."""

from __future__ import annotations

import re
import unicodedata

from weather_journal.errors import InvalidValue
from weather_journal.schemas import ObservationCandidate

# Characters kept when reducing a raw value to a number
_NOT_NUMERIC = re.compile(r"[^0-9+\-]")
_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
# An unclosed tag swallows the rest of the text, as strip_tags does
_MARKUP = re.compile(r"<[^>]*(?:>|\Z)")
_SPACE_CONTROLS = re.compile(r"[\t\n\r\v\f]+")


def parse_value(raw_value: str | None) -> int:
    """Reduce ``raw_value`` to a signed integer.

    Everything except digits and sign characters is stripped first, so
    ``"42px"`` gives 42 and ``"-3 °C"`` gives -3.

    Raises:
        InvalidValue: If what remains is not an optionally signed integer.
    """
    if raw_value is None:
        raise InvalidValue(raw_value)
    digits = _NOT_NUMERIC.sub("", str(raw_value))
    if not _SIGNED_INT.fullmatch(digits):
        raise InvalidValue(raw_value)
    return int(digits)


def sanitize_note(raw_note: str | None) -> str:
    """Reduce a note to plain text. Missing notes become ``""``."""
    if not raw_note:
        return ""
    text = _MARKUP.sub("", str(raw_note))
    text = _SPACE_CONTROLS.sub(" ", text)
    text = "".join(ch for ch in text if unicodedata.category(ch) != "Cc")
    return text.strip()


def validate(raw_value: str | None, raw_note: str | None = None) -> ObservationCandidate:
    """Validate raw form input.

    Args:
        raw_value: The reading as typed by the user.
        raw_note: Optional free-text note.

    Returns:
        Candidate observation with an integer value and a plain-text note.

    Raises:
        InvalidValue: If the value does not reduce to an integer.
    """
    return ObservationCandidate(value=parse_value(raw_value), note=sanitize_note(raw_note))
