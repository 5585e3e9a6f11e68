"""
Record Shop Backend — Record Validation
=========================================

What:  Business-rule validation for record create/update payloads.
How:   Runs every rule for every field, collects the failures in field order
       and raises one RecordValidationError carrying all of them.
Who:   Called by RecordService before any create or update touches storage.

Rules:
    artist, title, genre, style   non-empty
    release_year                  required (non-zero), an integer,
                                  within [1000, 9999], not after the current year

The current year comes from an injected clock so tests can pin "now".
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from recordshop.exceptions import RecordValidationError
from recordshop.schemas.record import RecordInput

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

MIN_RELEASE_YEAR = 1000
MAX_RELEASE_YEAR = 9999

REQUIRED_TEXT_FIELDS = ("artist", "title", "genre", "style")


def system_clock() -> datetime:
    return datetime.now(timezone.utc)


def _is_blank(value: Any) -> bool:
    return value is None or value == "" or value == 0


def validate_release_year(value: Any, current_year: int) -> Optional[str]:
    """
    Checks a non-blank release year; returns the failure message or None.

    bool is rejected explicitly because it is an int subclass in Python.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return "release year must be an integer"
    if value < MIN_RELEASE_YEAR or value > MAX_RELEASE_YEAR:
        return "release year must be a 4-digit number"
    if value > current_year:
        return "release year must not be in the future"
    return None


class RecordValidator:
    """
    Validates RecordInput payloads.

    Usage:
        validator = RecordValidator(clock=lambda: datetime(2024, 6, 1, tzinfo=timezone.utc))
        validator.validate(payload)   # raises RecordValidationError on failure
    """

    def __init__(self, clock: Clock = system_clock):
        self._clock = clock

    def collect_errors(self, payload: RecordInput) -> Dict[str, str]:
        errors: Dict[str, str] = {}

        for field in REQUIRED_TEXT_FIELDS:
            if _is_blank(getattr(payload, field)):
                errors[field] = f"{field} is required."

        year = payload.release_year
        if _is_blank(year):
            errors["release_year"] = "release year is required."
        else:
            problem = validate_release_year(year, self._clock().year)
            if problem:
                errors["release_year"] = problem

        return errors

    def validate(self, payload: RecordInput) -> None:
        errors = self.collect_errors(payload)
        if errors:
            logger.info("Record payload rejected: %s", ", ".join(errors))
            raise RecordValidationError(errors)


record_validator = RecordValidator()
