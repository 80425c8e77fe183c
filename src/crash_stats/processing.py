"""
Field normalization applied while loading the crash CSV.
Each value is coerced using only its own header and raw string.
"""

import re
from typing import Any, Dict, Mapping, Union

from src.crash_stats.core import CRASH_LOCATION_HEADER

LOCATION_DELIMITER = " & "

_WHITESPACE = re.compile(r"\s")
_WHITESPACE_RUN = re.compile(r"\s+")
# Signed integer or decimal with optional exponent; surrounding blanks allowed
_NUMBER = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$")


class FieldNormalizer:
    """Header / value normalization rules"""

    @staticmethod
    def normalize_header(header: str) -> str:
        """'Crash Type' -> 'CrashType'"""
        return _WHITESPACE.sub("", str(header))

    @staticmethod
    def canonicalize_location(value: str) -> str:
        """
        Intersection key as an unordered pair of streets:
        'Oak St & Elm St' and 'Elm St & Oak St' both become 'Elm St & Oak St'.
        """
        streets = _WHITESPACE_RUN.sub(" ", value).strip().split(LOCATION_DELIMITER)
        return LOCATION_DELIMITER.join(sorted(streets))

    @staticmethod
    def is_numeric(value: Any) -> bool:
        if not isinstance(value, str):
            return False
        return _NUMBER.match(value) is not None

    @staticmethod
    def to_number(value: str) -> Union[int, float]:
        text = value.strip()
        if "." in text or "e" in text.lower():
            return float(text)
        return int(text)

    @staticmethod
    def normalize_value(header: str, value: str) -> Any:
        """
        Rule order matters:
        1. CrashLocation -> canonical intersection key
        2. yes / no (any case) -> bool
        3. numeric string -> int / float
        4. anything else stays a string
        """
        if header == CRASH_LOCATION_HEADER:
            return FieldNormalizer.canonicalize_location(value)

        lowered = value.lower()
        if lowered == "yes":
            return True
        if lowered == "no":
            return False

        if FieldNormalizer.is_numeric(value):
            return FieldNormalizer.to_number(value)

        return value

    @staticmethod
    def normalize_row(row: Mapping[str, str]) -> Dict[str, Any]:
        return {
            header: FieldNormalizer.normalize_value(header, value)
            for header, value in row.items()
        }
