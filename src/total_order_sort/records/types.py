"""Shared constants and type definitions for record parsing."""

import re
from typing import TypeAlias

# The first column is N = 1.
DEFAULT_KEY_COLUMN = 8

FIELD_SEPARATOR = b"\t"

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Optional sign followed by ASCII digits, nothing else.
INTEGER_PATTERN = re.compile(rb"[+-]?[0-9]+")

KeyedRecord: TypeAlias = tuple[int, bytes]
