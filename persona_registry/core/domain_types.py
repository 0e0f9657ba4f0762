"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - EnrollmentNumber is a 10-digit integer (1_000_000_000–9_999_999_999)
    - Gender values are the exact strings stored and served on the wire
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EnrollmentNumber = NewType("EnrollmentNumber", int)   # matricula


# ─── Constants ───────────────────────────────────────────────────

ENROLLMENT_NUMBER_MIN = 1_000_000_000
ENROLLMENT_NUMBER_MAX = 9_999_999_999

# Minimum length to reach the sex marker at index 10
IDENTITY_CODE_MIN_LENGTH = 11


# ─── Enums ───────────────────────────────────────────────────────

class Gender(str, Enum):
    """Gender derived from the identity code sex marker."""
    MALE = "Hombre"
    FEMALE = "Mujer"
    UNKNOWN = "Desconocido"

    @classmethod
    def from_marker(cls, marker: str) -> "Gender":
        if marker == "H":
            return cls.MALE
        if marker == "M":
            return cls.FEMALE
        return cls.UNKNOWN
