"""Enrollment Number Generator — uniform random 10-digit matricula.

Invariants:
    - Result always in [1_000_000_000, 9_999_999_999]
    - One random source per process, created at import and never reseeded

Design Decisions:
    - SystemRandom (OS entropy): unpredictable numbers, safe to share across
      concurrent requests without locking
    - Uniqueness is NOT guaranteed here — the repository retries on collision
"""

import random

from persona_registry.core.domain_types import (
    EnrollmentNumber, ENROLLMENT_NUMBER_MIN, ENROLLMENT_NUMBER_MAX,
)

_rng = random.SystemRandom()


def generate_enrollment_number(rng: random.Random | None = None) -> EnrollmentNumber:
    """Draw an enrollment number from `rng`, or the process-wide source."""
    source = rng or _rng
    return EnrollmentNumber(
        source.randint(ENROLLMENT_NUMBER_MIN, ENROLLMENT_NUMBER_MAX),
    )
