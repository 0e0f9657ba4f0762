"""Identity Code Parser — derives birth date, age and gender from a CURP.

Invariants:
    - Layout: XXXX YY MM DD S ... (4 chars, year, month, day, sex marker, rest ignored)
    - Birth year is 20YY unless that lands after the current year, then 19YY
    - Month and day are copied verbatim (no calendar validation)
    - Age is current year minus birth year (no month/day adjustment)
    - Codes shorter than 11 chars or with a non-numeric year raise InvalidIdentityCode

Design Decisions:
    - `today` injectable: tests pin the clock instead of patching datetime
"""

from dataclasses import dataclass
from datetime import date

from persona_registry.core.domain_types import Gender, IDENTITY_CODE_MIN_LENGTH
from persona_registry.core.errors import InvalidIdentityCode


@dataclass(frozen=True)
class IdentityCodeInfo:
    """Fields derived from an identity code."""
    birth_date: str
    age: int
    gender: Gender


def resolve_birth_year(two_digit_year: int, current_year: int) -> int:
    """Most recent century that does not put the birth year in the future."""
    year = 2000 + two_digit_year
    if year > current_year:
        year = 1900 + two_digit_year
    return year


def parse_identity_code(code: str, today: date | None = None) -> IdentityCodeInfo:
    if len(code) < IDENTITY_CODE_MIN_LENGTH:
        raise InvalidIdentityCode(
            code, f"se requieren al menos {IDENTITY_CODE_MIN_LENGTH} caracteres",
        )
    year_part = code[4:6]
    if not (year_part.isascii() and year_part.isdigit()):
        raise InvalidIdentityCode(code, f"año '{year_part}' no numérico")

    month = code[6:8]
    day = code[8:10]
    current_year = (today or date.today()).year
    birth_year = resolve_birth_year(int(year_part), current_year)

    return IdentityCodeInfo(
        birth_date=f"{birth_year}-{month}-{day}",
        age=current_year - birth_year,
        gender=Gender.from_marker(code[10]),
    )
