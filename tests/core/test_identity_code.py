"""Identity Code Parser — tests for CURP field derivation.

Tests cover:
    - Birth date, age and gender for well-formed codes
    - Century resolution (never in the future)
    - Month/day passed through verbatim
    - Gender decided solely by the character at index 10
    - InvalidIdentityCode for short codes and non-numeric years
"""

from datetime import date

import pytest

from persona_registry.core.domain_types import Gender
from persona_registry.core.errors import InvalidIdentityCode
from persona_registry.core.identity_code import (
    IdentityCodeInfo, parse_identity_code, resolve_birth_year,
)

TODAY = date(2026, 10, 19)


def test_male_code_from_last_century():
    info = parse_identity_code("ABCD990101HDFRRN09", today=TODAY)
    assert info == IdentityCodeInfo(
        birth_date="1999-01-01", age=27, gender=Gender.MALE,
    )


def test_female_code_from_this_century():
    info = parse_identity_code("GOML050312MDFRRN01", today=TODAY)
    assert info.birth_date == "2005-03-12"
    assert info.age == 21
    assert info.gender is Gender.FEMALE


def test_current_year_stays_in_this_century():
    info = parse_identity_code("ABCD260101HDFRRN09", today=TODAY)
    assert info.birth_date == "2026-01-01"
    assert info.age == 0


def test_next_year_falls_back_to_last_century():
    info = parse_identity_code("ABCD270101HDFRRN09", today=TODAY)
    assert info.birth_date == "1927-01-01"
    assert info.age == 99


def test_year_zero_is_2000():
    assert parse_identity_code("ABCD000229MDFRRN09", today=TODAY).birth_date == "2000-02-29"


def test_unknown_marker_is_desconocido():
    assert parse_identity_code("ABCD990101XDFRRN09", today=TODAY).gender is Gender.UNKNOWN


def test_lowercase_marker_is_not_recognized():
    assert parse_identity_code("ABCD990101hDFRRN09", today=TODAY).gender is Gender.UNKNOWN


def test_invalid_month_and_day_pass_through():
    info = parse_identity_code("ABCD991399HDFRRN09", today=TODAY)
    assert info.birth_date == "1999-13-99"


def test_exactly_eleven_characters_is_enough():
    info = parse_identity_code("ABCD990101M", today=TODAY)
    assert info.gender is Gender.FEMALE


@pytest.mark.parametrize("code", ["", "ABCD", "ABCD990101"])
def test_short_code_raises(code):
    with pytest.raises(InvalidIdentityCode) as exc_info:
        parse_identity_code(code, today=TODAY)
    assert exc_info.value.http_status == 400
    assert exc_info.value.context.curp == code


@pytest.mark.parametrize("code", ["ABCDXX0101HDFRRN09", "ABCD9A0101HDFRRN09", "ABCD-10101HDFRRN09"])
def test_non_numeric_year_raises(code):
    with pytest.raises(InvalidIdentityCode):
        parse_identity_code(code, today=TODAY)


def test_gender_decided_only_by_index_ten():
    expected = {"H": Gender.MALE, "M": Gender.FEMALE, "X": Gender.UNKNOWN}
    for prefix in ("ABCD", "ZZZZ", "1234"):
        for suffix in ("DFRRN09", "AAAAAAA", "HHHHHHH", "MMMMMMM"):
            for marker, gender in expected.items():
                code = f"{prefix}990101{marker}{suffix}"
                assert len(code) == 18
                assert parse_identity_code(code, today=TODAY).gender is gender


def test_birth_year_never_in_the_future():
    for current_year in (1999, 2000, 2026, 2050, 2099):
        for yy in range(100):
            assert resolve_birth_year(yy, current_year) <= current_year


def test_birth_year_never_in_the_future_with_wall_clock():
    current_year = date.today().year
    for yy in range(100):
        info = parse_identity_code(f"ABCD{yy:02d}0101HDFRRN09")
        assert int(info.birth_date[:4]) <= current_year
        assert info.age >= 0
