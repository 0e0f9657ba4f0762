"""Query Parameter Parsing — lenient integer parsing and page window resolution.

Invariants:
    - Only an optionally signed run of ASCII digits parses; anything else
      (absent, blank, padded, "1_0", "1.5") parses to 0 and never raises
    - page < 1 → 1; per_page < 1 → default_per_page; per_page > max_per_page → max_per_page
    - skip = (page - 1) * per_page, and never exceeds MAX_SKIP (signed 64-bit OFFSET)

Design Decisions:
    - Lenient parsing over FastAPI int coercion: garbage page/perPage values fall back to
      defaults instead of returning 400 (the list endpoint has no client-error response)
    - Oversized pages clamped to the last addressable page: the result is simply empty
"""

import re
from dataclasses import dataclass

MAX_SKIP = 2**63 - 1

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class PageWindow:
    page: int
    per_page: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page


def parse_int_param(raw: str | None) -> int:
    """Parse an integer query parameter; absent or malformed → 0."""
    if raw is None or not _INT_PATTERN.fullmatch(raw):
        return 0
    return int(raw)


def resolve_page_window(
    page: int, per_page: int, default_per_page: int = 10, max_per_page: int = 100,
) -> PageWindow:
    if page < 1:
        page = 1
    if per_page < 1:
        per_page = default_per_page
    per_page = min(per_page, max_per_page)
    page = min(page, MAX_SKIP // per_page + 1)
    return PageWindow(page=page, per_page=per_page)
