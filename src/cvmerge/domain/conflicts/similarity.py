"""Pure similarity helpers consumed by the entity matcher."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from cvmerge.domain.model import BilingualText

MIN_TOKEN_LENGTH = 3


class Today(Protocol):
    def __call__(self) -> date: ...


def utc_today() -> date:
    return datetime.now(UTC).date()


def _tokens(value: str) -> set[str]:
    return {token for token in value.lower().split() if len(token) >= MIN_TOKEN_LENGTH}


def token_similarity(a: str | None, b: str | None) -> float:
    """Jaccard similarity of the significant words in ``a`` and ``b``.

    Words shorter than three characters are ignored. Two missing values are
    vacuously equal; a missing value never matches a present one.
    """

    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0

    tokens_a = _tokens(a)
    tokens_b = _tokens(b)
    if not tokens_a and not tokens_b:
        return 1.0
    if not tokens_a or not tokens_b:
        return 0.0
    return len(tokens_a & tokens_b) / len(tokens_a | tokens_b)


def date_ranges_overlap(
    start1: date | None,
    end1: date | None,
    start2: date | None,
    end2: date | None,
    *,
    today: Today = utc_today,
) -> bool:
    """Return whether two date ranges intersect.

    A missing start makes overlap impossible; a missing end means the range is
    still ongoing.
    """

    if start1 is None or start2 is None:
        return False
    now = today()
    effective_end1 = end1 if end1 is not None else now
    effective_end2 = end2 if end2 is not None else now
    return start1 <= effective_end2 and start2 <= effective_end1


def texts_differ(a: BilingualText, b: BilingualText) -> bool:
    return a.differs_from(b)


def has_content(text: BilingualText) -> bool:
    return text.has_content


__all__ = [
    "Today",
    "date_ranges_overlap",
    "has_content",
    "texts_differ",
    "token_similarity",
    "utc_today",
]
