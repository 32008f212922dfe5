"""Entity matching across two unordered collections.

Skills carry a natural key (their name) and are paired by exact
case-insensitive lookup. Role ids are not stable across imports, so roles are
paired by a weighted heuristic score and a threshold.

Role score weights (normalised by their total):
- date-range overlap: 3 (boolean)
- title token similarity: 2 (fractional)
- company token similarity: 2 (fractional)
- exact start date: 0.5, exact end date or both current: 0.5
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from .similarity import date_ranges_overlap, token_similarity, utc_today

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cvmerge.domain.model import Role, Skill

    from .similarity import Today

log = logging.getLogger(__name__)

TPair = TypeVar("TPair")
TEntity = TypeVar("TEntity")

DEFAULT_ROLE_MATCH_THRESHOLD = 0.5

OVERLAP_WEIGHT = 3.0
TITLE_WEIGHT = 2.0
COMPANY_WEIGHT = 2.0
EXACT_DATE_WEIGHT = 1.0
TOTAL_WEIGHT = OVERLAP_WEIGHT + TITLE_WEIGHT + COMPANY_WEIGHT + EXACT_DATE_WEIGHT


@dataclass(frozen=True, slots=True)
class RoleMatch:
    role: Role
    score: float


@dataclass(frozen=True, slots=True)
class RolePair:
    current: Role
    incoming: Role
    score: float


@dataclass(frozen=True, slots=True)
class SkillPair:
    current: Skill
    incoming: Skill


@dataclass(frozen=True, slots=True)
class MatchResult(Generic[TPair, TEntity]):
    """Pairs found plus the leftovers on either side, in input order."""

    pairs: tuple[TPair, ...]
    unmatched_current: tuple[TEntity, ...]
    unmatched_incoming: tuple[TEntity, ...]


def role_match_score(current: Role, incoming: Role, *, today: Today = utc_today) -> float:
    """Estimate (0-1) how likely two roles describe the same engagement."""

    if current.id == incoming.id:
        return 1.0

    score = 0.0
    if date_ranges_overlap(
        current.start, current.end, incoming.start, incoming.end, today=today
    ):
        score += OVERLAP_WEIGHT
    score += token_similarity(current.title, incoming.title) * TITLE_WEIGHT
    score += token_similarity(current.company, incoming.company) * COMPANY_WEIGHT

    if current.start == incoming.start:
        score += EXACT_DATE_WEIGHT / 2
    if current.end == incoming.end or (current.is_current and incoming.is_current):
        score += EXACT_DATE_WEIGHT / 2

    return score / TOTAL_WEIGHT


def find_best_match(
    role: Role,
    candidates: Sequence[Role],
    *,
    threshold: float = DEFAULT_ROLE_MATCH_THRESHOLD,
    today: Today = utc_today,
) -> RoleMatch | None:
    """Return the highest scoring candidate at or above ``threshold``.

    Ties keep the earliest candidate so the outcome only depends on input order.
    """

    best: RoleMatch | None = None
    for candidate in candidates:
        score = role_match_score(role, candidate, today=today)
        if score < threshold:
            continue
        if best is None or score > best.score:
            best = RoleMatch(role=candidate, score=score)
    return best


def match_roles(
    current: Sequence[Role],
    incoming: Sequence[Role],
    *,
    threshold: float = DEFAULT_ROLE_MATCH_THRESHOLD,
    exclusive: bool = True,
    today: Today = utc_today,
) -> MatchResult[RolePair, Role]:
    """Pair current roles with incoming roles in ``current`` order.

    Roles sharing an id are paired first and never compete in the heuristic
    scan. With ``exclusive`` set, an incoming role leaves the candidate pool
    once it is matched, so every pair is 1:1. Without it, each remaining current
    role scans the full incoming list and one incoming role may be claimed more
    than once.
    """

    pool = list(incoming)
    same_id = _pair_same_ids(current, pool)
    consumed: set[int] = set(same_id.values())
    pairs: list[RolePair] = []
    unmatched_current: list[Role] = []

    for position, role in enumerate(current):
        if position in same_id:
            pairs.append(RolePair(current=role, incoming=pool[same_id[position]], score=1.0))
            continue
        available = [i for i in range(len(pool)) if not (exclusive and i in consumed)]
        match = find_best_match(
            role, [pool[i] for i in available], threshold=threshold, today=today
        )
        if match is None:
            unmatched_current.append(role)
            continue
        pairs.append(RolePair(current=role, incoming=match.role, score=match.score))
        consumed.add(next(i for i in available if pool[i] is match.role))

    unmatched_incoming = tuple(role for i, role in enumerate(pool) if i not in consumed)
    log.debug(
        "Matched roles: pairs=%s, unmatched_current=%s, unmatched_incoming=%s",
        len(pairs),
        len(unmatched_current),
        len(unmatched_incoming),
    )
    return MatchResult(
        pairs=tuple(pairs),
        unmatched_current=tuple(unmatched_current),
        unmatched_incoming=unmatched_incoming,
    )


def _pair_same_ids(current: Sequence[Role], pool: Sequence[Role]) -> dict[int, int]:
    """Map current positions to the first unclaimed incoming position with the same id."""

    positions_by_id: dict[str, list[int]] = {}
    for index, role in enumerate(pool):
        positions_by_id.setdefault(role.id, []).append(index)

    paired: dict[int, int] = {}
    for position, role in enumerate(current):
        candidates = positions_by_id.get(role.id)
        if candidates:
            paired[position] = candidates.pop(0)
    return paired


def match_skills(
    current: Sequence[Skill],
    incoming: Sequence[Skill],
) -> MatchResult[SkillPair, Skill]:
    """Pair skills by case-insensitive name; each incoming skill matches at most once."""

    index_by_key: dict[str, int] = {}
    for index, skill in enumerate(incoming):
        index_by_key.setdefault(skill.match_key, index)

    consumed: set[int] = set()
    pairs: list[SkillPair] = []
    unmatched_current: list[Skill] = []
    for skill in current:
        index = index_by_key.get(skill.match_key)
        if index is None or index in consumed:
            unmatched_current.append(skill)
            continue
        consumed.add(index)
        pairs.append(SkillPair(current=skill, incoming=incoming[index]))

    return MatchResult(
        pairs=tuple(pairs),
        unmatched_current=tuple(unmatched_current),
        unmatched_incoming=tuple(s for i, s in enumerate(incoming) if i not in consumed),
    )
