"""Conflict detection between the current snapshot and an incoming one.

Responsibilities of this stage:
- compare the scalar bilingual fields
- pair roles (heuristic) and skills (by name) via the matcher
- classify every difference as modified/added/removed
- never mutate either snapshot
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .contracts import (
    ConflictAnalysis,
    ConflictStats,
    ConflictType,
    RoleConflict,
    SkillConflict,
    TextConflict,
    TextField,
)
from .matching import DEFAULT_ROLE_MATCH_THRESHOLD, match_roles, match_skills
from .similarity import has_content, texts_differ, utc_today
from .validation import validate_document

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cvmerge.domain.model import BilingualText, Document, Role, Skill

    from .contracts import Conflict
    from .similarity import Today

log = logging.getLogger(__name__)


def detect_conflicts(
    current: Document,
    incoming: Document,
    *,
    threshold: float = DEFAULT_ROLE_MATCH_THRESHOLD,
    exclusive_role_matching: bool = True,
    today: Today = utc_today,
) -> ConflictAnalysis:
    """Compare two snapshots and classify every difference.

    Raises ``DocumentValidationError`` when either snapshot is malformed.
    """

    validate_document(current, label="current")
    validate_document(incoming, label="incoming")

    role_conflicts = _detect_role_conflicts(
        current.roles,
        incoming.roles,
        threshold=threshold,
        exclusive=exclusive_role_matching,
        today=today,
    )
    skill_conflicts = _detect_skill_conflicts(current.skills, incoming.skills)

    analysis = ConflictAnalysis(
        title=_detect_text_conflict(TextField.TITLE, current.title, incoming.title),
        summary=_detect_text_conflict(TextField.SUMMARY, current.summary, incoming.summary),
        roles=role_conflicts,
        skills=skill_conflicts,
        stats=_stats_for(role_conflicts, skill_conflicts),
    )
    log.debug(
        "Detected %s conflicts between %s and %s: %s",
        analysis.total_conflicts,
        current.id,
        incoming.id,
        analysis.stats,
    )
    return analysis


def is_significant_conflict(
    conflict: Conflict,
    *,
    threshold: float = DEFAULT_ROLE_MATCH_THRESHOLD,
) -> bool:
    """Filter for presentation layers that want to hide low-confidence role matches."""

    if conflict.type is not ConflictType.MODIFIED:
        return True
    if isinstance(conflict, RoleConflict):
        return (conflict.match_score or 0.0) >= threshold
    return True


def _detect_text_conflict(
    section: TextField,
    current: BilingualText,
    incoming: BilingualText,
) -> TextConflict | None:
    if not texts_differ(current, incoming):
        return None
    if not (has_content(current) or has_content(incoming)):
        return None
    return TextConflict(id=section.value, section=section, current=current, incoming=incoming)


def _detect_role_conflicts(
    current: tuple[Role, ...],
    incoming: tuple[Role, ...],
    *,
    threshold: float,
    exclusive: bool,
    today: Today,
) -> tuple[RoleConflict, ...]:
    result = match_roles(current, incoming, threshold=threshold, exclusive=exclusive, today=today)
    conflicts: list[RoleConflict] = [
        RoleConflict(
            id=f"role-{pair.current.id}",
            type=ConflictType.MODIFIED,
            current=pair.current,
            incoming=pair.incoming,
            match_score=pair.score,
        )
        for pair in result.pairs
        if _roles_differ(pair.current, pair.incoming)
    ]
    conflicts.extend(
        RoleConflict(id=f"role-removed-{role.id}", type=ConflictType.REMOVED, current=role)
        for role in result.unmatched_current
    )
    conflicts.extend(
        RoleConflict(id=f"role-added-{role.id}", type=ConflictType.ADDED, incoming=role)
        for role in result.unmatched_incoming
    )
    return tuple(conflicts)


def _detect_skill_conflicts(
    current: tuple[Skill, ...],
    incoming: tuple[Skill, ...],
) -> tuple[SkillConflict, ...]:
    result = match_skills(current, incoming)
    conflicts: list[SkillConflict] = [
        SkillConflict(
            id=f"skill-{pair.current.id}",
            type=ConflictType.MODIFIED,
            current=pair.current,
            incoming=pair.incoming,
        )
        for pair in result.pairs
        if _skills_differ(pair.current, pair.incoming)
    ]
    conflicts.extend(
        SkillConflict(id=f"skill-removed-{skill.id}", type=ConflictType.REMOVED, current=skill)
        for skill in result.unmatched_current
    )
    conflicts.extend(
        SkillConflict(id=f"skill-added-{skill.id}", type=ConflictType.ADDED, incoming=skill)
        for skill in result.unmatched_incoming
    )
    return tuple(conflicts)


def _roles_differ(current: Role, incoming: Role) -> bool:
    if (
        current.title != incoming.title
        or current.company != incoming.company
        or current.location != incoming.location
        or current.start != incoming.start
        or current.end != incoming.end
        or current.is_current != incoming.is_current
        or current.visible != incoming.visible
    ):
        return True
    if texts_differ(current.description, incoming.description):
        return True
    # tag lists are compared as name sets, but a differing count still counts
    if len(current.skills) != len(incoming.skills):
        return True
    return current.skill_names != incoming.skill_names


def _skills_differ(current: Skill, incoming: Skill) -> bool:
    return current.level != incoming.level or current.years != incoming.years


def _stats_for(
    role_conflicts: tuple[RoleConflict, ...],
    skill_conflicts: tuple[SkillConflict, ...],
) -> ConflictStats:
    def count(conflicts: Sequence[RoleConflict | SkillConflict], kind: ConflictType) -> int:
        return sum(1 for conflict in conflicts if conflict.type is kind)

    return ConflictStats(
        roles_modified=count(role_conflicts, ConflictType.MODIFIED),
        roles_added=count(role_conflicts, ConflictType.ADDED),
        roles_removed=count(role_conflicts, ConflictType.REMOVED),
        skills_modified=count(skill_conflicts, ConflictType.MODIFIED),
        skills_added=count(skill_conflicts, ConflictType.ADDED),
        skills_removed=count(skill_conflicts, ConflictType.REMOVED),
    )


__all__ = ["detect_conflicts", "is_significant_conflict"]
