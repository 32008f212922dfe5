"""Conflict contract types shared by detection, policy and merge.

This module intentionally holds only:
- the discriminant enums (conflict type, kind, resolution choice)
- the conflict records and the per-comparison analysis
- the caller-owned resolution map
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Literal, TypeAlias, assert_never

if TYPE_CHECKING:
    from cvmerge.domain.model import BilingualText, Role, Skill


class ConflictType(StrEnum):
    """How two corresponding values differ."""

    MODIFIED = "modified"
    ADDED = "added"
    REMOVED = "removed"


class ConflictKind(StrEnum):
    """Which part of the document a conflict belongs to."""

    TEXT = "text"
    ROLE = "role"
    SKILL = "skill"


class TextField(StrEnum):
    """Scalar bilingual fields compared by the detector."""

    TITLE = "title"
    SUMMARY = "summary"


class Resolution(StrEnum):
    """Caller decision for one conflict."""

    KEEP = "keep"
    ACCEPT = "accept"
    SKIP = "skip"


class InvalidConflictError(ValueError):
    """Raised when a conflict record violates its presence invariant."""


def _check_presence(
    conflict_id: str,
    conflict_type: ConflictType,
    *,
    has_current: bool,
    has_incoming: bool,
) -> None:
    match conflict_type:
        case ConflictType.MODIFIED:
            valid = has_current and has_incoming
        case ConflictType.ADDED:
            valid = has_incoming and not has_current
        case ConflictType.REMOVED:
            valid = has_current and not has_incoming
        case _:
            assert_never(conflict_type)
    if not valid:
        raise InvalidConflictError(
            f"Conflict {conflict_id!r} of type {conflict_type.value} has "
            f"current={'set' if has_current else 'missing'}, "
            f"incoming={'set' if has_incoming else 'missing'}"
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class TextConflict:
    """Difference in a scalar bilingual field; always ``modified``."""

    id: str
    section: TextField
    current: BilingualText
    incoming: BilingualText
    type: Literal[ConflictType.MODIFIED] = ConflictType.MODIFIED
    kind: Literal[ConflictKind.TEXT] = ConflictKind.TEXT


@dataclass(frozen=True, slots=True, kw_only=True)
class RoleConflict:
    """Difference between two matched roles, or a role present on one side only."""

    id: str
    type: ConflictType
    current: Role | None = None
    incoming: Role | None = None
    match_score: float | None = None
    kind: Literal[ConflictKind.ROLE] = ConflictKind.ROLE

    def __post_init__(self) -> None:
        _check_presence(
            self.id,
            self.type,
            has_current=self.current is not None,
            has_incoming=self.incoming is not None,
        )
        if self.match_score is not None and not 0.0 <= self.match_score <= 1.0:
            raise InvalidConflictError(f"Match score out of range for {self.id!r}")


@dataclass(frozen=True, slots=True, kw_only=True)
class SkillConflict:
    """Difference between two same-named skills, or a skill present on one side only."""

    id: str
    type: ConflictType
    current: Skill | None = None
    incoming: Skill | None = None
    kind: Literal[ConflictKind.SKILL] = ConflictKind.SKILL

    def __post_init__(self) -> None:
        _check_presence(
            self.id,
            self.type,
            has_current=self.current is not None,
            has_incoming=self.incoming is not None,
        )


Conflict: TypeAlias = TextConflict | RoleConflict | SkillConflict


@dataclass(frozen=True, slots=True)
class ConflictStats:
    roles_modified: int = 0
    roles_added: int = 0
    roles_removed: int = 0
    skills_modified: int = 0
    skills_added: int = 0
    skills_removed: int = 0

    @property
    def total_roles(self) -> int:
        return self.roles_modified + self.roles_added + self.roles_removed

    @property
    def total_skills(self) -> int:
        return self.skills_modified + self.skills_added + self.skills_removed


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictAnalysis:
    """Result of comparing two snapshots. Created fresh per comparison."""

    title: TextConflict | None = None
    summary: TextConflict | None = None
    roles: tuple[RoleConflict, ...] = ()
    skills: tuple[SkillConflict, ...] = ()
    stats: ConflictStats = field(default_factory=ConflictStats)

    @property
    def total_conflicts(self) -> int:
        return (
            (1 if self.title is not None else 0)
            + (1 if self.summary is not None else 0)
            + len(self.roles)
            + len(self.skills)
        )

    @property
    def has_conflicts(self) -> bool:
        return self.total_conflicts > 0

    def conflicts(self) -> Iterator[Conflict]:
        """Yield every conflict in section order: title, summary, roles, skills."""

        if self.title is not None:
            yield self.title
        if self.summary is not None:
            yield self.summary
        yield from self.roles
        yield from self.skills

    def conflict_for(self, conflict_id: str) -> Conflict | None:
        for conflict in self.conflicts():
            if conflict.id == conflict_id:
                return conflict
        return None


@dataclass(slots=True)
class Resolutions:
    """Caller decisions keyed by conflict id, built up incrementally.

    Conflicts without a recorded decision fall back to the no-op branch of the
    policy table when merging.
    """

    title: Resolution | None = None
    summary: Resolution | None = None
    roles: dict[str, Resolution] = field(default_factory=dict[str, Resolution])
    skills: dict[str, Resolution] = field(default_factory=dict[str, Resolution])

    def choose(self, conflict: Conflict, resolution: Resolution) -> None:
        match conflict:
            case TextConflict(section=TextField.TITLE):
                self.title = resolution
            case TextConflict(section=TextField.SUMMARY):
                self.summary = resolution
            case RoleConflict():
                self.roles[conflict.id] = resolution
            case SkillConflict():
                self.skills[conflict.id] = resolution

    def choice_for(self, conflict: Conflict) -> Resolution | None:
        match conflict:
            case TextConflict(section=TextField.TITLE):
                return self.title
            case TextConflict(section=TextField.SUMMARY):
                return self.summary
            case RoleConflict():
                return self.roles.get(conflict.id)
            case SkillConflict():
                return self.skills.get(conflict.id)
        return None
