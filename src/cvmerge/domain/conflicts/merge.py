"""Apply resolutions to produce a merged snapshot.

The merge starts from ``current`` and only takes incoming values where a
resolution (or the fill-if-empty rule for undetected fields) says so. Neither
input is mutated; a new ``Document`` is returned.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING, Protocol, TypeVar

from .policy import Outcome, outcome_for
from .validation import validate_document

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cvmerge.domain.model import BilingualText, Document, Role, Skill

    from .contracts import (
        ConflictAnalysis,
        Resolutions,
        RoleConflict,
        SkillConflict,
        TextConflict,
    )

log = logging.getLogger(__name__)


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def utc_now() -> datetime:
    return datetime.now(UTC)


def merge_with_resolutions(
    current: Document,
    incoming: Document,
    analysis: ConflictAnalysis,
    resolutions: Resolutions,
    *,
    clock: Clock = utc_now,
) -> Document:
    """Build the merged snapshot for ``analysis`` under ``resolutions``.

    Conflicts missing from ``resolutions`` keep the current state (modified,
    removed) or are left out (added). Raises ``DocumentValidationError`` when
    either snapshot is malformed.
    """

    validate_document(current, label="current")
    validate_document(incoming, label="incoming")

    merged = replace(
        current,
        name=incoming.name if current.name.is_empty else current.name,
        contacts=(
            incoming.contacts
            if current.contacts.is_empty and not incoming.contacts.is_empty
            else current.contacts
        ),
        photo_data_url=current.photo_data_url or incoming.photo_data_url,
        locales=current.locales or incoming.locales,
        title=_merge_text(current.title, analysis.title, resolutions),
        summary=_merge_text(current.summary, analysis.summary, resolutions),
        roles=_merge_roles(current.roles, analysis.roles, resolutions),
        skills=_merge_skills(current.skills, analysis.skills, resolutions),
        updated_at=clock(),
    )
    log.debug(
        "Merged %s: roles=%s, skills=%s, resolved=%s/%s",
        merged.id,
        len(merged.roles),
        len(merged.skills),
        len(resolutions.roles) + len(resolutions.skills),
        analysis.total_conflicts,
    )
    return merged


def _merge_text(
    value: BilingualText,
    conflict: TextConflict | None,
    resolutions: Resolutions,
) -> BilingualText:
    if conflict is None:
        return value
    outcome = outcome_for(conflict.type, resolutions.choice_for(conflict))
    return conflict.incoming if outcome is Outcome.INCOMING else conflict.current


def _merge_roles(
    roles: Sequence[Role],
    conflicts: Sequence[RoleConflict],
    resolutions: Resolutions,
) -> tuple[Role, ...]:
    merged: list[Role] = []
    handled_ids: set[str] = set()
    for conflict in conflicts:
        if conflict.current is not None:
            handled_ids.add(conflict.current.id)
        outcome = outcome_for(conflict.type, resolutions.choice_for(conflict))
        chosen = _chosen(conflict.current, conflict.incoming, outcome)
        if chosen is not None:
            merged.append(chosen)

    merged.extend(role for role in roles if role.id not in handled_ids)
    # most recent first; a missing start sorts as the earliest date
    return tuple(sorted(merged, key=lambda role: role.start or date.min, reverse=True))


def _merge_skills(
    skills: Sequence[Skill],
    conflicts: Sequence[SkillConflict],
    resolutions: Resolutions,
) -> tuple[Skill, ...]:
    merged: list[Skill] = []
    handled_ids: set[str] = set()
    for conflict in conflicts:
        if conflict.current is not None:
            handled_ids.add(conflict.current.id)
        outcome = outcome_for(conflict.type, resolutions.choice_for(conflict))
        if outcome is Outcome.INCOMING and conflict.current is not None:
            merged.append(_accept_skill(conflict.current, conflict.incoming))
            continue
        chosen = _chosen(conflict.current, conflict.incoming, outcome)
        if chosen is not None:
            merged.append(chosen)

    merged.extend(skill for skill in skills if skill.id not in handled_ids)
    return tuple(sorted(merged, key=lambda skill: skill.name.casefold()))


def _accept_skill(current: Skill, incoming: Skill | None) -> Skill:
    """Take the incoming skill but keep the user's override and calculated years."""

    if incoming is None:
        return current
    return replace(
        incoming,
        overridden_years=current.overridden_years,
        calculated_years=current.calculated_years,
    )


TEntity = TypeVar("TEntity")


def _chosen(
    current: TEntity | None,
    incoming: TEntity | None,
    outcome: Outcome,
) -> TEntity | None:
    if outcome is Outcome.INCOMING:
        return incoming
    if outcome is Outcome.CURRENT:
        return current
    return None
