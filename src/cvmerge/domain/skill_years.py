"""Derive years of experience per skill from the roles that use it."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from cvmerge.domain.conflicts.similarity import utc_today

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import date

    from cvmerge.domain.conflicts.similarity import Today
    from cvmerge.domain.model import Role, Skill


def _month_index(value: date) -> int:
    return value.year * 12 + value.month - 1


def calculate_skill_years(
    skill_name: str,
    roles: Iterable[Role],
    *,
    today: Today = utc_today,
) -> int:
    """Whole years covered by roles tagged with ``skill_name``.

    Months are counted once even when roles overlap. An open-ended role runs
    until ``today``; roles without a start are ignored.
    """

    key = skill_name.lower()
    months: set[int] = set()
    for role in roles:
        if key not in role.skill_names or role.start is None:
            continue
        end = role.end if role.end is not None else today()
        months.update(range(_month_index(role.start), _month_index(end) + 1))
    # half-up rounding: six months count as a year
    return (len(months) + 6) // 12


def with_calculated_years(
    skills: Sequence[Skill],
    roles: Sequence[Role],
    *,
    today: Today = utc_today,
) -> tuple[Skill, ...]:
    """Return copies of ``skills`` with ``calculated_years`` refreshed."""

    return tuple(
        replace(skill, calculated_years=calculate_skill_years(skill.name, roles, today=today))
        for skill in skills
    )
