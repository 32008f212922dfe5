"""Snapshot model for a bilingual CV document.

A ``Document`` is one complete version of the record. Entities are frozen and
collections are tuples, so producing a new snapshot always means building new
values (``dataclasses.replace``) rather than mutating an existing one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cvmerge.domain.model.enums import Locale
from cvmerge.domain.model.primitives import BilingualText, Contacts, PersonName

if TYPE_CHECKING:
    from datetime import date, datetime

    from cvmerge.domain.model.primitives import EntityId, SkillLevel, Years


@dataclass(frozen=True, slots=True, kw_only=True)
class RoleSkill:
    """Technology tag referenced by a role; ``name`` is the matching key."""

    id: EntityId
    name: str
    level: SkillLevel | None = None
    category: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Role:
    """Work-history entry (assignment, employment)."""

    id: EntityId
    title: str | None = None
    company: str | None = None
    location: str | None = None
    start: date | None = None
    end: date | None = None
    is_current: bool = False
    description: BilingualText = field(default_factory=BilingualText)
    skills: tuple[RoleSkill, ...] = ()
    visible: bool = True

    @property
    def skill_names(self) -> frozenset[str]:
        return frozenset(skill.name.lower() for skill in self.skills)


@dataclass(frozen=True, slots=True, kw_only=True)
class Skill:
    """Skill entry with layered years of experience.

    ``years`` is the value carried by the imported snapshot, ``calculated_years``
    is derived from role durations and ``overridden_years`` is a manual user
    correction. Always read the effective value through ``effective_years``.
    """

    id: EntityId
    name: str
    level: SkillLevel | None = None
    years: Years | None = None
    calculated_years: Years | None = None
    overridden_years: Years | None = None

    @property
    def match_key(self) -> str:
        return self.name.lower()

    @property
    def effective_years(self) -> Years | None:
        if self.overridden_years is not None:
            return self.overridden_years
        if self.calculated_years is not None:
            return self.calculated_years
        return self.years


@dataclass(frozen=True, slots=True, kw_only=True)
class Document:
    """One timestamped snapshot of the CV."""

    id: EntityId
    locales: tuple[Locale, ...] = (Locale.SV, Locale.EN)
    updated_at: datetime | None = None
    name: PersonName = field(default_factory=PersonName)
    title: BilingualText = field(default_factory=BilingualText)
    summary: BilingualText = field(default_factory=BilingualText)
    skills: tuple[Skill, ...] = ()
    roles: tuple[Role, ...] = ()
    contacts: Contacts = field(default_factory=Contacts)
    photo_data_url: str | None = None
