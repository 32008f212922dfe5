"""Public domain model surface."""

from __future__ import annotations

from cvmerge.domain.model.cv import Document, Role, RoleSkill, Skill
from cvmerge.domain.model.enums import Locale
from cvmerge.domain.model.primitives import (
    BilingualText,
    Contacts,
    EntityId,
    PersonName,
    SkillLevel,
    Years,
)

__all__ = [  # noqa: RUF022
    # document
    "Document",
    "Role",
    "RoleSkill",
    "Skill",
    # values
    "BilingualText",
    "Contacts",
    "PersonName",
    # enums
    "Locale",
    # primitives
    "EntityId",
    "SkillLevel",
    "Years",
]
