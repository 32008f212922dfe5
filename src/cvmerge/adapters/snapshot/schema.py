"""Wire schema for normalized CV snapshot documents (JSON, camelCase keys)."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Annotated, ClassVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from cvmerge.domain.model import Locale

log = logging.getLogger(__name__)


def parse_snapshot_date(value: object) -> object:
    """Accept partial ISO dates; anything else is left for pydantic to reject."""

    if not isinstance(value, str):
        return value
    text = value.strip()
    if not text:
        return None
    if "T" in text:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    parts = text.split("-")
    if len(parts) == 1:
        return date(int(parts[0]), 1, 1)
    if len(parts) == 2:  # noqa: PLR2004
        return date(int(parts[0]), int(parts[1]), 1)
    return date.fromisoformat(text)


PartialIsoDate = Annotated[date | None, BeforeValidator(parse_snapshot_date)]
EntityIdField = Annotated[str, Field(min_length=1, pattern=r"\S")]


class SnapshotBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    _logged_extra_keys: ClassVar[set[tuple[str, str]]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        model_name = type(self).__name__
        new_keys = {key for key in extras if (model_name, key) not in self._logged_extra_keys}
        if not new_keys:
            return
        self._logged_extra_keys.update((model_name, key) for key in new_keys)
        log.warning(
            "Snapshot %s: unmodeled keys: %s",
            model_name,
            ", ".join(sorted(new_keys)),
        )


class BilingualTextSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    sv: str | None = None
    en: str | None = None


class PersonNameSchema(SnapshotBaseModel):
    first: str | None = None
    last: str | None = None


class ContactsSchema(SnapshotBaseModel):
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    website: str | None = None


class RoleSkillSchema(SnapshotBaseModel):
    id: EntityIdField
    name: str
    level: int | None = None
    category: str | None = None


class RoleSchema(SnapshotBaseModel):
    id: EntityIdField
    title: str | None = None
    company: str | None = None
    location: str | None = None
    start: PartialIsoDate = None
    end: PartialIsoDate = None
    is_current: bool = Field(default=False, alias="isCurrent")
    description: BilingualTextSchema = Field(default_factory=BilingualTextSchema)
    skills: list[RoleSkillSchema] = Field(default_factory=list["RoleSkillSchema"])
    visible: bool = True


class SkillSchema(SnapshotBaseModel):
    id: EntityIdField
    name: str
    level: int | None = None
    years: int | None = None
    calculated_years: int | None = Field(default=None, alias="calculatedYears")
    overridden_years: int | None = Field(default=None, alias="overriddenYears")


class DocumentSchema(SnapshotBaseModel):
    id: EntityIdField
    locales: list[Locale] = Field(default_factory=lambda: [Locale.SV, Locale.EN])
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
    name: PersonNameSchema = Field(default_factory=PersonNameSchema)
    title: BilingualTextSchema = Field(default_factory=BilingualTextSchema)
    summary: BilingualTextSchema = Field(default_factory=BilingualTextSchema)
    skills: list[SkillSchema] = Field(default_factory=list["SkillSchema"])
    roles: list[RoleSchema] = Field(default_factory=list["RoleSchema"])
    contacts: ContactsSchema | None = None
    photo_data_url: str | None = Field(default=None, alias="photoDataUrl")
