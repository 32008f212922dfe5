"""Translate snapshot JSON payloads to and from the domain model."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from cvmerge.domain.conflicts.validation import DocumentValidationError
from cvmerge.domain.model import (
    BilingualText,
    Contacts,
    Document,
    PersonName,
    Role,
    RoleSkill,
    Skill,
)

from .schema import (
    BilingualTextSchema,
    ContactsSchema,
    DocumentSchema,
    PersonNameSchema,
    RoleSchema,
    RoleSkillSchema,
    SkillSchema,
)

if TYPE_CHECKING:
    from collections.abc import Mapping


def parse_document(payload: Mapping[str, Any], *, label: str = "snapshot") -> Document:
    """Validate a JSON-like payload and return the domain snapshot.

    Raises ``DocumentValidationError`` listing every schema violation.
    """

    try:
        schema = DocumentSchema.model_validate(payload)
    except ValidationError as exc:
        problems = [
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
            for error in exc.errors()
        ]
        raise DocumentValidationError(label, problems) from exc
    return translate_document(schema)


def translate_document(schema: DocumentSchema) -> Document:
    return Document(
        id=schema.id,
        locales=tuple(schema.locales),
        updated_at=schema.updated_at,
        name=PersonName(first=schema.name.first, last=schema.name.last),
        title=_translate_text(schema.title),
        summary=_translate_text(schema.summary),
        skills=tuple(_translate_skill(skill) for skill in schema.skills),
        roles=tuple(_translate_role(role) for role in schema.roles),
        contacts=_translate_contacts(schema.contacts),
        photo_data_url=schema.photo_data_url,
    )


def _translate_text(schema: BilingualTextSchema) -> BilingualText:
    return BilingualText(sv=schema.sv, en=schema.en)


def _translate_contacts(schema: ContactsSchema | None) -> Contacts:
    if schema is None:
        return Contacts()
    return Contacts(
        email=schema.email,
        phone=schema.phone,
        address=schema.address,
        website=schema.website,
    )


def _translate_role(schema: RoleSchema) -> Role:
    return Role(
        id=schema.id,
        title=schema.title,
        company=schema.company,
        location=schema.location,
        start=schema.start,
        end=schema.end,
        is_current=schema.is_current,
        description=_translate_text(schema.description),
        skills=tuple(
            RoleSkill(id=tag.id, name=tag.name, level=tag.level, category=tag.category)
            for tag in schema.skills
        ),
        visible=schema.visible,
    )


def _translate_skill(schema: SkillSchema) -> Skill:
    return Skill(
        id=schema.id,
        name=schema.name,
        level=schema.level,
        years=schema.years,
        calculated_years=schema.calculated_years,
        overridden_years=schema.overridden_years,
    )


def document_to_payload(document: Document) -> dict[str, Any]:
    """Serialise ``document`` with the same camelCase keys ``parse_document`` reads."""

    schema = DocumentSchema(
        id=document.id,
        locales=list(document.locales),
        updated_at=document.updated_at,
        name=PersonNameSchema(first=document.name.first, last=document.name.last),
        title=BilingualTextSchema(sv=document.title.sv, en=document.title.en),
        summary=BilingualTextSchema(sv=document.summary.sv, en=document.summary.en),
        skills=[
            SkillSchema(
                id=skill.id,
                name=skill.name,
                level=skill.level,
                years=skill.years,
                calculated_years=skill.calculated_years,
                overridden_years=skill.overridden_years,
            )
            for skill in document.skills
        ],
        roles=[_role_schema(role) for role in document.roles],
        contacts=ContactsSchema(
            email=document.contacts.email,
            phone=document.contacts.phone,
            address=document.contacts.address,
            website=document.contacts.website,
        ),
        photo_data_url=document.photo_data_url,
    )
    return schema.model_dump(mode="json", by_alias=True)


def _role_schema(role: Role) -> RoleSchema:
    return RoleSchema(
        id=role.id,
        title=role.title,
        company=role.company,
        location=role.location,
        start=role.start,
        end=role.end,
        is_current=role.is_current,
        description=BilingualTextSchema(sv=role.description.sv, en=role.description.en),
        skills=[
            RoleSkillSchema(id=tag.id, name=tag.name, level=tag.level, category=tag.category)
            for tag in role.skills
        ],
        visible=role.visible,
    )
