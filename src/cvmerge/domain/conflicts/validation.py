"""Structural validation of snapshots entering detection or merge.

Both operations refuse to run on a malformed snapshot instead of dropping or
blanking the offending entity, so a merge never produces a partial result.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cvmerge.domain.model import BilingualText, Document, Role, RoleSkill, Skill

if TYPE_CHECKING:
    from collections.abc import Sequence


class DocumentValidationError(ValueError):
    """Raised when a snapshot is not shaped like a ``Document``."""

    def __init__(self, label: str, problems: Sequence[str]) -> None:
        self.label = label
        self.problems = tuple(problems)
        super().__init__(f"Invalid {label} document: {'; '.join(self.problems)}")


def validate_document(document: object, *, label: str = "snapshot") -> Document:
    """Return ``document`` unchanged or raise listing every structural problem."""

    if not isinstance(document, Document):
        raise DocumentValidationError(label, [f"expected Document, got {type(document).__name__}"])

    problems: list[str] = []
    _check_id(document.id, "id", problems)
    _check_bilingual(document.title, "title", problems)
    _check_bilingual(document.summary, "summary", problems)
    role_paths: dict[str, str] = {}
    skill_paths: dict[str, str] = {}

    for index, role in enumerate(document.roles):
        path = f"roles[{index}]"
        if not isinstance(role, Role):
            problems.append(f"{path}: expected Role, got {type(role).__name__}")
            continue
        _check_id(role.id, f"{path}.id", problems)
        _check_unique(role.id, f"{path}.id", role_paths, problems)
        _check_bilingual(role.description, f"{path}.description", problems)
        for tag_index, tag in enumerate(role.skills):
            tag_path = f"{path}.skills[{tag_index}]"
            if not isinstance(tag, RoleSkill):
                problems.append(f"{tag_path}: expected RoleSkill, got {type(tag).__name__}")
                continue
            _check_name(tag.name, f"{tag_path}.name", problems)

    for index, skill in enumerate(document.skills):
        path = f"skills[{index}]"
        if not isinstance(skill, Skill):
            problems.append(f"{path}: expected Skill, got {type(skill).__name__}")
            continue
        _check_id(skill.id, f"{path}.id", problems)
        _check_unique(skill.id, f"{path}.id", skill_paths, problems)
        _check_name(skill.name, f"{path}.name", problems)

    if problems:
        raise DocumentValidationError(label, problems)
    return document


def _check_id(value: object, path: str, problems: list[str]) -> None:
    if not isinstance(value, str) or not value.strip():
        problems.append(f"{path}: missing id")


def _check_unique(value: object, path: str, seen: dict[str, str], problems: list[str]) -> None:
    if not isinstance(value, str) or not value.strip():
        return
    first = seen.setdefault(value, path)
    if first != path:
        problems.append(f"{path}: duplicate id {value!r}, already used by {first}")


def _check_name(value: object, path: str, problems: list[str]) -> None:
    if not isinstance(value, str):
        problems.append(f"{path}: expected str, got {type(value).__name__}")


def _check_bilingual(value: object, path: str, problems: list[str]) -> None:
    if not isinstance(value, BilingualText):
        problems.append(f"{path}: expected BilingualText, got {type(value).__name__}")
        return
    for locale_value in (value.sv, value.en):
        if locale_value is not None and not isinstance(locale_value, str):
            problems.append(f"{path}: locale values must be strings or None")
            return
