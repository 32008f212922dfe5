"""Domain primitives: scalar aliases + small value objects.

Scalar aliases may be promoted to proper value objects later without changing imports.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from cvmerge.domain.model.enums import Locale

if TYPE_CHECKING:
    from typing import Self

EntityId: TypeAlias = str
SkillLevel: TypeAlias = int
Years: TypeAlias = int


def _trimmed(value: str | None) -> str:
    return (value or "").strip()


@dataclass(frozen=True, slots=True)
class BilingualText:
    """A text value kept in both supported locales.

    Either locale may be missing. Comparisons ignore surrounding whitespace and
    treat ``None`` and ``""`` as the same value.
    """

    sv: str | None = None
    en: str | None = None

    @classmethod
    def empty(cls) -> Self:
        return cls()

    def value_for(self, locale: Locale) -> str | None:
        return self.sv if locale is Locale.SV else self.en

    def differs_from(self, other: BilingualText) -> bool:
        return _trimmed(self.sv) != _trimmed(other.sv) or _trimmed(self.en) != _trimmed(other.en)

    @property
    def has_content(self) -> bool:
        return bool(_trimmed(self.sv) or _trimmed(self.en))


@dataclass(frozen=True, slots=True)
class PersonName:
    first: str | None = None
    last: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (_trimmed(self.first) or _trimmed(self.last))


@dataclass(frozen=True, slots=True)
class Contacts:
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    website: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.email or self.phone or self.address or self.website)
