"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Locale(StrEnum):
    SV = "sv"
    EN = "en"
