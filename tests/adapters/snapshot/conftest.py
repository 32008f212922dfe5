"""Shared fixtures for snapshot adapter tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

from cvmerge.adapters.snapshot.schema import SnapshotBaseModel

if TYPE_CHECKING:
    from collections.abc import Iterator

FIXTURES = Path(__file__).resolve().parents[2] / "data" / "snapshots"


@pytest.fixture(autouse=True)
def reset_logged_extra_keys() -> Iterator[None]:
    SnapshotBaseModel._logged_extra_keys.clear()  # noqa: SLF001
    yield
    SnapshotBaseModel._logged_extra_keys.clear()  # noqa: SLF001


@pytest.fixture
def snapshot_payload() -> dict[str, Any]:
    return json.loads((FIXTURES / "cv.json").read_text(encoding="utf-8"))
