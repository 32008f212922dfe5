from __future__ import annotations

import pytest

from cvmerge.domain.conflicts import (
    ConflictType,
    Outcome,
    Resolution,
    accept_all_incoming,
    create_default_resolutions,
    detect_conflicts,
    keep_all_current,
    outcome_for,
)
from cvmerge.domain.model import BilingualText
from tests.helpers.documents import fixed_today, make_document, make_role, make_skill


@pytest.mark.parametrize(
    ("conflict_type", "resolution", "expected"),
    [
        (ConflictType.MODIFIED, Resolution.ACCEPT, Outcome.INCOMING),
        (ConflictType.MODIFIED, Resolution.KEEP, Outcome.CURRENT),
        (ConflictType.MODIFIED, Resolution.SKIP, Outcome.CURRENT),
        (ConflictType.MODIFIED, None, Outcome.CURRENT),
        (ConflictType.ADDED, Resolution.ACCEPT, Outcome.INCOMING),
        (ConflictType.ADDED, Resolution.KEEP, Outcome.OMIT),
        (ConflictType.ADDED, Resolution.SKIP, Outcome.OMIT),
        (ConflictType.ADDED, None, Outcome.OMIT),
        (ConflictType.REMOVED, Resolution.ACCEPT, Outcome.OMIT),
        (ConflictType.REMOVED, Resolution.KEEP, Outcome.CURRENT),
        (ConflictType.REMOVED, Resolution.SKIP, Outcome.CURRENT),
        (ConflictType.REMOVED, None, Outcome.CURRENT),
    ],
)
def test_outcome_for_follows_policy_table(
    conflict_type: ConflictType,
    resolution: Resolution | None,
    expected: Outcome,
) -> None:
    assert outcome_for(conflict_type, resolution) is expected


def _analysis():  # noqa: ANN202
    current = make_document(
        title=BilingualText(sv="Utvecklare", en="Developer"),
        roles=[make_role("r1")],
        skills=[make_skill("s1", "Go")],
    )
    incoming = make_document(
        title=BilingualText(sv="Arkitekt", en="Architect"),
        roles=[make_role("x1", location="Göteborg")],
        skills=[make_skill("x2", "Rust")],
    )
    return detect_conflicts(current, incoming, today=fixed_today)


def test_accept_all_incoming_covers_every_conflict() -> None:
    analysis = _analysis()

    resolutions = accept_all_incoming(analysis)

    assert resolutions.title is Resolution.ACCEPT
    assert resolutions.summary is None
    assert resolutions.roles == {"role-r1": Resolution.ACCEPT}
    assert resolutions.skills == {
        "skill-removed-s1": Resolution.ACCEPT,
        "skill-added-x2": Resolution.ACCEPT,
    }


def test_keep_all_current_covers_every_conflict() -> None:
    analysis = _analysis()

    resolutions = keep_all_current(analysis)

    assert resolutions.title is Resolution.KEEP
    assert set(resolutions.roles.values()) == {Resolution.KEEP}
    assert set(resolutions.skills.values()) == {Resolution.KEEP}
    assert len(resolutions.roles) + len(resolutions.skills) + 1 == analysis.total_conflicts


def test_create_default_resolutions_uses_given_choice() -> None:
    resolutions = create_default_resolutions(_analysis(), Resolution.SKIP)

    assert resolutions.title is Resolution.SKIP
    assert set(resolutions.skills.values()) == {Resolution.SKIP}


def test_bulk_defaults_on_clean_analysis_are_empty() -> None:
    document = make_document(roles=[make_role("r1")])
    analysis = detect_conflicts(document, document, today=fixed_today)

    resolutions = accept_all_incoming(analysis)

    assert resolutions.title is None
    assert resolutions.roles == {}
    assert resolutions.skills == {}
