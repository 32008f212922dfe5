from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from cvmerge.domain.conflicts import (
    ConflictType,
    DocumentValidationError,
    RoleConflict,
    TextConflict,
    TextField,
    detect_conflicts,
    is_significant_conflict,
)
from cvmerge.domain.model import BilingualText, RoleSkill
from tests.helpers.documents import fixed_today, make_document, make_role, make_skill


def test_detect_conflicts_is_empty_for_identical_snapshots() -> None:
    document = make_document(
        roles=[make_role("r1"), make_role("r2", start=date(2018, 1, 1), end=date(2019, 6, 1))],
        skills=[make_skill("s1", "Python"), make_skill("s2", "Go", level=2, years=1)],
    )

    analysis = detect_conflicts(document, document, today=fixed_today)

    assert analysis.has_conflicts is False
    assert analysis.total_conflicts == 0
    assert list(analysis.conflicts()) == []


def test_detect_conflicts_ignores_regenerated_entity_ids() -> None:
    current = make_document(roles=[make_role("r1")], skills=[make_skill("s1", "Python")])
    incoming = make_document(roles=[make_role("x1")], skills=[make_skill("x9", "python")])

    analysis = detect_conflicts(current, incoming, today=fixed_today)

    assert analysis.has_conflicts is False


def test_detect_conflicts_reports_title_when_one_locale_differs() -> None:
    current = make_document(title=BilingualText(sv="Utvecklare", en=None))
    incoming = make_document(title=BilingualText(sv="Utvecklare", en="Developer"))

    analysis = detect_conflicts(current, incoming, today=fixed_today)

    assert analysis.total_conflicts == 1
    assert analysis.title == TextConflict(
        id="title",
        section=TextField.TITLE,
        current=current.title,
        incoming=incoming.title,
    )
    assert analysis.summary is None


def test_detect_conflicts_never_reports_two_empty_texts() -> None:
    current = make_document(summary=BilingualText(sv=None, en=None))
    incoming = make_document(summary=BilingualText(sv="   ", en=""))

    analysis = detect_conflicts(current, incoming, today=fixed_today)

    assert analysis.summary is None


def test_detect_conflicts_reports_role_with_shifted_dates_as_modified() -> None:
    current = make_document(roles=[make_role("r1", start=date(2020, 1, 1), end=date(2021, 1, 1))])
    incoming = make_document(
        roles=[make_role("x1", start=date(2020, 2, 1), end=date(2021, 2, 1))]
    )

    analysis = detect_conflicts(current, incoming, today=fixed_today)

    assert len(analysis.roles) == 1
    conflict = analysis.roles[0]
    assert conflict.id == "role-r1"
    assert conflict.type is ConflictType.MODIFIED
    assert conflict.current is current.roles[0]
    assert conflict.incoming is incoming.roles[0]
    assert conflict.match_score == pytest.approx(0.875)
    assert analysis.stats.roles_modified == 1


def test_detect_conflicts_reports_unmatched_roles_as_added_and_removed() -> None:
    old_role = make_role(
        "r1",
        title="Librarian",
        company="City Library",
        start=date(2010, 1, 1),
        end=date(2012, 1, 1),
    )
    new_role = make_role("x1")
    current = make_document(roles=[old_role])
    incoming = make_document(roles=[new_role])

    analysis = detect_conflicts(current, incoming, today=fixed_today)

    assert [(c.id, c.type) for c in analysis.roles] == [
        ("role-removed-r1", ConflictType.REMOVED),
        ("role-added-x1", ConflictType.ADDED),
    ]
    assert analysis.roles[0].match_score is None
    assert analysis.stats.roles_removed == 1
    assert analysis.stats.roles_added == 1


def test_detect_conflicts_reports_incoming_only_role_as_added() -> None:
    current = make_document()
    incoming = make_document(roles=[make_role("x1")])

    analysis = detect_conflicts(current, incoming, today=fixed_today)

    assert analysis.roles == (
        RoleConflict(id="role-added-x1", type=ConflictType.ADDED, incoming=incoming.roles[0]),
    )


@pytest.mark.parametrize(
    ("current_tags", "incoming_tags", "expected"),
    [
        (("Python", "Django"), ("Django", "Python"), 0),
        (("Python", "Django"), ("python", "DJANGO"), 0),
        (("Python", "Django"), ("Python", "Flask"), 1),
        (("Python", "Django"), ("Python",), 1),
        (("Python", "python"), ("Python",), 1),
    ],
)
def test_detect_conflicts_compares_role_tags_as_name_sets(
    current_tags: tuple[str, ...],
    incoming_tags: tuple[str, ...],
    expected: int,
) -> None:
    current = make_document(roles=[make_role("r1", tags=current_tags)])
    incoming = make_document(roles=[make_role("r1", tags=incoming_tags)])

    analysis = detect_conflicts(current, incoming, today=fixed_today)

    assert len(analysis.roles) == expected


@pytest.mark.parametrize(
    "overrides",
    [
        {"location": "Stockholm"},
        {"visible": False},
        {"is_current": True},
        {"description": BilingualText(sv="Utvecklade tjänster", en="Built APIs")},
    ],
)
def test_detect_conflicts_compares_every_role_field(overrides: dict[str, object]) -> None:
    current = make_document(roles=[make_role("r1")])
    incoming = make_document(roles=[make_role("r1", **overrides)])

    analysis = detect_conflicts(current, incoming, today=fixed_today)

    assert [c.type for c in analysis.roles] == [ConflictType.MODIFIED]
    assert analysis.roles[0].match_score == 1.0


def test_detect_conflicts_skills_with_equal_level_and_years_do_not_conflict() -> None:
    current = make_document(skills=[make_skill("s1", "React", level=3, years=3)])
    incoming = make_document(
        skills=[make_skill("x1", "React", level=3, years=3, calculated_years=9)]
    )

    analysis = detect_conflicts(current, incoming, today=fixed_today)

    assert analysis.skills == ()


@pytest.mark.parametrize("overrides", [{"level": 5}, {"years": 8}, {"level": None}])
def test_detect_conflicts_reports_one_modified_skill(overrides: dict[str, object]) -> None:
    current = make_document(skills=[make_skill("s1", "React", level=3, years=3)])
    incoming = make_document(
        skills=[replace(make_skill("x1", "React", level=3, years=3), **overrides)]
    )

    analysis = detect_conflicts(current, incoming, today=fixed_today)

    assert [(c.id, c.type) for c in analysis.skills] == [("skill-s1", ConflictType.MODIFIED)]
    assert analysis.stats.skills_modified == 1


def test_detect_conflicts_reports_skills_only_on_one_side() -> None:
    current = make_document(skills=[make_skill("s1", "Go")])
    incoming = make_document(skills=[make_skill("x1", "Rust")])

    analysis = detect_conflicts(current, incoming, today=fixed_today)

    assert [(c.id, c.type) for c in analysis.skills] == [
        ("skill-removed-s1", ConflictType.REMOVED),
        ("skill-added-x1", ConflictType.ADDED),
    ]
    assert analysis.stats.skills_removed == 1
    assert analysis.stats.skills_added == 1


def test_detect_conflicts_counts_every_section() -> None:
    current = make_document(
        title=BilingualText(sv="Utvecklare", en="Developer"),
        roles=[make_role("r1")],
        skills=[make_skill("s1", "Go"), make_skill("s2", "Python")],
    )
    incoming = make_document(
        title=BilingualText(sv="Arkitekt", en="Architect"),
        roles=[make_role("x1", location="Malmö"), make_role("x2", start=date(2010, 1, 1))],
        skills=[make_skill("x3", "Python")],
    )

    analysis = detect_conflicts(current, incoming, today=fixed_today)

    assert analysis.total_conflicts == 4
    assert analysis.has_conflicts is True
    assert analysis.stats.total_roles == 2
    assert analysis.stats.total_skills == 1
    assert [c.id for c in analysis.conflicts()] == [
        "title",
        "role-r1",
        "role-added-x2",
        "skill-removed-s1",
    ]


def test_detect_conflicts_exclusive_matching_reports_second_claimant_as_removed() -> None:
    current = make_document(
        roles=[
            make_role("r1", start=date(2020, 1, 1), end=date(2021, 1, 1)),
            make_role("r2", start=date(2020, 3, 1), end=date(2020, 12, 1)),
        ]
    )
    incoming = make_document(
        roles=[make_role("x1", start=date(2020, 2, 1), end=date(2021, 2, 1))]
    )

    exclusive = detect_conflicts(current, incoming, today=fixed_today)
    legacy = detect_conflicts(current, incoming, exclusive_role_matching=False, today=fixed_today)

    assert [c.id for c in exclusive.roles] == ["role-r1", "role-removed-r2"]
    assert [c.id for c in legacy.roles] == ["role-r1", "role-r2"]
    assert legacy.roles[1].incoming is incoming.roles[0]


def test_detect_conflicts_threshold_controls_pairing() -> None:
    current = make_document(roles=[make_role("r1", start=date(2020, 1, 1), end=date(2021, 1, 1))])
    incoming = make_document(
        roles=[make_role("x1", start=date(2020, 2, 1), end=date(2021, 2, 1))]
    )

    analysis = detect_conflicts(current, incoming, threshold=0.9, today=fixed_today)

    assert [c.type for c in analysis.roles] == [ConflictType.REMOVED, ConflictType.ADDED]


def test_detect_conflicts_is_deterministic() -> None:
    current = make_document(
        roles=[make_role("r1"), make_role("r2", title="Architect", start=date(2015, 1, 1))],
        skills=[make_skill("s1", "Go")],
    )
    incoming = make_document(
        roles=[make_role("x1", title="Lead"), make_role("x2", title="Architect")],
        skills=[make_skill("x3", "go", years=1)],
    )

    first = detect_conflicts(current, incoming, today=fixed_today)
    second = detect_conflicts(current, incoming, today=fixed_today)

    assert first == second


def test_detect_conflicts_rejects_role_without_id() -> None:
    current = make_document(roles=[make_role("")])

    with pytest.raises(DocumentValidationError) as exc:
        detect_conflicts(current, make_document(), today=fixed_today)

    assert "roles[0].id" in str(exc.value)
    assert exc.value.label == "current"


def test_detect_conflicts_rejects_malformed_bilingual_field() -> None:
    incoming = make_document(summary="Experienced developer")  # type: ignore[arg-type]

    with pytest.raises(DocumentValidationError) as exc:
        detect_conflicts(make_document(), incoming, today=fixed_today)

    assert "summary" in str(exc.value)
    assert exc.value.label == "incoming"


def test_detect_conflicts_rejects_role_tag_of_wrong_type() -> None:
    role = make_role("r1", skills=(RoleSkill(id="t1", name="Python"), "Django"))

    with pytest.raises(DocumentValidationError):
        detect_conflicts(make_document(roles=[role]), make_document(), today=fixed_today)


def test_is_significant_conflict_filters_weak_role_matches() -> None:
    role = make_role("r1")
    weak = RoleConflict(
        id="role-r1", type=ConflictType.MODIFIED, current=role, incoming=role, match_score=0.3
    )
    strong = RoleConflict(
        id="role-r1", type=ConflictType.MODIFIED, current=role, incoming=role, match_score=0.8
    )
    added = RoleConflict(id="role-added-r1", type=ConflictType.ADDED, incoming=role)

    assert is_significant_conflict(weak) is False
    assert is_significant_conflict(weak, threshold=0.25) is True
    assert is_significant_conflict(strong) is True
    assert is_significant_conflict(added) is True


def test_detect_conflicts_keeps_same_id_roles_paired() -> None:
    current = make_document(roles=[make_role("b", end=date(2021, 6, 1)), make_role("a")])
    incoming = make_document(roles=[make_role("a")])

    analysis = detect_conflicts(current, incoming, today=fixed_today)

    assert [c.id for c in analysis.roles] == ["role-removed-b"]


@pytest.mark.parametrize(
    ("document_kwargs", "path"),
    [
        ({"roles": [make_role("dup"), make_role("dup", company="Globex")]}, "roles[1].id"),
        ({"skills": [make_skill("dup", "Go"), make_skill("dup", "Rust")]}, "skills[1].id"),
    ],
)
def test_detect_conflicts_rejects_duplicate_entity_ids(
    document_kwargs: dict[str, object], path: str
) -> None:
    current = make_document(**document_kwargs)

    with pytest.raises(DocumentValidationError) as exc:
        detect_conflicts(current, make_document(), today=fixed_today)

    assert any(
        problem.startswith(path) and "duplicate" in problem for problem in exc.value.problems
    )
