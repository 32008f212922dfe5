"""Conflict detection and merge engine for importing CV snapshots.

Flow for one import:
1) validate both snapshots
2) pair roles (heuristic score) and skills (name) across snapshots
3) classify differences into a ``ConflictAnalysis``
4) collect ``Resolutions`` from a person or a bulk default
5) merge into a brand-new snapshot

Every step is a pure, synchronous function of its inputs.
"""

from __future__ import annotations

from .contracts import (
    Conflict,
    ConflictAnalysis,
    ConflictKind,
    ConflictStats,
    ConflictType,
    InvalidConflictError,
    Resolution,
    Resolutions,
    RoleConflict,
    SkillConflict,
    TextConflict,
    TextField,
)
from .detect import detect_conflicts, is_significant_conflict
from .matching import (
    DEFAULT_ROLE_MATCH_THRESHOLD,
    RoleMatch,
    find_best_match,
    match_roles,
    match_skills,
    role_match_score,
)
from .merge import Clock, merge_with_resolutions
from .policy import (
    Outcome,
    accept_all_incoming,
    create_default_resolutions,
    keep_all_current,
    outcome_for,
)
from .similarity import date_ranges_overlap, has_content, texts_differ, token_similarity
from .validation import DocumentValidationError, validate_document

__all__ = [
    "DEFAULT_ROLE_MATCH_THRESHOLD",
    "Clock",
    "Conflict",
    "ConflictAnalysis",
    "ConflictKind",
    "ConflictStats",
    "ConflictType",
    "DocumentValidationError",
    "InvalidConflictError",
    "Outcome",
    "Resolution",
    "Resolutions",
    "RoleConflict",
    "RoleMatch",
    "SkillConflict",
    "TextConflict",
    "TextField",
    "accept_all_incoming",
    "create_default_resolutions",
    "date_ranges_overlap",
    "detect_conflicts",
    "find_best_match",
    "has_content",
    "is_significant_conflict",
    "keep_all_current",
    "match_roles",
    "match_skills",
    "merge_with_resolutions",
    "outcome_for",
    "role_match_score",
    "texts_differ",
    "token_similarity",
    "validate_document",
]
