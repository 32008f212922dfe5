"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from cvmerge.config import MergeConfig
from cvmerge.domain.conflicts import (
    ConflictAnalysis,
    Resolutions,
    detect_conflicts,
    keep_all_current,
    merge_with_resolutions,
)
from cvmerge.domain.conflicts.merge import Clock, utc_now
from cvmerge.domain.conflicts.validation import validate_document

if TYPE_CHECKING:
    from cvmerge.domain.model import Document
    from cvmerge.domain.ports import DocumentRepository

ResolutionChooser = Callable[[ConflictAnalysis], Resolutions]


log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ImportResult:
    document: Document
    analysis: ConflictAnalysis
    resolutions: Resolutions


def import_document(
    incoming: Document,
    *,
    repository: DocumentRepository,
    choose_resolutions: ResolutionChooser = keep_all_current,
    config: MergeConfig | None = None,
    clock: Clock = utc_now,
) -> ImportResult:
    """Reconcile ``incoming`` with the stored snapshot and save the result.

    The stored snapshot's ``updated_at`` is passed back to the repository so a
    concurrent change in between raises ``StaleDocumentError`` instead of being
    overwritten.
    """

    effective_config = config or MergeConfig()
    current = repository.load()
    if current is None:
        validate_document(incoming, label="incoming")
        log.info("No stored document, importing %s as is", incoming.id)
        repository.save(incoming, expected_updated_at=None)
        return ImportResult(
            document=incoming,
            analysis=ConflictAnalysis(),
            resolutions=Resolutions(),
        )

    analysis = detect_conflicts(
        current,
        incoming,
        threshold=effective_config.role_match_threshold,
        exclusive_role_matching=effective_config.exclusive_role_matching,
    )
    resolutions = choose_resolutions(analysis) if analysis.has_conflicts else Resolutions()
    log.info(
        "Importing %s over %s: conflicts=%s, stats=%s",
        incoming.id,
        current.id,
        analysis.total_conflicts,
        analysis.stats,
    )

    merged = merge_with_resolutions(current, incoming, analysis, resolutions, clock=clock)
    repository.save(merged, expected_updated_at=current.updated_at)

    log.info(
        f"Finished import: roles={len(merged.roles)}, skills={len(merged.skills)}, "
        f"updated_at={merged.updated_at}"
    )
    return ImportResult(document=merged, analysis=analysis, resolutions=resolutions)
