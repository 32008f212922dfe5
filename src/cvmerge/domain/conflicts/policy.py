"""Resolution policy for detected conflicts.

The effect of a decision depends only on the conflict type:

============  =================  ==========================
type          accept             keep / skip / missing
============  =================  ==========================
modified      incoming value     current value
added         include incoming   omit
removed       omit (deletion)    keep current
============  =================  ==========================
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, assert_never

from .contracts import ConflictType, Resolution, Resolutions

if TYPE_CHECKING:
    from .contracts import ConflictAnalysis


class Outcome(StrEnum):
    """What the merge engine does with one conflict."""

    CURRENT = "current"
    INCOMING = "incoming"
    OMIT = "omit"


def outcome_for(conflict_type: ConflictType, resolution: Resolution | None) -> Outcome:
    accepted = resolution is Resolution.ACCEPT
    match conflict_type:
        case ConflictType.MODIFIED:
            return Outcome.INCOMING if accepted else Outcome.CURRENT
        case ConflictType.ADDED:
            return Outcome.INCOMING if accepted else Outcome.OMIT
        case ConflictType.REMOVED:
            return Outcome.OMIT if accepted else Outcome.CURRENT
        case _:
            assert_never(conflict_type)


def create_default_resolutions(
    analysis: ConflictAnalysis,
    default: Resolution = Resolution.KEEP,
) -> Resolutions:
    """Record ``default`` for every conflict in ``analysis``."""

    resolutions = Resolutions()
    for conflict in analysis.conflicts():
        resolutions.choose(conflict, default)
    return resolutions


def accept_all_incoming(analysis: ConflictAnalysis) -> Resolutions:
    return create_default_resolutions(analysis, Resolution.ACCEPT)


def keep_all_current(analysis: ConflictAnalysis) -> Resolutions:
    return create_default_resolutions(analysis, Resolution.KEEP)
