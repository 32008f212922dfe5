"""Merge engine configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from cvmerge.domain.conflicts.matching import DEFAULT_ROLE_MATCH_THRESHOLD

from .env import env_bool, env_float
from .errors import ConfigurationError

ROLE_MATCH_THRESHOLD_VAR = "CVMERGE_ROLE_MATCH_THRESHOLD"
EXCLUSIVE_ROLE_MATCHING_VAR = "CVMERGE_EXCLUSIVE_ROLE_MATCHING"


@dataclass(frozen=True, slots=True)
class MergeConfig:
    role_match_threshold: float = DEFAULT_ROLE_MATCH_THRESHOLD
    exclusive_role_matching: bool = True

    def __post_init__(self) -> None:
        if not 0.0 <= self.role_match_threshold <= 1.0:
            raise ConfigurationError(
                f"Role match threshold must be within [0, 1], got {self.role_match_threshold}"
            )


def get_merge_config() -> MergeConfig:
    threshold = env_float(ROLE_MATCH_THRESHOLD_VAR, default=DEFAULT_ROLE_MATCH_THRESHOLD)
    exclusive = env_bool(EXCLUSIVE_ROLE_MATCHING_VAR, default=True)
    return MergeConfig(role_match_threshold=threshold, exclusive_role_matching=exclusive)
