"""Shared type definitions for the ticket pipeline."""

from collections.abc import Mapping
from enum import StrEnum


type RawValue = str | None
type RawRow = Mapping[str, RawValue]
type YearMonth = str


class HealthStatus(StrEnum):
    GOOD = "good"
    WARN = "warn"
    BAD = "bad"
    NEUTRAL = "neutral"


def classify_floor(value: float, good_min: float, warn_min: float) -> HealthStatus:
    """Band a higher-is-better metric."""
    match value:
        case v if v >= good_min:
            return HealthStatus.GOOD
        case v if v >= warn_min:
            return HealthStatus.WARN
        case _:
            return HealthStatus.BAD


def classify_ceiling(value: float, good_max: float, warn_max: float) -> HealthStatus:
    """Band a lower-is-better metric."""
    match value:
        case v if v <= good_max:
            return HealthStatus.GOOD
        case v if v <= warn_max:
            return HealthStatus.WARN
        case _:
            return HealthStatus.BAD
