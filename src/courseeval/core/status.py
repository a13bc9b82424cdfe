"""Academic status derivation."""

from __future__ import annotations

from enum import Enum


class AcademicStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    FAILED = "FAILED"


def derive_status(average: float | None, min_passing_average: float) -> AcademicStatus:
    """Status for an average; reaching the minimum exactly counts as a pass."""
    if average is None:
        return AcademicStatus.PENDING
    if average >= min_passing_average:
        return AcademicStatus.APPROVED
    return AcademicStatus.FAILED
