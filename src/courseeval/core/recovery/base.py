"""Shared state and trace types for recovery model application."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Protocol, runtime_checkable

from ...schemas import EvaluationRules, ExamReference, RecoveryModel
from ..average import compute_average
from ..status import AcademicStatus, derive_status


@dataclass(frozen=True, slots=True)
class RecoveryState:
    """Working values threaded through the ordered recovery models."""

    exams: tuple[ExamReference, ...]
    average: float | None
    status: AcademicStatus
    recovery_score: float | None

    @classmethod
    def initial(
        cls,
        exams: tuple[ExamReference, ...],
        rules: EvaluationRules,
        recovery_score: float | None,
    ) -> "RecoveryState":
        average = compute_average(exams)
        return cls(
            exams=exams,
            average=average,
            status=derive_status(average, rules.min_passing_average),
            recovery_score=recovery_score,
        )

    def evolve(self, **changes: Any) -> "RecoveryState":
        return replace(self, **changes)


@dataclass(slots=True)
class ModelTrace:
    """Record of one recovery model application."""

    model: RecoveryModel | str
    applied: bool
    detail: str
    new_average: float | None = None
    considered_score: float | None = None
    status: AcademicStatus | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class RecoveryModelHandler(Protocol):
    """Contract for a single recovery model transform."""

    model: RecoveryModel

    def apply(
        self,
        state: RecoveryState,
        rules: EvaluationRules,
    ) -> tuple[RecoveryState, ModelTrace]:
        """Return the next working state and the trace for this application."""


def skipped(model: RecoveryModel | str, detail: str) -> ModelTrace:
    return ModelTrace(model=model, applied=False, detail=detail)
