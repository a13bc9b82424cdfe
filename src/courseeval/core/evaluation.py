"""Evaluation orchestration for a single enrollment."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel

from ..schemas import EvaluationRules, ExamReference, RecoveryRecord
from .average import compute_average
from .recovery import RecoveryOutcome, RecoveryPolicyEngine
from .resolver import FinalResultResolver
from .status import AcademicStatus


@dataclass(slots=True)
class EvaluationReport:
    """Complete evaluation payload for downstream consumers."""

    initial_average: float | None
    initial_status: AcademicStatus
    recovery_outcome: RecoveryOutcome | None
    final_average: float | None
    final_status: AcademicStatus

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible representation with enums rendered as values."""
        return _plain(asdict(self))


class EvaluationOrchestrator:
    """Sequence average, recovery and final resolution for one enrollment."""

    def __init__(
        self,
        *,
        recovery_engine: RecoveryPolicyEngine | None = None,
        resolver: FinalResultResolver | None = None,
    ) -> None:
        self._recovery_engine = recovery_engine or RecoveryPolicyEngine()
        self._resolver = resolver or FinalResultResolver()

    def evaluate(
        self,
        exams: Iterable[ExamReference],
        rules: EvaluationRules,
        latest_recovery: RecoveryRecord | None = None,
    ) -> EvaluationReport:
        """Evaluate one enrollment.

        Recovery runs only when ``latest_recovery`` is given. Without a record
        the report carries ``recovery_outcome=None`` rather than an outcome with
        an empty model trace, and the final result equals the initial one.
        """
        exams = tuple(exams)
        average = compute_average(exams)

        outcome: RecoveryOutcome | None = None
        if latest_recovery is not None:
            outcome = self._recovery_engine.apply_recovery(
                exams,
                rules,
                latest_recovery.effective_score,
            )

        result = self._resolver.resolve(average, rules, outcome)
        return EvaluationReport(
            initial_average=result.initial_average,
            initial_status=result.initial_status,
            recovery_outcome=outcome,
            final_average=result.final_average,
            final_status=result.final_status,
        )


def _plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value
