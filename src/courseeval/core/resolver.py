"""Final average and status resolution."""

from __future__ import annotations

from dataclasses import dataclass

from ..schemas import EvaluationRules
from .recovery import RecoveryOutcome
from .rounding import round_optional
from .status import AcademicStatus, derive_status


@dataclass(slots=True)
class FinalResult:
    """Initial and final grade determination for an enrollment."""

    initial_average: float | None
    initial_status: AcademicStatus
    final_average: float | None
    final_status: AcademicStatus


class FinalResultResolver:
    """Combine the initial average with an optional recovery outcome."""

    def resolve(
        self,
        initial_average: float | None,
        rules: EvaluationRules,
        recovery_outcome: RecoveryOutcome | None = None,
    ) -> FinalResult:
        final_average = initial_average
        if recovery_outcome is not None and recovery_outcome.average is not None:
            final_average = recovery_outcome.average

        return FinalResult(
            initial_average=round_optional(initial_average, 2),
            initial_status=derive_status(initial_average, rules.min_passing_average),
            final_average=round_optional(final_average, 2),
            final_status=derive_status(final_average, rules.min_passing_average),
        )


def resolve(
    initial_average: float | None,
    rules: EvaluationRules,
    recovery_outcome: RecoveryOutcome | None = None,
) -> FinalResult:
    return FinalResultResolver().resolve(initial_average, rules, recovery_outcome)
