"""MEDIA_MINIMA_DIRETA: a recovery score at the passing average approves."""

from __future__ import annotations

from ...schemas import EvaluationRules, RecoveryModel
from ..rounding import round_half_up
from ..status import AcademicStatus
from .base import ModelTrace, RecoveryState, skipped


class DirectPassModel:
    """Approve directly when the recovery score reaches the minimum average."""

    model = RecoveryModel.MEDIA_MINIMA_DIRETA

    def apply(
        self,
        state: RecoveryState,
        rules: EvaluationRules,
    ) -> tuple[RecoveryState, ModelTrace]:
        score = state.recovery_score
        if score is None:
            return state, skipped(self.model, "no_recovery_score")
        if score < rules.min_passing_average:
            trace = skipped(self.model, "below_minimum_average")
            trace.metadata = {"min_passing_average": rules.min_passing_average}
            return state, trace

        # an ungraded class counts as zero here so the recovery score wins
        average = max(state.average if state.average is not None else 0.0, score)
        trace = ModelTrace(
            model=self.model,
            applied=True,
            detail="reached_minimum_average",
            new_average=round_half_up(average, 2),
            considered_score=score,
            status=AcademicStatus.APPROVED,
            metadata={"min_passing_average": rules.min_passing_average},
        )
        return state.evolve(average=average, status=AcademicStatus.APPROVED), trace
