"""SUBSTITUI_MENOR: the recovery score replaces the lowest exam score."""

from __future__ import annotations

from dataclasses import dataclass

from ...schemas import EvaluationRules, ExamReference, RecoveryModel
from ..average import compute_average
from ..rounding import round_half_up
from ..status import derive_status
from .base import ModelTrace, RecoveryState, skipped


@dataclass
class ReplaceLowestConfig:
    """Configuration for lowest-score substitution."""

    precision: int = 1


class ReplaceLowestModel:
    """Swap the lowest graded score for the recovery score when it is higher."""

    model = RecoveryModel.SUBSTITUI_MENOR

    def __init__(self, *, config: ReplaceLowestConfig | None = None) -> None:
        self._config = config or ReplaceLowestConfig()

    def apply(
        self,
        state: RecoveryState,
        rules: EvaluationRules,
    ) -> tuple[RecoveryState, ModelTrace]:
        if state.recovery_score is None:
            return state, skipped(self.model, "no_recovery_score")

        index = self._lowest_index(state.exams)
        if index is None:
            return state, skipped(self.model, "no_graded_exams")

        lowest = state.exams[index]
        if state.recovery_score <= lowest.score:
            trace = skipped(self.model, "not_above_lowest")
            trace.metadata = {"exam_id": lowest.id, "lowest_score": lowest.score}
            return state, trace

        replacement = round_half_up(state.recovery_score, self._config.precision)
        exams = list(state.exams)
        exams[index] = lowest.model_copy(update={"score": replacement})
        average = compute_average(exams)
        status = derive_status(average, rules.min_passing_average)

        trace = ModelTrace(
            model=self.model,
            applied=True,
            detail="replaced_lowest",
            new_average=average,
            considered_score=replacement,
            status=status,
            metadata={
                "exam_id": lowest.id,
                "exam_label": lowest.label,
                "previous_score": lowest.score,
            },
        )
        return state.evolve(exams=tuple(exams), average=average, status=status), trace

    @staticmethod
    def _lowest_index(exams: tuple[ExamReference, ...]) -> int | None:
        # strict comparison keeps the first exam on ties
        lowest_index: int | None = None
        for index, exam in enumerate(exams):
            if exam.score is None:
                continue
            if lowest_index is None or exam.score < exams[lowest_index].score:
                lowest_index = index
        return lowest_index
