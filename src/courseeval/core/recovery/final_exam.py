"""PROVA_FINAL_UNICA: blend a single final exam into the average."""

from __future__ import annotations

from dataclasses import dataclass

from ...schemas import EvaluationRules, RecoveryModel
from ..average import total_weight
from ..rounding import round_half_up
from ..status import derive_status
from .base import ModelTrace, RecoveryState, skipped


@dataclass
class FinalExamConfig:
    """Configuration for the final exam blend.

    ``null_prior_as_zero`` blends an ungraded class as a zero average instead
    of using the final exam as the sole basis.
    """

    null_prior_as_zero: bool = False
    precision: int = 2


class FinalExamModel:
    """Weight the recovery score as one extra exam on top of the average."""

    model = RecoveryModel.PROVA_FINAL_UNICA

    def __init__(self, *, config: FinalExamConfig | None = None) -> None:
        self._config = config or FinalExamConfig()

    def apply(
        self,
        state: RecoveryState,
        rules: EvaluationRules,
    ) -> tuple[RecoveryState, ModelTrace]:
        score = state.recovery_score
        if score is None:
            return state, skipped(self.model, "no_recovery_score")

        final_weight = rules.recovery_policy.final_exam_weight
        weight_sum = total_weight(state.exams)
        prior = state.average
        if prior is None and self._config.null_prior_as_zero:
            prior = 0.0

        if final_weight and final_weight > 0 and weight_sum > 0 and prior is not None:
            blended = (prior * weight_sum + score * final_weight) / (weight_sum + final_weight)
            average = round_half_up(blended, self._config.precision)
            detail = "final_exam_blended"
        else:
            average = round_half_up(score, self._config.precision)
            detail = "final_exam_sole_basis"

        status = derive_status(average, rules.min_passing_average)
        trace = ModelTrace(
            model=self.model,
            applied=True,
            detail=detail,
            new_average=average,
            considered_score=score,
            status=status,
            metadata={
                "prior_average": state.average,
                "total_weight": weight_sum,
                "final_exam_weight": final_weight,
            },
        )
        return state.evolve(average=average, status=status), trace
