"""NOTA_MAXIMA_LIMITADA: cap the recovery score."""

from __future__ import annotations

from dataclasses import dataclass

from ...schemas import EvaluationRules, RecoveryModel
from ..rounding import round_half_up
from .base import ModelTrace, RecoveryState, skipped


@dataclass
class ScoreCapConfig:
    """Configuration for recovery score capping."""

    precision: int = 1


class ScoreCapModel:
    """Limit the working recovery score to the configured maximum."""

    model = RecoveryModel.NOTA_MAXIMA_LIMITADA

    def __init__(self, *, config: ScoreCapConfig | None = None) -> None:
        self._config = config or ScoreCapConfig()

    def apply(
        self,
        state: RecoveryState,
        rules: EvaluationRules,
    ) -> tuple[RecoveryState, ModelTrace]:
        cap = rules.recovery_policy.max_recovery_score
        if cap is None:
            return state, skipped(self.model, "cap_not_configured")
        if state.recovery_score is None:
            return state, skipped(self.model, "no_recovery_score")

        capped = round_half_up(min(state.recovery_score, cap), self._config.precision)
        trace = ModelTrace(
            model=self.model,
            applied=True,
            detail="score_capped" if state.recovery_score > cap else "score_within_cap",
            considered_score=capped,
            status=state.status,
            metadata={"raw_score": state.recovery_score, "max_recovery_score": cap},
        )
        return state.evolve(recovery_score=capped), trace
