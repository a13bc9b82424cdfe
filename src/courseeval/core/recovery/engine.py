"""Ordered application of recovery models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ...schemas import EvaluationRules, ExamReference, RecoveryModel
from ..average import compute_average
from ..status import AcademicStatus, derive_status
from .base import ModelTrace, RecoveryModelHandler, RecoveryState, skipped
from .direct_pass import DirectPassModel
from .final_exam import FinalExamModel
from .replace_lowest import ReplaceLowestModel
from .score_cap import ScoreCapModel


@dataclass(slots=True)
class RecoveryOutcome:
    """Working exam set, average and status after the recovery models ran."""

    exams: list[ExamReference]
    average: float | None
    status: AcademicStatus
    recovery_score: float | None
    models: list[ModelTrace] = field(default_factory=list)


def default_handlers() -> list[RecoveryModelHandler]:
    return [ScoreCapModel(), ReplaceLowestModel(), DirectPassModel(), FinalExamModel()]


class RecoveryPolicyEngine:
    """Fold the configured recovery models, in order, over a working state.

    Models compose: each one sees the state left by the previous one, so the
    order in which a class lists them changes the outcome.
    """

    def __init__(self, models: Iterable[RecoveryModelHandler] | None = None) -> None:
        handlers = list(models) if models is not None else default_handlers()
        self._handlers: dict[RecoveryModel, RecoveryModelHandler] = {
            handler.model: handler for handler in handlers
        }

    def handler_for(self, model: RecoveryModel | str) -> RecoveryModelHandler | None:
        return self._handlers.get(model)

    def apply_recovery(
        self,
        exams: Iterable[ExamReference],
        rules: EvaluationRules,
        recovery_score: float | None,
    ) -> RecoveryOutcome:
        working_exams = tuple(exams)
        policy = rules.recovery_policy

        if not policy.enabled or recovery_score is None:
            average = compute_average(working_exams)
            return RecoveryOutcome(
                exams=list(working_exams),
                average=average,
                status=derive_status(average, rules.min_passing_average),
                recovery_score=recovery_score,
            )

        state = RecoveryState.initial(working_exams, rules, recovery_score)
        configured = set(policy.models)
        traces: list[ModelTrace] = []

        for model in policy.ordered_models():
            if model not in configured:
                traces.append(skipped(model, "not_configured"))
                continue
            handler = self.handler_for(model)
            if handler is None:
                traces.append(skipped(model, "unknown_model"))
                continue
            state, trace = handler.apply(state, rules)
            traces.append(trace)

        return RecoveryOutcome(
            exams=list(state.exams),
            average=state.average,
            status=state.status,
            recovery_score=state.recovery_score,
            models=traces,
        )


_DEFAULT_ENGINE = RecoveryPolicyEngine()


def apply_recovery(
    exams: Iterable[ExamReference],
    rules: EvaluationRules,
    recovery_score: float | None,
) -> RecoveryOutcome:
    """Apply the recovery policy with the default model set."""
    return _DEFAULT_ENGINE.apply_recovery(exams, rules, recovery_score)
