"""Input contract checks run before an enrollment is evaluated.

The engine itself tolerates partial or odd data; these checks reject
configurations whose intent is ambiguous and values outside the grading scale.
"""

from __future__ import annotations

from typing import Iterable

from .schemas import EvaluationRules, ExamReference, RecoveryRecord

SCORE_MIN = 0.0
SCORE_MAX = 10.0


class EvaluationInputError(ValueError):
    """Raised when evaluation inputs violate the input contract."""

    def __init__(self, errors: list[str]):
        super().__init__("Evaluation input validation failed")
        self.errors = errors

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Evaluation input validation failed: {self.errors}"


def _on_scale(value: float) -> bool:
    return SCORE_MIN <= value <= SCORE_MAX


def rules_errors(rules: EvaluationRules) -> list[str]:
    errors: list[str] = []
    if not _on_scale(rules.min_passing_average):
        errors.append(
            f"min_passing_average {rules.min_passing_average} outside [{SCORE_MIN:g}, {SCORE_MAX:g}]"
        )

    policy = rules.recovery_policy
    configured = set(policy.models)
    for model in policy.application_order:
        if model not in configured:
            name = getattr(model, "value", model)
            errors.append(f"application_order lists '{name}' which is not among the configured models")

    if policy.max_recovery_score is not None and not _on_scale(policy.max_recovery_score):
        errors.append(
            f"max_recovery_score {policy.max_recovery_score} outside [{SCORE_MIN:g}, {SCORE_MAX:g}]"
        )
    if policy.final_exam_weight is not None and policy.final_exam_weight <= 0:
        errors.append(f"final_exam_weight must be positive, got {policy.final_exam_weight}")
    return errors


def exam_errors(exams: Iterable[ExamReference]) -> list[str]:
    errors: list[str] = []
    for exam in exams:
        if exam.weight < 0:
            errors.append(f"exam {exam.id}: negative weight {exam.weight}")
        if exam.score is not None and not _on_scale(exam.score):
            errors.append(f"exam {exam.id}: score {exam.score} outside [{SCORE_MIN:g}, {SCORE_MAX:g}]")
    return errors


def recovery_errors(record: RecoveryRecord | None) -> list[str]:
    if record is None:
        return []
    errors: list[str] = []
    for name in ("recovery_score", "final_score"):
        value = getattr(record, name)
        if value is not None and not _on_scale(value):
            errors.append(f"recovery {name} {value} outside [{SCORE_MIN:g}, {SCORE_MAX:g}]")
    return errors


def validate_inputs(
    exams: Iterable[ExamReference],
    rules: EvaluationRules,
    latest_recovery: RecoveryRecord | None = None,
) -> None:
    """Raise ``EvaluationInputError`` listing every violation found."""
    errors = rules_errors(rules) + exam_errors(exams) + recovery_errors(latest_recovery)
    if errors:
        raise EvaluationInputError(errors)
