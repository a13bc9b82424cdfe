from __future__ import annotations

from courseeval.core import AcademicStatus
from courseeval.core.recovery import (
    DirectPassModel,
    FinalExamConfig,
    FinalExamModel,
    RecoveryState,
    ReplaceLowestModel,
    ScoreCapModel,
)
from courseeval.schemas import EvaluationRules, ExamReference, RecoveryModel, RecoveryPolicy


def build_rules(**policy: object) -> EvaluationRules:
    min_passing_average = policy.pop("min_passing_average", 7.0)
    return EvaluationRules(
        min_passing_average=min_passing_average,
        recovery_policy=RecoveryPolicy(enabled=True, **policy),
    )


def build_state(
    scores: list[tuple[float | None, float]],
    recovery_score: float | None,
    rules: EvaluationRules,
) -> RecoveryState:
    exams = tuple(
        ExamReference(id=f"p{index}", label=f"Prova {index}", weight=weight, score=score)
        for index, (score, weight) in enumerate(scores, start=1)
    )
    return RecoveryState.initial(exams, rules, recovery_score)


def test_score_cap_limits_and_rounds_recovery_score():
    rules = build_rules(max_recovery_score=6.0)
    state = build_state([(5.0, 1)], 9.0, rules)

    new_state, trace = ScoreCapModel().apply(state, rules)

    assert new_state.recovery_score == 6.0
    assert new_state.average == state.average
    assert trace.applied is True
    assert trace.model is RecoveryModel.NOTA_MAXIMA_LIMITADA
    assert trace.considered_score == 6.0
    assert trace.detail == "score_capped"


def test_score_cap_marks_applied_when_score_already_below_cap():
    rules = build_rules(max_recovery_score=8.0)
    state = build_state([(5.0, 1)], 6.44, rules)

    new_state, trace = ScoreCapModel().apply(state, rules)

    assert trace.applied is True
    assert new_state.recovery_score == 6.4


def test_score_cap_without_cap_is_noop():
    rules = build_rules()
    state = build_state([(5.0, 1)], 9.0, rules)

    new_state, trace = ScoreCapModel().apply(state, rules)

    assert new_state is state
    assert trace.applied is False
    assert trace.detail == "cap_not_configured"


def test_replace_lowest_substitutes_and_recomputes():
    rules = build_rules()
    state = build_state([(4.0, 1), (8.0, 1)], 7.0, rules)

    new_state, trace = ReplaceLowestModel().apply(state, rules)

    assert [exam.score for exam in new_state.exams] == [7.0, 8.0]
    assert new_state.average == 7.5
    assert new_state.status is AcademicStatus.APPROVED
    assert trace.applied is True
    assert trace.metadata["exam_id"] == "p1"
    assert trace.metadata["previous_score"] == 4.0
    # the input exams are untouched
    assert state.exams[0].score == 4.0


def test_replace_lowest_tie_replaces_first_occurrence():
    rules = build_rules()
    state = build_state([(5.0, 1), (5.0, 1), (9.0, 1)], 8.0, rules)

    first_state, first_trace = ReplaceLowestModel().apply(state, rules)
    second_state, second_trace = ReplaceLowestModel().apply(state, rules)

    assert [exam.score for exam in first_state.exams] == [8.0, 5.0, 9.0]
    assert first_trace.metadata["exam_id"] == "p1"
    assert first_state.average == 7.33
    assert first_state == second_state
    assert first_trace == second_trace


def test_replace_lowest_skips_ungraded_exams():
    rules = build_rules()
    state = build_state([(None, 1), (6.0, 1), (3.0, 1)], 5.0, rules)

    new_state, trace = ReplaceLowestModel().apply(state, rules)

    assert [exam.score for exam in new_state.exams] == [None, 6.0, 5.0]
    assert trace.metadata["exam_id"] == "p3"


def test_replace_lowest_requires_higher_score():
    rules = build_rules()
    state = build_state([(6.0, 1), (8.0, 1)], 6.0, rules)

    new_state, trace = ReplaceLowestModel().apply(state, rules)

    assert new_state is state
    assert trace.applied is False
    assert trace.detail == "not_above_lowest"


def test_replace_lowest_without_graded_exams_is_noop():
    rules = build_rules()
    state = build_state([(None, 1)], 9.0, rules)

    new_state, trace = ReplaceLowestModel().apply(state, rules)

    assert new_state is state
    assert trace.detail == "no_graded_exams"


def test_direct_pass_forces_approval_at_minimum():
    rules = build_rules()
    state = build_state([(5.0, 1), (6.0, 1)], 7.0, rules)
    assert state.status is AcademicStatus.FAILED

    new_state, trace = DirectPassModel().apply(state, rules)

    assert new_state.average == 7.0
    assert new_state.status is AcademicStatus.APPROVED
    assert trace.applied is True


def test_direct_pass_keeps_higher_average():
    rules = build_rules(min_passing_average=6.0)
    state = build_state([(9.0, 1)], 6.5, rules)

    new_state, _ = DirectPassModel().apply(state, rules)

    assert new_state.average == 9.0


def test_direct_pass_below_minimum_is_noop():
    rules = build_rules()
    state = build_state([(5.0, 1)], 6.9, rules)

    new_state, trace = DirectPassModel().apply(state, rules)

    assert new_state is state
    assert trace.applied is False
    assert trace.detail == "below_minimum_average"


def test_final_exam_blends_with_prior_average():
    rules = build_rules(final_exam_weight=1.0)
    state = build_state([(5.0, 1), (5.0, 2)], 9.0, rules)
    assert state.average == 5.0

    new_state, trace = FinalExamModel().apply(state, rules)

    assert new_state.average == 6.0
    assert new_state.status is AcademicStatus.FAILED
    assert trace.detail == "final_exam_blended"
    assert trace.metadata["total_weight"] == 3


def test_final_exam_without_weight_uses_recovery_score():
    rules = build_rules()
    state = build_state([(5.0, 1), (5.0, 2)], 9.0, rules)

    new_state, trace = FinalExamModel().apply(state, rules)

    assert new_state.average == 9.0
    assert new_state.status is AcademicStatus.APPROVED
    assert trace.detail == "final_exam_sole_basis"


def test_final_exam_with_zero_total_weight_uses_recovery_score():
    rules = build_rules(final_exam_weight=2.0)
    state = build_state([(5.0, 0)], 7.5, rules)

    new_state, _ = FinalExamModel().apply(state, rules)

    assert new_state.average == 7.5


def test_final_exam_null_prior_passes_recovery_score_through():
    rules = build_rules(final_exam_weight=1.0)
    state = build_state([(None, 1), (None, 2)], 8.0, rules)

    new_state, trace = FinalExamModel().apply(state, rules)

    assert new_state.average == 8.0
    assert trace.detail == "final_exam_sole_basis"


def test_final_exam_null_prior_as_zero_blends():
    rules = build_rules(final_exam_weight=1.0)
    state = build_state([(None, 1), (None, 2)], 8.0, rules)
    model = FinalExamModel(config=FinalExamConfig(null_prior_as_zero=True))

    new_state, trace = model.apply(state, rules)

    assert new_state.average == 2.0
    assert new_state.status is AcademicStatus.FAILED
    assert trace.detail == "final_exam_blended"
