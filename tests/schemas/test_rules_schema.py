from __future__ import annotations

import pytest
from pydantic import ValidationError

from courseeval.schemas import (
    EnrollmentInput,
    EvaluationRules,
    ExamReference,
    RecoveryModel,
    RecoveryPolicy,
    RecoveryRecord,
)


def test_model_identifiers_are_case_insensitive():
    policy = RecoveryPolicy(
        enabled=True,
        models=["SUBSTITUI_MENOR", " nota_maxima_limitada "],
        application_order=["Nota_Maxima_Limitada", "substitui_menor"],
    )

    assert policy.models == (
        RecoveryModel.SUBSTITUI_MENOR,
        RecoveryModel.NOTA_MAXIMA_LIMITADA,
    )
    assert policy.ordered_models()[0] is RecoveryModel.NOTA_MAXIMA_LIMITADA


def test_unknown_identifiers_are_kept_as_text():
    policy = RecoveryPolicy(models=["bonus_points"])

    assert policy.models == ("bonus_points",)


def test_non_string_identifier_is_rejected():
    with pytest.raises(ValidationError):
        RecoveryPolicy(models=[3])


def test_ordered_models_falls_back_to_models():
    policy = RecoveryPolicy(models=[RecoveryModel.PROVA_FINAL_UNICA, RecoveryModel.SUBSTITUI_MENOR])

    assert policy.ordered_models() == policy.models


def test_rules_defaults():
    rules = EvaluationRules()

    assert rules.min_passing_average == 7.0
    assert rules.recovery_policy.enabled is False
    assert rules.recovery_policy.models == ()


def test_inputs_are_immutable():
    exam = ExamReference(id="p1", weight=1.0, score=5.0)

    with pytest.raises(ValidationError):
        exam.score = 9.0


def test_recovery_effective_score():
    assert RecoveryRecord(recovery_score=6.0).effective_score == 6.0
    assert RecoveryRecord(recovery_score=6.0, final_score=7.5).effective_score == 7.5
    assert RecoveryRecord().effective_score is None


def test_enrollment_input_round_trips_model_identifiers():
    enrollment = EnrollmentInput(
        enrollment_id="M-1",
        exams=[{"id": "p1", "label": "Prova 1", "weight": 2, "score": 8}],
        rules={"recovery_policy": {"enabled": True, "models": ["substitui_menor"]}},
        latest_recovery={"recovery_score": 9},
    )

    dumped = enrollment.model_dump(mode="json")

    assert dumped["rules"]["recovery_policy"]["models"] == ["substitui_menor"]
    assert EnrollmentInput.model_validate(dumped) == enrollment


def test_extra_fields_are_rejected():
    with pytest.raises(ValidationError):
        ExamReference(id="p1", weight=1.0, grade=5.0)
