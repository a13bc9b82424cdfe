from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .exam import ExamReference
from .recovery import RecoveryRecord
from .rules import EvaluationRules


class EnrollmentInput(BaseModel):
    """Everything the engine needs to grade one enrollment."""

    enrollment_id: str
    exams: tuple[ExamReference, ...] = ()
    rules: EvaluationRules = Field(default_factory=EvaluationRules)
    latest_recovery: RecoveryRecord | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)
