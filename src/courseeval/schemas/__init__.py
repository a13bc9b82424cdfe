"""Pydantic schema definitions for evaluation inputs."""

from __future__ import annotations

from .exam import ExamReference
from .rules import EvaluationRules, ModelIdentifier, RecoveryModel, RecoveryPolicy
from .recovery import RecoveryRecord
from .enrollment import EnrollmentInput

__all__ = [
    "EnrollmentInput",
    "EvaluationRules",
    "ExamReference",
    "ModelIdentifier",
    "RecoveryModel",
    "RecoveryPolicy",
    "RecoveryRecord",
]
