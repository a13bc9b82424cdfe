"""Core evaluation engine components."""

from __future__ import annotations

from .average import compute_average, total_weight
from .evaluation import EvaluationOrchestrator, EvaluationReport
from .recovery import (
    DirectPassModel,
    FinalExamModel,
    ModelTrace,
    RecoveryOutcome,
    RecoveryPolicyEngine,
    ReplaceLowestModel,
    ScoreCapModel,
    apply_recovery,
)
from .resolver import FinalResult, FinalResultResolver, resolve
from .rounding import round_half_up
from .status import AcademicStatus, derive_status

__all__ = [
    "AcademicStatus",
    "DirectPassModel",
    "EvaluationOrchestrator",
    "EvaluationReport",
    "FinalExamModel",
    "FinalResult",
    "FinalResultResolver",
    "ModelTrace",
    "RecoveryOutcome",
    "RecoveryPolicyEngine",
    "ReplaceLowestModel",
    "ScoreCapModel",
    "apply_recovery",
    "compute_average",
    "derive_status",
    "resolve",
    "round_half_up",
    "total_weight",
]
