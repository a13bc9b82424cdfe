"""Recovery model implementations and the policy engine."""

from .base import ModelTrace, RecoveryModelHandler, RecoveryState
from .direct_pass import DirectPassModel
from .engine import RecoveryOutcome, RecoveryPolicyEngine, apply_recovery
from .final_exam import FinalExamConfig, FinalExamModel
from .replace_lowest import ReplaceLowestConfig, ReplaceLowestModel
from .score_cap import ScoreCapConfig, ScoreCapModel

__all__ = [
    "DirectPassModel",
    "FinalExamConfig",
    "FinalExamModel",
    "ModelTrace",
    "RecoveryModelHandler",
    "RecoveryOutcome",
    "RecoveryPolicyEngine",
    "RecoveryState",
    "ReplaceLowestConfig",
    "ReplaceLowestModel",
    "ScoreCapConfig",
    "ScoreCapModel",
    "apply_recovery",
]
