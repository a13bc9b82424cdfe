"""Evaluation rules and recovery policy configured per class."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, PlainValidator


class RecoveryModel(str, Enum):
    """Supported recovery models.

    Values are the lowercase identifiers used in stored class rules.
    """

    SUBSTITUI_MENOR = "substitui_menor"
    MEDIA_MINIMA_DIRETA = "media_minima_direta"
    PROVA_FINAL_UNICA = "prova_final_unica"
    NOTA_MAXIMA_LIMITADA = "nota_maxima_limitada"

    @classmethod
    def parse(cls, value: Any) -> "RecoveryModel | str":
        """Map an identifier onto a known model, keeping unknown ones as text."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Recovery model identifier must be a string, got {type(value).__name__}")
        normalized = value.strip()
        try:
            return cls(normalized.lower())
        except ValueError:
            return normalized


ModelIdentifier = Annotated[RecoveryModel | str, PlainValidator(RecoveryModel.parse)]


class RecoveryPolicy(BaseModel):
    """Recovery (makeup exam) policy in force for a class."""

    enabled: bool = False
    models: tuple[ModelIdentifier, ...] = ()
    application_order: tuple[ModelIdentifier, ...] = ()
    max_recovery_score: float | None = None
    final_exam_weight: float | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    def ordered_models(self) -> tuple[RecoveryModel | str, ...]:
        """Models in application order, falling back to configuration order."""
        return self.application_order or self.models


class EvaluationRules(BaseModel):
    """Passing threshold plus recovery policy for a class."""

    min_passing_average: float = 7.0
    recovery_policy: RecoveryPolicy = Field(default_factory=RecoveryPolicy)

    model_config = ConfigDict(extra="forbid", frozen=True)
