from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class RecoveryRecord(BaseModel):
    """Latest makeup assessment taken by a student."""

    id: str | None = None
    exam_id: str | None = None
    recovery_score: float | None = None
    final_score: float | None = None
    applied_at: str | None = None
    notes: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def effective_score(self) -> float | None:
        """Score fed to the recovery models; a reviewed final score wins."""
        if self.final_score is not None:
            return self.final_score
        return self.recovery_score
