from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ExamReference(BaseModel):
    """One gradable item (test, assignment, project) of an enrollment's class.

    ``weight == 0`` excludes the item from averaging and ``score is None``
    means the item has not been graded yet.
    """

    id: str
    label: str = ""
    weight: float
    score: float | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)
