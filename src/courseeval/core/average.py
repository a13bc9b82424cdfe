"""Weighted average over exam references."""

from __future__ import annotations

from typing import Iterable

from ..schemas import ExamReference
from .rounding import round_half_up


def compute_average(exams: Iterable[ExamReference]) -> float | None:
    """Weighted mean of graded exams with positive weight, rounded to 2 places.

    Returns ``None`` when no exam can contribute yet.
    """
    graded = [exam for exam in exams if exam.score is not None and exam.weight > 0]
    if not graded:
        return None

    weight_sum = sum(exam.weight for exam in graded)
    if weight_sum == 0:
        return None

    weighted_sum = sum(exam.score * exam.weight for exam in graded)
    return round_half_up(weighted_sum / weight_sum, 2)


def total_weight(exams: Iterable[ExamReference]) -> float:
    """Sum of all exam weights, graded or not, ignoring negative weights."""
    return sum(max(exam.weight, 0.0) for exam in exams)
