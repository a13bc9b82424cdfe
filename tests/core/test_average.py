from __future__ import annotations

import pytest

from courseeval.core import AcademicStatus, compute_average, derive_status, round_half_up, total_weight
from courseeval.schemas import ExamReference


def exam(exam_id: str, score: float | None, weight: float = 1.0) -> ExamReference:
    return ExamReference(id=exam_id, label=exam_id.upper(), weight=weight, score=score)


def test_weighted_average_rounds_to_two_places():
    exams = [exam("p1", 8.0, weight=2), exam("p2", 6.0, weight=1)]

    assert compute_average(exams) == 7.33


def test_ungraded_and_zero_weight_exams_do_not_contribute():
    exams = [
        exam("p1", 9.0, weight=1),
        exam("p2", None, weight=3),
        exam("p3", 0.0, weight=0),
    ]

    assert compute_average(exams) == 9.0


@pytest.mark.parametrize(
    "exams",
    [
        [],
        [exam("p1", None), exam("p2", None)],
        [exam("p1", 8.0, weight=0), exam("p2", 6.0, weight=0)],
    ],
)
def test_no_contributing_exams_yields_none(exams):
    assert compute_average(exams) is None
    assert derive_status(compute_average(exams), 7.0) is AcademicStatus.PENDING


def test_average_is_repeatable():
    exams = [exam("p1", 7.7, weight=1.5), exam("p2", 4.2, weight=2.5), exam("p3", None)]

    assert compute_average(exams) == compute_average(exams)


def test_total_weight_counts_ungraded_exams():
    exams = [exam("p1", 5.0, weight=1), exam("p2", None, weight=2)]

    assert total_weight(exams) == 3


@pytest.mark.parametrize(
    ("value", "places", "expected"),
    [
        (2.675, 2, 2.68),
        (7.005, 2, 7.01),
        (0.125, 2, 0.13),
        (7.25, 1, 7.3),
        (7.333333333333333, 2, 7.33),
    ],
)
def test_round_half_up(value, places, expected):
    assert round_half_up(value, places) == expected


@pytest.mark.parametrize(
    ("average", "expected"),
    [
        (None, AcademicStatus.PENDING),
        (7.0, AcademicStatus.APPROVED),
        (6.99, AcademicStatus.FAILED),
        (9.5, AcademicStatus.APPROVED),
    ],
)
def test_status_threshold_is_inclusive(average, expected):
    assert derive_status(average, 7.0) is expected
