"""Storage row adapter.

Rows come straight from the grade store: exam weights and scores are kept as
decimals, inactive exams are still listed, rules are flat columns and every
recovery attempt of the enrollment is present.
"""

from __future__ import annotations

import math
from typing import Any, Iterable

import pendulum

from ..core.rounding import round_optional
from ..schemas import (
    EnrollmentInput,
    EvaluationRules,
    ExamReference,
    RecoveryPolicy,
    RecoveryRecord,
)


class StorageRecordAdapter:
    """Adapter converting stored enrollment rows into ``EnrollmentInput``."""

    source = "storage"

    def __init__(self, *, default_rules: EvaluationRules | dict[str, Any] | None = None) -> None:
        if isinstance(default_rules, dict):
            default_rules = EvaluationRules.model_validate(default_rules)
        self._default_rules = default_rules or EvaluationRules()

    @property
    def default_rules(self) -> EvaluationRules:
        return self._default_rules

    def can_handle(self, payload: dict[str, Any]) -> bool:
        if not isinstance(payload, dict):
            return False
        rules = payload.get("rules")
        if isinstance(rules, dict) and "recovery_policy" in rules:
            return False
        return "enrollment_id" in payload and "latest_recovery" not in payload

    def parse_enrollment(self, payload: dict[str, Any]) -> EnrollmentInput:
        _require_object(payload, "enrollment payload")
        enrollment_id = payload.get("enrollment_id")
        if enrollment_id in (None, ""):
            raise ValueError("missing enrollment_id")

        recoveries = payload.get("recoveries")
        if recoveries is None and payload.get("recovery") is not None:
            recoveries = [payload["recovery"]]

        return EnrollmentInput(
            enrollment_id=str(enrollment_id),
            exams=tuple(self.parse_exams(_require_list(payload.get("exams") or [], "exams"))),
            rules=self.parse_rules(payload.get("rules")),
            latest_recovery=self.latest_recovery(_require_list(recoveries or [], "recoveries")),
        )

    @staticmethod
    def parse_exams(rows: Iterable[dict[str, Any]]) -> list[ExamReference]:
        exams: list[ExamReference] = []
        for row in rows:
            _require_object(row, "exam row")
            if row.get("active") is False:
                continue
            exams.append(
                ExamReference(
                    id=str(row["id"]),
                    label=str(row.get("label") or ""),
                    weight=round_optional(_to_float(row.get("weight")), 2) or 0.0,
                    score=round_optional(_to_float(row.get("score")), 1),
                )
            )
        return exams

    def parse_rules(self, row: dict[str, Any] | None) -> EvaluationRules:
        if not row:
            return self._default_rules
        _require_object(row, "rules")

        min_average = round_optional(_to_float(row.get("min_passing_average")), 1)
        policy = RecoveryPolicy(
            enabled=bool(row.get("recovery_enabled", False)),
            models=tuple(row.get("recovery_models") or ()),
            application_order=tuple(row.get("application_order") or ()),
            max_recovery_score=round_optional(_to_float(row.get("max_recovery_score")), 1),
            final_exam_weight=round_optional(_to_float(row.get("final_exam_weight")), 2),
        )
        return EvaluationRules(
            min_passing_average=(
                min_average
                if min_average is not None
                else self._default_rules.min_passing_average
            ),
            recovery_policy=policy,
        )

    @staticmethod
    def latest_recovery(rows: list[dict[str, Any]]) -> RecoveryRecord | None:
        """Most recent attempt by ``applied_at``; undated rows rank by position."""
        if not rows:
            return None
        for row in rows:
            _require_object(row, "recovery row")

        def sort_key(item: tuple[int, dict[str, Any]]) -> tuple[bool, Any, int]:
            index, row = item
            applied_at = _parse_datetime(row.get("applied_at"))
            return (applied_at is not None, applied_at, index)

        _, row = max(enumerate(rows), key=sort_key)
        return RecoveryRecord(
            id=None if row.get("id") is None else str(row["id"]),
            exam_id=None if row.get("exam_id") is None else str(row["exam_id"]),
            recovery_score=round_optional(_to_float(row.get("recovery_score")), 1),
            final_score=round_optional(_to_float(row.get("final_score")), 1),
            applied_at=row.get("applied_at"),
            notes=row.get("notes"),
        )


def _to_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"expected a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"expected a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise ValueError(f"expected a finite number, got {value!r}")
    return number


def _require_object(value: Any, what: str) -> None:
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be an object, got {type(value).__name__}")


def _require_list(value: Any, what: str) -> list[Any]:
    if not isinstance(value, list):
        raise ValueError(f"{what} must be a list, got {type(value).__name__}")
    return value


def _parse_datetime(value: Any) -> pendulum.DateTime | None:
    if not value:
        return None
    try:
        parsed = pendulum.parse(str(value))
    except (ValueError, pendulum.parsing.exceptions.ParserError):
        return None
    if not isinstance(parsed, pendulum.DateTime):
        return None
    return parsed
