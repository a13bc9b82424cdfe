"""Adapter for payloads already shaped like ``EnrollmentInput``."""

from __future__ import annotations

from typing import Any

from ..schemas import EnrollmentInput


class NativeRecordAdapter:
    source = "native"

    def can_handle(self, payload: dict[str, Any]) -> bool:
        if not isinstance(payload, dict):
            return False
        rules = payload.get("rules")
        return "latest_recovery" in payload or (
            isinstance(rules, dict) and "recovery_policy" in rules
        )

    def parse_enrollment(self, payload: dict[str, Any]) -> EnrollmentInput:
        return EnrollmentInput.model_validate(payload)
