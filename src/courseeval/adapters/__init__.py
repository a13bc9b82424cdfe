"""Adapters turning stored enrollment records into engine inputs."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..schemas import EnrollmentInput
from .native import NativeRecordAdapter
from .storage import StorageRecordAdapter


@runtime_checkable
class EnrollmentAdapter(Protocol):
    """Record adapter contract.

    Implementations map one source-specific enrollment payload onto the
    provider-neutral ``EnrollmentInput`` consumed by the evaluation engine.
    """

    source: str

    def can_handle(self, payload: dict[str, Any]) -> bool:
        """Return True when the adapter understands the payload layout."""

    def parse_enrollment(self, payload: dict[str, Any]) -> EnrollmentInput:
        """Parse a payload into engine inputs."""


__all__ = ["EnrollmentAdapter", "NativeRecordAdapter", "StorageRecordAdapter"]
