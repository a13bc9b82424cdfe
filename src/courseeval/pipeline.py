"""Batch evaluation pipeline assembly and execution."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List

import pendulum

from .adapters import EnrollmentAdapter, NativeRecordAdapter, StorageRecordAdapter
from .core import EvaluationOrchestrator
from .schemas import EnrollmentInput
from .validation import EvaluationInputError, validate_inputs
from .logging import get_logger
from . import __version__


class AdapterRegistry:
    """Registry mapping record sources to enrollment adapters."""

    def __init__(self, adapters: Iterable[EnrollmentAdapter], *, default_source: str = "storage"):
        self._adapters = {adapter.source: adapter for adapter in adapters}
        self._default_source = default_source

    def get(self, source: str) -> EnrollmentAdapter:
        try:
            return self._adapters[source]
        except KeyError as exc:
            raise KeyError(f"Unsupported source: {source!r}") from exc

    def detect(self, payload: dict) -> EnrollmentAdapter:
        """Adapter for a payload without an explicit source."""
        default = self._adapters.get(self._default_source)
        if default is not None and default.can_handle(payload):
            return default
        for adapter in self._adapters.values():
            if adapter.can_handle(payload):
                return adapter
        if default is None:
            raise KeyError(f"Unsupported source: {self._default_source!r}")
        return default

    def sources(self) -> List[str]:
        return list(self._adapters.keys())


class EnrollmentLoadError(ValueError):
    """Raised when enrollment loading encounters invalid records."""

    def __init__(self, errors: list[str], partial: list[EnrollmentInput]):
        super().__init__("Enrollment loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Enrollment loading failed: {self.errors}"


class EnrollmentLoader:
    """Load enrollment records from JSON lines through adapters."""

    def __init__(self, registry: AdapterRegistry):
        self._registry = registry

    def load(self, path: Path) -> list[EnrollmentInput]:
        enrollments: list[EnrollmentInput] = []
        errors: list[str] = []
        with path.open("r", encoding="utf-8") as handle:
            for idx, line in enumerate(handle, start=1):
                raw = line.strip()
                if not raw:
                    continue
                try:
                    record = json.loads(raw)
                except json.JSONDecodeError as exc:
                    errors.append(f"line {idx}: invalid JSON ({exc})")
                    continue
                if not isinstance(record, dict):
                    errors.append(f"line {idx}: record must be a JSON object")
                    continue
                source = record.get("source")
                payload = record.get("payload", record)
                try:
                    adapter = self._registry.get(source) if source else self._registry.detect(payload)
                except KeyError:
                    known = ", ".join(self._registry.sources())
                    errors.append(f"line {idx}: unsupported source '{source}' (known: {known})")
                    continue
                try:
                    enrollment = adapter.parse_enrollment(payload)
                except (ValueError, KeyError, TypeError) as exc:
                    errors.append(f"line {idx}: {exc}")
                    continue
                enrollments.append(enrollment)
        if errors:
            raise EnrollmentLoadError(errors, enrollments)
        return enrollments


class OutputWriter:
    """Persist evaluation reports."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


class EvaluationPipeline:
    """End-to-end batch evaluation of enrollments."""

    def __init__(
        self,
        *,
        orchestrator: EvaluationOrchestrator,
        registry: AdapterRegistry,
        loader: EnrollmentLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._orchestrator = orchestrator
        self._registry = registry
        self._loader = loader or EnrollmentLoader(registry)
        self._writer = writer or OutputWriter()
        self._logger = get_logger("pipeline")

    def run(
        self,
        *,
        enrollments_path: Path,
        output_path: Path,
        audit_logger: "AuditLogger | None" = None,
        strict: bool = False,
    ) -> list[dict]:
        errors: list[str] = []
        try:
            enrollments = self._loader.load(enrollments_path)
        except EnrollmentLoadError as exc:
            if strict:
                raise
            enrollments = exc.partial
            errors.extend(exc.errors)
            self._logger.warning("enrollments.partial_load", errors=exc.errors)

        results: list[dict] = []
        for enrollment in enrollments:
            try:
                validate_inputs(enrollment.exams, enrollment.rules, enrollment.latest_recovery)
            except EvaluationInputError as exc:
                if strict:
                    raise
                errors.extend(f"enrollment {enrollment.enrollment_id}: {error}" for error in exc.errors)
                self._logger.warning(
                    "evaluation.invalid_input",
                    enrollment_id=enrollment.enrollment_id,
                    errors=exc.errors,
                )
                continue

            started = pendulum.now()
            report = self._orchestrator.evaluate(
                enrollment.exams,
                enrollment.rules,
                enrollment.latest_recovery,
            )
            elapsed_ms = (pendulum.now() - started).total_seconds() * 1000

            entry = {"enrollment_id": enrollment.enrollment_id, **report.to_dict()}
            results.append(entry)

            if audit_logger:
                audit_logger.append(
                    {
                        "enrollment_id": enrollment.enrollment_id,
                        "input": enrollment.model_dump(mode="json"),
                        "result": entry,
                    }
                )

            self._logger.info(
                "evaluation.result",
                enrollment_id=enrollment.enrollment_id,
                initial_average=report.initial_average,
                initial_status=report.initial_status.value,
                final_average=report.final_average,
                final_status=report.final_status.value,
                recovery_applied=report.recovery_outcome is not None,
                elapsed_ms=round(elapsed_ms, 3),
            )

        metadata = {
            "enrollment_count": len(enrollments),
            "evaluated_count": len(results),
            "errors": errors,
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        }
        self._writer.write(output_path, {"metadata": metadata, "results": results})
        return results


def default_registry() -> AdapterRegistry:
    """Return the default adapter registry."""
    return AdapterRegistry(adapters=[StorageRecordAdapter(), NativeRecordAdapter()])


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False))
            handle.write("\n")
