"""Typer CLI entrypoint for batch enrollment evaluation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError

from .config import ConfigManager
from .container import create_container
from .logging import configure_logging
from .pipeline import AuditLogger, EnrollmentLoadError
from .validation import EvaluationInputError

app = typer.Typer(help="Course evaluation and recovery CLI.")


def _load_settings(config: Path | None) -> dict[str, Any]:
    if not config:
        return {}
    try:
        return ConfigManager(config.parent).settings(config.name)
    except (ValueError, ValidationError) as exc:
        raise typer.BadParameter(f"Invalid config file: {exc}", param_name="config") from exc


@app.command()
def run(
    enrollments: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Enrollments JSONL path."),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    ),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
    strict: bool = typer.Option(False, help="Fail the run on any invalid enrollment."),
) -> None:
    """Evaluate every enrollment in a JSONL file."""
    settings = _load_settings(config)

    configure_logging(log_level)

    container = create_container(settings=settings)
    pipeline = container.pipeline()
    audit_logger = AuditLogger(audit_log) if audit_log else None

    try:
        results = pipeline.run(
            enrollments_path=enrollments,
            output_path=output,
            audit_logger=audit_logger,
            strict=strict,
        )
    except (EnrollmentLoadError, EvaluationInputError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"Evaluated {len(results)} enrollments. Results saved to {output}.")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
