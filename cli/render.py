from __future__ import annotations

from typing import Any, Iterable, Sequence

import typer

from models.schemas import ColumnStats, LogSummary, RowError, RunSummary


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def _fmt(value: float | None) -> str:
    return "n/a" if value is None else f"{value:.2f}"


def render_columns(columns: Sequence[ColumnStats]) -> None:
    echo_heading("Columns")
    if not columns:
        typer.echo("No sensor columns.")
        return
    for column in columns:
        typer.echo(
            f"  - {column.label}: min={_fmt(column.min_value)} "
            f"max={_fmt(column.max_value)} mean={_fmt(column.mean_value)}"
        )


def render_errors(errors: Sequence[RowError]) -> None:
    echo_heading("Errors")
    if errors:
        for error in errors:
            typer.echo(f"  - row {error.row_number}: {error.reason}")
    else:
        typer.echo("No errors recorded.")


def render_log_summary(summary: LogSummary) -> None:
    echo_heading("Sensor Log")
    echo_key_values([("path", summary.path), ("row_count", summary.row_count)])
    typer.echo()
    render_columns(summary.columns)
    typer.echo()
    render_errors(summary.errors)


def render_json(summary: RunSummary | LogSummary) -> None:
    typer.echo(summary.model_dump_json(indent=2))
