from __future__ import annotations

import signal
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, NoReturn, Optional

import typer

from cli.config import RunConfig, load_config
from cli.render import render_json, render_log_summary
from logging_config import configure_logging
from sensors.registry import build_default_registry
from services.log_reader import summarize_log
from services.sampler import Sampler, SamplerError

app = typer.Typer(
    help="Simulate temperature and pressure sensors and log their readings to CSV.",
    context_settings={"help_option_names": ["-h", "--help"]},
)

_STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@contextmanager
def _stop_on_signals(sampler: Sampler) -> Iterator[None]:
    """Turn SIGINT/SIGTERM into a graceful ``sampler.stop()`` while running."""

    def handler(_signum, _frame) -> None:
        sampler.stop()

    previous = {signum: signal.signal(signum, handler) for signum in _STOP_SIGNALS}
    try:
        yield
    finally:
        for signum, original in previous.items():
            signal.signal(signum, original)


def build_sampler(config: RunConfig) -> Sampler:
    registry = build_default_registry(config.sensor_kinds, seed=config.seed)
    return Sampler(
        registry=registry,
        output_path=config.output_path,
        interval=config.interval,
        time_step=config.time_step,
        console=typer.echo,
    )


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Diagnostic log level written to stderr (defaults to LOG_LEVEL env or WARNING).",
    ),
) -> None:
    """Entry point for the CLI."""
    configure_logging(log_level.upper() if log_level else None)


@app.command("run")
def run_command(
    samples: Optional[int] = typer.Option(
        None, "--samples", "-n", min=0, help="Number of samples to take (default 20)."
    ),
    interval: Optional[float] = typer.Option(
        None, "--interval", "-i", min=0.0, help="Seconds to wait between samples (default 1)."
    ),
    step: Optional[float] = typer.Option(
        None, "--step", min=0.0, help="Elapsed-time increment per sample (default 1.0)."
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", dir_okay=False, help="CSV file to write (default sensor_data.csv)."
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed", help="Base seed for reproducible readings."
    ),
    sensor: Optional[List[str]] = typer.Option(
        None,
        "--sensor",
        "-s",
        help="Sensor kind to register, in column order; repeatable (default: temperature, pressure).",
    ),
    as_json: bool = typer.Option(
        False, "--json", help="Print the run summary as JSON after the sample stream."
    ),
) -> None:
    """Poll the sensors at a fixed interval and log every sample."""
    config = load_config(
        output_path=output,
        sample_count=samples,
        interval=interval,
        time_step=step,
        seed=seed,
        sensor_kinds=sensor,
    )
    try:
        sampler = build_sampler(config)
    except ValueError as exc:
        _fail(str(exc))

    try:
        with _stop_on_signals(sampler):
            summary = sampler.run(config.sample_count)
    except SamplerError as exc:
        _fail(f"Fatal: {exc}")

    if as_json:
        render_json(summary)


@app.command("summarize")
def summarize_command(
    path: Path = typer.Argument(..., dir_okay=False, help="Sensor log CSV to summarize."),
    as_json: bool = typer.Option(False, "--json", help="Print the summary as JSON."),
) -> None:
    """Compute per-sensor statistics for an existing log."""
    try:
        summary = summarize_log(path)
    except FileNotFoundError:
        _fail(f"File {path} does not exist.")
    except ValueError as exc:
        _fail(str(exc))

    if as_json:
        render_json(summary)
    else:
        render_log_summary(summary)
