from __future__ import annotations

import logging

import typer
from dotenv import load_dotenv

from .config import DEFAULT_RUNS, Settings
from .errors import BenchError
from .report import format_report
from .runner import run_timed
from .search import build_client, make_operation
from .stats import summarize

logger = logging.getLogger(__name__)


def _get_client(settings: Settings):
    return build_client(settings)


def main(
    runs: int = typer.Option(DEFAULT_RUNS, "--runs", min=1, help="Number of timed requests"),
):
    """Time the benchmark request ``--runs`` times and print mean and percentiles."""
    load_dotenv()

    try:
        settings = Settings.from_env()
        logging.basicConfig(
            level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )
        # per-call mode builds its clients inside the timed operation
        client = None if settings.client_per_call else _get_client(settings)
        operation = make_operation(settings, client=client, client_factory=_get_client)
        outcome = run_timed(operation, runs)
        if not outcome.ok:
            raise outcome.error
        summary = summarize(outcome.samples)
    except BenchError as exc:
        typer.secho(f"benchmark failed: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from None

    logger.info("benchmark done operation=%s runs=%d", settings.operation, summary.count)
    for line in format_report(summary):
        typer.echo(line)


app = typer.Typer(add_completion=False)
app.command()(main)


if __name__ == "__main__":
    app()
