"""CLI entrypoint for stepscore: typer app with a `run` command."""

import asyncio
import json
import sys
import time
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any

import structlog
import typer

from stepscore.cli.output.report import ItemRecorder, build_report
from stepscore.cli.resolve import resolve_object, resolve_scorers
from stepscore.config.infrastructure.observer import StructlogConfigObserver
from stepscore.config.infrastructure.yaml_loader import YamlConfigLoader
from stepscore.core.errors import StepScoreError
from stepscore.dataset.infrastructure.jsonl_loader import JsonlDatasetLoader
from stepscore.dataset.infrastructure.observer import StructlogDatasetObserver
from stepscore.experiment.application.runner import ExperimentRunner
from stepscore.experiment.domain.observer import ExperimentObserver
from stepscore.experiment.domain.result import ExperimentResult
from stepscore.experiment.infrastructure.composite_observer import (
    CompositeExperimentObserver,
)
from stepscore.experiment.infrastructure.observer import StructlogExperimentObserver
from stepscore.experiment.infrastructure.progress_observer import (
    ProgressExperimentObserver,
)
from stepscore.judge.infrastructure.factory import LiteLLMJudgeFactory
from stepscore.judge.infrastructure.observer import StructlogJudgeObserver
from stepscore.pipeline.application.runner import ScoringRunner
from stepscore.pipeline.infrastructure.observer import StructlogScoringObserver

app = typer.Typer(add_completion=False)


@app.callback()
def main() -> None:
    """Score LLM outputs with multi-stage scorer pipelines."""


def _configure_structlog(log_format: str) -> None:
    """Configure structlog based on the requested format."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        typer.echo(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.")
        raise typer.Exit(code=1)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def output_stem(config_name: str, experiment_id: str) -> str:
    """Build the output file stem: {config_name}_{YYYYMMDD}_{short_id}."""
    date_str = datetime.now().strftime("%Y%m%d")
    return f"{config_name}_{date_str}_{experiment_id[:8]}"


# ---------------------------------------------------------------------------
# ANSI helpers
# ---------------------------------------------------------------------------
_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_CYAN = "\033[36m"
_YELLOW = "\033[33m"
_GREEN = "\033[32m"
_RED = "\033[31m"
_BLUE = "\033[34m"
_WHITE = "\033[97m"


def _score_color(score: float) -> str:
    if score >= 0.8:
        return _GREEN
    if score >= 0.5:
        return _YELLOW
    return _RED


def _rule(width: int = 72, color: str = _DIM) -> None:
    typer.echo(f"{color}{'─' * width}{_RESET}")


def _format_elapsed(elapsed_seconds: float) -> str:
    """Format elapsed seconds as '1m 23.4s' or '5.2s'."""
    minutes, seconds = divmod(elapsed_seconds, 60)
    if minutes >= 1:
        return f"{int(minutes)}m {seconds:.1f}s"
    return f"{elapsed_seconds:.1f}s"


def flatten_scores(scores: dict[str, Any]) -> list[tuple[str, float]]:
    """Flatten averaged scores into (label, mean) rows.

    Workflow scorers are labelled ``workflow/<scorer>`` and step scorers
    ``<step>/<scorer>``.
    """
    rows: list[tuple[str, float]] = []
    for key, value in scores.items():
        if key == "workflow":
            rows.extend((f"workflow/{name}", mean) for name, mean in value.items())
        elif key == "steps":
            for step_id, step_scores in value.items():
                rows.extend((f"{step_id}/{name}", mean) for name, mean in step_scores.items())
        else:
            rows.append((key, value))
    return rows


def _print_summary(
    config_name: str,
    experiment_id: str,
    dataset_sha256: str,
    result: ExperimentResult,
    json_path: Path,
    elapsed_seconds: float,
    sandbox: bool,
) -> None:
    """Print a colorized table of averaged scores to stdout."""
    typer.echo("")
    _rule(color=_CYAN)
    typer.echo(f"{_CYAN}{_BOLD}  stepscore  ·  Experiment Complete{_RESET}")
    _rule(color=_CYAN)
    typer.echo("")

    meta_rows: list[tuple[str, str]] = [
        ("Experiment ID", f"{experiment_id[:8]}-..."),
        ("Config", config_name),
        ("Dataset SHA256", f"{dataset_sha256[:16]}..."),
        ("Items", str(result.summary.total_items)),
        ("Elapsed", _format_elapsed(elapsed_seconds=elapsed_seconds)),
        ("Results JSON", str(json_path)),
    ]
    label_w = max(len(label) for label, _ in meta_rows)
    for label, value in meta_rows:
        typer.echo(f"  {_DIM}{label:<{label_w}}{_RESET}  {_WHITE}{value}{_RESET}")
    if sandbox:
        typer.echo("")
        typer.echo(f"  {_YELLOW}{_BOLD}Sandbox mode: judge outputs were mocked.{_RESET}")

    rows = flatten_scores(result.scores)
    typer.echo("")
    _rule(color=_BLUE)
    typer.echo(f"{_BLUE}{_BOLD}  Average Scores{_RESET}")
    _rule(color=_BLUE)
    if not rows:
        typer.echo(f"  {_DIM}(no scores recorded){_RESET}")
    else:
        scorer_w = max(len("Scorer"), *(len(label) for label, _ in rows))
        typer.echo(f"  {_DIM}{'Scorer':<{scorer_w}}  {'Mean':>6}{_RESET}")
        typer.echo(f"  {'─' * scorer_w}  {'─' * 6}")
        for label, mean in rows:
            color = _score_color(score=mean)
            typer.echo(
                f"  {_WHITE}{label:<{scorer_w}}{_RESET}  {color}{mean:>6.2f}{_RESET}"
            )

    typer.echo("")
    _rule(color=_CYAN)
    typer.echo("")


@app.command()
def run(
    config_path: Path = typer.Argument(..., help="Path to experiment config YAML"),
    output_dir: Path = typer.Option(
        Path("./results"),
        "--output-dir",
        "-o",
        help="Directory for output files",
    ),
    log_format: str = typer.Option(
        "console",
        "--log-format",
        help="Log format: 'console' or 'json'",
    ),
) -> None:
    """Run a stepscore experiment from a YAML config file."""
    _configure_structlog(log_format=log_format)
    try:
        loader = YamlConfigLoader(observer=StructlogConfigObserver())
        config = loader.load(path=config_path)

        dataset_loader = JsonlDatasetLoader(observer=StructlogDatasetObserver())
        load_result = dataset_loader.load(config=config.dataset)

        judge_factory = (
            None
            if config.execution.sandbox
            else LiteLLMJudgeFactory(observer=StructlogJudgeObserver())
        )
        scoring_runner = ScoringRunner(
            judge_factory=judge_factory, observer=StructlogScoringObserver()
        )
        target = resolve_object(config.target)
        scorers = resolve_scorers(refs=config.scorers, runner=scoring_runner)

        observers: list[ExperimentObserver] = [StructlogExperimentObserver()]
        if log_format != "json":
            observers.append(ProgressExperimentObserver())
        experiment_runner = ExperimentRunner(
            observer=CompositeExperimentObserver(observers=observers)
        )

        experiment_id = str(uuid.uuid4())
        recorder = ItemRecorder()
        started_at = time.monotonic()
        result = asyncio.run(
            experiment_runner.run(
                data=load_result.items,
                scorers=scorers,
                target=target,
                on_item_complete=recorder.record,
                concurrency=config.execution.concurrency,
                experiment_id=experiment_id,
            )
        )
        elapsed_seconds = time.monotonic() - started_at

        output_dir.mkdir(parents=True, exist_ok=True)
        json_path = (
            output_dir / f"{output_stem(config_name=config.name, experiment_id=experiment_id)}.json"
        )
        report = build_report(
            experiment_id=experiment_id,
            config=config,
            dataset_sha256=load_result.sha256,
            result=result,
            items=recorder.items,
        )
        json_path.write_text(json.dumps(report, indent=2), encoding="utf-8")

        _print_summary(
            config_name=config.name,
            experiment_id=experiment_id,
            dataset_sha256=load_result.sha256,
            result=result,
            json_path=json_path,
            elapsed_seconds=elapsed_seconds,
            sandbox=config.execution.sandbox,
        )

    except KeyboardInterrupt:
        typer.echo("Experiment interrupted.")
        sys.exit(1)
    except StepScoreError as exc:
        typer.echo(str(exc))
        sys.exit(1)
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"Unexpected error: {exc}\nPlease report this bug.")
        sys.exit(1)


if __name__ == "__main__":
    app()
