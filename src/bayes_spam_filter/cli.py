"""Command-line interface for the Bayesian spam filter.

Provides ``evaluate`` and ``features`` commands with rich terminal output
using the ``click`` and ``rich`` libraries.

Usage::

    bayes-spam-filter evaluate training_set.data test_set.data
    bayes-spam-filter evaluate --output json training_set.data test_set.data
    bayes-spam-filter features --label spam --top 10 training_set.data
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Callable

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .classifier import SpamFilter
from .config import DEFAULT_OFFSET, DEFAULT_WORD_SET_SIZE, FilterConfig
from .exceptions import SpamFilterError
from .models import Label
from .parsers import read_records
from .pipeline import PipelineReport, run_pipeline
from .probability import ProbabilityModel

console = Console()


def _setup_logging(verbose: bool) -> None:
    """Route package logging through rich, on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _config_options(func: Callable) -> Callable:
    """Attach the options that build a FilterConfig."""
    options = [
        click.option("--word-set-size", "-k", type=click.IntRange(min=1),
                     default=DEFAULT_WORD_SET_SIZE, show_default=True,
                     envvar="BAYES_SPAM_WORD_SET_SIZE",
                     help="Number of word frequencies per record."),
        click.option("--offset", "-e", type=float, default=DEFAULT_OFFSET,
                     show_default=True, envvar="BAYES_SPAM_OFFSET",
                     help="Smoothing offset added to every frequency."),
        click.option("--skip-malformed", is_flag=True, default=False,
                     envvar="BAYES_SPAM_SKIP_MALFORMED",
                     help="Skip unparseable lines instead of failing the run."),
        click.option("--verbose", "-v", is_flag=True, default=False,
                     help="Enable debug logging."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


_tie_option = click.option(
    "--tie", type=click.Choice([label.value for label in Label]),
    default=Label.HAM.value, show_default=True, envvar="BAYES_SPAM_TIE",
    help="Prediction when the log-likelihood ratio is exactly 0.",
)


def _build_config(
    word_set_size: int,
    offset: float,
    skip_malformed: bool,
    tie: str = Label.HAM.value,
) -> FilterConfig:
    try:
        return FilterConfig(
            word_set_size=word_set_size,
            offset=offset,
            tie_label=Label(tie),
            skip_malformed=skip_malformed,
        )
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


@click.group()
@click.version_option(package_name="bayes-spam-filter")
def main() -> None:
    """📧 Bayesian Spam Filter: Naive Bayes over word-frequency vectors.

    Train on one labeled corpus and evaluate on another.
    """
    pass


@main.command()
@click.argument("train", type=click.Path(path_type=Path))
@click.argument("test", type=click.Path(path_type=Path))
@_config_options
@_tie_option
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
@click.option("--save", "-s", type=click.Path(path_type=Path), default=None,
              help="Save results to a JSON file.")
def evaluate(
    train: Path,
    test: Path,
    word_set_size: int,
    offset: float,
    tie: str,
    skip_malformed: bool,
    verbose: bool,
    output: str,
    save: Path | None,
) -> None:
    """Train on TRAIN and report accuracy on TEST.

    Example: bayes-spam-filter evaluate training_set.data test_set.data
    """
    _setup_logging(verbose)
    config = _build_config(word_set_size, offset, skip_malformed, tie)

    with console.status("[bold blue]Training and evaluating...", spinner="dots"):
        try:
            report = run_pipeline(train, test, config)
        except (SpamFilterError, OSError) as e:
            console.print(f"[bold red]Error:[/] {e}")
            sys.exit(1)

    if output == "json":
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        _render_report(report)

    if save:
        save.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")
        console.print(f"\n[dim]Results saved to {save}[/]")


@main.command()
@click.argument("train", type=click.Path(path_type=Path))
@_config_options
@click.option("--label", "-l", type=click.Choice([label.value for label in Label]),
              default=Label.SPAM.value, help="Class to rank word indices for.")
@click.option("--top", "-n", type=click.IntRange(min=1), default=10, show_default=True,
              help="Number of word indices to show.")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
def features(
    train: Path,
    word_set_size: int,
    offset: float,
    skip_malformed: bool,
    verbose: bool,
    label: str,
    top: int,
    output: str,
) -> None:
    """Show the word indices that most favour one class.

    Example: bayes-spam-filter features --label spam training_set.data
    """
    _setup_logging(verbose)
    config = _build_config(word_set_size, offset, skip_malformed)

    with console.status("[bold blue]Training...", spinner="dots"):
        try:
            model = SpamFilter(config).train(read_records(train, config))
        except (SpamFilterError, OSError) as e:
            console.print(f"[bold red]Error:[/] {e}")
            sys.exit(1)

    ranked = model.most_informative_features(Label(label), top_n=top)

    if output == "json":
        click.echo(json.dumps(
            [{"word_index": idx, "log_ratio": ratio} for idx, ratio in ranked],
            indent=2,
        ))
    else:
        _render_features(model, Label(label), ranked)


# ------------------------------------------------------------------
# Rich rendering helpers
# ------------------------------------------------------------------

def _render_report(report: PipelineReport) -> None:
    """Render a full PipelineReport with rich formatting."""
    ev = report.evaluation
    cm = ev.confusion

    console.print()
    console.print(Panel(
        f"Training: [bold]{report.train_path}[/] | "
        f"{report.training_size} emails "
        f"(spam {report.training_spam}, ham {report.training_ham})\n"
        f"Test: [bold]{report.test_path}[/] | "
        f"{ev.total} emails "
        f"(spam {cm.support(Label.SPAM)}, ham {cm.support(Label.HAM)})",
        title="📧 Bayesian Spam Filter",
        border_style="blue",
    ))

    table = Table(title="Confusion Matrix", show_lines=True)
    table.add_column("True \\ Predicted", style="cyan")
    table.add_column("Spam", justify="right")
    table.add_column("Ham", justify="right")
    table.add_row("Spam", str(cm.spam_as_spam), str(cm.spam_as_ham))
    table.add_row("Ham", str(cm.ham_as_spam), str(cm.ham_as_ham))
    console.print(table)

    skipped = report.train_stats.skipped + report.test_stats.skipped
    if skipped:
        console.print(f"[yellow]Skipped {skipped} malformed line(s).[/]")
    if ev.ties:
        console.print(f"[dim]{ev.ties} tie(s) resolved as {report.config.tie_label.value}.[/]")

    pct = report.accuracy_percent
    if pct >= 90:
        style = "bold green"
    elif pct >= 70:
        style = "bold yellow"
    else:
        style = "bold red"
    console.print(
        f"Precision: {ev.precision:.4f} | Recall: {ev.recall:.4f} | F1: {ev.f1:.4f}"
    )
    console.print(f"Prediction accuracy: [{style}]{pct:.2f}%[/]")
    console.print()


def _render_features(
    model: ProbabilityModel,
    label: Label,
    ranked: list[tuple[int, float]],
) -> None:
    """Render ranked word indices as a rich table."""
    table = Table(title=f"Most informative words ({label.value})")
    table.add_column("#", justify="right", width=4)
    table.add_column("Word index", justify="right", style="cyan")
    table.add_column("Log ratio", justify="right")
    table.add_column(f"log P(word|{label.value})", justify="right", style="dim")

    for i, (idx, ratio) in enumerate(ranked, 1):
        table.add_row(str(i), str(idx), f"{ratio:+.4f}", f"{model.class_log_prob[label][idx]:.4f}")

    console.print(table)
    console.print()


if __name__ == "__main__":
    main()
