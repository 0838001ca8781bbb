"""Command-line interface for spam-master.

Provides ``run``, ``classify``, and ``tokens`` commands with rich
terminal output using the ``click`` and ``rich`` libraries.

Usage::

    spam-master run data/
    spam-master run data/ --output json --save results.json
    spam-master classify data/ message1.txt message2.txt
    spam-master tokens data/ --top 25
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import ClassifierConfig
from .engine import ClassificationEngine, DocumentClass, TestRun
from .exceptions import SpamMasterError

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _get_class_style(doc_class: DocumentClass) -> str:
    """Return a rich style string for a document class."""
    return {
        DocumentClass.SPAM: "bold red",
        DocumentClass.HAM: "green",
    }.get(doc_class, "")


def _build_engine(root: Path, threshold: float | None, smoothing: float | None) -> ClassificationEngine:
    config = ClassifierConfig.from_env(spam_threshold=threshold, smoothing_constant=smoothing)
    return ClassificationEngine(root, config=config)


def _warn_missing(engine: ClassificationEngine, include_test: bool = True) -> None:
    for path in engine.layout.missing(include_test=include_test):
        err_console.print(
            f"[yellow]Warning:[/] collection {path} not found, treating as empty",
            soft_wrap=True,
        )


def _fail(exc: Exception) -> None:
    console.print(f"[bold red]Error:[/] {exc}")
    sys.exit(1)


_root_argument = click.argument(
    "root",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
)
_threshold_option = click.option(
    "--threshold", "-t", type=float, default=None,
    help="Spam probability a document must exceed to be predicted spam.",
)
_smoothing_option = click.option(
    "--smoothing", type=float, default=None,
    help="Constant added to per-class file counts.",
)


@click.group()
@click.version_option(package_name="spam-master")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
def main(verbose: bool) -> None:
    """📧 Spam Master — word-frequency Bayesian spam filter.

    ROOT must contain train/ham, train/ham2, train/spam, test/ham and
    test/spam document directories.
    """
    load_dotenv()
    _configure_logging(verbose)


@main.command()
@_root_argument
@_threshold_option
@_smoothing_option
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
@click.option("--save", "-s", type=click.Path(path_type=Path), default=None,
              help="Save results to a JSON file.")
def run(
    root: Path,
    threshold: float | None,
    smoothing: float | None,
    output: str,
    save: Path | None,
) -> None:
    """Train on ROOT/train and report predictions for ROOT/test.

    Example: spam-master run data/
    """
    try:
        engine = _build_engine(root, threshold, smoothing)
        _warn_missing(engine)
        if output == "json":
            engine.train()
            test_run = engine.test()
        else:
            with console.status("[bold blue]Training...", spinner="dots"):
                engine.train()
            with console.status("[bold blue]Testing...", spinner="dots"):
                test_run = engine.test()
    except SpamMasterError as e:
        _fail(e)

    if output == "json":
        click.echo(json.dumps(test_run.to_dict(), indent=2))
    else:
        _render_run(test_run, engine.root)

    if save:
        save.write_text(json.dumps(test_run.to_dict(), indent=2), encoding="utf-8")
        console.print(f"\n[dim]Results saved to {save}[/]")


@main.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("files", nargs=-1, required=True,
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
@_threshold_option
@_smoothing_option
def classify(
    root: Path,
    files: tuple[Path, ...],
    threshold: float | None,
    smoothing: float | None,
) -> None:
    """Train on ROOT/train and classify individual FILES.

    Example: spam-master classify data/ inbox/message.txt
    """
    try:
        engine = _build_engine(root, threshold, smoothing)
        _warn_missing(engine, include_test=False)
        engine.train()
        table = Table(title="Classification", show_lines=False)
        table.add_column("File", style="white")
        table.add_column("Spam Probability", justify="right", width=18)
        table.add_column("Predicted", justify="center", width=10)

        for path in files:
            result = engine.classify_document(path)
            predicted = result.predicted_class
            probability = result.rounded_probability if result.ok else "[dim]unreadable[/]"
            table.add_row(
                str(path),
                probability,
                Text(predicted.value, style=_get_class_style(predicted)),
            )
    except SpamMasterError as e:
        _fail(e)

    console.print(table)


@main.command()
@_root_argument
@click.option("--top", "-n", type=click.IntRange(min=1), default=20, show_default=True,
              help="Number of tokens to list.")
@click.option("--ham", is_flag=True, help="List the tokens most indicative of ham instead.")
@_smoothing_option
def tokens(root: Path, top: int, ham: bool, smoothing: float | None) -> None:
    """List the tokens most indicative of spam (or ham).

    Example: spam-master tokens data/ --top 10
    """
    try:
        engine = _build_engine(root, None, smoothing)
        _warn_missing(engine, include_test=False)
        engine.train()
        ranked = engine.most_indicative(top, spam=not ham)
    except SpamMasterError as e:
        _fail(e)

    label = "Ham" if ham else "Spam"
    table = Table(title=f"Most {label}-Indicative Tokens")
    table.add_column("#", justify="right", width=4)
    table.add_column("Token", style="cyan")
    table.add_column("P(spam | token)", justify="right")
    table.add_column("Spam Files", justify="right")
    table.add_column("Ham Files", justify="right")

    for i, (token, probability) in enumerate(ranked, 1):
        record = engine.model.lookup(token)
        table.add_row(
            str(i),
            token,
            f"{probability:.5f}",
            str(record.spam_file_count),
            str(record.ham_file_count),
        )

    console.print(table)


# ------------------------------------------------------------------
# Rich rendering helpers
# ------------------------------------------------------------------

def _render_run(test_run: TestRun, root: Path) -> None:
    """Render a TestRun as a results table plus summary panel."""
    table = Table(title=f"Test Results — {root}", show_lines=False)
    table.add_column("File", style="white")
    table.add_column("Actual", justify="center", width=8)
    table.add_column("Predicted", justify="center", width=10)
    table.add_column("Spam Probability", justify="right", width=18)

    for result in test_run.results:
        predicted = result.predicted_class
        probability = result.rounded_probability
        if not result.ok:
            probability = f"[dim]{probability} (unreadable)[/]"
        table.add_row(
            result.filename,
            result.actual_class.value if result.actual_class else "-",
            Text(predicted.value, style=_get_class_style(predicted)),
            probability,
        )

    console.print(table)

    console.print(Panel(test_run.metrics.summary(), title="Summary", border_style="blue"))


if __name__ == "__main__":
    main()
