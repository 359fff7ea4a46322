#!/usr/bin/env python3
"""
allure-recorder CLI - inspect recorded test results

Usage:
    allure-recorder show <uuid>-result.json
    allure-recorder validate [RESULTS_DIR]
    allure-recorder config [--config FILE]
    allure-recorder --version
"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from . import __version__
from .config import DEFAULT_RESULTS_DIR, RESULTS_DIR_ENV, load_config
from .reporting import ResultValidator, Status, TestResult, TestStep

app = typer.Typer(
    name="allure-recorder",
    help="📋 allure-recorder - Allure result recorder for Python tests",
    add_completion=False,
)
console = Console()

STATUS_ICONS = {
    Status.PASSED: "✅",
    Status.FAILED: "❌",
    Status.BROKEN: "⚠️",
    Status.SKIPPED: "⏭️",
}


def version_callback(value: bool):
    if value:
        console.print(f"📋 allure-recorder v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
):
    """
    📋 allure-recorder - Allure result recorder for Python tests

    Inspect and validate the result files written by the recorder.
    """
    pass


def _format_duration(start: int, stop: int) -> str:
    return f"{max(stop - start, 0)}ms"


def _add_step(tree: Tree, step: TestStep) -> None:
    icon = STATUS_ICONS.get(step.status, "❓")
    node = tree.add(
        f"{icon} [bold]{escape(step.name)}[/bold] [dim]({_format_duration(step.start, step.stop)})[/dim]"
    )
    for param in step.parameters:
        node.add(f"[cyan]{escape(param.name)}[/cyan] = {escape(param.value)}")
    if step.status_details and step.status_details.message:
        node.add(f"[red]{escape(step.status_details.message)}[/red]")
    for attachment in step.attachments:
        node.add(f"📎 {escape(attachment.name)} [dim]{escape(attachment.type)} → {escape(attachment.source)}[/dim]")
    for child in step.steps:
        _add_step(node, child)


def _load_document(path: Path) -> dict:
    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("Result document must be a JSON object")
    return data


@app.command()
def show(
    result_file: Path = typer.Argument(
        ...,
        help="Path to a <uuid>-result.json file",
        exists=True,
        readable=True,
        dir_okay=False,
    ),
):
    """
    Show one test result as a tree of steps and attachments.
    """
    try:
        result = TestResult.from_dict(_load_document(result_file))
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        console.print(f"[red]❌ Cannot read result:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    icon = STATUS_ICONS.get(result.status, "❓")
    tree = Tree(f"{icon} [bold]{escape(result.name)}[/bold] [dim]({result.status.value})[/dim]")

    suite = result.label("suite")
    if suite:
        tree.add(f"[magenta]suite[/magenta]: {escape(suite)}")
    tree.add(f"[magenta]duration[/magenta]: {_format_duration(result.start, result.stop)}")
    if result.description:
        tree.add(f"[magenta]description[/magenta]: {escape(result.description)}")
    if result.status_details and result.status_details.message:
        tree.add(f"[red]{escape(result.status_details.message)}[/red]")
    for param in result.parameters:
        tree.add(f"[cyan]{escape(param.name)}[/cyan] = {escape(param.value)}")
    for link in result.links:
        tree.add(f"🔗 {escape(link.name)} [dim]{escape(link.url)}[/dim]")

    for step in result.steps:
        _add_step(tree, step)
    for attachment in result.attachments:
        tree.add(f"📎 {escape(attachment.name)} [dim]{escape(attachment.type)} → {escape(attachment.source)}[/dim]")

    console.print()
    console.print(tree)


@app.command()
def validate(
    results_dir: Path = typer.Argument(
        Path(DEFAULT_RESULTS_DIR),
        help="Directory containing *-result.json files",
        exists=True,
        file_okay=False,
    ),
    check_attachments: bool = typer.Option(
        True, "--check-attachments/--no-check-attachments",
        help="Require attachment files to exist next to the results"
    ),
):
    """
    Validate every result document in a results directory.

    Checks the document shape report generators expect, without
    combining results.
    """
    files = sorted(results_dir.glob("*-result.json"))
    if not files:
        console.print(f"[yellow]⚠️  No result files found in {escape(str(results_dir))}[/yellow]")
        raise typer.Exit(code=1)

    console.print(f"\n📄 Validating {len(files)} result file(s) in {escape(str(results_dir))}")

    table = Table(title="Result files")
    table.add_column("File", style="cyan")
    table.add_column("Test")
    table.add_column("Valid")

    failures: list[tuple[Path, str]] = []
    for path in files:
        try:
            data = _load_document(path)
        except (ValueError, OSError) as e:
            table.add_row(escape(path.name), "?", "❌")
            failures.append((path, f"❌ {path.name}: {e}"))
            continue

        validator = ResultValidator(
            data,
            attachments_dir=results_dir if check_attachments else None,
        )
        validation = validator.validate()
        table.add_row(escape(path.name), escape(str(data.get("name", "?"))), "✅" if validation.is_valid else "❌")
        if not validation.is_valid:
            failures.append((path, str(validation)))

    console.print()
    console.print(table)

    if failures:
        for path, message in failures:
            console.print(f"\n[bold]{escape(path.name)}[/bold]")
            console.print(escape(message))
        console.print(f"\n[red]❌ {len(failures)} invalid result file(s)[/red]")
        raise typer.Exit(code=1)

    console.print("\n[green]✅ All result files are valid[/green]")


@app.command()
def config(
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="Path to a recorder YAML config (default: ./allure-recorder.yaml)"
    ),
):
    """
    Show the effective recorder configuration.
    """
    recorder_config, validation = load_config(config_file)

    if recorder_config is None:
        console.print(f"\n[red]❌ Invalid configuration:[/red]")
        console.print(escape(str(validation)))
        raise typer.Exit(code=1)

    table = Table(title="Recorder configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("results_dir", escape(recorder_config.results_dir))
    table.add_row("indent", "compact" if recorder_config.indent is None else str(recorder_config.indent))
    for name, value in recorder_config.labels.items():
        table.add_row(escape(f"labels.{name}"), escape(str(value)))

    console.print()
    console.print(table)
    console.print(f"\n[dim]{RESULTS_DIR_ENV} overrides results_dir when set[/dim]")


@app.command()
def info():
    """
    Show information about allure-recorder.
    """
    console.print(f"""
📋 [bold]allure-recorder[/bold] v{__version__}

Allure result recorder for Python tests

[bold]Features:[/bold]
  • Nested steps via @step and `with step(...)`
  • Text, JSON, image and video attachments
  • Per-thread / per-task execution contexts
  • One <uuid>-result.json per test, read by the Allure report generator

[bold]Quick Start:[/bold]
  allure-recorder validate allure-results
  allure-recorder show allure-results/<uuid>-result.json
""")


if __name__ == "__main__":
    app()
