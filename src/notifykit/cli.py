"""Command-line interface for sending build notifications."""

from __future__ import annotations

import json
import os

import typer
from rich.console import Console
from rich.table import Table

from notifykit.io import parse_assignments, read_input
from notifykit.registry import TaskNotFoundError, get_task, load_tasks
from notifykit.runner import EXIT_VALIDATION_ERROR, configure_logging, run_task
from notifykit.schema import load_schema

app = typer.Typer(
    name="notifykit",
    help="Notify external services about build outcomes.",
    no_args_is_help=True,
)

console = Console()


@app.command("run")
def run_cmd(
    task_name: str = typer.Argument(..., help="Name of the task to run"),
    input_source: str | None = typer.Option(
        None,
        "--input",
        "-i",
        help="Path to input JSON file or inline JSON object",
    ),
    assignments: list[str] = typer.Option(
        [],
        "--set",
        help="Set a single input field (key=value); repeatable, overrides --input",
    ),
    output_path: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Path to write the output JSON (default: stdout)",
    ),
    messages_out: str | None = typer.Option(
        None,
        "--messages-out",
        help="Path to write the messages artifact JSON",
    ),
    strict: bool | None = typer.Option(
        None,
        "--strict/--lenient",
        help="Fail when the service rejects the notification (default: NOTIFYKIT_STRICT)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
) -> None:
    """Send one notification with input/output validation."""
    configure_logging(os.environ, verbose=verbose)

    try:
        inputs = read_input(input_source)
        inputs.update(parse_assignments(assignments))
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=EXIT_VALIDATION_ERROR) from None

    if strict is not None:
        inputs["strict"] = strict

    exit_code = run_task(
        task_name,
        inputs,
        output_path=output_path,
        messages_output_path=messages_out,
    )
    raise typer.Exit(code=exit_code)


@app.command("list")
def list_cmd(
    service: str | None = typer.Option(
        None,
        "--service",
        "-s",
        help="Only show tasks for this service (Nabaztag, Twitter or Unfuddle)",
    ),
) -> None:
    """List the notification tasks."""
    tasks = load_tasks(service)

    if not tasks:
        console.print(f"[yellow]No tasks for service '{service}'.[/yellow]")
        return

    table = Table(title="Notification Tasks")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Service", style="magenta")
    table.add_column("Description", style="green")
    table.add_column("Input Schema", style="dim")

    for task in tasks:
        table.add_row(task.name, task.service, task.description, task.input_schema)

    console.print(table)


@app.command("schema")
def schema_cmd(
    task_name: str = typer.Argument(..., help="Name of the task"),
    schema_type: str = typer.Option(
        "input",
        "--type",
        "-t",
        help="Schema type: 'input' or 'output'",
    ),
) -> None:
    """Print the JSON schema for a task."""
    load_tasks()

    try:
        task = get_task(task_name)
    except TaskNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from None

    relative = task.input_schema if schema_type == "input" else task.output_schema

    try:
        schema = load_schema(relative)
    except FileNotFoundError:
        console.print(f"[red]Error:[/red] Schema not found: {relative}")
        raise typer.Exit(code=1) from None

    console.print_json(json.dumps(schema, indent=2))


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
