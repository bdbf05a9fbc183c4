"""Tasks for the mongo-init-users project."""

from pathlib import Path

from invoke import Context, task  # type: ignore[import-not-found]
from rich import box  # type: ignore[import-not-found]
from rich.console import Console  # type: ignore[import-not-found]
from rich.panel import Panel  # type: ignore[import-not-found]
from rich.table import Table  # type: ignore[import-not-found]

from mongo_init.utils import config

console = Console()

MAIN_DIRECTORY_PATH = Path(__file__).parent


@task(name="list")
def list_tasks(context: Context) -> None:
    """List the public invoke tasks."""
    table = Table(title="mongo-init-users tasks", box=box.SIMPLE, header_style="bold cyan")
    table.add_column("Task", style="green", no_wrap=True)
    table.add_column("Description")

    for entry in (list_tasks, info, init_users, run_tests, lint_all):
        table.add_row(entry.name, (entry.__doc__ or "").strip().split("\n")[0])

    console.print(table)


@task(name="info")
def info(context: Context) -> None:
    """Show the MongoDB init-users configuration."""
    info_msg = (
        f"[cyan]URI:[/cyan] {config.MONGO_URI}\n"
        f"[cyan]Auth User:[/cyan] {config.MONGO_USERNAME or '<anonymous>'}\n"
        f"[cyan]Auth Source:[/cyan] {config.MONGO_AUTH_SOURCE}\n"
        f"[cyan]Target User:[/cyan] {config.MONGO_TARGET_USER}@{config.MONGO_ADMIN_DATABASE}\n"
        f"[cyan]Timeout:[/cyan] {config.MONGO_TIMEOUT_MS} ms\n"
        f"[cyan]Log Level:[/cyan] {config.LOG_LEVEL}"
    )

    console.print()
    console.print(
        Panel(
            info_msg,
            title="[bold]MongoDB Init Configuration[/bold]",
            border_style="blue",
            box=box.SIMPLE,
        )
    )
    console.print()


@task(optional=["verify"], name="init-users")
def init_users(context: Context, verify: bool = False) -> None:
    """Grant root and readWriteAnyDatabase to the MongoDB root user."""
    verify_flag = "--verify" if verify else ""
    context.run(f"uv run python -m mongo_init.init_users {verify_flag}", pty=True)


@task(name="run-tests")
def run_tests(context: Context) -> None:
    """Run all tests."""
    console.print()
    console.print(
        Panel(
            "[bold cyan]Running Tests[/bold cyan]", border_style="cyan", box=box.SIMPLE
        )
    )
    context.run("pytest -vv tests")
    console.print("[green]✓[/green] Tests completed")


@task(name="lint")
def lint_all(context: Context) -> None:
    """Run ruff and mypy over the project."""
    console.print(Panel("[bold yellow]Running Linters[/bold yellow]", border_style="yellow", box=box.SIMPLE))

    with context.cd(MAIN_DIRECTORY_PATH):
        for exec_cmd in ("ruff check .", "mypy --show-error-codes ."):
            console.print(f"[yellow]→[/yellow] {exec_cmd}")
            context.run(exec_cmd)

    console.print("[green]✓[/green] Linters passed")
