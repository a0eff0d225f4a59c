"""Launch agent management commands."""

from typing import NoReturn

import typer
from lunchctl import LaunchAgent, LaunchAgentError, ProcessType
from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()


def _fail(error: LaunchAgentError) -> NoReturn:
    console.print(f"[red]✗[/red] {escape(str(error))}")
    raise typer.Exit(code=1)


def _parse_env(pairs: list[str]) -> dict[str, str]:
    environment = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--env")
        environment[key] = value
    return environment


def create(
    label: str = typer.Argument(..., help="Agent label, e.g. co.example.myapp"),
    program: list[str] = typer.Argument(..., help="Executable followed by its arguments"),
    run_at_load: bool = typer.Option(False, "--run-at-load", help="Start as soon as the agent is loaded"),
    keep_alive: bool = typer.Option(False, "--keep-alive", help="Restart the process whenever it exits"),
    stdout: str | None = typer.Option(None, "--stdout", help="File receiving stdout"),
    stderr: str | None = typer.Option(None, "--stderr", help="File receiving stderr"),
    process_type: ProcessType = typer.Option(
        ProcessType.STANDARD, "--process-type", case_sensitive=False, help="launchd process type"
    ),
    workdir: str | None = typer.Option(None, "--workdir", help="Working directory"),
    env: list[str] = typer.Option([], "--env", "-e", help="Environment variable as KEY=VALUE"),
):
    """Write a launch agent plist."""
    environment = _parse_env(env)
    try:
        agent = LaunchAgent.new(label)
        agent.program_arguments = list(program)
        agent.run_at_load = run_at_load
        agent.keep_alive = keep_alive
        if stdout:
            agent.standard_out_path = stdout
        if stderr:
            agent.standard_error_path = stderr
        agent.process_type = process_type
        agent.working_directory = workdir
        agent.environment_variables = environment
        agent.write()
    except LaunchAgentError as e:
        _fail(e)

    console.print(f"[green]✓[/green] Plist written to {escape(str(agent.path()))}")


def show(label: str = typer.Argument(..., help="Agent label")):
    """Show the stored configuration of a launch agent."""
    try:
        agent = LaunchAgent.from_file(label)
    except LaunchAgentError as e:
        _fail(e)

    table = Table(title=f"Launch Agent {escape(agent.label)}")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("Program", escape(" ".join(agent.program_arguments)) or "N/A")
    table.add_row("RunAtLoad", "✓ Yes" if agent.run_at_load else "✗ No")
    table.add_row("KeepAlive", "✓ Yes" if agent.keep_alive else "✗ No")
    table.add_row("ProcessType", agent.process_type.value)
    table.add_row("StandardOutPath", escape(agent.standard_out_path))
    table.add_row("StandardErrorPath", escape(agent.standard_error_path))
    table.add_row("WorkingDirectory", escape(agent.working_directory or "N/A"))
    for key, value in sorted(agent.environment_variables.items()):
        table.add_row(f"env {escape(key)}", escape(value))

    console.print(table)


def start(label: str = typer.Argument(..., help="Agent label")):
    """Load (bootstrap) a launch agent."""
    try:
        LaunchAgent.new(label).bootstrap()
    except LaunchAgentError as e:
        _fail(e)

    console.print(f"[green]✓[/green] Bootstrapped {escape(label)}")


def stop(label: str = typer.Argument(..., help="Agent label")):
    """Unload (boot out) a launch agent."""
    try:
        LaunchAgent.new(label).boot_out()
    except LaunchAgentError as e:
        _fail(e)

    console.print(f"[green]✓[/green] Booted out {escape(label)}")


def restart(label: str = typer.Argument(..., help="Agent label")):
    """Kill and restart a loaded launch agent."""
    try:
        LaunchAgent.new(label).kickstart()
    except LaunchAgentError as e:
        _fail(e)

    console.print(f"[green]✓[/green] Restarted {escape(label)}")


def status(label: str = typer.Argument(..., help="Agent label")):
    """Check launch agent status."""
    try:
        agent = LaunchAgent.new(label)
        present = LaunchAgent.exists(label)
        pid = agent.get_pid()
        running = pid is not None or agent.is_running()
    except LaunchAgentError as e:
        _fail(e)

    table = Table(title="Launch Agent Status")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("Label", escape(label))
    table.add_row("Plist", escape(str(agent.path())))
    table.add_row("Plist present", "✓ Yes" if present else "✗ No")
    table.add_row("Running", "✓ Yes" if running else "✗ No")
    table.add_row("PID", str(pid) if pid else "N/A")

    console.print(table)


def remove(label: str = typer.Argument(..., help="Agent label")):
    """Unload a launch agent and delete its plist."""
    try:
        LaunchAgent.new(label).remove()
    except LaunchAgentError as e:
        _fail(e)

    console.print(f"[green]✓[/green] Removed {escape(label)}")
