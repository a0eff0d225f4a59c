import typer
from lunchctl import ConfigError, LaunchAgent
from lunchctl.services import ConfigManager
from lunchctl_logging import configure_from_config
from rich.console import Console
from rich.markup import escape

from lunchctl_cli.commands import agent_cmd

app = typer.Typer(
    help="lunchctl CLI",
    no_args_is_help=True,
    invoke_without_command=False,
    add_completion=False
)

console = Console()


@app.callback()
def callback():
    """lunchctl CLI - Manage macOS launch agents."""
    try:
        config = ConfigManager().config
    except ConfigError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    configure_from_config(config)
    LaunchAgent.launchctl_config = config.launchctl


app.command(name="create")(agent_cmd.create)
app.command(name="show")(agent_cmd.show)
app.command(name="start")(agent_cmd.start)
app.command(name="stop")(agent_cmd.stop)
app.command(name="restart")(agent_cmd.restart)
app.command(name="status")(agent_cmd.status)
app.command(name="remove")(agent_cmd.remove)


def main():
    app()


if __name__ == "__main__":
    main()
