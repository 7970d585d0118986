import typer
import rich
from rich.table import Table
from rich.text import Text

from parallelwrap.config import DEFAULT_CONFIG_PATH
from parallelwrap.servers import check_servers

from .util import load_or_default_config

servers_app = typer.Typer(
    name="servers",
    help="Inspect the servers parallel distributes jobs to",
    add_completion=False,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@servers_app.command(name="check")
def check_servers_command(
    config_path: str = typer.Option(DEFAULT_CONFIG_PATH, "--path", "-p", help="Path to the config file"),
):
    """
    Ping every configured server over SSH
    """
    config = load_or_default_config(config_path)
    if not config.servers:
        rich.print("[yellow]No servers configured, jobs run on the local machine only.[/yellow]")
        return

    try:
        statuses = check_servers(config.servers, config.ssh_key_path)
    except ValueError as e:
        rich.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    table = Table(title="[bold magenta]Server Check Results[/bold magenta]")
    table.add_column("Server", justify="left", style="cyan", no_wrap=True)
    table.add_column("Host", justify="left", style="green")
    table.add_column("Status", justify="center")

    failed = 0
    for login, ok in statuses:
        if login.is_local:
            status_text = Text("LOCAL", style="blue")
        elif ok:
            status_text = Text("✅ SUCCESS", style="green")
        else:
            status_text = Text("❌ FAILED", style="red")
            failed += 1
        table.add_row(login.raw, login.host, status_text)

    rich.print(table)
    if failed:
        raise typer.Exit(code=1)
