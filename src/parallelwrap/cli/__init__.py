#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Command Line Interface for ParallelWrap (Typer-based)

This module provides the main entry point for the ParallelWrap CLI using Typer.
"""

import sys
from typing import List, Optional

import rich
import typer
from loguru import logger
from rich.table import Table

from parallelwrap.config import DEFAULT_CONFIG_PATH

from .init import init_parallelwrap
from .servers import servers_app
from .util import abort_if_nothing_to_run, build_wrapper, load_or_default_config

# Main Typer application
app = typer.Typer(
    name="parallelwrap",
    help="ParallelWrap - Build and run GNU parallel command lines",
    add_completion=False,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure(
    log_level: str = typer.Option("INFO", "--log-level", "-l", help="Log level for messages on stderr"),
):
    logger.remove()
    logger.add(sys.stderr, level=log_level.upper())


app.command(name="init")(init_parallelwrap)
app.add_typer(servers_app, name="servers")


@app.command(name="render")
def render_command(
    commands: Optional[List[str]] = typer.Argument(None, help="Extra commands appended after the configured ones"),
    config_path: str = typer.Option(DEFAULT_CONFIG_PATH, "--path", "-p", help="Path to the config file"),
):
    """
    Print the GNU parallel command line without running it
    """
    wrapper = build_wrapper(load_or_default_config(config_path), commands)
    line = wrapper.run(render_only=True)
    abort_if_nothing_to_run(line)
    typer.echo(line)


@app.command(name="run")
def run_command(
    commands: Optional[List[str]] = typer.Argument(None, help="Extra commands appended after the configured ones"),
    config_path: str = typer.Option(DEFAULT_CONFIG_PATH, "--path", "-p", help="Path to the config file"),
):
    """
    Run GNU parallel and print what it wrote to stdout
    """
    wrapper = build_wrapper(load_or_default_config(config_path), commands)
    output = wrapper.run()
    abort_if_nothing_to_run(output)
    typer.echo(output, nl=False)


@app.command(name="results")
def results_command(
    label: str = typer.Option("1", "--label", help="Results label, the header name when one was set"),
    config_path: str = typer.Option(DEFAULT_CONFIG_PATH, "--path", "-p", help="Path to the config file"),
):
    """
    Show per-job output saved by a previous run in directories mode
    """
    config = load_or_default_config(config_path)
    if config.output_mode != "directories":
        rich.print("[yellow]output_mode is not 'directories', nothing was saved per job.[/yellow]")
        raise typer.Exit(code=1)

    results = build_wrapper(config).get_results_from_directory(label)
    if not results:
        rich.print(f"[yellow]No results under {config.results_dir} for label {label}[/yellow]")
        return

    table = Table(title=f"[bold magenta]Results ({label})[/bold magenta]")
    table.add_column("Job", justify="left", style="cyan", no_wrap=True)
    table.add_column("stdout", justify="left")
    table.add_column("stderr", justify="left", style="red")
    for name, job in sorted(results.items()):
        table.add_row(name, job.output.rstrip("\n"), job.errors.rstrip("\n"))
    rich.print(table)


def main():
    """Main entry point for the CLI."""
    app()

# Add the main entry point for the script
if __name__ == "__main__":
    main()
