from pathlib import Path
from typing import List, Optional

import typer
import yaml
from dacite import DaciteError
from loguru import logger
from rich import print
from rich.markup import escape

from parallelwrap.config import WrapperConfig, load_config
from parallelwrap.exceptions import ParallelWrapError
from parallelwrap.wrapper import Wrapper


def load_or_default_config(config_path: str) -> WrapperConfig:
    if not Path(config_path).exists():
        logger.warning(f"Config file not found at {config_path}, using defaults (run `pw init` to create one)")
        return WrapperConfig()
    try:
        return load_config(config_path)
    except (ValueError, DaciteError, yaml.YAMLError) as e:
        print(f"[red]Invalid config {escape(config_path)}: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def build_wrapper(config: WrapperConfig, extra_commands: Optional[List[str]] = None) -> Wrapper:
    """Wrapper from the config plus commands given on the command line.

    Validation errors are reported and turned into exit code 1.
    """
    try:
        wrapper = config.build_wrapper()
    except ParallelWrapError as e:
        print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)
    if extra_commands:
        wrapper.add_command(extra_commands)
    return wrapper


def abort_if_nothing_to_run(result) -> None:
    if result is False:
        print("[red]No commands to run, add some to the config or pass them as arguments.[/red]")
        raise typer.Exit(code=1)
