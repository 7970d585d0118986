import typer
from pathlib import Path
from parallelwrap.config import DEFAULT_CONFIG_PATH, WrapperConfig, save_config
from loguru import logger

def init_parallelwrap(
    path: str = typer.Option(DEFAULT_CONFIG_PATH, "--path", "-p", help="Where to write the config file"),
    force: bool = typer.Option(False, "--force", "-f", help="Replace an existing config file")
):
    """
    Write a starter config: default parallel binary, at most 4 job slots, no
    servers and no commands yet
    """
    config_file = Path(path)
    if config_file.exists() and not force:
        logger.warning(f"{path} already exists, pass --force to replace it with the defaults")
        return

    config_file.parent.mkdir(parents=True, exist_ok=True)
    save_config(WrapperConfig(), path)
    logger.info(f"Add commands under `commands:` in {path}, then try `pw render`")
