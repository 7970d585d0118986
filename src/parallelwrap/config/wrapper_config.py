from dataclasses import dataclass, field, asdict
from typing import Optional, List, Union
from dacite import from_dict
import tempfile
import yaml
from pathlib import Path
from loguru import logger

from parallelwrap.wrapper import DEFAULT_BINARY_PATH, DEFAULT_MAX_PARALLELISM, Wrapper

DEFAULT_CONFIG_PATH = "./.parallelwrap/config.yaml"

OUTPUT_MODES = ("files", "directories")


@dataclass
class WrapperConfig:
    binary_path: str = DEFAULT_BINARY_PATH
    max_parallelism: Union[int, str] = DEFAULT_MAX_PARALLELISM
    parallelism: Union[int, str] = 0
    same_order: bool = False
    remote_only: bool = False
    servers: List[str] = field(default_factory=list)
    commands: List[str] = field(default_factory=list)

    # None, "files" or "directories"
    output_mode: Optional[str] = None
    results_dir: str = field(default_factory=tempfile.gettempdir)
    results_header: str = ""
    temp_dir: str = field(default_factory=tempfile.gettempdir)

    # Only used to check servers, parallel itself relies on ~/.ssh/config
    ssh_key_path: Optional[str] = None

    def __post_init__(self):
        if self.output_mode is not None and self.output_mode not in OUTPUT_MODES:
            raise ValueError(f"Unknown output_mode '{self.output_mode}', expected one of {OUTPUT_MODES}")

    def build_wrapper(self) -> Wrapper:
        """Apply every setting through the Wrapper setters"""
        wrapper = Wrapper(self.binary_path if self.binary_path != DEFAULT_BINARY_PATH else "")
        wrapper.set_max_parallelism(self.max_parallelism)
        wrapper.set_parallelism(self.parallelism)
        wrapper.keep_same_order(self.same_order)
        wrapper.use_remote_only(self.remote_only)
        wrapper.add_server(self.servers)
        wrapper.add_command(self.commands)

        if self.output_mode == "directories":
            wrapper.save_output_in_directories(True)
            wrapper.set_results_directory(self.results_dir, self.results_header)
        elif self.output_mode == "files":
            wrapper.save_output_in_files(True)
            wrapper.set_temp_directory(self.temp_dir)
        return wrapper

    @classmethod
    def from_yaml(cls, path: str) -> "WrapperConfig":
        if not Path(path).exists():
            logger.error(f"Config file not found at {path}")
        if not path.endswith(".yaml"):
            raise ValueError("path must end with .yaml")

        with open(path, "r") as f:
            raw_dict = yaml.safe_load(f) or {}

        return from_dict(data_class=cls, data=raw_dict)

    def to_yaml(self, path: Optional[str] = DEFAULT_CONFIG_PATH):
        if not path:
            logger.error(f"path is not provided, using default path: {DEFAULT_CONFIG_PATH}")
            path = DEFAULT_CONFIG_PATH

        if not path.endswith(".yaml"):
            raise ValueError("path must end with .yaml")

        with open(path, "w") as f:
            yaml.safe_dump(asdict(self), f, sort_keys=False)

        logger.info(f"Saved config to {path}")


def load_config(path: str) -> "WrapperConfig":
    return WrapperConfig.from_yaml(path)


def save_config(config: "WrapperConfig", path: str):
    config.to_yaml(path)
