"""
ParallelWrap - Build and run GNU parallel command lines

Collects shell commands and execution options (job slots, remote servers,
ordering, per-job output capture) and renders them into a single GNU parallel
invocation, or runs it and returns what parallel printed.
"""

from .cli import main as cli_main
from .exceptions import (
    InvalidBinaryError,
    InvalidOutputDirectoryError,
    InvalidTempDirectoryError,
    ParallelWrapError,
)
from .results import JobOutput
from .version import __version__
from .wrapper import DEFAULT_BINARY_PATH, DEFAULT_MAX_PARALLELISM, Wrapper

__author__ = "ParallelWrap developers"
__license__ = "MIT"
__description__ = "Build and run GNU parallel command lines"

__all__ = [
    "cli_main",
    "Wrapper",
    "JobOutput",
    "DEFAULT_BINARY_PATH",
    "DEFAULT_MAX_PARALLELISM",
    "ParallelWrapError",
    "InvalidBinaryError",
    "InvalidOutputDirectoryError",
    "InvalidTempDirectoryError",
]
