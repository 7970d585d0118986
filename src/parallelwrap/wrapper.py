#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
GNU parallel Wrapper

Collects commands and options, then renders the GNU parallel command line or
runs it through the shell and hands back its standard output.
"""

import subprocess
import tempfile
from typing import Any, Dict, List, Optional, Union

from loguru import logger

from .exceptions import InvalidBinaryError, InvalidOutputDirectoryError, InvalidTempDirectoryError
from .results import JobOutput, collect_results
from .validation import (
    coerce_flag,
    coerce_max_parallelism,
    coerce_parallelism,
    collect_strings,
    escape_shell_arg,
    is_executable_file,
    is_writable_directory,
)

DEFAULT_BINARY_PATH = "/usr/local/bin/parallel"
DEFAULT_MAX_PARALLELISM = 4
DEFAULT_RESULTS_LABEL = "1"

ARGUMENT_SEPARATOR = ":::"
LOCAL_SERVER_SUFFIX = ",:"


class Wrapper:
    """Builder for a single GNU parallel invocation"""

    def __init__(
        self,
        binary_path: str = "",
        commands: Union[str, List[str], None] = None,
        max_parallelism: Any = DEFAULT_MAX_PARALLELISM,
    ):
        self.binary_path = DEFAULT_BINARY_PATH
        if binary_path:
            self.set_binary_path(binary_path)

        self.command_list: List[str] = []
        self.server_list: List[str] = []
        if commands is not None:
            self.add_command(commands)

        self.max_parallelism = DEFAULT_MAX_PARALLELISM
        self.parallelism = 0
        self.set_max_parallelism(max_parallelism)
        self.set_parallelism(0)

        self.same_order = False
        self.remote_servers_only = False
        self.output_to_files = False
        self.output_to_directories = False

        self.output_directory = tempfile.gettempdir()
        self.output_directory_header = ""
        self.temp_directory = tempfile.gettempdir()

    def _discarded(self, setter: str, value: Any, stored: Any):
        logger.debug(f"{setter}: ignoring {value!r}, using {stored!r}")

    def add_command(self, command: Union[str, List[str], None]) -> bool:
        """Escape and append one command or a list of commands"""
        accepted, discarded = collect_strings(command)
        if discarded:
            self._discarded("add_command", command, accepted)
        self.command_list.extend(escape_shell_arg(c) for c in accepted)
        return bool(accepted)

    def add_server(self, server: Union[str, List[str], None]) -> bool:
        """Append one sshlogin or a list of them, stored as given"""
        accepted, discarded = collect_strings(server)
        if discarded:
            self._discarded("add_server", server, accepted)
        self.server_list.extend(accepted)
        return bool(accepted)

    def set_binary_path(self, path: str) -> bool:
        if not is_executable_file(path):
            raise InvalidBinaryError(path)
        self.binary_path = path
        return True

    def set_max_parallelism(self, value: Any) -> int:
        """0 or "auto" lets parallel run one job per CPU core"""
        self.max_parallelism, discarded = coerce_max_parallelism(value, DEFAULT_MAX_PARALLELISM)
        if discarded:
            self._discarded("set_max_parallelism", value, self.max_parallelism)
        return self.max_parallelism

    def set_parallelism(self, value: Any) -> int:
        """0 or "auto" derives parallelism from the number of commands"""
        self.parallelism, discarded = coerce_parallelism(value)
        if discarded:
            self._discarded("set_parallelism", value, self.parallelism)
        return self.parallelism

    def _set_flag(self, name: str, value: Any) -> bool:
        flag, discarded = coerce_flag(value)
        if discarded:
            self._discarded(name, value, flag)
        setattr(self, name, flag)
        return flag

    def keep_same_order(self, flag: Any) -> bool:
        return self._set_flag("same_order", flag)

    def use_remote_only(self, flag: Any) -> bool:
        """Leave the local machine out of the server list"""
        return self._set_flag("remote_servers_only", flag)

    def save_output_in_files(self, flag: Any) -> bool:
        return self._set_flag("output_to_files", flag)

    def save_output_in_directories(self, flag: Any) -> bool:
        return self._set_flag("output_to_directories", flag)

    def set_results_directory(self, path: str, header: str = "") -> bool:
        if not is_writable_directory(path):
            raise InvalidOutputDirectoryError(path)
        self.output_directory = path
        self.output_directory_header = header
        return True

    def set_temp_directory(self, path: str) -> bool:
        if not is_writable_directory(path):
            raise InvalidTempDirectoryError(path)
        self.temp_directory = path
        return True

    @property
    def effective_parallelism(self) -> int:
        """Job slots actually passed to ``-j``.

        The first read with parallelism on auto stores the current command
        count into ``parallelism``; commands added later do not raise it.
        """
        if self.parallelism == 0:
            self.parallelism = len(self.command_list)
        return min(self.parallelism, self.max_parallelism)

    def _output_tokens(self) -> List[str]:
        if self.output_to_directories:
            tokens = []
            if self.output_directory_header:
                tokens.extend(["--header", ":"])
                self.command_list.insert(0, self.output_directory_header)
            tokens.extend(["--results", self.output_directory])
            return tokens
        if self.output_to_files:
            return ["--tmpdir", self.temp_directory, "--files"]
        return []

    def render(self) -> Union[str, bool]:
        if not self.command_list:
            return False

        parallelism = self.effective_parallelism
        tokens = [self.binary_path, "-j+0" if parallelism == 0 else f"-j {parallelism}"]

        if self.server_list:
            servers = ",".join(self.server_list)
            tokens.append(f"-S {servers}" + ("" if self.remote_servers_only else LOCAL_SERVER_SUFFIX))

        if self.same_order:
            tokens.append("-k")

        tokens.extend(self._output_tokens())
        tokens.append(ARGUMENT_SEPARATOR)
        tokens.extend(self.command_list)
        return " ".join(tokens)

    def run(self, render_only: bool = False) -> Union[str, bool]:
        """Run parallel and return its standard output.

        Blocks until parallel exits. The exit status is logged but otherwise
        ignored, matching a plain shell capture.
        """
        command = self.render()
        if command is False:
            logger.warning("Nothing to run, the command list is empty")
            return False
        if render_only:
            return command

        logger.info(f"Running: {command}")
        result = subprocess.run(
            command, shell=True, stdout=subprocess.PIPE, encoding="utf-8", errors="replace"
        )
        logger.debug(f"parallel exited with return code {result.returncode}")
        return result.stdout or ""

    def get_results_from_directory(self, label: Optional[str] = DEFAULT_RESULTS_LABEL) -> Dict[str, JobOutput]:
        """Per-job stdout/stderr from a previous ``--results`` run"""
        if not self.output_to_directories:
            logger.debug("Directories output is off, no results to collect")
            return {}
        return collect_results(self.output_directory, label or DEFAULT_RESULTS_LABEL)
