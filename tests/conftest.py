import stat
import sys
from pathlib import Path

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_loguru():
    # the CLI callback swaps loguru's sink for the runner's stderr
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def fake_parallel(tmp_path: Path) -> str:
    """Executable stand-in for GNU parallel that echoes its arguments"""
    binary = tmp_path / "parallel"
    binary.write_text('#!/bin/sh\necho "$@"\n', encoding="utf-8")
    binary.chmod(binary.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(binary)
