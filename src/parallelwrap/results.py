"""
Reading back what GNU parallel wrote with ``--results``.

parallel lays results out as ``<results dir>/<label>/<value>/{stdout,stderr}``
(nested once more per extra input source), so every directory that holds a
``stdout`` or ``stderr`` file is one job. Jobs are keyed by their path below
the label directory, which is just the value for a single input source.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

STDOUT_FILE = "stdout"
STDERR_FILE = "stderr"


@dataclass
class JobOutput:
    output: str = ""
    errors: str = ""


def _read(path: Path) -> Optional[str]:
    if not path.is_file():
        return ""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning(f"Could not read {path}: {e}")
        return None


def collect_results(results_dir: str, label: str) -> Dict[str, JobOutput]:
    base = Path(results_dir) / label
    if not base.is_dir():
        logger.warning(f"No results found at {base}")
        return {}

    results: Dict[str, JobOutput] = {}
    for dirpath, _, filenames in os.walk(base):
        if STDOUT_FILE not in filenames and STDERR_FILE not in filenames:
            continue
        job_dir = Path(dirpath)
        output = _read(job_dir / STDOUT_FILE)
        errors = _read(job_dir / STDERR_FILE)
        if output is None or errors is None:
            continue
        key = job_dir.relative_to(base).as_posix()
        if key == ".":
            key = base.name
        results[key] = JobOutput(output=output, errors=errors)

    logger.debug(f"Collected {len(results)} job result(s) from {base}")
    return results
