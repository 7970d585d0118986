import subprocess
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from parallelwrap import DEFAULT_BINARY_PATH, servers
from parallelwrap.cli import app

runner = CliRunner()


def _write_config(path: Path, **values) -> str:
    path.write_text(yaml.safe_dump(values), encoding="utf-8")
    return str(path)


def test_init_writes_default_config(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.yaml"

    result = runner.invoke(app, ["init", "--path", str(path)])

    assert result.exit_code == 0, result.output
    assert yaml.safe_load(path.read_text())["binary_path"] == DEFAULT_BINARY_PATH


def test_init_keeps_existing_config(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("commands: [keep]\n", encoding="utf-8")

    result = runner.invoke(app, ["init", "--path", str(path)])

    assert result.exit_code == 0
    assert path.read_text() == "commands: [keep]\n"


def test_render_combines_config_and_arguments(tmp_path: Path) -> None:
    config = _write_config(tmp_path / "config.yaml", commands=["echo 1"], same_order=True)

    result = runner.invoke(app, ["render", "--path", config, "echo 2"])

    assert result.exit_code == 0, result.output
    assert f"{DEFAULT_BINARY_PATH} -j 2 -k ::: 'echo 1' 'echo 2'" in result.stdout


def test_render_without_commands_fails(tmp_path: Path) -> None:
    result = runner.invoke(app, ["render", "--path", str(tmp_path / "missing.yaml")])
    assert result.exit_code == 1


def test_render_reports_invalid_binary(tmp_path: Path) -> None:
    config = _write_config(tmp_path / "config.yaml", binary_path=str(tmp_path / "nope"), commands=["x"])

    result = runner.invoke(app, ["render", "--path", config])

    assert result.exit_code == 1
    assert "Not an executable file" in result.stdout


def test_run_prints_parallel_output(tmp_path: Path, fake_parallel: str) -> None:
    config = _write_config(tmp_path / "config.yaml", binary_path=fake_parallel)

    result = runner.invoke(app, ["run", "--path", config, "hello world"])

    assert result.exit_code == 0, result.output
    assert "-j 1 ::: hello world" in result.stdout


def test_results_table(tmp_path: Path) -> None:
    job_dir = tmp_path / "results" / "1" / "job1"
    job_dir.mkdir(parents=True)
    (job_dir / "stdout").write_text("hello\n", encoding="utf-8")
    (job_dir / "stderr").write_text("", encoding="utf-8")
    config = _write_config(
        tmp_path / "config.yaml", output_mode="directories", results_dir=str(tmp_path / "results")
    )

    result = runner.invoke(app, ["results", "--path", config])

    assert result.exit_code == 0, result.output
    assert "job1" in result.stdout
    assert "hello" in result.stdout


def test_results_requires_directories_mode(tmp_path: Path) -> None:
    config = _write_config(tmp_path / "config.yaml", commands=["x"])
    result = runner.invoke(app, ["results", "--path", config])
    assert result.exit_code == 1


class _Result:
    stdout = "Ping successful\n"


class _FakeConnection:
    def __init__(self, host, user=None, port=None, connect_kwargs=None):
        self.host = host

    def run(self, command, hide=False):
        if self.host == "down":
            raise OSError("connection refused")
        return _Result()


def test_servers_check(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(servers, "Connection", _FakeConnection)
    config = _write_config(tmp_path / "config.yaml", servers=["up", ":"])

    result = runner.invoke(app, ["servers", "check", "--path", config])

    assert result.exit_code == 0, result.output
    assert "SUCCESS" in result.stdout
    assert "LOCAL" in result.stdout


def test_servers_check_fails_on_unreachable_host(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(servers, "Connection", _FakeConnection)
    config = _write_config(tmp_path / "config.yaml", servers=["down"])

    result = runner.invoke(app, ["servers", "check", "--path", config])

    assert result.exit_code == 1
    assert "FAILED" in result.stdout


def test_run_never_calls_shell_without_commands(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def fail(*args, **kwargs):
        raise AssertionError("shell must not be invoked")

    monkeypatch.setattr(subprocess, "run", fail)
    result = runner.invoke(app, ["run", "--path", str(tmp_path / "missing.yaml")])
    assert result.exit_code == 1


@pytest.mark.parametrize(
    "contents",
    [
        "output_mode: stream\n",
        "same_order: [1, 2]\n",
        "commands: [unclosed\n",
    ],
)
def test_invalid_config_exits_cleanly(tmp_path: Path, contents: str) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(contents, encoding="utf-8")

    result = runner.invoke(app, ["render", "--path", str(path)])

    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "Invalid config" in result.stdout


def test_init_replaces_config_with_force(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("commands: [keep]\n", encoding="utf-8")

    result = runner.invoke(app, ["init", "--path", str(path), "--force"])

    assert result.exit_code == 0, result.output
    assert yaml.safe_load(path.read_text())["commands"] == []
