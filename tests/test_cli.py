from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest

from greplite import cli


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(cli.LOG_LEVEL_ENV, raising=False)


def test_prints_matches_and_exits_zero(poem_path: Path, capfd: pytest.CaptureFixture[str]) -> None:
    code = cli.main(["-n", "-i", "NOBODY", str(poem_path)])
    out, err = capfd.readouterr()
    assert code == 0
    assert out == "1: I'm nobody! Who are you?\n2: Are you nobody, too?\n"
    assert err == ""


def test_no_match_exits_one(poem_path: Path, capfd: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["zebra", str(poem_path)]) == 1
    out, _ = capfd.readouterr()
    assert out == ""


def test_help(capfd: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["-h"]) == 0
    out, _ = capfd.readouterr()
    assert "Usage:" in out
    assert "--recursive" in out


def test_bad_flag_exits_two(capfd: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["-x", "rust"]) == 2
    _, err = capfd.readouterr()
    assert "Error: Invalid flag '-x'." in err


def test_bad_regex_exits_two(poem_path: Path, capfd: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["-r", "[rust", str(poem_path)]) == 2
    out, err = capfd.readouterr()
    assert out == ""
    assert "Error: Invalid regular expression: '[rust'" in err


def test_errors_are_summarized_after_matches(
    tmp_path: Path, poem_path: Path, capfd: pytest.CaptureFixture[str]
) -> None:
    d = tmp_path / "dir"
    d.mkdir()
    code = cli.main(["frog", str(d), str(tmp_path / "missing.txt"), str(poem_path)])
    out, err = capfd.readouterr()
    assert code == 0
    assert out == f"{poem_path}: How public, like a frog\n"
    lines = err.splitlines()
    assert lines[0].startswith(f"greplite: {d}: Is a directory")
    assert "missing.txt" in lines[1]
    assert lines[2] == "greplite: 2 sources could not be searched"


def test_reads_stdin(monkeypatch: pytest.MonkeyPatch, capfd: pytest.CaptureFixture[str]) -> None:
    fake = io.TextIOWrapper(io.BytesIO(b"apple pie\nplum\n"), encoding="utf-8")
    monkeypatch.setattr("sys.stdin", fake)
    assert cli.main(["apple"]) == 0
    out, _ = capfd.readouterr()
    assert out == "apple pie\n"


def test_configure_logging_reads_level_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(cli.LOG_LEVEL_ENV, "debug")
    cli.configure_logging()
    assert logging.getLogger("greplite").level == logging.DEBUG

    monkeypatch.setenv(cli.LOG_LEVEL_ENV, "nonsense")
    cli.configure_logging()
    assert logging.getLogger("greplite").level == logging.WARNING


def test_broken_pipe_exits_two_without_traceback(
    poem_path: Path, monkeypatch: pytest.MonkeyPatch, capfd: pytest.CaptureFixture[str]
) -> None:
    silenced: list[bool] = []

    def closed_pipe(s: str) -> None:
        raise BrokenPipeError(32, "Broken pipe")

    monkeypatch.setattr(cli, "_emit", closed_pipe)
    monkeypatch.setattr(cli, "_silence_stdout", lambda: silenced.append(True))

    assert cli.main(["frog", str(poem_path)]) == 2
    _, err = capfd.readouterr()
    assert silenced == [True]
    assert "Traceback" not in err
