"""Tests for the command line driver."""

import pytest

from chainbpe import enable_progress
from chainbpe.cli import main


@pytest.fixture(autouse=True)
def restore_progress():
    yield
    enable_progress()


def test_cli_prints_vocabulary_and_chain(tmp_path, capsys):
    """The driver prints final token values, then one line per position."""
    path = tmp_path / "input.txt"
    path.write_text("aaab", encoding="utf-8")

    assert main([str(path), "--no-progress"]) == 0

    out = capsys.readouterr().out.splitlines()
    # a=0 b=1 aa=2 aaa=3 aaab=4; positions 0-3, then 4, 5, 6 for merges
    assert out == ["aaab", "aaab -> 6 4"]


def test_cli_escapes_control_characters(tmp_path, capsys):
    path = tmp_path / "input.txt"
    path.write_text("a\nb", encoding="utf-8")

    assert main([str(path), "--no-progress", "--max-iterations", "1"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert "a\\u000a -> 3 3" in out
    assert "b -> 2 2" in out


def test_cli_rescan_mode_gives_same_chain(tmp_path, capsys):
    path = tmp_path / "input.txt"
    path.write_text("hello hello", encoding="utf-8")

    main([str(path), "--no-progress"])
    incremental = capsys.readouterr().out
    main([str(path), "--no-progress", "--mode", "rescan"])
    assert capsys.readouterr().out == incremental


def test_cli_empty_file(tmp_path, capsys):
    path = tmp_path / "empty.txt"
    path.write_text("", encoding="utf-8")
    assert main([str(path), "--no-progress"]) == 0
    assert capsys.readouterr().out == ""


def test_cli_missing_file(tmp_path, caplog):
    assert main([str(tmp_path / "nope.txt"), "--no-progress"]) == 1
    assert "nope.txt" in caplog.text


def test_cli_rejects_unknown_mode(tmp_path):
    with pytest.raises(SystemExit):
        main([str(tmp_path / "x.txt"), "--mode", "fast"])


def test_cli_undecodable_file(tmp_path, caplog):
    """Bytes that are not valid in the chosen encoding fail with status 1."""
    path = tmp_path / "binary.txt"
    path.write_bytes(b"ab\xffab")
    assert main([str(path), "--no-progress"]) == 1
    assert "can't decode byte 0xff" in caplog.text
    assert main([str(path), "--no-progress", "--encoding", "latin-1"]) == 0
