from __future__ import annotations

from pathlib import Path

import pytest

import main


@pytest.fixture
def config_file(tmp_path: Path, enigma_i_config: str) -> Path:
    path = tmp_path / "default.conf"
    path.write_text(enigma_i_config, encoding="utf-8")
    return path


def test_files_in_and_out(tmp_path: Path, config_file: Path) -> None:
    src = tmp_path / "msg.in"
    dst = tmp_path / "msg.out"
    src.write_text("* B I II III AAA\nAAAAA AAAAA\n", encoding="utf-8")

    assert main.main([str(config_file), str(src), str(dst)]) == 0
    assert dst.read_text(encoding="utf-8") == "BDZGO WCXLT\n"


def test_stdout_and_block_size(tmp_path: Path, config_file: Path, capsys) -> None:
    src = tmp_path / "msg.in"
    src.write_text("* B I II III AAA\nAAAAAAAAAA\n", encoding="utf-8")

    assert main.main([str(config_file), str(src), "--block", "4"]) == 0
    assert capsys.readouterr().out == "BDZG OWCX LT\n"


def test_stdin(config_file: Path, capsys, monkeypatch) -> None:
    import io

    monkeypatch.setattr("sys.stdin", io.StringIO("* B I II III AAA\nBDZGO\n"))
    assert main.main([str(config_file)]) == 0
    assert capsys.readouterr().out == "AAAAA\n"


def test_error_reported_once(tmp_path: Path, config_file: Path, capsys) -> None:
    src = tmp_path / "msg.in"
    src.write_text("HELLO\n", encoding="utf-8")

    assert main.main([str(config_file), str(src)]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: ")
    assert "no setup line" in err


def test_missing_file(tmp_path: Path, capsys) -> None:
    missing = tmp_path / "nope.conf"
    assert main.main([str(missing), str(missing)]) == 1
    assert "could not open" in capsys.readouterr().err


def test_unknown_debug_component(config_file: Path, capsys) -> None:
    assert main.main([str(config_file), str(config_file), "--debug", "bogus"]) == 1
    assert "No such debug component" in capsys.readouterr().err


def test_debug_component_enabled(
    tmp_path: Path, config_file: Path, debug_switches, caplog
) -> None:
    src = tmp_path / "msg.in"
    src.write_text("* B I II III AAA\nA\n", encoding="utf-8")

    with caplog.at_level("DEBUG", logger="ENIGMA"):
        assert main.main([str(config_file), str(src), "--debug", "stepping"]) == 0
    assert debug_switches.status()["stepping"]
    assert any("[STEPPING]" in r.getMessage() for r in caplog.records)


def test_log_file_receives_component_records(
    tmp_path: Path, config_file: Path, debug_switches
) -> None:
    import logging
    import os

    src = tmp_path / "msg.in"
    log = tmp_path / "run.log"
    src.write_text("* B I II III AAA\nA\n", encoding="utf-8")

    try:
        assert main.main([
            str(config_file), str(src),
            "--debug", "stepping", "--log-file", str(log),
        ]) == 0
    finally:
        root = logging.getLogger()
        for h in list(root.handlers):
            if isinstance(h, logging.FileHandler) and h.baseFilename == os.path.abspath(log):
                root.removeHandler(h)
                h.close()

    text = log.read_text(encoding="utf-8")
    assert "[STEPPING]" in text
    assert "[ENIGMA]" in text


def test_non_ascii_digit_count_reported(tmp_path: Path, capsys) -> None:
    cfg = tmp_path / "bad.conf"
    src = tmp_path / "msg.in"
    cfg.write_text("ABCD\n² 0\nR R (AB) (CD)\n", encoding="utf-8")
    src.write_text("", encoding="utf-8")

    assert main.main([str(cfg), str(src)]) == 1
    assert capsys.readouterr().err == "Error: No numRotors\n"
