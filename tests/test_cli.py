import logging

import pytest

import cli
from bmp_samples import BLACK, WHITE


@pytest.fixture
def checker(write_bmp):
    # Top row ".#", bottom row "#."
    return write_bmp([[BLACK, WHITE], [WHITE, BLACK]])


@pytest.fixture(autouse=True)
def restore_logging():
    # cli.setup_logging adds one stderr handler to the root logger
    root = logging.getLogger()
    level = root.level
    yield
    root.removeHandler(cli._stderr_handler)
    root.setLevel(level)


def test_console_mode(checker, capsys):
    assert cli.main([checker, "--no-wait"]) == 0
    assert capsys.readouterr().out == ".#\n#.\n\n"


def test_explicit_console_mode(checker, capsys):
    assert cli.main([checker, "0", "--no-wait"]) == 0
    assert capsys.readouterr().out == ".#\n#.\n\n"


def test_log_mode(checker, tmp_path, capsys):
    log_path = tmp_path / "log.txt"
    assert cli.main([checker, "1", "--log-file", str(log_path)]) == 0
    assert cli.main([checker, "1", "--log-file", str(log_path)]) == 0
    # Appended, not overwritten
    assert log_path.read_text() == ".#\n#.\n\n" * 2
    assert capsys.readouterr().out == ""


def test_log_mode_with_info(checker, tmp_path):
    log_path = tmp_path / "log.txt"
    assert cli.main([checker, "2", "--log-file", str(log_path)]) == 0
    text = log_path.read_text()
    assert text.startswith(f"\n\n --------------- displayInfo: {checker} --------------- ")
    assert "BITMAPFILEHEADER:\n  bfType: 19778\n" in text
    assert "  biBitCount: 24\n" in text
    assert text.endswith("\n.#\n#.\n\n")


def test_only_first_mode_character_counts(checker, tmp_path):
    log_path = tmp_path / "log.txt"
    assert cli.main([checker, "1xyz", "--log-file", str(log_path)]) == 0
    assert log_path.read_text() == ".#\n#.\n\n"


def test_unknown_mode_does_nothing(checker, tmp_path, capsys):
    log_path = tmp_path / "log.txt"
    assert cli.main([checker, "7", "--log-file", str(log_path)]) == 0
    assert not log_path.exists()
    assert capsys.readouterr().out == ""


def test_decode_error_exit_status(tmp_path, capsys):
    assert cli.main([str(tmp_path / "missing.bmp"), "--no-wait"]) == 1
    assert "decode failed at 'open'" in capsys.readouterr().err


def test_custom_extension(write_bmp, capsys):
    path = write_bmp([[WHITE]], name="image.dib")
    assert cli.main([path, "--no-wait"]) == 1
    assert cli.main([path, "--no-wait", "--extension", "dib"]) == 0
    assert capsys.readouterr().out == ".\n\n"


def test_unwritable_log_file_exit_status(checker, tmp_path, capsys):
    log_path = tmp_path / "nodir" / "log.txt"
    assert cli.main([checker, "1", "--log-file", str(log_path)]) == 1
    assert str(log_path) in capsys.readouterr().err
    assert not log_path.exists()


def test_setup_logging_keeps_other_handlers():
    root = logging.getLogger()
    other = logging.NullHandler()
    root.addHandler(other)
    try:
        cli.setup_logging(debug=True)
        first = cli._stderr_handler
        cli.setup_logging(debug=False)
        assert other in root.handlers
        assert cli._stderr_handler in root.handlers
        assert first not in root.handlers
        assert root.level == logging.WARNING
    finally:
        root.removeHandler(other)
