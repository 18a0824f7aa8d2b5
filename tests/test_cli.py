"""
Tests for the command line entry point.
"""

import subprocess
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from datamatch import __version__
from datamatch.cli import create_parser, main
from datamatch.utils.logger import configure_logger


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    
    assert exc.value.code == 0
    assert f"datamatch v{__version__}" in capsys.readouterr().out


def test_version_command(tmp_path, capsys):
    code = main(["version", "--no-rich", "--settings", str(tmp_path / "none.yaml")])
    
    assert code == 0
    assert f"datamatch: {__version__}" in capsys.readouterr().out


def test_unknown_command_fails(tmp_path):
    code = main(["frobnicate", "--no-rich", "--settings", str(tmp_path / "none.yaml")])
    assert code == 1


def test_bad_settings_file(tmp_path, capsys):
    settings = tmp_path / "datamatch.yaml"
    settings.write_text("colour: blue\n", encoding="utf-8")
    
    code = main(["version", "--settings", str(settings)])
    
    assert code == 1
    assert "could not load settings" in capsys.readouterr().err


def test_log_file_receives_json_lines(tmp_path):
    log_file = tmp_path / "datamatch.log"
    
    main(["version", "--no-rich",
          "--settings", str(tmp_path / "none.yaml"),
          "--log-file", str(log_file)])
    
    try:
        assert '"message": "cli.starting"' in log_file.read_text(encoding="utf-8")
    finally:
        configure_logger(None)


def test_parser_defaults():
    args = create_parser().parse_args([])
    
    assert args.command is None
    assert args.verbose is None
    assert args.no_rich is False


def test_help_through_launcher(tmp_path):
    result = subprocess.run(
        [sys.executable, str(ROOT / "main.py"), "help", "--no-rich",
         "--settings", str(tmp_path / "none.yaml")],
        capture_output=True,
        text=True,
        encoding="utf-8",
        cwd=str(tmp_path),
    )
    
    assert result.returncode == 0, result.stderr
    assert "/compare" in result.stdout
