"""Tests for snapstatic.cli — CLI entrypoint and argument parsing."""

import argparse
from pathlib import Path

import pytest

from snapstatic.cli import main
from snapstatic.cli._serve import build_app


class TestCLIHelp:
    @pytest.mark.parametrize("argv", [["--help"], ["serve", "--help"], ["inspect", "--help"]])
    def test_help_exits_zero(self, argv: list[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        assert exc_info.value.code == 0

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "serve" in capsys.readouterr().out


class TestCLIMissingArgs:
    @pytest.mark.parametrize("command", ["serve", "inspect"])
    def test_missing_root(self, command: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([command])
        assert exc_info.value.code == 2

    def test_bad_log_level(self, site: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--log-level", "loud", "inspect", str(site)])
        assert exc_info.value.code == 2


class TestInspect:
    def test_lists_entries(self, site: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["inspect", str(site)])
        lines = capsys.readouterr().out.splitlines()
        paths = [line.split()[0] for line in lines]
        assert paths[0] == "(root)"
        assert "/style.css" in paths
        assert "/docs  -> /docs/" in lines
        css = next(line for line in lines if line.startswith("/style.css "))
        assert "gzip=" in css
        assert "br=" in css
        png = next(line for line in lines if line.startswith("/logo.png "))
        assert "gzip=" not in png

    def test_prefix(self, site: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["inspect", str(site), "--prefix", "/other"])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "/other  -> /other/"

    def test_bad_prefix(self, site: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["inspect", str(site), "--prefix", "docs"])
        assert exc_info.value.code == 2
        assert "Error:" in capsys.readouterr().err

    def test_missing_root(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["inspect", str(tmp_path / "missing")])
        assert exc_info.value.code == 1
        assert "failed" in capsys.readouterr().err


class TestServe:
    def test_build_app(self, site: Path) -> None:
        args = argparse.Namespace(root=str(site), prefix="/p", private=True)
        app = build_app(args)
        (handler,) = app.handlers
        assert handler.config.prefix == "/p"
        assert handler.config.disallow_shared_cache

    def test_bad_port(self, site: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["serve", str(site), "--port", "70000"])
        assert exc_info.value.code == 2
