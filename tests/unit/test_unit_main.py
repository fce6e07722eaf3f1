# tests/unit/test_unit_main.py - v2
"""Tests for main.py: CLI entry point."""

from __future__ import annotations

import io
import json
import logging

import pytest

from filevault.main import _build_parser, main


@pytest.fixture
def cli_env(monkeypatch, blob_root, tmp_cache_dir, tmp_path):
    """Point settings at temp dirs; run from a dir without .env."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BLOB_ROOT", str(blob_root))
    monkeypatch.setenv("CACHE_ROOT", str(tmp_cache_dir))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    yield
    root = logging.getLogger("filevault")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)


class TestBuildParser:
    def test_version_flag(self):
        with pytest.raises(SystemExit) as exc_info:
            _build_parser().parse_args(["--version"])
        assert exc_info.value.code == 0

    def test_resolve_subcommand(self):
        args = _build_parser().parse_args(
            ["resolve", "--type", "maps", "--file-version", "2.0.0", "--hash", "abc"]
        )
        assert args.command == "resolve"
        assert (args.kind, args.file_version, args.client_hash) == ("maps", "2.0.0", "abc")

    def test_resolve_defaults(self):
        args = _build_parser().parse_args(["resolve"])
        assert args.kind is None
        assert args.file_version is None
        assert args.client_hash is None

    def test_call_subcommand(self):
        args = _build_parser().parse_args(["call", '{"type": "core"}'])
        assert args.payload == '{"type": "core"}'

    def test_records_subcommand(self):
        assert _build_parser().parse_args(["records"]).command == "records"


class TestMain:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_resolve_first_time(self, cli_env, capsys, core_hash):
        assert main(["resolve"]) == 0
        body = json.loads(capsys.readouterr().out)
        assert body["hash"] == core_hash

    def test_resolve_then_suppress(self, cli_env, capsys):
        assert main(["resolve"]) == 0
        capsys.readouterr()
        assert main(["resolve", "--hash", "incorrect_hash"]) == 0
        body = json.loads(capsys.readouterr().out)
        assert body["hash"] == "null"
        assert body["content"] == "null"

    def test_not_found_exit_code(self, cli_env, capsys):
        assert main(["resolve", "--type", "nonexistent"]) == 1
        err = capsys.readouterr().err
        assert "error 5 (NOT_FOUND): file not found" in err

    def test_call_malformed(self, cli_env, capsys):
        assert main(["call", "{bad"]) == 1
        assert "INVALID_ARGUMENT" in capsys.readouterr().err

    def test_call_from_stdin(self, cli_env, capsys, monkeypatch, core_hash):
        monkeypatch.setattr("sys.stdin", io.StringIO('{"type": "core"}'))
        assert main(["call", "-"]) == 0
        assert json.loads(capsys.readouterr().out)["hash"] == core_hash

    def test_records(self, cli_env, capsys, core_hash):
        main(["resolve"])
        main(["resolve", "--file-version", "2.0.0"])
        capsys.readouterr()
        assert main(["records"]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 2
        assert lines[0].split("\t")[:3] == ["core", "1.0.0", core_hash]

    def test_bad_config_exit_code(self, cli_env, monkeypatch):
        monkeypatch.setenv("CACHE_BACKEND", "redis")
        assert main(["resolve"]) == 1
