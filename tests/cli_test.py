"""Tests for diskhound.cli module."""
from __future__ import annotations

import argparse
import json

import pytest

from diskhound import __version__
from diskhound.cli import EXIT_CONFIG, EXIT_OK, EXIT_ROOT, build_parser, main


@pytest.mark.unit
class TestBuildParser:
    def test_parser_created(self):
        parser = build_parser()
        assert isinstance(parser, argparse.ArgumentParser)
        assert parser.prog == "diskhound"

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.path == "."
        assert args.top is None
        assert args.depth is None
        assert args.exclude is None
        assert args.min_size is None
        assert args.json is False

    def test_repeatable_exclude(self):
        args = build_parser().parse_args(["-x", "a", "--exclude", "b"])
        assert args.exclude == ["a", "b"]

    def test_version_flag(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_bad_integer_is_usage_error(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--top", "many"])
        assert exc_info.value.code == 2


@pytest.mark.integration
class TestMain:
    def test_json_output(self, sample_tree, capsys):
        assert main([str(sample_tree), "--json"]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert [d["name"] for d in data["directories"]] == ["a", "c"]
        assert data["directories"][0]["size"] == 30
        assert data["directories"][0]["file_count"] == 2
        assert data["summary"] == {
            "total_size": 38,
            "total_size_human": "38 B",
            "total_files": 4,
            "total_dirs": 3,
            "shown": 2,
        }

    def test_json_depth_and_exclude(self, sample_tree, capsys):
        assert main([str(sample_tree), "-j", "-d", "2", "-x", "b"]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert {d["name"]: d["size"] for d in data["directories"]} == {"a": 10, "c": 5}
        assert data["summary"]["total_size"] == 18

    def test_json_min_size(self, sample_tree, capsys):
        assert main([str(sample_tree), "--json", "--min-size", "15B"]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert [d["name"] for d in data["directories"]] == ["a"]
        assert data["summary"]["shown"] == 1

    def test_text_output(self, sample_tree, capsys):
        assert main([str(sample_tree)]) == EXIT_OK
        out = capsys.readouterr().out
        assert "█" * 20 in out
        assert "Total: 38 B in 4 files, 3 directories (2 shown)" in out

    def test_text_empty(self, tmp_path, capsys):
        (tmp_path / "only.txt").write_text("abc", encoding="utf-8")
        assert main([str(tmp_path)]) == EXIT_OK
        assert "No subdirectories found" in capsys.readouterr().out

    def test_json_empty(self, tmp_path, capsys):
        assert main([str(tmp_path), "--json"]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data["directories"] == []
        assert data["summary"]["shown"] == 0

    def test_invalid_min_size(self, sample_tree, capsys):
        assert main([str(sample_tree), "--min-size", "10XB"]) == EXIT_CONFIG
        err = capsys.readouterr().err
        assert "invalid size format" in err

    def test_invalid_depth(self, sample_tree, capsys):
        assert main([str(sample_tree), "--depth", "0"]) == EXIT_CONFIG
        assert "depth" in capsys.readouterr().err

    def test_missing_root(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing")]) == EXIT_ROOT
        assert "error:" in capsys.readouterr().err

    def test_config_file_defaults(self, sample_tree, tmp_path, capsys):
        cfg = tmp_path / "dh.toml"
        cfg.write_text('[scan]\nexclude = ["b"]\ntop = 1\n', encoding="utf-8")
        assert main([str(sample_tree), "--json", "--config", str(cfg)]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert [(d["name"], d["size"]) for d in data["directories"]] == [("a", 10)]

    def test_missing_explicit_config(self, sample_tree, tmp_path, capsys):
        assert main([str(sample_tree), "-c", str(tmp_path / "nope.toml")]) == EXIT_CONFIG

    def test_workers(self, sample_tree, capsys):
        assert main([str(sample_tree), "--json", "--workers", "4", "--depth", "2"]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert [d["name"] for d in data["directories"]] == ["a/b", "a", "c"]

    def test_number_too_large_for_min_size(self, sample_tree, capsys):
        assert main([str(sample_tree), "--min-size", "9" * 400]) == EXIT_CONFIG
        assert "invalid size format" in capsys.readouterr().err

    def test_undecodable_directory_name_json(self, undecodable_tree, capsys):
        assert main([str(undecodable_tree), "--json"]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert [(d["name"], d["size"]) for d in data["directories"]] == [("bad\ufffddir", 10)]

    def test_undecodable_directory_name_text(self, undecodable_tree, capsys):
        assert main([str(undecodable_tree)]) == EXIT_OK
        assert "bad\ufffddir" in capsys.readouterr().out
