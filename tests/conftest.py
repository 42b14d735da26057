"""Pytest fixtures and configuration for diskhound tests."""
from __future__ import annotations

import os
import pathlib

import pytest


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (real filesystem, CLI)"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests (should be fast)"
    )


def make_tree(root: pathlib.Path, files: dict[str, int]) -> pathlib.Path:
    """Create files of the given byte sizes below root; intermediate dirs are created."""
    for rel, size in files.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(b"x" * size)
    return root


SAMPLE_FILES = {
    "a/file1": 10,
    "a/b/file2": 20,
    "c/file3": 5,
    "readme.md": 3,
}


@pytest.fixture
def sample_tree(tmp_path):
    """
    root/
      a/file1      10 B
      a/b/file2    20 B
      c/file3       5 B
      readme.md     3 B
    """
    root = tmp_path / "root"
    root.mkdir()
    return make_tree(root, SAMPLE_FILES)


@pytest.fixture
def can_symlink(tmp_path):
    target = tmp_path / "_symlink_check_target"
    target.write_text("x", encoding="utf-8")
    link = tmp_path / "_symlink_check"
    try:
        os.symlink(target, link)
    except (OSError, NotImplementedError, AttributeError):
        pytest.skip("symlinks not supported on this platform")
    finally:
        target.unlink()
    link.unlink()
    return True


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch, tmp_path):
    """Keep a user's real config file out of the tests."""
    monkeypatch.setenv("DISKHOUND_CONFIG", str(tmp_path / "no-such-config.toml"))


@pytest.fixture
def undecodable_tree(tmp_path):
    """root/bad<0xff>dir/f (10 B); skipped where the filesystem insists on valid names."""
    root = tmp_path / "root"
    root.mkdir()
    if os.name == "nt":
        pytest.skip("file names are always unicode on Windows")
    bad = os.path.join(os.fsencode(root), b"bad\xffdir")
    try:
        os.mkdir(bad)
    except OSError:
        pytest.skip("filesystem rejects non-UTF-8 names")
    with open(os.path.join(bad, b"f"), "wb") as fh:
        fh.write(b"x" * 10)
    return root
