"""Tests for PNG conversion through Graphviz (the ``dot`` process is faked)."""

from __future__ import annotations

import subprocess

import pytest

from modgraph.renderer import png


@pytest.fixture
def dot_file(tmp_path):
    path = tmp_path / "project.dot"
    path.write_text("digraph {\n}\n", encoding="utf-8")
    return path


@pytest.fixture
def fake_dot(monkeypatch):
    """Pretend Graphviz is installed; return the list of recorded calls."""
    calls = []

    def _run(cmd, **kwargs):
        calls.append((cmd, kwargs))
        target = cmd[-1]
        with open(target + ".png", "wb") as f:
            f.write(b"\x89PNG")
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    monkeypatch.setattr(png.shutil, "which", lambda name: "/usr/bin/dot")
    monkeypatch.setattr(png.subprocess, "run", _run)
    return calls


def test_convert_runs_dot(dot_file, fake_dot):
    result = png.convert_to_png(dot_file)

    assert result == dot_file.resolve().with_name("project.dot.png")
    assert result.exists()
    assert dot_file.exists()

    (cmd, kwargs), = fake_dot
    assert cmd == ["/usr/bin/dot", "-Tpng", "-O", str(dot_file.resolve())]
    assert kwargs["timeout"] == png.DEFAULT_TIMEOUT == 60


def test_missing_dot_is_skipped(dot_file, monkeypatch):
    monkeypatch.setattr(png.shutil, "which", lambda name: None)

    assert png.convert_to_png(dot_file) is None
    assert dot_file.exists()


def test_dot_failure_returns_none(dot_file, monkeypatch):
    monkeypatch.setattr(png.shutil, "which", lambda name: "/usr/bin/dot")
    monkeypatch.setattr(
        png.subprocess,
        "run",
        lambda cmd, **kw: subprocess.CompletedProcess(cmd, 1, stdout="", stderr="syntax error"),
    )

    assert png.convert_to_png(dot_file) is None


def test_dot_timeout_returns_none(dot_file, monkeypatch):
    def _run(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr(png.shutil, "which", lambda name: "/usr/bin/dot")
    monkeypatch.setattr(png.subprocess, "run", _run)

    assert png.convert_to_png(dot_file, timeout=1) is None
    assert dot_file.exists()
