"""Tests for capgen.utils."""

import os
from pathlib import Path

import pytest

from capgen.utils import atomic_write_text


def test_atomic_write_text_success(tmp_path: Path) -> None:
    f = tmp_path / "templates.bzl"
    atomic_write_text(f, "TEMPLATES = []\n")
    assert f.read_text() == "TEMPLATES = []\n"
    assert not f.with_suffix(".bzl.tmp").exists()


def test_atomic_write_text_overwrite(tmp_path: Path) -> None:
    f = tmp_path / "templates.bzl"
    f.write_text("old")
    atomic_write_text(f, "new")
    assert f.read_text() == "new"


def test_atomic_write_text_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    f = tmp_path / "templates.bzl"

    # Mock os.replace to fail to simulate crash during write
    def mock_replace(*args, **kwargs):
        raise OSError("Simulated crash")

    monkeypatch.setattr(os, "replace", mock_replace)

    with pytest.raises(OSError, match="Simulated crash"):
        atomic_write_text(f, "bad")

    assert not f.exists()
    assert not f.with_suffix(".bzl.tmp").exists()
