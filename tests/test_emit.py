"""Tests for writing capability documents and the templates index."""

from dataclasses import dataclass
from pathlib import Path

import pytest

from capgen.arguments import LATEST_STABLE, K2JVMCompilerArguments, LanguageVersion, argument
from capgen.capabilities import collect_capabilities
from capgen.emit import (
    TEMPLATES_FILENAME,
    capabilities_name,
    discover_capability_files,
    regenerate,
    write_capabilities,
    write_templates,
)
from capgen.errors import UnsupportedTypeError


@dataclass
class _BoolHolder:
    x: bool = argument("-x", "enable x", default=False)


@dataclass
class _IntHolder:
    n: int = argument("-n", "a count", default=1)


# ---------------------------------------------------------------------------
# capabilities_name()
# ---------------------------------------------------------------------------


class TestCapabilitiesName:
    def test_pattern(self) -> None:
        name = capabilities_name(LanguageVersion(1, 9))
        assert name == "capabilities_1.9.bzl.com_github_jetbrains_kotlin.bazel"

    def test_default_is_latest_stable(self) -> None:
        assert capabilities_name() == capabilities_name(LATEST_STABLE)
        assert LATEST_STABLE.version_string in capabilities_name()


# ---------------------------------------------------------------------------
# write_capabilities()
# ---------------------------------------------------------------------------


class TestWriteCapabilities:
    def test_creates_directories(self, tmp_path: Path) -> None:
        out = tmp_path / "a" / "b"
        path = write_capabilities(out, _BoolHolder, LanguageVersion(2, 0), year=2024)
        assert path == out / "capabilities_2.0.bzl.com_github_jetbrains_kotlin.bazel"
        assert path.is_file()

    def test_contents(self, tmp_path: Path) -> None:
        path = write_capabilities(tmp_path, _BoolHolder, LanguageVersion(2, 0), year=2024)
        text = path.read_text(encoding="utf-8")
        assert text.startswith("# Copyright 2024 The Bazel Authors.")
        assert '  "-x": struct(\n' in text
        assert text.endswith("}\n")

    def test_overwrites(self, tmp_path: Path) -> None:
        path = tmp_path / capabilities_name(LanguageVersion(2, 0))
        path.write_text("stale")
        write_capabilities(tmp_path, _BoolHolder, LanguageVersion(2, 0), year=2024)
        assert "stale" not in path.read_text()

    def test_unsupported_type_writes_nothing(self, tmp_path: Path) -> None:
        out = tmp_path / "out"
        with pytest.raises(UnsupportedTypeError):
            write_capabilities(out, _IntHolder, year=2024)
        assert not out.exists()


# ---------------------------------------------------------------------------
# discover_capability_files() / write_templates()
# ---------------------------------------------------------------------------


class TestTemplates:
    def _populate(self, out: Path) -> None:
        out.mkdir(parents=True, exist_ok=True)
        for name in (
            "capabilities_2.0.bzl.com_github_jetbrains_kotlin.bazel",
            "capabilities_1.9.bzl.com_github_jetbrains_kotlin.bazel",
            "capabilities_x.tmp",
            TEMPLATES_FILENAME,
            "BUILD.bazel",
        ):
            (out / name).write_text("")
        (out / "capabilities_dir").mkdir()

    def test_discover_filters_and_sorts(self, tmp_path: Path) -> None:
        self._populate(tmp_path)
        assert discover_capability_files(tmp_path) == [
            "capabilities_1.9.bzl.com_github_jetbrains_kotlin.bazel",
            "capabilities_2.0.bzl.com_github_jetbrains_kotlin.bazel",
        ]

    def test_discover_missing_dir(self, tmp_path: Path) -> None:
        assert discover_capability_files(tmp_path / "nope") == []

    def test_write_templates(self, tmp_path: Path) -> None:
        self._populate(tmp_path)
        path = write_templates(tmp_path, year=2024)
        assert path == tmp_path / TEMPLATES_FILENAME
        text = path.read_text()
        assert text.endswith(
            "TEMPLATES = [\n"
            '  Label("capabilities_1.9.bzl.com_github_jetbrains_kotlin.bazel"),\n'
            '  Label("capabilities_2.0.bzl.com_github_jetbrains_kotlin.bazel")\n'
            "]\n"
        )

    def test_write_templates_empty_dir(self, tmp_path: Path) -> None:
        text = write_templates(tmp_path, year=2024).read_text()
        assert text.endswith("TEMPLATES = []\n")


# ---------------------------------------------------------------------------
# regenerate()
# ---------------------------------------------------------------------------


class TestRegenerate:
    def test_writes_both_files(self, tmp_path: Path) -> None:
        result = regenerate(tmp_path, year=2024)
        assert result.capabilities == tmp_path / capabilities_name()
        assert result.templates == tmp_path / TEMPLATES_FILENAME
        assert result.capabilities.is_file() and result.templates.is_file()
        assert result.flag_count == len(collect_capabilities(K2JVMCompilerArguments))

    def test_templates_lists_new_and_existing(self, tmp_path: Path) -> None:
        old = tmp_path / capabilities_name(LanguageVersion(1, 0))
        old.write_text("")
        result = regenerate(tmp_path, year=2024)
        text = result.templates.read_text()
        assert f'Label("{old.name}")' in text
        assert f'Label("{result.capabilities.name}")' in text

    def test_idempotent(self, tmp_path: Path) -> None:
        first = regenerate(tmp_path, year=2024)
        before = (first.capabilities.read_bytes(), first.templates.read_bytes())
        second = regenerate(tmp_path, year=2024)
        assert (second.capabilities.read_bytes(), second.templates.read_bytes()) == before

    def test_failure_writes_nothing(self, tmp_path: Path) -> None:
        out = tmp_path / "out"
        with pytest.raises(UnsupportedTypeError):
            regenerate(out, _IntHolder, year=2024)
        assert not out.exists()

    def test_to_dict(self, tmp_path: Path) -> None:
        data = regenerate(tmp_path, _BoolHolder, year=2024).to_dict()
        assert data["flags"] == 1
        assert data["templates"] == str(tmp_path / TEMPLATES_FILENAME)
