"""emit.py - Write generated capability documents to disk.

Two files land in the output directory:

- ``capabilities_<major>.<minor>.bzl.com_github_jetbrains_kotlin.bazel``
  holding ``KOTLIN_OPTS`` for the given language version;
- ``templates.bzl`` listing every ``capabilities_*`` file found there, so
  that versions generated by earlier runs stay registered.

Documents are fully rendered before anything is written; a run that fails
during extraction leaves the directory untouched.
"""

from dataclasses import dataclass
from pathlib import Path

from capgen.arguments import LATEST_STABLE, K2JVMCompilerArguments, LanguageVersion
from capgen.capabilities import capabilities_bzl, collect_capabilities, templates_bzl
from capgen.utils import atomic_write_text

CAPABILITIES_PREFIX = "capabilities_"
CAPABILITIES_SUFFIX = ".bzl.com_github_jetbrains_kotlin.bazel"
TEMPLATES_FILENAME = "templates.bzl"


def capabilities_name(version: LanguageVersion = LATEST_STABLE) -> str:
    """Filename of the capabilities document for *version*."""
    return f"{CAPABILITIES_PREFIX}{version.major}.{version.minor}{CAPABILITIES_SUFFIX}"


def _write_doc(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    atomic_write_text(path, text + "\n")


def _write_capabilities(
    out_dir: Path, klass: type, version: LanguageVersion, year: int | None
) -> tuple[Path, int]:
    capabilities = collect_capabilities(klass)
    text = capabilities_bzl(capabilities, year=year).render()
    path = out_dir / capabilities_name(version)
    _write_doc(path, text)
    return path, len(capabilities)


def write_capabilities(
    out_dir: Path,
    klass: type = K2JVMCompilerArguments,
    version: LanguageVersion = LATEST_STABLE,
    year: int | None = None,
) -> Path:
    """Render and write the capabilities document for *klass*."""
    path, _ = _write_capabilities(out_dir, klass, version, year)
    return path


def discover_capability_files(out_dir: Path) -> list[str]:
    """Return sorted names of capability files already in *out_dir*."""
    if not out_dir.is_dir():
        return []
    return sorted(
        p.name
        for p in out_dir.iterdir()
        if p.is_file() and p.name.startswith(CAPABILITIES_PREFIX) and not p.name.endswith(".tmp")
    )


def write_templates(out_dir: Path, year: int | None = None) -> Path:
    """Write ``templates.bzl`` indexing the capability files in *out_dir*."""
    text = templates_bzl(discover_capability_files(out_dir), year=year).render()
    path = out_dir / TEMPLATES_FILENAME
    _write_doc(path, text)
    return path


@dataclass
class EmitResult:
    """Paths written by :func:`regenerate`."""

    capabilities: Path
    templates: Path
    flag_count: int

    def to_dict(self) -> dict[str, object]:
        return {
            "capabilities": str(self.capabilities),
            "templates": str(self.templates),
            "flags": self.flag_count,
        }


def regenerate(
    out_dir: Path,
    klass: type = K2JVMCompilerArguments,
    version: LanguageVersion = LATEST_STABLE,
    year: int | None = None,
) -> EmitResult:
    """Regenerate the capabilities document for *version*, then the index."""
    cap_path, count = _write_capabilities(out_dir, klass, version, year)
    tmpl_path = write_templates(out_dir, year=year)
    return EmitResult(capabilities=cap_path, templates=tmpl_path, flag_count=count)
