"""Output configuration for capgen.

The destination directory comes from ``--out`` (or ``CAPGEN_OUT``), falling
back to an optional ``capgen.toml`` found in the current directory or one of
its parents::

    [output]
    dir = "src/main/starlark/core/repositories/kotlin"
    year = 2025            # optional, pins the copyright year

``${VAR}`` tokens in the destination are replaced from the environment before
the path is used.

Usage::

    from capgen.config import load_config
    cfg = load_config(out="${BUILD_WORKSPACE_DIRECTORY}/kotlin")
    cfg.out_dir   # Path
"""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from capgen.errors import ConfigurationError

CONFIG_FILENAME = "capgen.toml"

_ENV_PATTERN = re.compile(r"\$\{(\w+)}")


@dataclass(frozen=True)
class GeneratorConfig:
    """Resolved generator settings."""

    out_dir: Path
    year: int | None = None
    config_path: Path | None = None


def expand_env(value: str, environ: Mapping[str, str] | None = None) -> str:
    """Replace every ``${VAR}`` in *value* with its environment value.

    Raises:
        ConfigurationError: a referenced variable is not set.
    """
    env = os.environ if environ is None else environ

    def _sub(m: re.Match[str]) -> str:
        name = m.group(1)
        if name not in env:
            raise ConfigurationError(f"environment variable {name} referenced in {value!r} is not set")
        return env[name]

    return _ENV_PATTERN.sub(_sub, value)


def _resolve(root: Path, rel: str) -> Path:
    """Resolve a path relative to the config file's directory."""
    p = Path(rel)
    if p.is_absolute():
        return p
    return root / p


def find_config_file(start: Path | None = None) -> Path | None:
    """Walk up from *start* (or cwd) looking for ``capgen.toml``."""
    candidate = (start or Path.cwd()).resolve()
    while True:
        path = candidate / CONFIG_FILENAME
        if path.is_file():
            return path
        if candidate == candidate.parent:
            return None
        candidate = candidate.parent


def _read_toml(path: Path) -> dict:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"{path}: {exc}") from exc


def load_config(
    out: str | None = None,
    year: int | None = None,
    start: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> GeneratorConfig:
    """Resolve the generator configuration.

    Args:
        out: Destination directory; takes precedence over ``capgen.toml``.
        year: Copyright year override; takes precedence over ``capgen.toml``.
        start: Directory to start the ``capgen.toml`` search from.
        environ: Environment used for ``${VAR}`` substitution.

    ``capgen.toml`` is only consulted when ``out`` or ``year`` is missing.

    Raises:
        ConfigurationError: no destination was given anywhere, or
            ``capgen.toml`` is unreadable.
    """
    config_path: Path | None = None
    output: dict = {}
    if not out or year is None:
        config_path = find_config_file(start)
    if config_path is not None:
        output = _read_toml(config_path).get("output", {})
        if not isinstance(output, dict):
            raise ConfigurationError(f"{config_path}: [output] must be a table")

    if out:
        out_dir = Path(expand_env(out, environ))
    elif output.get("dir"):
        out_dir = _resolve(config_path.parent, expand_env(str(output["dir"]), environ))
    else:
        raise ConfigurationError("--out is required")

    if year is None and "year" in output:
        try:
            year = int(output["year"])
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"{config_path}: invalid year {output['year']!r}") from exc

    return GeneratorConfig(out_dir=out_dir, year=year, config_path=config_path)
