"""capabilities.py - Extract kotlinc flags and render them as Starlark.

Walks an argument-holder dataclass (ancestors first) and yields one
:class:`Capability` per field carrying :class:`~capgen.arguments.Argument`
metadata.  The resulting list is filtered against :data:`SUPPRESSED_FLAGS`,
sorted by flag, and rendered into the ``KOTLIN_OPTS`` document.
"""

import dataclasses
import inspect
import typing
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from capgen.arguments import argument_of
from capgen.bzl import BzlDoc
from capgen.errors import MalformedFieldError
from capgen.starlark import AttributeType, bzl_quote, map_type

# Options that are either confusing, useless, or unexpected to be set outside the worker.
SUPPRESSED_FLAGS: frozenset[str] = frozenset(
    {
        "-P",
        "-X",
        "-Xbuild-file",
        "-Xcompiler-plugin",
        "-Xdump-declarations-to",
        "-Xdump-directory",
        "-Xdump-fqname",
        "-Xdump-perf",
        "-Xintellij-plugin-root",
        "-Xplugin",
        "-classpath",
        "-d",
        "-expression",
        "-help",
        "-include-runtime",
        "-jdk-home",
        "-kotlin-home",
        "-module-name",
        "-no-jdk",
        "-no-stdlib",
        "-script",
        "-script-templates",
    }
)

CAPABILITIES_VARIABLE = "KOTLIN_OPTS"
TEMPLATES_VARIABLE = "TEMPLATES"


@dataclass(frozen=True, order=True)
class Capability:
    """One compiler flag: its token, documentation, default and attribute type.

    ``value_description`` is the placeholder shown for the flag's value in
    listings (e.g. ``<version>``); it is not emitted into ``KOTLIN_OPTS``.
    """

    flag: str
    doc: str = field(compare=False)
    default: str | None = field(compare=False)
    type: AttributeType = field(compare=False)
    value_description: str = field(default="", compare=False)

    def should_suppress(self) -> bool:
        return self.flag in SUPPRESSED_FLAGS

    def default_starlark_value(self) -> str:
        return self.type.convert(self.default)

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dict for JSON output."""
        return {
            "flag": self.flag,
            "doc": self.doc,
            "default": self.default,
            "type": self.type.attr,
            "value_description": self.value_description,
            "suppressed": self.should_suppress(),
        }


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------


def raw_default(value: Any, flag: str = "") -> str | None:
    """Convert a field's runtime default to its raw string form.

    Booleans use the compiler's own ``true``/``false`` spelling.  A string
    array default may hold at most one value.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, Sequence):
        if not value:
            return None
        if len(value) > 1:
            raise MalformedFieldError(
                f"{flag}: multi-valued default {list(value)!r} cannot be represented"
            )
        return str(value[0])
    return str(value)


def _instantiate(klass: type) -> Any:
    try:
        return klass()
    except Exception as exc:
        raise MalformedFieldError(f"cannot instantiate {klass.__qualname__}: {exc}") from exc


def _walk(klass: type, instance: Any, seen: set[type]) -> Iterator[Capability]:
    if klass in seen or not dataclasses.is_dataclass(klass):
        return
    seen.add(klass)
    for base in klass.__bases__:
        yield from _walk(base, instance, seen)

    declared = klass.__dataclass_fields__
    try:
        hints = typing.get_type_hints(klass)
    except NameError:
        # Unresolvable forward reference; map_type reports the raw annotation.
        hints = {}
    for name in inspect.get_annotations(klass):
        f = declared.get(name)
        if f is None:
            continue
        arg = argument_of(f)
        if arg is None:
            continue
        try:
            value = getattr(instance, name)
        except Exception as exc:
            raise MalformedFieldError(f"{arg.value}: cannot read field {name!r}: {exc}") from exc
        yield Capability(
            flag=arg.value,
            doc=arg.description,
            default=raw_default(value, arg.value),
            type=map_type(hints.get(name, f.type)),
            value_description=arg.value_description,
        )


def get_arguments(klass: type, instance: Any = None) -> Iterator[Capability]:
    """Yield a :class:`Capability` per annotated field of *klass*.

    Base-class fields come before the fields a subclass declares.  Defaults
    are read from a single instance of *klass* (created here unless given).

    Raises:
        UnsupportedTypeError: a flag field has no Starlark attribute type.
        MalformedFieldError: the holder or one of its fields cannot be read.
    """
    if not dataclasses.is_dataclass(klass):
        raise MalformedFieldError(f"{klass!r} is not an argument holder dataclass")
    if instance is None:
        instance = _instantiate(klass)
    yield from _walk(klass, instance, set())


def as_capabilities(capabilities: Iterable[Capability]) -> tuple[Capability, ...]:
    """Sort *capabilities* by flag, rejecting duplicate flags."""
    ordered = tuple(sorted(capabilities))
    for prev, cur in zip(ordered, ordered[1:]):
        if prev.flag == cur.flag:
            raise MalformedFieldError(f"duplicate flag {cur.flag!r}")
    return ordered


def collect_capabilities(klass: type, include_suppressed: bool = False) -> tuple[Capability, ...]:
    """Extract, filter and sort the capabilities of *klass*."""
    extracted = get_arguments(klass)
    if not include_suppressed:
        extracted = (c for c in extracted if not c.should_suppress())
    return as_capabilities(extracted)


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


def capabilities_bzl(capabilities: Iterable[Capability], year: int | None = None) -> BzlDoc:
    """Build the ``KOTLIN_OPTS`` document, one struct per flag in flag order."""
    doc = BzlDoc(year=year)
    doc.assignment(
        CAPABILITIES_VARIABLE,
        BzlDoc.dict(
            (
                c.flag,
                BzlDoc.struct(
                    flag=bzl_quote(c.flag),
                    doc=bzl_quote(c.doc),
                    default=c.default_starlark_value(),
                ),
            )
            for c in as_capabilities(capabilities)
        ),
    )
    return doc


def template_labels(filenames: Iterable[str]) -> list[str]:
    """Return sorted ``Label("...")`` literals for capability files."""
    return sorted(f"Label({bzl_quote(name)})" for name in filenames)


def templates_bzl(filenames: Iterable[str], year: int | None = None) -> BzlDoc:
    """Build the ``TEMPLATES`` index document over *filenames*."""
    doc = BzlDoc(year=year)
    doc.assignment(TEMPLATES_VARIABLE, BzlDoc.list(*template_labels(filenames)))
    return doc
