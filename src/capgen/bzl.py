"""bzl.py - Minimal Starlark document builder.

Assembles ``.bzl`` files out of blocks: comments, ``NAME = value``
assignments, and three nested value shapes (struct, dict, list).  Every
value renders relative to the indentation of the line it opens on: its
children go one step deeper and its closing delimiter lines up with the
opening line.

Usage::

    doc = BzlDoc(year=2025)
    doc.assignment("OPTS", BzlDoc.dict({"-x": BzlDoc.struct(flag='"-x"')}))
    text = doc.render()

Only emission is supported; nothing here parses Starlark.
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

import jinja2

from capgen.starlark import bzl_quote

GENERATOR_COMMAND = "capgen generate"

_HEADER_TEMPLATE = jinja2.Template(
    """\
# Copyright {{ year }} The Bazel Authors. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# DO NOT EDIT: generated by {{ command }}""",
    autoescape=False,
)


@dataclass(frozen=True)
class Indent:
    """Immutable indentation level measured in spaces."""

    spaces: int = 0
    step: int = 2

    def increment(self) -> Indent:
        return Indent(self.spaces + self.step, self.step)

    def __str__(self) -> str:
        return " " * self.spaces

    def __add__(self, text: str) -> str:
        return str(self) + text


class Block:
    """A renderable piece of a document."""

    def render(self, indent: Indent) -> str | None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render(Indent()) or ""


class Comment(Block):
    """Literal text (usually ``#`` lines) placed at the current indentation."""

    def __init__(self, contents: str) -> None:
        self.contents = contents

    def render(self, indent: Indent) -> str:
        return "\n".join(indent + line if line else line for line in self.contents.split("\n"))


class ValueBlock(Block):
    """A value expression.

    ``render(indent)`` returns text whose first line continues the line it is
    placed on; *indent* is that line's indentation.
    """


Value = ValueBlock | str


def _render_value(value: Value, indent: Indent) -> str | None:
    if isinstance(value, str):
        return value
    return value.render(indent)


def _composite(opening: str, closing: str, lines: list[str], indent: Indent) -> str:
    if not lines:
        return opening + closing
    return opening + "\n" + ",\n".join(lines) + "\n" + str(indent) + closing


class StructValue(ValueBlock):
    """``struct(name = literal, ...)``; fields whose literal is None are omitted."""

    def __init__(self, fields: Iterable[tuple[str, str | None]]) -> None:
        self.fields = tuple(fields)

    def render(self, indent: Indent) -> str:
        inner = indent.increment()
        lines = [inner + f"{key} = {value}" for key, value in self.fields if value is not None]
        return _composite("struct(", ")", lines, indent)


class DictValue(ValueBlock):
    """``{"key": value, ...}`` with quoted keys, in insertion order."""

    def __init__(self, entries: Iterable[tuple[str, Value]]) -> None:
        self.entries = tuple(entries)

    def render(self, indent: Indent) -> str:
        inner = indent.increment()
        lines = []
        for key, value in self.entries:
            rendered = _render_value(value, inner)
            if rendered is not None:
                lines.append(inner + f"{bzl_quote(key)}: {rendered}")
        return _composite("{", "}", lines, indent)


class ListValue(ValueBlock):
    """``[item, ...]`` over pre-rendered literals."""

    def __init__(self, items: Iterable[str]) -> None:
        self.items = tuple(items)

    def render(self, indent: Indent) -> str:
        inner = indent.increment()
        return _composite("[", "]", [inner + item for item in self.items], indent)


class Assignment(Block):
    """``NAME = value`` statement."""

    def __init__(self, name: str, value: Value) -> None:
        self.name = name
        self.value = value

    def render(self, indent: Indent) -> str | None:
        rendered = _render_value(self.value, indent)
        if rendered is None:
            return None
        return indent + f"{self.name} = {rendered}"


def header(year: int | None = None, command: str = GENERATOR_COMMAND) -> Comment:
    """License and provenance comment that opens every generated file."""
    if year is None:
        year = datetime.date.today().year
    return Comment(_HEADER_TEMPLATE.render(year=year, command=command))


class BzlDoc:
    """An append-only list of top-level statements, headed by :func:`header`."""

    def __init__(self, year: int | None = None, with_header: bool = True) -> None:
        self.contents: list[Block] = []
        if with_header:
            self.statement(header(year))

    def statement(self, *statements: Block) -> None:
        self.contents.extend(statements)

    def assignment(self, name: str, value: Value) -> None:
        self.statement(Assignment(name, value))

    @staticmethod
    def struct(**fields: str | None) -> StructValue:
        return StructValue(fields.items())

    @staticmethod
    def dict(entries: Mapping[str, Value] | Iterable[tuple[str, Value]]) -> DictValue:
        if isinstance(entries, Mapping):
            entries = entries.items()
        return DictValue(entries)

    @staticmethod
    def list(*items: str) -> ListValue:
        return ListValue(items)

    def render(self) -> str:
        rendered = (block.render(Indent()) for block in self.contents)
        return "\n".join(text for text in rendered if text is not None)

    def __str__(self) -> str:
        return self.render()
