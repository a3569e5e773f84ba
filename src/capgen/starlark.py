"""Starlark attribute types and literal encoding.

AttributeType:  the closed set of rule attribute shapes a flag can take
bzl_quote:      quote a value as a Starlark string literal
map_type:       resolve a Python field type to its AttributeType
"""

import collections.abc
import enum
import types
import typing

from capgen.errors import UnsupportedTypeError


def bzl_quote(value: object) -> str:
    """Quote *value* as a Starlark string literal.

    Uses ``"`` unless the text contains a newline or a double quote, in which
    case the literal is triple-quoted instead of escaped.  Text containing
    three consecutive quotes cannot be represented.
    """
    text = str(value)
    quote = '"' * (3 if "\n" in text or '"' in text else 1)
    return quote + text + quote


class AttributeType(enum.Enum):
    """Starlark rule attribute shapes, keyed by their ``attr`` constructor."""

    BOOL = "attr.bool"
    STR = "attr.string"
    STR_LIST = "attr.string_list"

    @property
    def attr(self) -> str:
        return self.value

    def convert(self, value: str | None) -> str:
        """Render a raw default as a Starlark literal of this type."""
        if self is AttributeType.BOOL:
            return "True" if value == "true" else "False"
        if self is AttributeType.STR:
            return "None" if value is None else bzl_quote(value)
        if self is AttributeType.STR_LIST:
            return "[]" if value is None else f"[{bzl_quote(value)}]"
        raise AssertionError(f"unhandled attribute type: {self}")


_SEQUENCE_ORIGINS = {list, tuple, collections.abc.Sequence}


def _strip_optional(tp: object) -> object:
    """Return ``X`` for ``X | None`` / ``Optional[X]``, else *tp* unchanged."""
    origin = typing.get_origin(tp)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def _is_string_array(tp: object) -> bool:
    if typing.get_origin(tp) not in _SEQUENCE_ORIGINS:
        return False
    args = typing.get_args(tp)
    if typing.get_origin(tp) is tuple:
        # tuple[str, ...] only; fixed-arity tuples are not flag arrays
        return args == (str, Ellipsis)
    return args == (str,)


def map_type(tp: object) -> AttributeType:
    """Map a flag field's Python type to its Starlark attribute type.

    Raises:
        UnsupportedTypeError: *tp* is not a bool, str or string array.
    """
    inner = _strip_optional(tp)
    if inner is bool:
        return AttributeType.BOOL
    if inner is str:
        return AttributeType.STR
    if _is_string_array(inner):
        return AttributeType.STR_LIST
    raise UnsupportedTypeError(tp)
