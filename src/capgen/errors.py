"""Error types raised by the capability generator.

Every error is fatal: the CLI reports the message and exits nonzero, and no
output file is written for a run that raised.
"""

from dataclasses import dataclass

EXIT_ERROR = 1
EXIT_USAGE = 2


@dataclass(eq=False)
class CapgenError(Exception):
    """Base class for generator failures."""

    message: str
    code: int = EXIT_ERROR

    def __str__(self) -> str:
        return self.message


class ConfigurationError(CapgenError):
    """A required input (e.g. the output directory) is missing or unusable."""

    def __init__(self, message: str) -> None:
        super().__init__(message, EXIT_USAGE)


class UnsupportedTypeError(CapgenError):
    """A flag field's value type has no Starlark attribute mapping."""

    def __init__(self, tp: object) -> None:
        super().__init__(f"({tp!r}) is not a starlark mappable type")
        self.type = tp


class MalformedFieldError(CapgenError):
    """An annotated flag field cannot be read or represented."""
