"""A chainable string value with conversion and manipulation helpers."""

from __future__ import annotations

import io
import re
from typing import IO

from gexe.vars import Variables

# Non-space characters as understood by the ASCII \s class.
_NOT_SPACE_RE = re.compile(r"[^\t\n\f\r ]")
_INT_RE = re.compile(r"[+-]?[0-9]+")
_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}


def _parse_bool(value: str) -> bool:
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"invalid boolean syntax: {value!r}")


def _parse_int(value: str) -> int:
    if not _INT_RE.fullmatch(value):
        raise ValueError(f"invalid integer syntax: {value!r}")
    return int(value)


def _parse_float(value: str) -> float:
    if value != value.strip() or "_" in value or not value:
        raise ValueError(f"invalid float syntax: {value!r}")
    return float(value)


class Str:
    """A mutable string value whose manipulation methods return itself."""

    def __init__(self, value: str = "", variables: Variables | None = None) -> None:
        self.value = value
        self.variables = variables if variables is not None else Variables()

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Str({self.value!r})"

    def is_empty(self) -> bool:
        return self.value == ""

    def eq(self, other: str) -> bool:
        """Compare case-insensitively."""
        return self.value.casefold() == other.casefold()

    def split(self, sep: str) -> list[str]:
        if sep == "":
            return list(self.value)
        return self.value.split(sep)

    def split_lines(self) -> list[str]:
        return self.value.split("\n")

    def split_spaces(self) -> list[str]:
        return _NOT_SPACE_RE.split(self.value)

    def split_regex(self, pattern: str) -> list[str]:
        return re.split(pattern, self.value)

    def to_bytes(self) -> bytes:
        return self.value.encode()

    def to_bool(self) -> bool:
        """Parse the value as a boolean; raise ValueError if invalid."""
        return _parse_bool(self.value)

    def to_int(self) -> int:
        """Parse the value as a decimal integer; raise ValueError if invalid."""
        return _parse_int(self.value)

    def to_float(self) -> float:
        """Parse the value as a float; raise ValueError if invalid."""
        return _parse_float(self.value)

    def reader(self) -> io.BytesIO:
        return io.BytesIO(self.value.encode())

    def lower(self) -> "Str":
        self.value = self.value.lower()
        return self

    def upper(self) -> "Str":
        self.value = self.value.upper()
        return self

    def title(self) -> "Str":
        """Map every character to its title case."""
        chars = []
        for ch in self.value:
            mapped = ch.title()
            chars.append(mapped if len(mapped) == 1 else ch)
        self.value = "".join(chars)
        return self

    def trim_spaces(self) -> "Str":
        self.value = self.value.strip()
        return self

    def trim_left(self, cutset: str) -> "Str":
        self.value = self.value.lstrip(cutset) if cutset else self.value
        return self

    def trim_right(self, cutset: str) -> "Str":
        self.value = self.value.rstrip(cutset) if cutset else self.value
        return self

    def trim(self, cutset: str) -> "Str":
        self.value = self.value.strip(cutset) if cutset else self.value
        return self

    def replace_all(self, old: str, new: str) -> "Str":
        self.value = self.value.replace(old, new)
        return self

    def concat(self, *args: str) -> "Str":
        """Append each expanded argument to the value."""
        self.value += "".join(self.variables.expand(a) for a in args)
        return self

    def copy_to(self, dest: IO) -> "Str":
        """Write the value to a text or binary stream."""
        if isinstance(dest, io.TextIOBase):
            dest.write(self.value)
        else:
            dest.write(self.value.encode())
        return self


def string(value: str) -> Str:
    return Str(value)


def string_with_vars(value: str, variables: Variables) -> Str:
    """Create a Str from value expanded with variables."""
    return Str(variables.expand(value), variables)


def is_empty(value: str) -> bool:
    return Str(value).is_empty()


def split_lines(value: str) -> list[str]:
    return Str(value).split_lines()


def split_spaces(value: str) -> list[str]:
    return Str(value).split_spaces()


def to_bool(value: str) -> bool:
    return Str(value).to_bool()


def to_int(value: str) -> int:
    return Str(value).to_int()


def to_float(value: str) -> float:
    return Str(value).to_float()