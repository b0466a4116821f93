"""Sessions that tie variables, printing, paths, programs and HTTP together."""

from __future__ import annotations

import io
import os
import shutil
import sys
from typing import IO, Any

from gexe import httpio, netaddr
from gexe import text as _text
from gexe.prog import ProgInfo
from gexe.sprintf import apply_fmt
from gexe.vars import Variables


def _write(writer: IO, value: str) -> None:
    if writer is None:
        raise TypeError("writer must not be None")
    if isinstance(writer, (io.RawIOBase, io.BufferedIOBase)):
        writer.write(value.encode())
    else:
        writer.write(value)


class Session:
    """Holds session variables and program information used by all helpers."""

    def __init__(self) -> None:
        self._vars = Variables()
        self._prog = ProgInfo()

    def variables(self) -> Variables:
        """Return the session's variable store."""
        return self._vars

    def declare_envs(self, *args: str) -> "Session":
        """Set environment variables from ``key=value`` lines."""
        self._vars.declare_envs(*args)
        return self

    def set_env(self, name: str, value: str, *args: Any) -> "Session":
        """Set a process environment variable; value is formatted with args."""
        self._vars.set_env(name, apply_fmt(value, *args))
        return self

    def declare_vars(self, *args: str) -> "Session":
        """Set session variables from ``key=value`` lines."""
        self._vars.declare_vars(*args)
        return self

    def set_var(self, name: str, value: str, *args: Any) -> "Session":
        """Set a session variable; value is formatted with args."""
        self._vars.set_var(name, apply_fmt(value, *args))
        return self

    def unset_var(self, name: str) -> "Session":
        """Remove a session variable."""
        self._vars.unset_var(name)
        return self

    def val(self, name: str) -> str:
        """Return a session variable, else an environment variable, else ''."""
        return self._vars.val(name)

    def expand(self, text: str, *args: Any) -> str:
        """Format text with args, then expand its variable references."""
        return self._vars.expand(apply_fmt(text, *args))

    def add_exec_path(self, exec_path: str) -> None:
        """Append an expanded directory to PATH."""
        old = os.environ.get("PATH", "")
        os.environ["PATH"] = f"{old}{os.pathsep}{self.expand(exec_path)}"

    def prog_avail(self, prog_name: str, *args: Any) -> str:
        """Return the full path of a program on PATH, or '' if not found."""
        name = self.expand(apply_fmt(prog_name, *args))
        return shutil.which(name) or ""

    def prog(self) -> ProgInfo:
        """Return information about the running program."""
        return self._prog

    def workdir(self) -> str:
        """Return the current working directory."""
        return self._prog.workdir()

    def string(self, value: str, *args: Any) -> _text.Str:
        """Return a Str of the formatted and expanded value."""
        return _text.string_with_vars(apply_fmt(value, *args), self._vars)

    def printf(self, fmt: str, *args: Any) -> "Session":
        """Write the formatted, expanded text to stdout without a newline."""
        sys.stdout.write(self._vars.expand(apply_fmt(fmt, *args)))
        return self

    def println(self, fmt: str, *args: Any) -> "Session":
        """Write the formatted, expanded text to stdout with a newline."""
        sys.stdout.write(self._vars.expand(apply_fmt(fmt, *args)) + "\n")
        return self

    def print_to(self, writer: IO, fmt: str, *args: Any) -> "Session":
        """Write the formatted, expanded text to writer."""
        _write(writer, self._vars.expand(apply_fmt(fmt, *args)))
        return self

    def join(self, sep: str, *args: str) -> str:
        """Join the expanded elements with sep."""
        return sep.join(self._vars.expand(e) for e in args)

    def join_path(self, *args: str) -> str:
        """Join the expanded, non-empty elements as a cleaned file path."""
        parts = [p for p in (self._vars.expand(e) for e in args) if p]
        if not parts:
            return ""
        return os.path.normpath(os.sep.join(parts))

    def _url(self, url: str, paths: tuple[str, ...]) -> str:
        return self._vars.expand(url) + "".join(self._vars.expand(p) for p in paths)

    def http_get(self, url: str, *args: str) -> httpio.ResourceReader:
        """Start a GET request for the expanded url followed by paths."""
        return httpio.get(self._url(url, args), self._vars)

    def http_post(self, url: str, *args: str) -> httpio.ResourceWriter:
        """Start a POST request to the expanded url followed by paths."""
        return httpio.post(self._url(url, args), self._vars)

    def get(self, url: str, *args: str) -> httpio.Response:
        """Retrieve the resource at url followed by paths."""
        return self.http_get(url, *args).do()

    def post(self, data: bytes, url: str, *args: str) -> httpio.Response:
        """Post data to url followed by paths."""
        return self.http_post(url, *args).content(data).do()

    def address_usable(self, addr: str) -> None:
        """Raise AddressError unless the expanded TCP address can be listened on."""
        netaddr.addr_usable(self.expand(addr))


DEFAULT_SESSION = Session()


def variables() -> Variables:
    return DEFAULT_SESSION.variables()


def declare_envs(*args: str) -> Session:
    return DEFAULT_SESSION.declare_envs(*args)


def set_env(name: str, value: str, *args: Any) -> Session:
    return DEFAULT_SESSION.set_env(name, value, *args)


def declare_vars(*args: str) -> Session:
    return DEFAULT_SESSION.declare_vars(*args)


def set_var(name: str, value: str, *args: Any) -> Session:
    return DEFAULT_SESSION.set_var(name, value, *args)


def val(name: str) -> str:
    return DEFAULT_SESSION.val(name)


def expand(text: str, *args: Any) -> str:
    return DEFAULT_SESSION.expand(text, *args)


def prog() -> ProgInfo:
    return DEFAULT_SESSION.prog()


def prog_avail(prog_name: str, *args: Any) -> str:
    return DEFAULT_SESSION.prog_avail(prog_name, *args)


def workdir() -> str:
    return DEFAULT_SESSION.workdir()


def add_exec_path(exec_path: str) -> None:
    DEFAULT_SESSION.add_exec_path(exec_path)


def string(value: str, *args: Any) -> _text.Str:
    return DEFAULT_SESSION.string(value, *args)


def printf(fmt: str, *args: Any) -> Session:
    return DEFAULT_SESSION.printf(fmt, *args)


def println(fmt: str, *args: Any) -> Session:
    return DEFAULT_SESSION.println(fmt, *args)


def print_to(writer: IO, fmt: str, *args: Any) -> Session:
    return DEFAULT_SESSION.print_to(writer, fmt, *args)


def join(sep: str, *args: str) -> str:
    return DEFAULT_SESSION.join(sep, *args)


def join_path(*args: str) -> str:
    return DEFAULT_SESSION.join_path(*args)


def http_get(url: str, *args: str) -> httpio.ResourceReader:
    return DEFAULT_SESSION.http_get(url, *args)


def http_post(url: str, *args: str) -> httpio.ResourceWriter:
    return DEFAULT_SESSION.http_post(url, *args)


def get(url: str, *args: str) -> httpio.Response:
    return DEFAULT_SESSION.get(url, *args)


def post(data: bytes, url: str) -> httpio.Response:
    return DEFAULT_SESSION.post(data, url)