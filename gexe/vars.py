"""Session and environment variables with shell-like expansion."""

from __future__ import annotations

import os
import re
import threading
from typing import Callable

DEFAULT_ESCAPE_CHAR = "\\"

# Matches pairs of the forms: a=b, c="${d}", e='f', g="h i j ${k}"
_VARS_RE = re.compile(
    r"""([A-Za-z0-9_]+)=["']?([^"']*?\$\{[A-Za-z0-9_.\s]+\}[^"']*?|[^"']*)["']?"""
)
_SHELL_SPECIAL = frozenset("*#$@!?-0123456789")


def _is_alnum(ch: str) -> bool:
    return ch == "_" or "a" <= ch <= "z" or "A" <= ch <= "Z" or "0" <= ch <= "9"


def _shell_name(s: str) -> tuple[str, int]:
    """Return the variable name at the start of s and the width it takes."""
    if s[0] == "{":
        if len(s) > 2 and s[1] in _SHELL_SPECIAL and s[2] == "}":
            return s[1], 3
        closing = s.find("}", 1)
        if closing == -1:
            return "", 1
        if closing == 1:
            return "", 2
        return s[1:closing], closing + 1
    if s[0] in _SHELL_SPECIAL:
        return s[0], 1
    width = 0
    while width < len(s) and _is_alnum(s[width]):
        width += 1
    return s[:width], width


def _expand_shell(text: str, mapping: Callable[[str], str]) -> str:
    """Replace $name and ${name} references in text using mapping."""
    out: list[str] = []
    start = 0
    pos = 0
    changed = False
    while pos < len(text):
        if text[pos] == "$" and pos + 1 < len(text):
            changed = True
            out.append(text[start:pos])
            name, width = _shell_name(text[pos + 1:])
            if name:
                out.append(mapping(name))
            elif width == 0:
                out.append("$")
            pos += width
            start = pos + 1
        pos += 1
    if not changed:
        return text
    out.append(text[start:])
    return "".join(out)


def _is_boundary(ch: str) -> bool:
    return ch.isspace() or ch in ":#%"


def parse_vars(*args: str) -> list[tuple[str, str]]:
    """Parse each ``key=value`` line into a (key, value) pair, without expansion."""
    result = []
    for line in args:
        match = _VARS_RE.search(line)
        if match:
            result.append((match.group(1), match.group(2)))
    return result


class Variables:
    """A store of session variables used to expand strings."""

    def __init__(self, escape_char: str = DEFAULT_ESCAPE_CHAR) -> None:
        self._vars: dict[str, str] = {}
        self._lock = threading.Lock()
        self.escape_char = escape_char or DEFAULT_ESCAPE_CHAR

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._vars

    def with_escape_char(self, char: str) -> "Variables":
        """Set the escape character; an empty value selects the default."""
        self.escape_char = char or DEFAULT_ESCAPE_CHAR
        return self

    def declare_envs(self, *args: str) -> "Variables":
        """Set process environment variables from ``key=value`` lines."""
        for key, value in parse_vars(*args):
            self.set_env(key, value)
        return self

    def set_env(self, key: str, value: str) -> "Variables":
        """Set a process environment variable after expanding value."""
        os.environ[key] = self.expand_var(value, self.val)
        return self

    def declare_vars(self, *args: str) -> "Variables":
        """Set session variables from ``key=value`` lines."""
        for key, value in parse_vars(*args):
            self.set_var(key, value)
        return self

    def set_var(self, name: str, value: str) -> "Variables":
        """Set a session variable after expanding value."""
        expanded = self.expand_var(value, self.val)
        with self._lock:
            self._vars[name] = expanded
        return self

    def unset_var(self, name: str) -> "Variables":
        """Remove a session variable."""
        with self._lock:
            self._vars.pop(name, None)
        return self

    def val(self, key: str) -> str:
        """Return a session variable, else an environment variable, else ''."""
        with self._lock:
            if key in self._vars:
                return self._vars[key]
        return os.environ.get(key, "")

    def expand(self, text: str) -> str:
        """Expand variable references in text."""
        return self.expand_var(text, self.val)

    def expand_var(self, text: str, expand_func: Callable[[str], str]) -> str:
        """Expand $name and ${name} in text, honouring the escape character."""
        esc = self.escape_char or DEFAULT_ESCAPE_CHAR
        stack: list[str] = []
        result: list[str] = []
        variable: list[str] = []
        in_var = False

        def top() -> str:
            return stack[-1] if stack else ""

        def pop_all() -> None:
            while stack:
                result.append(stack.pop())

        def resolve() -> str:
            name = "".join(variable)
            variable.clear()
            return _expand_shell(name, expand_func)

        for tok in text:
            if tok == esc:
                stack.append(tok)
            elif tok == "$":
                if top() == esc:
                    stack.pop()
                    pop_all()
                    result.append(tok)
                else:
                    stack.append(tok)
            elif tok == "{":
                if top() == "$":
                    in_var = True
                    variable.append(stack.pop())
                    pop_all()
                    variable.append(tok)
                else:
                    result.append(tok)
            elif tok == "}":
                if in_var:
                    in_var = False
                    variable.append(tok)
                    result.append(resolve())
                else:
                    result.append(tok)
            elif _is_boundary(tok):
                if in_var:
                    in_var = False
                    result.append(resolve())
                else:
                    pop_all()
                result.append(tok)
            elif in_var:
                variable.append(tok)
            elif top() == "$":
                in_var = True
                variable.append(stack.pop())
                variable.append(tok)
            else:
                pop_all()
                result.append(tok)

        pop_all()
        if in_var:
            result.append(resolve())
        return "".join(result)