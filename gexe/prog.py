"""Information about the running program."""

from __future__ import annotations

import os
import shutil
import sys
from typing import NoReturn


class ProgInfo:
    """Facts about the current process and its environment."""

    def args(self) -> list[str]:
        """Return the program's command-line arguments."""
        return list(sys.argv)

    def exit(self, code: int, *args: str) -> NoReturn:
        """Print each message, then exit with code."""
        for message in args:
            print(message, end="")
        sys.stdout.flush()
        sys.exit(code)

    def pid(self) -> int:
        return os.getpid()

    def ppid(self) -> int:
        return os.getppid()

    def path(self) -> str:
        """Return the path of the running executable."""
        if not sys.executable:
            raise FileNotFoundError("path of the running executable is unknown")
        return sys.executable

    def name(self) -> str:
        """Return the base name of the running executable."""
        return os.path.basename(self.path())

    def avail(self, prog_name: str) -> str:
        """Return the full path of prog_name on PATH, or '' if it is not found."""
        return shutil.which(prog_name) or ""

    def workdir(self) -> str:
        """Return the current working directory."""
        return os.getcwd()