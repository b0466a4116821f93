"""Script helpers: variable expansion, printf formatting, strings, HTTP, program and network info."""

__version__ = "0.1.0"

__all__ = ["httpio", "netaddr", "prog", "session", "sprintf", "text", "vars"]