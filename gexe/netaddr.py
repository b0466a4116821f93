"""Checks whether a TCP address can be listened on."""

from __future__ import annotations

import errno
import socket


class AddressError(OSError):
    """An address could not be parsed or listened on."""


def _parse_error(address: str, reason: str) -> AddressError:
    return AddressError(f"net: address parsing: address {address}: {reason}")


def _split_host_port(address: str) -> tuple[str, str]:
    if address.startswith("["):
        end = address.find("]")
        if end < 0:
            raise _parse_error(address, "missing ']' in address")
        host, rest = address[1:end], address[end + 1:]
        if not rest.startswith(":"):
            raise _parse_error(address, "missing port in address")
        port = rest[1:]
        if ":" in port:
            raise _parse_error(address, "too many colons in address")
        return host, port
    host, sep, port = address.rpartition(":")
    if not sep:
        raise _parse_error(address, "missing port in address")
    if ":" in host:
        raise _parse_error(address, "too many colons in address")
    if "[" in host or "]" in host:
        raise _parse_error(address, "unexpected bracket in address")
    return host, port


def _port_number(address: str, port: str) -> int:
    if port == "":
        return 0
    if port.isdigit():
        number = int(port)
        if number > 65535:
            raise _parse_error(address, "invalid port")
        return number
    try:
        return socket.getservbyname(port, "tcp")
    except OSError:
        raise _parse_error(address, "unknown port") from None


def _listen(host: str, port: int) -> socket.socket:
    if host == "":
        if socket.has_dualstack_ipv6():
            return socket.create_server(("", port), family=socket.AF_INET6, dualstack_ipv6=True)
        return socket.create_server(("", port))
    infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    family, _, _, _, sockaddr = next(
        (info for info in infos if info[0] == socket.AF_INET), infos[0]
    )
    return socket.create_server(sockaddr[:2], family=family)


def addr_usable(address: str) -> None:
    """Raise AddressError unless a TCP listener can be opened on address."""
    host, port_text = _split_host_port(address)
    port = _port_number(address, port_text)
    if host:
        try:
            socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
        except socket.gaierror as err:
            raise AddressError(f"net: address parsing: {err}") from err
    try:
        listener = _listen(host, port)
    except OSError as err:
        if err.errno == errno.EADDRINUSE:
            raise AddressError(f"net: addr in use: {err.strerror}") from err
        raise AddressError(f"net: {err}") from err
    listener.close()