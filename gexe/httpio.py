"""HTTP resource readers and writers whose URLs, headers and bodies expand variables."""

from __future__ import annotations

import ipaddress
import urllib.error
import urllib.parse
import urllib.request
from typing import IO, Iterable, Mapping, Union

from gexe.vars import Variables

HeaderValues = Union[str, Iterable[str]]


def _canonical_key(key: str) -> str:
    """Return the conventional capitalisation of a header name."""
    return "-".join(part[:1].upper() + part[1:].lower() for part in key.split("-"))


def _is_loopback(host: str | None) -> bool:
    if not host:
        return False
    if host.lower() == "localhost":
        return True
    try:
        return ipaddress.ip_address(host).is_loopback
    except ValueError:
        return False


def _opener_for(url: str) -> urllib.request.OpenerDirector:
    """Build an opener; loopback hosts never go through a proxy."""
    if _is_loopback(urllib.parse.urlsplit(url).hostname):
        return urllib.request.build_opener(urllib.request.ProxyHandler({}))
    return urllib.request.build_opener()


class Response:
    """The status and body of an HTTP exchange."""

    def __init__(self, status: str = "", status_code: int = 0, body: IO[bytes] | None = None) -> None:
        self.status = status
        self.status_code = status_code
        self.body = body
        self._data: bytes | None = None

    def read_bytes(self) -> bytes:
        """Read the whole body, closing the stream; later calls return the same data."""
        if self._data is None:
            if self.body is None:
                self._data = b""
            else:
                try:
                    self._data = self.body.read()
                finally:
                    self.body.close()
        return self._data

    def text(self) -> str:
        """Return the body decoded as UTF-8."""
        return self.read_bytes().decode("utf-8", errors="replace")

    def close(self) -> None:
        if self.body is not None:
            self.body.close()

    def __enter__(self) -> "Response":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class _Request:
    """Request state shared by readers and writers."""

    def __init__(self, method: str, url: str, variables: Variables | None) -> None:
        self.method = method
        self.variables = variables if variables is not None else Variables()
        self.url = self.variables.expand(url)
        self.timeout: float | None = None
        self.headers: dict[str, list[str]] = {}
        self.data: bytes | None = None
        self.stream: IO | None = None

    def replace_headers(self, headers: Mapping[str, HeaderValues]) -> None:
        self.headers = {}
        for key, values in headers.items():
            items = [values] if isinstance(values, str) else list(values)
            self.headers[_canonical_key(key)] = items

    def add_header(self, key: str, value: str) -> None:
        name = _canonical_key(self.variables.expand(key))
        self.headers.setdefault(name, []).append(self.variables.expand(value))

    def set_header(self, key: str, value: str) -> None:
        name = _canonical_key(self.variables.expand(key))
        self.headers[name] = [self.variables.expand(value)]

    def set_data(self, data: bytes) -> None:
        self.data = bytes(data)
        self.stream = None

    def set_stream(self, stream: IO) -> None:
        self.stream = stream
        self.data = None

    def _payload(self) -> bytes | None:
        if self.stream is not None:
            chunk = self.stream.read()
            return chunk.encode() if isinstance(chunk, str) else bytes(chunk)
        return self.data

    def send(self) -> Response:
        request = urllib.request.Request(
            self.url,
            data=self._payload(),
            headers={key: ", ".join(values) for key, values in self.headers.items()},
            method=self.method,
        )
        try:
            res = _opener_for(self.url).open(request, timeout=self.timeout)
        except urllib.error.HTTPError as err:
            return Response(f"{err.code} {err.reason}", err.code, err)
        return Response(f"{res.status} {res.reason}", res.status, res)


class ResourceReader:
    """Retrieves a resource with GET."""

    def __init__(self, url: str, variables: Variables | None = None) -> None:
        self._req = _Request("GET", url, variables)

    @property
    def url(self) -> str:
        return self._req.url

    @property
    def headers(self) -> dict[str, list[str]]:
        return self._req.headers

    def set_vars(self, variables: Variables) -> "ResourceReader":
        """Use variables to expand later headers and bodies."""
        self._req.variables = variables
        return self

    def with_timeout(self, timeout: float | None) -> "ResourceReader":
        """Set the request timeout in seconds; None or 0 waits indefinitely."""
        self._req.timeout = timeout or None
        return self

    def with_headers(self, headers: Mapping[str, HeaderValues]) -> "ResourceReader":
        """Replace all request headers."""
        self._req.replace_headers(headers)
        return self

    def add_header(self, key: str, value: str) -> "ResourceReader":
        """Append a value to a header, after expansion."""
        self._req.add_header(key, value)
        return self

    def set_header(self, key: str, value: str) -> "ResourceReader":
        """Replace a header's values with one value, after expansion."""
        self._req.set_header(key, value)
        return self

    def text(self, value: str) -> "ResourceReader":
        """Send value, expanded, as the request body."""
        self._req.set_data(self._req.variables.expand(value).encode())
        return self

    def content(self, data: bytes) -> "ResourceReader":
        """Send data as the request body."""
        self._req.set_data(data)
        return self

    def body(self, stream: IO) -> "ResourceReader":
        """Send what stream holds as the request body."""
        self._req.set_stream(stream)
        return self

    def do(self) -> Response:
        """Send the request and return the response.

        HTTP error statuses are returned as responses; transport failures raise OSError.
        """
        return self._req.send()


class ResourceWriter:
    """Posts data to a resource with POST."""

    def __init__(self, url: str, variables: Variables | None = None) -> None:
        self._req = _Request("POST", url, variables)

    @property
    def url(self) -> str:
        return self._req.url

    @property
    def headers(self) -> dict[str, list[str]]:
        return self._req.headers

    def set_vars(self, variables: Variables) -> "ResourceWriter":
        """Use variables to expand later headers and bodies."""
        self._req.variables = variables
        return self

    def with_timeout(self, timeout: float | None) -> "ResourceWriter":
        """Set the request timeout in seconds; None or 0 waits indefinitely."""
        self._req.timeout = timeout or None
        return self

    def with_headers(self, headers: Mapping[str, HeaderValues]) -> "ResourceWriter":
        """Replace all request headers."""
        self._req.replace_headers(headers)
        return self

    def add_header(self, key: str, value: str) -> "ResourceWriter":
        """Append a value to a header, after expansion."""
        self._req.add_header(key, value)
        return self

    def set_header(self, key: str, value: str) -> "ResourceWriter":
        """Replace a header's values with one value, after expansion."""
        self._req.set_header(key, value)
        return self

    def text(self, value: str) -> "ResourceWriter":
        """Send value, expanded, as the request body."""
        self._req.set_data(self._req.variables.expand(value).encode())
        return self

    def content(self, data: bytes) -> "ResourceWriter":
        """Send data as the request body."""
        self._req.set_data(data)
        return self

    def body(self, stream: IO) -> "ResourceWriter":
        """Send what stream holds as the request body."""
        self._req.set_stream(stream)
        return self

    def form_data(self, values: Mapping[str, HeaderValues]) -> "ResourceWriter":
        """Send values form-encoded, sorted by key."""
        self.set_header("Content-Type", "application/x-www-form-urlencoded")
        pairs = []
        for key in sorted(values):
            items = values[key]
            for item in [items] if isinstance(items, str) else items:
                pairs.append((key, item))
        self._req.set_data(urllib.parse.urlencode(pairs).encode())
        return self

    def do(self) -> Response:
        """Send the request and return the response.

        HTTP error statuses are returned as responses; transport failures raise OSError.
        """
        return self._req.send()


def get(url: str, variables: Variables | None = None) -> ResourceReader:
    """Start a GET request for url."""
    return ResourceReader(url, variables)


def post(url: str, variables: Variables | None = None) -> ResourceWriter:
    """Start a POST request to url."""
    return ResourceWriter(url, variables)