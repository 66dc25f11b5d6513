"""Immutable ``Url`` and its mutable ``URLBuilder`` counterpart.

``Url`` is the rendered result handed to callers; ``URLBuilder`` is what
code assembles a URL with.  Either can be copied into a builder with
``take_from``, which copies every component verbatim, including the
port as *specified* (0 when the URL relies on the scheme default).
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from perch.http.encoding import decode_url_part, encode_path_segment
from perch.http.parameters import (
    EMPTY_PARAMETERS,
    MultiValueMappingLike,
    Parameters,
    ParametersBuilder,
)

# Port value meaning "not specified, use the protocol default"
DEFAULT_PORT = 0


@dataclass(frozen=True, slots=True)
class URLProtocol:
    """A URL scheme and the port it uses when none is given."""

    name: str
    default_port: int

    @classmethod
    def create_or_default(cls, name: str) -> URLProtocol:
        """Return the well-known protocol for *name*, or a new one with no default port."""
        lowered = name.lower()
        return PROTOCOLS.get(lowered) or cls(lowered, DEFAULT_PORT)


HTTP = URLProtocol("http", 80)
HTTPS = URLProtocol("https", 443)
WS = URLProtocol("ws", 80)
WSS = URLProtocol("wss", 443)
SOCKS = URLProtocol("socks", 1080)

PROTOCOLS: dict[str, URLProtocol] = {p.name: p for p in (HTTP, HTTPS, WS, WSS, SOCKS)}


@dataclass(frozen=True, slots=True)
class Url:
    """A fully built URL. Immutable.

    ``specified_port`` is the port as written (``DEFAULT_PORT`` when
    absent); ``port`` falls back to the protocol default.
    """

    protocol: URLProtocol = HTTP
    host: str = "localhost"
    specified_port: int = DEFAULT_PORT
    encoded_path: str = ""
    parameters: Parameters = EMPTY_PARAMETERS
    fragment: str = ""
    user: str | None = None
    password: str | None = None
    trailing_query: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.specified_port <= 65535:
            msg = f"Port must be between 0 and 65535, got {self.specified_port}"
            raise ValueError(msg)

    @classmethod
    def parse(cls, url_string: str) -> Url:
        """Build a ``Url`` from its string form."""
        return URLBuilder(url_string).build()

    @property
    def port(self) -> int:
        if self.specified_port != DEFAULT_PORT:
            return self.specified_port
        return self.protocol.default_port

    @property
    def full_path(self) -> str:
        """Encoded path plus query string, without scheme, host or port."""
        return render_full_path(self.encoded_path, self.parameters, self.trailing_query)

    @property
    def host_with_port(self) -> str:
        """``host:port``, not normalized: the port is present even when it is the default."""
        return f"{_render_host(self.host)}:{self.port}"

    def __str__(self) -> str:
        out = [self.protocol.name, "://"]
        if self.user is not None:
            out.append(encode_path_segment(self.user))
            if self.password is not None:
                out.append(":")
                out.append(encode_path_segment(self.password))
            out.append("@")
        out.append(_render_host(self.host))
        if self.specified_port != DEFAULT_PORT:
            out.append(f":{self.specified_port}")
        out.append(self.full_path)
        if self.fragment:
            out.append("#")
            out.append(self.fragment)
        return "".join(out)


def render_full_path(encoded_path: str, parameters: Parameters, trailing_query: bool) -> str:
    """Join an encoded path and query parameters.

    Examples::

        render_full_path("", Parameters(), False)            -> "/"
        render_full_path("a", Parameters(), False)           -> "/a"
        render_full_path("/a", Parameters([("k", "v")]), False) -> "/a?k=v"
        render_full_path("/a", Parameters(), True)           -> "/a?"
    """
    path = encoded_path if encoded_path.startswith("/") else f"/{encoded_path}"
    if parameters.is_empty() and not trailing_query:
        return path
    return f"{path}?{parameters.form_url_encode()}"


def _host_of(netloc: str) -> str:
    """Host as written in *netloc*: case kept, IPv6 brackets removed."""
    hostinfo = netloc.rpartition("@")[2]
    if hostinfo.startswith("["):
        return hostinfo[1:].partition("]")[0]
    return hostinfo.partition(":")[0]


def _render_host(host: str) -> str:
    # IPv6 literals need brackets to stay separable from the port
    if ":" in host and not host.startswith("["):
        return f"[{host}]"
    return host


class URLBuilder:
    """Mutable URL under construction.

    Usage::

        builder = URLBuilder(host="example.com", encoded_path="/users/42")
        builder.parameters.append("tab", "posts")
        str(builder.build())  # "http://example.com/users/42?tab=posts"

    Passing a ``Url``, ``URLBuilder`` or string as the first argument is
    shorthand for ``URLBuilder().take_from(source)``.
    """

    __slots__ = (
        "encoded_path",
        "fragment",
        "host",
        "parameters",
        "password",
        "port",
        "protocol",
        "trailing_query",
        "user",
    )

    def __init__(
        self,
        source: Url | URLBuilder | str | None = None,
        *,
        protocol: URLProtocol = HTTP,
        host: str = "localhost",
        port: int = DEFAULT_PORT,
        encoded_path: str = "",
        parameters: MultiValueMappingLike | None = None,
        fragment: str = "",
        user: str | None = None,
        password: str | None = None,
        trailing_query: bool = False,
    ) -> None:
        self.protocol = protocol
        self.host = host
        self.port = port
        self.encoded_path = encoded_path
        self.parameters = ParametersBuilder()
        if parameters is not None:
            self.parameters.append_all(parameters)
        self.fragment = fragment
        self.user = user
        self.password = password
        self.trailing_query = trailing_query

        if source is not None:
            self.take_from(source)

    def take_from(self, source: Url | URLBuilder | str) -> URLBuilder:
        """Copy every component of *source* into this builder.

        Parameters are appended to the ones already present.  When
        *source* is a ``Url`` its specified port is copied, so a port
        equal to the scheme default survives the round trip.
        """
        if isinstance(source, str):
            return self._take_from_string(source)

        if isinstance(source, Url):
            port = source.specified_port
        elif isinstance(source, URLBuilder):
            port = source.port
        else:
            msg = f"Cannot take URL components from {type(source).__name__}"
            raise TypeError(msg)

        self.protocol = source.protocol
        self.host = source.host
        self.port = port
        self.encoded_path = source.encoded_path
        self.user = source.user
        self.password = source.password
        self.parameters.append_all(source.parameters)
        self.fragment = source.fragment
        self.trailing_query = source.trailing_query
        return self

    def _take_from_string(self, url_string: str) -> URLBuilder:
        text = url_string.strip()
        parts = urlsplit(text)

        if parts.scheme:
            self.protocol = URLProtocol.create_or_default(parts.scheme)
        if parts.netloc:
            self.host = _host_of(parts.netloc)
            self.port = parts.port or DEFAULT_PORT
            self.user = decode_url_part(parts.username) if parts.username is not None else None
            self.password = decode_url_part(parts.password) if parts.password is not None else None

        self.encoded_path = parts.path
        self.parameters.clear()
        self.parameters.append_all(Parameters.parse(parts.query))
        self.fragment = parts.fragment
        self.trailing_query = not parts.query and "?" in text.partition("#")[0]
        return self

    def build(self) -> Url:
        return Url(
            protocol=self.protocol,
            host=self.host,
            specified_port=self.port,
            encoded_path=self.encoded_path,
            parameters=self.parameters.build(),
            fragment=self.fragment,
            user=self.user,
            password=self.password,
            trailing_query=self.trailing_query,
        )

    def build_string(self) -> str:
        return str(self.build())

    def __repr__(self) -> str:
        return f"URLBuilder({self.build_string()!r})"
