# gemview/models/uri.py
import re
from dataclasses import dataclass
from typing import NamedTuple

URL_PATTERN = re.compile(
    r"^(([^:/?#]+):)?(//([^/?#]*))?([^?#]*)(\?([^#]*))?(#(.*))?",
    re.IGNORECASE | re.DOTALL,
)
AUTH_PATTERN = re.compile(
    r"(([^@]+)@)?(([^:\[\]]+)|(\[[0-9a-f:]+\]))(:([0-9]+))?",
    re.IGNORECASE,
)


class Span(NamedTuple):
    """Half-open [start, end) range into the text a Uri was parsed from."""
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start


EMPTY = Span(0, 0)


def _span(match, group: int, offset: int = 0) -> Span:
    if match.group(group) is None:
        return EMPTY
    return Span(match.start(group) + offset, match.end(group) + offset)


@dataclass(frozen=True)
class UriParts:
    scheme: str = ""
    host: str = ""
    port: str = ""
    path: str = ""
    query: str = ""
    fragment: str = ""


@dataclass(frozen=True)
class Uri:
    """
    A view over a URI string. Components are spans into `text`; nothing is
    copied until a component is read. The view stays valid for as long as it
    holds `text`, so keep the Uri, not the spans.

    Query and fragment spans include their leading '?' / '#': "?" alone is a
    present-but-empty query, while an empty span means no query at all.
    """
    text: str
    scheme_span: Span = EMPTY
    host_span: Span = EMPTY
    port_span: Span = EMPTY
    path_span: Span = EMPTY
    query_span: Span = EMPTY
    fragment_span: Span = EMPTY

    def _slice(self, span: Span) -> str:
        return self.text[span.start:span.end]

    @property
    def scheme(self) -> str:
        return self._slice(self.scheme_span)

    @property
    def host(self) -> str:
        return self._slice(self.host_span)

    @property
    def port(self) -> str:
        return self._slice(self.port_span)

    @property
    def path(self) -> str:
        return self._slice(self.path_span)

    @property
    def query(self) -> str:
        return self._slice(self.query_span)

    @property
    def fragment(self) -> str:
        return self._slice(self.fragment_span)

    @property
    def has_query(self) -> bool:
        return not self.query_span.is_empty

    @property
    def query_text(self) -> str:
        """Query without the leading '?'."""
        return self.query[1:]

    def to_parts(self) -> UriParts:
        """Copy the components out, for callers that outlive the source text."""
        return UriParts(
            scheme=self.scheme,
            host=self.host,
            port=self.port,
            path=self.path,
            query=self.query,
            fragment=self.fragment,
        )


def parse(text: str) -> Uri:
    """Split `text` into URI components. Never raises; missing parts stay empty."""
    text = text or ""
    # "file:" only has the path part
    if text[:7].lower() == "file://":
        return Uri(text, scheme_span=Span(0, 4), path_span=Span(7, len(text)))

    m = URL_PATTERN.match(text)
    if not m:
        return Uri(text)
    host = _span(m, 4)
    port = Span(host.end, host.end)
    if not host.is_empty:
        auth = AUTH_PATTERN.match(text, host.start, host.end)
        if auth:
            # match positions are already absolute since we matched on `text`
            host = _span(auth, 3)
            port = _span(auth, 7)
            if port.is_empty:
                port = Span(host.end, host.end)
    return Uri(
        text,
        scheme_span=_span(m, 2),
        host_span=host,
        port_span=port,
        path_span=_span(m, 5),
        query_span=_span(m, 6),
        fragment_span=_span(m, 8),
    )
