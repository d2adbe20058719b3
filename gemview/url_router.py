# gemview/url_router.py
import os
import urllib.parse
from typing import Optional

from .models.uri import Uri, parse

DEFAULT_SCHEME = "gemini"

# Schemes whose body is not hierarchical; references using them are never merged.
OPAQUE_SCHEMES = {"data", "about", "mailto"}


def normalize_path(path: str) -> str:
    """Collapse "." and ".." segments of a URL path."""
    clean = ""
    for seg in path.split("/"):
        if seg == "..":
            # Back up one segment.
            clean = clean[:max(clean.rfind("/"), 0)]
        elif seg == "." or not seg:
            continue
        else:
            if clean or path.startswith("/"):
                clean += "/"
            clean += seg
    if path.endswith("/"):
        clean += "/"
    return clean


def clean_url_path(url: str) -> str:
    """Return `url` with its path normalized. Unchanged URLs are returned as is."""
    parts = parse(url)
    clean = normalize_path(parts.path)
    if clean == parts.path:
        return url
    start, end = parts.path_span
    return url[:start] + clean + url[end:]


def dir_of(path: str) -> str:
    """The path with its final segment removed, or whole if it names a directory."""
    if path.endswith("/"):
        return path
    pos = path.rfind("/")
    if pos == -1:
        return ""
    return path[:pos]


def _is_absolute_path(path: str) -> bool:
    return urllib.parse.unquote(path).startswith("/")


def resolve(base: Uri, ref: Uri) -> str:
    """
    Compute the absolute URL of `ref` relative to `base`.

    The path is chosen in priority order: an absolute reference (scheme, host,
    or rooted path) replaces the base path, a relative path is joined to the
    base directory, a bare query replaces only the base query, and an empty or
    fragment-only reference keeps the base path and query.
    """
    if ref.scheme.lower() in OPAQUE_SCHEMES:
        return ref.text

    has_host = not ref.host_span.is_empty
    if ref.scheme:
        scheme = ref.scheme
    elif not has_host and base.scheme:
        scheme = base.scheme
    else:
        scheme = DEFAULT_SCHEME

    authority_src = ref if has_host else base
    absolute = scheme + "://" + authority_src.host
    if authority_src.port:
        absolute += ":" + authority_src.port

    if ref.scheme or has_host or _is_absolute_path(ref.path):
        if not ref.path.startswith("/"):
            absolute += "/"
        absolute += ref.path + ref.query
    elif ref.path:
        absolute += dir_of(base.path)
        if not absolute.endswith("/"):
            absolute += "/"
        absolute += ref.path + ref.query
    elif ref.has_query:
        absolute += base.path + ref.query
    else:
        absolute += base.path + base.query
    return clean_url_path(absolute)


def absolute_url(base_text: str, ref_text: str) -> str:
    return resolve(parse(base_text), parse(ref_text))


def make_file_url(local_path: str) -> str:
    path = os.path.normpath(os.path.expanduser(local_path))
    path = path.replace("\\", "/")  # in case it's a Windows path
    return "file://" + urllib.parse.quote(path, safe="/")


def encode_spaces(url: str) -> str:
    return url.replace(" ", "%20")


class URLRouter:
    """Turns whatever the user typed into the address bar into a URL."""

    SUPPORTED = {"gemini", "file", "about", "data", "mailto"}

    def from_user_text(self, text: str, base: Optional[str] = None) -> str:
        text = text.strip()
        if not text:
            return base or ""
        uri = parse(text)
        if uri.scheme.lower() in self.SUPPORTED and (uri.host or uri.scheme.lower() != DEFAULT_SCHEME):
            return encode_spaces(text) if uri.scheme.lower() == "file" else text
        # plain local path => file://
        expanded = os.path.expanduser(text)
        if os.path.isabs(expanded) and os.path.exists(expanded):
            return make_file_url(expanded)
        # heuristic: treat as a host if it contains a dot and no spaces
        if " " not in text and "." in text.split("/", 1)[0] and not text.startswith("."):
            return absolute_url(DEFAULT_SCHEME + "://", "//" + text)
        if base:
            return absolute_url(base, encode_spaces(text))
        return absolute_url(DEFAULT_SCHEME + "://", "//" + encode_spaces(text))

    def to_text(self, url: str) -> str:
        """Text shown in the address bar for `url`."""
        uri = parse(url)
        if uri.scheme.lower() == "file":
            return urllib.parse.unquote(url)
        return url
