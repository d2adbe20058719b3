# gemview/document/factory.py
from typing import Optional

from .transport import Transport


def get_transport(scheme: str) -> Optional[Transport]:
    """Transport for a URL scheme, or None if we can't fetch it."""
    scheme = (scheme or "").lower()
    if scheme == "file":
        from .file_transport import FileTransport
        return FileTransport()
    if scheme == "about":
        from .file_transport import AboutTransport
        return AboutTransport()
    # TODO: gemini:// needs a TLS client; network fetching is left to an external transport.
    return None
