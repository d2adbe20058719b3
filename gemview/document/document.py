# gemview/document/document.py
import logging
from typing import Callable, List, Optional, Tuple

from .. import command
from ..models.uri import parse
from ..status import GmError, GmStatusCode, error_info, is_failure, is_success
from ..url_router import absolute_url
from .factory import get_transport
from .transport import Response, Transport

logger = logging.getLogger("gemview.document")


class Document:
    """The page being shown: its URL and what fetching it produced."""

    def __init__(
        self,
        post: Callable[[str], None],
        transport_for: Callable[[str], Optional[Transport]] = get_transport,
    ) -> None:
        self.post = post
        self.transport_for = transport_for
        self.url = ""
        self.status = GmStatusCode.NONE
        self.meta = ""
        self.body = ""

    def set_url(self, url: str) -> None:
        self.url = url
        uri = parse(url)
        transport = self.transport_for(uri.scheme)
        if transport is None:
            response = Response(GmStatusCode.UNSUPPORTED_PROTOCOL, uri.scheme)
        else:
            response = transport.fetch(uri)
        self.status = response.status
        self.meta = response.meta
        self.body = response.body
        logger.debug("[Document] %s -> %d", url, int(self.status))
        self.post(command.make_command("document.changed", url=url))

    @property
    def error(self) -> GmError:
        if not is_failure(self.status):
            return error_info(GmStatusCode.NONE)
        return error_info(self.status)

    @property
    def title(self) -> str:
        if is_failure(self.status):
            return self.error.title
        for line in self.body.split("\n"):
            if line.startswith("# "):
                return line[2:].strip()
        return self.url

    def links(self) -> List[Tuple[str, str]]:
        """(absolute url, label) for every "=>" line of a gemtext body."""
        found = []
        if not is_success(self.status) or self.meta != "text/gemini":
            return found
        for line in self.body.split("\n"):
            if not line.startswith("=>"):
                continue
            parts = line[2:].strip().split(None, 1)
            if not parts:
                continue
            target = absolute_url(self.url, parts[0])
            found.append((target, parts[1].strip() if len(parts) > 1 else parts[0]))
        return found
