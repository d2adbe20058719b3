# gemview/document/file_transport.py
import logging
import os
import urllib.parse

from ..models.uri import Uri
from ..status import GmStatusCode
from .transport import Response, Transport

logger = logging.getLogger("gemview.document")

MIME_TYPES = {
    ".gmi": "text/gemini",
    ".gemini": "text/gemini",
    ".txt": "text/plain",
    ".md": "text/markdown",
}


class FileTransport(Transport):
    def fetch(self, uri: Uri) -> Response:
        path = urllib.parse.unquote(uri.path)
        if os.path.isdir(path):
            return Response(GmStatusCode.INVALID_LOCAL_RESOURCE, path)
        mime = MIME_TYPES.get(os.path.splitext(path)[1].lower())
        if mime is None:
            return Response(GmStatusCode.UNSUPPORTED_MIME_TYPE, path)
        try:
            with open(path, encoding="utf-8", errors="replace") as f:
                body = f.read()
        except OSError as e:
            logger.info("[FileTransport] %s: %s", path, e)
            return Response(GmStatusCode.FAILED_TO_OPEN_FILE, str(e))
        return Response(GmStatusCode.SUCCESS, mime, body)


class AboutTransport(Transport):
    PAGES = {
        "blank": "",
    }

    def fetch(self, uri: Uri) -> Response:
        page = uri.path
        if page not in self.PAGES:
            return Response(GmStatusCode.INVALID_LOCAL_RESOURCE, uri.text)
        return Response(GmStatusCode.SUCCESS, "text/gemini", self.PAGES[page])
