# gemview/document/transport.py
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..models.uri import Uri


@dataclass(frozen=True)
class Response:
    status: int
    meta: str = ""
    body: str = ""


class Transport(ABC):
    @abstractmethod
    def fetch(self, uri: Uri) -> Response:
        raise NotImplementedError
