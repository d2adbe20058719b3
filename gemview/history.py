# gemview/history.py
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .models.history_record import HistoryRecord

logger = logging.getLogger("gemview.history")

MAX_HISTORY = 100

LINE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2}) ")
TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"


class History:
    """
    Visited URLs, oldest first. `pos` counts back from the newest record:
    0 is the current page, 1 the page before it, and so on.
    """

    def __init__(self, max_size: int = MAX_HISTORY) -> None:
        self._items: List[HistoryRecord] = []
        self.pos = 0
        self.max_size = max_size

    def __len__(self) -> int:
        return len(self._items)

    @property
    def records(self) -> Tuple[HistoryRecord, ...]:
        return tuple(self._items)

    def item(self, pos: int) -> Optional[HistoryRecord]:
        if not self._items or not 0 <= pos < len(self._items):
            return None
        return self._items[len(self._items) - 1 - pos]

    def url(self, pos: int) -> str:
        item = self.item(pos)
        return item.url if item else ""

    @property
    def current_url(self) -> str:
        return self.url(self.pos)

    def open_url(self, url: str, suppress_history: bool = False, redirect: bool = False) -> None:
        if suppress_history:
            return
        if redirect:
            # Update in the history.
            item = self.item(self.pos)
            if item:
                item.url = url
            return
        # Cut the forward branch.
        if self.pos > 0:
            del self._items[len(self._items) - self.pos:]
            self.pos = 0
        last = self.item(0)
        if last is None or last.url != url:
            self._items.append(HistoryRecord(url))
            # Don't make it too long.
            if len(self._items) > self.max_size:
                del self._items[0]

    def go_back(self) -> Optional[str]:
        """Step back; returns the URL to re-open, or None at the oldest record."""
        if self.pos < len(self._items) - 1:
            self.pos += 1
            return self.url(self.pos)
        return None

    def go_forward(self) -> Optional[str]:
        if self.pos > 0:
            self.pos -= 1
            return self.url(self.pos)
        return None

    def clear(self) -> None:
        self._items.clear()
        self.pos = 0

    # ---------- persistence ----------
    def serialize(self) -> str:
        return "".join(f"{item.when.strftime(TIME_FORMAT)} {item.url}\n" for item in self._items)

    def deserialize(self, text: str) -> None:
        """Append records from `text`. Stops at the first line that isn't a record."""
        for line in text.split("\n"):
            m = LINE_PATTERN.match(line)
            if not m or int(m.group(1)) == 0:
                break
            try:
                when = datetime(*(int(g) for g in m.groups()))
            except ValueError:
                break
            self._items.append(HistoryRecord(line[m.end():], when))
        if len(self._items) > self.max_size:
            del self._items[:len(self._items) - self.max_size]
        self.pos = 0

    def load(self, path: Union[str, Path]) -> None:
        try:
            text = Path(path).read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return
        except OSError as e:
            logger.warning("[History] could not read %s: %s", path, e)
            return
        self.deserialize(text)

    def save(self, path: Union[str, Path]) -> None:
        try:
            Path(path).write_text(self.serialize(), encoding="utf-8")
        except OSError as e:
            logger.warning("[History] could not write %s: %s", path, e)
