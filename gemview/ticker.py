# gemview/ticker.py
import itertools
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

_serials = itertools.count(1)


@dataclass(frozen=True, order=True)
class TickerHandle:
    """Registration token for a ticker. Serials are never reused."""
    serial: int = field(default_factory=lambda: next(_serials))
    name: str = field(default="", compare=False)


class TickerScheduler:
    """
    Callbacks to run once on the next frame. Each handle has at most one
    callback; adding again under the same handle replaces the callback.
    """

    def __init__(self, on_pending: Optional[Callable[[], None]] = None) -> None:
        self._live: Dict[TickerHandle, Callable[[], None]] = {}
        self.on_pending = on_pending

    def new_handle(self, name: str = "") -> TickerHandle:
        return TickerHandle(name=name)

    def add(self, handle: TickerHandle, callback: Callable[[], None]) -> None:
        if not isinstance(handle, TickerHandle):
            raise ValueError(f"ticker identity must be a TickerHandle, not {type(handle).__name__}")
        self._live[handle] = callback

    def remove(self, handle: TickerHandle) -> None:
        self._live.pop(handle, None)

    def __contains__(self, handle: TickerHandle) -> bool:
        return handle in self._live

    def __len__(self) -> int:
        return len(self._live)

    def run(self) -> bool:
        """Run everything scheduled so far. Returns True if anything ran."""
        # Tickers may add themselves again, so we'll run off a copy.
        pending = sorted(self._live.items())
        self._live.clear()
        if not pending:
            return False
        if self.on_pending:
            self.on_pending()
        for handle, callback in pending:
            if callback:
                callback()
        return True
