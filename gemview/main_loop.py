# gemview/main_loop.py
"""
The application object: owns the command bus, ticker set, history and
window, and runs the frame loop that ties them together.

A frame is: run tickers, drain events from the bus (dispatching commands),
then redraw. Commands reach the window's focus chain first; whatever the
window does not take is handled by App.handle_command().
"""
import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from . import command
from .command_bus import CommandBus, EventType, HandlerChain
from .bindings import Bindings
from .history import History
from .settings import Preferences, Settings, load_prefs, load_settings, save_prefs, serialize_prefs
from .ticker import TickerHandle, TickerScheduler
from .url_router import make_file_url
from .window import PreferencesPanel, Window

logger = logging.getLogger("gemview.main_loop")

WindowFactory = Callable[[CommandBus, float], Window]


class EventMode(Enum):
    WAIT_FOR_NEW_EVENTS = "wait"
    POSTED_EVENTS_ONLY = "posted"


class App:
    def __init__(
        self,
        settings: Settings,
        bus: CommandBus,
        window: Window,
        history: Optional[History] = None,
    ) -> None:
        self.settings = settings
        self.bus = bus
        self.window = window
        self.history = history if history is not None else History()
        self.tickers = TickerScheduler(on_pending=bus.post_refresh)
        self.bindings = Bindings()
        self.running = False
        self.chain = HandlerChain([self.window.process_command, self.handle_command])

    @classmethod
    def create(
        cls,
        data_dir: Optional[Path] = None,
        window_factory: Optional[WindowFactory] = None,
    ) -> "App":
        """
        Start-up order matters: preferences are read before the window exists
        so the UI scale can be applied at creation; the other preference lines
        are queued as commands and run once the loop starts.
        """
        settings = load_settings(data_dir)
        bus = CommandBus()
        ui_scale = load_prefs(settings.prefs_path, bus.post)
        settings.prefs.ui_scale = ui_scale
        window = (window_factory or Window)(bus, ui_scale)
        history = History()
        history.load(settings.history_path)
        app = cls(settings, bus, window, history)
        bus.post("navigate.home")
        return app

    @property
    def prefs(self) -> Preferences:
        return self.settings.prefs

    # ---------- tickers ----------
    def new_ticker(self, name: str = "") -> TickerHandle:
        return self.tickers.new_handle(name)

    def add_ticker(self, handle: TickerHandle, callback: Callable[[], None]) -> None:
        self.tickers.add(handle, callback)

    def run_tickers(self) -> bool:
        return self.tickers.run()

    # ---------- events ----------
    def process_events(self, mode: EventMode = EventMode.WAIT_FOR_NEW_EVENTS) -> None:
        while True:
            if not self.bus.pending_refresh and mode is EventMode.WAIT_FOR_NEW_EVENTS:
                event = self.bus.wait_event()
            else:
                event = self.bus.poll_event()
            if event is None:
                return
            if event.type is EventType.QUIT:
                self.running = False
                return
            if event.type is EventType.REFRESH:
                return
            if event.type is EventType.DROP_FILE:
                self.bus.post(command.make_command("open", url=make_file_url(event.data)))
            elif event.type is EventType.COMMAND:
                self.dispatch(event.data)

    def dispatch(self, cmd: str) -> bool:
        handled = self.chain.dispatch(cmd)
        if command.equal_command(cmd, "metrics.changed"):
            self.window.arrange()
        if not handled:
            logger.debug("[App] unhandled command: %s", cmd)
        return handled

    def refresh(self) -> None:
        self.window.draw()
        self.bus.clear_refresh()

    def run_frame(self, mode: EventMode = EventMode.POSTED_EVENTS_ONLY) -> None:
        self.run_tickers()
        self.process_events(mode)
        self.refresh()

    def start(self) -> None:
        self.running = True
        self.window.arrange()

    def run(self) -> int:
        self.start()
        while self.running:
            self.run_frame(EventMode.WAIT_FOR_NEW_EVENTS)
        self.shutdown()
        return 0

    def shutdown(self) -> None:
        save_prefs(self.settings.prefs_path, serialize_prefs(self.prefs, self.window.geometry()))
        self.history.save(self.settings.history_path)

    # ---------- commands ----------
    def _open_history_item(self, url: Optional[str]) -> None:
        if url is not None:
            self.bus.post(command.make_command("open", history=1, url=url))

    def _dismiss_preferences(self, panel: PreferencesPanel) -> None:
        self.prefs.retain_window_size = panel.retain_window_size
        self.prefs.ui_scale = panel.ui_scale

    def handle_command(self, cmd: str) -> bool:
        if command.equal_command(cmd, "open"):
            url = command.suffix(cmd, "url")
            self.history.open_url(
                url,
                suppress_history=command.arg_label(cmd, "history") != 0,
                redirect=command.arg_label(cmd, "redirect") != 0,
            )
            self.window.set_url(url)
            self.bus.post_refresh()
            return True
        if command.equal_command(cmd, "document.request.cancelled"):
            # TODO: decide whether a cancelled request should be popped off the history.
            return False
        if command.equal_command(cmd, "document.changed"):
            # TODO: update the current history item with the actual (redirected) URL.
            return False
        if command.equal_command(cmd, "quit"):
            self.bus.post_quit()
            return True
        if command.equal_command(cmd, "preferences"):
            panel = PreferencesPanel(
                self.window,
                self.prefs.retain_window_size,
                self.window.ui_scale,
                self._dismiss_preferences,
            )
            self.window.open_panel(panel)
            return True
        if command.equal_command(cmd, "restorewindow"):
            self.prefs.retain_window_size = True
            self.window.resize(command.arg_label(cmd, "width"), command.arg_label(cmd, "height"))
            if command.has_arg(cmd, "coord"):
                self.window.move(*command.coord(cmd))
            return True
        if command.equal_command(cmd, "retainwindow"):
            self.prefs.retain_window_size = command.arg(cmd) != 0
            return True
        if command.equal_command(cmd, "navigate.back"):
            self._open_history_item(self.history.go_back())
            return True
        if command.equal_command(cmd, "navigate.forward"):
            self._open_history_item(self.history.go_forward())
            return True
        if command.equal_command(cmd, "navigate.reload"):
            if len(self.history):
                self._open_history_item(self.history.current_url)
            return True
        if command.equal_command(cmd, "navigate.home"):
            self.bus.post(command.make_command("open", url=make_file_url(str(self.settings.home_path))))
            return True
        return False
