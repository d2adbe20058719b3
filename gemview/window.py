# gemview/window.py
from typing import Callable, List, Optional, Tuple

from . import command
from .command_bus import CommandBus, CommandHandler
from .document.document import Document

DEFAULT_SIZE = (900, 640)


class PreferencesPanel:
    """
    The preferences dialog's state. While open it sits on top of the focus
    chain and handles the commands that close it.
    """

    def __init__(
        self,
        window: "Window",
        retain_window_size: bool,
        ui_scale: float,
        on_dismiss: Callable[["PreferencesPanel"], None],
    ) -> None:
        self.window = window
        self.retain_window_size = retain_window_size
        self.ui_scale_text = "%g" % ui_scale
        self.on_dismiss = on_dismiss

    @property
    def ui_scale(self) -> float:
        try:
            value = float(self.ui_scale_text)
        except ValueError:
            return self.window.ui_scale
        return value if value > 0 else self.window.ui_scale

    def handle_command(self, cmd: str) -> bool:
        if command.equal_command(cmd, "prefs.dismiss") or command.equal_command(cmd, "preferences"):
            self.window.set_ui_scale(self.ui_scale)
            self.on_dismiss(self)
            self.window.close_panel(self)
            return True
        return False


class Window:
    """
    Front-end independent window state: geometry, the document, and the chain
    of widgets that get first look at every command. A view (the Qt main
    window) can be attached to mirror it on screen.
    """

    def __init__(self, bus: CommandBus, ui_scale: float = 1.0) -> None:
        self.bus = bus
        self.ui_scale = ui_scale
        self.width, self.height = DEFAULT_SIZE
        self.x, self.y = 0, 0
        self.document = Document(bus.post)
        self.widgets: List[CommandHandler] = []
        self._focus: List[object] = []
        self.view = None
        self.draw_count = 0

    def attach_view(self, view) -> None:
        self.view = view

    # ---------- focus chain ----------
    @property
    def focus(self) -> Optional[object]:
        return self._focus[-1] if self._focus else None

    def push_focus(self, widget) -> None:
        self._focus.append(widget)

    def pop_focus(self, widget) -> None:
        if widget in self._focus:
            self._focus.remove(widget)

    def add_widget(self, handler: CommandHandler) -> None:
        """Widgets are asked after the focused element, in the order added."""
        self.widgets.append(handler)

    def process_command(self, cmd: str) -> bool:
        focused = self.focus
        if focused is not None and focused.handle_command(cmd):
            return True
        for handler in self.widgets:
            if handler(cmd):
                return True
        return False

    # ---------- document ----------
    def set_url(self, url: str) -> None:
        self.document.set_url(url)

    # ---------- geometry ----------
    def geometry(self) -> Tuple[int, int, int, int]:
        return self.width, self.height, self.x, self.y

    def resize(self, width: int, height: int) -> None:
        if width > 0 and height > 0:
            self.width, self.height = width, height
            if self.view:
                self.view.apply_geometry(*self.geometry())

    def move(self, x: int, y: int) -> None:
        self.x, self.y = x, y
        if self.view:
            self.view.apply_geometry(*self.geometry())

    def set_ui_scale(self, scale: float) -> None:
        if scale > 0:
            self.ui_scale = scale

    # ---------- panels ----------
    def open_panel(self, panel: PreferencesPanel) -> None:
        self.push_focus(panel)
        if self.view:
            self.view.show_preferences(panel)

    def close_panel(self, panel: PreferencesPanel) -> None:
        self.pop_focus(panel)
        if self.view:
            self.view.hide_preferences(panel)

    # ---------- drawing ----------
    def arrange(self) -> None:
        if self.view:
            self.view.arrange()

    def draw(self) -> None:
        self.draw_count += 1
        if self.view:
            self.view.render(self)
