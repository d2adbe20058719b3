# gemview/address_bar.py
from PySide6.QtWidgets import QLineEdit

from . import command
from .command_bus import CommandBus
from .url_router import URLRouter


class AddressBarController:
    """
    Binds the URL line edit to the command bus: submitting posts an "open",
    and the bar follows every "document.changed" without consuming it.
    """

    def __init__(self, router: URLRouter, bus: CommandBus, window):
        self.router = router
        self.bus = bus
        self.window = window
        self.line_edit: QLineEdit | None = None

    def bind(self, line_edit: QLineEdit) -> None:
        self.line_edit = line_edit
        self.line_edit.returnPressed.connect(self._on_submit)

    def handle_command(self, cmd: str) -> bool:
        if command.equal_command(cmd, "navigate.focus"):
            if self.line_edit:
                self.line_edit.setFocus()
                self.line_edit.selectAll()
            return True
        if command.equal_command(cmd, "document.changed"):
            self.set_url(command.suffix(cmd, "url"))
        return False

    def set_url(self, url: str) -> None:
        if self.line_edit:
            self.line_edit.setText(self.router.to_text(url))

    def _on_submit(self) -> None:
        if not self.line_edit:
            return
        url = self.router.from_user_text(self.line_edit.text(), self.window.document.url)
        if url:
            self.bus.post(command.make_command("open", url=url))
