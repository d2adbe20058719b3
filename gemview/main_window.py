# gemview/main_window.py
from PySide6.QtCore import QTimer
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QApplication, QLineEdit, QMainWindow, QToolBar, QVBoxLayout, QWidget

from . import command
from .address_bar import AddressBarController
from .document.view import DocumentView
from .main_loop import App, EventMode
from .preferences import PreferencesDialog
from .url_router import URLRouter

FRAME_INTERVAL_MS = 16

# commands that also get a toolbar button
TOOLBAR_COMMANDS = ("navigate.back", "navigate.forward", "navigate.reload", "navigate.home")


class MainWindow(QMainWindow):
    """
    Qt view of the core Window. Qt owns the real event loop here, so a timer
    pumps one App frame at a time and UI signals are turned into commands.
    """

    def __init__(self, app: App, parent=None):
        super().__init__(parent)
        self.app = app
        self.bus = app.bus
        self.setWindowTitle("gemview")
        self.setAcceptDrops(True)
        self._applying_geometry = False
        self._dialogs = {}

        # Router + address bar
        self.router = URLRouter()
        self.address_bar = QLineEdit()
        self.address_controller = AddressBarController(self.router, self.bus, app.window)
        self.address_controller.bind(self.address_bar)
        app.window.add_widget(self.address_controller.handle_command)

        toolbar = QToolBar()
        self.actions_by_command = {}
        for binding in app.bindings:
            act = QAction(binding.label, self)
            if binding.key:
                act.setShortcut(QKeySequence(binding.key))
            act.triggered.connect(lambda _checked=False, c=binding.command: self.bus.post(c))
            self.addAction(act)
            self.actions_by_command[binding.command] = act
            if binding.command in TOOLBAR_COMMANDS:
                toolbar.addAction(act)
        toolbar.addWidget(self.address_bar)
        self.addToolBar(toolbar)

        # Central widget
        self.document_view = DocumentView()
        self.document_view.link_activated.connect(
            lambda url: self.bus.post(command.make_command("open", url=url))
        )
        central = QWidget()
        layout = QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.document_view)
        central.setLayout(layout)
        self.setCentralWidget(central)

        app.window.attach_view(self)
        self.apply_geometry(*app.window.geometry())

        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(FRAME_INTERVAL_MS)
        self._frame_timer.timeout.connect(self._on_frame)

    def start(self) -> None:
        self.app.start()
        self._frame_timer.start()

    # ---------- frame pump ----------
    def _on_frame(self) -> None:
        self.app.run_frame(EventMode.POSTED_EVENTS_ONLY)
        if not self.app.running:
            self._finish()

    def _finish(self) -> None:
        self._frame_timer.stop()
        self.app.shutdown()
        QApplication.quit()

    # ---------- view interface used by gemview.window.Window ----------
    def render(self, window) -> None:
        doc = window.document
        self.setWindowTitle(f"{doc.title} - gemview" if doc.url else "gemview")
        self.document_view.show_document(doc)
        history = self.app.history
        self.actions_by_command["navigate.back"].setEnabled(history.pos < len(history) - 1)
        self.actions_by_command["navigate.forward"].setEnabled(history.pos > 0)

    def apply_geometry(self, width: int, height: int, x: int, y: int) -> None:
        self._applying_geometry = True
        try:
            self.resize(width, height)
            self.move(x, y)
        finally:
            self._applying_geometry = False

    def arrange(self) -> None:
        self.centralWidget().updateGeometry()

    def show_preferences(self, panel) -> None:
        dlg = PreferencesDialog(panel, self.bus, self)
        self._dialogs[id(panel)] = dlg
        dlg.show()

    def hide_preferences(self, panel) -> None:
        dlg = self._dialogs.pop(id(panel), None)
        if dlg:
            dlg.dismiss()
            dlg.deleteLater()

    # ---------- Qt events ----------
    def resizeEvent(self, event):
        super().resizeEvent(event)
        if not self._applying_geometry:
            self.app.window.width = event.size().width()
            self.app.window.height = event.size().height()

    def moveEvent(self, event):
        super().moveEvent(event)
        if not self._applying_geometry:
            self.app.window.x = event.pos().x()
            self.app.window.y = event.pos().y()

    def dragEnterEvent(self, event):
        if event.mimeData().hasUrls():
            event.acceptProposedAction()

    def dropEvent(self, event):
        for qurl in event.mimeData().urls():
            if qurl.isLocalFile():
                self.bus.post_drop(qurl.toLocalFile())
        event.acceptProposedAction()

    def closeEvent(self, event):
        if self.app.running:
            # let the main loop save state on its way out
            event.ignore()
            self.bus.post("quit")
            return
        super().closeEvent(event)
