# gemview/app.py
import logging
import os
import sys

from PySide6.QtWidgets import QApplication

from . import command
from .main_loop import App
from .main_window import MainWindow
from .url_router import URLRouter
from .window import Window


logger = logging.getLogger("gemview.app")


class GemviewApplication(QApplication):
    def __init__(self, argv):
        super().__init__(argv)
        self.setApplicationName("gemview")


def _configure_logging() -> None:
    level = os.environ.get("GEMVIEW_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def apply_ui_scale(ui_scale: float, environ=os.environ) -> None:
    """Qt reads the scale factor once, when the application object is created."""
    if ui_scale == 1.0:
        return
    if "QT_SCALE_FACTOR" in environ:
        logger.debug(
            "[App] QT_SCALE_FACTOR=%s overrides the saved ui scale %g",
            environ["QT_SCALE_FACTOR"], ui_scale,
        )
        return
    environ["QT_SCALE_FACTOR"] = "%g" % ui_scale


def main():
    _configure_logging()
    qt_apps = []

    def create_window(bus, ui_scale):
        apply_ui_scale(ui_scale)
        qt_apps.append(GemviewApplication(sys.argv))
        return Window(bus, ui_scale)

    app = App.create(window_factory=create_window)
    for arg in sys.argv[1:]:
        url = URLRouter().from_user_text(arg)
        if url:
            app.bus.post(command.make_command("open", url=url))

    win = MainWindow(app)
    win.show()
    win.start()
    sys.exit(qt_apps[0].exec())


if __name__ == "__main__":
    main()
