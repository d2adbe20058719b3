# gemview/preferences.py
from PySide6.QtWidgets import QCheckBox, QDialog, QDialogButtonBox, QFormLayout, QLineEdit

from .command_bus import CommandBus
from .window import PreferencesPanel


class PreferencesDialog(QDialog):
    """Edits a PreferencesPanel; closing the dialog posts "prefs.dismiss"."""

    def __init__(self, panel: PreferencesPanel, bus: CommandBus, parent=None):
        super().__init__(parent)
        self.panel = panel
        self.bus = bus
        self._dismissed = False
        self.setWindowTitle("Preferences")

        self.retain_window = QCheckBox("Retain window size")
        self.retain_window.setChecked(panel.retain_window_size)
        self.retain_window.toggled.connect(self._on_retain_toggled)

        self.ui_scale = QLineEdit(panel.ui_scale_text)
        self.ui_scale.textChanged.connect(self._on_scale_changed)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Close)
        buttons.rejected.connect(self.close)

        layout = QFormLayout(self)
        layout.addRow(self.retain_window)
        layout.addRow("UI scale factor:", self.ui_scale)
        layout.addRow(buttons)

    def _on_retain_toggled(self, checked: bool):
        self.panel.retain_window_size = checked

    def _on_scale_changed(self, text: str):
        self.panel.ui_scale_text = text

    def dismiss(self) -> None:
        """Close without posting; the panel was already dismissed by a command."""
        self._dismissed = True
        self.close()

    def done(self, result):
        # Esc, the Close button and the title bar all end up here.
        if not self._dismissed:
            self._dismissed = True
            self.bus.post("prefs.dismiss")
        super().done(result)
