# gemview/bindings.py
from dataclasses import dataclass, replace
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Binding:
    id: int
    label: str
    key: str      # Qt key sequence text, e.g. "Alt+Left"
    command: str


DEFAULT_BINDINGS = (
    Binding(1, "Go back", "Alt+Left", "navigate.back"),
    Binding(2, "Go forward", "Alt+Right", "navigate.forward"),
    Binding(3, "Go home", "Ctrl+Shift+H", "navigate.home"),
    Binding(4, "Reload page", "Ctrl+R", "navigate.reload"),
    Binding(5, "Focus address bar", "Ctrl+L", "navigate.focus"),
    Binding(6, "Preferences", "Ctrl+,", "preferences"),
    Binding(7, "Quit", "Ctrl+Q", "quit"),
)


class Bindings:
    """Keyboard shortcuts and the commands they post."""

    def __init__(self) -> None:
        self._items: Dict[int, Binding] = {}
        self.reset_defaults()

    def reset_defaults(self) -> None:
        self._items = {b.id: b for b in DEFAULT_BINDINGS}

    def __iter__(self):
        return iter(sorted(self._items.values(), key=lambda b: b.id))

    def __len__(self) -> int:
        return len(self._items)

    def find(self, binding_id: int) -> Binding:
        return self._items[binding_id]

    def set_key(self, binding_id: int, key: str) -> None:
        """Rebind; a key already used by another binding is taken away from it."""
        if binding_id not in self._items:
            raise KeyError(binding_id)
        for other in list(self._items.values()):
            if other.id != binding_id and key and other.key == key:
                self._items[other.id] = replace(other, key="")
        self._items[binding_id] = replace(self._items[binding_id], key=key)

    def command_for_key(self, key: str) -> Optional[str]:
        for b in self._items.values():
            if key and b.key == key:
                return b.command
        return None

    def for_command(self, cmd: str) -> List[Binding]:
        return [b for b in self if b.command == cmd]
