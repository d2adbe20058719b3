import pytest

from gemview.bindings import DEFAULT_BINDINGS, Bindings


def test_defaults():
    bindings = Bindings()
    assert len(bindings) == len(DEFAULT_BINDINGS)
    assert bindings.command_for_key("Alt+Left") == "navigate.back"
    assert bindings.command_for_key("Ctrl+Q") == "quit"
    assert bindings.command_for_key("F13") is None
    assert [b.id for b in bindings] == sorted(b.id for b in DEFAULT_BINDINGS)


def test_rebinding_steals_key_from_other_binding():
    bindings = Bindings()
    back = bindings.for_command("navigate.back")[0]
    bindings.set_key(back.id, "Ctrl+Q")
    assert bindings.command_for_key("Ctrl+Q") == "navigate.back"
    assert bindings.for_command("quit")[0].key == ""
    bindings.reset_defaults()
    assert bindings.command_for_key("Ctrl+Q") == "quit"


def test_unknown_binding():
    with pytest.raises(KeyError):
        Bindings().set_key(999, "F1")
    with pytest.raises(KeyError):
        Bindings().find(999)
