# gemview/command.py
"""
Helpers for reading and writing command strings.

A command looks like ``verb key:value key2:"quoted value"``. The bus never
looks inside; handlers use these functions to pick out what they need.
Lookups are lenient: a missing or malformed argument reads as its default.
"""
import re
from typing import Iterator, Optional, Tuple

COORD_PATTERN = re.compile(r"(?:^|\s)coord:(-?\d+)\s+(-?\d+)")


def verb(cmd: str) -> str:
    return cmd.split(" ", 1)[0]


def equal_command(cmd: str, name: str) -> bool:
    return verb(cmd) == name


def _tokens(cmd: str) -> Iterator[Tuple[Optional[str], str, int]]:
    """Yield (key, value, value_start) for every argument after the verb."""
    i = cmd.find(" ")
    if i == -1:
        return
    n = len(cmd)
    while i < n:
        while i < n and cmd[i] == " ":
            i += 1
        if i >= n:
            break
        start = i
        while i < n and cmd[i] not in " :\"":
            i += 1
        if i < n and cmd[i] == ":" and i > start:
            key = cmd[start:i]
            i += 1
        else:
            key = None
            i = start
        value_start = i
        if i < n and cmd[i] == '"':
            i += 1
            chars = []
            while i < n and cmd[i] != '"':
                if cmd[i] == "\\" and i + 1 < n:
                    i += 1
                chars.append(cmd[i])
                i += 1
            i += 1  # closing quote
            yield key, "".join(chars), value_start
        else:
            while i < n and cmd[i] != " ":
                i += 1
            yield key, cmd[value_start:i], value_start


def has_arg(cmd: str, label: str) -> bool:
    return any(key == label for key, _, _ in _tokens(cmd))


def arg_string(cmd: str, label: str, default: Optional[str] = None) -> Optional[str]:
    for key, value, _ in _tokens(cmd):
        if key == label:
            return value
    return default


def arg_label(cmd: str, label: str, default: int = 0) -> int:
    """Integer value of `label:`; non-numeric values read as `default`."""
    value = arg_string(cmd, label)
    if value is None:
        return default
    m = re.match(r"-?\d+", value)
    return int(m.group(0)) if m else default


def arg(cmd: str, default: int = 0) -> int:
    return arg_label(cmd, "arg", default)


def arg_float(cmd: str, label: str = "arg", default: float = 0.0) -> float:
    value = arg_string(cmd, label)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def suffix(cmd: str, label: str) -> str:
    """Everything after `label:` up to the end of the command, verbatim."""
    for key, value, start in _tokens(cmd):
        if key == label:
            if cmd.startswith('"', start):
                return value
            return cmd[start:]
    return ""


def coord(cmd: str) -> Tuple[int, int]:
    m = COORD_PATTERN.search(cmd)
    if not m:
        return 0, 0
    return int(m.group(1)), int(m.group(2))


def quote_value(value) -> str:
    text = str(value)
    if text and not any(c in text for c in ' "'):
        return text
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def make_command(name: str, **args) -> str:
    """Build a command string. A `url` argument is always placed last."""
    url = args.pop("url", None)
    parts = [name]
    parts.extend(f"{key}:{quote_value(value)}" for key, value in args.items())
    if url is not None:
        parts.append(f"url:{url}")
    return " ".join(parts)
