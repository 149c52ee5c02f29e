"""Decode raw terminal input into key names."""

from __future__ import annotations

ESCAPE_SEQUENCES = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1b[5~": "pageup",
    "\x1b[6~": "pagedown",
    "\x1b[Z": "shift-tab",
    "\x1b[H": "home",
    "\x1b[F": "end",
}

CONTROL_KEYS = {
    "\t": "tab",
    "\x03": "ctrl-c",
    "\r": "enter",
    "\n": "enter",
}


def decode_keys(data: str) -> list[str]:
    keys: list[str] = []
    index = 0
    while index < len(data):
        if data[index] == "\x1b":
            for sequence, name in ESCAPE_SEQUENCES.items():
                if data.startswith(sequence, index):
                    keys.append(name)
                    index += len(sequence)
                    break
            else:
                keys.append("escape")
                index += 1
            continue
        char = data[index]
        keys.append(CONTROL_KEYS.get(char, char))
        index += 1
    return keys
