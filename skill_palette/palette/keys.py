"""
Key matching over raw terminal input.
"""

from typing import Dict, FrozenSet

KEY_SEQUENCES: Dict[str, FrozenSet[str]] = {
    "escape": frozenset({"\x1b"}),
    "return": frozenset({"\r", "\n"}),
    "tab": frozenset({"\t"}),
    "backspace": frozenset({"\x7f", "\b"}),
    "up": frozenset({"\x1b[A", "\x1bOA"}),
    "down": frozenset({"\x1b[B", "\x1bOB"}),
    "right": frozenset({"\x1b[C", "\x1bOC"}),
    "left": frozenset({"\x1b[D", "\x1bOD"}),
}

KEY_ALIASES = {
    "esc": "escape",
    "enter": "return",
}


def matches_key(data: str, name: str) -> bool:
    """Check whether raw input ``data`` is the key called ``name``.

    Raises:
        ValueError: If ``name`` is not a known key
    """
    name = KEY_ALIASES.get(name, name)
    try:
        return data in KEY_SEQUENCES[name]
    except KeyError:
        raise ValueError(f"Unknown key name: {name}") from None


def is_printable(data: str) -> bool:
    """Single printable character (not a control code)."""
    return len(data) == 1 and ord(data) >= 32 and data != "\x7f"
