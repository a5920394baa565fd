from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, Flag, auto

from blessed.keyboard import Keystroke


class KeyCode(str, Enum):
    ENTER = "enter"
    SPACE = "space"
    ESC = "esc"
    CHAR = "char"
    OTHER = "other"


class Modifiers(Flag):
    NONE = 0
    CONTROL = auto()


class KeyEventKind(str, Enum):
    PRESS = "press"
    RELEASE = "release"


@dataclass(frozen=True, slots=True)
class KeyEvent:
    code: KeyCode
    char: str = ""  # only meaningful for KeyCode.CHAR
    modifiers: Modifiers = Modifiers.NONE
    kind: KeyEventKind = KeyEventKind.PRESS

    @property
    def ctrl(self) -> bool:
        return bool(self.modifiers & Modifiers.CONTROL)

    @classmethod
    def char_key(cls, char: str, *, ctrl: bool = False) -> KeyEvent:
        return cls(
            code=KeyCode.CHAR,
            char=char,
            modifiers=Modifiers.CONTROL if ctrl else Modifiers.NONE,
        )


ENTER = KeyEvent(KeyCode.ENTER)
SPACE = KeyEvent(KeyCode.SPACE)
ESC = KeyEvent(KeyCode.ESC)

_ENTER_TEXT = ("\r", "\n")
_ESC_TEXT = "\x1b"
# Raw mode delivers Ctrl+<letter> as the C0 byte 0x01..0x1a. Tab, LF and CR
# share that range and keep their usual meaning.
_CTRL_EXCLUDED = ("\t", "\n", "\r")


def key_event_from_keystroke(keystroke: Keystroke) -> KeyEvent | None:
    """Translate a blessed keystroke read in raw mode into a KeyEvent.

    Returns None for the empty keystroke blessed yields on timeout.
    """

    text = str(keystroke)
    if text == "" and not keystroke.is_sequence:
        return None

    if text in _ENTER_TEXT:
        return ENTER
    if text == _ESC_TEXT:
        return ESC
    if text == " ":
        return SPACE

    # Checked before sequence names: blessed reports "\x08" (Ctrl+H) as KEY_BACKSPACE.
    if len(text) == 1 and "\x01" <= text <= "\x1a" and text not in _CTRL_EXCLUDED:
        return KeyEvent.char_key(chr(ord(text) + 0x60), ctrl=True)

    if keystroke.is_sequence:
        if keystroke.name == "KEY_ENTER":
            return ENTER
        if keystroke.name == "KEY_ESCAPE":
            return ESC
        return KeyEvent(KeyCode.OTHER)

    if len(text) == 1 and text.isprintable():
        return KeyEvent.char_key(text)
    return KeyEvent(KeyCode.OTHER)
