"""Questions whose answers the user can ask to have remembered."""

from __future__ import annotations

import logging
import threading
from enum import IntFlag
from typing import Callable, ClassVar, Optional, Tuple

__all__ = ["Button", "QuestionBoxMemory", "button_to_string"]

logger = logging.getLogger(__name__)


class Button(IntFlag):
    """Standard dialog buttons; values can be combined into a set of buttons."""

    NO_BUTTON = 0x00000000
    OK = 0x00000400
    SAVE = 0x00000800
    SAVE_ALL = 0x00001000
    OPEN = 0x00002000
    YES = 0x00004000
    YES_TO_ALL = 0x00008000
    NO = 0x00010000
    NO_TO_ALL = 0x00020000
    ABORT = 0x00040000
    RETRY = 0x00080000
    IGNORE = 0x00100000
    CLOSE = 0x00200000
    CANCEL = 0x00400000
    DISCARD = 0x00800000
    HELP = 0x01000000
    APPLY = 0x02000000
    RESET = 0x04000000
    RESTORE_DEFAULTS = 0x08000000


_BUTTON_NAMES = {
    Button.NO_BUTTON: "none",
    Button.OK: "ok",
    Button.SAVE: "save",
    Button.SAVE_ALL: "saveall",
    Button.OPEN: "open",
    Button.YES: "yes",
    Button.YES_TO_ALL: "yestoall",
    Button.NO: "no",
    Button.NO_TO_ALL: "notoall",
    Button.ABORT: "abort",
    Button.RETRY: "retry",
    Button.IGNORE: "ignore",
    Button.CLOSE: "close",
    Button.CANCEL: "cancel",
    Button.DISCARD: "discard",
    Button.HELP: "help",
    Button.APPLY: "apply",
    Button.RESET: "reset",
    Button.RESTORE_DEFAULTS: "restoredefaults",
}

_NAMES_BY_VALUE = {int(button): name for button, name in _BUTTON_NAMES.items()}


def button_to_string(button: int) -> str:
    """``'name' (0xvalue)`` for a single known button, ``0xvalue`` otherwise."""
    value = int(button)
    name = _NAMES_BY_VALUE.get(value)
    if name is None:
        return f"0x{value:x}"
    return f"'{name}' (0x{value:x})"


GetButton = Callable[[str, str], int]
SetWindowButton = Callable[[str, int], None]
SetFileButton = Callable[[str, str, int], None]

# what the asking callable returns: the button pressed, whether to remember it
# for the window, and whether to remember it for the file
Answer = Tuple[int, bool, bool]
Ask = Callable[[Optional[str]], Answer]


def _log_name(window_name: str, file_name: str | None) -> str:
    return window_name if file_name is None else f"{window_name}/{file_name}"


class QuestionBoxMemory:
    """Asks questions unless the user chose to always give the same answer.

    Remembered answers are kept by callbacks registered with
    :meth:`set_callbacks`, so that the storage lives wherever the settings do.
    """

    _lock: ClassVar[threading.RLock] = threading.RLock()
    _get: ClassVar[Optional[GetButton]] = None
    _set_window: ClassVar[Optional[SetWindowButton]] = None
    _set_file: ClassVar[Optional[SetFileButton]] = None

    @classmethod
    def set_callbacks(
        cls,
        get: GetButton | None,
        set_window: SetWindowButton | None,
        set_file: SetFileButton | None,
    ) -> None:
        """Register the functions that read and store remembered answers."""
        with cls._lock:
            cls._get = get
            cls._set_window = set_window
            cls._set_file = set_file

    @staticmethod
    def _require(callback, what: str):
        if callback is None:
            raise RuntimeError(f"no callback registered to {what} remembered choices")
        return callback

    @classmethod
    def get_memory(cls, window_name: str, file_name: str = "") -> Button:
        """The remembered answer, or :attr:`Button.NO_BUTTON` if there is none."""
        get = cls._require(cls._get, "read")
        return Button(int(get(window_name, file_name)))

    @classmethod
    def set_window_memory(cls, window_name: str, button: int) -> None:
        """Remember ``button`` as the answer for every question of a window."""
        logger.debug(
            "remembering choice %s for window %s", button_to_string(button), window_name
        )
        cls._require(cls._set_window, "store")(window_name, Button(int(button)))

    @classmethod
    def set_file_memory(cls, window_name: str, file_name: str, button: int) -> None:
        """Remember ``button`` as the answer for one file in a window."""
        logger.debug(
            "remembering choice %s for file %s",
            button_to_string(button),
            f"{window_name}/{file_name}",
        )
        cls._require(cls._set_file, "store")(window_name, file_name, Button(int(button)))

    @classmethod
    def query(
        cls, window_name: str, ask: Ask, file_name: str | None = None
    ) -> Button:
        """Return the remembered answer, or call ``ask(file_name)`` for one.

        ``ask`` returns ``(button, remember, remember_for_file)``. A cancelled
        question is never remembered; the file choice only counts when a
        ``file_name`` was given.
        """
        with cls._lock:
            remembered = cls.get_memory(window_name, file_name or "")
            if remembered != Button.NO_BUTTON:
                logger.debug(
                    "%s: not asking because user always wants response %s",
                    _log_name(window_name, file_name),
                    button_to_string(remembered),
                )
                return remembered

            pressed, remember, remember_for_file = ask(file_name)
            button = Button(int(pressed))

            if button != Button.CANCEL:
                if remember:
                    cls.set_window_memory(window_name, button)
                if file_name is not None and remember_for_file:
                    cls.set_file_memory(window_name, file_name, button)

            return button