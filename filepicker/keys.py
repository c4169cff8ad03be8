"""Key dispatch from decoded tokens to browser actions.

A small combo registry maps tokens to handlers; each handler returns
``True`` when the app should quit. Directory read failures raised by an
action are shown on the status row and leave the listing as it was.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .errors import ReadError
from .state import AppState

LOGGER = logging.getLogger(__name__)

QUIT_KEYS = ("q", "ESC", "CTRL_C")
NEXT_KEYS = ("DOWN", "j")
PREV_KEYS = ("UP", "k")
PAGE_DOWN_KEYS = ("PAGE_DOWN",)
PAGE_UP_KEYS = ("PAGE_UP",)
FIRST_KEYS = ("HOME", "g")
LAST_KEYS = ("END", "G")
UP_DIR_KEYS = ("BACKSPACE", "LEFT", "h")
REFRESH_KEYS = ("r",)
TOGGLE_MARK_KEYS = (" ",)
ENTER_KEYS = ("ENTER", "RIGHT", "l")


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], bool | None]


class KeyComboRegistry:
    """Small key-dispatch table from key tokens to handlers."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], bool | None]] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, key: str) -> bool | None:
        """Invoke bound handler for ``key``; ``None`` means the key is unbound."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()


@dataclass(frozen=True)
class KeyContext:
    """State and layout hooks required for key handling."""

    state: AppState
    visible_rows: Callable[[], int]


def build_key_registry(context: KeyContext) -> KeyComboRegistry:
    """Bind every browser action for ``context``."""
    state = context.state
    browser = state.browser

    def guarded(action: Callable[[], None]) -> Callable[[], bool]:
        def run() -> bool:
            try:
                action()
            except ReadError as exc:
                state.set_status(str(exc))
            state.dirty = True
            return False

        return run

    def quit_action() -> bool:
        return True

    def enter_action() -> None:
        message = browser.enter()
        if message:
            state.set_status(message)

    def page(direction: int) -> Callable[[], None]:
        return lambda: browser.move_by(direction * max(1, context.visible_rows()))

    return KeyComboRegistry().register_bindings(
        KeyComboBinding(QUIT_KEYS, quit_action),
        KeyComboBinding(NEXT_KEYS, guarded(browser.next)),
        KeyComboBinding(PREV_KEYS, guarded(browser.prev)),
        KeyComboBinding(PAGE_DOWN_KEYS, guarded(page(1))),
        KeyComboBinding(PAGE_UP_KEYS, guarded(page(-1))),
        KeyComboBinding(FIRST_KEYS, guarded(browser.first)),
        KeyComboBinding(LAST_KEYS, guarded(browser.last)),
        KeyComboBinding(UP_DIR_KEYS, guarded(browser.up_dir)),
        KeyComboBinding(REFRESH_KEYS, guarded(browser.reload)),
        KeyComboBinding(TOGGLE_MARK_KEYS, guarded(browser.toggle_mark)),
        KeyComboBinding(ENTER_KEYS, guarded(enter_action)),
    )


def handle_key(key: str, registry: KeyComboRegistry) -> bool:
    """Dispatch one key token and return ``True`` when the app should quit."""
    handled = registry.dispatch(key)
    if handled is None:
        LOGGER.debug("unbound key %r", key)
        return False
    return bool(handled)
