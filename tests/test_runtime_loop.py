"""Tests for the interactive main loop wiring.

The loop is driven with scripted key tokens and a fake terminal so render,
poll, and dispatch ordering can be asserted without a tty.
"""

from __future__ import annotations

import os
import unittest
from pathlib import Path

from filepicker.file_model import Entry
from filepicker.loop import RuntimeLoopCallbacks, normalize_enter, run_main_loop
from filepicker.state import AppState, BrowserState
from filepicker.ui_theme import PLAIN_THEME

ROOT = Path("/work")


def _make_state() -> AppState:
    entries = [Entry(name, ROOT / name, False) for name in ("a", "b", "c")]
    return AppState(browser=BrowserState(ROOT, read_dir=lambda _path: list(entries)))


class _FakeTerminal:
    stdout_fd = 1

    def __init__(self, sizes: list[tuple[int, int]] | None = None) -> None:
        self.sizes = sizes or [(80, 24)]

    def size(self) -> os.terminal_size:
        if len(self.sizes) > 1:
            return os.terminal_size(self.sizes.pop(0))
        return os.terminal_size(self.sizes[0])


class _ScriptedKeys:
    def __init__(self, keys: list[object]) -> None:
        self.keys = list(keys)
        self.timeouts: list[int] = []

    def __call__(self, _fd: int, timeout_ms: int) -> str:
        self.timeouts.append(timeout_ms)
        key = self.keys.pop(0)
        if isinstance(key, BaseException):
            raise key
        return key


class RuntimeLoopTests(unittest.TestCase):
    def _run(self, keys: list[object], terminal: _FakeTerminal | None = None, state: AppState | None = None):
        state = state or _make_state()
        handled: list[str] = []
        renders: list[int | None] = []
        reader = _ScriptedKeys(keys)

        def handle_key(key: str) -> bool:
            handled.append(key)
            if key == "q":
                return True
            if key == "j":
                state.browser.next()
                state.dirty = True
            return False

        callbacks = RuntimeLoopCallbacks(
            handle_key=handle_key,
            read_key=reader,
            render=lambda context, _fd: renders.append(context.cursor),
        )
        run_main_loop(state, terminal or _FakeTerminal(), 0, PLAIN_THEME, callbacks, poll_timeout_ms=40)
        return handled, renders, reader

    def test_loop_renders_once_then_polls_until_quit(self) -> None:
        handled, renders, reader = self._run(["", "", "q"])

        self.assertEqual(handled, ["q"])
        self.assertEqual(renders, [0])
        self.assertEqual(reader.timeouts, [40, 40, 40])

    def test_dispatched_action_triggers_redraw(self) -> None:
        handled, renders, _reader = self._run(["j", "q"])

        self.assertEqual(handled, ["j", "q"])
        self.assertEqual(renders, [0, 1])

    def test_resize_triggers_redraw_while_idle(self) -> None:
        terminal = _FakeTerminal([(80, 24), (100, 30)])

        _handled, renders, _reader = self._run(["", "q"], terminal=terminal)

        self.assertEqual(len(renders), 2)

    def test_keyboard_interrupt_during_poll_is_ignored(self) -> None:
        handled, _renders, _reader = self._run([KeyboardInterrupt(), "q"])

        self.assertEqual(handled, ["q"])

    def test_crlf_counts_as_single_enter(self) -> None:
        handled, _renders, _reader = self._run(["ENTER_CR", "ENTER_LF", "ENTER_LF", "q"])

        self.assertEqual(handled, ["ENTER", "ENTER", "q"])

    def test_expired_status_is_cleared_and_redrawn(self) -> None:
        state = _make_state()
        state.status_message = "old"
        state.status_message_until = 0.0

        _handled, _renders, _reader = self._run(["q"], state=state)

        self.assertEqual(state.status_message, "")


class NormalizeEnterTests(unittest.TestCase):
    def test_lone_lf_is_enter(self) -> None:
        state = _make_state()
        self.assertEqual(normalize_enter(state, "ENTER_LF"), "ENTER")

    def test_other_keys_reset_pending_lf(self) -> None:
        state = _make_state()
        normalize_enter(state, "ENTER_CR")
        normalize_enter(state, "j")

        self.assertEqual(normalize_enter(state, "ENTER_LF"), "ENTER")


if __name__ == "__main__":
    unittest.main()
