"""Regression tests for raw-key decoding.

Covers ESC timing, arrow, paging and unrecognized sequences, control-key
token mapping, and the bounded wait used by the main loop.
"""

from __future__ import annotations

import os
import time
import unittest

from filepicker import input as input_mod


class ReadKeyRegressionTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _read_all(self, payload: bytes, count: int) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_timeout_returns_empty_token_without_blocking(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            started = time.monotonic()
            key = input_mod.read_key(read_fd, timeout_ms=30)
            elapsed = time.monotonic() - started
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "")
        self.assertLess(elapsed, 0.5)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"\x1b")
            started = time.monotonic()
            key = input_mod.read_key(read_fd, timeout_ms=20)
            elapsed = time.monotonic() - started
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "ESC")
        self.assertLess(elapsed, 0.2)

    def test_arrow_sequences_are_recognized(self) -> None:
        self.assertEqual(
            self._read_all(b"\x1b[A\x1b[B\x1b[C\x1b[D", 4),
            ["UP", "DOWN", "RIGHT", "LEFT"],
        )

    def test_application_mode_arrows_are_recognized(self) -> None:
        self.assertEqual(self._read_all(b"\x1bOA\x1bOB", 2), ["UP", "DOWN"])

    def test_page_keys_are_recognized(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[5~\x1b[6~", 2), ["PAGE_UP", "PAGE_DOWN"])

    def test_home_and_end_sequences_are_recognized(self) -> None:
        self.assertEqual(
            self._read_all(b"\x1b[H\x1b[F\x1b[1~\x1b[4~\x1bOH\x1bOF", 6),
            ["HOME", "END", "HOME", "END", "HOME", "END"],
        )

    def test_unrecognized_sequences_are_consumed_whole(self) -> None:
        cases = {
            "delete": b"\x1b[3~",
            "f1": b"\x1bOP",
            "f5": b"\x1b[15~",
            "ctrl_up": b"\x1b[1;5A",
            "shift_right": b"\x1b[1;2C",
        }
        for name, payload in cases.items():
            with self.subTest(key=name):
                input_mod._PENDING_BYTES.clear()
                self.assertEqual(self._read_all(payload + b"j", 3), ["UNKNOWN", "j", ""])

    def test_truncated_csi_sequence_is_unknown_not_escape(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[1;", 2), ["UNKNOWN", ""])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1bq", 2), ["ESC", "q"])

    def test_control_keys_are_recognized(self) -> None:
        self.assertEqual(
            self._read_all(b"\x03\x7f\x08\r\n", 5),
            ["CTRL_C", "BACKSPACE", "BACKSPACE", "ENTER_CR", "ENTER_LF"],
        )

    def test_space_and_letters_pass_through(self) -> None:
        self.assertEqual(self._read_all(b" jk", 3), [" ", "j", "k"])

    def test_multibyte_utf8_character_is_one_token(self) -> None:
        self.assertEqual(self._read_all("é".encode("utf-8"), 1), ["é"])


if __name__ == "__main__":
    unittest.main()
