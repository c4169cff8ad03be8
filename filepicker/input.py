"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Waits at most ``timeout_ms`` for the first byte so callers can poll.
Escape sequences that are not recognized decode to ``UNKNOWN`` as a whole,
so none of their bytes leak out as separate keystrokes.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
CSI_MAX_PARAM_BYTES = 16
UNKNOWN_KEY = "UNKNOWN"
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER_CR",
    b"\n": "ENTER_LF",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS: dict[bytes, str] = {
    b"1": "HOME",
    b"4": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
    b"7": "HOME",
    b"8": "END",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_csi_body(fd: int) -> tuple[bytes, bytes | None]:
    """Read CSI parameter bytes up to the final byte (0x40-0x7E).

    Returns ``(params, final)``; ``final`` is ``None`` when the sequence is
    cut short or runs past ``CSI_MAX_PARAM_BYTES``.
    """
    params = b""
    while len(params) <= CSI_MAX_PARAM_BYTES:
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            return params, None
        if 0x40 <= nxt[0] <= 0x7E:
            return params, nxt
        params += nxt
    return params, None


def _read_utf8_tail(fd: int, lead: bytes) -> str:
    """Complete a multi-byte UTF-8 character started by ``lead``."""
    first = lead[0]
    if first >= 0xF0:
        missing = 3
    elif first >= 0xE0:
        missing = 2
    elif first >= 0xC0:
        missing = 1
    else:
        missing = 0
    data = lead
    for _ in range(missing):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Return the next key token, or ``""`` when nothing arrived in time."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    control = _CONTROL_KEYS.get(ch)
    if control is not None:
        return control

    if ch != b"\x1b":
        return _read_utf8_tail(fd, ch)

    # Escape / arrow key sequences.
    lead = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if lead is None:
        return "ESC"
    if lead == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return UNKNOWN_KEY
        return _CSI_FINAL_KEYS.get(final, UNKNOWN_KEY)
    if lead != b"[":
        _PENDING_BYTES.append(lead)
        return "ESC"

    params, final = _read_csi_body(fd)
    if final is None:
        return UNKNOWN_KEY
    if final == b"~":
        return _CSI_TILDE_KEYS.get(params, UNKNOWN_KEY)
    if params:
        return UNKNOWN_KEY
    return _CSI_FINAL_KEYS.get(final, UNKNOWN_KEY)
