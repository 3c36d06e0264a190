"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens
(``"UP"``, ``"ENTER"``, ``"CTRL_C"``, or the typed character itself).
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\x15": "CTRL_U",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token; returns ``""`` when ``timeout_ms`` elapses first."""
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
        pending = [ch]
        for _ in range(_utf8_length(ch[0]) - 1):
            more = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
            if more is None:
                break
            pending.append(more)
        return b"".join(pending).decode("utf-8", errors="replace")

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if final is None:
        return "ESC"
    key = _CSI_FINAL_KEYS.get(final)
    if key is not None:
        return key
    if final == b"3":
        tail = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if tail == b"~":
            return "DELETE"
    return "ESC"
