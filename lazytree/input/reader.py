"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing, function keys in both xterm (``ESC O P``) and
VT220 (``ESC [ 15 ~``) forms, and SGR mouse events.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS = {
    b"\x03": "CTRL_C",
    b"\x0e": "CTRL_N",
    b"\x10": "CTRL_P",
    b"\x07": "CTRL_G",
    b"\x13": "CTRL_S",
    b"\x15": "CTRL_U",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER_CR",
    b"\n": "ENTER_LF",
}

_CSI_FINAL_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_SS3_KEYS = {
    b"P": "F1",
    b"Q": "F2",
    b"R": "F3",
    b"S": "F4",
    b"H": "HOME",
    b"F": "END",
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
}

# ESC [ <number> ~
_TILDE_KEYS = {
    "1": "HOME",
    "7": "HOME",
    "4": "END",
    "8": "END",
    "3": "DELETE",
    "5": "PGUP",
    "6": "PGDN",
    "11": "F1",
    "12": "F2",
    "13": "F3",
    "14": "F4",
    "15": "F5",
    "17": "F6",
    "18": "F7",
    "19": "F8",
    "20": "F9",
    "21": "F10",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, lead: bytes) -> str:
    first = lead[0]
    if first >= 0xF0:
        need = 3
    elif first >= 0xE0:
        need = 2
    elif first >= 0xC0:
        need = 1
    else:
        need = 0
    data = lead
    for _ in range(need):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        data += part
    return data.decode("utf-8", errors="replace")


def _decode_sgr_mouse(fd: int) -> str:
    # SGR mouse: ESC [ < btn ; col ; row (M/m)
    payload = []
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return "ESC"
        if part in {b"M", b"m"}:
            break
        payload.append(part)
        if len(payload) > 64:
            return "ESC"
    try:
        btn_s, col_s, row_s = b"".join(payload).decode("ascii").split(";")
        btn = int(btn_s)
        col = int(col_s)
        row = int(row_s)
    except ValueError:
        return "ESC"
    button = btn & 0b11
    is_wheel = (btn & 0b0100_0000) != 0
    if is_wheel:
        if button == 0:
            return f"MOUSE_WHEEL_UP:{col}:{row}"
        if button == 1:
            return f"MOUSE_WHEEL_DOWN:{col}:{row}"
        return "MOUSE"
    if button == 0:
        suffix = "DOWN" if part == b"M" else "UP"
        return f"MOUSE_LEFT_{suffix}:{col}:{row}"
    return "MOUSE"


def _decode_tilde_sequence(fd: int, first: bytes) -> str:
    digits = first
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return "ESC"
        if part == b"~":
            break
        if part == b";":
            # Modified keys (ESC [ 1 ; 5 A ...) are reported without modifiers.
            _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
            final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
            if final is None:
                return "ESC"
            return _CSI_FINAL_KEYS.get(final, "ESC")
        digits += part
        if len(digits) > 4:
            return "ESC"
    return _TILDE_KEYS.get(digits.decode("ascii", errors="replace"), "ESC")


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token; ``""`` on timeout or end of input."""
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

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return "ESC"
        return _SS3_KEYS.get(final, "ESC")
    if seq != b"[":
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    final_key = _CSI_FINAL_KEYS.get(seq)
    if final_key is not None:
        return final_key
    if seq == b"<":
        return _decode_sgr_mouse(fd)
    if seq.isdigit():
        return _decode_tilde_sequence(fd, seq)
    return "ESC"
