#!/usr/bin/env python3
"""Validate rawterm, kilo and lsh without pytest.

Exercises rawterm Key/OutputBuffer/escape decoding over pipes, termios raw
mode setup and restore on a pty, kilo frame rendering in headless mode, and
lsh command splitting and builtin dispatch.

Run from the project root: python .ci/validate-rawterm.py
"""

import os
import sys

# Ensure the project root (CWD) is on the import path, since Python
# adds the script's directory (.ci/) rather than CWD by default.
sys.path.insert(0, os.getcwd())


def check_rawterm_units():
    """rawterm Key, ctrl, OutputBuffer, decoding -- no terminal required."""
    from rawterm import Key, OutputBuffer, Terminal, ctrl

    # Named keys can't be confused with a single byte
    for attr in (
        "UP",
        "DOWN",
        "LEFT",
        "RIGHT",
        "HOME",
        "END",
        "PAGE_UP",
        "PAGE_DOWN",
        "DELETE",
    ):
        assert len(getattr(Key, attr)) > 1, "Key." + attr
    assert Key.ESCAPE == "\x1b", "Key.ESCAPE"
    assert ctrl("q") == "\x11", "ctrl('q')"

    buf = OutputBuffer()
    buf.append(b"\x1b[H")
    buf.append("~")
    assert bytes(buf) == b"\x1b[H~", "OutputBuffer contents"

    r, w = os.pipe()
    try:
        os.write(w, b"\x1b[A\x1b[3~\x1b[1~\x1b[Hq\x1b")
        os.close(w)
        w = None
        term = Terminal(r, r)
        keys = [term.read_key() for _ in range(6)]
        assert keys == [Key.UP, Key.DELETE, Key.HOME, Key.HOME, "q", Key.ESCAPE], keys
    finally:
        os.close(r)
        if w is not None:
            os.close(w)

    print("rawterm unit checks passed")


def check_raw_mode():
    """RawMode enable/disable on a pty -- Unix only."""
    if not hasattr(os, "openpty"):
        print("Raw mode checks skipped (no pty support)")
        return

    import termios

    from rawterm import RawMode

    master, slave = os.openpty()
    try:
        orig = termios.tcgetattr(slave)
        with RawMode(slave):
            lflag = termios.tcgetattr(slave)[3]
            assert not lflag & termios.ICANON, "ICANON cleared"
            assert not lflag & termios.ECHO, "ECHO cleared"
        assert termios.tcgetattr(slave) == orig, "attributes restored"
    finally:
        os.close(slave)
        os.close(master)

    print("Raw mode checks passed")


def check_kilo_headless():
    """kilo frame rendering and key handling against a pipe."""
    import kilo
    import rawterm

    r, w = os.pipe()
    try:
        term = rawterm.Terminal(r, w)
        state = kilo.EditorState(24, 80)
        for key in (rawterm.Key.PAGE_DOWN, rawterm.Key.END):
            assert kilo.process_keypress(term, state, key), "still running"
        assert (state.cx, state.cy) == (79, 23), "cursor clamped"

        kilo.refresh_screen(term, state)
        frame = os.read(r, 65536)
        assert frame.startswith(rawterm.HIDE_CURSOR + rawterm.CURSOR_HOME), "prefix"
        assert frame.endswith(b"\x1b[24;80H" + rawterm.SHOW_CURSOR), "suffix"
        assert frame.count(b"\r\n") == 23, "row separators"
        assert b"Kilo editor -- version" in frame, "welcome banner"
    finally:
        os.close(r)
        os.close(w)

    print("kilo headless validation passed")


def check_lsh():
    """lsh splitting and builtin dispatch (no processes launched)."""
    import lsh

    assert lsh.split_line(" ls\t-l \n") == ["ls", "-l"], "split_line"
    assert lsh.execute([]) is True, "empty command"
    assert lsh.execute(["exit"]) is False, "exit builtin"

    print("lsh validation passed")


if __name__ == "__main__":
    check_rawterm_units()
    check_raw_mode()
    check_kilo_headless()
    check_lsh()
    print("All checks passed")
