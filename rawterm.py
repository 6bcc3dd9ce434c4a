#!/usr/bin/env python3

# Copyright (c) 2026 kilo contributors
# SPDX-License-Identifier: ISC

"""
rawterm -- byte-exact raw-mode terminal I/O for kilo

Not a screen library. Just the pieces a single-screen editor needs to drive a
VT100-compatible terminal directly: raw mode with guaranteed restoration,
decoding of input bytes and escape sequences into keys, terminal geometry,
and a frame buffer that is flushed with one write.

Zero external dependencies. Uses only Python stdlib: termios, atexit, errno,
os.

Platform support: Unix (Linux, macOS). Input is read one byte at a time with
the termios VMIN/VTIME read timeout, so a lone Esc can be told apart from the
start of an escape sequence without poll(2).
"""

import atexit
import errno
import os
import termios


# Read timeout in raw mode, in tenths of a second
_VTIME = 1

# Bound on the cursor position report buffer. At most _CURSOR_REPLY_MAX - 1
# bytes of the reply are stored.
_CURSOR_REPLY_MAX = 32


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TerminalError(Exception):
    """
    Raised when the terminal can't be put into (or taken out of) raw mode,
    read from, or measured. Always fatal for the caller: there is no safe way
    to keep running with the terminal in an unknown state.

    call:
      Name of the failing operation, e.g. "tcsetattr"

    reason:
      Human-readable cause (usually os.strerror() of the errno), or None
    """

    def __init__(self, call, reason=None):
        super().__init__(call, reason)
        self.call = call
        self.reason = reason

    def __str__(self):
        # perror() style
        if self.reason:
            return f"{self.call}: {self.reason}"
        return self.call


def _reason(e):
    # Extracts the strerror part of an OSError/termios.error

    if isinstance(e, OSError):
        return e.strerror or str(e)
    # termios.error carries (errno, strerror) in args
    if len(e.args) == 2:
        return e.args[1]
    return str(e)


# ---------------------------------------------------------------------------
# Input constants
# ---------------------------------------------------------------------------


class Key:
    """
    Named constants for special keys.

    Ordinary bytes are returned by Terminal.read_key() as one-character
    strings. Named keys are longer strings, so the two can't collide. ESCAPE
    is the escape byte itself.
    """

    UP = "key_up"
    DOWN = "key_down"
    LEFT = "key_left"
    RIGHT = "key_right"
    PAGE_UP = "key_page_up"
    PAGE_DOWN = "key_page_down"
    HOME = "key_home"
    END = "key_end"
    DELETE = "key_delete"
    ESCAPE = "\x1b"


def ctrl(ch):
    """Return the key produced by pressing Ctrl together with 'ch'."""
    return chr(ord(ch) & 0x1F)


# Escape sequences recognized on input. Multiple entries per key to handle
# terminal variants (xterm, rxvt, tmux/linux console).
_ESCAPE_SEQUENCES = {
    # Arrow keys
    b"\x1b[A": Key.UP,
    b"\x1b[B": Key.DOWN,
    b"\x1b[C": Key.RIGHT,
    b"\x1b[D": Key.LEFT,
    # Page Up / Page Down
    b"\x1b[5~": Key.PAGE_UP,
    b"\x1b[6~": Key.PAGE_DOWN,
    # Home
    b"\x1b[H": Key.HOME,  # xterm
    b"\x1bOH": Key.HOME,  # application mode
    b"\x1b[1~": Key.HOME,  # tmux/linux
    b"\x1b[7~": Key.HOME,  # rxvt
    # End
    b"\x1b[F": Key.END,  # xterm
    b"\x1bOF": Key.END,  # application mode
    b"\x1b[4~": Key.END,  # tmux/linux
    b"\x1b[8~": Key.END,  # rxvt
    # Delete
    b"\x1b[3~": Key.DELETE,
}


# ---------------------------------------------------------------------------
# Output sequences
# ---------------------------------------------------------------------------

CLEAR_SCREEN = b"\x1b[2J"
CURSOR_HOME = b"\x1b[H"
CLEAR_LINE = b"\x1b[K"
HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CURSOR_TO_BOTTOM_RIGHT = b"\x1b[999C\x1b[999B"
REQUEST_CURSOR_POSITION = b"\x1b[6n"


def cursor_to(row, col):
    """Return the sequence that moves the cursor to 1-based (row, col)."""
    return f"\x1b[{row};{col}H".encode("ascii")


# ---------------------------------------------------------------------------
# RawMode -- terminal attribute lifecycle
# ---------------------------------------------------------------------------


class RawMode:
    """
    Puts the terminal on 'fd' into raw mode and takes it back out.

    Usable as a context manager. disable() is also registered with atexit
    when raw mode is entered, so the terminal gets restored on interpreter
    exit even if the owner never gets a chance to call it. Restoration
    happens at most once per enable().
    """

    def __init__(self, fd):
        self._fd = fd
        self._orig = None

    @property
    def enabled(self):
        return self._orig is not None

    def enable(self):
        if self._orig is not None:
            return

        try:
            orig = termios.tcgetattr(self._fd)
        except termios.error as e:
            raise TerminalError("tcgetattr", _reason(e)) from e

        self._orig = orig
        atexit.register(self.disable)

        # Separate copy to modify. A shallow copy of 'orig' would share its
        # cc list.
        raw = termios.tcgetattr(self._fd)

        # IFLAG: no CR-to-NL translation, no XON/XOFF, no SIGINT on break, no
        # parity checking, don't strip the 8th bit
        raw[0] &= ~(
            termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON
        )
        # OFLAG: no output post-processing (\n is not turned into \r\n)
        raw[1] &= ~termios.OPOST
        # CFLAG: 8-bit characters
        raw[2] |= termios.CS8
        # LFLAG: no echo, byte-at-a-time input, no Ctrl-V, no Ctrl-C/Ctrl-Z
        raw[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        # read() returns as soon as any input is available, or after _VTIME
        raw[6][termios.VMIN] = 0
        raw[6][termios.VTIME] = _VTIME

        try:
            termios.tcsetattr(self._fd, termios.TCSAFLUSH, raw)
        except termios.error as e:
            self._orig = None
            atexit.unregister(self.disable)
            raise TerminalError("tcsetattr", _reason(e)) from e

    def disable(self):
        if self._orig is None:
            return

        orig = self._orig
        self._orig = None
        atexit.unregister(self.disable)

        try:
            termios.tcsetattr(self._fd, termios.TCSAFLUSH, orig)
        except termios.error as e:
            raise TerminalError("tcsetattr", _reason(e)) from e

    def __enter__(self):
        self.enable()
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.disable()
            return

        # Already unwinding. Report the original error, not a failed restore.
        try:
            self.disable()
        except TerminalError:
            pass


# ---------------------------------------------------------------------------
# OutputBuffer -- one frame of pending output
# ---------------------------------------------------------------------------


class OutputBuffer:
    """
    Accumulates terminal output so that a whole frame reaches the terminal in
    a single write. Partial frames are never visible.
    """

    __slots__ = ("_data",)

    def __init__(self):
        self._data = bytearray()

    def append(self, data):
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._data += data

    def __len__(self):
        return len(self._data)

    def __bytes__(self):
        return bytes(self._data)

    def __repr__(self):
        return f"OutputBuffer({bytes(self._data)!r})"


# ---------------------------------------------------------------------------
# Terminal
# ---------------------------------------------------------------------------


class Terminal:
    """
    Byte-level access to a terminal: key input on 'infd', output on 'outfd'.

    The terminal is only put into raw mode through raw_mode(). Everything
    else works on any pair of file descriptors, which keeps the decoding and
    rendering logic testable with pipes.
    """

    def __init__(self, infd=0, outfd=1):
        self._infd = infd
        self._outfd = outfd

    @property
    def infd(self):
        return self._infd

    @property
    def outfd(self):
        return self._outfd

    def raw_mode(self):
        """Return a RawMode for the input side of the terminal."""
        return RawMode(self._infd)

    # --- Output ---

    def write(self, data):
        """
        Write 'data' (bytes or OutputBuffer) with one write() call. Only a
        short write makes us go around again for the rest.
        """
        data = memoryview(bytes(data))
        while data:
            try:
                n = os.write(self._outfd, data)
            except OSError as e:
                raise TerminalError("write", _reason(e)) from e
            data = data[n:]

    # --- Input ---

    def _read_byte(self):
        # Returns one byte as an int, or None if the read timed out

        try:
            data = os.read(self._infd, 1)
        except OSError as e:
            if e.errno == errno.EAGAIN:
                return None
            raise TerminalError("read", _reason(e)) from e

        if not data:
            return None
        return data[0]

    def read_key(self):
        """
        Block until a key is available and return it: a Key constant for
        recognized escape sequences, Key.ESCAPE for a lone Esc or anything
        unrecognized, and a one-character string for every other byte.
        """
        while True:
            c = self._read_byte()
            if c is not None:
                break

        if c != 0x1B:
            return chr(c)

        # Escape sequence. Two bytes of lookahead, plus one more for the
        # "ESC [ <digit> ~" form. A timeout anywhere means the user pressed
        # Esc on its own.
        seq = bytearray(b"\x1b")
        for _ in range(2):
            c = self._read_byte()
            if c is None:
                return Key.ESCAPE
            seq.append(c)

        if seq[1] == ord("[") and ord("0") <= seq[2] <= ord("9"):
            c = self._read_byte()
            if c is None:
                return Key.ESCAPE
            seq.append(c)

        return _ESCAPE_SEQUENCES.get(bytes(seq), Key.ESCAPE)

    # --- Geometry ---

    def cursor_position(self):
        """
        Ask the terminal where the cursor is with a Device Status Report and
        return (row, col), 1-based, or None if the reply is missing or
        malformed.
        """
        self.write(REQUEST_CURSOR_POSITION)

        # Reply: ESC [ <rows> ; <cols> R
        buf = bytearray()
        while len(buf) < _CURSOR_REPLY_MAX - 1:
            c = self._read_byte()
            if c is None:
                break
            if c == ord("R"):
                break
            buf.append(c)

        if buf[:2] != b"\x1b[":
            return None

        try:
            rows, cols = buf[2:].decode("ascii").split(";")
        except ValueError:
            return None

        if not (rows.isdigit() and cols.isdigit()):
            return None
        return int(rows), int(cols)

    def window_size(self):
        """
        Return the terminal size as (rows, cols).

        Uses the TIOCGWINSZ ioctl. If that isn't available, or reports zero
        columns, the cursor is pushed to the bottom-right corner and its
        position is queried instead. Raises TerminalError if neither works.
        """
        try:
            sz = os.get_terminal_size(self._outfd)
        except OSError:
            sz = None

        if sz is not None and sz.columns != 0:
            return sz.lines, sz.columns

        # The terminal clamps the cursor to the screen, so it ends up in the
        # bottom-right corner
        self.write(CURSOR_TO_BOTTOM_RIGHT)
        pos = self.cursor_position()
        if pos is None or pos[0] <= 0 or pos[1] <= 0:
            raise TerminalError("get_window_size", "cursor position report failed")
        return pos
