#!/usr/bin/env python3

# Copyright (c) 2026 kilo contributors
# SPDX-License-Identifier: ISC

"""
Overview
========

A minimal screen-oriented text viewer that drives the terminal directly
through rawterm, without curses. The first line of FILE, if given, is shown
at the top of the screen.

Keys:

  Arrows       : Move the cursor
  Home/End     : Jump to the start/end of the line
  PgUp/PgDn    : Move the cursor a screen up/down
  Ctrl-Q       : Quit

The cursor is confined to the screen. There is no scrolling and no editing.


Running
=======

  $ kilo [FILE]

The exit status is 0 when the user quits, and 1 if the terminal can't be set
up or FILE can't be opened. In the latter case a diagnostic is printed to
stderr after the terminal has been restored.
"""

import argparse
import os
import sys

import rawterm
from rawterm import Key, ctrl

KILO_VERSION = "0.0.1"

QUIT_KEY = ctrl("q")

_FILLER = b"~"


class Row:
    """
    One line of text.

    chars:
      The bytes of the line, without any line terminator

    size:
      len(chars)
    """

    __slots__ = ("chars",)

    def __init__(self, chars):
        self.chars = chars

    @property
    def size(self):
        return len(self.chars)

    def __repr__(self):
        return f"Row({self.chars!r})"


class EditorState:
    """
    Cursor position, viewport and loaded text. The viewport size is fixed at
    construction.

    cx/cy:
      0-based cursor column/row, always inside the viewport

    screenrows/screencols:
      Viewport size

    rows:
      List of Row instances. Holds at most one row (the first line of the
      opened file).
    """

    def __init__(self, screenrows, screencols):
        self.cx = 0
        self.cy = 0
        self.screenrows = screenrows
        self.screencols = screencols
        self.rows = []


#
# File loading
#


def open_file(state, filename):
    """
    Loads the first line of 'filename' into 'state', with trailing \\n/\\r
    bytes stripped. An empty file leaves 'state' without rows.

    Raises OSError if the file can't be read.
    """
    with open(filename, "rb") as f:
        line = f.readline()

    if line:
        state.rows = [Row(line.rstrip(b"\r\n"))]


#
# Output
#


def _draw_welcome(state, buf):
    welcome = f"Kilo editor -- version {KILO_VERSION}".encode("ascii")
    welcome = welcome[: state.screencols]

    padding = (state.screencols - len(welcome)) // 2
    if padding:
        buf.append(_FILLER)
        padding -= 1
    buf.append(b" " * padding)
    buf.append(welcome)


def draw_rows(state, buf):
    """Appends one line per screen row to 'buf'."""
    for y in range(state.screenrows):
        if y < len(state.rows):
            buf.append(state.rows[y].chars[: state.screencols])
        elif not state.rows and y == state.screenrows // 3:
            _draw_welcome(state, buf)
        else:
            buf.append(_FILLER)

        buf.append(rawterm.CLEAR_LINE)
        if y < state.screenrows - 1:
            buf.append(b"\r\n")


def refresh_screen(term, state):
    """Renders one frame and writes it to 'term' in one go."""
    buf = rawterm.OutputBuffer()

    buf.append(rawterm.HIDE_CURSOR)
    buf.append(rawterm.CURSOR_HOME)

    draw_rows(state, buf)

    buf.append(rawterm.cursor_to(state.cy + 1, state.cx + 1))
    buf.append(rawterm.SHOW_CURSOR)

    term.write(buf)


#
# Input
#


def move_cursor(state, key):
    # Moves the cursor one step in the direction of the arrow key 'key',
    # stopping at the edges of the screen

    if key == Key.LEFT:
        if state.cx != 0:
            state.cx -= 1
    elif key == Key.RIGHT:
        if state.cx != state.screencols - 1:
            state.cx += 1
    elif key == Key.UP:
        if state.cy != 0:
            state.cy -= 1
    elif key == Key.DOWN:
        if state.cy != state.screenrows - 1:
            state.cy += 1


def process_keypress(term, state, key):
    """
    Updates 'state' for 'key'.

    Returns False if the user quit (after clearing the screen), and True
    otherwise. Keys without a binding are ignored.
    """
    if key == QUIT_KEY:
        term.write(rawterm.CLEAR_SCREEN + rawterm.CURSOR_HOME)
        return False

    if key == Key.HOME:
        state.cx = 0

    elif key == Key.END:
        state.cx = state.screencols - 1

    elif key in (Key.PAGE_UP, Key.PAGE_DOWN):
        arrow = Key.UP if key == Key.PAGE_UP else Key.DOWN
        for _ in range(state.screenrows):
            move_cursor(state, arrow)

    elif key in (Key.UP, Key.DOWN, Key.LEFT, Key.RIGHT):
        move_cursor(state, key)

    return True


#
# Main application
#


def editor_loop(term, state):
    """
    Renders, reads a key and handles it until the user quits. Returns the
    exit status.
    """
    while True:
        refresh_screen(term, state)
        if not process_keypress(term, state, term.read_key()):
            return 0


def kilo(filename=None, infd=0, outfd=1):
    """
    Runs the editor on the terminal given by 'infd'/'outfd', returning the
    exit status. The terminal is in raw mode only while this function runs.

    Raises rawterm.TerminalError or OSError on fatal errors.
    """
    term = rawterm.Terminal(infd, outfd)

    with term.raw_mode():
        rows, cols = term.window_size()
        state = EditorState(rows, cols)

        if filename is not None:
            open_file(state, filename)

        return editor_loop(term, state)


def _die(msg, outfd=1):
    # Clears the screen (best effort), prints 'msg' perror() style, and exits
    # with status 1

    try:
        os.write(outfd, rawterm.CLEAR_SCREEN + rawterm.CURSOR_HOME)
    except OSError:
        pass

    sys.exit(f"kilo: {msg}")


def main():
    parser = argparse.ArgumentParser(
        formatter_class=argparse.RawDescriptionHelpFormatter, description=__doc__
    )

    parser.add_argument(
        "filename", metavar="FILE", nargs="?", help="File whose first line is shown"
    )

    args = parser.parse_args()

    try:
        status = kilo(args.filename)
    except rawterm.TerminalError as e:
        _die(e)
    except OSError as e:
        _die(f"{e.filename or 'open'}: {e.strerror}")

    sys.exit(status)


if __name__ == "__main__":
    main()
