#!/usr/bin/env python3

# Copyright (c) 2026 kilo contributors
# SPDX-License-Identifier: ISC

"""
A tiny command shell.

Reads a line, splits it on whitespace, and either runs a builtin or starts
the named program with the remaining words as arguments, waiting for it to
finish before prompting again. There is no quoting, no globbing, no pipes and
no redirection.

Builtins:

  cd DIR   : Change the working directory
  help     : Print a short help text
  exit     : Leave the shell

The shell also exits at end of input (e.g. Ctrl-D). The exit status is
always 0.
"""

import argparse
import os
import re
import sys

PROMPT = "> "

# Characters that separate words on the command line
_TOK_DELIM = " \t\r\n\a"

_TOK_SPLIT = re.compile(f"[{re.escape(_TOK_DELIM)}]+")


def _error(msg):
    print("lsh: " + msg, file=sys.stderr)


#
# Builtins
#
# Each builtin takes the argument list (with the builtin's name as args[0])
# and returns True if the shell should keep running.
#


def lsh_cd(args):
    if len(args) < 2:
        _error('expected argument to "cd"')
        return True

    try:
        os.chdir(args[1])
    except OSError as e:
        _error(e.strerror)

    return True


def lsh_help(args):
    print("LSH")
    print("Type program names and arguments, and hit enter.")
    print("The following are built in:\n")

    for name in BUILTINS:
        print("  " + name)

    print("\nUse the man command for information on other programs.")
    return True


def lsh_exit(args):
    return False


BUILTINS = {
    "cd": lsh_cd,
    "help": lsh_help,
    "exit": lsh_exit,
}


#
# Command execution
#


def launch(args):
    """
    Runs the program args[0] with arguments args[1:] (searched for in PATH)
    and waits for it to exit or be killed by a signal. Always returns True.
    """
    # Anything buffered would otherwise be written twice, once by each
    # process
    sys.stdout.flush()
    sys.stderr.flush()

    try:
        pid = os.fork()
    except OSError as e:
        _error(e.strerror)
        return True

    if pid == 0:
        # Child. Never returns into the caller.
        try:
            os.execvp(args[0], args)
        except OSError as e:
            _error(e.strerror)
        except ValueError as e:
            # Embedded NUL byte in an argument
            _error(str(e))
        finally:
            sys.stderr.flush()
            os._exit(1)

    # Parent. Stopped children (WUNTRACED) are waited on again.
    while True:
        _, status = os.waitpid(pid, os.WUNTRACED)
        if os.WIFEXITED(status) or os.WIFSIGNALED(status):
            return True


def execute(args):
    """
    Runs a builtin or launches a program. Returns True if the shell should
    keep running, and False if it should exit.
    """
    if not args:
        # Empty command
        return True

    builtin = BUILTINS.get(args[0])
    if builtin:
        return builtin(args)

    return launch(args)


#
# Input
#


def read_line(stream):
    """
    Returns the next line from 'stream' without its trailing newline, or
    None at end of input.
    """
    line = stream.readline()
    if not line:
        return None
    if line.endswith("\n"):
        line = line[:-1]
    return line


def split_line(line):
    """Splits 'line' into words. Runs of separators produce no empty words."""
    return [tok for tok in _TOK_SPLIT.split(line) if tok]


def lsh_loop(stdin=None, stdout=None):
    """Prompts for and runs commands until 'exit' or end of input."""
    if stdin is None:
        stdin = sys.stdin
    if stdout is None:
        stdout = sys.stdout

    while True:
        stdout.write(PROMPT)
        stdout.flush()

        line = read_line(stdin)
        if line is None:
            # End of input. Move off the prompt line.
            stdout.write("\n")
            return

        if not execute(split_line(line)):
            return


def main():
    argparse.ArgumentParser(
        formatter_class=argparse.RawDescriptionHelpFormatter, description=__doc__
    ).parse_args()

    lsh_loop()
    sys.exit(0)


if __name__ == "__main__":
    main()
