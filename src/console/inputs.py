"""
Roll Dice - Console Input Helpers

Line-based readers for the menu and the games. An empty line means the
user is done with the current operation; the end of the stream raises
EOFError so callers can shut down.
"""

import re
from typing import TextIO

# Optional sign followed by ASCII digits only
_INTEGER = re.compile(r"[+-]?[0-9]+")


def read_line(stream: TextIO) -> str:
    """Read one raw line, trimmed.

    Raises:
        EOFError: If the stream is exhausted
    """
    line = stream.readline()
    if line == "":
        raise EOFError("Input stream closed.")
    return line.strip()


def process_input_str(stream: TextIO) -> tuple[bool, str]:
    """
    Process user string input.

    Returns:
        Tuple of (done, text); done is True for an empty line
    """
    text = read_line(stream)
    if not text:
        return True, ""
    return False, text


def process_input_int(stream: TextIO) -> tuple[bool, int]:
    """
    Process user number input.

    Returns:
        Tuple of (done, value); value is -1 when done

    Raises:
        ValueError: If the line is not a plain decimal integer
    """
    done, text = process_input_str(stream)
    if done:
        return True, -1
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"Expected an integer, got {text!r}.")
    return False, int(text)
