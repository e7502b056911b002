# File: goburden/utils.py
# Location: goburden/goburden/utils.py

"""
Utility functions module.

Provides helpers for opening plain or gzip-compressed text files and
standard streams.
"""

import gzip
import logging
import sys
from typing import Optional

logger = logging.getLogger("goburden")

STDIO_NAMES = ("-", "stdin", "stdout")


def is_stdio(filename: Optional[str]) -> bool:
    """Return True if the name refers to standard input or output."""
    return filename is None or filename in STDIO_NAMES


def smart_open(filename: str, mode: str = "r", encoding: str = "utf-8"):
    """
    Open a file with automatic gzip support based on file extension.

    Parameters
    ----------
    filename : str
        Path to the file
    mode : str
        File opening mode ('r', 'w', 'rt', 'wt', etc.)
    encoding : str
        Text encoding (for text modes)

    Returns
    -------
    file object
        Opened file handle
    """
    if filename.endswith(".gz"):
        # Ensure text mode for gzip
        if "t" not in mode and "b" not in mode:
            mode = mode + "t"
        return gzip.open(filename, mode, encoding=encoding)
    else:
        if "b" not in mode:
            return open(filename, mode, encoding=encoding)
        else:
            return open(filename, mode)


def open_input(filename: Optional[str]):
    """
    Open a text input, returning sys.stdin for '-' or None.

    Release the handle with close_input() so that stdin is never closed.
    """
    if is_stdio(filename):
        logger.debug("Reading from standard input")
        return sys.stdin
    return smart_open(filename, "r")


def close_input(handle) -> None:
    """Close a handle returned by open_input(), leaving sys.stdin open."""
    if handle is not sys.stdin:
        handle.close()
