"""Line sources and sinks.

Both are opened in binary mode so line terminators pass through untouched.
"""

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import BinaryIO, Optional

from .config import STDIN_PATH
from .errors import SinkOpenError, SourceOpenError


@contextmanager
def open_source(path: str = STDIN_PATH) -> Iterator[BinaryIO]:
    """Open the line source.

    Args:
        path: File to read, or "-" for standard input

    Yields:
        Binary stream; iterating it yields raw lines with terminators

    Raises:
        SourceOpenError: If the file cannot be opened
    """
    if path == STDIN_PATH:
        # Standard input is left open for the caller's process
        yield sys.stdin.buffer
        return

    try:
        stream = open(path, "rb")
    except OSError as e:
        raise SourceOpenError.from_os_error(e, path) from e

    with stream:
        yield stream


@contextmanager
def open_sink(path: Optional[str] = None) -> Iterator[BinaryIO]:
    """Open the line sink.

    Args:
        path: File to create (truncated if it exists), or None for standard output

    Yields:
        Binary writable stream

    Raises:
        SinkOpenError: If the file cannot be created
    """
    if path is None:
        stream = sys.stdout.buffer
        try:
            yield stream
        finally:
            stream.flush()
        return

    try:
        stream = open(path, "wb")
    except OSError as e:
        raise SinkOpenError.from_os_error(e, path) from e

    with stream:
        yield stream
