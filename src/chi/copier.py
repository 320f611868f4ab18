from __future__ import annotations

import time
from typing import BinaryIO, Callable, Optional, Sequence

from .errors import StreamIOError
from .sinks import Sink

"""
Fan-out copier
- Read input one line at a time ('\n' kept when present)
- Write the line unmodified to the primary output first
- Then write it to each sink in declaration order (stripped for --care sinks)
- b"" from readline() is end-of-input; None (no data yet) means wait briefly and try again
- Any other read/write failure raises StreamIOError
"""

_IDLE_SEC = 0.01


# This function reads one line, mapping OS failures to StreamIOError.
def _read_line(reader: BinaryIO) -> Optional[bytes]:
    try:
        return reader.readline()
    except OSError as e:
        raise StreamIOError("read", e) from e


# This function copies the input to the primary output and every sink until end-of-input.
def copy_stream(
    reader: BinaryIO,
    primary: BinaryIO,
    sinks: Sequence[Sink],
    *,
    sleep_fn: Callable[[float], None] = time.sleep,
) -> int:
    """Return the number of lines copied."""
    lines = 0
    while True:
        line = _read_line(reader)
        if line is None:
            # non-blocking stream with nothing available yet
            sleep_fn(_IDLE_SEC)
            continue
        if line == b"":
            return lines

        try:
            primary.write(line)
        except OSError as e:
            raise StreamIOError("stdout write", e) from e

        for sink in sinks:
            try:
                sink.write(line)
            except OSError as e:
                raise StreamIOError("file write", e) from e
        lines += 1


# This function flushes everything after a successful copy; failures here are still fatal.
def flush_outputs(primary: BinaryIO, sinks: Sequence[Sink]) -> None:
    try:
        primary.flush()
    except OSError as e:
        raise StreamIOError("stdout flush", e) from e
    for sink in sinks:
        try:
            sink.flush()
        except OSError as e:
            raise StreamIOError("file flush", e) from e


__all__ = ["copy_stream", "flush_outputs"]
