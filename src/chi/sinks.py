from __future__ import annotations

import os
from typing import BinaryIO, Iterable, List

from .ansi import strip_escapes
from .errors import ResourceOpenError
from .options import Mode, TargetFile

"""
Sinks:
  - open_target(path, append) -> buffered binary writer
  - Sink: one opened TargetFile, writes per its mode
  - open_sinks(targets) / close_sinks(sinks)
No logging here; the CLI reports errors.
"""

BUFFER_SIZE = 64 * 1024
_FILE_PERMS = 0o644


# This function opens a FILE for writing, creating it if absent.
def open_target(path: str, append: bool) -> BinaryIO:
    flags = os.O_WRONLY | os.O_CREAT
    flags |= os.O_APPEND if append else os.O_TRUNC
    fd = os.open(path, flags, _FILE_PERMS)
    return open(fd, "wb", buffering=BUFFER_SIZE)


class Sink:
    """An opened target file. Owns its handle until close()."""

    def __init__(self, target: TargetFile, stream: BinaryIO) -> None:
        self.target = target
        self.mode = target.mode
        self.stream = stream

    def write(self, line: bytes) -> None:
        if self.mode is Mode.CARE:
            line = strip_escapes(line)
        self.stream.write(line)

    def flush(self) -> None:
        self.stream.flush()

    def close(self) -> None:
        # io close() flushes first
        self.stream.close()

    def __repr__(self) -> str:
        return f"Sink(path={self.target.path!r}, mode={self.mode.value}, append={self.target.append})"


# This function opens one sink per target, in order. Duplicate paths get separate handles.
def open_sinks(targets: Iterable[TargetFile]) -> List[Sink]:
    """
    Raises:
        ResourceOpenError: for the first target that cannot be opened; sinks
        opened before it are closed first
    """
    sinks: List[Sink] = []
    for target in targets:
        try:
            stream = open_target(target.path, target.append)
        except OSError as e:
            close_sinks(sinks)
            raise ResourceOpenError(target.path, e) from e
        sinks.append(Sink(target, stream))
    return sinks


# This function closes every sink, collecting failures instead of stopping at the first.
def close_sinks(sinks: Iterable[Sink]) -> List[OSError]:
    errors: List[OSError] = []
    for sink in sinks:
        try:
            sink.close()
        except OSError as e:
            errors.append(e)
    return errors


__all__ = ["BUFFER_SIZE", "Sink", "open_target", "open_sinks", "close_sinks"]
