from __future__ import annotations

import sys
from typing import BinaryIO, Callable, List, Optional

from . import APP_NAME, __version__
from .copier import copy_stream, flush_outputs
from .errors import ParseError, ResourceOpenError, StreamIOError
from .log import get_logger
from .options import parse_args
from .signals import InterruptPolicy
from .sinks import Sink, close_sinks, open_sinks

"""
CLI entrypoint

Usage:
  chi [OPTIONS] [[FILE_OPTS]... FILE]...

Exit codes:
  0  success, --help, --version
  1  open/read/write/flush failure
  2  bad command line
All diagnostics go to STDERR.
"""

_LOG = get_logger(__name__)

HELP_TEXT = f"""Usage: {APP_NAME} [OPTIONS] [[FILE_OPTS]... FILE]...

OPTIONS:
  -i, --ignore-interrupts   ignore interrupt signals
      --help                display this help and exit
      --version             output version information and exit

FILE_OPTS (apply to the next FILE only):
  -a, --append              append to FILE (do not overwrite)
  -b, --bare                write input as-is (keep ANSI escapes)
  -c, --care                strip ANSI escapes (plain text)

Copy standard input to each FILE, and also to standard output.
"""


# This function prints help/version text; a closed or broken stdout is ignored.
def _write_text(stream: BinaryIO, text: str) -> None:
    try:
        stream.write(text.encode("utf-8"))
        stream.flush()
    except OSError as e:  # e.g. `chi --help | false`
        _LOG.debug("could not write to stdout: %s", e)


# This function releases every resource, logging (not raising) what fails.
def _release(primary: BinaryIO, sinks: List[Sink]) -> None:
    errors = []
    try:
        primary.flush()
    except OSError as e:
        errors.append(e)
    errors.extend(close_sinks(sinks))
    for e in errors:
        _LOG.warning("error while closing output: %s", e)


# This function is the main function for the CLI.
def main(
    argv: Optional[List[str]] = None,
    *,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
    policy_factory: Callable[[bool], InterruptPolicy] = InterruptPolicy,
) -> int:
    tokens = sys.argv[1:] if argv is None else argv
    reader = stdin if stdin is not None else sys.stdin.buffer
    primary = stdout if stdout is not None else sys.stdout.buffer

    try:
        parsed = parse_args(tokens)
    except ParseError as e:  # Bad command line: report, hint, exit 2.
        _LOG.error("%s", e)
        _LOG.error("Try '%s --help' for more information.", APP_NAME)
        return e.exit_code

    if parsed.request == "help":
        _write_text(primary, HELP_TEXT)
        return 0
    if parsed.request == "version":
        _write_text(primary, f"{APP_NAME} {__version__}\n")
        return 0

    # Must be in place before the first read.
    policy_factory(parsed.options.ignore_interrupts).install()

    try:
        sinks = open_sinks(parsed.targets)
    except ResourceOpenError as e:  # Nothing has been read yet.
        _LOG.error("%s", e)
        return e.exit_code

    try:
        copy_stream(reader, primary, sinks)
        flush_outputs(primary, sinks)
        return 0
    except StreamIOError as e:
        _LOG.error("%s", e)
        return e.exit_code
    except KeyboardInterrupt:  # Only reachable without -i.
        _LOG.info("Interrupted, exiting.")
        return 130
    finally:
        _release(primary, sinks)


# Run the main function for the CLI.
if __name__ == "__main__":
    raise SystemExit(main())
