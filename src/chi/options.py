from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from .errors import ParseError

"""
Command-line layer
- GlobalOptions / PendingFileOptions / TargetFile (Pydantic v2, frozen)
- parse_args(tokens) -> ParsedArgs

Rules:
  - '--' ends option parsing; every later token is a FILE
  - FILE_OPTS (-a/-b/-c) apply to the next FILE only, then reset
  - global options (-i) may appear anywhere
  - '-' alone is a FILE, not an option
"""


class Mode(str, Enum):
    BARE = "bare"  # keep ANSI escapes
    CARE = "care"  # strip ANSI escapes


class GlobalOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    ignore_interrupts: bool = False


class PendingFileOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    append: bool = False
    mode: Mode = Mode.BARE


class TargetFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    append: bool = False
    mode: Mode = Mode.BARE


class ParsedArgs(BaseModel):
    model_config = ConfigDict(frozen=True)

    options: GlobalOptions = GlobalOptions()
    targets: Tuple[TargetFile, ...] = ()
    request: Optional[str] = None  # "help" or "version" when parsing stopped early


# Long options that only change state; --help/--version are handled separately.
_LONG_FLAGS = {
    "--ignore-interrupts": "i",
    "--append": "a",
    "--bare": "b",
    "--care": "c",
}


# This function attaches the pending options to a FILE and returns the reset accumulator.
def consume_file(path: str, pending: PendingFileOptions) -> Tuple[TargetFile, PendingFileOptions]:
    target = TargetFile(path=path, append=pending.append, mode=pending.mode)
    return target, PendingFileOptions()


# This function applies one short option character to the parser state.
def _apply_flag(
    ch: str, options: GlobalOptions, pending: PendingFileOptions
) -> Tuple[GlobalOptions, PendingFileOptions]:
    if ch == "i":
        return options.model_copy(update={"ignore_interrupts": True}), pending
    if ch == "a":
        return options, pending.model_copy(update={"append": True})
    if ch == "b":
        return options, pending.model_copy(update={"mode": Mode.BARE})
    if ch == "c":
        return options, pending.model_copy(update={"mode": Mode.CARE})
    raise ParseError(f"unknown option: -{ch}")


# This function turns argv (without the program name) into options and target files.
def parse_args(tokens: Sequence[str]) -> ParsedArgs:
    """
    Walk tokens left to right.

    Raises:
        ParseError: on an unknown long option or an unknown short option character
    """
    options = GlobalOptions()
    pending = PendingFileOptions()
    targets: List[TargetFile] = []

    for i, token in enumerate(tokens):
        if token == "--":
            # Everything after '--' is a FILE, starting with the options in effect now.
            for path in tokens[i + 1 :]:
                target, pending = consume_file(path, pending)
                targets.append(target)
            break

        if token.startswith("--"):
            if token in ("--help", "--version"):
                return ParsedArgs(options=options, targets=tuple(targets), request=token[2:])
            flag = _LONG_FLAGS.get(token)
            if flag is None:
                raise ParseError(f"unknown option: {token}")
            options, pending = _apply_flag(flag, options, pending)
            continue

        if token.startswith("-") and token != "-":
            # Short option cluster, e.g. -abc or -ic
            for ch in token[1:]:
                options, pending = _apply_flag(ch, options, pending)
            continue

        target, pending = consume_file(token, pending)
        targets.append(target)

    return ParsedArgs(options=options, targets=tuple(targets))


__all__ = [
    "Mode",
    "GlobalOptions",
    "PendingFileOptions",
    "TargetFile",
    "ParsedArgs",
    "consume_file",
    "parse_args",
]
