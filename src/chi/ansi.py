from __future__ import annotations

import re
from typing import Union

"""
ANSI CSI stripper

- ESC '[' , parameter bytes [0-9;]* , intermediate bytes [ -/]* , one final byte [@-~]
- Truncated sequences (no final byte) are left as-is
- Repeats until nothing matches, so unlike a single pass "\x1b\x1b[31m[0m" strips to ""
- Pure function, no errors
"""

_CSI_RE = re.compile(rb"\x1b\[[0-9;]*[ -/]*[@-~]")
_CSI_STR_RE = re.compile(r"\x1b\[[0-9;]*[ -/]*[@-~]")


# This function removes every CSI escape sequence from the data.
def strip_escapes(data: Union[bytes, str]) -> Union[bytes, str]:
    """
    Return `data` with CSI sequences removed; the result has the same type as the input.

    Removing a sequence can join a stray ESC with a following '[...m' into a
    new sequence, so substitution repeats until nothing matches.
    """
    if isinstance(data, str):
        pattern, empty = _CSI_STR_RE, ""
    else:
        pattern, empty = _CSI_RE, b""
    while True:
        data, count = pattern.subn(empty, data)
        if count == 0:
            return data
