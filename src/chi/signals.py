from __future__ import annotations

import signal
from typing import Callable, List, Optional

from .log import get_logger

"""
Interrupt policy (-i / --ignore-interrupts)
- install() sets SIG_IGN for SIGINT and, where defined, SIGTERM
- Stays in effect until the process exits; there is no uninstall
"""

_LOG = get_logger(__name__)


def _interrupt_signals() -> List[int]:
    sigs = [signal.SIGINT]
    sigterm = getattr(signal, "SIGTERM", None)
    if sigterm is not None:
        sigs.append(sigterm)
    return sigs


class InterruptPolicy:
    """Ignore interrupt-class signals when enabled; do nothing otherwise."""

    def __init__(
        self,
        enabled: bool,
        *,
        signal_fn: Optional[Callable[[int, object], object]] = None,
    ) -> None:
        self.enabled = enabled
        self._signal_fn = signal_fn or signal.signal
        self.installed: List[int] = []

    def install(self) -> None:
        if not self.enabled:
            return
        for sig in _interrupt_signals():
            self._signal_fn(sig, signal.SIG_IGN)
            self.installed.append(sig)
        _LOG.debug("ignoring signals: %s", self.installed)


__all__ = ["InterruptPolicy"]
