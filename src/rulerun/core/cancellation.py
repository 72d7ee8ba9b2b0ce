from __future__ import annotations

import threading


class CancellationToken:
    """
    Interruptible wait used between polls.

    wait() blocks without spinning and returns True as soon as cancel() is
    called from any thread.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, seconds: float) -> bool:
        return self._event.wait(seconds)
