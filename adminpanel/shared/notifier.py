"""Stable notifier: a one-slot holder for the current notification callback.

Long-running fetches keep a reference to the holder, not to the callback.
When the UI layer swaps the sink (update()), completions that arrive later
call the new one.

Usage:
    notifier = StableNotifier(toast_sink)
    notifier.update(new_sink)
    notifier(NotificationEvent(Severity.ERROR, "Error", "Failed"))
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from adminpanel.application.dtos.dashboard import NotificationEvent
    from adminpanel.application.interfaces.services import NotifyCallback


class StableNotifier:
    """Forward every call to whatever callback is current at call time."""

    __slots__ = ("current",)

    def __init__(self, callback: NotifyCallback) -> None:
        self.current = callback

    def update(self, callback: NotifyCallback) -> None:
        """Replace the callback. Takes effect for the very next call."""
        self.current = callback

    def __call__(self, event: NotificationEvent) -> None:
        self.current(event)
