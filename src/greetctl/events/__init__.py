"""Event layer — in-process channel and its background logger.

INVARIANT: Event consumers are best-effort. Listener failures are
logged, never escalated to the command that published the event.
"""

from greetctl.events.channel import EventChannel
from greetctl.events.listener import EventLogger
from greetctl.events.models import Event, NameEntered

__all__ = ["Event", "EventChannel", "EventLogger", "NameEntered"]
