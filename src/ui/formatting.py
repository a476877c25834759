"""Text formatting for pass events."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import tzinfo

from models.iss import PassEvent

DATETIME_FORMAT = "%a %b %d %Y %H:%M:%S %Z"


def format_pass_time(event: PassEvent, tz: tzinfo | None = None) -> str:
    """Describe one pass in a single line.

    e.g. ``Next pass at Fri Jun 01 2018 13:01:35 UTC for 465 seconds!``

    Times are shown in ``tz``, or in the local timezone when omitted.
    """
    rise = event.rise_datetime.astimezone(tz)
    when = rise.strftime(DATETIME_FORMAT)
    return f"Next pass at {when} for {event.duration} seconds!"


def format_pass_times(
    events: Iterable[PassEvent], tz: tzinfo | None = None
) -> list[str]:
    """Format each pass with ``format_pass_time``, preserving order."""
    return [format_pass_time(event, tz) for event in events]
