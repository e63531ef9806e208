"""
Clock seam for the use-cases: "now" is injected so date defaults are testable.
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Timezone-aware current time in the process's local timezone."""
    return datetime.now().astimezone()


def utc(moment: datetime) -> datetime:
    return moment.astimezone(timezone.utc)
