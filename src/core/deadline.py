"""Cooperative cancellation deadline.

Operations accept an optional deadline and check it between I/O steps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import time
from typing import Callable

from core.errors import CrawlStoreCancelledError


@dataclass(frozen=True)
class Deadline:
    """Absolute deadline for one caller operation.

    Attributes:
        expires_at: Expiry instant on the ``clock`` timeline.
        clock: Monotonic time source, replaceable in tests.
    """

    expires_at: float
    clock: Callable[[], float] = field(default=time.monotonic, compare=False, repr=False)

    @classmethod
    def after(cls, seconds: float) -> "Deadline":
        """Create a deadline the given number of seconds from now."""
        return cls(expires_at=time.monotonic() + seconds)

    def remaining(self) -> float:
        """Return seconds left, never negative."""
        return max(0.0, self.expires_at - self.clock())

    def expired(self) -> bool:
        return self.remaining() <= 0.0

    def check(self, stage: str) -> None:
        """Raise if the deadline has passed.

        Args:
            stage: Name of the step about to run, for the error message.

        Raises:
            CrawlStoreCancelledError: If the deadline expired.
        """
        if self.expired():
            raise CrawlStoreCancelledError(
                f"Deadline expired before {stage}. "
                "Retry with a longer deadline."
            )


def bounded_timeout(timeout: float, deadline: Deadline | None, stage: str) -> float:
    """Clamp a per-request timeout to the time left on a deadline.

    Args:
        timeout: Configured timeout in seconds.
        deadline: Optional caller deadline.
        stage: Name of the request, for the error message.

    Returns:
        Effective timeout in seconds, always positive.

    Raises:
        CrawlStoreCancelledError: If no time is left for the request.
    """
    if deadline is None:
        return timeout
    remaining = deadline.remaining()
    if remaining <= 0.0:
        raise CrawlStoreCancelledError(
            f"Deadline expired before {stage}. "
            "Retry with a longer deadline."
        )
    return min(timeout, remaining)
