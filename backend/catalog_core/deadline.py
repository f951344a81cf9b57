"""Caller-supplied deadlines for blocking core operations."""
import time
from dataclasses import dataclass
from typing import Optional

from catalog_core.errors import OperationCancelled


@dataclass(frozen=True)
class Deadline:
    """Absolute point on the monotonic clock after which work must stop."""

    expires_at: float

    @classmethod
    def after(cls, seconds: float) -> "Deadline":
        return cls(time.monotonic() + seconds)

    def remaining(self) -> float:
        return self.expires_at - time.monotonic()

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0

    def check(self, operation: str) -> None:
        """Raise OperationCancelled if the deadline has passed."""
        if self.expired:
            raise OperationCancelled(operation=operation)


def check_deadline(deadline: Optional[Deadline], operation: str) -> None:
    """No-op when no deadline was supplied."""
    if deadline is not None:
        deadline.check(operation)
