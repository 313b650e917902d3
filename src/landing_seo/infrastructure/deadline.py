"""Overall deadline shared by every call of a single run."""

from __future__ import annotations

import time


class Deadline:
    """A point in monotonic time after which no further calls may start.

    Parameters
    ----------
    timeout:
        Seconds from now until the deadline expires.
    """

    __slots__ = ("_expires_at", "_timeout")

    def __init__(self, timeout: float) -> None:
        if timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {timeout}")
        self._timeout = timeout
        self._expires_at = time.monotonic() + timeout

    @classmethod
    def from_timeout(cls, timeout: float | None) -> Deadline | None:
        """Return a ``Deadline`` for *timeout* seconds, or ``None`` if unset."""
        return cls(timeout) if timeout is not None else None

    @property
    def timeout(self) -> float:
        """The originally requested timeout in seconds."""
        return self._timeout

    def remaining(self) -> float:
        """Seconds left before expiry (never negative)."""
        return max(0.0, self._expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0.0

    def __repr__(self) -> str:
        return f"Deadline(timeout={self._timeout}, remaining={self.remaining():.2f})"
