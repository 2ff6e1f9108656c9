from __future__ import annotations

import time

from spriteforge.core.errors import GenerationCancelled


class Deadline:
    """Cooperative time limit checked between drawing passes.

    A deadline can also be cancelled explicitly from another thread.
    """

    def __init__(self, seconds: float | None = None) -> None:
        self._expires_at = None if seconds is None else time.monotonic() + float(seconds)
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def expired(self) -> bool:
        if self._cancelled:
            return True
        return self._expires_at is not None and time.monotonic() >= self._expires_at

    def remaining(self) -> float | None:
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - time.monotonic())

    def check(self, stage: str = "") -> None:
        if self.expired:
            where = f" during {stage}" if stage else ""
            raise GenerationCancelled(f"generation cancelled{where}")
