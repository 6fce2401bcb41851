"""Per-meeting exclusive locks.

The reminder poller and every command path take the meeting's lock for
the whole load-evaluate-mutate-save sequence, so overlapping poll cycles
and user edits cannot interleave on one meeting.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class MeetingLocks:
    """Hands out one asyncio.Lock per meeting id.

    A lock is dropped as soon as nobody holds or waits for it, so the
    registry only contains meetings that are currently being worked on.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._holders: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    def get(self, meeting_id: str) -> asyncio.Lock:
        """Get or create the lock for a meeting."""
        lock = self._locks.get(meeting_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[meeting_id] = lock
        return lock

    @asynccontextmanager
    async def hold(self, meeting_id: str) -> AsyncIterator[None]:
        """Hold the meeting's lock for the duration of the block."""
        lock = self.get(meeting_id)
        self._holders[meeting_id] = self._holders.get(meeting_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._release(meeting_id)

    def is_locked(self, meeting_id: str) -> bool:
        lock = self._locks.get(meeting_id)
        return lock is not None and lock.locked()

    def _release(self, meeting_id: str) -> None:
        remaining = self._holders[meeting_id] - 1
        if remaining:
            self._holders[meeting_id] = remaining
            return
        del self._holders[meeting_id]
        self._locks.pop(meeting_id, None)
