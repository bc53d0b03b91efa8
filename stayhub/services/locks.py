"""Per-apartment write locks."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class ApartmentLocks:
    """One ``asyncio.Lock`` per apartment id with a write in flight.

    Held across "re-read, check, write, commit" so two requests for the same
    apartment cannot both pass their checks before either writes. A lock is
    dropped once nobody holds or waits for it.
    Only serialises callers inside one process; the repository's advisory
    lock covers several processes on PostgreSQL.
    """

    def __init__(self) -> None:
        self._locks: dict[int, asyncio.Lock] = {}
        self._users: dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, apartment_id: int) -> AsyncIterator[None]:
        lock = self._locks.get(apartment_id)
        if lock is None:
            lock = self._locks[apartment_id] = asyncio.Lock()
        self._users[apartment_id] = self._users.get(apartment_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[apartment_id] -= 1
            if not self._users[apartment_id]:
                del self._users[apartment_id]
                del self._locks[apartment_id]


apartment_locks = ApartmentLocks()
