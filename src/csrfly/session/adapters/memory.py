# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Process-local session store with time-to-live expiry."""

from __future__ import annotations

import asyncio
import copy
import time
from collections.abc import Callable
from typing import Any, NamedTuple


class _Entry(NamedTuple):
    data: dict[str, Any]
    expires_at: float


class InMemorySessionStore:
    """Keeps sessions in a dict guarded by an :class:`asyncio.Lock`.

    Intended for tests and single-process deployments.  Every ``save``
    sweeps expired entries, so sessions that are never read again do not
    accumulate.  Data is deep-copied in both directions.

    Args:
        clock: Monotonic time source, in seconds.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: dict[str, _Entry] = {}
        self._lock = asyncio.Lock()
        self._clock = clock

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, session_id: str) -> dict[str, Any] | None:
        async with self._lock:
            entry = self._entries.get(session_id)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[session_id]
                return None
            return copy.deepcopy(entry.data)

    async def save(self, session_id: str, data: dict[str, Any], ttl: int) -> None:
        async with self._lock:
            now = self._clock()
            self._sweep(now)
            self._entries[session_id] = _Entry(copy.deepcopy(data), now + ttl)

    async def delete(self, session_id: str) -> None:
        async with self._lock:
            self._entries.pop(session_id, None)

    def _sweep(self, now: float) -> None:
        expired = [sid for sid, entry in self._entries.items() if entry.expires_at <= now]
        for sid in expired:
            del self._entries[sid]
