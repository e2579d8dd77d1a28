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
"""In-memory session store with TTL-based expiry."""

from __future__ import annotations

import asyncio
import copy
import time
from typing import Any


class InMemorySessionStore:
    """In-memory session store with TTL support and asyncio.Lock for safety.

    Records are deep-copied on the way in and out, so a handler mutating its
    session never changes stored state until the session is saved.
    Suitable for development, testing, and single-process applications.
    """

    def __init__(self) -> None:
        self._store: dict[str, tuple[dict[str, Any], float]] = {}
        self._lock = asyncio.Lock()

    async def get(self, session_id: str) -> dict[str, Any] | None:
        """Retrieve session data. Returns ``None`` if missing or expired."""
        async with self._lock:
            entry = self._live_entry(session_id)
            if entry is None:
                return None
            return copy.deepcopy(entry[0])

    async def save(self, session_id: str, data: dict[str, Any], ttl: int) -> None:
        """Store session data with a TTL in seconds."""
        async with self._lock:
            expires_at = time.monotonic() + ttl
            self._store[session_id] = (copy.deepcopy(data), expires_at)

    async def touch(self, session_id: str, ttl: int) -> bool:
        """Extend the expiry of a live session."""
        async with self._lock:
            entry = self._live_entry(session_id)
            if entry is None:
                return False
            self._store[session_id] = (entry[0], time.monotonic() + ttl)
            return True

    async def delete(self, session_id: str) -> None:
        """Remove a session."""
        async with self._lock:
            self._store.pop(session_id, None)

    async def ids(self) -> list[str]:
        async with self._lock:
            now = time.monotonic()
            return [sid for sid, (_, expires_at) in self._store.items() if expires_at >= now]

    async def clear(self) -> None:
        async with self._lock:
            self._store.clear()

    async def purge_expired(self) -> int:
        """Drop every expired entry."""
        async with self._lock:
            now = time.monotonic()
            expired = [sid for sid, (_, expires_at) in self._store.items() if expires_at < now]
            for sid in expired:
                del self._store[sid]
            return len(expired)

    def _live_entry(self, session_id: str) -> tuple[dict[str, Any], float] | None:
        """Return the entry if present and unexpired, evicting it otherwise. Caller holds the lock."""
        entry = self._store.get(session_id)
        if entry is None:
            return None
        if time.monotonic() > entry[1]:
            del self._store[session_id]
            return None
        return entry
