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
"""Session store protocol."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SessionStore(Protocol):
    """Abstract session persistence interface.

    All session backends (in-memory, file) implement this protocol. Expired
    records behave exactly like missing ones for every read operation.
    """

    async def get(self, session_id: str) -> dict[str, Any] | None:
        """Return a copy of the record, or ``None`` if missing or expired."""
        ...

    async def save(self, session_id: str, data: dict[str, Any], ttl: int) -> None:
        """Create or replace the record, expiring *ttl* seconds from now."""
        ...

    async def touch(self, session_id: str, ttl: int) -> bool:
        """Push the expiry of an existing record out by *ttl* seconds.

        Returns ``False`` if the record is missing or already expired.
        """
        ...

    async def delete(self, session_id: str) -> None:
        """Remove a record. Deleting a missing record is not an error."""
        ...

    async def ids(self) -> list[str]:
        """Return the ids of all live (non-expired) records."""
        ...

    async def clear(self) -> None:
        """Remove every record."""
        ...

    async def purge_expired(self) -> int:
        """Remove expired records and return how many were removed."""
        ...
