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
"""HttpSession: the per-request view of a server-side session record."""

from __future__ import annotations

import secrets
from typing import Any

import structlog

from sessionlogin.session.ports.outbound import SessionStore

logger = structlog.get_logger("sessionlogin.session")

_ID_BYTES = 24


def generate_session_id() -> str:
    """Return a new unguessable session id (URL-safe, 32 characters)."""
    return secrets.token_urlsafe(_ID_BYTES)


class HttpSession:
    """Session data for one request, tracking whether it needs persisting.

    Attribute changes are written back by
    :class:`~sessionlogin.session.middleware.SessionMiddleware` once the handler
    has produced its response. :meth:`destroy` acts on the store immediately
    and must be awaited by the handler.
    """

    def __init__(
        self,
        session_id: str,
        data: dict[str, Any] | None = None,
        *,
        is_new: bool = False,
        store: SessionStore | None = None,
    ) -> None:
        self._id = session_id
        self._data: dict[str, Any] = data if data is not None else {}
        self._is_new = is_new
        self._store = store
        self._invalidated = False
        self._modified = False

    @property
    def id(self) -> str:
        return self._id

    @property
    def is_new(self) -> bool:
        """``True`` while the record has never been written to the store."""
        return self._is_new

    @property
    def invalidated(self) -> bool:
        return self._invalidated

    @property
    def modified(self) -> bool:
        return self._modified

    def get_attribute(self, name: str) -> Any | None:
        return self._data.get(name)

    def set_attribute(self, name: str, value: Any) -> None:
        self._data[name] = value
        self._modified = True

    def get_data(self) -> dict[str, Any]:
        """Return the record as it will be saved."""
        return self._data

    def invalidate(self) -> None:
        """Drop the session once the response is committed."""
        self._invalidated = True

    async def destroy(self) -> None:
        """Delete the record from the store now and invalidate this session.

        Returns once the store has removed the record, so a handler that
        awaits it can respond knowing the session is gone.
        """
        if self._store is not None:
            await self._store.delete(self._id)
        self.invalidate()
        logger.info("session_destroyed", session=self._id[:8])
