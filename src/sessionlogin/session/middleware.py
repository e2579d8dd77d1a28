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
"""SessionMiddleware: attaches a server-side session to every HTTP request."""

from __future__ import annotations

import structlog
from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from sessionlogin.config.properties.session import SessionProperties
from sessionlogin.session.cookie import SessionCookieSigner
from sessionlogin.session.ports.outbound import SessionStore
from sessionlogin.session.session import HttpSession, generate_session_id

logger = structlog.get_logger("sessionlogin.session")


class SessionMiddleware:
    """Pure ASGI middleware keeping session records in a :class:`SessionStore`.

    The cookie holds only the signed session id. On each request the record
    is loaded (or a new, empty session started) and exposed as
    ``request.state.session``. When the handler starts its response the
    session is committed before the first message reaches the client:

    - invalidated sessions are deleted and their cookie is cleared;
    - modified sessions are saved with a fresh TTL;
    - untouched new sessions are dropped unless ``save_uninitialized`` is set;
    - untouched existing sessions have their expiry extended when ``rolling``.

    The cookie is issued when a new session is saved, and again on every
    response for a live session when ``rolling`` is enabled.
    """

    def __init__(self, app: ASGIApp, store: SessionStore, properties: SessionProperties | None = None) -> None:
        self.app = app
        self.store = store
        self._props = properties or SessionProperties()
        self._signer = SessionCookieSigner(self._props.secrets)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        connection = HTTPConnection(scope)
        session, had_cookie = await self._load(connection)
        connection.state.session = session
        committed = False

        async def send_with_session(message: Message) -> None:
            nonlocal committed
            if message["type"] == "http.response.start":
                committed = True
                await self._commit(session, had_cookie, message)
            await send(message)

        try:
            await self.app(scope, receive, send_with_session)
        except Exception:
            # The error response is sent by an outer middleware; keep the
            # handler's changes anyway.
            if not committed:
                await self._persist(session)
            raise

    async def _load(self, connection: HTTPConnection) -> tuple[HttpSession, bool]:
        """Return the session for the request and whether it carried a cookie."""
        cookie_value = connection.cookies.get(self._props.cookie_name)
        if cookie_value:
            session_id = self._signer.unsign(cookie_value)
            if session_id is None:
                logger.warning("session_cookie_rejected", path=connection.url.path)
            else:
                data = await self.store.get(session_id)
                if data is not None:
                    return HttpSession(session_id, data, store=self.store), True

        return HttpSession(generate_session_id(), is_new=True, store=self.store), bool(cookie_value)

    async def _commit(self, session: HttpSession, had_cookie: bool, message: Message) -> None:
        persisted = await self._persist(session)
        headers = MutableHeaders(scope=message)
        if session.invalidated:
            if had_cookie:
                headers.append("set-cookie", self._cookie_header(None))
        elif persisted and (session.is_new or self._props.rolling):
            headers.append("set-cookie", self._cookie_header(session))

    async def _persist(self, session: HttpSession) -> bool:
        """Save, touch, or delete the record. Returns ``True`` if a live record remains."""
        if session.invalidated:
            await self.store.delete(session.id)
            return False

        if session.modified or (session.is_new and self._props.save_uninitialized):
            await self.store.save(session.id, session.get_data(), self._props.ttl)
            if session.is_new:
                logger.info("session_created", session=session.id[:8])
            return True

        if not session.is_new and self._props.rolling:
            return await self.store.touch(session.id, self._props.ttl)

        return not session.is_new

    def _cookie_header(self, session: HttpSession | None) -> str:
        """Render the ``Set-Cookie`` value issuing *session*, or clearing the cookie for ``None``."""
        carrier = Response()
        if session is None:
            carrier.delete_cookie(self._props.cookie_name, path=self._props.cookie_path)
        else:
            carrier.set_cookie(
                self._props.cookie_name,
                self._signer.sign(session.id),
                max_age=self._props.ttl,
                path=self._props.cookie_path,
                secure=self._props.cookie_secure,
                httponly=True,
                samesite=self._props.cookie_same_site.lower(),  # type: ignore[arg-type]
            )
        return carrier.headers["set-cookie"]
