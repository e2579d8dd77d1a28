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
"""Web application factory built on Starlette."""

from __future__ import annotations

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from sessionlogin.config.properties.app import AppProperties
from sessionlogin.kernel.exceptions import SessionLoginException
from sessionlogin.session.factory import create_session_store
from sessionlogin.session.middleware import SessionMiddleware
from sessionlogin.session.ports.outbound import SessionStore
from sessionlogin.session.reaper import SessionReaper
from sessionlogin.web.errors import exception_handler
from sessionlogin.web.routes import ROUTES

logger = structlog.get_logger("sessionlogin.web")


class RequestLoggingMiddleware:
    """Logs method, path, status code and duration of every HTTP request."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        status_code = 500

        async def send_with_status(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_with_status)
        except Exception as exc:
            logger.error(
                "http_request_failed",
                method=scope["method"],
                path=scope["path"],
                duration_ms=_elapsed_ms(start),
                error_type=type(exc).__name__,
            )
            raise

        logger.info(
            "http_request",
            method=scope["method"],
            path=scope["path"],
            status_code=status_code,
            duration_ms=_elapsed_ms(start),
        )


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def create_app(
    properties: AppProperties | None = None,
    store: SessionStore | None = None,
    debug: bool = False,
) -> Starlette:
    """Create the login application with its session pipeline.

    Args:
        properties: Startup configuration; defaults to the in-memory variant.
        store: Session store to use instead of the one named in ``properties``.
        debug: Starlette debug mode (tracebacks in 500 responses).

    Requests pass through request logging, then the session middleware, then
    the route handler. The lifespan runs the expired-session reaper.
    """
    props = properties or AppProperties()
    session_store = store if store is not None else create_session_store(props.session)
    reaper = SessionReaper(session_store, props.session.reap_interval)

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        reaper.start()
        logger.info(
            "application_starting",
            store=props.session.store,
            reap_interval=props.session.reap_interval,
        )
        try:
            yield
        finally:
            await reaper.stop()

    app = Starlette(
        debug=debug,
        routes=ROUTES,
        middleware=[
            Middleware(RequestLoggingMiddleware),
            Middleware(SessionMiddleware, store=session_store, properties=props.session),
        ],
        exception_handlers={SessionLoginException: exception_handler},
        lifespan=lifespan,
    )
    app.state.properties = props
    app.state.session_store = session_store
    app.state.session_reaper = reaper
    return app
