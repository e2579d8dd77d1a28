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
"""Uvicorn ASGI server adapter."""

from __future__ import annotations

import socket
from typing import Any

import structlog
import uvicorn

from sessionlogin.config.properties.server import ServerProperties

logger = structlog.get_logger("sessionlogin.server")


class ListeningServer(uvicorn.Server):
    """Uvicorn server that announces itself once its sockets are bound."""

    async def startup(self, sockets: list[socket.socket] | None = None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            logger.info(
                "application_started",
                message="Application started, listening...",
                host=self.config.host,
                port=self.config.port,
            )


class UvicornServerAdapter:
    """Serves the application instance in a single Uvicorn process.

    Sessions in the memory store are per-process, so the app object is served
    directly rather than by import path with workers. Uvicorn's own log
    records propagate to the root logger configured by
    :func:`sessionlogin.logging.setup.configure_logging`.
    """

    def uvicorn_config(self, app: Any, config: ServerProperties) -> uvicorn.Config:
        return uvicorn.Config(
            app,
            host=config.host,
            port=config.port,
            log_config=None,
            access_log=False,
        )

    def serve(self, app: Any, config: ServerProperties) -> None:
        """Run until interrupted (blocking)."""
        ListeningServer(self.uvicorn_config(app, config)).run()
