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
"""Background task that periodically purges expired session records."""

from __future__ import annotations

import asyncio
import contextlib

import structlog

from sessionlogin.session.ports.outbound import SessionStore

logger = structlog.get_logger("sessionlogin.session")


class SessionReaper:
    """Calls :meth:`SessionStore.purge_expired` every ``interval`` seconds.

    Started and stopped by the application lifespan. An interval of ``0``
    makes :meth:`start` a no-op.
    """

    def __init__(self, store: SessionStore, interval: float) -> None:
        self._store = store
        self._interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self._interval <= 0 or self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def reap_once(self) -> int:
        removed = await self._store.purge_expired()
        if removed:
            logger.info("sessions_purged", removed=removed)
        return removed

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self.reap_once()
            except Exception as exc:
                logger.error("session_purge_failed", error=str(exc), error_type=type(exc).__name__)
