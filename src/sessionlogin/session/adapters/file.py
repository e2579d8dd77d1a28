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
"""File-backed session store: one JSON document per session."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import re
import tempfile
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, cast

from sessionlogin.kernel.exceptions import SessionStoreException

_logger = logging.getLogger(__name__)

_VALID_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,128}$")

R = TypeVar("R")


class FileSessionStore:
    """Session store persisting each record as ``<path>/<session_id><extension>``.

    File layout::

        {"data": {...session attributes...}, "expires_at": 1760745600.0}

    Writes go to a temporary file in the same directory and are moved into
    place with :func:`os.replace`, so concurrent readers see either the old or
    the new document, never a partial one. Expiry uses wall-clock time because
    records outlive the process. Blocking file I/O runs in the default executor.
    """

    def __init__(self, path: str | Path = "./sessions", extension: str = ".json") -> None:
        if not extension.startswith("."):
            raise ValueError(f"File extension must start with '.', got '{extension}'")
        self._path = Path(path)
        self._extension = extension
        try:
            self._path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SessionStoreException(
                f"Cannot create session directory '{self._path}'",
                code="SESSION_DIR_UNAVAILABLE",
                context={"path": str(self._path)},
            ) from exc

    @property
    def path(self) -> Path:
        return self._path

    def _file_for(self, session_id: str) -> Path:
        if not _VALID_ID_RE.match(session_id):
            raise SessionStoreException(
                "Invalid session id",
                code="INVALID_SESSION_ID",
                context={"session_id": session_id},
            )
        return self._path / f"{session_id}{self._extension}"

    async def _run(self, func: Callable[..., R], *args: Any) -> R:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    async def get(self, session_id: str) -> dict[str, Any] | None:
        """Read the record; missing, expired, or unreadable files yield ``None``."""
        return await self._run(self._read_live, self._file_for(session_id))

    async def save(self, session_id: str, data: dict[str, Any], ttl: int) -> None:
        """Serialize and atomically write the record with a TTL in seconds."""
        document = {"data": data, "expires_at": time.time() + ttl}
        await self._run(self._write, self._file_for(session_id), document)

    async def touch(self, session_id: str, ttl: int) -> bool:
        """Rewrite the expiry of a live record."""
        return await self._run(self._touch, self._file_for(session_id), ttl)

    async def delete(self, session_id: str) -> None:
        """Remove the session file if it exists."""
        await self._run(self._unlink, self._file_for(session_id))

    async def ids(self) -> list[str]:
        return await self._run(self._live_ids)

    async def clear(self) -> None:
        await self._run(self._clear)

    async def purge_expired(self) -> int:
        """Remove expired and corrupt session files."""
        return await self._run(self._purge_expired)

    # --- blocking helpers (executor threads) ---

    def _session_files(self) -> list[Path]:
        return sorted(self._path.glob(f"*{self._extension}"))

    def _load(self, file: Path) -> dict[str, Any] | None:
        """Return the raw document, ``None`` if missing, raising ``ValueError`` if corrupt."""
        try:
            raw = file.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        document = json.loads(raw)
        if not isinstance(document, dict) or not isinstance(document.get("data"), dict):
            raise ValueError("session document must hold a 'data' object")
        float(document["expires_at"])
        return cast(dict[str, Any], document)

    def _read_live(self, file: Path) -> dict[str, Any] | None:
        try:
            document = self._load(file)
        except (ValueError, KeyError, TypeError):
            _logger.warning("Ignoring unreadable session file '%s'", file.name)
            return None
        if document is None:
            return None
        if time.time() > float(document["expires_at"]):
            self._unlink(file)
            return None
        return cast(dict[str, Any], document["data"])

    def _write(self, file: Path, document: dict[str, Any]) -> None:
        fd, tmp = tempfile.mkstemp(dir=self._path, prefix=".tmp-", suffix=self._extension + ".part")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f)
            os.replace(tmp, file)
        except BaseException:
            self._unlink(Path(tmp))
            raise

    def _touch(self, file: Path, ttl: int) -> bool:
        data = self._read_live(file)
        if data is None:
            return False
        self._write(file, {"data": data, "expires_at": time.time() + ttl})
        return True

    @staticmethod
    def _unlink(file: Path) -> None:
        file.unlink(missing_ok=True)

    def _live_ids(self) -> list[str]:
        now = time.time()
        live: list[str] = []
        for file in self._session_files():
            try:
                document = self._load(file)
            except (ValueError, KeyError, TypeError):
                continue
            if document is not None and float(document["expires_at"]) >= now:
                live.append(file.name.removesuffix(self._extension))
        return live

    def _clear(self) -> None:
        for file in self._session_files():
            self._unlink(file)

    def _purge_expired(self) -> int:
        now = time.time()
        removed = 0
        for file in self._session_files():
            try:
                document = self._load(file)
            except (ValueError, KeyError, TypeError):
                document = {"expires_at": 0}
            if document is not None and float(document["expires_at"]) < now:
                self._unlink(file)
                removed += 1
        return removed
