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
"""Exception handler: maps sessionlogin exceptions to bare status responses."""

from __future__ import annotations

import structlog
from starlette.requests import Request
from starlette.responses import Response

from sessionlogin.kernel.exceptions import (
    InvalidRequestException,
    SessionLoginException,
    SessionStoreException,
)

logger = structlog.get_logger("sessionlogin.web")

_STATUS_MAP: dict[type[SessionLoginException], int] = {
    InvalidRequestException: 400,
    SessionStoreException: 502,
}


def get_status_code(exc: Exception) -> int:
    """Map exception type to HTTP status code."""
    for exc_type, status in _STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return status
    return 500


async def exception_handler(request: Request, exc: Exception) -> Response:
    """Answer a :class:`SessionLoginException` with its status code and an empty body."""
    status = get_status_code(exc)
    code = exc.code if isinstance(exc, SessionLoginException) and exc.code else type(exc).__name__
    logger.warning(
        "request_rejected",
        method=request.method,
        path=request.url.path,
        status_code=status,
        code=code,
    )
    return Response(status_code=status)
