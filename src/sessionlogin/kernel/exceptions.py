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
"""Exception hierarchy for sessionlogin.

Handlers raise these; :mod:`sessionlogin.web.errors` maps them to HTTP status
codes. Anything outside this hierarchy propagates to the ASGI server.
"""

from __future__ import annotations

from typing import Any


class SessionLoginException(Exception):
    """Base exception for all sessionlogin errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "USERNAME_REQUIRED"), logged
            when the error is turned into a response.
        context: Extra key-value pairs describing the failure.
    """

    def __init__(self, message: str, code: str | None = None, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict[str, Any] = context if context is not None else {}


class InvalidRequestException(SessionLoginException):
    """The client sent a request the application cannot act on (e.g. an empty username)."""


class SessionStoreException(SessionLoginException):
    """A session store could not be used (unusable directory, invalid session id)."""
