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
"""Tests for the exception-to-status mapping."""

from __future__ import annotations

import pytest
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.routing import Route
from starlette.testclient import TestClient

from sessionlogin.kernel.exceptions import (
    InvalidRequestException,
    SessionLoginException,
    SessionStoreException,
)
from sessionlogin.web.errors import exception_handler, get_status_code


class TestStatusMapping:
    @pytest.mark.parametrize(
        ("exc", "status"),
        [
            (InvalidRequestException("x"), 400),
            (SessionStoreException("x"), 502),
            (SessionLoginException("x"), 500),
            (RuntimeError("x"), 500),
        ],
    )
    def test_status_codes(self, exc, status):
        assert get_status_code(exc) == status


class TestExceptionHandler:
    def test_empty_body_with_mapped_status(self):
        async def _reject(request: Request):
            raise InvalidRequestException("A username is required", code="USERNAME_REQUIRED")

        app = Starlette(
            routes=[Route("/", _reject)],
            exception_handlers={SessionLoginException: exception_handler},
        )
        resp = TestClient(app).get("/")
        assert resp.status_code == 400
        assert resp.content == b""

