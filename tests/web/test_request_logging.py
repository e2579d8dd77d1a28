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
"""Tests for RequestLoggingMiddleware."""

from __future__ import annotations

from unittest.mock import patch

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from sessionlogin.web.app import RequestLoggingMiddleware


async def _ok(request: Request) -> PlainTextResponse:
    return PlainTextResponse("OK", status_code=201)


async def _fail(request: Request) -> PlainTextResponse:
    raise RuntimeError("boom")


def _client() -> TestClient:
    app = Starlette(
        routes=[Route("/", _ok), Route("/fail", _fail)],
        middleware=[Middleware(RequestLoggingMiddleware)],
    )
    return TestClient(app, raise_server_exceptions=False)


class TestRequestLoggingMiddleware:
    @patch("sessionlogin.web.app.logger")
    def test_logs_completed_request(self, mock_logger):
        resp = _client().get("/")

        assert resp.status_code == 201
        assert resp.text == "OK"
        event, fields = mock_logger.info.call_args.args[0], mock_logger.info.call_args.kwargs
        assert event == "http_request"
        assert fields["method"] == "GET"
        assert fields["path"] == "/"
        assert fields["status_code"] == 201
        assert fields["duration_ms"] >= 0

    @patch("sessionlogin.web.app.logger")
    def test_logs_and_reraises_failures(self, mock_logger):
        resp = _client().get("/fail")

        assert resp.status_code == 500
        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.args[0] == "http_request_failed"
        assert mock_logger.error.call_args.kwargs["error_type"] == "RuntimeError"
        mock_logger.info.assert_not_called()
