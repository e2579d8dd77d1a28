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
"""Shared fixtures: one application per session store variant."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from starlette.applications import Starlette
from starlette.testclient import TestClient

from sessionlogin.config.properties import AppProperties, FileStoreProperties, SessionProperties
from sessionlogin.session.ports.outbound import SessionStore
from sessionlogin.web.app import create_app


@pytest.fixture
def make_properties(tmp_path: Path) -> Callable[..., AppProperties]:
    """Build AppProperties whose file store lives under ``tmp_path``."""

    def _make(store: str = "memory", **session_kwargs) -> AppProperties:
        session = SessionProperties(
            store=store,
            file=FileStoreProperties(path=str(tmp_path / "sessions")),
            **session_kwargs,
        )
        return AppProperties(session=session)

    return _make


@pytest.fixture
def ids_of() -> Callable[[SessionStore], list[str]]:
    """Read the live session ids of a store from synchronous test code."""

    def _ids(store: SessionStore) -> list[str]:
        return asyncio.run(store.ids())

    return _ids


@pytest.fixture(params=["memory", "file"])
def app(request: pytest.FixtureRequest, make_properties: Callable[..., AppProperties]) -> Starlette:
    return create_app(make_properties(store=request.param))


@pytest.fixture
def store(app: Starlette) -> SessionStore:
    return app.state.session_store


@pytest.fixture
def client(app: Starlette) -> Iterator[TestClient]:
    with TestClient(app) as c:
        yield c
