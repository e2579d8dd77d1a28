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
"""Builds the configured session store."""

from __future__ import annotations

from sessionlogin.config.properties.session import SessionProperties
from sessionlogin.session.adapters.file import FileSessionStore
from sessionlogin.session.adapters.memory import InMemorySessionStore
from sessionlogin.session.ports.outbound import SessionStore


def create_session_store(properties: SessionProperties) -> SessionStore:
    """Return the store named by ``sessionlogin.session.store``."""
    if properties.store == "file":
        return FileSessionStore(path=properties.file.path, extension=properties.file.extension)
    return InMemorySessionStore()

