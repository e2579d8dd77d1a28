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
"""Session configuration properties."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sessionlogin.core.config import config_properties

SESSION_STORES = ("memory", "file")
_SAME_SITE_VALUES = ("lax", "strict", "none")


@dataclass
class FileStoreProperties:
    """File store tuning (sessionlogin.session.file.*)."""

    path: str = "./sessions"
    extension: str = ".json"


@config_properties(prefix="sessionlogin.session")
@dataclass
class SessionProperties:
    """Session middleware and store configuration (sessionlogin.session.*).

    ``secret`` may be a single string or a list of strings. Every listed
    secret verifies incoming cookies; the last one signs new cookies.
    """

    store: str = "memory"
    secret: Any = "this is a demo"
    cookie_name: str = "sessionlogin.sid"
    cookie_path: str = "/"
    cookie_secure: bool = False
    cookie_same_site: str = "lax"
    ttl: int = 3600
    rolling: bool = True
    save_uninitialized: bool = False
    reap_interval: int = 3600
    file: FileStoreProperties = field(default_factory=FileStoreProperties)

    def __post_init__(self) -> None:
        if self.store not in SESSION_STORES:
            raise ValueError(f"Unknown session store '{self.store}'; expected one of {', '.join(SESSION_STORES)}")
        if not self.secrets:
            raise ValueError("sessionlogin.session.secret must not be empty")
        if self.ttl <= 0:
            raise ValueError("sessionlogin.session.ttl must be a positive number of seconds")
        if self.cookie_same_site.lower() not in _SAME_SITE_VALUES:
            raise ValueError(f"Invalid cookie-same-site '{self.cookie_same_site}'")

    @property
    def secrets(self) -> list[str]:
        """Configured secrets as a list, oldest first."""
        if isinstance(self.secret, str):
            return [self.secret] if self.secret else []
        return [str(s) for s in self.secret or [] if s]
