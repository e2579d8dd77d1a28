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
"""Aggregate application properties passed explicitly at startup."""

from __future__ import annotations

from dataclasses import dataclass, field

from sessionlogin.config.properties.logging import LoggingProperties
from sessionlogin.config.properties.server import ServerProperties
from sessionlogin.config.properties.session import SessionProperties
from sessionlogin.core.config import Config


@dataclass
class AppProperties:
    """Everything the application needs at startup, bound once from :class:`Config`."""

    server: ServerProperties = field(default_factory=ServerProperties)
    session: SessionProperties = field(default_factory=SessionProperties)
    logging: LoggingProperties = field(default_factory=LoggingProperties)

    @classmethod
    def from_config(cls, config: Config) -> AppProperties:
        return cls(
            server=config.bind(ServerProperties),
            session=config.bind(SessionProperties),
            logging=config.bind(LoggingProperties),
        )
