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
"""Logging configuration properties."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sessionlogin.core.config import config_properties

LOG_FORMATS = ("console", "json")


@config_properties(prefix="sessionlogin.logging")
@dataclass
class LoggingProperties:
    """Renderer and levels for log output (sessionlogin.logging.*).

    ``level`` maps logger names to level names; ``root`` applies to every
    logger without its own entry.
    """

    format: str = "console"
    level: dict[str, str] = field(default_factory=lambda: {"root": "INFO"})

    def __post_init__(self) -> None:
        self.format = self.format.lower()
        if self.format not in LOG_FORMATS:
            raise ValueError(f"Invalid logging format '{self.format}'; expected one of {', '.join(LOG_FORMATS)}")
        if isinstance(self.level, str):
            self.level = {"root": self.level}
        self.level = {name: str(value).upper() for name, value in (self.level or {}).items()}
        for name, value in self.level.items():
            if not isinstance(logging.getLevelName(value), int):
                raise ValueError(f"Invalid log level '{value}' for logger '{name}'")
