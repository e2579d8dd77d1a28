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
"""Options shared by commands that load configuration."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from sessionlogin.config.properties.app import AppProperties
from sessionlogin.core.config import Config
from sessionlogin.logging.setup import configure_logging

F = TypeVar("F", bound=Callable[..., Any])


def config_options(func: F) -> F:
    """Add ``--profile`` (repeatable) and ``--config-dir`` to a command."""
    func = click.option(
        "--config-dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=Path("."),
        show_default=True,
        help="Directory holding sessionlogin.yaml and profile overlays.",
    )(func)
    func = click.option(
        "--profile",
        "-p",
        "profiles",
        multiple=True,
        help="Activate a configuration profile (e.g. 'file' for the file store).",
    )(func)
    return func


def load_config(config_dir: Path, profiles: tuple[str, ...]) -> Config:
    return Config.from_sources(config_dir, active_profiles=list(profiles))


def load_properties(config_dir: Path, profiles: tuple[str, ...], setup_logging: bool = True) -> AppProperties:
    """Bind the startup properties and, unless told otherwise, configure logging from them.

    Invalid values are reported as a usage error.
    """
    try:
        properties = AppProperties.from_config(load_config(config_dir, profiles))
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc
    if setup_logging:
        configure_logging(properties.logging)
    return properties
