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
"""'sessionlogin run': start the application server."""

from __future__ import annotations

from pathlib import Path

import click

from sessionlogin.cli.console import console
from sessionlogin.cli.options import config_options, load_properties
from sessionlogin.server.adapters.uvicorn import UvicornServerAdapter
from sessionlogin.web.app import create_app


@click.command()
@config_options
@click.option("--host", default=None, help="Bind address (default: from configuration).")
@click.option("--port", default=None, type=int, help="Port number (default: from configuration, 3000).")
def run_command(config_dir: Path, profiles: tuple[str, ...], host: str | None, port: int | None) -> None:
    """Start the login application."""
    properties = load_properties(config_dir, profiles)
    if host is not None:
        properties.server.host = host
    if port is not None:
        properties.server.port = port

    console.print(
        f"[info]Starting[/info] with the [brand]{properties.session.store}[/brand] session store "
        f"on {properties.server.host}:{properties.server.port}"
    )
    app = create_app(properties)
    UvicornServerAdapter().serve(app, properties.server)
