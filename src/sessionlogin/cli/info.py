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
"""'sessionlogin info': display the effective configuration."""

from __future__ import annotations

from pathlib import Path

import click
from rich.table import Table

from sessionlogin.cli.console import console, print_banner, print_sources
from sessionlogin.cli.options import config_options, load_config, load_properties


@click.command()
@config_options
def info_command(config_dir: Path, profiles: tuple[str, ...]) -> None:
    """Display server and session settings after merging all config sources."""
    config = load_config(config_dir, profiles)
    properties = load_properties(config_dir, profiles, setup_logging=False)
    session = properties.session

    print_banner()

    table = Table(title="Configuration", show_header=False, border_style="dim")
    table.add_column("Key", style="info")
    table.add_column("Value")
    table.add_row("Server", f"{properties.server.host}:{properties.server.port}")
    table.add_row("Log format", properties.logging.format)
    table.add_row("Session store", session.store)
    if session.store == "file":
        table.add_row("Session directory", str(Path(session.file.path).resolve()))
    table.add_row("Cookie name", session.cookie_name)
    table.add_row("Session TTL", f"{session.ttl}s ({'rolling' if session.rolling else 'absolute'})")
    table.add_row("Expired-session purge", f"every {session.reap_interval}s" if session.reap_interval > 0 else "disabled")
    table.add_row("Signing secrets", str(len(session.secrets)))
    console.print(table)

    print_sources(config.loaded_sources)
