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
"""'sessionlogin sessions': inspect and maintain the configured session store."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click

from sessionlogin.cli.console import console
from sessionlogin.cli.options import config_options, load_properties
from sessionlogin.session.factory import create_session_store
from sessionlogin.session.ports.outbound import SessionStore


def _store(config_dir: Path, profiles: tuple[str, ...]) -> SessionStore:
    properties = load_properties(config_dir, profiles, setup_logging=False)
    if properties.session.store == "memory":
        console.print("[warning]The memory store lives inside the server process; nothing to inspect.[/warning]")
        console.print("[dim]Use --profile file to work with the file store.[/dim]")
        raise SystemExit(1)
    return create_session_store(properties.session)


@click.group()
def sessions_group() -> None:
    """Inspect and maintain stored sessions."""


@sessions_group.command("list")
@config_options
def list_command(config_dir: Path, profiles: tuple[str, ...]) -> None:
    """List the ids of live sessions."""
    store = _store(config_dir, profiles)
    ids = asyncio.run(store.ids())
    for session_id in ids:
        console.print(session_id)
    console.print(f"[info]{len(ids)} live session(s)[/info]")


@sessions_group.command("purge")
@config_options
def purge_command(config_dir: Path, profiles: tuple[str, ...]) -> None:
    """Remove expired sessions."""
    store = _store(config_dir, profiles)
    removed = asyncio.run(store.purge_expired())
    console.print(f"[success]Removed {removed} expired session(s)[/success]")


@sessions_group.command("clear")
@config_options
@click.confirmation_option(prompt="Remove every stored session?")
def clear_command(config_dir: Path, profiles: tuple[str, ...]) -> None:
    """Remove all sessions, logging everybody out."""
    store = _store(config_dir, profiles)
    asyncio.run(store.clear())
    console.print("[success]All sessions removed[/success]")
