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
"""Rich console and the output helpers shared by CLI commands."""

from __future__ import annotations

from rich.console import Console
from rich.theme import Theme

from sessionlogin import __version__

console = Console(
    theme=Theme({"brand": "bold magenta", "info": "cyan", "success": "green", "warning": "bold yellow"}),
    highlight=False,
)


def print_banner() -> None:
    console.print(f"[brand]sessionlogin[/brand] [dim]v{__version__}[/dim]")
    console.print("[dim]Login sessions kept server-side, in memory or on disk.[/dim]\n")


def print_sources(sources: list[str]) -> None:
    """List merged configuration sources, lowest precedence first."""
    console.print("[dim]Configuration sources:[/dim]")
    for source in sources:
        console.print(f"  [dim]{source}[/dim]")
