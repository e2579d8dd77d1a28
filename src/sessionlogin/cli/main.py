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
"""sessionlogin CLI: run the demo and manage its sessions."""

from __future__ import annotations

import click

from sessionlogin.cli.console import print_banner


class SessionLoginCLI(click.Group):
    """Click group that shows the banner on help."""

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        print_banner()
        super().format_help(ctx, formatter)


@click.group(cls=SessionLoginCLI)
@click.version_option(package_name="sessionlogin")
def cli() -> None:
    """Session-backed login demo with memory and file session stores."""


from sessionlogin.cli.info import info_command  # noqa: E402
from sessionlogin.cli.run import run_command  # noqa: E402
from sessionlogin.cli.sessions import sessions_group  # noqa: E402

cli.add_command(run_command, name="run")
cli.add_command(info_command, name="info")
cli.add_command(sessions_group, name="sessions")
