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
"""Route handlers: home, login (form and submit), and logout.

Handlers only read and write the ``username`` attribute of the session that
:class:`~sessionlogin.session.middleware.SessionMiddleware` attached to the request.
"""

from __future__ import annotations

import html

from starlette.requests import Request
from starlette.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response
from starlette.routing import Route

from sessionlogin.kernel.exceptions import InvalidRequestException
from sessionlogin.session.session import HttpSession

USERNAME = "username"

_LOGIN_FORM = (
    "<form method='POST'>"
    "<input name='username' type='text' placeholder='Enter your username' />"
    "<button type='submit'>Login</button>"
    "</form>"
)


def _session(request: Request) -> HttpSession:
    return request.state.session


def _username(request: Request) -> str | None:
    """The logged-in username, or ``None`` when the session is anonymous."""
    username = _session(request).get_attribute(USERNAME)
    return username if isinstance(username, str) and username else None


async def home(request: Request) -> Response:
    username = _username(request)
    if username:
        body = f"You are logged in as: {html.escape(username)}<br /><a href='/logout'>Logout here</a>"
    else:
        body = "You are not logged in<br /><a href='/login'>Login Here</a>"
    return HTMLResponse(body)


async def login_form(request: Request) -> Response:
    if _username(request):
        return PlainTextResponse("You are already logged in!")
    return HTMLResponse(_LOGIN_FORM)


async def login_submit(request: Request) -> Response:
    """Store the submitted username in the session and send the client home."""
    form = await request.form()
    username = form.get(USERNAME)
    if not isinstance(username, str) or not username:
        raise InvalidRequestException("A username is required", code="USERNAME_REQUIRED")

    _session(request).set_attribute(USERNAME, username)
    return RedirectResponse("/", status_code=302)


async def logout(request: Request) -> Response:
    """Destroy an authenticated session, then redirect home.

    The redirect is returned only after the store has removed the record.
    """
    if _username(request):
        await _session(request).destroy()
    return RedirectResponse("/", status_code=302)


ROUTES: list[Route] = [
    Route("/", home, methods=["GET"]),
    Route("/login", login_form, methods=["GET"]),
    Route("/login", login_submit, methods=["POST"]),
    Route("/logout", logout, methods=["GET"]),
]
