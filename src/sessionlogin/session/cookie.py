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
"""Session cookie signing: the cookie carries a signed session id and nothing else."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from itsdangerous import BadSignature, Signer

_logger = logging.getLogger(__name__)

_SALT = "sessionlogin.session-cookie"


class SessionCookieSigner:
    """Signs and verifies session ids with HMAC.

    ``secrets`` are ordered oldest to newest: any of them verifies an incoming
    cookie, the newest signs outgoing ones, which allows rotating the secret
    without logging everybody out.
    """

    def __init__(self, secrets: str | Sequence[str]) -> None:
        keys = [secrets] if isinstance(secrets, str) else list(secrets)
        if not keys or not all(keys):
            raise ValueError("At least one non-empty session secret is required")
        self._signer = Signer(keys, salt=_SALT)

    def sign(self, session_id: str) -> str:
        return self._signer.sign(session_id).decode("ascii")

    def unsign(self, cookie_value: str) -> str | None:
        """Return the session id, or ``None`` if the signature does not verify."""
        try:
            return self._signer.unsign(cookie_value).decode("ascii")
        except (BadSignature, UnicodeError):
            _logger.debug("Rejected session cookie with an invalid signature")
            return None
