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
"""Session: server-side session management with pluggable stores.

Import concrete store types from the adapter package::

    from sessionlogin.session.adapters.memory import InMemorySessionStore
    from sessionlogin.session.adapters.file import FileSessionStore
"""

from sessionlogin.session.middleware import SessionMiddleware
from sessionlogin.session.ports.outbound import SessionStore
from sessionlogin.session.session import HttpSession

__all__ = [
    "HttpSession",
    "SessionMiddleware",
    "SessionStore",
]
