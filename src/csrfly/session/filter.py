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
"""SessionFilter: cookie-addressed sessions for the CSRF salt."""

from __future__ import annotations

import secrets
from typing import Any

import structlog

from csrfly.session.ports.outbound import SessionStore
from csrfly.session.session import HttpSession
from csrfly.web.filters import OncePerRequestFilter
from csrfly.web.ports.filter import CallNext

logger = structlog.get_logger("csrfly.session")


class SessionFilter(OncePerRequestFilter):
    """Attaches an :class:`HttpSession` to ``request.state.session``.

    The session named by the cookie is loaded from the store; an unknown or
    absent cookie yields a fresh, empty session.  After the response:

    * invalidated sessions are deleted and their cookie cleared;
    * modified sessions are saved, and a new one gets its cookie;
    * untouched new sessions are dropped without a store write or cookie.
    """

    def __init__(
        self,
        store: SessionStore,
        cookie_name: str = "CSRFLY_SESSION",
        ttl: int = 1800,
        *,
        cookie_secure: bool = False,
        cookie_samesite: str = "lax",
    ) -> None:
        super().__init__()
        self._store = store
        self._cookie_name = cookie_name
        self._ttl = ttl
        self._cookie_secure = cookie_secure
        self._cookie_samesite = cookie_samesite

    async def filter_internal(self, request: Any, call_next: CallNext) -> Any:
        session = await self._load(request)
        request.state.session = session

        try:
            response = await call_next(request)
        finally:
            await self._persist(session)

        if session.invalidated:
            response.delete_cookie(key=self._cookie_name)
        elif session.is_new and session.modified:
            response.set_cookie(
                key=self._cookie_name,
                value=session.id,
                max_age=self._ttl,
                httponly=True,
                secure=self._cookie_secure,
                samesite=self._cookie_samesite,
            )
        return response

    async def _load(self, request: Any) -> HttpSession:
        session_id = getattr(request, "cookies", {}).get(self._cookie_name)
        if session_id:
            data = await self._store.get(session_id)
            if data is not None:
                return HttpSession(session_id, data)
            logger.debug("session_not_found", session_id=session_id)
        return HttpSession(secrets.token_urlsafe(32), is_new=True)

    async def _persist(self, session: HttpSession) -> None:
        if session.invalidated:
            if not session.is_new:
                await self._store.delete(session.id)
        elif session.modified:
            await self._store.save(session.id, session.get_data(), self._ttl)
