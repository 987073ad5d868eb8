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
"""CsrfFilter: synchronizer-token CSRF protection for the filter chain.

* **Exempt requests** (ignored methods such as GET, or a matching bypass
  predicate) pass straight through; :func:`csrf_token` still works for them,
  so a page can render a form carrying the token.
* **Excluded paths** skip validation entirely but can still issue tokens.
* **Everything else** must present the session's token in the configured
  source.  A missing salt, missing token or mismatch yields HTTP 403 unless
  a custom failure handler returns its own response.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from csrfly.security.csrf.engine import CsrfGuard
from csrfly.web.adapters.starlette.csrf import attach_guard, guard_request
from csrfly.web.filters import OncePerRequestFilter
from csrfly.web.ports.filter import CallNext


class CsrfFilter(OncePerRequestFilter):
    """Validates every request with a shared :class:`CsrfGuard`.

    Must run after :class:`~csrfly.session.SessionFilter`, which provides
    ``request.state.session``.
    """

    def __init__(
        self,
        guard: CsrfGuard,
        exclude_patterns: Iterable[str] | None = None,
    ) -> None:
        super().__init__(exclude_patterns)
        self._guard = guard

    async def filter_internal(self, request: Any, call_next: CallNext) -> Any:
        return await guard_request(self._guard, request, call_next)

    async def filter_excluded(self, request: Any, call_next: CallNext) -> Any:
        attach_guard(request, self._guard)
        return await call_next(request)
