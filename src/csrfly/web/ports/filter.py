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
"""WebFilter protocol: what :class:`WebFilterChainMiddleware` runs.

Request and response stay ``Any`` here; Starlette types appear only in
``csrfly.web.adapters.starlette``.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable

# Next step in the chain: the following filter, or the wrapped application.
CallNext = Callable[[Any], Awaitable[Any]]


@runtime_checkable
class WebFilter(Protocol):
    """A request/response filter.

    The chain asks :meth:`should_not_filter` first and, unless it answers
    ``True``, hands the request to :meth:`do_filter` together with the
    next step.  A filter rejects a request by returning its own response
    without calling ``call_next``.
    """

    def should_not_filter(self, request: Any) -> bool: ...

    async def do_filter(self, request: Any, call_next: CallNext) -> Any: ...
