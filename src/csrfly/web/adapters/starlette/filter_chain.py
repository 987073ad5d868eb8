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
"""WebFilterChainMiddleware: pure ASGI middleware running csrfly's filters."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, cast

from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from csrfly.web.ports.filter import CallNext, WebFilter


class WebFilterChainMiddleware:
    """Runs an ordered list of :class:`WebFilter` instances around the app.

    The first filter is the outermost.  The chain is assembled once; the
    terminal step calls the wrapped app with the ``scope`` and ``receive``
    of whichever request reaches it, so a filter that consumed the body can
    forward a request that replays it.  The app's response is buffered so
    that filters can still change status and headers on the way out.
    """

    def __init__(self, app: ASGIApp, filters: Sequence[WebFilter] = ()) -> None:
        self.app = app
        self._filters = list(filters)
        self._chain = self._build_chain()

    def _build_chain(self) -> CallNext:
        chain: CallNext = self._dispatch
        for web_filter in reversed(self._filters):
            chain = _guarded(web_filter, chain)
        return chain

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response = cast(Response, await self._chain(Request(scope, receive, send)))
        await response(scope, receive, send)

    async def _dispatch(self, request: Request) -> Response:
        start: dict[str, Any] = {}
        chunks: list[bytes] = []

        async def capture(message: Message) -> None:
            if message["type"] == "http.response.start":
                start.update(message)
            elif message["type"] == "http.response.body":
                chunks.append(message.get("body", b""))

        await self.app(request.scope, request.receive, capture)

        response = Response(content=b"".join(chunks), status_code=start.get("status", 200))
        response.raw_headers[:] = list(start.get("headers", []))
        return response


def _guarded(web_filter: WebFilter, next_call: CallNext) -> CallNext:
    async def step(request: Request) -> Response:
        if web_filter.should_not_filter(request):
            return cast(Response, await next_call(request))
        return cast(Response, await web_filter.do_filter(request, next_call))

    return step
