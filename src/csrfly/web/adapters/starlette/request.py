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
"""StarletteRequestAccessor: :class:`RequestAccessor` over a Starlette request."""

from __future__ import annotations

import structlog
from starlette.datastructures import FormData
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request
from starlette.types import Message

logger = structlog.get_logger("csrfly.web.starlette")

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


class StarletteRequestAccessor:
    """Read-only view over a Starlette ``Request``.

    Form values are only available when the accessor was built with
    :meth:`from_request` and ``load_form=True``, because Starlette parses
    form bodies asynchronously.
    """

    def __init__(
        self,
        request: Request,
        form: FormData | None = None,
        body: bytes | None = None,
    ) -> None:
        self._request = request
        self._form = form
        self._body = body

    @classmethod
    async def from_request(cls, request: Request, *, load_form: bool = False) -> StarletteRequestAccessor:
        """Build an accessor, parsing the form body first when asked to.

        A body that cannot be parsed as a form leaves the accessor without
        form values, so a form lookup reports a missing token.
        """
        if not (load_form and _has_form_body(request)):
            return cls(request)
        # body() caches the raw bytes on the request, form() then parses that copy
        body = await request.body()
        try:
            form = await request.form()
        except (MultiPartException, HTTPException) as exc:
            # Starlette wraps MultiPartException in HTTPException(400) once an app is mounted
            logger.warning("csrf_form_unparseable", path=request.url.path, error=str(exc))
            return cls(request, None, body)
        return cls(request, form, body)

    @property
    def request(self) -> Request:
        return self._request

    @property
    def method(self) -> str:
        return self._request.method

    def header(self, name: str) -> str | None:
        return self._request.headers.get(name)

    def query(self, name: str) -> str | None:
        return self._request.query_params.get(name)

    def form_value(self, name: str) -> str | None:
        if self._form is None:
            return None
        value = self._form.get(name)
        return value if isinstance(value, str) else None

    def path_param(self, name: str) -> str | None:
        value = self._request.path_params.get(name)
        return None if value is None else str(value)

    def downstream_request(self) -> Request:
        """Return a request the next ASGI app can still read the body from.

        When the body was consumed to parse the form, the returned request
        replays it once before delegating to the original ``receive``.
        """
        if self._body is None:
            return self._request

        body = self._body
        upstream = self._request.receive
        replayed = False

        async def receive() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await upstream()

        return Request(self._request.scope, receive)


def _has_form_body(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return content_type.split(";", 1)[0].strip().lower() in _FORM_CONTENT_TYPES
