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
"""Starlette glue for :class:`~csrfly.security.csrf.CsrfGuard`.

* :func:`guard_request`: validate one request and either forward it or
  produce the rejection response.
* :func:`csrf_protect`: endpoint decorator for route-level protection.
  Required for ``param:<name>`` lookups, since path parameters are only
  known once routing has happened.
* :func:`attach_guard`: make :func:`csrf_token` available without validating.
* :func:`csrf_token`: issue the token for the current request.
"""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable
from typing import Any, cast

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from csrfly.kernel.exceptions import ConfigurationException, CsrfException
from csrfly.security.csrf.engine import CsrfGuard
from csrfly.security.csrf.extractors import needs_form
from csrfly.security.csrf.ports import CsrfSession
from csrfly.security.csrf.state import CsrfRequestState
from csrfly.web.adapters.starlette.request import StarletteRequestAccessor

Endpoint = Callable[[Request], Awaitable[Response]]


def forbidden(error: CsrfException) -> JSONResponse:
    """Render a rejected request as HTTP 403."""
    return JSONResponse({"error": str(error), "code": error.code}, status_code=403)


def _session_of(request: Request) -> CsrfSession:
    session = getattr(request.state, "session", None)
    if session is None:
        raise ConfigurationException(
            "CSRF protection requires a session; install SessionFilter before CsrfFilter"
        )
    return session


def attach_guard(request: Request, guard: CsrfGuard) -> CsrfRequestState:
    """Bind *guard* and a fresh request state to *request*, once.

    After this, :func:`csrf_token` can issue a token for the request even
    when it is never validated.
    """
    state: CsrfRequestState | None = getattr(request.state, "csrf", None)
    if state is None:
        state = guard.begin()
        request.state.csrf = state
        request.state.csrf_guard = guard
    return state


async def guard_request(
    guard: CsrfGuard,
    request: Request,
    proceed: Callable[[Request], Awaitable[Any]],
) -> Any:
    """Run *guard* against *request*; ``await proceed(request)`` only on ALLOW.

    A :class:`CsrfException` escaping the failure handler (the default
    behaviour) becomes a 403 JSON response, as does a handler returning
    ``None``.  Any other return value is used as the response.
    """
    session = _session_of(request)
    state = attach_guard(request, guard)
    accessor = await StarletteRequestAccessor.from_request(
        request, load_form=needs_form(guard.config.extractor)
    )

    verdict = guard.validate(accessor, session, state)
    if verdict.allowed:
        return await proceed(accessor.downstream_request())

    error = cast(CsrfException, verdict.error)
    try:
        result = guard.handle_failure(error, accessor)
    except CsrfException as exc:
        return forbidden(exc)
    return forbidden(error) if result is None else result


def csrf_protect(guard: CsrfGuard) -> Callable[[Endpoint], Endpoint]:
    """Protect a single Starlette endpoint with *guard*."""

    def decorator(endpoint: Endpoint) -> Endpoint:
        @functools.wraps(endpoint)
        async def wrapper(request: Request) -> Response:
            return await guard_request(guard, request, lambda _req: endpoint(request))

        return wrapper

    return decorator


def csrf_token(request: Request) -> str:
    """Return the CSRF token for *request*, creating the session salt if needed.

    Works on any request that passed through :class:`CsrfFilter` (excluded
    paths and exempt methods included) or a :func:`csrf_protect` endpoint.
    """
    guard: CsrfGuard | None = getattr(request.state, "csrf_guard", None)
    if guard is None:
        raise ConfigurationException("No CSRF guard is attached to this request")
    return guard.get_token(_session_of(request), attach_guard(request, guard))
