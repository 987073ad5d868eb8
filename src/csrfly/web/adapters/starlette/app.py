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
"""Wiring helpers: build the guard and the filter-chain middleware from Config."""

from __future__ import annotations

from typing import Any

from starlette.middleware import Middleware

from csrfly.config.properties.security import CsrfProperties
from csrfly.config.properties.session import SessionProperties
from csrfly.core.config import Config
from csrfly.logging.port import LoggingPort
from csrfly.logging.structlog_adapter import StructlogAdapter
from csrfly.security.csrf.config import resolve_from_properties
from csrfly.security.csrf.engine import CsrfGuard
from csrfly.session.adapters.memory import InMemorySessionStore
from csrfly.session.filter import SessionFilter
from csrfly.session.ports.outbound import SessionStore
from csrfly.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from csrfly.web.adapters.starlette.filters.csrf_filter import CsrfFilter


def create_guard(config: Config, **overrides: Any) -> CsrfGuard:
    """Resolve ``csrfly.security.csrf.*`` into a ready :class:`CsrfGuard`.

    Raises:
        CsrfConfigurationException: If the configured lookup is malformed.
    """
    return CsrfGuard(resolve_from_properties(config.bind(CsrfProperties), **overrides))


def csrf_middleware(
    config: Config,
    guard: CsrfGuard | None = None,
    store: SessionStore | None = None,
    logging_port: LoggingPort | None = None,
) -> Middleware:
    """Session + CSRF filter chain as a Starlette ``Middleware`` entry.

    Logging is configured from ``csrfly.logging.*`` first, through
    *logging_port* (a :class:`StructlogAdapter` by default).  Without an
    explicit *store*, sessions live in an :class:`InMemorySessionStore`.
    """
    if logging_port is None:
        logging_port = StructlogAdapter()
    logging_port.configure(config)

    session_props = config.bind(SessionProperties)
    csrf_props = config.bind(CsrfProperties)

    filters = [
        SessionFilter(
            store if store is not None else InMemorySessionStore(),
            cookie_name=session_props.cookie_name,
            ttl=session_props.ttl,
            cookie_secure=session_props.cookie_secure,
            cookie_samesite=session_props.cookie_samesite,
        ),
        CsrfFilter(
            guard if guard is not None else create_guard(config),
            exclude_patterns=csrf_props.exclude_patterns,
        ),
    ]
    return Middleware(WebFilterChainMiddleware, filters=filters)
