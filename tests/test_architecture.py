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
"""Architecture tests: vendor imports stay in adapters, adapters satisfy ports."""

from pathlib import Path

import csrfly
from csrfly.security.csrf.config import resolve_config
from csrfly.security.csrf.engine import CsrfGuard
from csrfly.security.csrf.ports import CsrfSession
from csrfly.session.adapters.memory import InMemorySessionStore
from csrfly.session.adapters.redis import RedisSessionStore
from csrfly.session.ports.outbound import SessionStore
from csrfly.session.session import HttpSession
from csrfly.web.adapters.starlette.filters.csrf_filter import CsrfFilter
from csrfly.web.ports.filter import WebFilter

_PACKAGE_ROOT = Path(csrfly.__file__).parent


def _files_importing(module: str) -> list[str]:
    hits = []
    for path in _PACKAGE_ROOT.rglob("*.py"):
        text = path.read_text()
        if f"from {module}" in text or f"import {module}" in text:
            hits.append(path.relative_to(_PACKAGE_ROOT).as_posix())
    return sorted(hits)


class TestVendorIsolation:
    def test_starlette_only_in_web_adapters(self):
        leaks = [p for p in _files_importing("starlette") if not p.startswith("web/adapters/starlette/")]
        assert leaks == []

    def test_csrf_core_is_framework_free(self):
        core = [p for p in _files_importing("starlette") if p.startswith("security/")]
        assert core == []


class TestPortConformance:
    def test_http_session_is_csrf_session(self):
        assert isinstance(HttpSession("abc"), CsrfSession)

    def test_stores_are_session_stores(self):
        assert isinstance(InMemorySessionStore(), SessionStore)
        assert isinstance(RedisSessionStore(client=None), SessionStore)

    def test_csrf_filter_is_web_filter(self):
        assert isinstance(CsrfFilter(CsrfGuard(resolve_config())), WebFilter)
