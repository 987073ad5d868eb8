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
"""Starlette adapter: filter chain, request accessor and CSRF glue."""

from csrfly.web.adapters.starlette.app import create_guard, csrf_middleware
from csrfly.web.adapters.starlette.csrf import attach_guard, csrf_protect, csrf_token, guard_request
from csrfly.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from csrfly.web.adapters.starlette.filters.csrf_filter import CsrfFilter
from csrfly.web.adapters.starlette.request import StarletteRequestAccessor

__all__ = [
    "CsrfFilter",
    "StarletteRequestAccessor",
    "WebFilterChainMiddleware",
    "attach_guard",
    "create_guard",
    "csrf_middleware",
    "csrf_protect",
    "csrf_token",
    "guard_request",
]
