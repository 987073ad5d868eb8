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
"""OncePerRequestFilter: base class for csrfly's filters.

A filter built on this base runs at most once per request, even when the
filter chain is mounted again below a sub-application that shares the
same ASGI scope.  Paths matching ``exclude_patterns`` skip the filter body
but still pass through :meth:`OncePerRequestFilter.filter_excluded`.

Framework-agnostic: only ``request.url.path`` and ``request.state`` are
touched, so no Starlette import is needed.
"""

from __future__ import annotations

import abc
from collections.abc import Iterable
from fnmatch import fnmatch
from typing import Any

from csrfly.web.ports.filter import CallNext


class OncePerRequestFilter(abc.ABC):
    """Abstract base class for :class:`~csrfly.web.ports.filter.WebFilter` implementations.

    Subclasses implement :meth:`filter_internal`.

    Attributes:
        exclude_patterns: Glob patterns matched against the request path.
    """

    def __init__(self, exclude_patterns: Iterable[str] | None = None) -> None:
        self.exclude_patterns: list[str] = list(exclude_patterns or ())

    @property
    def applied_marker(self) -> str:
        """Name of the ``request.state`` flag set once this filter has run."""
        return f"_csrfly_applied_{type(self).__name__}"

    def should_not_filter(self, request: Any) -> bool:
        """Return ``True`` if this filter already ran for *request*."""
        return bool(getattr(request.state, self.applied_marker, False))

    def is_excluded(self, request: Any) -> bool:
        path: str = request.url.path
        return any(fnmatch(path, p) for p in self.exclude_patterns)

    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        setattr(request.state, self.applied_marker, True)
        if self.is_excluded(request):
            return await self.filter_excluded(request, call_next)
        return await self.filter_internal(request, call_next)

    async def filter_excluded(self, request: Any, call_next: CallNext) -> Any:
        """Handle a request on an excluded path.  Forwards it unchanged."""
        return await call_next(request)

    @abc.abstractmethod
    async def filter_internal(self, request: Any, call_next: CallNext) -> Any:
        """Execute the filter logic.  Must ``await call_next(request)`` to proceed."""
        ...
