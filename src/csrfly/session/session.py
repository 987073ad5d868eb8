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
"""HttpSession: the per-request view of a stored session."""

from __future__ import annotations

from typing import Any


class HttpSession:
    """Attribute dictionary for one session, persisted by :class:`SessionFilter`.

    Writes only touch the in-memory dictionary.  A brand-new session stays
    unmodified until something is written to it, so a request that never
    issues a token leaves nothing behind in the store and gets no cookie.
    """

    def __init__(
        self,
        session_id: str,
        data: dict[str, Any] | None = None,
        *,
        is_new: bool = False,
    ) -> None:
        self._id = session_id
        self._data: dict[str, Any] = data if data is not None else {}
        self._is_new = is_new
        self._modified = False
        self._invalidated = False

    @property
    def id(self) -> str:
        return self._id

    @property
    def is_new(self) -> bool:
        """``True`` if no stored session backed this request."""
        return self._is_new

    @property
    def modified(self) -> bool:
        return self._modified

    @property
    def invalidated(self) -> bool:
        return self._invalidated

    def get_attribute(self, name: str) -> Any | None:
        return self._data.get(name)

    def set_attribute(self, name: str, value: Any) -> None:
        self._data[name] = value
        self._modified = True

    def save(self) -> bool:
        """Flag the session for persistence at the end of the request.

        Returns ``False`` when the session has been invalidated; it will be
        deleted instead.
        """
        if self._invalidated:
            return False
        self._modified = True
        return True

    def invalidate(self) -> None:
        """Drop the session, and with it the CSRF salt, after the response."""
        self._invalidated = True

    def get_data(self) -> dict[str, Any]:
        return self._data
