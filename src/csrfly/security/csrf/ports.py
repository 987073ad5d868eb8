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
"""Session seam used by the CSRF core."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CsrfSession(Protocol):
    """The three session operations the salt provider relies on.

    :class:`csrfly.session.HttpSession` satisfies this protocol.
    """

    def get_attribute(self, name: str) -> Any | None: ...

    def set_attribute(self, name: str, value: Any) -> None: ...

    def save(self) -> bool: ...
