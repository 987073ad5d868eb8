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
"""RequestAccessor protocol: read-only view of the fields a token may live in."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RequestAccessor(Protocol):
    """Narrow request interface consumed by the CSRF core.

    Every lookup returns ``None`` when the field is absent.
    """

    @property
    def method(self) -> str: ...

    def header(self, name: str) -> str | None: ...

    def query(self, name: str) -> str | None: ...

    def form_value(self, name: str) -> str | None: ...

    def path_param(self, name: str) -> str | None: ...
