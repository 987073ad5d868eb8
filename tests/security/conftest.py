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
"""Shared fakes and fixtures for the CSRF core tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest


@dataclass
class FakeRequest:
    """In-memory :class:`~csrfly.web.ports.request.RequestAccessor`."""

    method: str = "POST"
    headers: dict[str, str] = field(default_factory=dict)
    query_params: dict[str, str] = field(default_factory=dict)
    form: dict[str, str] = field(default_factory=dict)
    path_params: dict[str, str] = field(default_factory=dict)

    def header(self, name: str) -> str | None:
        return self.headers.get(name)

    def query(self, name: str) -> str | None:
        return self.query_params.get(name)

    def form_value(self, name: str) -> str | None:
        return self.form.get(name)

    def path_param(self, name: str) -> str | None:
        return self.path_params.get(name)


class FakeSession:
    """Dict-backed :class:`~csrfly.security.csrf.ports.CsrfSession`."""

    def __init__(self, data: dict[str, Any] | None = None, save_ok: bool = True) -> None:
        self.data: dict[str, Any] = data if data is not None else {}
        self.save_calls = 0
        self._save_ok = save_ok

    def get_attribute(self, name: str) -> Any | None:
        return self.data.get(name)

    def set_attribute(self, name: str, value: Any) -> None:
        self.data[name] = value

    def save(self) -> bool:
        self.save_calls += 1
        return self._save_ok


@pytest.fixture
def make_request() -> type[FakeRequest]:
    return FakeRequest


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def make_session() -> type[FakeSession]:
    return FakeSession
