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
"""Method gate: decides whether a request needs validation at all."""

from __future__ import annotations

import enum

from csrfly.security.csrf.config import CsrfConfig
from csrfly.web.ports.request import RequestAccessor


class Exemption(str, enum.Enum):
    """Why a request skipped validation."""

    BYPASSED = "bypassed"
    IGNORED_METHOD = "ignored_method"


class MethodGate:
    """Evaluates the bypass predicate, then ignored-method membership."""

    def __init__(self, config: CsrfConfig) -> None:
        self._bypass = config.bypass
        self._ignored_methods = config.ignored_methods

    def exemption(self, request: RequestAccessor) -> Exemption | None:
        """Return the reason *request* is exempt, or ``None`` if it must be validated."""
        if self._bypass is not None and self._bypass(request):
            return Exemption.BYPASSED
        if request.method in self._ignored_methods:
            return Exemption.IGNORED_METHOD
        return None
