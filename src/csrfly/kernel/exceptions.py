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
"""Exception hierarchy for csrfly.

Two tiers are distinguished:

* **Setup-time** errors (:class:`ConfigurationException` and subclasses) are
  raised once while resolving configuration, before any request is served.
* **Request-time** errors (:class:`CsrfException` and subclasses) describe
  why a single request was rejected.  They are routed through the configured
  failure handler instead of being raised directly by the validation engine.
"""

from __future__ import annotations

# =============================================================================
# Base Exception
# =============================================================================


class CsrflyException(Exception):
    """Base exception for all csrfly errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CSRF_MISSING_SALT").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Setup-time Exceptions
# =============================================================================


class ConfigurationException(CsrflyException):
    """Invalid or unresolvable configuration."""


class CsrfConfigurationException(ConfigurationException):
    """The CSRF configuration cannot be resolved (e.g. malformed lookup)."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="CSRF_CONFIG", context=context)


# =============================================================================
# Security Exceptions
# =============================================================================


class SecurityException(CsrflyException):
    """Authentication, authorization and request-forgery errors."""


class ForbiddenException(SecurityException):
    """The caller is not allowed to perform the operation."""


class CsrfException(ForbiddenException):
    """A state-changing request failed CSRF validation."""


class MissingSaltException(CsrfException):
    """The session has never been issued a token, so no salt exists."""

    def __init__(self) -> None:
        super().__init__("[CSRF] missing salt", code="CSRF_MISSING_SALT")


class MissingTokenException(CsrfException):
    """No token was found in the configured request source."""

    def __init__(self, source: str) -> None:
        super().__init__(
            f"[CSRF] missing csrf token in {source}",
            code="CSRF_MISSING_TOKEN",
            context={"source": source},
        )
        self.source = source


class TokenMismatchException(CsrfException):
    """The presented token does not match the session's expected token."""

    def __init__(self) -> None:
        super().__init__("[CSRF] invalid token", code="CSRF_TOKEN_MISMATCH")
