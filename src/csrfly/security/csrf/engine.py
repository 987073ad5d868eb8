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
"""Validation engine: the accept/reject protocol for one request.

Per request::

    START -> bypassed? ---------------------------------------> ALLOW
          -> SALT_LOOKUP -- absent --> REJECT[MissingSalt]
          -> EXTRACT ------ absent --> REJECT[MissingToken]
          -> COMPARE ------ mismatch -> REJECT[TokenMismatch]
                          -- match ---> ALLOW

:meth:`CsrfGuard.validate` returns a :class:`CsrfVerdict` and never raises
for request-time faults.  :meth:`CsrfGuard.protect` drives the downstream
chain: ``proceed()`` on ALLOW, the failure handler exactly once on REJECT.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar, cast

import structlog

from csrfly.kernel.exceptions import CsrfException, TokenMismatchException
from csrfly.security.csrf.config import CsrfConfig
from csrfly.security.csrf.gate import Exemption, MethodGate
from csrfly.security.csrf.issuance import issue_token
from csrfly.security.csrf.ports import CsrfSession
from csrfly.security.csrf.salt import SaltProvider
from csrfly.security.csrf.state import CsrfRequestState
from csrfly.security.csrf.tokens import tokenize, tokens_match
from csrfly.web.ports.request import RequestAccessor

logger = structlog.get_logger("csrfly.security.csrf")

T = TypeVar("T")


class Decision(str, enum.Enum):
    ALLOW = "allow"
    REJECT = "reject"


@dataclass(frozen=True)
class CsrfVerdict:
    """Outcome of validating one request."""

    decision: Decision
    exemption: Exemption | None = None
    error: CsrfException | None = None

    @property
    def allowed(self) -> bool:
        return self.decision is Decision.ALLOW

    @classmethod
    def allow(cls, exemption: Exemption | None = None) -> CsrfVerdict:
        return cls(Decision.ALLOW, exemption=exemption)

    @classmethod
    def reject(cls, error: CsrfException) -> CsrfVerdict:
        return cls(Decision.REJECT, error=error)


class CsrfGuard:
    """Synchronizer-token CSRF protection.

    One guard is built at startup from a resolved :class:`CsrfConfig` and
    shared by every request.  Each request gets its own
    :class:`CsrfRequestState` from :meth:`begin`, which must be passed to
    :meth:`validate` / :meth:`protect` and :meth:`get_token`.

    Args:
        config: The resolved configuration.
        salts: Salt provider; defaults to one backed by OS entropy.
    """

    def __init__(self, config: CsrfConfig, salts: SaltProvider | None = None) -> None:
        self._config = config
        self._gate = MethodGate(config)
        self._salts = salts if salts is not None else SaltProvider()

    @property
    def config(self) -> CsrfConfig:
        return self._config

    def begin(self) -> CsrfRequestState:
        """Create the request-scoped state carrying the active secret."""
        return CsrfRequestState(secret=self._config.secret)

    def validate(
        self,
        request: RequestAccessor,
        session: CsrfSession,
        state: CsrfRequestState,
    ) -> CsrfVerdict:
        """Decide whether *request* may proceed."""
        exemption = self._gate.exemption(request)
        if exemption is not None:
            logger.debug("csrf_exempt", method=request.method, reason=exemption.value)
            return CsrfVerdict.allow(exemption)

        try:
            salt = self._salts.require(session)
            presented = self._config.extractor.extract(request)
            if not tokens_match(tokenize(state.secret, salt), presented):
                raise TokenMismatchException()
        except CsrfException as exc:
            logger.warning(
                "csrf_rejected",
                method=request.method,
                code=exc.code,
                reason=str(exc),
                **exc.context,
            )
            return CsrfVerdict.reject(exc)

        logger.debug("csrf_accepted", method=request.method)
        return CsrfVerdict.allow()

    def handle_failure(self, error: CsrfException, request: RequestAccessor) -> Any:
        """Invoke the configured failure handler for a rejected request."""
        return self._config.failure_handler(error, request)

    def protect(
        self,
        request: RequestAccessor,
        session: CsrfSession,
        state: CsrfRequestState,
        proceed: Callable[[], T],
    ) -> T | Any:
        """Validate, then either ``proceed()`` or hand off to the failure handler.

        With the default handler a rejection raises the triggering
        :class:`CsrfException` and *proceed* is never called.
        """
        verdict = self.validate(request, session, state)
        if verdict.allowed:
            return proceed()
        return self.handle_failure(cast(CsrfException, verdict.error), request)

    def get_token(self, session: CsrfSession, state: CsrfRequestState) -> str:
        """Return the token to embed in the response for this request."""
        return issue_token(session, state, self._salts)
