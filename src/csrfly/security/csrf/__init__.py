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
"""Synchronizer-token CSRF protection.

Typical use::

    guard = CsrfGuard(resolve_config(secret="change-me", lookup="form:_csrf"))

    state = guard.begin()
    guard.protect(request, session, state, proceed=handler)
    token = guard.get_token(session, state)
"""

from csrfly.security.csrf.config import (
    DEFAULT_IGNORED_METHODS,
    DEFAULT_LOOKUP,
    DEFAULT_SECRET,
    HEADER_NAME,
    CsrfConfig,
    abort_with_error,
    parse_lookup,
    resolve_config,
    resolve_from_properties,
)
from csrfly.security.csrf.engine import CsrfGuard, CsrfVerdict, Decision
from csrfly.security.csrf.extractors import (
    CustomExtractor,
    FormExtractor,
    HeaderExtractor,
    ParamExtractor,
    QueryExtractor,
    TokenExtractor,
    TokenSource,
    extractor_for,
)
from csrfly.security.csrf.gate import Exemption, MethodGate
from csrfly.security.csrf.issuance import issue_token
from csrfly.security.csrf.ports import CsrfSession
from csrfly.security.csrf.salt import SALT_LENGTH, SALT_SESSION_KEY, SaltGenerator, SaltProvider
from csrfly.security.csrf.state import CsrfRequestState
from csrfly.security.csrf.tokens import TOKEN_LENGTH, tokenize, tokens_match

__all__ = [
    "DEFAULT_IGNORED_METHODS",
    "DEFAULT_LOOKUP",
    "DEFAULT_SECRET",
    "HEADER_NAME",
    "SALT_LENGTH",
    "SALT_SESSION_KEY",
    "TOKEN_LENGTH",
    "CsrfConfig",
    "CsrfGuard",
    "CsrfRequestState",
    "CsrfSession",
    "CsrfVerdict",
    "CustomExtractor",
    "Decision",
    "Exemption",
    "FormExtractor",
    "HeaderExtractor",
    "MethodGate",
    "ParamExtractor",
    "QueryExtractor",
    "SaltGenerator",
    "SaltProvider",
    "TokenExtractor",
    "TokenSource",
    "abort_with_error",
    "extractor_for",
    "issue_token",
    "parse_lookup",
    "resolve_config",
    "resolve_from_properties",
    "tokenize",
    "tokens_match",
]
