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
"""Token issuance: the token a handler embeds in forms or headers."""

from __future__ import annotations

from csrfly.security.csrf.ports import CsrfSession
from csrfly.security.csrf.salt import SaltProvider
from csrfly.security.csrf.state import CsrfRequestState
from csrfly.security.csrf.tokens import tokenize


def issue_token(session: CsrfSession, state: CsrfRequestState, salts: SaltProvider) -> str:
    """Return the current token for *session*, creating its salt if needed.

    The result is cached on *state*, so repeated calls within one request
    neither recompute the hash nor touch the session again.
    """
    if state.token is not None:
        return state.token

    salt = salts.get_or_create(session)
    state.token = tokenize(state.secret, salt)
    return state.token
