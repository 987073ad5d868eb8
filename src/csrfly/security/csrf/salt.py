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
"""Per-session salt management."""

from __future__ import annotations

import random
import string
import threading

import structlog

from csrfly.kernel.exceptions import MissingSaltException
from csrfly.security.csrf.ports import CsrfSession

logger = structlog.get_logger("csrfly.security.csrf.salt")

SALT_SESSION_KEY: str = "csrfSalt"
"""Session attribute holding the salt."""

SALT_LENGTH: int = 16

_ALPHABET = string.ascii_letters + string.digits


class SaltGenerator:
    """Produces random alphanumeric salts.

    Backed by :class:`random.SystemRandom` (OS entropy) unless another
    :class:`random.Random` is injected.  Access to the generator is
    serialized so a single instance can be shared by concurrent requests.
    """

    def __init__(self, rng: random.Random | None = None, length: int = SALT_LENGTH) -> None:
        self._rng = rng if rng is not None else random.SystemRandom()
        self._length = length
        self._lock = threading.Lock()

    def generate(self) -> str:
        with self._lock:
            return "".join(self._rng.choice(_ALPHABET) for _ in range(self._length))


class SaltProvider:
    """Reads, and on the issuance path lazily creates, the session salt."""

    def __init__(
        self,
        generator: SaltGenerator | None = None,
        session_key: str = SALT_SESSION_KEY,
    ) -> None:
        self._generator = generator if generator is not None else SaltGenerator()
        self._session_key = session_key

    def lookup(self, session: CsrfSession) -> str | None:
        """Return the stored salt, or ``None`` if absent or unusable."""
        salt = session.get_attribute(self._session_key)
        if isinstance(salt, str) and salt:
            return salt
        return None

    def require(self, session: CsrfSession) -> str:
        """Return the stored salt for validation; never creates one.

        Raises:
            MissingSaltException: If the session has never been issued a token.
        """
        salt = self.lookup(session)
        if salt is None:
            raise MissingSaltException()
        return salt

    def get_or_create(self, session: CsrfSession) -> str:
        """Return the stored salt, creating and saving a new one if absent."""
        salt = self.lookup(session)
        if salt is not None:
            return salt

        salt = self._generator.generate()
        session.set_attribute(self._session_key, salt)
        if not session.save():
            logger.warning("csrf_salt_save_failed", session_key=self._session_key)
        return salt
