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
"""Token derivation: ``urlsafe_b64(sha256(salt + "-" + secret))``."""

from __future__ import annotations

import base64
import hashlib
import secrets

TOKEN_LENGTH: int = 44
"""Length of every derived token: base64 of a 32-byte digest, one ``=`` pad."""


def tokenize(secret: str, salt: str) -> str:
    """Derive the CSRF token for *salt* under *secret*.

    Pure and deterministic: identical inputs always yield the identical
    44-character URL-safe base64 string.
    """
    digest = hashlib.sha256(f"{salt}-{secret}".encode()).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii")


def tokens_match(expected: str, presented: str) -> bool:
    """Timing-safe comparison of two tokens."""
    return secrets.compare_digest(expected.encode(), presented.encode())
