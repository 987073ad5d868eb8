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
"""csrfly: synchronizer-token CSRF protection.

Each session is bound to a secret-derived token that every state-changing
request must present.  See :mod:`csrfly.security.csrf` for the core and
:mod:`csrfly.web.adapters.starlette` for the Starlette integration.
"""

from csrfly.kernel.exceptions import (
    CsrfConfigurationException,
    CsrfException,
    MissingSaltException,
    MissingTokenException,
    TokenMismatchException,
)
from csrfly.security.csrf import CsrfConfig, CsrfGuard, resolve_config

__version__ = "0.1.0"

__all__ = [
    "CsrfConfig",
    "CsrfConfigurationException",
    "CsrfException",
    "CsrfGuard",
    "MissingSaltException",
    "MissingTokenException",
    "TokenMismatchException",
    "__version__",
    "resolve_config",
]
