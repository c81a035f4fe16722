"""genai_client.config.defaults
============================

Central place for small, stable default values used across the package.
These defaults can be overridden via environment variables, an external
config file, or explicit constructor arguments.

This module intentionally avoids importing from other packages to prevent
circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

from ..version import __version__

# ---- Endpoint ----
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
DEFAULT_API_VERSION = "v1beta"
DEFAULT_MODEL = "gemini-1.5-flash"
DEFAULT_EMBEDDING_MODEL = "text-embedding-004"

# ---- Client identification ----
# Library token sent in the client-identification header ("gccl/<version>").
LIBRARY_NAME = "gccl"
LIBRARY_VERSION = __version__

# ---- Backoff ----
BACKOFF_INITIAL_SECONDS = 1.0
BACKOFF_MAX_SECONDS = 30.0
BACKOFF_MULTIPLIER = 2.0
BACKOFF_MAX_ATTEMPTS = 5

# ---- HTTP pool ----
HTTP_POOL_PURPOSE = "genai"

# ---- Sentinels ----
MISSING_API_KEY_ERROR = "missing_api_key"  # pragma: allowlist secret - generic sentinel, not a real secret
