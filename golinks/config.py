"""
Runtime configuration for the go-link service
=============================================

Simple settings module that reads from environment variables and exposes a
stable `settings` object for the rest of the codebase.

The storage variables (GOLINKS_STORAGE_BACKEND, GOLINKS_DB_DSN) are the one
exception: `golinks.storage.storage_factory` reads them at call time so tests
can flip them with monkeypatch.

Presentation
------------
- GOLINKS_PUBLIC_HOST     : base URL advertised in the OpenSearch descriptor (default "http://go")

Logging
-------
- GOLINKS_LOG_LEVEL       : root level used when the app configures logging (default "INFO")
"""

import os


class _Settings:
    # -------- Presentation --------
    PUBLIC_HOST: str = os.getenv("GOLINKS_PUBLIC_HOST", "http://go").rstrip("/")

    # -------- Logging --------
    LOG_LEVEL: str = os.getenv("GOLINKS_LOG_LEVEL", "INFO").strip().upper()


settings = _Settings()
