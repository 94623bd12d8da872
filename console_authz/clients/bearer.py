# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

from pathlib import Path

import httpx


class BearerTokenAuth(httpx.Auth):
    """Bearer auth from a fixed token or a token file.

    The file is read on every request so rotated service-account tokens
    are picked up without a restart.
    """

    def __init__(self, token: str | None = None, token_path: str | Path | None = None) -> None:
        if not token and not token_path:
            raise ValueError("either token or token_path is required")
        self._token = token
        self._token_path = Path(token_path) if token_path else None

    def _current_token(self) -> str:
        if self._token_path is not None:
            return self._token_path.read_text().strip()
        return self._token or ""

    def sync_auth_flow(self, request: httpx.Request):
        request.headers["Authorization"] = f"Bearer {self._current_token()}"
        yield request
