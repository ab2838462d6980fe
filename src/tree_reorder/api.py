"""Command API client for a remote todo store."""

import logging
from typing import Any

import requests

from tree_reorder.config import API_BASE_URL, API_TIMEOUT
from tree_reorder.errors import ApiError


class TodoApi:
    """Thin client for the store's ``POST /api/<command>`` endpoints.

    Every response is an envelope ``{"ok": bool, "data": ..., "error": str}``.
    """

    def __init__(self, base_url: str = API_BASE_URL, *, timeout: float = API_TIMEOUT) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.sess = requests.Session()
        self.logger = logging.getLogger("api")
        self.logger.debug(f"API ready: base_url {self.base_url!r}, timeout {self.timeout!r}")

    def call(self, command: str, args: dict[str, Any]) -> Any:
        """Invoke a command, return the envelope's ``data``."""
        self.logger.debug(f"Making request: {command!r} {repr(args)[:64]}")
        try:
            r = self.sess.post(f"{self.base_url}/api/{command}", json=args, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            msg = f"API call failed: {command!r} -> {e}"
            raise ApiError(msg) from e

        rv: dict[str, Any] = r.json()
        if not rv.get("ok"):
            msg = f"API call failed: ({command!r}, {args!r}) -> {rv.get('error')!r}"
            raise ApiError(msg)
        return rv.get("data")
