"""
HTTP client utilities for netdash.

Provides a clean interface for fetching JSON documents from the telemetry
server, including SSL context handling.
"""

import json
import ssl
from typing import Any, Dict, Optional
from urllib.request import Request, urlopen


class NetdashHttpClient:
    """HTTP client for reading telemetry from the proxy server."""

    def __init__(self, server_base: str, timeout: int = 10):
        """
        Initialize HTTP client.

        Args:
            server_base: Base URL of the telemetry server (e.g., http://server:3128)
            timeout: Request timeout in seconds
        """
        self.server_base = server_base.rstrip("/")
        self.timeout = timeout
        self._ssl_context = self._create_ssl_context()

    def _create_ssl_context(self) -> ssl.SSLContext:
        """Create SSL context for HTTPS that auto-trusts server certificates."""
        ssl_context = ssl.create_default_context()
        ssl_context.check_hostname = False
        ssl_context.verify_mode = ssl.CERT_NONE
        return ssl_context

    def build_url(self, endpoint: str) -> str:
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        return f"{self.server_base}/{endpoint.lstrip('/')}"

    def get_json(self, endpoint: str, headers: Optional[Dict[str, str]] = None) -> Any:
        """
        Make a GET request and decode the JSON body.

        Args:
            endpoint: Path on the server, or an absolute URL
            headers: Optional request headers

        Returns:
            Decoded JSON document, {} for an empty body

        Raises:
            HTTPError: On HTTP errors
            URLError: On connection errors
            json.JSONDecodeError: Body is not JSON
        """
        url = self.build_url(endpoint)
        hdrs = {"Accept": "application/json"}
        hdrs.update(headers or {})
        req = Request(url, headers=hdrs, method="GET")

        # Use SSL context for HTTPS URLs
        ssl_context = self._ssl_context if url.startswith("https://") else None

        with urlopen(req, timeout=self.timeout, context=ssl_context) as resp:
            raw = resp.read().decode("utf-8")
            return json.loads(raw) if raw else {}
