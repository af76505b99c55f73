"""
Shared HTTP client for map link resolution.

Handles redirect resolution, page fetches and session management. Transport
failures are logged and downgraded; callers never see a requests exception.
"""

import logging
from typing import Dict, Any, Optional, Tuple

import requests  # type: ignore
from requests.adapters import HTTPAdapter  # type: ignore
from urllib3.util.retry import Retry  # type: ignore

from ..core import constants


class HttpClient:
    """Pooled HTTP client injected into every map provider."""

    def __init__(
        self,
        timeout: float = constants.DEFAULT_TIMEOUT,
        connect_timeout: float = constants.DEFAULT_CONNECT_TIMEOUT,
        max_redirects: int = constants.DEFAULT_MAX_REDIRECTS,
        pool_size: int = constants.DEFAULT_POOL_SIZE,
        user_agent: str = constants.DEFAULT_USER_AGENT,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize HTTP client.

        Args:
            timeout: Read timeout in seconds
            connect_timeout: Connect timeout in seconds
            max_redirects: Maximum redirects followed per call
            pool_size: Connection pool size per host
            user_agent: User-Agent header value
            logger: Logger instance
        """
        self.timeout = timeout
        self.connect_timeout = connect_timeout
        self.logger = logger or logging.getLogger(__name__)

        # Single attempt per call: redirects are followed by the session,
        # nothing is retried at the transport level
        self.session = requests.Session()
        self.session.max_redirects = max_redirects
        retry_strategy = Retry(total=0, read=False)
        adapter = HTTPAdapter(
            pool_connections=pool_size,
            pool_maxsize=pool_size,
            max_retries=retry_strategy,
        )
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

        self.session.headers.update({
            "User-Agent": user_agent,
        })

    @property
    def request_timeout(self) -> Tuple[float, float]:
        """
        Timeout tuple passed to every request.

        requests applies both values per socket operation, so every hop of a
        redirect chain (at most max_redirects + 1 requests) gets its own
        connect and read timeout. There is no deadline for the chain as a whole.
        """
        return (self.connect_timeout, self.timeout)

    def _get(self, url: str, **kwargs) -> Optional[requests.Response]:
        """
        Issue a GET, returning None on any transport failure.

        Args:
            url: Absolute URL
            **kwargs: Additional arguments for requests

        Returns:
            Response object, or None if the request could not be completed
        """
        self.logger.debug(f"GET {url}")

        try:
            return self.session.get(
                url,
                timeout=self.request_timeout,
                allow_redirects=True,
                **kwargs
            )
        except (requests.exceptions.RequestException, ValueError) as e:
            self.logger.warning(f"HTTP request failed: GET {url} - {e}")
            return None

    def follow_redirects(self, url: str) -> str:
        """
        Follow redirects to get the final URL.

        Args:
            url: The initial (usually shortened) URL

        Returns:
            The final URL after following redirects, or the original URL if the
            request failed or returned a non-success status
        """
        response = self._get(url, stream=True)
        if response is None:
            return url

        try:
            if not response.ok:
                self.logger.warning(
                    f"HTTP request failed with code {response.status_code} for URL: {url}"
                )
                return url

            final_url = response.url or url
            if final_url != url:
                self.logger.debug(f"Followed redirects from {url} to {final_url}")
            return final_url
        finally:
            response.close()

    def fetch_content(self, url: str) -> Optional[str]:
        """
        Fetch the body of a page.

        Args:
            url: Page URL

        Returns:
            Response text, or None on failure
        """
        response = self._get(url)
        if response is None:
            return None

        try:
            if not response.ok:
                self.logger.warning(
                    f"HTTP request failed with status {response.status_code} for URL: {url}"
                )
                return None

            content = response.text
            self.logger.debug(f"Fetched content from {url} (length: {len(content)})")
            return content
        finally:
            response.close()

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Optional[Any]:
        """
        Fetch and decode a JSON document.

        Args:
            url: Endpoint URL
            params: Query parameters

        Returns:
            Decoded JSON, or None on failure
        """
        response = self._get(url, params=params, headers={"Accept": "application/json"})
        if response is None:
            return None

        try:
            if not response.ok:
                self.logger.warning(
                    f"HTTP request failed with status {response.status_code} for URL: {url}"
                )
                return None
            return response.json()
        except ValueError as e:
            self.logger.warning(f"Invalid JSON response from {url}: {e}")
            return None
        finally:
            response.close()

    def close(self) -> None:
        """Close the session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
