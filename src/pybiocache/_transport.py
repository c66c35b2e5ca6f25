"""HTTP transport for the Biocache JSON web services."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp

from pybiocache._constants import USER_AGENT
from pybiocache._redact import redact_for_log, redact_url
from pybiocache.config import OccurrenceMapConfig
from pybiocache.exceptions import BiocacheFetchError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, endpoint: str, query: str | None = None) -> Any:
        ...


class HttpTransport:
    """``GET url -> JSON`` against a Biocache base URL."""

    def __init__(self, config: OccurrenceMapConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def url_for(self, endpoint: str, query: str | None = None) -> str:
        url = f"{self._config.biocache_base_url}{endpoint}"
        if query:
            url = f"{url}?{query}"
        return url

    async def get_json(self, endpoint: str, query: str | None = None) -> Any:
        """Fetch *endpoint* and return the decoded JSON body.

        Raises :class:`BiocacheFetchError` on network failures, non-200
        responses and bodies that are not JSON.
        """
        url = self.url_for(endpoint, query)
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }

        _logger.debug("GET %s", redact_url(url))

        try:
            async with self._http.get(url, headers=headers, timeout=self._timeout) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise BiocacheFetchError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except BiocacheFetchError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise BiocacheFetchError(
                f"Request to {endpoint} failed: {exc!r}",
                endpoint=endpoint,
            ) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise BiocacheFetchError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc

        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug("Response from %s: %s", endpoint, redact_for_log(body, max_string=128, max_items=5))
        return body
