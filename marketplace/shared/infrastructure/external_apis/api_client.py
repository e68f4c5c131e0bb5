# 📄 File: marketplace/shared/infrastructure/external_apis/api_client.py

# 🧭 Purpose (Layman Explanation):
# This file creates the HTTP client that knows how to talk to other services,
# handling timeouts and turning their error replies into errors our service understands.

# 🧪 Purpose (Technical Summary):
# Generic async HTTP client on aiohttp with a shared ClientSession, per-request timeout,
# status-code classification into UpstreamError (upstream detail passed through),
# exception transformation and request statistics. No retries.

# 🔗 Dependencies:
# - aiohttp: Async HTTP client
# - marketplace.shared.core.exceptions (UpstreamError)

# 🔄 Connected Modules / Calls From:
# Used by: AuthServiceClient (credential service)

import asyncio
import json
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import aiohttp
from aiohttp import ClientSession, ClientTimeout

from marketplace.shared.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class APIClient:
    """
    Generic async HTTP client for external service integrations.

    Features:
    - Lazily created shared session
    - Upstream status classification
    - Request/response logging
    - Basic request statistics
    """

    def __init__(
        self,
        base_url: str,
        api_name: str,
        timeout: int = 30,
        session: Optional[ClientSession] = None
    ):
        """Initialize API client with configuration."""
        self.base_url = base_url.rstrip('/') + '/'
        self.api_name = api_name
        self.timeout = timeout
        self.session: Optional[ClientSession] = session
        self._owns_session = session is None

        self.stats = {
            'total_requests': 0,
            'successful_requests': 0,
            'failed_requests': 0,
            'average_response_time': 0,
            'last_request_time': None,
        }

    async def initialize(self):
        """Initialize the client session."""
        if self.session is not None:
            return
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.timeout),
            headers=self._get_default_headers()
        )
        self._owns_session = True
        logger.info(f"API client initialized for {self.api_name}")

    def _get_default_headers(self) -> Dict[str, str]:
        """Get default headers for requests."""
        return {
            'User-Agent': f'MarketplaceUserService/1.0 ({self.api_name}-client)',
            'Accept': 'application/json',
            'Content-Type': 'application/json'
        }

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """Make a single HTTP request and return the decoded JSON body."""
        if not self.session:
            await self.initialize()

        url = urljoin(self.base_url, endpoint.lstrip('/'))
        request_headers = self._get_default_headers()
        if headers:
            request_headers.update(headers)

        start_time = time.time()
        self.stats['total_requests'] += 1
        self.stats['last_request_time'] = datetime.now(timezone.utc).isoformat()

        try:
            async with self.session.request(
                method,
                url,
                json=data,
                headers=request_headers,
                timeout=ClientTimeout(total=self.timeout)
            ) as response:
                response_time = time.time() - start_time
                self._record_response_time(response_time)

                await self._handle_response_status(response)

                body = await response.text()
                self.stats['successful_requests'] += 1
                logger.info(
                    f"{self.api_name} request successful: "
                    f"{method} {url} - {response.status} - {response_time:.2f}s"
                )
                return json.loads(body) if body else {}

        except UpstreamError:
            self.stats['failed_requests'] += 1
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, json.JSONDecodeError) as e:
            self.stats['failed_requests'] += 1
            raise self._transform_exception(e, method, url)

    def _record_response_time(self, response_time: float) -> None:
        if self.stats['average_response_time'] == 0:
            self.stats['average_response_time'] = response_time
        else:
            self.stats['average_response_time'] = (
                self.stats['average_response_time'] * 0.7 + response_time * 0.3
            )

    async def _handle_response_status(self, response: aiohttp.ClientResponse):
        """Raise UpstreamError for any non-2xx status, carrying the upstream detail."""
        if 200 <= response.status < 300:
            return

        detail = self._extract_detail(await response.text()) or f"{self.api_name} returned {response.status}"
        logger.warning(f"{self.api_name} rejected request with status {response.status}: {detail}")
        raise UpstreamError(detail, service_name=self.api_name, upstream_status=response.status)

    @staticmethod
    def _extract_detail(body: str) -> str:
        """Pull a human readable message out of an error body (JSON or plain text)."""
        body = body.strip()
        if not body:
            return ""
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
        if isinstance(parsed, dict):
            for field in ('message', 'detail', 'error'):
                value = parsed.get(field)
                if isinstance(value, str) and value:
                    return value
        if isinstance(parsed, str):
            return parsed
        return body

    def _transform_exception(self, exception: Exception, method: str, url: str) -> UpstreamError:
        """Transform transport exceptions into UpstreamError."""
        if isinstance(exception, asyncio.TimeoutError):
            logger.error(f"Timeout for {self.api_name}: {method} {url}")
            return UpstreamError(f"{self.api_name} did not respond in time", service_name=self.api_name)
        if isinstance(exception, json.JSONDecodeError):
            logger.error(f"Malformed response from {self.api_name}: {method} {url}")
            return UpstreamError(f"{self.api_name} returned a malformed response", service_name=self.api_name)
        logger.error(f"Client error for {self.api_name}: {exception}")
        return UpstreamError(f"{self.api_name} is unavailable", service_name=self.api_name)

    async def post(
        self,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """Make POST request."""
        return await self._make_request('POST', endpoint, data, headers)

    def get_stats(self) -> Dict[str, Any]:
        """Get client performance statistics."""
        return {
            **self.stats,
            'api_name': self.api_name,
            'error_rate': (
                self.stats['failed_requests'] / max(self.stats['total_requests'], 1)
            ) * 100,
        }

    async def close(self):
        """Close the client session and cleanup resources."""
        if self.session and self._owns_session:
            await self.session.close()
        self.session = None
        logger.info(f"API client closed for {self.api_name}")
