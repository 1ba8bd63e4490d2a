"""
JSON over HTTP (httpx).

One AsyncClient per call: probes run concurrently and independently, and
a per-call client keeps cancellation of one probe from touching another.
"""
import logging
from typing import Any, Mapping, Optional
from urllib.parse import urlsplit

import httpx

from ..config import HTTP_TIMEOUT, USER_AGENT
from ..domain.errors import HttpError

logger = logging.getLogger(__name__)


class JsonHttpClient:
    def __init__(self, timeout: float = HTTP_TIMEOUT, user_agent: str = USER_AGENT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport

    async def get_json(self, url: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._request("GET", url, params=params)

    async def post_json(self, url: str, body: Any, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._request("POST", url, params=params, json=body)

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        # Query strings carry API keys: only the host goes into messages
        host = urlsplit(url).netloc or url
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                headers={"User-Agent": self.user_agent, "Accept": "application/json"},
            ) as client:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            raise HttpError(f"HTTP {e.response.status_code} from {host}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug(f"{method} {host} failed: {type(e).__name__}")
            raise HttpError(f"{type(e).__name__} talking to {host}") from e
        except ValueError as e:
            raise HttpError(f"invalid JSON from {host}") from e
