"""
Remote Store Client
Minimal JSON-over-HTTP client for the EduNexus backend
"""
import asyncio
from typing import Any, Dict, List, Optional

import requests

from edunexus_core.api.config_manager import StorageConfig
from edunexus_core.errors import BackendUnavailable, MalformedResponse
from edunexus_core.logging import get_logger

logger = get_logger(__name__)


class RemoteStoreClient:
    """
    Issues one request per call against the backend.

    No retries and no timeout beyond the transport default. Every failure
    surfaces as BackendUnavailable or MalformedResponse.

    Usage:
        client = RemoteStoreClient(StorageConfig(api_url="http://localhost:5000/api"))
        users = await client.get("/users")
        await client.post("/users/login", {"userId": "u2"})
    """

    def __init__(self, config: StorageConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if config.headers:
            self.session.headers.update(config.headers)

    @property
    def base_url(self) -> str:
        return self.config.api_url

    async def get(self, endpoint: str) -> List[Any]:
        """
        List a collection.

        Raises:
            BackendUnavailable: transport failure or non-2xx status
            MalformedResponse: body is not a JSON list
        """
        response = await asyncio.to_thread(self._make_request, endpoint, "GET")
        payload = self._decode(response, endpoint)
        if not isinstance(payload, list):
            raise MalformedResponse(
                f"Expected a JSON list from {endpoint}, got {type(payload).__name__}",
                endpoint=endpoint,
            )
        return payload

    async def post(self, endpoint: str, body: Optional[Dict[str, Any]] = None) -> Optional[Any]:
        """
        Append a record or trigger an update.

        Returns:
            The server's decoded JSON body, or None when the body is empty
        """
        response = await asyncio.to_thread(self._make_request, endpoint, "POST", body)
        if not response.content or not response.content.strip():
            return None
        return self._decode(response, endpoint)

    def _make_request(
        self,
        endpoint: str,
        method: str = "GET",
        data: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        """
        Make HTTP request with error handling

        Args:
            endpoint: Path appended to the base URL (e.g. "/users")
            method: HTTP method
            data: JSON body for POST requests

        Returns:
            Response object with a 2xx status
        """
        url = f"{self.base_url}{endpoint}"

        try:
            response = self.session.request(method=method, url=url, json=data)
        except requests.exceptions.RequestException as e:
            raise BackendUnavailable(
                f"{method} {url} failed: {e}",
                endpoint=endpoint,
            ) from e

        if not response.ok:
            raise BackendUnavailable(
                f"{method} {url} returned HTTP {response.status_code}",
                endpoint=endpoint,
                status_code=response.status_code,
            )

        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    @staticmethod
    def _decode(response: requests.Response, endpoint: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponse(
                f"Undecodable payload from {endpoint}: {e}",
                endpoint=endpoint,
            ) from e

    def close(self) -> None:
        self.session.close()
