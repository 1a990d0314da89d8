from typing import Any, Dict, Optional, Type

import httpx
from httpx import HTTPStatusError, TimeoutException

from app.core.exceptions import APIClientError, APITimeoutError
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


class BaseHTTPClient:
    """Base client for JSON HTTP APIs.

    Handles request construction, timeout management and error logging.
    Calls are single-shot: failures are translated into application errors
    and surfaced to the caller without retrying.
    """

    error_class: Type[APIClientError] = APIClientError

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the HTTP client.

        Args:
            base_url: Base URL for the API
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used to stub the network in tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.logger = LOGGER

    async def call_api(
        self,
        endpoint: str = "",
        method: str = "GET",
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Call the API once.

        Args:
            endpoint: API endpoint (appended to base_url)
            method: HTTP method (GET, PUT, POST)
            params: Query parameters
            payload: JSON payload
            headers: Additional headers

        Returns:
            Parsed JSON response

        Raises:
            APIClientError: If the API returns a non-success status or is unreachable
            APITimeoutError: If the API call times out
        """
        url = f"{self.base_url}{endpoint}"

        default_headers = {"Content-Type": "application/json"}
        if headers:
            default_headers.update(headers)

        self.logger.debug(
            f"Calling API: {url}",
            extra={"method": method, "timeout": self.timeout}
        )

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.request(
                    method.upper(),
                    url,
                    params=params,
                    json=payload,
                    headers=default_headers,
                )
                response.raise_for_status()
                return response.json()

            except HTTPStatusError as e:
                self._raise_http_error(e, url)

            except TimeoutException as e:
                self.logger.warning("API Timeout", extra={"url": url})
                raise APITimeoutError(f"API Timeout calling {url}", original_error=e) from e

            except (httpx.HTTPError, ValueError) as e:
                self.logger.warning("API Error", extra={"url": url, "error": str(e)})
                raise self.error_class(f"API Error: {str(e)}", original_error=e) from e

    def _raise_http_error(self, error: HTTPStatusError, url: str):
        """Log and translate an HTTP status error."""
        status_code = error.response.status_code
        error_body = error.response.text

        self.logger.warning(
            "API HTTP error",
            extra={
                "url": url,
                "status_code": status_code,
                "error_body": error_body[:500]  # Truncate for logs
            }
        )
        raise self.error_class(
            f"API HTTP Error {status_code}: {error.response.reason_phrase}",
            original_error=error,
        ) from error
