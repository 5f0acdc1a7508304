"""Transport dispatcher for Bangumi API requests."""

import httpx
from pydantic import ValidationError

from bangumi_sdk._internal.dispatch.models import (
    BODY_STATUSES,
    SUCCESS_STATUSES,
    Credentials,
    HttpMethod,
    RequestDescriptor,
)
from bangumi_sdk._internal.dispatch.redaction import format_headers
from bangumi_sdk.exceptions import (
    BodyReadError,
    RequestBuildError,
    TransportError,
    UnexpectedStatusError,
)


class Dispatcher:
    """Sends shaped requests and interprets the status code.

    Two primitives mirror the two response shapes of the API: read
    endpoints return content (`fetch_body`), mutation endpoints return an
    empty acknowledgement (`fetch_success`). Both raise on failure; neither
    retries.

    The httpx client is injected and never closed here. Timeouts and
    connection pooling are whatever that client was configured with.
    """

    def __init__(
        self,
        credentials: Credentials,
        http_client: httpx.Client,
        *,
        debug: bool = False,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            credentials: Token and user agent sent with every request.
            http_client: The httpx client used to execute requests.
            debug: Enable debug logging to stderr.
        """
        self._credentials = credentials
        self._http_client = http_client
        self._debug = debug

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            import sys

            print(f"[bangumi-sdk] {message}", file=sys.stderr)

    def fetch_body(
        self,
        method: HttpMethod | str,
        url: str,
        body: bytes | str | None = None,
    ) -> bytes:
        """Send a request and return the response body.

        Args:
            method: HTTP method.
            url: Absolute, percent-encoded URL.
            body: Pre-encoded payload, forwarded verbatim. Empty means none.

        Returns:
            The raw response bytes. Only a 200 status is accepted.

        Raises:
            RequestBuildError: The request could not be constructed.
            TransportError: The connection failed or timed out.
            UnexpectedStatusError: The status was anything other than 200.
            BodyReadError: The body could not be read completely.
        """
        request = self._build_request(method, url, body)
        response = self._send(request)
        try:
            self._check_status(request, response, BODY_STATUSES)
            try:
                content = response.read()
            except (httpx.StreamError, httpx.TransportError) as e:
                self._log_debug(f"Body read failed: {e}")
                raise BodyReadError(f"Failed to read response body from {request.url}") from e
            self._log_debug(f"Read {len(content)} bytes")
            return content
        finally:
            response.close()

    def fetch_success(
        self,
        method: HttpMethod | str,
        url: str,
        body: bytes | str | None = None,
    ) -> bool:
        """Send a request whose response carries no content.

        Args:
            method: HTTP method.
            url: Absolute, percent-encoded URL.
            body: Pre-encoded payload, forwarded verbatim. Empty means none.

        Returns:
            True when the status is 200 or 204. Every other outcome raises,
            so False is never returned.

        Raises:
            RequestBuildError: The request could not be constructed.
            TransportError: The connection failed or timed out.
            UnexpectedStatusError: The status was neither 200 nor 204.
        """
        request = self._build_request(method, url, body)
        response = self._send(request)
        try:
            self._check_status(request, response, SUCCESS_STATUSES)
            return True
        finally:
            response.close()

    def _build_request(
        self,
        method: HttpMethod | str,
        url: str,
        body: bytes | str | None,
    ) -> httpx.Request:
        """Validate the descriptor and build the httpx request."""
        try:
            descriptor = RequestDescriptor(method=method, url=url, body=body)  # type: ignore[arg-type]
            return self._http_client.build_request(
                descriptor.method.value,
                descriptor.url,
                content=descriptor.body,
                headers=self._credentials.headers(),
            )
        except ValidationError as e:
            raise RequestBuildError(f"Invalid request {method} {url}: {e}") from e
        except httpx.InvalidURL as e:
            raise RequestBuildError(f"Invalid URL {url}: {e}") from e
        except UnicodeEncodeError as e:
            # httpx encodes header values as ASCII
            raise RequestBuildError(f"Header values must be ASCII: {e}") from e

    def _send(self, request: httpx.Request) -> httpx.Response:
        """Execute the request, streaming so the body is read on demand."""
        self._log_debug(
            f"{request.method} {request.url} [{format_headers(request.headers)}]"
        )
        try:
            return self._http_client.send(request, stream=True)
        except httpx.TimeoutException as e:
            self._log_debug("Request timed out")
            raise TransportError(f"Timed out: {request.method} {request.url}") from e
        except httpx.TransportError as e:
            self._log_debug(f"Transport error: {e}")
            raise TransportError(f"Connection failed: {request.method} {request.url}") from e

    def _check_status(
        self,
        request: httpx.Request,
        response: httpx.Response,
        accepted: frozenset[int],
    ) -> None:
        if response.status_code in accepted:
            self._log_debug(f"Status {response.status_code}")
            return
        self._log_debug(f"Failed with status {response.status_code}")
        raise UnexpectedStatusError(
            response.status_code,
            method=request.method,
            url=str(request.url),
        )
