"""Public exceptions for the Bangumi SDK."""


class BangumiError(Exception):
    """Base exception for all Bangumi SDK errors."""


class BangumiAPIError(BangumiError):
    """Error from the Bangumi API."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnexpectedStatusError(BangumiAPIError):
    """The API answered with a status outside the accepted set for the call."""

    def __init__(self, status_code: int, *, method: str | None = None, url: str | None = None) -> None:
        target = f" for {method} {url}" if method and url else ""
        super().__init__(f"Unexpected status {status_code}{target}", status_code=status_code)
        self.method = method
        self.url = url


class InvalidParameterError(BangumiError, ValueError):
    """A parameter could not be mapped onto the request (unknown label, missing value)."""

    def __init__(self, message: str, *, parameter: str | None = None, value: object = None) -> None:
        super().__init__(message)
        self.parameter = parameter
        self.value = value


class RequestBuildError(BangumiError):
    """Malformed method, URL or body prevented the request from being built."""


class TransportError(BangumiError):
    """Network failure, timeout or connection-level error reported by httpx."""


class BodyReadError(BangumiError):
    """Response body could not be fully read after a successful status."""


class BangumiConfigError(BangumiError, ValueError):
    """Configuration error (malformed env vars, invalid config)."""
