import json
from collections.abc import Generator
from contextlib import contextmanager

import httpx


class PageGridError(Exception):
    """Base exception for all pagegrid errors."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class TransportError(PageGridError):
    """Raised when fetching a page from a remote endpoint fails."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.url = url
        self.status_code = status_code


class MalformedRecordError(PageGridError):
    """
    Raised when a record does not have the shape a column expects:
    the column path is missing, or it resolves to a nested mapping
    where a scalar value is required.
    """

    def __init__(
        self, path: str, reason: str, original_error: Exception | None = None
    ) -> None:
        super().__init__(f"Cannot resolve '{path}': {reason}", original_error)
        self.path = path
        self.reason = reason


class ConfigurationError(PageGridError):
    """Raised for missing, conflicting or invalid grid options."""

    def __init__(
        self,
        message: str,
        option: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.option = option


@contextmanager
def handle_transport_errors(url: str | None = None) -> Generator[None, None, None]:
    """
    Context manager that catches httpx errors and undecodable response bodies
    and raises a TransportError carrying the url and HTTP status.

    Args:
        url: Optional endpoint url for better error messages

    Usage:
        with handle_transport_errors(url=endpoint):
            response = await client.get(endpoint, params=params)
            response.raise_for_status()
    """
    try:
        yield
    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        raise TransportError(
            f"Endpoint responded with HTTP {status_code}",
            url=url,
            status_code=status_code,
            original_error=e,
        ) from e
    except httpx.TimeoutException as e:
        raise TransportError("Request timed out", url=url, original_error=e) from e
    except httpx.RequestError as e:
        raise TransportError(
            f"Request failed: {e!s}", url=url, original_error=e
        ) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise TransportError(
            "Response body is not valid JSON", url=url, original_error=e
        ) from e
