"""Exceptions for the bookamatpy library."""

from typing import Any

import httpx


class BookamatError(Exception):
    """Base exception for all bookamatpy errors."""

    pass


class BookamatAPIError(BookamatError, httpx.HTTPStatusError):
    """Raised when the Bookamat API answers with an error status.

    Extends httpx.HTTPStatusError so users can catch both BookamatAPIError
    and httpx.HTTPStatusError to handle API errors. The message always has the
    form ``HTTP <status>: <response body>``.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str = "",
        response_data: Any = None,
        request: httpx.Request | None = None,
        response: httpx.Response | None = None,
    ) -> None:
        """Initialize BookamatAPIError.

        Args:
            message: Error message
            status_code: HTTP status code from the API response
            response_text: Raw response body
            response_data: Decoded JSON body, if the body was JSON
            request: The request that caused the error
            response: The response from the API
        """
        if request is not None and response is not None:
            httpx.HTTPStatusError.__init__(
                self, message, request=request, response=response
            )
        else:
            # Raised without full httpx objects, e.g. in tests
            Exception.__init__(self, message)
            self.response = response

        self.message = message
        self.status_code = status_code
        self.response_text = response_text
        self.response_data = response_data if response_data is not None else {}

    def __str__(self) -> str:
        return self.message


class BookamatValidationError(BookamatAPIError):
    """Raised when request validation fails (400)."""

    pass


class BookamatAuthError(BookamatAPIError):
    """Raised when authentication fails (401/403)."""

    pass


class BookamatNotFoundError(BookamatAPIError):
    """Raised when a resource is not found (404)."""

    pass


class BookamatMethodNotAllowedError(BookamatAPIError):
    """Raised when HTTP method is not allowed (405)."""

    pass


class BookamatUnsupportedMediaTypeError(BookamatAPIError):
    """Raised when media type is not supported (415)."""

    pass


class BookamatRateLimitError(BookamatAPIError):
    """Raised when too many requests were sent (429)."""

    pass


class BookamatServerError(BookamatAPIError):
    """Raised when server encounters an error (5xx)."""

    pass
