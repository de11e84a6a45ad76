"""Base client functionality for the Bookamat API."""

from __future__ import annotations

import base64
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, BinaryIO, Protocol

import httpx
from pydantic import BaseModel, Field

from bookamatpy.exceptions import (
    BookamatAPIError,
    BookamatAuthError,
    BookamatMethodNotAllowedError,
    BookamatNotFoundError,
    BookamatRateLimitError,
    BookamatServerError,
    BookamatUnsupportedMediaTypeError,
    BookamatValidationError,
)

logger = logging.getLogger(__name__)

NO_RESPONSE_BODY = "[no response body]"


class ClientConfig:
    """Configuration for Bookamat API client."""

    BASE_URL = "https://www.bookamat.com/api/v1"
    DEFAULT_COUNTRY = "at"
    DEFAULT_TIMEOUT = 30.0


class AsyncTransport(Protocol):
    """Anything that can send a GET request, e.g. httpx.AsyncClient."""

    async def get(
        self, url: httpx.URL | str, *, headers: Mapping[str, str]
    ) -> httpx.Response: ...


def parse_error_response(response: httpx.Response) -> BookamatAPIError:
    """Parse error response and return appropriate exception.

    Args:
        response: HTTP response from the API

    Returns:
        Appropriate BookamatAPIError subclass
    """
    status_code = response.status_code
    try:
        text = response.text
    except httpx.ResponseNotRead:
        text = ""
    message = f"HTTP {status_code}: {text or NO_RESPONSE_BODY}"

    try:
        error_data: Any = response.json()
    except (ValueError, httpx.ResponseNotRead):
        error_data = {}

    # Responses built by hand (tests, custom transports) carry no request
    try:
        request: httpx.Request | None = response.request
    except RuntimeError:
        request = None

    if status_code == 400:
        error_class: type[BookamatAPIError] = BookamatValidationError
    elif status_code in (401, 403):
        error_class = BookamatAuthError
    elif status_code == 404:
        error_class = BookamatNotFoundError
    elif status_code == 405:
        error_class = BookamatMethodNotAllowedError
    elif status_code == 415:
        error_class = BookamatUnsupportedMediaTypeError
    elif status_code == 429:
        error_class = BookamatRateLimitError
    elif status_code >= 500:
        error_class = BookamatServerError
    else:
        error_class = BookamatAPIError

    return error_class(message, status_code, text, error_data, request, response)


def prepare_attachment(
    file: Path | str | BinaryIO | bytes,
    filename: str | None = None,
) -> tuple[str, str]:
    """Prepare a file for upload.

    Bookamat accepts attachments as base64 strings inside a JSON body.

    Args:
        file: File path, file path string, file-like object or raw bytes
        filename: Optional filename override

    Returns:
        Tuple of (filename, base64_content)
    """
    if isinstance(file, (Path, str)):
        file_path = Path(file)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        actual_filename = filename or file_path.name
        file_bytes = file_path.read_bytes()
    elif isinstance(file, bytes):
        actual_filename = filename or "attachment"
        file_bytes = file
    else:
        actual_filename = filename or Path(getattr(file, "name", "attachment")).name
        file_bytes = file.read()

    return actual_filename, base64.b64encode(file_bytes).decode("ascii")


def _is_absent(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def sanitize_payload(value: Any) -> Any:
    """Recursively drop ``None`` and empty-string entries from a payload.

    Bookamat treats a null or blank field in a write request as an instruction
    to clear it, so absent values must not be sent at all. ``0`` and ``False``
    are kept. Mappings that end up empty are kept as ``{}``.

    Args:
        value: Scalar, list/tuple or mapping, arbitrarily nested

    Returns:
        A cleaned copy; sequences come back as lists, mappings as dicts
    """
    if isinstance(value, (list, tuple)):
        cleaned = [sanitize_payload(item) for item in value]
        return [item for item in cleaned if not _is_absent(item)]

    if isinstance(value, Mapping):
        result: dict[Any, Any] = {}
        for key, item in value.items():
            if _is_absent(item):
                continue
            cleaned_item = sanitize_payload(item)
            if not _is_absent(cleaned_item):
                result[key] = cleaned_item
        return result

    return value


def build_url(url: str | httpx.URL, params: Mapping[str, Any] | None = None) -> httpx.URL:
    """Attach filter query parameters to a URL.

    ``None`` values are skipped, as is ``page`` since pagination is handled by
    ``fetch_all_pages``.
    """
    result = httpx.URL(url)
    filters = {
        key: value
        for key, value in (params or {}).items()
        if value is not None and key != "page"
    }
    if filters:
        result = result.copy_merge_params(filters)
    return result


class PageEnvelope(BaseModel):
    """One page wrapped with pagination metadata."""

    count: int | None = None
    next: str | None = None
    previous: str | None = None
    results: list[Any] = Field(default_factory=list)


class BareList(BaseModel):
    """One page returned as a plain JSON array."""

    items: list[Any] = Field(default_factory=list)


def parse_page(data: Any) -> PageEnvelope | BareList:
    """Decide the shape of a decoded page body.

    Objects become a PageEnvelope; ``results`` and ``next`` are only taken when
    they have the expected types. Arrays become a BareList. Anything else is an
    empty envelope.
    """
    if isinstance(data, dict):
        results = data.get("results")
        next_link = data.get("next")
        previous_link = data.get("previous")
        count = data.get("count")
        return PageEnvelope(
            count=count if isinstance(count, int) and not isinstance(count, bool) else None,
            next=next_link if isinstance(next_link, str) else None,
            previous=previous_link if isinstance(previous_link, str) else None,
            results=results if isinstance(results, list) else [],
        )
    if isinstance(data, list):
        return BareList(items=data)
    return PageEnvelope()


def _signals_end_of_pages(error: Exception) -> bool:
    message = str(error)
    if "Invalid page" in message or "HTTP 404" in message:
        return True
    response = getattr(error, "response", None)
    return (
        isinstance(error, httpx.HTTPStatusError)
        and response is not None
        and response.status_code == 404
    )


async def fetch_all_pages(
    client: AsyncTransport,
    base_url: str | httpx.URL,
    headers: Mapping[str, str],
    api_root: str | None = None,
) -> list[Any]:
    """Fetch every page of a list endpoint and return all items in order.

    The first request always asks for ``page=1``. Server ``next`` links are
    followed when present; otherwise, as long as pages keep yielding items, the
    page number on the original URL is incremented. A 404 ends the traversal,
    and so does any error raised on the way whose message mentions an invalid
    page or ``HTTP 404``.

    Args:
        client: Transport used for the GET requests
        base_url: Resource URL, optionally with filter query parameters
        headers: Request headers, used unchanged for every page
        api_root: Root used to resolve a relative base_url

    Returns:
        All items of all pages

    Raises:
        BookamatAPIError: On any error status other than 404
        json.JSONDecodeError: If a successful response body is not JSON
        Exception: Any other error from the transport, unchanged
    """
    start_url = httpx.URL(api_root).join(base_url) if api_root else httpx.URL(base_url)
    start_url = start_url.copy_remove_param("page")

    items: list[Any] = []
    fallback_page = 1
    next_url: httpx.URL | None = start_url.copy_set_param("page", fallback_page)

    while next_url is not None:
        logger.debug("Fetching page %s", next_url)
        try:
            response = await client.get(next_url, headers=headers)
            if response.status_code == 404:
                logger.debug("Got 404 for %s, no more pages", next_url)
                break
            if not response.is_success:
                raise parse_error_response(response)

            page = parse_page(response.json())
            if isinstance(page, PageEnvelope):
                page_items, next_link = page.results, page.next
            else:
                page_items, next_link = page.items, None
            items.extend(page_items)

            if next_link:
                # Absolute links replace the URL, relative ones resolve against it
                next_url = next_url.join(next_link)
                fallback_page = 1
            elif page_items:
                fallback_page += 1
                next_url = start_url.copy_set_param("page", fallback_page)
            else:
                next_url = None
        except Exception as exc:
            if _signals_end_of_pages(exc):
                logger.debug("No more pages after %s: %s", next_url, exc)
                break
            raise

    logger.debug("Collected %d items from %s", len(items), start_url)
    return items
