"""Tests for the pagination and payload helpers."""

import base64
import io
from pathlib import Path

import httpx
import pytest
import respx
from httpx import Response

from bookamatpy.client_base import (
    BareList,
    PageEnvelope,
    build_url,
    fetch_all_pages,
    parse_error_response,
    parse_page,
    prepare_attachment,
    sanitize_payload,
)
from bookamatpy.exceptions import (
    BookamatAPIError,
    BookamatAuthError,
    BookamatNotFoundError,
    BookamatServerError,
    BookamatValidationError,
)

HEADERS = {"Authorization": "ApiKey user:key"}


class TestSanitizePayload:
    """Test removal of absent values from payloads."""

    def test_removes_none_and_empty_strings(self):
        """Test nested mappings and lists are cleaned."""
        payload = {
            "a": 1,
            "b": None,
            "d": "",
            "e": {
                "f": None,
                "g": "value",
                "h": "",
                "i": {"j": None, "k": 2},
            },
            "arr": [1, None, "", 2, None, {"x": None, "y": 3}],
        }
        assert sanitize_payload(payload) == {
            "a": 1,
            "e": {"g": "value", "i": {"k": 2}},
            "arr": [1, 2, {"y": 3}],
        }

    def test_all_absent_mapping_becomes_empty_mapping(self):
        """Test a fully absent top level mapping stays a mapping."""
        assert sanitize_payload({"a": None, "b": ""}) == {}

    def test_sequence_keeps_order(self):
        """Test valid sequence elements survive in order."""
        assert sanitize_payload([1, None, "", 2, None]) == [1, 2]

    def test_falsy_values_are_kept(self):
        """Test 0 and False are not treated as absent."""
        assert sanitize_payload({"a": 0, "b": False, "c": "x"}) == {
            "a": 0,
            "b": False,
            "c": "x",
        }

    def test_empty_mappings_in_lists_are_kept(self):
        """Test objects emptied by cleaning are not dropped from lists."""
        assert sanitize_payload([{"a": 1, "b": None}, {"a": None}]) == [{"a": 1}, {}]

    def test_tuples_become_lists(self):
        """Test tuples are cleaned like lists."""
        assert sanitize_payload((1, None, "x")) == [1, "x"]

    def test_scalars_pass_through(self):
        """Test scalars are returned unchanged."""
        assert sanitize_payload(5) == 5
        assert sanitize_payload("text") == "text"
        assert sanitize_payload(None) is None

    def test_does_not_mutate_input(self):
        """Test the input payload is left untouched."""
        payload = {"a": None, "b": [None, 1]}
        sanitize_payload(payload)
        assert payload == {"a": None, "b": [None, 1]}

    @pytest.mark.parametrize(
        "payload",
        [
            {"a": {"b": {"c": None}}, "d": [[None, ""], {"e": ""}]},
            [None, {"x": [None, 0, False]}, ""],
            {"title": "Rent", "amounts": [{"amount": "10.00", "country_dep": ""}]},
        ],
    )
    def test_idempotent(self, payload):
        """Test sanitizing twice equals sanitizing once."""
        once = sanitize_payload(payload)
        assert sanitize_payload(once) == once


class TestParsePage:
    """Test page shape detection."""

    def test_envelope(self):
        """Test an object with results becomes an envelope."""
        page = parse_page({"count": 3, "next": "https://x/?page=2", "previous": None, "results": [1, 2]})
        assert isinstance(page, PageEnvelope)
        assert page.results == [1, 2]
        assert page.next == "https://x/?page=2"
        assert page.count == 3

    def test_bare_list(self):
        """Test a JSON array becomes a bare list."""
        page = parse_page([1, 2, 3])
        assert isinstance(page, BareList)
        assert page.items == [1, 2, 3]

    def test_wrongly_typed_fields_are_ignored(self):
        """Test non-list results and non-string next are dropped."""
        page = parse_page({"results": "nope", "next": 2})
        assert isinstance(page, PageEnvelope)
        assert page.results == []
        assert page.next is None

    def test_scalar_body_is_empty(self):
        """Test a scalar body yields no items."""
        page = parse_page("unexpected")
        assert isinstance(page, PageEnvelope)
        assert page.results == []


class TestParseErrorResponse:
    """Test mapping of error statuses onto exceptions."""

    @pytest.mark.parametrize(
        ("status_code", "error_class"),
        [
            (400, BookamatValidationError),
            (401, BookamatAuthError),
            (403, BookamatAuthError),
            (404, BookamatNotFoundError),
            (500, BookamatServerError),
            (502, BookamatServerError),
            (418, BookamatAPIError),
        ],
    )
    def test_status_mapping(self, status_code, error_class):
        """Test each status gets its exception class."""
        error = parse_error_response(Response(status_code, text="boom"))
        assert type(error) is error_class
        assert error.status_code == status_code
        assert str(error) == f"HTTP {status_code}: boom"

    def test_empty_body_uses_placeholder(self):
        """Test an empty body is replaced by a placeholder."""
        error = parse_error_response(Response(500))
        assert str(error) == "HTTP 500: [no response body]"

    def test_json_body_is_kept(self):
        """Test JSON error bodies are decoded."""
        error = parse_error_response(Response(400, json={"title": ["This field is required."]}))
        assert error.response_data == {"title": ["This field is required."]}

    def test_is_httpx_status_error(self):
        """Test errors can be caught as httpx.HTTPStatusError."""
        request = httpx.Request("GET", "https://www.bookamat.com/api/v1/at/2024/bookings/")
        response = Response(401, text="denied", request=request)
        error = parse_error_response(response)
        assert isinstance(error, httpx.HTTPStatusError)
        assert error.response is response
        assert error.request is request


class TestPrepareAttachment:
    """Test attachment preparation."""

    def test_from_path(self, tmp_path: Path):
        """Test files on disk are read and encoded."""
        file_path = tmp_path / "invoice.pdf"
        file_path.write_bytes(b"%PDF-1.4")
        name, content = prepare_attachment(file_path)
        assert name == "invoice.pdf"
        assert base64.b64decode(content) == b"%PDF-1.4"

    def test_from_bytes_with_filename(self):
        """Test raw bytes use the given filename."""
        name, content = prepare_attachment(b"abc", filename="receipt.txt")
        assert name == "receipt.txt"
        assert content == base64.b64encode(b"abc").decode("ascii")

    def test_from_file_object(self):
        """Test file-like objects are read."""
        name, content = prepare_attachment(io.BytesIO(b"data"), filename="scan.png")
        assert name == "scan.png"
        assert base64.b64decode(content) == b"data"

    def test_missing_file(self, tmp_path: Path):
        """Test a missing path raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            prepare_attachment(tmp_path / "missing.pdf")


class TestBuildUrl:
    """Test filter query construction."""

    def test_skips_none_and_page(self):
        """Test None values and page are not added."""
        url = build_url(
            "https://x/bookings/", {"date_from": "2024-01-01", "tag": None, "page": 3}
        )
        assert url.params.get("date_from") == "2024-01-01"
        assert "tag" not in url.params
        assert "page" not in url.params

    def test_booleans_are_lowercase(self):
        """Test booleans are sent the way the API expects."""
        url = build_url("https://x/bookings/", {"has_attachments": True})
        assert url.params["has_attachments"] == "true"


class TestFetchAllPages:
    """Test walking paginated listings."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_follows_next_links(self):
        """Test pages linked by next are concatenated."""
        route = respx.get("http://localhost/resource").mock(
            side_effect=[
                Response(200, json={"results": [1, 2], "next": "http://localhost/resource?page=2"}),
                Response(200, json={"results": [3], "next": None}),
                Response(404, text="not found"),
            ]
        )

        async with httpx.AsyncClient() as client:
            result = await fetch_all_pages(client, "http://localhost/resource", HEADERS)

        assert result == [1, 2, 3]
        assert route.call_count == 3
        assert route.calls[0].request.url.params["page"] == "1"
        assert route.calls[0].request.headers["Authorization"] == "ApiKey user:key"

    @pytest.mark.asyncio
    async def test_single_page_then_404(self, fake_transport):
        """Test a page without next followed by a 404 on the next page."""
        transport = fake_transport(
            [
                Response(200, json={"count": 2, "results": ["a", "b"]}),
                Response(404, text="Invalid page."),
            ]
        )
        result = await fetch_all_pages(transport, "https://x/items/", HEADERS)
        assert result == ["a", "b"]
        assert transport.pages == ["1", "2"]

    @pytest.mark.asyncio
    async def test_first_page_404_returns_empty(self, fake_transport):
        """Test a 404 on the first page means no data."""
        transport = fake_transport([Response(404)])
        assert await fetch_all_pages(transport, "https://x/items/", HEADERS) == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_server_error_raises(self):
        """Test non-404 errors are raised with status and body."""
        respx.get("http://localhost/resource").mock(
            return_value=Response(500, text="server error")
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(BookamatServerError, match="HTTP 500"):
                await fetch_all_pages(client, "http://localhost/resource", HEADERS)

    @pytest.mark.asyncio
    async def test_bare_array_then_404(self, fake_transport):
        """Test bare array pages are collected."""
        transport = fake_transport([Response(200, json=[1, 2, 3]), Response(404)])
        assert await fetch_all_pages(transport, "https://x/items/", HEADERS) == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_fallback_stops_on_empty_page(self, fake_transport):
        """Test page numbers are incremented until a page comes back empty."""
        transport = fake_transport(
            [
                Response(200, json=[{"id": 1}]),
                Response(200, json={"results": [{"id": 2}]}),
                Response(200, json={"results": []}),
            ]
        )
        result = await fetch_all_pages(transport, "https://x/items/", HEADERS)
        assert result == [{"id": 1}, {"id": 2}]
        assert transport.pages == ["1", "2", "3"]

    @pytest.mark.asyncio
    async def test_first_request_resets_page_and_keeps_filters(self, fake_transport):
        """Test a caller supplied page is replaced by page 1."""
        transport = fake_transport([Response(200, json=[])])
        await fetch_all_pages(
            transport, "https://x/bookings/?page=5&date_from=2024-01-01", HEADERS
        )
        url, headers = transport.calls[0]
        assert url.params.get_list("page") == ["1"]
        assert url.params["date_from"] == "2024-01-01"
        assert headers == HEADERS

    @pytest.mark.asyncio
    async def test_fallback_pages_keep_filters(self, fake_transport):
        """Test fallback URLs are derived from the original URL."""
        transport = fake_transport([Response(200, json=[1]), Response(404)])
        await fetch_all_pages(transport, "https://x/bookings/?tag=7", HEADERS)
        url, _ = transport.calls[1]
        assert url.params["tag"] == "7"
        assert url.params["page"] == "2"

    @pytest.mark.asyncio
    async def test_relative_base_url_uses_api_root(self, fake_transport):
        """Test relative resource URLs resolve against the API root."""
        transport = fake_transport([Response(404)])
        await fetch_all_pages(
            transport,
            "bookings/",
            HEADERS,
            api_root="https://www.bookamat.com/api/v1/at/2024/",
        )
        url, _ = transport.calls[0]
        assert str(url) == "https://www.bookamat.com/api/v1/at/2024/bookings/?page=1"

    @pytest.mark.asyncio
    async def test_relative_next_link(self, fake_transport):
        """Test relative next links resolve against the current page."""
        transport = fake_transport(
            [
                Response(200, json={"results": [1], "next": "?page=2"}),
                Response(200, json={"results": [], "next": None}),
            ]
        )
        result = await fetch_all_pages(transport, "https://x/api/items/", HEADERS)
        assert result == [1]
        assert str(transport.calls[1][0]) == "https://x/api/items/?page=2"

    @pytest.mark.asyncio
    async def test_malformed_page_stops(self, fake_transport):
        """Test an unexpected body shape counts as an empty page."""
        transport = fake_transport([Response(200, json={"detail": "odd"})])
        assert await fetch_all_pages(transport, "https://x/items/", HEADERS) == []
        assert len(transport.calls) == 1

    @pytest.mark.asyncio
    async def test_invalid_page_error_ends_traversal(self, fake_transport):
        """Test an invalid page error is treated as the end of data."""
        transport = fake_transport(
            [Response(200, json=[1]), Response(400, json={"detail": "Invalid page."})]
        )
        assert await fetch_all_pages(transport, "https://x/items/", HEADERS) == [1]

    @pytest.mark.asyncio
    async def test_raised_404_ends_traversal(self, fake_transport):
        """Test a 404 raised by the transport is treated as the end of data."""
        request = httpx.Request("GET", "https://x/items/?page=2")
        transport = fake_transport(
            [
                Response(200, json=[1]),
                httpx.HTTPStatusError(
                    "Client error '404 Not Found'",
                    request=request,
                    response=Response(404, request=request),
                ),
            ]
        )
        assert await fetch_all_pages(transport, "https://x/items/", HEADERS) == [1]

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self, fake_transport):
        """Test network failures are raised unchanged."""
        error = httpx.ConnectError("connection refused")
        transport = fake_transport([Response(200, json=[1]), error])
        with pytest.raises(httpx.ConnectError) as exc_info:
            await fetch_all_pages(transport, "https://x/items/", HEADERS)
        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_plain_404_error_ends_traversal(self, fake_transport):
        """Test any raised error mentioning HTTP 404 ends the traversal."""
        transport = fake_transport([Response(200, json=[1]), RuntimeError("HTTP 404: gone")])
        assert await fetch_all_pages(transport, "https://x/items/", HEADERS) == [1]
        assert transport.pages == ["1", "2"]

    @pytest.mark.asyncio
    async def test_plain_invalid_page_error_ends_traversal(self, fake_transport):
        """Test any raised invalid page error ends the traversal."""
        transport = fake_transport([Response(200, json=[1]), ValueError("Invalid page.")])
        assert await fetch_all_pages(transport, "https://x/items/", HEADERS) == [1]

    @pytest.mark.asyncio
    async def test_unrelated_errors_propagate(self, fake_transport):
        """Test errors not signalling the end of pages are raised unchanged."""
        error = RuntimeError("boom")
        transport = fake_transport([Response(200, json=[1]), error])
        with pytest.raises(RuntimeError) as exc_info:
            await fetch_all_pages(transport, "https://x/items/", HEADERS)
        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_next_link_resets_fallback_page(self, fake_transport):
        """Test following a next link restarts page counting from the original URL."""
        transport = fake_transport(
            [
                Response(200, json={"results": [1], "next": "https://x/items/?page=7"}),
                Response(200, json={"results": [2]}),
                Response(404),
            ]
        )
        result = await fetch_all_pages(transport, "https://x/items/?tag=3", HEADERS)
        assert result == [1, 2]
        assert str(transport.calls[1][0]) == "https://x/items/?page=7"
        third_url = transport.calls[2][0]
        assert third_url.params["page"] == "2"
        assert third_url.params["tag"] == "3"
        assert third_url.path == "/items/"

    @pytest.mark.asyncio
    async def test_server_error_after_pages_raises(self, fake_transport):
        """Test a server error on a later page raises instead of returning partial data."""
        transport = fake_transport(
            [
                Response(200, json={"results": [1], "next": "https://x/items/?page=2"}),
                Response(500, text="server error"),
            ]
        )
        with pytest.raises(BookamatServerError, match="HTTP 500: server error"):
            await fetch_all_pages(transport, "https://x/items/", HEADERS)
        assert len(transport.calls) == 2

    @pytest.mark.asyncio
    async def test_non_json_body_raises(self, fake_transport):
        """Test a successful response that is not JSON raises a decode error."""
        transport = fake_transport([Response(200, text="<html>")])
        with pytest.raises(ValueError):
            await fetch_all_pages(transport, "https://x/items/", HEADERS)
