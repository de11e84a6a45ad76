"""Asynchronous Bookamat API client."""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path
from typing import Any, BinaryIO, TypeVar

import httpx
from pydantic import BaseModel

from bookamatpy._version import __version__
from bookamatpy.auth import ApiKeyAuth
from bookamatpy.client_base import (
    ClientConfig,
    build_url,
    fetch_all_pages,
    parse_error_response,
    prepare_attachment,
    sanitize_payload,
)
from bookamatpy.exceptions import BookamatError
from bookamatpy.models import (
    ActivateCostAccountRequest,
    ActivatePurchaseTaxAccountRequest,
    AllAccounts,
    Asset,
    AssetAttachment,
    AssetAttachmentCreate,
    AssetAttachmentDownload,
    AssetAttachmentUpdate,
    AssetCreate,
    AssetUpdate,
    Attachment,
    AttachmentCreate,
    AttachmentDownload,
    AttachmentUpdate,
    BankAccount,
    Booking,
    BookingCreate,
    BookingTag,
    BookingTagCreate,
    BookingTagUpdate,
    BookingUpdate,
    CostAccount,
    CostCentre,
    CreateBankAccountRequest,
    CreateCostCentreRequest,
    CreateForeignBusinessBaseRequest,
    CreateTagRequest,
    ForeignBusinessBase,
    GlobalTag,
    PaginatedResponse,
    PurchaseTaxAccount,
    UpdateBankAccountRequest,
    UpdateCostCentreRequest,
    UpdateForeignBusinessBaseRequest,
    UpdateTagRequest,
    UserAccount,
    UserExemptions,
    UserSettings,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

Payload = BaseModel | dict[str, Any]

_YEAR_PATTERN = re.compile(r"^\d{4}$")


class AsyncBookamatClient:
    """Asynchronous client for the Bookamat API.

    Every request is scoped to a tenant root built from the country and the
    bookkeeping year, e.g. ``https://www.bookamat.com/api/v1/at/2024``.
    List methods that return plain lists walk all pages; methods returning
    PaginatedResponse give back the single page the server sent.
    """

    def __init__(
        self,
        *,
        year: str | int | None = None,
        username: str | None = None,
        api_key: str | None = None,
        country: str = ClientConfig.DEFAULT_COUNTRY,
        base_url: str = ClientConfig.BASE_URL,
        timeout: float = ClientConfig.DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize Bookamat client.

        Args:
            year: Bookkeeping year as four digits
            username: Bookamat username
            api_key: API key from the Bookamat user settings
            country: Country code of the bookkeeping (default: at)
            base_url: Base URL for API (default: https://www.bookamat.com/api/v1)
            timeout: Request timeout in seconds

        Raises:
            ValueError: If year, username or api_key is missing, or year is
                not a four digit year
        """
        if not year:
            raise ValueError("Bookamat client 'year' is required.")
        if not username:
            raise ValueError("Bookamat client 'username' is required.")
        if not api_key:
            raise ValueError("Bookamat client 'api_key' is required.")

        self.year = str(year)
        if not _YEAR_PATTERN.match(self.year):
            raise ValueError(f"Year must be a 4-digit string, got {self.year!r}.")

        self.username = username
        self.country = country or ClientConfig.DEFAULT_COUNTRY
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.auth = ApiKeyAuth(username, api_key)

        self.client = httpx.AsyncClient(
            timeout=self.timeout,
            headers={
                "User-Agent": f"bookamatpy/{__version__}",
            },
        )

    def __repr__(self) -> str:
        return (
            f"AsyncBookamatClient(username={self.username!r}, "
            f"country={self.country!r}, year={self.year!r})"
        )

    async def __aenter__(self) -> AsyncBookamatClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    @property
    def api_root(self) -> str:
        """Tenant root, ``<base_url>/<country>/<year>``."""
        return f"{self.base_url}/{self.country}/{self.year}"

    @property
    def request_headers(self) -> dict[str, str]:
        """Headers sent with every request."""
        return self.auth.get_headers()

    def _url(self, path: str) -> str:
        return f"{self.api_root}/{path}"

    async def _request(
        self,
        method: str,
        url: str | httpx.URL,
        **kwargs: Any,
    ) -> httpx.Response:
        """Make an authenticated HTTP request.

        Args:
            method: HTTP method
            url: Absolute request URL
            **kwargs: Additional arguments for httpx request

        Returns:
            HTTP response

        Raises:
            BookamatAPIError: On API errors
        """
        headers = self.request_headers
        if "headers" in kwargs:
            headers.update(kwargs.pop("headers"))

        logger.debug("%s %s", method, url)
        response = await self.client.request(
            method=method,
            url=url,
            headers=headers,
            **kwargs,
        )

        if not response.is_success:
            logger.warning("%s %s failed with status %s", method, url, response.status_code)
            raise parse_error_response(response)

        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        """Decode a response body; empty bodies (204, DELETE) give None."""
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _payload(data: Payload) -> Any:
        """Serialize a request body, dropping absent fields."""
        if isinstance(data, BaseModel):
            data = data.model_dump(mode="json", exclude_unset=True)
        return sanitize_payload(data)

    async def _get(self, url: str | httpx.URL, model_class: type[M]) -> M:
        response = await self._request("GET", url)
        return model_class.model_validate(self._json(response))

    async def _send(
        self, method: str, url: str, data: Payload | None, model_class: type[M]
    ) -> M:
        kwargs: dict[str, Any] = {}
        if data is not None:
            kwargs["json"] = self._payload(data)
        response = await self._request(method, url, **kwargs)
        return model_class.model_validate(self._json(response))

    async def _delete(self, url: str) -> None:
        await self._request("DELETE", url)

    async def _get_page(
        self, url: str, model_class: type[M], params: dict[str, Any]
    ) -> PaginatedResponse[M]:
        filters = {key: value for key, value in params.items() if value is not None}
        response = await self._request("GET", url, params=filters)
        return PaginatedResponse[model_class].model_validate(  # type: ignore[valid-type]
            self._json(response)
        )

    async def _collect(
        self, url: str, model_class: type[M], params: dict[str, Any]
    ) -> list[M]:
        items = await fetch_all_pages(
            self.client, build_url(url, params), self.request_headers
        )
        return [model_class.model_validate(item) for item in items]

    # Configuration endpoints (predefined accounts)

    async def get_predefined_cost_accounts(
        self, **params: Any
    ) -> PaginatedResponse[CostAccount]:
        """Get the predefined cost accounts that can be activated.

        Args:
            **params: Filters (group, inventory, index_incometax, ordering, page)

        Returns:
            One page of predefined cost accounts
        """
        return await self._get_page(
            self._url("configuration/costaccounts/"), CostAccount, params
        )

    async def get_predefined_cost_account(self, account_id: int) -> CostAccount:
        """Get a predefined cost account."""
        return await self._get(
            self._url(f"configuration/costaccounts/{account_id}/"), CostAccount
        )

    async def get_predefined_purchase_tax_accounts(
        self, **params: Any
    ) -> PaginatedResponse[PurchaseTaxAccount]:
        """Get the predefined purchase tax accounts that can be activated.

        Args:
            **params: Filters (group, reverse_charge, ic_report, tax_values,
                ordering, page, ...)

        Returns:
            One page of predefined purchase tax accounts
        """
        return await self._get_page(
            self._url("configuration/purchasetaxaccounts/"), PurchaseTaxAccount, params
        )

    async def get_predefined_purchase_tax_account(
        self, account_id: int
    ) -> PurchaseTaxAccount:
        """Get a predefined purchase tax account."""
        return await self._get(
            self._url(f"configuration/purchasetaxaccounts/{account_id}/"),
            PurchaseTaxAccount,
        )

    # User endpoints

    async def get_user_accounts(self, **params: Any) -> PaginatedResponse[UserAccount]:
        """Get the user's active accounts (one per country and year).

        This endpoint lives outside the tenant root.

        Args:
            **params: Filters (year, page)

        Returns:
            One page of user accounts
        """
        return await self._get_page(
            f"{self.base_url}/user/accounts/", UserAccount, params
        )

    async def get_user_account(self, account_id: int) -> UserAccount:
        """Get a specific user account."""
        return await self._get(f"{self.base_url}/user/accounts/{account_id}/", UserAccount)

    async def get_user_settings(self) -> PaginatedResponse[UserSettings]:
        """Get the basic settings of the current year."""
        return await self._get_page(self._url("user/settings/"), UserSettings, {})

    async def get_user_settings_details(self, settings_id: int) -> UserSettings:
        """Get a specific settings entry."""
        return await self._get(self._url(f"user/settings/{settings_id}/"), UserSettings)

    async def get_user_exemptions(self) -> PaginatedResponse[UserExemptions]:
        """Get the tax exemption amounts of the current year."""
        return await self._get_page(self._url("user/exemptions/"), UserExemptions, {})

    async def get_user_exemptions_details(self, exemptions_id: int) -> UserExemptions:
        """Get a specific exemptions entry."""
        return await self._get(
            self._url(f"user/exemptions/{exemptions_id}/"), UserExemptions
        )

    # Bank account endpoints

    async def get_bank_accounts(self, **params: Any) -> list[BankAccount]:
        """Get all bank accounts.

        Args:
            **params: Filters (ordering, limit)

        Returns:
            All bank accounts across all pages
        """
        return await self._collect(
            self._url("preferences/bankaccounts/"), BankAccount, params
        )

    async def get_bank_account(self, account_id: int) -> BankAccount:
        """Get a specific bank account."""
        return await self._get(
            self._url(f"preferences/bankaccounts/{account_id}/"), BankAccount
        )

    async def create_bank_account(
        self, data: CreateBankAccountRequest | dict[str, Any]
    ) -> BankAccount:
        """Create a new bank account.

        Args:
            data: Bank account data

        Returns:
            Created bank account
        """
        return await self._send(
            "POST", self._url("preferences/bankaccounts/"), data, BankAccount
        )

    async def update_bank_account(
        self, account_id: int, data: UpdateBankAccountRequest | dict[str, Any]
    ) -> BankAccount:
        """Partially update a bank account (PATCH)."""
        return await self._send(
            "PATCH", self._url(f"preferences/bankaccounts/{account_id}/"), data, BankAccount
        )

    async def replace_bank_account(
        self, account_id: int, data: CreateBankAccountRequest | dict[str, Any]
    ) -> BankAccount:
        """Replace a bank account (PUT)."""
        return await self._send(
            "PUT", self._url(f"preferences/bankaccounts/{account_id}/"), data, BankAccount
        )

    async def delete_bank_account(self, account_id: int) -> None:
        """Delete a bank account.

        Only bank accounts without bookings can be deleted.
        """
        await self._delete(self._url(f"preferences/bankaccounts/{account_id}/"))

    # Cost account endpoints

    async def get_cost_accounts(self, **params: Any) -> list[CostAccount]:
        """Get all activated cost accounts."""
        return await self._collect(
            self._url("preferences/costaccounts/"), CostAccount, params
        )

    async def get_cost_account(self, account_id: int) -> CostAccount:
        """Get a specific activated cost account."""
        return await self._get(
            self._url(f"preferences/costaccounts/{account_id}/"), CostAccount
        )

    async def activate_cost_account(
        self, data: ActivateCostAccountRequest | dict[str, Any]
    ) -> CostAccount:
        """Activate a predefined cost account.

        Args:
            data: Holds the ID of the predefined cost account

        Returns:
            The activated cost account
        """
        return await self._send(
            "POST", self._url("preferences/costaccounts/"), data, CostAccount
        )

    async def delete_cost_account(self, account_id: int) -> None:
        """Deactivate a cost account."""
        await self._delete(self._url(f"preferences/costaccounts/{account_id}/"))

    # Purchase tax account endpoints

    async def get_purchase_tax_accounts(self, **params: Any) -> list[PurchaseTaxAccount]:
        """Get all activated purchase tax accounts."""
        return await self._collect(
            self._url("preferences/purchasetaxaccounts/"), PurchaseTaxAccount, params
        )

    async def get_purchase_tax_account(self, account_id: int) -> PurchaseTaxAccount:
        """Get a specific activated purchase tax account."""
        return await self._get(
            self._url(f"preferences/purchasetaxaccounts/{account_id}/"),
            PurchaseTaxAccount,
        )

    async def activate_purchase_tax_account(
        self, data: ActivatePurchaseTaxAccountRequest | dict[str, Any]
    ) -> PurchaseTaxAccount:
        """Activate a predefined purchase tax account."""
        return await self._send(
            "POST",
            self._url("preferences/purchasetaxaccounts/"),
            data,
            PurchaseTaxAccount,
        )

    async def delete_purchase_tax_account(self, account_id: int) -> None:
        """Deactivate a purchase tax account."""
        await self._delete(self._url(f"preferences/purchasetaxaccounts/{account_id}/"))

    # Cost centre endpoints

    async def get_cost_centres(self, **params: Any) -> list[CostCentre]:
        """Get all cost centres."""
        return await self._collect(
            self._url("preferences/costcentres/"), CostCentre, params
        )

    async def get_cost_centre(self, centre_id: int) -> CostCentre:
        """Get a specific cost centre."""
        return await self._get(
            self._url(f"preferences/costcentres/{centre_id}/"), CostCentre
        )

    async def create_cost_centre(
        self, data: CreateCostCentreRequest | dict[str, Any]
    ) -> CostCentre:
        """Create a new cost centre."""
        return await self._send(
            "POST", self._url("preferences/costcentres/"), data, CostCentre
        )

    async def update_cost_centre(
        self, centre_id: int, data: UpdateCostCentreRequest | dict[str, Any]
    ) -> CostCentre:
        """Partially update a cost centre (PATCH)."""
        return await self._send(
            "PATCH", self._url(f"preferences/costcentres/{centre_id}/"), data, CostCentre
        )

    async def replace_cost_centre(
        self, centre_id: int, data: CreateCostCentreRequest | dict[str, Any]
    ) -> CostCentre:
        """Replace a cost centre (PUT)."""
        return await self._send(
            "PUT", self._url(f"preferences/costcentres/{centre_id}/"), data, CostCentre
        )

    async def delete_cost_centre(self, centre_id: int) -> None:
        """Delete a cost centre."""
        await self._delete(self._url(f"preferences/costcentres/{centre_id}/"))

    # Foreign business base endpoints

    async def get_foreign_business_bases(
        self, **params: Any
    ) -> list[ForeignBusinessBase]:
        """Get all foreign business bases."""
        return await self._collect(
            self._url("preferences/foreignbusinessbases/"), ForeignBusinessBase, params
        )

    async def get_foreign_business_base(self, base_id: int) -> ForeignBusinessBase:
        """Get a specific foreign business base."""
        return await self._get(
            self._url(f"preferences/foreignbusinessbases/{base_id}/"),
            ForeignBusinessBase,
        )

    async def create_foreign_business_base(
        self, data: CreateForeignBusinessBaseRequest | dict[str, Any]
    ) -> ForeignBusinessBase:
        """Create a new foreign business base."""
        return await self._send(
            "POST",
            self._url("preferences/foreignbusinessbases/"),
            data,
            ForeignBusinessBase,
        )

    async def update_foreign_business_base(
        self, base_id: int, data: UpdateForeignBusinessBaseRequest | dict[str, Any]
    ) -> ForeignBusinessBase:
        """Partially update a foreign business base (PATCH)."""
        return await self._send(
            "PATCH",
            self._url(f"preferences/foreignbusinessbases/{base_id}/"),
            data,
            ForeignBusinessBase,
        )

    async def replace_foreign_business_base(
        self, base_id: int, data: CreateForeignBusinessBaseRequest | dict[str, Any]
    ) -> ForeignBusinessBase:
        """Replace a foreign business base (PUT)."""
        return await self._send(
            "PUT",
            self._url(f"preferences/foreignbusinessbases/{base_id}/"),
            data,
            ForeignBusinessBase,
        )

    async def delete_foreign_business_base(self, base_id: int) -> None:
        """Delete a foreign business base."""
        await self._delete(self._url(f"preferences/foreignbusinessbases/{base_id}/"))

    # Global tag endpoints

    async def get_global_tags(self, **params: Any) -> list[GlobalTag]:
        """Get all tags defined for the year."""
        return await self._collect(self._url("preferences/tags/"), GlobalTag, params)

    async def get_global_tag(self, tag_id: int) -> GlobalTag:
        """Get a specific tag."""
        return await self._get(self._url(f"preferences/tags/{tag_id}/"), GlobalTag)

    async def create_global_tag(
        self, data: CreateTagRequest | dict[str, Any]
    ) -> GlobalTag:
        """Create a new tag."""
        return await self._send("POST", self._url("preferences/tags/"), data, GlobalTag)

    async def update_global_tag(
        self, tag_id: int, data: UpdateTagRequest | dict[str, Any]
    ) -> GlobalTag:
        """Partially update a tag (PATCH)."""
        return await self._send(
            "PATCH", self._url(f"preferences/tags/{tag_id}/"), data, GlobalTag
        )

    async def replace_global_tag(
        self, tag_id: int, data: CreateTagRequest | dict[str, Any]
    ) -> GlobalTag:
        """Replace a tag (PUT)."""
        return await self._send(
            "PUT", self._url(f"preferences/tags/{tag_id}/"), data, GlobalTag
        )

    async def delete_global_tag(self, tag_id: int) -> None:
        """Delete a tag."""
        await self._delete(self._url(f"preferences/tags/{tag_id}/"))

    # Booking endpoints

    async def list_bookings(self, **filters: Any) -> list[Booking]:
        """Get all regular bookings (status "1").

        Args:
            **filters: Booking filters such as date_from, date_until,
                costaccount, tag, has_attachments or ordering. A ``page``
                filter is ignored since all pages are fetched.

        Returns:
            All matching bookings across all pages
        """
        return await self._collect(self._url("bookings/"), Booking, filters)

    async def list_open_bookings(self, **filters: Any) -> list[Booking]:
        """Get all open bookings (no date yet, status "2")."""
        return await self._collect(self._url("bookings/open/"), Booking, filters)

    async def list_deleted_bookings(self, **filters: Any) -> list[Booking]:
        """Get all deleted bookings (status "3")."""
        return await self._collect(self._url("bookings/deleted/"), Booking, filters)

    async def list_imported_bookings(self, **filters: Any) -> list[Booking]:
        """Get all imported bookings (status "4")."""
        return await self._collect(self._url("bookings/imported/"), Booking, filters)

    async def get_booking(self, booking_id: int) -> Booking:
        """Get a specific booking.

        Args:
            booking_id: Booking ID

        Returns:
            Booking details, whatever its status
        """
        return await self._get(self._url(f"bookings/{booking_id}/"), Booking)

    async def create_booking(self, data: BookingCreate | dict[str, Any]) -> Booking:
        """Create a new booking.

        Args:
            data: Booking data; empty fields are not sent

        Returns:
            Created booking
        """
        return await self._send("POST", self._url("bookings/"), data, Booking)

    async def update_booking(
        self, booking_id: int, data: BookingUpdate | dict[str, Any]
    ) -> Booking:
        """Update a booking (PUT)."""
        return await self._send("PUT", self._url(f"bookings/{booking_id}/"), data, Booking)

    async def partially_update_booking(
        self, booking_id: int, data: BookingUpdate | dict[str, Any]
    ) -> Booking:
        """Partially update a booking (PATCH)."""
        return await self._send(
            "PATCH", self._url(f"bookings/{booking_id}/"), data, Booking
        )

    async def delete_booking(self, booking_id: int) -> None:
        """Delete a booking.

        Bookings are only marked as deleted and can be restored.
        """
        await self._delete(self._url(f"bookings/{booking_id}/"))

    async def restore_booking(self, booking_id: int) -> Booking:
        """Restore a deleted booking.

        It becomes booked if it has a date, open otherwise.
        """
        return await self._send(
            "POST", self._url(f"bookings/{booking_id}/restore/"), None, Booking
        )

    # Booking attachment endpoints

    async def add_booking_attachment(
        self, data: AttachmentCreate | dict[str, Any]
    ) -> Attachment:
        """Add an attachment to a booking.

        Args:
            data: Booking ID, file name and base64 encoded content

        Returns:
            Created attachment
        """
        return await self._send(
            "POST", self._url("bookings/attachments/"), data, Attachment
        )

    async def attach_file_to_booking(
        self,
        booking_id: int,
        file: Path | str | BinaryIO | bytes,
        filename: str | None = None,
    ) -> Attachment:
        """Upload a local file as attachment of a booking.

        Args:
            booking_id: Booking ID
            file: File to attach
            filename: Optional filename override

        Returns:
            Created attachment
        """
        name, content = prepare_attachment(file, filename)
        return await self.add_booking_attachment(
            AttachmentCreate(booking=booking_id, name=name, file=content)
        )

    async def list_booking_attachments(
        self, booking: int | None = None, **params: Any
    ) -> list[Attachment]:
        """Get all booking attachments.

        Args:
            booking: Only attachments of this booking
            **params: Further filters (ordering, limit)

        Returns:
            All matching attachments across all pages
        """
        return await self._collect(
            self._url("bookings/attachments/"), Attachment, {"booking": booking, **params}
        )

    async def get_booking_attachment(self, attachment_id: int) -> Attachment:
        """Get a specific booking attachment."""
        return await self._get(
            self._url(f"bookings/attachments/{attachment_id}/"), Attachment
        )

    async def update_booking_attachment(
        self, attachment_id: int, data: AttachmentUpdate | dict[str, Any]
    ) -> Attachment:
        """Update a booking attachment (PUT)."""
        return await self._send(
            "PUT", self._url(f"bookings/attachments/{attachment_id}/"), data, Attachment
        )

    async def partially_update_booking_attachment(
        self, attachment_id: int, data: AttachmentUpdate | dict[str, Any]
    ) -> Attachment:
        """Partially update a booking attachment (PATCH)."""
        return await self._send(
            "PATCH", self._url(f"bookings/attachments/{attachment_id}/"), data, Attachment
        )

    async def delete_booking_attachment(self, attachment_id: int) -> None:
        """Delete a booking attachment."""
        await self._delete(self._url(f"bookings/attachments/{attachment_id}/"))

    async def download_booking_attachment(self, attachment_id: int) -> AttachmentDownload:
        """Download a booking attachment.

        Args:
            attachment_id: Attachment ID

        Returns:
            Attachment with mimetype and base64 encoded file content

        Raises:
            BookamatError: If the response carries no file content
        """
        response = await self._request(
            "GET", self._url(f"bookings/attachments/{attachment_id}/download/")
        )
        data = self._json(response)
        _check_download(data, f"Attachment download for ID {attachment_id}")
        return AttachmentDownload.model_validate(data)

    # Booking tag endpoints

    async def get_booking_tags(self, booking_id: int, **params: Any) -> list[BookingTag]:
        """Get all tags of a booking."""
        return await self._collect(
            self._url(f"bookings/{booking_id}/tags/"), BookingTag, params
        )

    async def add_tag_to_booking(
        self, booking_id: int, data: BookingTagCreate | dict[str, Any]
    ) -> BookingTag:
        """Tag a booking.

        Args:
            booking_id: Booking ID
            data: Holds the ID of the global tag

        Returns:
            The new booking tag association
        """
        return await self._send(
            "POST", self._url(f"bookings/{booking_id}/tags/"), data, BookingTag
        )

    async def get_booking_tag(self, booking_id: int, booking_tag_id: int) -> BookingTag:
        """Get a specific booking tag association."""
        return await self._get(
            self._url(f"bookings/{booking_id}/tags/{booking_tag_id}/"), BookingTag
        )

    async def update_booking_tag(
        self,
        booking_id: int,
        booking_tag_id: int,
        data: BookingTagUpdate | dict[str, Any],
    ) -> BookingTag:
        """Point a booking tag association at another tag (PUT)."""
        return await self._send(
            "PUT",
            self._url(f"bookings/{booking_id}/tags/{booking_tag_id}/"),
            data,
            BookingTag,
        )

    async def partially_update_booking_tag(
        self,
        booking_id: int,
        booking_tag_id: int,
        data: BookingTagUpdate | dict[str, Any],
    ) -> BookingTag:
        """Partially update a booking tag association (PATCH)."""
        return await self._send(
            "PATCH",
            self._url(f"bookings/{booking_id}/tags/{booking_tag_id}/"),
            data,
            BookingTag,
        )

    async def remove_tag_from_booking(self, booking_id: int, booking_tag_id: int) -> None:
        """Remove a tag from a booking."""
        await self._delete(self._url(f"bookings/{booking_id}/tags/{booking_tag_id}/"))

    # Asset endpoints

    async def get_assets(self, **params: Any) -> PaginatedResponse[Asset]:
        """Get one page of assets."""
        return await self._get_page(self._url("assets/"), Asset, params)

    async def create_asset(self, data: AssetCreate | dict[str, Any]) -> Asset:
        """Create a new asset."""
        return await self._send("POST", self._url("assets/"), data, Asset)

    async def get_asset(self, asset_id: int) -> Asset:
        """Get a specific asset."""
        return await self._get(self._url(f"assets/{asset_id}/"), Asset)

    async def update_asset(
        self, asset_id: int, data: AssetUpdate | dict[str, Any]
    ) -> Asset:
        """Update an asset (PUT)."""
        return await self._send("PUT", self._url(f"assets/{asset_id}/"), data, Asset)

    async def partially_update_asset(
        self, asset_id: int, data: AssetUpdate | dict[str, Any]
    ) -> Asset:
        """Partially update an asset (PATCH)."""
        return await self._send("PATCH", self._url(f"assets/{asset_id}/"), data, Asset)

    async def delete_asset(self, asset_id: int) -> None:
        """Delete an asset."""
        await self._delete(self._url(f"assets/{asset_id}/"))

    # Asset attachment endpoints

    async def list_asset_attachments(
        self, asset: int | None = None, **params: Any
    ) -> PaginatedResponse[AssetAttachment]:
        """Get one page of asset attachments, optionally for a single asset."""
        return await self._get_page(
            self._url("assets/attachments/"), AssetAttachment, {"asset": asset, **params}
        )

    async def add_asset_attachment(
        self, data: AssetAttachmentCreate | dict[str, Any]
    ) -> AssetAttachment:
        """Add an attachment to an asset."""
        return await self._send(
            "POST", self._url("assets/attachments/"), data, AssetAttachment
        )

    async def get_asset_attachment(self, attachment_id: int) -> AssetAttachment:
        """Get a specific asset attachment."""
        return await self._get(
            self._url(f"assets/attachments/{attachment_id}/"), AssetAttachment
        )

    async def update_asset_attachment(
        self, attachment_id: int, data: AssetAttachmentUpdate | dict[str, Any]
    ) -> AssetAttachment:
        """Update an asset attachment (PUT)."""
        return await self._send(
            "PUT", self._url(f"assets/attachments/{attachment_id}/"), data, AssetAttachment
        )

    async def partially_update_asset_attachment(
        self, attachment_id: int, data: AssetAttachmentUpdate | dict[str, Any]
    ) -> AssetAttachment:
        """Partially update an asset attachment (PATCH)."""
        return await self._send(
            "PATCH",
            self._url(f"assets/attachments/{attachment_id}/"),
            data,
            AssetAttachment,
        )

    async def delete_asset_attachment(self, attachment_id: int) -> None:
        """Delete an asset attachment."""
        await self._delete(self._url(f"assets/attachments/{attachment_id}/"))

    async def download_asset_attachment(
        self, attachment_id: int
    ) -> AssetAttachmentDownload:
        """Download an asset attachment with its base64 encoded content."""
        response = await self._request(
            "GET", self._url(f"assets/attachments/{attachment_id}/download/")
        )
        data = self._json(response)
        _check_download(data, f"Asset attachment download for ID {attachment_id}")
        return AssetAttachmentDownload.model_validate(data)

    # Aggregations

    async def get_all_bookings(self, **filters: Any) -> list[Booking]:
        """Get every booking matching the filters, across all pages."""
        return await self.list_bookings(**filters)

    async def get_all_accounts(self) -> AllAccounts:
        """Get cost, bank and purchase tax accounts in one go.

        The three listings are fetched concurrently.
        """
        costaccounts, bankaccounts, purchasetaxaccounts = await asyncio.gather(
            self.get_cost_accounts(),
            self.get_bank_accounts(),
            self.get_purchase_tax_accounts(),
        )
        return AllAccounts(
            costaccounts=costaccounts,
            bankaccounts=bankaccounts,
            purchasetaxaccounts=purchasetaxaccounts,
        )


def _check_download(data: Any, what: str) -> None:
    if not isinstance(data, dict) or not isinstance(data.get("file"), str) or not data["file"]:
        raise BookamatError(f"{what} missing base64 'file' string in response.")
