"""Pydantic models for Bookamat API resources and request payloads.

Response models are lenient: unknown fields are kept and most fields are
optional, since the API adds fields over time and differs slightly between
endpoints. Decimal amounts are transported as strings, as Bookamat does.
"""

from __future__ import annotations

import datetime as dt
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

AccountGroup = Literal["1", "2"]
BookingStatus = Literal["1", "2", "3", "4"]


class BookamatModel(BaseModel):
    """Base for all models; extra fields from the API are preserved."""

    model_config = ConfigDict(extra="allow")


class PaginatedResponse(BookamatModel, Generic[T]):
    """A single page as returned by list endpoints."""

    count: int = 0
    next: str | None = None
    previous: str | None = None
    results: list[T] = Field(default_factory=list)


class NamedRef(BookamatModel):
    """Short reference to another resource, e.g. inside a booking amount."""

    id: int
    name: str | None = None


# Accounts


class BankAccount(BookamatModel):
    id: int
    name: str | None = None
    position: int | None = None
    flag_balance: bool | None = None
    opening_balance: str | None = None
    counter_booked_bookings: int | None = None
    counter_open_bookings: int | None = None
    counter_deleted_bookings: int | None = None
    counter_bookingtemplates: int | None = None


class CostAccount(BookamatModel):
    id: int
    costaccount: int | None = None
    name: str | None = None
    section: str | None = None
    group: AccountGroup | None = None
    inventory: bool | None = None
    index_incometax: list[str] = Field(default_factory=list)
    deductibility_tax_percent: str | None = None
    deductibility_amount_percent: str | None = None
    description: str | None = None
    active: bool | None = None
    purchasetaxaccounts: list[NamedRef] = Field(default_factory=list)
    counter_booked_bookings: int | None = None
    counter_open_bookings: int | None = None
    counter_deleted_bookings: int | None = None
    counter_bookingtemplates: int | None = None


class PurchaseTaxAccount(BookamatModel):
    id: int
    purchasetaxaccount: int | None = None
    name: str | None = None
    section: str | None = None
    group: AccountGroup | None = None
    reverse_charge: bool | None = None
    ic_report: bool | None = None
    ic_delivery: bool | None = None
    ic_service: bool | None = None
    ioss_report: bool | None = None
    eu_oss_report: bool | None = None
    tax_values: list[str] = Field(default_factory=list)
    index_purchasetax: list[str] = Field(default_factory=list)
    description: str | None = None
    active: bool | None = None
    counter_booked_bookings: int | None = None
    counter_open_bookings: int | None = None
    counter_deleted_bookings: int | None = None
    counter_bookingtemplates: int | None = None


class CostCentre(BookamatModel):
    id: int
    name: str | None = None
    position: int | None = None
    description: str | None = None
    active: bool | None = None


class ForeignBusinessBase(BookamatModel):
    id: int
    name: str | None = None
    position: int | None = None
    vatin: str | None = None
    country: str | None = None
    address: str | None = None
    city: str | None = None
    zip_code: str | None = None
    active: bool | None = None


class GlobalTag(BookamatModel):
    id: int
    name: str | None = None
    position: int | None = None
    description: str | None = None


class AllAccounts(BookamatModel):
    """Cost, bank and purchase tax accounts fetched together."""

    costaccounts: list[CostAccount] = Field(default_factory=list)
    bankaccounts: list[BankAccount] = Field(default_factory=list)
    purchasetaxaccounts: list[PurchaseTaxAccount] = Field(default_factory=list)


# Bookings


class ForeignBusinessBaseRef(BookamatModel):
    id: int
    vatin: str | None = None


class BookingAmount(BookamatModel):
    group: AccountGroup | None = None
    bankaccount: NamedRef | None = None
    costaccount: NamedRef | None = None
    purchasetaxaccount: NamedRef | None = None
    amount: str | None = None
    amount_after_tax: str | None = None
    tax_percent: str | None = None
    tax_value: str | None = None
    deductibility_tax_percent: str | None = None
    deductibility_tax_value: str | None = None
    deductibility_amount_percent: str | None = None
    deductibility_amount_value: str | None = None
    foreign_business_base: ForeignBusinessBaseRef | None = None
    country_dep: str | None = None
    country_rec: str | None = None


class BookingTag(BookamatModel):
    """Association between a booking and a global tag."""

    id: int
    booking: int | None = None
    tag: int | None = None
    name: str | None = None


class BookingAttachment(BookamatModel):
    id: int
    name: str | None = None
    size: int | None = None


class Booking(BookamatModel):
    id: int
    status: BookingStatus | None = None
    title: str | None = None
    document_number: str | None = None
    date: dt.date | None = None
    date_invoice: dt.date | None = None
    date_delivery: dt.date | None = None
    date_order: dt.date | None = None
    costcentre: NamedRef | None = None
    amounts: list[BookingAmount] = Field(default_factory=list)
    tags: list[BookingTag] = Field(default_factory=list)
    attachments: list[BookingAttachment] = Field(default_factory=list)
    vatin: str | None = None
    country: str | None = None
    description: str | None = None
    create_date: dt.datetime | None = None
    update_date: dt.datetime | None = None


class BookingCreateAmount(BookamatModel):
    bankaccount: int
    costaccount: int
    purchasetaxaccount: int
    amount: str
    tax_percent: str
    deductibility_tax_percent: str
    deductibility_amount_percent: str
    foreign_business_base: int | None = None
    country_dep: str | None = None
    country_rec: str | None = None


class BookingCreate(BookamatModel):
    title: str = Field(max_length=50)
    date: dt.date
    amounts: list[BookingCreateAmount] = Field(min_length=1)
    date_invoice: dt.date | None = None
    date_delivery: dt.date | None = None
    date_order: dt.date | None = None
    costcentre: int | None = None
    vatin: str | None = None
    country: str | None = None
    description: str | None = None
    foreign_business_base: int | None = None
    country_dep: str | None = None
    country_rec: str | None = None


class BookingUpdate(BookamatModel):
    """Payload for PUT and PATCH on a booking.

    All fields are optional here so the same model serves partial updates; a
    full PUT should still carry title, date and amounts.
    """

    title: str | None = Field(default=None, max_length=50)
    date: dt.date | None = None
    amounts: list[BookingCreateAmount] | None = None
    status: BookingStatus | None = None
    document_number: str | None = None
    date_invoice: dt.date | None = None
    date_delivery: dt.date | None = None
    date_order: dt.date | None = None
    costcentre: int | None = None
    vatin: str | None = None
    country: str | None = None
    description: str | None = None
    foreign_business_base: int | None = None
    country_dep: str | None = None
    country_rec: str | None = None


class BookingTagCreate(BookamatModel):
    tag: int


class BookingTagUpdate(BookamatModel):
    tag: int


# Attachments


class Attachment(BookamatModel):
    id: int
    booking: int | None = None
    name: str | None = None
    size: int | None = None


class AttachmentCreate(BookamatModel):
    booking: int
    name: str = Field(min_length=1)
    file: str


class AttachmentUpdate(BookamatModel):
    name: str | None = Field(default=None, min_length=1)


class AttachmentDownload(Attachment):
    mimetype: str | None = None
    file: str


# Assets


class Asset(BookamatModel):
    id: int
    title: str | None = None
    name: str | None = None
    description: str | None = None
    acquisition_date: dt.date | None = None
    commissioning_date: dt.date | None = None
    decommissioning_date: dt.date | None = None
    initial_value: str | None = None
    current_value: str | None = None


class AssetCreate(BookamatModel):
    name: str
    acquisition_date: dt.date
    initial_value: str
    description: str | None = None
    commissioning_date: dt.date | None = None


class AssetUpdate(BookamatModel):
    name: str | None = None
    description: str | None = None
    acquisition_date: dt.date | None = None
    commissioning_date: dt.date | None = None
    decommissioning_date: dt.date | None = None
    initial_value: str | None = None


class AssetAttachment(BookamatModel):
    id: int
    asset: int | None = None
    name: str | None = None
    size: int | None = None


class AssetAttachmentCreate(BookamatModel):
    asset: int
    name: str = Field(min_length=1)
    file: str


class AssetAttachmentUpdate(BookamatModel):
    name: str | None = Field(default=None, min_length=1)


class AssetAttachmentDownload(AssetAttachment):
    mimetype: str | None = None
    file: str


# User


class UserAccount(BookamatModel):
    id: int
    country: str | None = None
    year: int | None = None
    url: str | None = None


class UserSettings(BookamatModel):
    id: int
    group: AccountGroup | None = None
    purchasetax: bool | None = None
    purchasetax_range: str | None = None
    ic_report_range: str | None = None
    tax_percent: str | None = None
    deductibility_tax_percent: str | None = None
    deductibility_income_percent: str | None = None


class UserExemptions(BookamatModel):
    id: int
    exemption_9221: str | None = None
    exemption_9227: str | None = None
    exemption_9229: str | None = None
    exemption_9276: str | None = None
    exemption_9277: str | None = None


# Preference requests


class CreateBankAccountRequest(BookamatModel):
    name: str = Field(min_length=1, max_length=40)
    position: int | None = None
    flag_balance: bool | None = None
    opening_balance: str | None = None


class UpdateBankAccountRequest(BookamatModel):
    name: str | None = Field(default=None, max_length=40)
    position: int | None = None
    flag_balance: bool | None = None
    opening_balance: str | None = None


class ActivateCostAccountRequest(BookamatModel):
    costaccount: int


class ActivatePurchaseTaxAccountRequest(BookamatModel):
    purchasetaxaccount: int


class CreateCostCentreRequest(BookamatModel):
    name: str = Field(min_length=1, max_length=40)
    position: int | None = None


class UpdateCostCentreRequest(BookamatModel):
    name: str | None = Field(default=None, max_length=40)
    position: int | None = None


class CreateForeignBusinessBaseRequest(BookamatModel):
    name: str = Field(min_length=1, max_length=40)
    position: int | None = None


class UpdateForeignBusinessBaseRequest(BookamatModel):
    name: str | None = Field(default=None, max_length=40)
    position: int | None = None


class CreateTagRequest(BookamatModel):
    name: str = Field(min_length=3, max_length=40)
    position: int | None = None


class UpdateTagRequest(BookamatModel):
    name: str | None = Field(default=None, min_length=3, max_length=40)
    position: int | None = None
