from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CabinAvailability(BaseModel):
    name: str
    available: int = Field(ge=0)


class OperatorSummary(BaseModel):
    operator: str
    total: int
    cabins: List[CabinAvailability]


class AvailabilitySummary(BaseModel):
    total: int
    operators: List[OperatorSummary]


class SearchMatch(BaseModel):
    operator: str
    available: int


class OperatorInfo(CamelModel):
    operator: str
    source_sheet: str = Field(alias="sourceSheet")


class CabinDetail(BaseModel):
    api_name: str = ""
    cabin_name: str
    operator: str = "Unknown"
    description: str = ""
    capacity: int = 0
    price: int = 0
    trip_days: int = 0
    images: List[str] = Field(default_factory=list)
    image_main: str = ""


class ShipDetail(BaseModel):
    name: str
    operator: str = ""
    description: str = ""
    length: str = ""
    year_built: Optional[int] = None
    capacity: int = 0
    cabin_count: int = 0
    facilities: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    image_main: str = ""


class InvoiceItem(CamelModel):
    name: str
    quantity: int = Field(1, ge=1)
    price: float = Field(ge=0)
    category: Optional[str] = None


class CreateInvoiceRequest(CamelModel):
    external_id: Optional[str] = Field(None, alias="externalId")
    amount: float = Field(gt=0)
    payer_email: Optional[str] = Field(None, alias="payerEmail")
    description: Optional[str] = None
    customer_name: Optional[str] = Field(None, alias="customerName")
    customer_phone: Optional[str] = Field(None, alias="customerPhone")
    items: Optional[List[InvoiceItem]] = None
    success_redirect_url: Optional[str] = Field(None, alias="successRedirectUrl")
    failure_redirect_url: Optional[str] = Field(None, alias="failureRedirectUrl")


class Invoice(CamelModel):
    id: str
    external_id: Optional[str] = Field(None, alias="externalId")
    status: Optional[str] = None
    amount: Optional[float] = None
    payer_email: Optional[str] = Field(None, alias="payerEmail")
    description: Optional[str] = None
    invoice_url: Optional[str] = Field(None, alias="invoiceUrl")
    expiry_date: Optional[str] = Field(None, alias="expiryDate")
    paid_at: Optional[str] = Field(None, alias="paidAt")


class XenditWebhook(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    external_id: Optional[str] = None
    status: Optional[str] = None
    amount: Optional[float] = None
    paid_amount: Optional[float] = None
    payer_email: Optional[str] = None
    description: Optional[str] = None
    paid_at: Optional[str] = None


class BookingConfirmation(CamelModel):
    email: str
    customer_name: Optional[str] = Field(None, alias="customerName")
    booking_id: Optional[str] = Field(None, alias="bookingId")
    external_id: Optional[str] = Field(None, alias="externalId")
    operator: Optional[str] = None
    cabin_name: Optional[str] = Field(None, alias="cabinName")
    date: Optional[str] = None
    guests: Optional[int] = None
    amount: Optional[float] = None

    @field_validator("email")
    @classmethod
    def email_has_at(cls, value: str) -> str:
        value = value.strip()
        if "@" not in value:
            raise ValueError("email must be a valid address")
        return value

    @property
    def reference(self) -> str:
        return self.booking_id or self.external_id or ""
