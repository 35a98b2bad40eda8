import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import List, Optional

from fastapi import Depends, FastAPI, Query, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import config
from app.auth import require_callback_token
from app.availability import list_cabins_all, search_cabin, summarize_by_date
from app.cache import GridCache
from app.catalog import find_by_name, parse_cabin_details, parse_ship_details
from app.errors import (ConfigurationError, NotFoundError, ServiceError,
                        ValidationError)
from app.grid import Grid
from app.mailer import send_confirmation_email
from app.models import (BookingConfirmation, CabinDetail, CreateInvoiceRequest,
                        OperatorInfo, ShipDetail, XenditWebhook)
from app.normalize import normalize_cabin_name
from app.payment import XenditClient
from app.sheets import SheetsClient

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

sheets: Optional[SheetsClient] = None
payments: Optional[XenditClient] = None
cache = GridCache()


@asynccontextmanager
async def lifespan(app: FastAPI):
    global sheets, payments
    try:
        sheets = SheetsClient()
    except Exception as e:
        logger.error(f"Sheets client init failed: {e}")
        sheets = None
    try:
        payments = XenditClient()
    except Exception as e:
        logger.error(f"Xendit client init failed: {e}")
        payments = None
    yield
    sheets = None
    payments = None
    cache.invalidate()


app = FastAPI(title="Cabin Availability API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


def _ok(**payload) -> JSONResponse:
    return JSONResponse(content=jsonable_encoder({"ok": True, **payload}, by_alias=True))


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})


def _require_sheets() -> SheetsClient:
    if sheets is None:
        raise ConfigurationError("Sheets client not initialized")
    return sheets


def _require_payments() -> XenditClient:
    if payments is None:
        raise ConfigurationError("Payment gateway not initialized")
    return payments


def _load_grid(sheet_name: str) -> Grid:
    client = _require_sheets()
    return cache.get_or_fetch(
        f"grid:{sheet_name}", lambda: client.fetch_grid(sheet_name)
    )


def _load_cabin_details() -> List[CabinDetail]:
    client = _require_sheets()
    sheet_name = config.CABIN_DETAIL_SHEET
    return cache.get_or_fetch(
        f"values:{sheet_name}",
        lambda: parse_cabin_details(client.fetch_values(sheet_name)),
    )


def _load_ship_details() -> List[ShipDetail]:
    client = _require_sheets()
    sheet_name = config.SHIP_DETAIL_SHEET
    return cache.get_or_fetch(
        f"values:{sheet_name}",
        lambda: parse_ship_details(client.fetch_values(sheet_name)),
    )


def _parse_date(value: Optional[str]) -> date:
    if not value:
        raise ValidationError("Missing ?date=YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD") from None


def _parse_guests(value: Optional[str]) -> int:
    if not value:
        return 1
    try:
        guests = int(value)
    except ValueError:
        raise ValidationError(f"Invalid guests '{value}'") from None
    if guests < 1:
        raise ValidationError("guests must be at least 1")
    return guests


def _detail_response(items, attr: str, name: Optional[str], label: str) -> JSONResponse:
    if name:
        found = find_by_name(items, attr, name)
        if found is None:
            raise NotFoundError(f"{label} '{name}' not found")
        return _ok(data=found)
    return _ok(total=len(items), data=items)


@app.exception_handler(ServiceError)
async def service_error_handler(request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__}: {exc.message}")
    return _error(exc.message, exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{field}: {error.get('msg')}" if field else error.get("msg"))
    return _error("; ".join(messages) or "Invalid request", status.HTTP_400_BAD_REQUEST)


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return _error("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)


@app.get("/health", tags=["Health"])
async def health_check():
    return {
        "status": "healthy",
        "sheets_initialized": sheets is not None,
        "payments_initialized": payments is not None,
    }


@app.get("/connection/check", tags=["Health"])
async def check_connection():
    return _ok(**_require_sheets().check_connection())


@app.get("/", tags=["Availability"])
async def resource_query(
    resource: str = "",
    date_text: Optional[str] = Query(None, alias="date"),
    name: Optional[str] = None,
    guests: Optional[str] = None,
    sheet: Optional[str] = None,
):
    resource = resource.lower()
    sheet_name = sheet or config.SHEET_NAME

    if resource == "cabindetail":
        return _detail_response(_load_cabin_details(), "cabin_name", name, "Cabin")

    if resource == "shipdetail":
        return _detail_response(_load_ship_details(), "name", name, "Ship")

    if resource == "operators":
        operators = [
            OperatorInfo(operator=op, source_sheet=f"{op} (Normalized)")
            for op in config.get_operators()
        ]
        return _ok(total=len(operators), operators=operators)

    if resource == "cabins":
        return _ok(cabins=list_cabins_all(_load_grid(sheet_name)))

    if resource not in ("availability", "search"):
        raise NotFoundError("Unknown resource")

    target = _parse_date(date_text)
    if resource == "search":
        if not name:
            raise ValidationError("Missing ?name=cabinName")
        cabin = normalize_cabin_name(name)
        if not cabin:
            raise ValidationError(f"Invalid cabin name '{name}'")
        wanted_guests = _parse_guests(guests)

    summary = summarize_by_date(_load_grid(sheet_name), target, config.get_operators())

    if resource == "availability":
        return _ok(date=date_text, **summary.model_dump())

    matches = search_cabin(summary, cabin, wanted_guests)
    return _ok(date=date_text, cabin=cabin, guests=wanted_guests, matches=matches)


@app.post("/api/create-invoice", tags=["Payment"])
async def create_invoice(request: CreateInvoiceRequest):
    invoice = _require_payments().create_invoice(request)
    return _ok(**invoice.model_dump(by_alias=True))


@app.get("/api/invoice/{invoice_id}", tags=["Payment"])
async def get_invoice(invoice_id: str):
    invoice = _require_payments().get_invoice(invoice_id)
    return _ok(**invoice.model_dump(by_alias=True))


@app.post(
    "/api/xendit-webhook",
    tags=["Payment"],
    dependencies=[Depends(require_callback_token)],
)
async def xendit_webhook(event: XenditWebhook):
    logger.info(
        "Xendit callback for invoice %s (%s): %s", event.id, event.external_id, event.status
    )
    email_sent = False
    email_error = None
    if event.status == "PAID" and event.payer_email:
        booking = BookingConfirmation(
            email=event.payer_email,
            external_id=event.external_id,
            amount=event.paid_amount or event.amount,
        )
        email_sent, email_error = send_confirmation_email(booking)
    return _ok(
        received=True,
        status=event.status,
        emailSent=email_sent,
        emailError=email_error or None,
    )


@app.post("/api/send-confirmation-email", tags=["Email"])
async def confirmation_email(booking: BookingConfirmation):
    sent, error = send_confirmation_email(booking)
    if not sent:
        return _error(error, status.HTTP_502_BAD_GATEWAY)
    return _ok(sent=True, email=booking.email)
