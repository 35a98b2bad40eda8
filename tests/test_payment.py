import pytest
import requests

from app.errors import NotFoundError, UpstreamError
from app.models import CreateInvoiceRequest
from app.payment import XenditClient


class FakeResponse:
    def __init__(self, status_code, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.auth = None
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error:
            raise self.error
        return self.response


INVOICE = {
    "id": "inv-1",
    "external_id": "booking-42",
    "status": "PENDING",
    "amount": 1500000,
    "payer_email": "guest@example.com",
    "invoice_url": "https://checkout.xendit.co/web/inv-1",
    "expiry_date": "2026-10-20T00:00:00.000Z",
}


def make_client(session):
    return XenditClient(secret_key="xnd_test", base_url="https://api.test/", session=session)


class TestXenditClient:
    def test_basic_auth(self):
        session = FakeSession(FakeResponse(200, INVOICE))
        make_client(session)
        assert session.auth == ("xnd_test", "")

    def test_create_invoice_payload(self, monkeypatch):
        monkeypatch.delenv("INVOICE_SUCCESS_URL", raising=False)
        monkeypatch.delenv("INVOICE_FAILURE_URL", raising=False)
        session = FakeSession(FakeResponse(200, INVOICE))
        request = CreateInvoiceRequest(
            externalId="booking-42",
            amount=1500000,
            payerEmail="guest@example.com",
            description="Ocean view, 12 Mar",
            customerName="Ana",
            items=[{"name": "Ocean view", "quantity": 2, "price": 750000}],
        )

        invoice = make_client(session).create_invoice(request)

        method, url, kwargs = session.calls[0]
        assert (method, url) == ("POST", "https://api.test/v2/invoices")
        payload = kwargs["json"]
        assert payload["external_id"] == "booking-42"
        assert payload["amount"] == 1500000
        assert payload["payer_email"] == "guest@example.com"
        assert payload["currency"] == "IDR"
        assert payload["customer"] == {"given_names": "Ana", "email": "guest@example.com"}
        assert payload["items"] == [{"name": "Ocean view", "quantity": 2, "price": 750000}]
        assert "success_redirect_url" not in payload

        assert invoice.id == "inv-1"
        assert invoice.invoice_url == INVOICE["invoice_url"]
        assert invoice.model_dump(by_alias=True)["externalId"] == "booking-42"

    def test_external_id_generated(self):
        session = FakeSession(FakeResponse(200, INVOICE))
        make_client(session).create_invoice(CreateInvoiceRequest(amount=100))
        assert session.calls[0][2]["json"]["external_id"].startswith("booking-")

    def test_get_invoice(self):
        session = FakeSession(FakeResponse(200, dict(INVOICE, status="PAID")))
        invoice = make_client(session).get_invoice("inv-1")
        assert session.calls[0][:2] == ("GET", "https://api.test/v2/invoices/inv-1")
        assert invoice.status == "PAID"

    def test_not_found(self):
        session = FakeSession(FakeResponse(404, {"message": "missing"}))
        with pytest.raises(NotFoundError) as exc:
            make_client(session).get_invoice("nope")
        assert exc.value.message == "Invoice 'nope' not found"

    def test_create_invoice_404_is_a_gateway_error(self):
        session = FakeSession(FakeResponse(404, {"message": "Callback URL not found"}))
        with pytest.raises(UpstreamError) as exc:
            make_client(session).create_invoice(CreateInvoiceRequest(amount=100))
        assert "(404)" in exc.value.message
        assert "Callback URL not found" in exc.value.message

    def test_gateway_error_message(self):
        session = FakeSession(FakeResponse(400, {"message": "Amount too low"}))
        with pytest.raises(UpstreamError) as exc:
            make_client(session).create_invoice(CreateInvoiceRequest(amount=1))
        assert "Amount too low" in exc.value.message

    def test_network_error(self):
        session = FakeSession(error=requests.ConnectionError("refused"))
        with pytest.raises(UpstreamError):
            make_client(session).get_invoice("inv-1")
