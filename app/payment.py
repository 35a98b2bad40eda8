import logging
import os
import uuid
from typing import Any, Dict, Optional

import requests

from app import config
from app.errors import NotFoundError, UpstreamError
from app.models import CreateInvoiceRequest, Invoice

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30


class XenditClient:
    """Thin wrapper over the Xendit Invoice API (v2)."""

    def __init__(
        self,
        secret_key: Optional[str] = None,
        base_url: str = config.XENDIT_API_URL,
        session: Optional[requests.Session] = None,
    ):
        self.secret_key = secret_key or config.require_env("XENDIT_SECRET_KEY")
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.auth = (self.secret_key, "")

    def _request(
        self, method: str, path: str, not_found: Optional[str] = None, **kwargs
    ) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=REQUEST_TIMEOUT, **kwargs)
        except requests.RequestException as e:
            logger.error("Xendit %s %s failed: %s", method, path, e)
            raise UpstreamError(f"Payment gateway unreachable: {e}") from e

        if response.status_code == 404 and not_found:
            raise NotFoundError(not_found)
        if not response.ok:
            try:
                message = response.json().get("message") or response.text
            except ValueError:
                message = response.text
            logger.error("Xendit %s %s returned %s: %s", method, path, response.status_code, message)
            raise UpstreamError(f"Payment gateway error ({response.status_code}): {message}")
        return response.json()

    def create_invoice(self, request: CreateInvoiceRequest) -> Invoice:
        external_id = request.external_id or f"booking-{uuid.uuid4()}"
        payload: Dict[str, Any] = {
            "external_id": external_id,
            "amount": request.amount,
            "currency": config.INVOICE_CURRENCY,
            "invoice_duration": config.INVOICE_DURATION_SECONDS,
        }
        if request.payer_email:
            payload["payer_email"] = request.payer_email
        if request.description:
            payload["description"] = request.description
        if request.customer_name or request.customer_phone:
            customer = {"given_names": request.customer_name or ""}
            if request.payer_email:
                customer["email"] = request.payer_email
            if request.customer_phone:
                customer["mobile_number"] = request.customer_phone
            payload["customer"] = customer
        if request.items:
            payload["items"] = [item.model_dump(exclude_none=True) for item in request.items]

        success_url = request.success_redirect_url or os.getenv("INVOICE_SUCCESS_URL")
        failure_url = request.failure_redirect_url or os.getenv("INVOICE_FAILURE_URL")
        if success_url:
            payload["success_redirect_url"] = success_url
        if failure_url:
            payload["failure_redirect_url"] = failure_url

        invoice = self._to_invoice(self._request("POST", "/v2/invoices", json=payload))
        logger.info("Created invoice %s for %s (%s)", invoice.id, external_id, request.amount)
        return invoice

    def get_invoice(self, invoice_id: str) -> Invoice:
        data = self._request(
            "GET",
            f"/v2/invoices/{invoice_id}",
            not_found=f"Invoice '{invoice_id}' not found",
        )
        return self._to_invoice(data)

    @staticmethod
    def _to_invoice(data: Dict[str, Any]) -> Invoice:
        return Invoice(
            id=data["id"],
            external_id=data.get("external_id"),
            status=data.get("status"),
            amount=data.get("amount"),
            payer_email=data.get("payer_email"),
            description=data.get("description"),
            invoice_url=data.get("invoice_url"),
            expiry_date=data.get("expiry_date"),
            paid_at=data.get("paid_at"),
        )
