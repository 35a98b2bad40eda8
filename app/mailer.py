"""
Booking confirmation emails sent through Resend.

Without RESEND_API_KEY or EMAIL_FROM nothing is sent and the caller gets a
failure tuple explaining which setting is missing.
"""
import logging
import os
from html import escape
from typing import Optional, Tuple

import resend

from app.models import BookingConfirmation

logger = logging.getLogger(__name__)


def format_currency(amount: Optional[float], currency: str = "IDR") -> str:
    """Display-only formatting: ``1500000`` -> ``Rp 1.500.000``."""
    if amount is None:
        return "-"
    grouped = f"{int(round(amount)):,}".replace(",", ".")
    if currency == "IDR":
        return f"Rp {grouped}"
    return f"{currency} {grouped}"


def _brand() -> str:
    return os.getenv("EMAIL_BRAND_NAME", "Komodo Liveaboard")


def _detail_rows(booking: BookingConfirmation):
    return [
        ("Booking ID", booking.reference or "-"),
        ("Ship", booking.operator or "-"),
        ("Cabin", booking.cabin_name or "-"),
        ("Trip date", booking.date or "-"),
        ("Guests", str(booking.guests) if booking.guests else "-"),
        ("Amount", format_currency(booking.amount)),
    ]


def _get_email_template_html(booking: BookingConfirmation) -> str:
    brand = escape(_brand())
    name = escape(booking.customer_name or "Guest")
    rows = "\n".join(
        f'            <tr><td style="padding: 6px 12px; color: #6c757d;">{escape(label)}</td>'
        f'<td style="padding: 6px 12px;"><strong>{escape(value)}</strong></td></tr>'
        for label, value in _detail_rows(booking)
    )
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Booking confirmed - {brand}</title>
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
    <div style="background-color: #f8f9fa; padding: 20px; border-radius: 8px; margin-bottom: 20px;">
        <h1 style="color: #2c3e50; margin-top: 0;">Your booking is confirmed</h1>
    </div>

    <div style="padding: 20px 0;">
        <p>Hi <strong>{name}</strong>,</p>

        <p>Thank you for booking with {brand}. Your payment has been received and your cabin is reserved.</p>

        <table style="border-collapse: collapse; margin: 20px 0;">
{rows}
        </table>

        <p>We will contact you with boarding details before departure.</p>

        <p style="margin-top: 30px;">
            Regards,<br>
            <strong>{brand}</strong>
        </p>
    </div>

    <div style="border-top: 1px solid #dee2e6; padding-top: 20px; margin-top: 30px; font-size: 12px; color: #6c757d;">
        <p style="margin: 0;">This is an automated message. Please do not reply to this email.</p>
    </div>
</body>
</html>
    """.strip()


def _get_email_template_text(booking: BookingConfirmation) -> str:
    details = "\n".join(f"{label}: {value}" for label, value in _detail_rows(booking))
    return f"""
Hi {booking.customer_name or "Guest"},

Thank you for booking with {_brand()}. Your payment has been received and your cabin is reserved.

{details}

We will contact you with boarding details before departure.

Regards,
{_brand()}

---
This is an automated message. Please do not reply to this email.
    """.strip()


def render_confirmation(booking: BookingConfirmation) -> Tuple[str, str, str]:
    subject = f"Booking confirmed - {booking.reference}" if booking.reference else "Booking confirmed"
    return subject, _get_email_template_html(booking), _get_email_template_text(booking)


def send_confirmation_email(booking: BookingConfirmation) -> Tuple[bool, str]:
    """
    Send the booking confirmation to ``booking.email``.

    Returns:
        (success, error_message); error_message is empty on success.
    """
    resend_api_key = os.getenv("RESEND_API_KEY")
    email_from = os.getenv("EMAIL_FROM")

    if not resend_api_key:
        error_msg = "RESEND_API_KEY is not configured"
        logger.warning(f"[EMAIL] {error_msg}; confirmation for {booking.email} not sent")
        return False, error_msg
    if not email_from:
        error_msg = "EMAIL_FROM is not configured"
        logger.error(f"[EMAIL] {error_msg}; confirmation for {booking.email} not sent")
        return False, error_msg

    subject, html_body, text_body = render_confirmation(booking)
    resend.api_key = resend_api_key
    params = {
        "from": email_from,
        "to": [booking.email],
        "subject": subject,
        "html": html_body,
        "text": text_body,
    }

    try:
        email_response = resend.Emails.send(params)
    except Exception as e:
        error_msg = str(e).replace(resend_api_key, "***REDACTED***")
        logger.error(f"[EMAIL] Sending to {booking.email} failed: {error_msg}", exc_info=True)
        return False, f"Failed to send email: {error_msg[:100]}"

    email_id = (
        email_response.get("id")
        if isinstance(email_response, dict)
        else getattr(email_response, "id", None)
    )
    if not email_id:
        error_msg = f"Unexpected response from email service: {email_response}"
        logger.error(f"[EMAIL] {error_msg} for {booking.email}")
        return False, error_msg

    logger.info(f"[EMAIL] Confirmation {email_id} sent to {booking.email}")
    return True, ""
