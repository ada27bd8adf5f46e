"""Keep user contact details out of CloudWatch."""

from typing import Optional


def mask_email(email: Optional[str]) -> str:
    """j***@example.com"""
    if not email:
        return "<none>"
    local, sep, domain = email.partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"


def mask_phone(phone: Optional[str]) -> str:
    """***4567"""
    if not phone:
        return "<none>"
    return f"***{phone[-4:]}"
