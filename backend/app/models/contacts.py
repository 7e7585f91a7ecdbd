# app/models/contacts.py
from typing import Optional

from app.schemas.base import CamelModel


class Contact(CamelModel):
    """Person attached to an enriched company profile."""

    name: str
    title: str = "Contact"
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin: Optional[str] = None
    email_verified: bool = False
