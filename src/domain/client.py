"""Client identity rules

Which identity fields a client record needs depends on whether the client is
an individual or a company.
"""

from enum import Enum
from typing import Dict, Optional


class ClientType(str, Enum):
    """Client types"""
    INDIVIDUAL = "individual"
    COMPANY = "company"


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_client_identity(
    client_type: ClientType,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    company_name: Optional[str] = None,
    email: Optional[str] = None,
) -> Dict[str, str]:
    """
    Check required identity fields for the client type

    Returns:
        Mapping of field name to user-facing message (empty when valid)
    """
    errors: Dict[str, str] = {}

    if ClientType(client_type) == ClientType.INDIVIDUAL:
        message = "First Name and Last Name are required for an Individual client."
        if _blank(first_name):
            errors["first_name"] = message
        if _blank(last_name):
            errors["last_name"] = message
    elif _blank(company_name):
        errors["company_name"] = "Company Name is required for a Company client."

    if _blank(email):
        errors["email"] = "Email Address is required."

    return errors


def client_display_name(
    client_type: ClientType,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    company_name: Optional[str] = None,
) -> str:
    if ClientType(client_type) == ClientType.COMPANY and not _blank(company_name):
        return company_name.strip()
    return " ".join(part.strip() for part in (first_name, last_name) if not _blank(part))
