"""Error builders shared by the billing use cases"""

from typing import Dict
from libs.result import Error


def validation_error(details: Dict[str, str], message: str = None) -> Error:
    """VALIDATION_ERROR carrying a field -> message mapping"""
    if message is None:
        # Same message can sit on several fields (e.g. first/last name)
        message = " ".join(dict.fromkeys(details.values()))
    return Error(
        code="VALIDATION_ERROR",
        message=message,
        details=details,
    )


def document_not_found(number: str) -> Error:
    return Error(
        code="DOCUMENT_NOT_FOUND",
        message=f"Document {number} not found",
        reason="Document does not exist",
    )


def invoice_not_found(reference: str) -> Error:
    return Error(
        code="INVOICE_NOT_FOUND",
        message=f"Invoice {reference} not found",
        reason="Reference does not resolve to an invoice",
    )
