"""Client API Routes"""

from fastapi import APIRouter, status

from src.app.use_cases.billing.dtos import ClientIdentityCommandDTO, ClientIdentityResponseDTO
from src.app.use_cases.billing.validate_client import ValidateClientIdentity
from src.api.error import ClientError

router = APIRouter(prefix="/billing/clients", tags=["Clients"])


@router.post(
    "/validate",
    response_model=ClientIdentityResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        400: {
            "description": "Missing identity fields",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "VALIDATION_ERROR",
                            "message": "Company Name is required for a Company client.",
                            "details": {"company_name": "Company Name is required for a Company client."}
                        }
                    }
                }
            }
        }
    }
)
async def validate_client(request: ClientIdentityCommandDTO):
    """
    Check the identity fields of a client record.

    Individuals need first and last name, companies a company name; every
    client needs an email address.
    """
    result = await ValidateClientIdentity().execute(request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
