"""
Validate Client Identity Use Case

Checks that a client record carries the identity fields its type needs.
"""
from libs.result import Result, Return
from src.domain.client import ClientType, client_display_name, validate_client_identity
from .dtos import ClientIdentityCommandDTO, ClientIdentityResponseDTO
from .errors import validation_error


class ValidateClientIdentity:
    """
    Use case: Client identity check

    Individuals need a first and last name, companies a company name, and
    every client an email address.
    """

    async def execute(self, command: ClientIdentityCommandDTO) -> Result[ClientIdentityResponseDTO]:
        client_type = ClientType(command.client_type)
        errors = validate_client_identity(
            client_type,
            first_name=command.first_name,
            last_name=command.last_name,
            company_name=command.company_name,
            email=command.email,
        )
        if errors:
            return Return.err(validation_error(errors))

        return Return.ok(
            ClientIdentityResponseDTO(
                client_type=client_type.value,
                display_name=client_display_name(
                    client_type,
                    first_name=command.first_name,
                    last_name=command.last_name,
                    company_name=command.company_name,
                ),
                email=command.email.strip(),
            )
        )
