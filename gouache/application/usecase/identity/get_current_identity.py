"""Get current identity use case."""

from pydantic import BaseModel

from gouache.application.usecase.base import BaseUseCase
from gouache.domain.error import IdentityUnavailableError
from gouache.domain.service import IdentityService, JWTService, TokenIdentityProvider
from gouache.domain.value import Identity


class GetCurrentIdentityRequest(BaseModel):
    """Get current identity request."""

    token: str | None = None  # JWT from the auth_token cookie


class GetCurrentIdentityUseCase(BaseUseCase):
    """Use case for resolving the signed-in identity from its token."""

    def __init__(
        self, jwt_service: JWTService, identity_service: IdentityService
    ) -> None:
        """Initialize get current identity use case.

        Args:
            jwt_service: JWT token domain service
            identity_service: Identity domain service
        """
        self.jwt_service = jwt_service
        self.identity_service = identity_service

    async def execute(self, request: GetCurrentIdentityRequest) -> Identity:
        """Resolve the identity.

        Raises:
            IdentityPendingError: If the sign-in is valid but not yet known
            IdentityUnavailableError: If there is no valid sign-in
        """
        if not request.token:
            raise IdentityUnavailableError("Not signed in")

        return await self.identity_service.resolve(
            TokenIdentityProvider(self.jwt_service, request.token)
        )
