"""Identity resolution for API routes."""

from gouache.application.usecase.identity import (
    GetCurrentIdentityRequest,
    GetCurrentIdentityUseCase,
)
from gouache.domain.error import IdentityUnavailableError
from gouache.domain.value import Identity
from gouache.interface.error import to_http_exception


async def require_identity(
    auth_token: str | None, use_case: GetCurrentIdentityUseCase
) -> Identity:
    """Resolve the signed-in identity or fail.

    Args:
        auth_token: JWT from the auth_token cookie
        use_case: Get current identity use case

    Returns:
        The signed-in identity

    Raises:
        HTTPException: 401 if there is no valid sign-in, 503 with
            Retry-After while the identity is not yet known
    """
    try:
        return await use_case.execute(GetCurrentIdentityRequest(token=auth_token))
    except IdentityUnavailableError as e:
        raise to_http_exception(e)
