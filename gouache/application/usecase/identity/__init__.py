"""Identity use cases."""

from gouache.application.usecase.identity.get_current_identity import (
    GetCurrentIdentityRequest,
    GetCurrentIdentityUseCase,
)

__all__ = ["GetCurrentIdentityRequest", "GetCurrentIdentityUseCase"]
