"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class NotAuthorizedError(DomainError):
    """Raised when an identity attempts an action reserved for others."""

    def __init__(self, action: str, identity_id: str):
        super().__init__(f"Identity {identity_id} is not authorized to {action}")


class InvalidStepError(ValidationError):
    """Raised when a step move is not allowed from the current step."""

    pass


class MissingFieldsError(ValidationError):
    """Raised when required draft fields are blank."""

    def __init__(self, fields: list[str]):
        self.fields = fields
        super().__init__(f"Required fields are missing: {', '.join(fields)}")


class EmailMismatchError(BusinessRuleViolationError):
    """Raised when a mismatched onboarding session is asked to change."""

    def __init__(self, invite_email: str):
        self.invite_email = invite_email
        super().__init__(
            f"This invite is reserved for {invite_email}. "
            "Sign in with the invited address to continue."
        )


class SessionCompletedError(BusinessRuleViolationError):
    """Raised when a completed onboarding session is asked to change."""

    def __init__(self, session_id: str):
        super().__init__(f"Onboarding session {session_id} is already completed")


class InviteUnavailableError(BusinessRuleViolationError):
    """Raised when onboarding is started on an invite that is not pending."""

    def __init__(self, token: str, reason: str):
        self.reason = reason
        super().__init__(f"Invite {token} cannot be used: {reason}")


class IdentityUnavailableError(DomainError):
    """Raised when there is no valid signed-in identity."""

    pass


class IdentityPendingError(IdentityUnavailableError):
    """Raised while a signed-in identity is not yet known.

    The caller is expected to retry after ``retry_after`` seconds.
    """

    def __init__(self, retry_after: int):
        self.retry_after = retry_after
        super().__init__("Your sign-in is still being set up")


class OracleUnavailableError(DomainError):
    """Raised when the payment processor cannot be reached.

    Transient while polling; fatal when creating an account.
    """

    pass
