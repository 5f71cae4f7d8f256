"""Base class for domain services."""


class Service:
    """Marker base for domain services.

    Services own the rules that span entities (invite redemption against a
    profile write, processor status against the stored account) and are
    the only callers of repositories.
    """

    pass
