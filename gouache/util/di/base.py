"""Provider base class for the Gouache container."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with a production and a mock implementation
Component = Literal["persistence", "payments"]


class ProviderSelectionError(Exception):
    """Raised when a component has no provider of the requested kind."""

    pass


class ProviderBase(Provider):
    """Base for all Gouache providers.

    Swappable components (the database and the payment processor) declare
    an abstract provider naming the component; production and mock
    providers subclass it. Providers that are never swapped subclass this
    directly.

    Attributes:
        __mock_component__: Component this provider stands for, None when
            the provider is never swapped
        __is_mock__: Whether this provider fakes its component
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

    @classmethod
    def is_swappable(cls) -> bool:
        """Whether implementations of this provider are chosen at build time."""
        return bool(cls.__subclasses__())
