"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """One API operation: validates a request model, calls domain services
    and shapes the response model."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        """Run the operation."""
