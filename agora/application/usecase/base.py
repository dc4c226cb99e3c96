"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """Base use case for orchestrating domain services.

    A use case takes one request model and returns one response model.
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        pass
