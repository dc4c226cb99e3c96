"""Provider base class and the names of swappable components."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with an in-memory variant for tests
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Base of every Agora provider.

    Attributes:
        __mock_component__: Component name on the base of a swappable
            component, None for providers with a single implementation
        __is_mock__: Set on the in-memory variant of a component
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
