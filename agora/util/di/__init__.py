"""Dependency injection wiring.

Every provider appears once in ``PROVIDERS``. A provider that has
subclasses is a swappable component: its production and in-memory variants
are told apart by ``__is_mock__``, and callers choose per component which
variant to serve.
"""

from typing import Collection, Type

from dishka import Provider

from agora.util.di.application import ProdApplicationProvider
from agora.util.di.base import Component, ProviderBase
from agora.util.di.core import ProdConfigProvider
from agora.util.di.domain import ProdDomainProvider
from agora.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Swappable: Postgres in production, in-memory store in tests
    PersistenceProvider,
]


def swappable_components() -> set[Component]:
    """Names of the components that ship more than one implementation."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__mock_component__ is not None and base.__subclasses__()
    }


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve the provider class to instantiate for an entry of PROVIDERS.

    Args:
        base: Entry of PROVIDERS
        use_mock: Pick the in-memory variant of a swappable component

    Returns:
        ``base`` itself when it has no variants, otherwise the variant whose
        ``__is_mock__`` equals ``use_mock``

    Raises:
        ValueError: If the requested variant isn't defined (or imported)
    """
    variants = base.__subclasses__()
    if not variants:
        return base

    for variant in variants:
        if variant.__is_mock__ == use_mock:
            return variant

    kind = "in-memory" if use_mock else "production"
    raise ValueError(
        f"No {kind} implementation for {base.__mock_component__ or base.__name__}"
    )


def build_providers(mocked: Collection[Component] = ()) -> list[Provider]:
    """Instantiate one provider per entry of PROVIDERS.

    Args:
        mocked: Components to serve from their in-memory implementation

    Returns:
        Provider instances ready for ``make_async_container``

    Raises:
        ValueError: If ``mocked`` names an unknown component
    """
    unknown = set(mocked) - swappable_components()
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    return [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "build_providers",
    "get_provider",
    "swappable_components",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
