"""Test container builder with selective unmocking."""

from typing import Sequence

from dishka import AsyncContainer, Provider, make_async_container

from agora.util.di import Component, build_providers, swappable_components


def build_test_container(
    unmock: set[Component] | None = None,
    extra_providers: Sequence[Provider] = (),
) -> AsyncContainer:
    """Build a container where every swappable component is in-memory.

    Settings are loaded from environment variables.

    Args:
        unmock: Components to serve from their production implementation
        extra_providers: Additional providers, e.g. ``FastapiProvider()``
            for containers served through the API

    Returns:
        Configured test container

    Raises:
        ValueError: If ``unmock`` names an unknown component

    Examples:
        # Unit tests - in-memory store
        container = build_test_container()

        # Integration tests - real persistence (needs PostgreSQL)
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    components = swappable_components()

    unknown = unmock - components
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    providers = build_providers(mocked=components - unmock)
    return make_async_container(*providers, *extra_providers)
