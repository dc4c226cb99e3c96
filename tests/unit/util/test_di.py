"""Unit tests for provider selection."""

import pytest

from agora.util.di import (
    PersistenceProvider,
    ProdConfigProvider,
    ProdPersistenceProvider,
    build_providers,
    get_provider,
    swappable_components,
)
from tests.di import MockPersistenceProvider, build_test_container


class TestProviderSelection:
    """Tests for picking production or in-memory providers."""

    def test_concrete_provider_returned_as_is(self):
        """Providers without variants are used directly."""
        assert get_provider(ProdConfigProvider) is ProdConfigProvider

    def test_variant_chosen_by_flag(self):
        """The persistence component resolves to the requested variant."""
        assert get_provider(PersistenceProvider) is ProdPersistenceProvider
        assert get_provider(PersistenceProvider, use_mock=True) is MockPersistenceProvider

    def test_persistence_is_swappable(self):
        """Persistence is the one swappable component."""
        assert swappable_components() == {"persistence"}

    def test_build_providers_mocks_requested_components(self):
        """Mocked components get their in-memory provider."""
        providers = build_providers(mocked={"persistence"})

        assert any(isinstance(p, MockPersistenceProvider) for p in providers)
        assert not any(isinstance(p, ProdPersistenceProvider) for p in providers)

    def test_unknown_component_rejected(self):
        """Typos in component names fail loudly."""
        with pytest.raises(ValueError, match="Unknown components"):
            build_providers(mocked={"cache"})
        with pytest.raises(ValueError, match="Unknown components"):
            build_test_container(unmock={"cache"})
