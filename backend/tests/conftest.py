"""
Pytest configuration and shared fixtures for backend tests.

WHAT: Centralized test configuration with markers and store fixtures
WHY: Every test starts from a fresh, isolated store
HOW: Define pytest markers, identity fixtures and a seeded store
"""

import os

# Keep test runs away from the default data directory
os.environ.setdefault("DATABASE_URL", "sqlite:///./data/test/marketplace.db")
os.environ.setdefault("LOG_FILE", "./data/test/logs/app.log")
os.environ.setdefault("RESTORE_ON_STARTUP", "false")
os.environ.setdefault("SNAPSHOT_ON_SHUTDOWN", "false")

import pytest

from marketplace.core.identity import CallerId
from marketplace.core.store import MarketplaceStore
from marketplace.models.entities import ItemDraft


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (isolated component tests)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (HTTP host, SQLite snapshots)"
    )


@pytest.fixture
def seller():
    """Seller A."""
    return CallerId(principal="seller-a")


@pytest.fixture
def buyer():
    """Buyer B."""
    return CallerId(principal="buyer-b")


@pytest.fixture
def stranger():
    """Non-seller C with a profile."""
    return CallerId(principal="user-c")


@pytest.fixture
def store():
    """Empty store."""
    return MarketplaceStore()


@pytest.fixture
def seeded_store(store, seller, buyer, stranger):
    """
    Store with three profiles.

    WHAT: seller A (is_seller), buyer B and user C (not sellers)
    WHY: Most scenarios need a seller and a buyer to exist
    HOW: upsert_profile for each identity
    """
    store.identities.upsert_profile(seller, name="Alice", is_seller=True)
    store.identities.upsert_profile(buyer, name="Bob", email="bob@example.com")
    store.identities.upsert_profile(stranger, name="Carol")
    return store


def make_draft(**overrides) -> ItemDraft:
    """Build an ItemDraft with sensible defaults."""
    fields = {
        "name": "Chair",
        "description": "Solid oak dining chair",
        "price": 100,
        "images": ["chair-front.jpg"],
        "category": "furniture",
        "condition": "good",
    }
    fields.update(overrides)
    return ItemDraft(**fields)


@pytest.fixture
def draft_factory():
    """Factory for ItemDraft instances."""
    return make_draft
