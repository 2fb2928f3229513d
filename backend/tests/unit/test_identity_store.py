"""
Tests for the identity store.

WHAT: Profile upsert and reads
WHY: Profiles gate item listing and order creation
HOW: Exercise IdentityStore directly
"""

import pytest

from marketplace.core.identity import CallerId
from marketplace.services.identity_store import IdentityStore
from marketplace.utils.exceptions import ValidationException


@pytest.mark.unit
class TestUpsertProfile:
    """Test profile creation and replacement."""

    def test_create_profile(self, buyer):
        identities = IdentityStore()
        profile = identities.upsert_profile(buyer, name="Bob", email="bob@example.com")

        assert profile.id == buyer
        assert profile.name == "Bob"
        assert profile.email == "bob@example.com"
        assert profile.bio is None
        assert profile.is_seller is False

    def test_update_preserves_created_at(self, seller):
        identities = IdentityStore()
        first = identities.upsert_profile(seller, name="Alice")
        second = identities.upsert_profile(seller, name="Alice Smith", bio="Antiques", is_seller=True)

        assert second.created_at == first.created_at
        assert second.name == "Alice Smith"
        assert second.bio == "Antiques"
        assert second.is_seller is True
        assert identities.count() == 1

    def test_update_replaces_optional_fields(self, buyer):
        identities = IdentityStore()
        identities.upsert_profile(buyer, name="Bob", email="bob@example.com")
        updated = identities.upsert_profile(buyer, name="Bob")

        assert updated.email is None

    def test_anonymous_rejected(self):
        identities = IdentityStore()

        with pytest.raises(ValidationException) as exc_info:
            identities.upsert_profile(CallerId.anonymous(), name="Ghost")

        assert exc_info.value.code == "VALIDATION_ERROR"
        assert identities.count() == 0


@pytest.mark.unit
class TestProfileReads:
    """Test public and own-profile reads."""

    def test_get_profile_absent(self, buyer):
        assert IdentityStore().get_profile(buyer) is None

    def test_get_own_profile(self, buyer, seller):
        identities = IdentityStore()
        identities.upsert_profile(buyer, name="Bob")

        assert identities.get_own_profile(buyer).name == "Bob"
        assert identities.get_own_profile(seller) is None

    def test_returned_profile_is_a_copy(self, buyer):
        identities = IdentityStore()
        identities.upsert_profile(buyer, name="Bob")

        profile = identities.get_profile(buyer)
        profile.name = "Mallory"

        assert identities.get_profile(buyer).name == "Bob"

    def test_seller_predicates(self, seller, buyer, stranger):
        identities = IdentityStore()
        identities.upsert_profile(seller, name="Alice", is_seller=True)
        identities.upsert_profile(buyer, name="Bob")

        assert identities.is_seller(seller) is True
        assert identities.is_seller(buyer) is False
        assert identities.is_seller(stranger) is False
        assert identities.has_profile(buyer) is True
        assert identities.has_profile(stranger) is False


@pytest.mark.unit
class TestCallerId:
    """Test the opaque identity type."""

    def test_anonymous_sentinel(self):
        assert CallerId.anonymous().is_anonymous() is True
        assert CallerId(principal="abc").is_anonymous() is False

    def test_from_header(self):
        assert CallerId.from_header(None).is_anonymous()
        assert CallerId.from_header("   ").is_anonymous()
        assert CallerId.from_header(" abc ") == CallerId(principal="abc")

    def test_hashable_and_comparable(self):
        lookup = {CallerId(principal="abc"): 1}

        assert lookup[CallerId(principal="abc")] == 1
        assert CallerId(principal="abc") != CallerId(principal="abd")
