"""
Unit tests for identity keys, groups and distributed key material
"""

import secrets

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from drand_keystore.exceptions import DecodeError, KeyGenerationError, KeyStoreError
from drand_keystore.group import Group, default_threshold
from drand_keystore.key import (
    Identity,
    Pair,
    new_key_pair,
    PRIVATE_KEY_LENGTH,
    PUBLIC_KEY_LENGTH,
)
from drand_keystore.share import DistPublic, Share


class TestNewKeyPair:
    """Test cases for identity key generation"""

    def test_generates_ed25519_pair(self):
        """Test a generated pair carries the address and raw key bytes"""
        pair = new_key_pair("127.0.0.1:8080")

        assert len(pair.key) == PRIVATE_KEY_LENGTH
        assert len(pair.public.key) == PUBLIC_KEY_LENGTH
        assert pair.public.address == "127.0.0.1:8080"

    def test_seed_is_deterministic(self):
        """Test a fixed seed yields the matching cryptography public key"""
        seed = secrets.token_bytes(PRIVATE_KEY_LENGTH)
        expected = Ed25519PrivateKey.from_private_bytes(seed).public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw
        )

        pair = new_key_pair("node:1", seed=seed)

        assert pair.key == seed
        assert pair.public.key == expected

    def test_distinct_pairs(self):
        """Test two generations give different keys"""
        assert new_key_pair("a:1").key != new_key_pair("a:1").key

    @pytest.mark.parametrize("address", ["", None, 8080])
    def test_invalid_address(self, address):
        """Test an empty or non-string address is rejected"""
        with pytest.raises(KeyGenerationError, match="Address must be a non-empty string"):
            new_key_pair(address)

    def test_invalid_seed_length(self):
        """Test a seed of the wrong size is rejected"""
        with pytest.raises(KeyGenerationError) as exc_info:
            new_key_pair("a:1", seed=b"short")

        assert exc_info.value.error_code == "INVALID_SEED_LENGTH"


class TestPairTOML:
    """Test cases for the Pair and Identity TOML views"""

    def test_private_view_has_no_public_half(self):
        """Test the private document only holds the private key"""
        pair = new_key_pair("127.0.0.1:8080")

        assert pair.toml() == {"Key": pair.key.hex()}

    def test_from_toml_allocates_public_slot(self):
        """Test populating a pair resets the public identity to empty"""
        pair = Pair(public=Identity(key=b"\x01", address="stale:1"))

        pair.from_toml({"Key": "abcd"})

        assert pair.key == b"\xab\xcd"
        assert pair.public == Identity()

    def test_identity_str(self):
        """Test the readable form of an identity"""
        identity = Identity(key=b"\x0f", address="h:1")

        assert str(identity) == "{h:1 - 0f}"


class TestGroup:
    """Test cases for Group"""

    @pytest.fixture
    def identities(self):
        return [new_key_pair(f"127.0.0.1:{8080 + i}").public for i in range(4)]

    @pytest.mark.parametrize("n,expected", [(1, 1), (3, 3), (4, 3), (5, 4), (10, 7)])
    def test_default_threshold(self, n, expected):
        """Test the default threshold is 2n/3 + 1"""
        assert default_threshold(n) == expected

    def test_from_identities(self, identities):
        """Test group construction with and without explicit threshold"""
        assert Group.from_identities(identities).threshold == 3
        assert Group.from_identities(identities, 2).threshold == 2

    def test_membership(self, identities):
        """Test contains() and index() follow roster order"""
        group = Group.from_identities(identities[:3])

        assert len(group) == 3
        assert group.index(identities[1]) == 1
        assert group.contains(identities[2])
        assert not group.contains(identities[3])
        assert group.index(identities[3]) is None

    def test_toml_view(self, identities):
        """Test the group document lists nodes in order"""
        group = Group.from_identities(identities[:2], 2)

        view = group.toml()

        assert view["Threshold"] == 2
        assert [n["Address"] for n in view["Nodes"]] == ["127.0.0.1:8080", "127.0.0.1:8081"]

    def test_from_toml(self, identities):
        """Test populating a group from its own view"""
        group = Group.from_identities(identities, 3)

        loaded = Group()
        loaded.from_toml(group.toml())

        assert loaded == group

    def test_from_toml_rejects_bad_nodes(self):
        """Test malformed node entries raise DecodeError"""
        with pytest.raises(DecodeError):
            Group().from_toml({"Threshold": 1, "Nodes": ["not a table"]})

        with pytest.raises(DecodeError, match="missing field 'Address'"):
            Group().from_toml({"Threshold": 1, "Nodes": [{"Key": "00"}]})

    def test_from_toml_rejects_boolean_threshold(self):
        """Test a boolean is not accepted where an integer is required"""
        with pytest.raises(DecodeError, match="must be int"):
            Group().from_toml({"Threshold": True, "Nodes": []})


class TestShare:
    """Test cases for Share and DistPublic"""

    @pytest.fixture
    def share(self):
        return Share(
            index=2,
            share=secrets.token_bytes(32),
            commits=[secrets.token_bytes(48) for _ in range(3)]
        )

    def test_public_is_first_commit(self, share):
        """Test the distributed public key is the constant-term commitment"""
        assert share.public() == DistPublic(key=share.commits[0])

    def test_public_without_commits(self):
        """Test a share without commitments has no public key"""
        with pytest.raises(KeyStoreError) as exc_info:
            Share(index=0, share=b"\x01").public()

        assert exc_info.value.error_code == "NO_COMMITMENTS"
        assert not isinstance(exc_info.value, DecodeError)

    def test_from_toml(self, share):
        """Test populating a share from its own view"""
        loaded = Share()
        loaded.from_toml(share.toml())

        assert loaded == share

    def test_from_toml_rejects_bad_commits(self, share):
        """Test non-string commitments raise DecodeError"""
        view = share.toml()
        view["Commits"] = [1, 2]

        with pytest.raises(DecodeError, match="commitments must be strings"):
            Share().from_toml(view)

    def test_dist_public_view(self):
        """Test the distributed key document"""
        assert DistPublic(key=b"\xaa").toml() == {"Key": "aa"}
