"""
Long-term identity keys for drand keystore

A node's identity is an Ed25519 key pair generated with the cryptography
package, bound to the address the node is reachable at.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, MutableMapping, Optional

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from .exceptions import KeyGenerationError
from .tomler import Tomler, decode_hex, require

# Constants for Ed25519 key operations
PRIVATE_KEY_LENGTH = 32
PUBLIC_KEY_LENGTH = 32


@dataclass
class Identity(Tomler):
    """
    Public identity of a node.

    Attributes:
        key: The public key as bytes
        address: host:port the node listens on
    """
    key: bytes = b""
    address: str = ""

    def toml(self) -> Dict[str, Any]:
        return {"Address": self.address, "Key": self.key.hex()}

    def toml_value(self) -> MutableMapping[str, Any]:
        return {}

    def from_toml(self, value: MutableMapping[str, Any]) -> None:
        self.address = require(value, "Address", str, "Identity")
        self.key = decode_hex(require(value, "Key", str, "Identity"), "Key", "Identity")

    def __str__(self) -> str:
        return f"{{{self.address} - {self.key.hex()}}}"


@dataclass
class Pair(Tomler):
    """
    Private key of a node together with its public identity.

    Only the private key is part of this entity's TOML view: the public
    identity is stored in its own file and loaded into the public slot
    separately.

    Attributes:
        key: The private key as bytes
        public: The matching public identity
    """
    key: bytes = b""
    public: Identity = field(default_factory=Identity)

    def toml(self) -> Dict[str, Any]:
        return {"Key": self.key.hex()}

    def toml_value(self) -> MutableMapping[str, Any]:
        return {}

    def from_toml(self, value: MutableMapping[str, Any]) -> None:
        self.key = decode_hex(require(value, "Key", str, "Pair"), "Key", "Pair")
        self.public = Identity()


def new_key_pair(address: str, *, seed: Optional[bytes] = None) -> Pair:
    """
    Generate a fresh identity key pair bound to address.

    Args:
        address: host:port of the node
        seed: Fixed 32-byte private key, for tests only

    Returns:
        Pair: The generated key pair

    Raises:
        KeyGenerationError: If the address is empty or generation fails
    """
    if not address or not isinstance(address, str):
        raise KeyGenerationError("Address must be a non-empty string", "INVALID_ADDRESS")

    try:
        if seed is not None:
            if len(seed) != PRIVATE_KEY_LENGTH:
                raise KeyGenerationError(
                    f"Seed must be exactly {PRIVATE_KEY_LENGTH} bytes",
                    "INVALID_SEED_LENGTH"
                )
            private_key_obj = Ed25519PrivateKey.from_private_bytes(seed)
        else:
            private_key_obj = Ed25519PrivateKey.generate()

        private_key_bytes = private_key_obj.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption()
        )
        public_key_bytes = private_key_obj.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw
        )
    except KeyGenerationError:
        raise
    except Exception as e:
        raise KeyGenerationError(
            f"Key generation failed: {str(e)}",
            "GENERATION_FAILED"
        ) from e

    return Pair(key=private_key_bytes, public=Identity(key=public_key_bytes, address=address))
