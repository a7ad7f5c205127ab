"""
Distributed key material produced by a successful key generation run
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, MutableMapping

from .exceptions import DecodeError, KeyStoreError
from .tomler import Tomler, decode_hex, require


@dataclass
class DistPublic(Tomler):
    """
    Aggregated public key of the group.

    Attributes:
        key: The distributed public key as bytes
    """
    key: bytes = b""

    def toml(self) -> Dict[str, Any]:
        return {"Key": self.key.hex()}

    def toml_value(self) -> MutableMapping[str, Any]:
        return {}

    def from_toml(self, value: MutableMapping[str, Any]) -> None:
        self.key = decode_hex(require(value, "Key", str, "DistPublic"), "Key", "DistPublic")


@dataclass
class Share(Tomler):
    """
    Secret share of the distributed key held by this node.

    Attributes:
        index: Index of this node in the group
        share: The private share as bytes
        commits: Public polynomial commitments, constant term first
    """
    index: int = 0
    share: bytes = b""
    commits: List[bytes] = field(default_factory=list)

    def public(self) -> DistPublic:
        """Return the distributed public key, i.e. the first commitment"""
        if not self.commits:
            raise KeyStoreError("Share has no commitments", "NO_COMMITMENTS")
        return DistPublic(key=self.commits[0])

    def toml(self) -> Dict[str, Any]:
        return {
            "Index": self.index,
            "Share": self.share.hex(),
            "Commits": [c.hex() for c in self.commits],
        }

    def toml_value(self) -> MutableMapping[str, Any]:
        return {}

    def from_toml(self, value: MutableMapping[str, Any]) -> None:
        self.index = require(value, "Index", int, "Share")
        self.share = decode_hex(require(value, "Share", str, "Share"), "Share", "Share")

        commits = require(value, "Commits", list, "Share")
        self.commits = []
        for c in commits:
            if not isinstance(c, str):
                raise DecodeError("Share: commitments must be strings", details={"entity": "Share"})
            self.commits.append(decode_hex(c, "Commits", "Share"))
