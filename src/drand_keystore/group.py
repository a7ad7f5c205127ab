"""
Group configuration: the ordered roster of participants and the threshold
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, MutableMapping, Optional

from .exceptions import DecodeError
from .key import Identity
from .tomler import Tomler, require


def default_threshold(n: int) -> int:
    """Minimum threshold for a group of n nodes"""
    return n * 2 // 3 + 1


@dataclass
class Group(Tomler):
    """
    Public list of nodes taking part in the randomness generation.

    Attributes:
        nodes: Participants, in index order
        threshold: Number of shares needed to produce a signature
    """
    nodes: List[Identity] = field(default_factory=list)
    threshold: int = 0

    @classmethod
    def from_identities(cls, identities: List[Identity], threshold: Optional[int] = None) -> 'Group':
        if threshold is None:
            threshold = default_threshold(len(identities))
        return cls(nodes=list(identities), threshold=threshold)

    def __len__(self) -> int:
        return len(self.nodes)

    def identities(self) -> List[Identity]:
        return list(self.nodes)

    def contains(self, identity: Identity) -> bool:
        return self.index(identity) is not None

    def index(self, identity: Identity) -> Optional[int]:
        """Return the position of identity in the group, or None"""
        for i, node in enumerate(self.nodes):
            if node.key == identity.key and node.address == identity.address:
                return i
        return None

    def toml(self) -> Dict[str, Any]:
        return {
            "Threshold": self.threshold,
            "Nodes": [node.toml() for node in self.nodes],
        }

    def toml_value(self) -> MutableMapping[str, Any]:
        return {}

    def from_toml(self, value: MutableMapping[str, Any]) -> None:
        self.threshold = require(value, "Threshold", int, "Group")
        nodes = require(value, "Nodes", list, "Group")

        self.nodes = []
        for raw in nodes:
            if not isinstance(raw, dict):
                raise DecodeError("Group: each node must be a table", details={"entity": "Group"})
            node = Identity()
            node.from_toml(raw)
            self.nodes.append(node)
