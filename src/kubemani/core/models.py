#!/usr/bin/env python3
"""
KUBEMANI CORE MODELS
--------------------
Defines the data structures shared across the KubeMani diff index:
manifest identities, materialized per-side documents and the three
node variants (Group -> Kind -> Leaf) that make up the index forest.

Author: KubeMani Diff Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union


class Side(str, Enum):
    """Which of the two input collections a document came from."""
    LEFT = "Left"
    RIGHT = "Right"

    @property
    def letter(self) -> str:
        return "A" if self is Side.LEFT else "B"


class NodeKind(str, Enum):
    GROUP = "Group"
    KIND = "Kind"
    LEAF = "Leaf"


class MembershipStatus(str, Enum):
    LEFT_ONLY = "LeftOnly"
    RIGHT_ONLY = "RightOnly"
    BOTH = "Both"
    NONE = "None"


@dataclass(frozen=True)
class ManifestIdentity:
    """
    The compound key of a manifest: (api-group, kind, name).
    Only ever constructed by the validator, so all three parts are non-empty.
    """
    group: str
    kind: str
    name: str

    @property
    def path_key(self) -> str:
        return f"{self.group}/{self.kind}/{self.name}"


@dataclass
class MaterializedDocument:
    """
    A manifest rendered to canonical text and persisted for one side.
    """
    identity: ManifestIdentity
    side: Side
    canonical_text: str     # Deterministic rendering of the original record
    locator: Path           # File holding canonical_text

    @property
    def path_key(self) -> str:
        return self.identity.path_key


@dataclass
class LeafNode:
    """
    One named manifest. Tracks the left/right contributions; membership
    is always derived from the two slots.
    """
    label: str
    path_key: str
    left: Optional[MaterializedDocument] = None
    right: Optional[MaterializedDocument] = None

    node_kind = NodeKind.LEAF

    @property
    def children(self) -> List["IndexNode"]:
        return []

    @property
    def status(self) -> MembershipStatus:
        if self.left and self.right:
            return MembershipStatus.BOTH
        if self.left:
            return MembershipStatus.LEFT_ONLY
        if self.right:
            return MembershipStatus.RIGHT_ONLY
        return MembershipStatus.NONE

    @property
    def is_identical(self) -> bool:
        """True when both sides exist and render to the same text (no diff)."""
        return bool(self.left and self.right and self.left.canonical_text == self.right.canonical_text)

    def document(self, side: Side) -> Optional[MaterializedDocument]:
        return self.left if side is Side.LEFT else self.right

    def assign(self, document: MaterializedDocument) -> Optional[MaterializedDocument]:
        """Stores the document in its side's slot. Returns the document it replaced."""
        previous = self.document(document.side)
        if document.side is Side.LEFT:
            self.left = document
        else:
            self.right = document
        return previous


@dataclass
class KindNode:
    label: str
    path_key: str
    children: List[LeafNode] = field(default_factory=list)

    node_kind = NodeKind.KIND


@dataclass
class GroupNode:
    label: str
    path_key: str
    children: List[KindNode] = field(default_factory=list)

    node_kind = NodeKind.GROUP


IndexNode = Union[GroupNode, KindNode, LeafNode]


@dataclass
class Forest:
    """
    Top-level ordered sequence of Group nodes produced by one build.
    Keeps a path_key lookup table next to the owned node lists.
    """
    groups: List[GroupNode] = field(default_factory=list)
    _index: Dict[str, IndexNode] = field(default_factory=dict, repr=False)

    def __iter__(self) -> Iterator[GroupNode]:
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    @property
    def is_empty(self) -> bool:
        return not self.groups

    def find(self, path_key: str) -> Optional[IndexNode]:
        return self._index.get(path_key.strip("/"))

    def register(self, node: IndexNode) -> None:
        self._index[node.path_key] = node

    def leaves(self) -> Iterator[LeafNode]:
        """Walks every leaf in insertion order."""
        for group in self.groups:
            for kind in group.children:
                yield from kind.children

    def status_counts(self) -> Dict[MembershipStatus, int]:
        counts = {status: 0 for status in MembershipStatus}
        for leaf in self.leaves():
            counts[leaf.status] += 1
        return counts
